import tomllib
from pathlib import Path
from typing import List

from loguru import logger
from pydantic import ValidationError

from .errors import ConfigError
from .models import Catalog


def ensure_config_dir(config_file: Path) -> None:
    try:
        config_file.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"Could not create config directory: {e}") from e

def _where(loc) -> str:
    return ".".join(str(p) for p in loc)

def _describe(err: ValidationError) -> str:
    lines: List[str] = []
    for e in err.errors():
        loc = e.get("loc", ())
        if e["type"] == "extra_forbidden" and loc:
            where = _where(loc[:-1])
            lines.append(f"Unrecognized option: {loc[-1]}" + (f" (in {where})" if where else ""))
        elif e["type"] == "missing" and loc == ("games",):
            lines.append("A 'games' table is required")
        else:
            # model-level validators report bare messages prefixed by pydantic
            msg = e["msg"].removeprefix("Value error, ")
            lines.append(f"{_where(loc)}: {msg}" if loc else msg)
    return "\n".join(lines)

def parse_config(text: str) -> Catalog:
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"TOML parse error: {e}") from e
    try:
        catalog = Catalog.model_validate(data)
    except ValidationError as e:
        raise ConfigError(_describe(e)) from e
    logger.debug("Loaded {} games, {} directories", len(catalog.games), len(catalog.directories))
    return catalog

def load_config(config_file: Path) -> Catalog:
    ensure_config_dir(config_file)
    if not config_file.exists():
        raise ConfigError(f"No {config_file.name} config file found (expected at {config_file})")
    try:
        text = config_file.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Could not read {config_file}: {e}") from e
    logger.debug("Reading config from {}", config_file)
    return parse_config(text)
