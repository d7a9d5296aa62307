from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, PositiveInt, field_validator, model_validator

from . import DEFAULT_HEIGHT, DEFAULT_WIDTH


class Backend(str, Enum):
    NATIVE = "native"
    WINE = "wine"
    DOSBOX = "dosbox"
    SCUMMVM = "scummvm"


# First field present wins.
BACKEND_FIELDS = (
    ("cmd", Backend.NATIVE),
    ("wine_exe", Backend.WINE),
    ("dosbox_config", Backend.DOSBOX),
    ("scummvm_id", Backend.SCUMMVM),
)

NOT_PREFIX = "!"


def pick_backend(data: dict) -> Optional[Backend]:
    for key, backend in BACKEND_FIELDS:
        if data.get(key) is not None:
            return backend
    return None


class Settings(BaseModel):
    """The ``[settings]`` table. Applies to every game."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    width: PositiveInt = DEFAULT_WIDTH
    height: PositiveInt = DEFAULT_HEIGHT
    use_gamescope: bool = False


class GameConfig(BaseModel):
    """
    One ``[games.<id>]`` table.

    ``backend`` is not a config key: it is filled in during validation from
    whichever of cmd / wine_exe / dosbox_config / scummvm_id comes first.
    """
    model_config = ConfigDict(extra="forbid", frozen=True)

    backend: Backend
    name: Optional[str] = None
    cmd: Optional[str] = None
    wine_exe: Optional[str] = None
    dosbox_config: Optional[str] = None
    scummvm_id: Optional[str] = None
    dir: Optional[str] = None
    prefix_dir: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("prefix_dir", "dir_prefix")
    )
    env: Dict[str, str] = Field(default_factory=dict)
    fps_limit: Optional[PositiveInt] = None
    use_mangohud: Optional[bool] = None     # None = backend default
    use_vk: bool = True
    installed: bool = True
    tags: FrozenSet[str] = frozenset()

    @model_validator(mode="before")
    @classmethod
    def _resolve_backend(cls, data):
        if not isinstance(data, dict):
            return data
        if "backend" in data:
            raise ValueError("unrecognized option: backend")
        backend = pick_backend(data)
        if backend is None:
            raise ValueError("one of cmd, wine_exe, dosbox_config or scummvm_id is required")
        return {**data, "backend": backend}

    @field_validator("cmd", "wine_exe")
    @classmethod
    def _shell_words(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        try:
            words = shlex.split(v)
        except ValueError as e:
            raise ValueError(f"cannot split command line {v!r}: {e}") from e
        if not words or not words[0]:
            raise ValueError("command line is empty")
        return v

    @field_validator("dosbox_config", "scummvm_id")
    @classmethod
    def _not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("must not be empty")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def _check_tags(cls, v):
        if not isinstance(v, (list, tuple, set, frozenset)):
            return v
        seen = set()
        for tag in v:
            if not isinstance(tag, str):
                continue        # left to the type check
            if not tag or tag.startswith(NOT_PREFIX) or "," in tag or any(c.isspace() for c in tag):
                raise ValueError(f"invalid tag {tag!r}: tags are non-empty, without ',' or spaces, and do not start with '!'")
            if tag in seen:
                raise ValueError(f"duplicate tag {tag!r}")
            seen.add(tag)
        return v

    @property
    def uses_mangohud(self) -> bool:
        if self.use_mangohud is not None:
            return self.use_mangohud
        return self.backend is Backend.WINE

    def display_name(self, game_id: str) -> str:
        return self.name or game_id


class Catalog(BaseModel):
    """Validated contents of games.toml."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    settings: Settings = Field(default_factory=Settings)
    directories: Dict[str, str] = Field(default_factory=dict)
    games: Dict[str, GameConfig]

    @model_validator(mode="after")
    def _check_prefixes(self) -> "Catalog":
        for game_id, game in self.games.items():
            if game.prefix_dir is not None and game.prefix_dir not in self.directories:
                raise ValueError(
                    f"Game {game_id} has nonexistent directory prefix: {game.prefix_dir}"
                )
        return self


@dataclass
class Invocation:
    program: str
    args: List[str] = field(default_factory=list)
    env: Dict[str, str] = field(default_factory=dict)     # overlay only
    cwd: Optional[str] = None                             # None = inherit

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def command_line(self) -> str:
        return shlex.join(self.argv)
