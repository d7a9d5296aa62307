import os
from pathlib import Path

APP_NAME = "gamerack"
CONFIG_FILE_NAME = "games.toml"
LOG_FILE_NAME = "gamerack.log"

DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720

# Environment overrides, same as the rest of the knobs below
CONFIG_ENV = "GAMERACK_CONFIG"
LOG_DIR_ENV = "GAMERACK_LOG_DIR"


def config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_NAME

def data_dir() -> Path:
    base = os.environ.get("XDG_DATA_HOME") or str(Path.home() / ".local" / "share")
    return Path(base) / APP_NAME

def default_config_path() -> Path:
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser()
    return config_dir() / CONFIG_FILE_NAME

def log_dir() -> Path:
    env = os.environ.get(LOG_DIR_ENV)
    return Path(env).expanduser() if env else data_dir()
