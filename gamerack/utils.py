import os
import shlex
from typing import Dict, List, Mapping, Optional

from .errors import NoEditor, UnknownDirectoryKey
from .models import GameConfig


def split_words(s: str) -> List[str]:
    return shlex.split(s)

def resolve_dir_name(name: str, directories: Mapping[str, str]) -> str:
    """A bare ``dir`` may name a [directories] entry instead of a path."""
    return directories.get(name, name)

def resolve_working_dir(
    game_id: str,
    game: GameConfig,
    directories: Mapping[str, str],
) -> Optional[str]:
    """
    prefix_dir + dir -> <directories[prefix_dir]>/<dir>
    dir only         -> dir (or the directory it names)
    neither          -> None, i.e. keep the launcher's cwd
    """
    prefix = ""
    if game.prefix_dir is not None:
        if game.prefix_dir not in directories:
            raise UnknownDirectoryKey(game_id, game.prefix_dir)
        prefix = directories[game.prefix_dir]

    d = resolve_dir_name(game.dir, directories) if game.dir else ""

    if not prefix and not d:
        return None
    if not prefix:
        return d
    if not d:
        return prefix
    return os.path.join(prefix, d)

def merged_env(overlay: Mapping[str, str], base: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    env = dict(os.environ if base is None else base)
    env.update(overlay)
    return env

def find_editor() -> List[str]:
    editor = os.environ.get("VISUAL") or os.environ.get("EDITOR")
    if not editor:
        raise NoEditor()
    return split_words(editor)
