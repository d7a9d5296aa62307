# gamerack/launch.py
from __future__ import annotations

import os
import random
import subprocess
from typing import Dict, List, Mapping, Optional

from loguru import logger

from .catalog import find_game, pick_random
from .errors import (
    ExecutableNotFound,
    LaunchError,
    NoBackendConfigured,
    PermissionDenied,
    WorkingDirectoryNotFound,
)
from .models import BACKEND_FIELDS, Backend, Catalog, GameConfig, Invocation, Settings
from .tags import Query
from .utils import merged_env, resolve_working_dir, split_words

BACKEND_FIELD = {backend: key for key, backend in BACKEND_FIELDS}

MANGOHUD = "mangohud"
GAMESCOPE = "gamescope"
WINE = "wine"
DOSBOX = "dosbox"
SCUMMVM = "scummvm"

# Forces Wine's builtin Direct3D instead of DXVK / VKD3D
NO_VK_DLL_OVERRIDES = "*d3d9,*d3d10,*d3d10_1,*d3d10core,*d3d11,*dxgi=b"

# ──────────────────────────────────────────────────────────────────────────────
# Backends
# ──────────────────────────────────────────────────────────────────────────────

def _backend_argv(game_id: str, game: GameConfig, env: Dict[str, str]) -> List[str]:
    backend = getattr(game, "backend", None)
    field = BACKEND_FIELD.get(backend)
    # GameConfig.model_construct() skips validation, so check the field too
    if field is None or not getattr(game, field, None):
        raise NoBackendConfigured(game_id)

    if backend is Backend.NATIVE:
        argv = split_words(game.cmd)
    elif backend is Backend.WINE:
        argv = [WINE, *split_words(game.wine_exe)]
        if not game.use_vk:
            env["WINEDLLOVERRIDES"] = NO_VK_DLL_OVERRIDES
    elif backend is Backend.DOSBOX:
        argv = [DOSBOX, "-conf", game.dosbox_config]
    else:
        argv = [SCUMMVM, game.scummvm_id]

    if not argv or not argv[0]:
        raise NoBackendConfigured(game_id)
    return argv

# ──────────────────────────────────────────────────────────────────────────────
# Wrappers: mangohud inside, gamescope outside
# ──────────────────────────────────────────────────────────────────────────────

def _wrap_mangohud(argv: List[str], game: GameConfig, env: Dict[str, str]) -> List[str]:
    if game.fps_limit is not None:
        env["MANGOHUD_CONFIG"] = f"fps_limit={game.fps_limit}"
    return [MANGOHUD, *argv]

def _wrap_gamescope(argv: List[str], game: GameConfig, settings: Settings) -> List[str]:
    wrapped = [
        GAMESCOPE,
        "-w", str(settings.width),
        "-h", str(settings.height),
        "-f", "--force-grab-cursor",
    ]
    if game.fps_limit is not None:
        wrapped += ["-r", str(game.fps_limit)]
    return wrapped + ["--", *argv]

# ──────────────────────────────────────────────────────────────────────────────
# Public API
# ──────────────────────────────────────────────────────────────────────────────

def build_for_game(
    game_id: str,
    game: GameConfig,
    settings: Settings,
    directories: Mapping[str, str],
) -> Invocation:
    """
    Compose the full command for one game. Pure: nothing is read or spawned.

    The environment in the result is only what the game adds; the caller
    layers it over its own environment (see run_invocation).
    """
    cwd = resolve_working_dir(game_id, game, directories)

    generated: Dict[str, str] = {}
    argv = _backend_argv(game_id, game, generated)
    if game.uses_mangohud:
        argv = _wrap_mangohud(argv, game, generated)
    if settings.use_gamescope:
        argv = _wrap_gamescope(argv, game, settings)

    env = {**generated, **game.env}
    return Invocation(program=argv[0], args=argv[1:], env=env, cwd=cwd)

def build_invocation(catalog: Catalog, game_id: str) -> Invocation:
    game = find_game(catalog, game_id)
    inv = build_for_game(game_id, game, catalog.settings, catalog.directories)
    logger.debug("{} ({}): {} [cwd={}]", game_id, game.backend.value, inv.command_line(), inv.cwd)
    return inv

def run_invocation(inv: Invocation, *, base_env: Optional[Mapping[str, str]] = None) -> int:
    """Run in the foreground and hand back the child's exit status."""
    if inv.cwd is not None and not os.path.isdir(inv.cwd):
        raise WorkingDirectoryNotFound(inv.cwd)

    env = merged_env(inv.env, base_env)
    try:
        p = subprocess.Popen(inv.argv, cwd=inv.cwd, env=env, shell=False)
    except FileNotFoundError as e:
        raise ExecutableNotFound(inv.program) from e
    except PermissionError as e:
        raise PermissionDenied(inv.program) from e
    except OSError as e:
        raise LaunchError(f"Could not execute {inv.program}: {e}") from e

    logger.info("Launched {} (pid {})", inv.program, p.pid)
    code = p.wait()
    if code != 0:
        logger.warning("Command failed with exit status {}: {}", code, inv.command_line())
    else:
        logger.debug("{} exited cleanly", inv.program)
    return code

def play_game(catalog: Catalog, game_id: str) -> int:
    """
    Build and run one game, returning its exit status.

    Games marked ``installed = false`` are hidden from list / play-random but
    can still be started by ID; that only logs a warning.
    """
    inv = build_invocation(catalog, game_id)
    game = catalog.games[game_id]
    if not game.installed:
        logger.warning("{} is marked as not installed; launching anyway", game_id)
    logger.info("Playing {} ({})", game.display_name(game_id), game_id)
    return run_invocation(inv)

def play_random(catalog: Catalog, query: Query, rng: Optional[random.Random] = None) -> int:
    return play_game(catalog, pick_random(catalog, query, rng))
