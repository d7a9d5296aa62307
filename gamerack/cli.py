from __future__ import annotations

import functools
import shlex
from pathlib import Path
from typing import Optional, Tuple

import click

from . import default_config_path
from .catalog import all_tags, list_games, pick_random
from .errors import GameRackError
from .launch import build_invocation, play_game, run_invocation
from .logger import logger, setup_logger
from .models import Catalog, Invocation
from .settings import ensure_config_dir, load_config
from .tags import parse
from .utils import find_editor


def _reports_errors(f):
    """Turn our exceptions into click's 'Error: ...' + exit 1."""
    @functools.wraps(f)
    def wrapper(*a, **kw):
        try:
            return f(*a, **kw)
        except GameRackError as e:
            raise click.ClickException(str(e)) from e
    return wrapper

def _config_path(ctx: click.Context) -> Path:
    return ctx.obj["config_path"]

def _catalog(ctx: click.Context) -> Catalog:
    if ctx.obj.get("catalog") is None:
        ctx.obj["catalog"] = load_config(_config_path(ctx))
    return ctx.obj["catalog"]

def _echo_invocation(inv: Invocation) -> None:
    if inv.cwd:
        click.echo(f"cd {shlex.quote(inv.cwd)}")
    for k, v in sorted(inv.env.items()):
        click.echo(f"{k}={v}")
    click.echo(inv.command_line())


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path),
              default=None, help="games.toml to use instead of the default location")
@click.option("-v", "--verbose", is_flag=True, help="debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: Optional[Path], verbose: bool):
    """game - launch games from games.toml"""
    setup_logger(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path or default_config_path()


@cli.command("help")
@click.pass_context
def help_cmd(ctx: click.Context):
    """Explain the commands"""
    click.echo(ctx.parent.get_help())


@cli.command("list")
@click.argument("query", nargs=-1)
@click.pass_context
@_reports_errors
def list_cmd(ctx: click.Context, query: Tuple[str, ...]):
    """List games as "game_id - name", optionally filtered by tags.

    QUERY is space-separated groups of comma-separated tags; a game is listed
    if it has every tag of at least one group. Prefix a tag with ! to exclude it.
    A group without ! also matches the game whose ID it names.
    """
    q = parse(query)
    for line in list_games(_catalog(ctx), q):
        click.echo(line)


@cli.command("tags")
@click.pass_context
@_reports_errors
def tags_cmd(ctx: click.Context):
    """List all tags"""
    for tag in all_tags(_catalog(ctx)):
        click.echo(tag)


@cli.command("play")
@click.argument("game_id")
@click.option("-n", "--dry-run", is_flag=True, help="print the command instead of running it")
@click.pass_context
@_reports_errors
def play_cmd(ctx: click.Context, game_id: str, dry_run: bool):
    """Play a game, specified by its game ID"""
    catalog = _catalog(ctx)
    if dry_run:
        _echo_invocation(build_invocation(catalog, game_id))
        return
    ctx.exit(play_game(catalog, game_id))


@cli.command("play-random")
@click.argument("query", nargs=-1)
@click.option("-n", "--dry-run", is_flag=True, help="print the command instead of running it")
@click.pass_context
@_reports_errors
def play_random_cmd(ctx: click.Context, query: Tuple[str, ...], dry_run: bool):
    """Play a random installed game matching QUERY"""
    catalog = _catalog(ctx)
    game_id = pick_random(catalog, parse(query))
    if dry_run:
        click.echo(f"# {game_id}")
        _echo_invocation(build_invocation(catalog, game_id))
        return
    ctx.exit(play_game(catalog, game_id))


@cli.command("edit")
@click.pass_context
@_reports_errors
def edit_cmd(ctx: click.Context):
    """Edit the config file"""
    path = _config_path(ctx)
    ensure_config_dir(path)
    editor = find_editor()
    logger.debug("Editing {} with {}", path, editor[0])
    ctx.exit(run_invocation(Invocation(program=editor[0], args=[*editor[1:], str(path)])))


def main() -> None:
    cli(obj={})
