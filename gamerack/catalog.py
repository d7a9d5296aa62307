import random
from typing import List, Optional, Tuple

from .errors import NoMatchingGames, UnknownGameId
from .models import Catalog, GameConfig
from .tags import Query, matches_game


def find_game(catalog: Catalog, game_id: str) -> GameConfig:
    try:
        return catalog.games[game_id]
    except KeyError:
        raise UnknownGameId(game_id) from None

def installed_matches(catalog: Catalog, query: Query) -> List[Tuple[str, GameConfig]]:
    """Installed games matching `query`, sorted by ID."""
    return [
        (gid, g)
        for gid, g in sorted(catalog.games.items())
        if g.installed and matches_game(query, gid, g.tags)
    ]

def format_game(game_id: str, game: GameConfig) -> str:
    return f"{game_id} - {game.display_name(game_id)}"

def list_games(catalog: Catalog, query: Query) -> List[str]:
    return [format_game(gid, g) for gid, g in installed_matches(catalog, query)]

def all_tags(catalog: Catalog) -> List[str]:
    tags = set()
    for g in catalog.games.values():
        tags |= g.tags
    return sorted(tags)

def pick_random(catalog: Catalog, query: Query, rng: Optional[random.Random] = None) -> str:
    """Uniform pick among installed matches; returns the game ID."""
    matches = installed_matches(catalog, query)
    if not matches:
        raise NoMatchingGames(str(query))
    gid, _ = (rng or random).choice(matches)
    return gid
