import random
from collections import Counter

import pytest

from gamerack.catalog import all_tags, find_game, installed_matches, list_games, pick_random
from gamerack.errors import NoMatchingGames, UnknownGameId
from gamerack.settings import parse_config
from gamerack.tags import parse


def test_list_does_not_show_games_that_are_not_installed():
    text = """
    [games.testgame]
    name = "Test Game"
    wine_exe = "Test.exe"
    installed = false

    [games.testgame2]
    name = "Test Game 2"
    wine_exe = "TestGame2.exe"
    """
    assert list_games(parse_config(text), parse("")) == ["testgame2 - Test Game 2"]


def test_list_is_sorted_and_filtered(library):
    assert list_games(library, parse("")) == [
        "atlantis - Indiana Jones and the Fate of Atlantis",
        "bg3 - Baldur's Gate 3",
        "doom - Doom",
        "morrowind - Morrowind",
    ]
    assert list_games(library, parse("classic")) == ["doom - Doom", "morrowind - Morrowind"]
    assert list_games(library, parse("rpg,!classic")) == ["bg3 - Baldur's Gate 3"]
    assert list_games(library, parse("rpg,classic fps")) == ["doom - Doom", "morrowind - Morrowind"]


def test_game_whose_id_matches_the_query_is_listed(library):
    assert list_games(library, parse("atlantis")) == [
        "atlantis - Indiana Jones and the Fate of Atlantis",
    ]


def test_all_tags_includes_uninstalled_games(library):
    assert all_tags(library) == ["classic", "fps", "rpg", "sim"]


def test_find_game(library):
    assert find_game(library, "doom").cmd.startswith("dsda-doom")
    with pytest.raises(UnknownGameId):
        find_game(library, "quake")


def test_pick_random_no_matches(library):
    with pytest.raises(NoMatchingGames):
        pick_random(library, parse("racing"))


def test_pick_random_only_installed(library):
    rng = random.Random(0)
    picks = {pick_random(library, parse("classic"), rng) for _ in range(200)}
    assert picks == {"doom", "morrowind"}


def test_pick_random_is_uniform(library):
    rng = random.Random(1234)
    n = 4000
    counts = Counter(pick_random(library, parse(""), rng) for _ in range(n))
    expected = n / len(installed_matches(library, parse("")))
    assert set(counts) == {"atlantis", "bg3", "doom", "morrowind"}
    for c in counts.values():
        assert abs(c - expected) < expected * 0.15
