import pytest

from gamerack.errors import BareNegationError, EmptyTermError, QueryError
from gamerack.tags import Query, Term, evaluate, matches_game, parse


@pytest.mark.parametrize("tags", [set(), {"a"}, {"a", "b", "c"}])
def test_empty_query_matches_everything(tags):
    assert parse("") == Query()
    assert evaluate(parse(""), tags)
    assert evaluate(parse("   "), tags)


def test_groups_are_or_terms_are_and():
    q = parse("a,b c")
    assert evaluate(q, {"a", "b"})
    assert evaluate(q, {"c"})
    assert not evaluate(q, {"a"})
    assert not evaluate(q, set())


def test_negation():
    assert evaluate(parse("!x"), set())
    assert not evaluate(parse("!x"), {"x"})
    assert evaluate(parse("tag1,!tag2,tag3"), {"tag1", "tag3"})
    assert not evaluate(parse("tag1,!tag2,tag3"), {"tag1", "tag2", "tag3"})


def test_all_negated_group_matches_untagged_game():
    assert evaluate(parse("!a,!b"), set())
    assert not evaluate(parse("!a,!b"), {"b"})


def test_duplicate_terms_are_idempotent():
    assert evaluate(parse("a,a"), {"a"}) == evaluate(parse("a"), {"a"})
    assert evaluate(parse("a,a"), {"b"}) == evaluate(parse("a"), {"b"})


def test_matching_is_case_sensitive():
    assert not evaluate(parse("RPG"), {"rpg"})
    assert evaluate(parse("RPG"), {"RPG"})


def test_parse_structure():
    q = parse("tag1,!tag2 tag3")
    assert len(q.groups) == 2
    assert q.groups[0].terms == (Term("tag1"), Term("tag2", negated=True))
    assert q.groups[1].terms == (Term("tag3"),)
    assert str(q) == "tag1,!tag2 tag3"


def test_command_line_words_are_groups():
    assert parse(["a,b", "c"]) == parse("a,b c")
    assert parse(["a,b c"]) == parse("a,b c")
    assert parse([]) == Query()


def test_extra_whitespace_between_groups():
    assert parse("  a   b ") == parse("a b")


@pytest.mark.parametrize("query", ["a,,b", "a,", ",a", "a ,b"])
def test_empty_term(query):
    with pytest.raises(EmptyTermError):
        parse(query)


@pytest.mark.parametrize("query", ["!", "a,!", "! a"])
def test_bare_negation(query):
    with pytest.raises(BareNegationError) as ei:
        parse(query)
    assert isinstance(ei.value, QueryError)


def test_game_id_counts_as_a_tag_for_plain_groups():
    q = parse("doom")
    assert matches_game(q, "doom", frozenset())
    assert not matches_game(q, "quake", frozenset())
    assert matches_game(parse("fps"), "quake", frozenset({"fps"}))


def test_game_id_never_satisfies_a_negated_group():
    # "!fps" against {"quake"} would be true; it must only look at the tags
    assert not matches_game(parse("!fps"), "quake", frozenset({"fps"}))
    assert matches_game(parse("!fps"), "quake", frozenset())
    assert matches_game(parse(""), "anything", frozenset())
