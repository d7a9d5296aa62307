"""
Tag queries.

A query is whitespace-separated groups; a group is comma-separated terms;
a term is a tag, optionally prefixed with '!'.

    "rpg,!finished fps"   ->  (rpg AND NOT finished) OR fps

Matching is exact and case-sensitive. The empty query matches everything.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import AbstractSet, Iterable, Tuple, Union

from .errors import BareNegationError, EmptyTermError
from .models import NOT_PREFIX


@dataclass(frozen=True)
class Term:
    name: str
    negated: bool = False

    def holds(self, tags: AbstractSet[str]) -> bool:
        return (self.name in tags) != self.negated

    def __str__(self) -> str:
        return NOT_PREFIX + self.name if self.negated else self.name


@dataclass(frozen=True)
class Group:
    terms: Tuple[Term, ...]

    def matches(self, tags: AbstractSet[str]) -> bool:
        return all(t.holds(tags) for t in self.terms)

    @property
    def positive(self) -> bool:
        return not any(t.negated for t in self.terms)

    def __str__(self) -> str:
        return ",".join(str(t) for t in self.terms)


@dataclass(frozen=True)
class Query:
    groups: Tuple[Group, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.groups

    def __str__(self) -> str:
        return " ".join(str(g) for g in self.groups)


def _parse_term(raw: str, query: str) -> Term:
    if not raw:
        raise EmptyTermError(query)
    if raw.startswith(NOT_PREFIX):
        name = raw[len(NOT_PREFIX):]
        if not name:
            raise BareNegationError(query)
        return Term(name, negated=True)
    return Term(raw)

def _parse_group(raw: str, query: str) -> Group:
    return Group(tuple(_parse_term(t, query) for t in raw.split(",")))

def parse(query: Union[str, Iterable[str]]) -> Query:
    """Parse a query string, or a list of command-line words (each one or more groups)."""
    if not isinstance(query, str):
        query = " ".join(query)
    return Query(tuple(_parse_group(g, query) for g in query.split()))

def evaluate(query: Query, tags: AbstractSet[str]) -> bool:
    if query.is_empty:
        return True
    return any(g.matches(tags) for g in query.groups)

def matches_game(query: Query, game_id: str, tags: AbstractSet[str]) -> bool:
    """
    Like evaluate(), but a group of plain terms that names the game's own ID
    also matches, so `game list doom` finds the game called "doom".
    Groups with a negated term only ever look at the tags.
    """
    if query.is_empty:
        return True
    own_id = frozenset((game_id,))
    return any(
        g.matches(tags) or (g.positive and g.matches(own_id))
        for g in query.groups
    )
