"""Predicate Composer — turns optional named filters into one composite query constraint.

Invariants:
    - Each filter constructor returns NoConstraint when its inputs are unset (identity of AND)
    - compose() drops NoConstraint, flattens nested AllOf and stores members in a frozenset,
      so compose(a, b) == compose(b, a) and compose(a, compose(b, c)) == compose(compose(a, b), c)
    - compose() of nothing (or only NoConstraint) is MATCH_ALL
    - Constraints are plain data: the store interprets them, this module never executes a query

Design Decisions:
    - Tagged union of frozen dataclasses over closures capturing a query builder:
      hashable, comparable in tests, and independent of SQLAlchemy
    - matches() is the reference in-memory interpreter; infrastructure/player_store.py
      is the SQL interpreter of the same variants
    - Range bounds are inclusive; either bound may be None (open side)
    - Experience and level bounds are clamped one step outside the storable range:
      the result set is unchanged and the bound always fits an INTEGER column
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Literal, Union

from app.core.derive_level import derive_level
from app.core.domain_types import MAX_EXPERIENCE, Profession, Race, as_utc


FilterField = Literal[
    "name", "title", "race", "profession", "banned",
    "birthday", "experience", "level",
]


# ─── Variants ────────────────────────────────────────────────────

@dataclass(frozen=True)
class NoConstraint:
    """Unset filter — contributes no restriction."""


@dataclass(frozen=True)
class Equals:
    field: FilterField
    value: Any


@dataclass(frozen=True)
class Contains:
    """Case-sensitive literal substring match."""
    field: FilterField
    substring: str


@dataclass(frozen=True)
class Range:
    field: FilterField
    lower: Any = None
    upper: Any = None


@dataclass(frozen=True)
class AllOf:
    """Logical AND of atomic constraints. Empty means match-all."""
    members: frozenset = frozenset()


AtomicConstraint = Union[Equals, Contains, Range]
Constraint = Union[NoConstraint, Equals, Contains, Range, AllOf]

MATCH_ALL = AllOf()

MAX_LEVEL: int = derive_level(MAX_EXPERIENCE)


# ─── Filter constructors ─────────────────────────────────────────

def filter_by_name(name: str | None) -> Constraint:
    return NoConstraint() if name is None else Contains("name", name)


def filter_by_title(title: str | None) -> Constraint:
    return NoConstraint() if title is None else Contains("title", title)


def filter_by_race(race: Race | None) -> Constraint:
    return NoConstraint() if race is None else Equals("race", race)


def filter_by_profession(profession: Profession | None) -> Constraint:
    return NoConstraint() if profession is None else Equals("profession", profession)


def filter_by_banned(banned: bool | None) -> Constraint:
    return NoConstraint() if banned is None else Equals("banned", banned)


def _range(field: FilterField, lower, upper) -> Constraint:
    if lower is None and upper is None:
        return NoConstraint()
    return Range(field, lower, upper)


def filter_by_birthday(
    after: datetime | None, before: datetime | None,
) -> Constraint:
    return _range(
        "birthday",
        as_utc(after) if after is not None else None,
        as_utc(before) if before is not None else None,
    )


def _clamp(bound: int | None, ceiling: int) -> int | None:
    if bound is None:
        return None
    return min(max(bound, -1), ceiling + 1)


def filter_by_experience(
    min_experience: int | None, max_experience: int | None,
) -> Constraint:
    return _range(
        "experience",
        _clamp(min_experience, MAX_EXPERIENCE),
        _clamp(max_experience, MAX_EXPERIENCE),
    )


def filter_by_level(min_level: int | None, max_level: int | None) -> Constraint:
    return _range(
        "level", _clamp(min_level, MAX_LEVEL), _clamp(max_level, MAX_LEVEL),
    )


# ─── Composition ─────────────────────────────────────────────────

def compose(*constraints: Constraint) -> AllOf:
    """AND-combine constraints into one canonical AllOf."""
    members: set = set()
    for constraint in constraints:
        if isinstance(constraint, NoConstraint):
            continue
        if isinstance(constraint, AllOf):
            members.update(constraint.members)
        else:
            members.add(constraint)
    return AllOf(frozenset(members))


def build_player_constraint(
    name: str | None = None,
    title: str | None = None,
    race: Race | None = None,
    profession: Profession | None = None,
    after: datetime | None = None,
    before: datetime | None = None,
    banned: bool | None = None,
    min_experience: int | None = None,
    max_experience: int | None = None,
    min_level: int | None = None,
    max_level: int | None = None,
) -> AllOf:
    """Composite constraint for one player query request."""
    return compose(
        filter_by_name(name),
        filter_by_title(title),
        filter_by_race(race),
        filter_by_profession(profession),
        filter_by_birthday(after, before),
        filter_by_banned(banned),
        filter_by_experience(min_experience, max_experience),
        filter_by_level(min_level, max_level),
    )


# ─── In-memory interpretation ────────────────────────────────────

def matches(constraint: Constraint, record: Any) -> bool:
    """Evaluate a constraint against any object exposing the filter fields."""
    if isinstance(constraint, NoConstraint):
        return True
    if isinstance(constraint, AllOf):
        return all(matches(member, record) for member in constraint.members)

    value = getattr(record, constraint.field)
    if isinstance(constraint, Equals):
        return value == constraint.value
    if isinstance(constraint, Contains):
        return value is not None and constraint.substring in value
    if isinstance(constraint, Range):
        if value is None:
            return False
        if constraint.lower is not None and value < constraint.lower:
            return False
        if constraint.upper is not None and value > constraint.upper:
            return False
        return True
    raise TypeError(f"Unknown constraint type: {type(constraint).__name__}")
