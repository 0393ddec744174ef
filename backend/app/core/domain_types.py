"""Domain Types — closed enumerations, identifier bound and field bounds for player records.

Invariants:
    - Race, Profession, PlayerOrder are closed sets — no raw string matching
    - Birthdays are UTC-aware datetimes inside the domain; epoch milliseconds only at the edge
    - Bounds constants are the single source of truth for validation and query clamping

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Millisecond conversion via timedelta arithmetic, not float timestamps (exact to the ms)
"""

from datetime import datetime, timedelta, timezone
from enum import Enum


# ─── Identity Types ──────────────────────────────────────────────

MAX_PLAYER_ID: int = 2**63 - 1  # BIGINT primary key


# ─── Enums ───────────────────────────────────────────────────────

class Race(str, Enum):
    HUMAN = "HUMAN"
    DWARF = "DWARF"
    ELF = "ELF"
    GIANT = "GIANT"
    ORC = "ORC"
    TROLL = "TROLL"
    HOBBIT = "HOBBIT"


class Profession(str, Enum):
    WARRIOR = "WARRIOR"
    ROGUE = "ROGUE"
    SORCERER = "SORCERER"
    CLERIC = "CLERIC"
    PALADIN = "PALADIN"
    NAZGUL = "NAZGUL"
    WARLOCK = "WARLOCK"
    DRUID = "DRUID"


class PlayerOrder(str, Enum):
    """Sort key for paginated queries — value is the ordered column."""
    ID = "id"
    NAME = "name"
    EXPERIENCE = "experience"
    BIRTHDAY = "birthday"
    LEVEL = "level"


# ─── Bounds ──────────────────────────────────────────────────────

NAME_MAX_LENGTH: int = 12
TITLE_MAX_LENGTH: int = 30

MIN_EXPERIENCE: int = 1
MAX_EXPERIENCE: int = 10_000_000

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# 2000-01-01 00:00:00.482 and 3000-12-31 23:59:59.494 at UTC+3, inclusive
MIN_BIRTHDAY_MILLIS: int = 946_674_000_482
MAX_BIRTHDAY_MILLIS: int = 32_535_205_199_494


# ─── Time helpers ────────────────────────────────────────────────

def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, convert aware ones to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def from_epoch_millis(millis: int) -> datetime:
    return EPOCH + timedelta(milliseconds=millis)


def to_epoch_millis(value: datetime) -> int:
    return (as_utc(value) - EPOCH) // timedelta(milliseconds=1)


MIN_BIRTHDAY: datetime = from_epoch_millis(MIN_BIRTHDAY_MILLIS)
MAX_BIRTHDAY: datetime = from_epoch_millis(MAX_BIRTHDAY_MILLIS)
