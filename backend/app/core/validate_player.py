"""Player Validation — rejects invalid player states before they reach the store.

Invariants:
    - validate_for_create checks every field; returns a fully derived PlayerRecord
    - validate_for_update range-checks ONLY birthday and experience (in that order);
      name/title/race/profession/banned are copied verbatim when present
    - validate_player_id: 0 < id <= MAX_PLAYER_ID, checked before any lookup
    - All failures raise InvalidInputError naming the field; nothing is partially applied

Design Decisions:
    - Update does not re-check name/title length. This mirrors the original service,
      which only length-checked on create; kept as-is because intent is ambiguous
      (see DESIGN.md, "update length checks")
    - Merge is dataclasses.replace over patch.present_fields(): declarative, and the
      replaced record re-derives level/until_next_level from its experience
"""

from dataclasses import replace
from datetime import datetime

from app.core.domain_types import (
    MAX_BIRTHDAY, MAX_EXPERIENCE, MAX_PLAYER_ID, MIN_BIRTHDAY, MIN_EXPERIENCE,
    NAME_MAX_LENGTH, TITLE_MAX_LENGTH, as_utc,
)
from app.core.errors import InvalidInputError
from app.core.player_record import PlayerCandidate, PlayerPatch, PlayerRecord


# ─── Field rules ─────────────────────────────────────────────────

def is_valid_name(name: str | None) -> bool:
    return name is not None and 0 < len(name) <= NAME_MAX_LENGTH


def is_valid_title(title: str | None) -> bool:
    return title is not None and len(title) <= TITLE_MAX_LENGTH


def is_valid_experience(experience: int | None) -> bool:
    return (
        experience is not None
        and not isinstance(experience, bool)
        and MIN_EXPERIENCE <= experience <= MAX_EXPERIENCE
    )


def is_valid_birthday(birthday: datetime | None) -> bool:
    return birthday is not None and MIN_BIRTHDAY <= as_utc(birthday) <= MAX_BIRTHDAY


# ─── Operations ──────────────────────────────────────────────────

def validate_player_id(player_id: int) -> int:
    """Identifier must be a positive integer that fits a BIGINT."""
    if isinstance(player_id, bool) or not 0 < player_id <= MAX_PLAYER_ID:
        raise InvalidInputError("Wrong id", "id")
    return player_id


def validate_for_create(candidate: PlayerCandidate) -> PlayerRecord:
    """Full validation of a create payload. banned defaults to False."""
    if candidate.race is None:
        raise InvalidInputError("Race is required", "race")
    if candidate.profession is None:
        raise InvalidInputError("Profession is required", "profession")
    if not is_valid_name(candidate.name):
        raise InvalidInputError(
            f"Name must be 1-{NAME_MAX_LENGTH} characters", "name",
        )
    if not is_valid_title(candidate.title):
        raise InvalidInputError(
            f"Title is required and must be at most {TITLE_MAX_LENGTH} characters",
            "title",
        )
    if not is_valid_experience(candidate.experience):
        raise InvalidInputError(
            f"Experience must be between {MIN_EXPERIENCE} and {MAX_EXPERIENCE}",
            "experience",
        )
    if not is_valid_birthday(candidate.birthday):
        raise InvalidInputError("Wrong date of birth", "birthday")

    return PlayerRecord(
        name=candidate.name,
        title=candidate.title,
        race=candidate.race,
        profession=candidate.profession,
        birthday=candidate.birthday,
        experience=candidate.experience,
        banned=bool(candidate.banned),
    )


def validate_for_update(existing: PlayerRecord, patch: PlayerPatch) -> PlayerRecord:
    """Merge patch into existing. Returns a new record; existing is untouched."""
    changes = patch.present_fields()
    if "birthday" in changes and not is_valid_birthday(changes["birthday"]):
        raise InvalidInputError("Wrong date of birth", "birthday")
    if "experience" in changes and not is_valid_experience(changes["experience"]):
        raise InvalidInputError("Experience exceeds acceptable values", "experience")
    return replace(existing, **changes)
