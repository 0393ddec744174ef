"""Player Schemas — Pydantic request/response models for the player API.

Invariants:
    - Wire format is camelCase (untilNextLevel) with birthday as epoch milliseconds
    - Request models enforce TYPES only; business rules (lengths, ranges, required
      race/profession) live in core/validate_player so the reason string names the rule
    - PlayerUpdate: omitted and null fields are both "absent"

Design Decisions:
    - populate_by_name: tests and internal callers may use snake_case field names
    - Out-of-range millisecond values become InvalidInputError, not OverflowError
"""

from pydantic import BaseModel, ConfigDict, Field

from app.core.domain_types import Profession, Race, from_epoch_millis, to_epoch_millis
from app.core.errors import InvalidInputError
from app.core.player_record import PlayerCandidate, PlayerPatch, PlayerRecord


def parse_epoch_millis(millis: int | None, field: str):
    """Epoch milliseconds → UTC datetime, None passes through."""
    if millis is None:
        return None
    try:
        return from_epoch_millis(millis)
    except OverflowError:
        raise InvalidInputError("Wrong date of birth", field)


class PlayerCreate(BaseModel):
    """Create payload — every field optional at the type level."""
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: int | None = None
    banned: bool | None = None
    experience: int | None = None

    def to_candidate(self) -> PlayerCandidate:
        return PlayerCandidate(
            name=self.name,
            title=self.title,
            race=self.race,
            profession=self.profession,
            birthday=parse_epoch_millis(self.birthday, "birthday"),
            banned=self.banned,
            experience=self.experience,
        )


class PlayerUpdate(BaseModel):
    """Partial update payload."""
    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: int | None = None
    banned: bool | None = None
    experience: int | None = None

    def to_patch(self) -> PlayerPatch:
        return PlayerPatch(
            name=self.name,
            title=self.title,
            race=self.race,
            profession=self.profession,
            birthday=parse_epoch_millis(self.birthday, "birthday"),
            banned=self.banned,
            experience=self.experience,
        )


class PlayerResponse(BaseModel):
    """Public player representation."""
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    title: str
    race: Race
    profession: Profession
    birthday: int
    banned: bool
    experience: int
    level: int
    until_next_level: int = Field(alias="untilNextLevel")

    @classmethod
    def from_record(cls, player: PlayerRecord) -> "PlayerResponse":
        return cls(
            id=player.id,
            name=player.name,
            title=player.title,
            race=player.race,
            profession=player.profession,
            birthday=to_epoch_millis(player.birthday),
            banned=player.banned,
            experience=player.experience,
            level=player.level,
            until_next_level=player.until_next_level,
        )
