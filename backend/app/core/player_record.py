"""Player Record — the player entity, creation candidate and partial-update patch.

Invariants:
    - PlayerRecord.level / until_next_level are ALWAYS derived from experience
      (init=False fields computed in __post_init__, record is frozen)
    - PlayerCandidate carries raw, unvalidated create input (every field optional)
    - PlayerPatch: None means "absent" — absent fields never alter the stored value

Design Decisions:
    - Frozen dataclasses: a changed player is a new record built via dataclasses.replace,
      which re-runs derivation, so no code path can set level independently
    - Patch as data, merge as a function (see validate_player.validate_for_update)
"""

from dataclasses import dataclass, field, fields
from datetime import datetime

from app.core.derive_level import derive_level, derive_until_next_level
from app.core.domain_types import Profession, Race, as_utc


@dataclass(frozen=True)
class PlayerRecord:
    """Validated player — id is None until the store assigns one."""

    name: str
    title: str
    race: Race
    profession: Profession
    birthday: datetime
    experience: int
    banned: bool = False
    id: int | None = None
    level: int = field(init=False)
    until_next_level: int = field(init=False)

    def __post_init__(self):
        level = derive_level(self.experience)
        object.__setattr__(self, "birthday", as_utc(self.birthday))
        object.__setattr__(self, "level", level)
        object.__setattr__(
            self, "until_next_level",
            derive_until_next_level(self.experience, level),
        )


@dataclass(frozen=True)
class PlayerCandidate:
    """Unvalidated create payload."""

    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: datetime | None = None
    experience: int | None = None
    banned: bool | None = None


@dataclass(frozen=True)
class PlayerPatch:
    """Partial update — only non-None fields are applied."""

    name: str | None = None
    title: str | None = None
    race: Race | None = None
    profession: Profession | None = None
    birthday: datetime | None = None
    experience: int | None = None
    banned: bool | None = None

    def present_fields(self) -> dict:
        """Fields supplied by the caller, in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }
