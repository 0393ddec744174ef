"""SQL Player Store — PlayerStore implementation over an async SQLAlchemy session.

Invariants:
    - Constraint variants are interpreted here and nowhere else in the shell
    - Contains is a case-sensitive literal substring match on every dialect
    - Datetimes written and compared in UTC; rows mapped back to PlayerRecord
      (which re-derives level from experience)
    - save/delete commit their own unit of work

Design Decisions:
    - SQLite LIKE is case-insensitive for ASCII, so Contains compiles to instr() there
      and to an escaped LIKE elsewhere
    - Ordering ties broken by id so pages are stable
"""

import logging

from sqlalchemy import and_, func, select, true
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import PlayerNotFoundError
from app.core.paging import Page, PageRequest
from app.core.player_record import PlayerRecord
from app.core.predicates import (
    AllOf, Constraint, Contains, Equals, NoConstraint, Range,
)
from app.models.player import Player

logger = logging.getLogger(__name__)


def to_record(row: Player) -> PlayerRecord:
    return PlayerRecord(
        id=row.id,
        name=row.name,
        title=row.title,
        race=row.race,
        profession=row.profession,
        birthday=row.birthday,
        experience=row.experience,
        banned=row.banned,
    )


def _apply(row: Player, player: PlayerRecord) -> None:
    row.name = player.name
    row.title = player.title
    row.race = player.race
    row.profession = player.profession
    row.birthday = player.birthday
    row.banned = player.banned
    row.experience = player.experience
    row.level = player.level
    row.until_next_level = player.until_next_level


class SqlPlayerStore:
    """Player persistence and constraint execution."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_id(self, player_id: int) -> PlayerRecord | None:
        row = await self.db.get(Player, player_id)
        return to_record(row) if row is not None else None

    async def save(self, player: PlayerRecord) -> PlayerRecord:
        if player.id is None:
            row = Player()
            self.db.add(row)
        else:
            row = await self.db.get(Player, player.id)
            if row is None:
                raise PlayerNotFoundError(player.id)
        _apply(row, player)
        await self.db.commit()
        await self.db.refresh(row)
        return to_record(row)

    async def delete_by_id(self, player_id: int) -> None:
        row = await self.db.get(Player, player_id)
        if row is None:
            raise PlayerNotFoundError(player_id)
        await self.db.delete(row)
        await self.db.commit()

    async def count(self, constraint: Constraint) -> int:
        total = await self.db.scalar(
            select(func.count()).select_from(Player).where(self.to_clause(constraint)),
        )
        return total or 0

    async def find_all(
        self, constraint: Constraint, page: PageRequest,
    ) -> Page[PlayerRecord]:
        total = await self.count(constraint)
        result = await self.db.execute(
            select(Player)
            .where(self.to_clause(constraint))
            .order_by(getattr(Player, page.order.value), Player.id)
            .offset(page.offset)
            .limit(page.page_size),
        )
        logger.debug(
            f"Player page query: total={total}",
            extra={"operation": "find_all"},
        )
        return Page(
            items=[to_record(row) for row in result.scalars().all()],
            total=total,
            page_number=page.page_number,
            page_size=page.page_size,
        )

    async def find_all_unpaged(self, constraint: Constraint) -> list[PlayerRecord]:
        result = await self.db.execute(
            select(Player).where(self.to_clause(constraint)).order_by(Player.id),
        )
        return [to_record(row) for row in result.scalars().all()]

    # ─── Constraint interpretation ──────────────────────────────

    def to_clause(self, constraint: Constraint):
        """Translate a constraint into a SQLAlchemy boolean expression."""
        if isinstance(constraint, NoConstraint):
            return true()
        if isinstance(constraint, AllOf):
            if not constraint.members:
                return true()
            return and_(*(
                self.to_clause(member)
                for member in sorted(constraint.members, key=repr)
            ))

        column = getattr(Player, constraint.field)
        if isinstance(constraint, Equals):
            if isinstance(constraint.value, bool):
                return column.is_(constraint.value)
            return column == constraint.value
        if isinstance(constraint, Contains):
            if self._dialect_name() == "sqlite":
                return func.instr(column, constraint.substring) > 0
            return column.contains(constraint.substring, autoescape=True)
        if isinstance(constraint, Range):
            if constraint.lower is not None and constraint.upper is not None:
                return column.between(constraint.lower, constraint.upper)
            if constraint.lower is not None:
                return column >= constraint.lower
            return column <= constraint.upper
        raise TypeError(f"Unknown constraint type: {type(constraint).__name__}")

    def _dialect_name(self) -> str:
        bind = self.db.bind
        return bind.dialect.name if bind is not None else ""
