"""Player ORM — persisted player row, including the derived level columns.

Invariants:
    - id is BIGINT autoincrement primary key, assigned by the database
    - level / until_next_level are written only from PlayerRecord (derived in core)
    - name/title are unbounded VARCHAR: create enforces 12/30 characters in core,
      update stores replaced values verbatim, so the column must not truncate

Design Decisions:
    - race/profession stored as VARCHAR (native_enum=False): portable across
      PostgreSQL and SQLite, no ALTER TYPE needed when enums grow
    - BIGINT with SQLite INTEGER variant: SQLite only autoincrements INTEGER PRIMARY KEY
"""

from datetime import datetime

from sqlalchemy import BigInteger, Boolean, DateTime, Enum, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.core.domain_types import Profession, Race
from app.db.base import Base


class Player(Base):
    """A game player."""
    __tablename__ = "player"

    id: Mapped[int] = mapped_column(
        BigInteger().with_variant(Integer, "sqlite"),
        primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String, nullable=False)
    title: Mapped[str] = mapped_column(String, nullable=False, default="")
    race: Mapped[Race] = mapped_column(
        Enum(Race, native_enum=False, length=20), nullable=False,
    )
    profession: Mapped[Profession] = mapped_column(
        Enum(Profession, native_enum=False, length=20), nullable=False,
    )
    birthday: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    banned: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    experience: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    level: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    until_next_level: Mapped[int] = mapped_column(Integer, nullable=False)
