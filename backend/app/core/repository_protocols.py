"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these protocols are never async themselves —
      the shell orchestrates the async calls around the pure logic
    - The store owns atomicity of fetch → merge → save; callers add no retry or locking
"""

from typing import Protocol

from app.core.paging import Page, PageRequest
from app.core.player_record import PlayerRecord
from app.core.predicates import Constraint


class PlayerStore(Protocol):
    """Contract for player persistence — implemented by shell."""
    async def find_by_id(self, player_id: int) -> PlayerRecord | None: ...
    async def save(self, player: PlayerRecord) -> PlayerRecord: ...
    async def delete_by_id(self, player_id: int) -> None: ...
    async def find_all(
        self, constraint: Constraint, page: PageRequest,
    ) -> Page[PlayerRecord]: ...
    async def find_all_unpaged(self, constraint: Constraint) -> list[PlayerRecord]: ...
    async def count(self, constraint: Constraint) -> int: ...
