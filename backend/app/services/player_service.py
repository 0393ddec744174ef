"""Player Service — orchestrates validation, derivation and the player store.

Invariants:
    - Every mutation passes validation BEFORE touching the store (no partial writes)
    - update/delete check existence via lookup first (PlayerNotFoundError otherwise)
    - Identifier checked (InvalidInputError) before lookup, distinct from "not found"
    - Update is fetch → merge → save; no retry, no optimistic check (store owns atomicity)

Design Decisions:
    - Impureim sandwich: store IO around pure core functions
    - Two query methods instead of one overloaded call: paged returns Page, unpaged list
"""

import logging

from app.core.errors import PlayerNotFoundError
from app.core.paging import Page, PageRequest
from app.core.player_record import PlayerCandidate, PlayerPatch, PlayerRecord
from app.core.predicates import Constraint
from app.core.repository_protocols import PlayerStore
from app.core.validate_player import (
    validate_for_create, validate_for_update, validate_player_id,
)

logger = logging.getLogger(__name__)


class PlayerService:
    """Create, update, delete and query players against a PlayerStore."""

    def __init__(self, store: PlayerStore):
        self.store = store

    async def create_player(self, candidate: PlayerCandidate) -> PlayerRecord:
        player = validate_for_create(candidate)
        saved = await self.store.save(player)
        logger.info(
            f"Player created: {saved.name}",
            extra={"player_id": saved.id, "operation": "create"},
        )
        return saved

    async def update_player(self, player_id: int, patch: PlayerPatch) -> PlayerRecord:
        existing = await self.find_player_by_id(player_id)
        merged = validate_for_update(existing, patch)
        saved = await self.store.save(merged)
        logger.info(
            f"Player updated: fields={sorted(patch.present_fields())}",
            extra={"player_id": player_id, "operation": "update"},
        )
        return saved

    async def delete_player(self, player_id: int) -> None:
        await self.find_player_by_id(player_id)
        await self.store.delete_by_id(player_id)
        logger.info(
            "Player deleted",
            extra={"player_id": player_id, "operation": "delete"},
        )

    async def find_player_by_id(self, player_id: int) -> PlayerRecord:
        validate_player_id(player_id)
        player = await self.store.find_by_id(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player

    async def count_players(self, constraint: Constraint) -> int:
        return await self.store.count(constraint)

    async def find_all_players(self, constraint: Constraint) -> list[PlayerRecord]:
        """Every matching player, unpaginated, for exports."""
        return await self.store.find_all_unpaged(constraint)

    async def find_all_players_paged(
        self, constraint: Constraint, page: PageRequest,
    ) -> Page[PlayerRecord]:
        return await self.store.find_all(constraint, page)
