"""Player Routes — CRUD and filtered listing for player records.

Invariants:
    - Routes never contain business logic (validation in core, orchestration in PlayerService)
    - Path ids are validated by the service (400 "Wrong id") before lookup (404)
    - List, count and export share one filter dependency, so all see the same constraint
    - List reports the unpaginated match count in the X-Total-Count header

Design Decisions:
    - Query params are camelCase aliases matching the JSON wire format
    - PATCH for partial update: absent fields are untouched
"""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.domain_types import PlayerOrder, Profession, Race
from app.core.errors import InvalidInputError
from app.core.paging import PageRequest
from app.core.predicates import AllOf, build_player_constraint
from app.infrastructure.database import get_db
from app.infrastructure.player_store import SqlPlayerStore
from app.schemas.player import (
    PlayerCreate, PlayerResponse, PlayerUpdate, parse_epoch_millis,
)
from app.services.player_service import PlayerService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/players", tags=["players"])

TOTAL_COUNT_HEADER = "X-Total-Count"


def get_player_service(db: AsyncSession = Depends(get_db)) -> PlayerService:
    return PlayerService(SqlPlayerStore(db))


def player_filters(
    name: str | None = Query(None),
    title: str | None = Query(None),
    race: Race | None = Query(None),
    profession: Profession | None = Query(None),
    after: int | None = Query(None, description="Birthday lower bound, epoch ms"),
    before: int | None = Query(None, description="Birthday upper bound, epoch ms"),
    banned: bool | None = Query(None),
    min_experience: int | None = Query(None, alias="minExperience"),
    max_experience: int | None = Query(None, alias="maxExperience"),
    min_level: int | None = Query(None, alias="minLevel"),
    max_level: int | None = Query(None, alias="maxLevel"),
) -> AllOf:
    """Composite constraint from the request's query string."""
    return build_player_constraint(
        name=name,
        title=title,
        race=race,
        profession=profession,
        after=parse_epoch_millis(after, "after"),
        before=parse_epoch_millis(before, "before"),
        banned=banned,
        min_experience=min_experience,
        max_experience=max_experience,
        min_level=min_level,
        max_level=max_level,
    )


def page_request(
    order: PlayerOrder = Query(PlayerOrder.ID),
    page_number: int = Query(0, alias="pageNumber"),
    page_size: int | None = Query(None, alias="pageSize"),
) -> PageRequest:
    settings = get_settings()
    size = settings.default_page_size if page_size is None else page_size
    if size > settings.max_page_size:
        raise InvalidInputError(
            f"Page size must be <= {settings.max_page_size}", "pageSize",
        )
    return PageRequest(page_number=page_number, page_size=size, order=order)


@router.get("", response_model=list[PlayerResponse])
async def list_players(
    response: Response,
    constraint: AllOf = Depends(player_filters),
    page: PageRequest = Depends(page_request),
    service: PlayerService = Depends(get_player_service),
):
    """One page of players matching every supplied filter."""
    result = await service.find_all_players_paged(constraint, page)
    response.headers[TOTAL_COUNT_HEADER] = str(result.total)
    return [PlayerResponse.from_record(p) for p in result.items]


@router.get("/count")
async def count_players(
    constraint: AllOf = Depends(player_filters),
    service: PlayerService = Depends(get_player_service),
) -> int:
    return await service.count_players(constraint)


@router.get("/export", response_model=list[PlayerResponse])
async def export_players(
    constraint: AllOf = Depends(player_filters),
    service: PlayerService = Depends(get_player_service),
):
    """Every matching player in id order, without pagination."""
    players = await service.find_all_players(constraint)
    return [PlayerResponse.from_record(p) for p in players]


@router.post("", response_model=PlayerResponse)
async def create_player(
    body: PlayerCreate,
    service: PlayerService = Depends(get_player_service),
):
    player = await service.create_player(body.to_candidate())
    return PlayerResponse.from_record(player)


@router.get("/{player_id}", response_model=PlayerResponse)
async def get_player(
    player_id: int, service: PlayerService = Depends(get_player_service),
):
    player = await service.find_player_by_id(player_id)
    return PlayerResponse.from_record(player)


@router.patch("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: int,
    body: PlayerUpdate,
    service: PlayerService = Depends(get_player_service),
):
    """Apply the supplied fields; level is re-derived when experience changes."""
    player = await service.update_player(player_id, body.to_patch())
    return PlayerResponse.from_record(player)


@router.delete("/{player_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_player(
    player_id: int, service: PlayerService = Depends(get_player_service),
):
    await service.delete_player(player_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
