"""Player Routes — HTTP surface over the service, with SQLite behind it.

Invariants verified:
    - Create returns derived level/untilNextLevel and banned=false by default
    - Business-rule failures → 400 INVALID_INPUT; unknown id → 404 PLAYER_NOT_FOUND
    - Malformed ids/bodies → 400 VALIDATION_ERROR
    - List/count/export share filters; list is paginated and reports the total
    - Out-of-range numeric filters and page numbers never reach the database as-is
"""

import pytest

from app.core.domain_types import MAX_EXPERIENCE, MIN_BIRTHDAY_MILLIS
from app.models.player import Player
from tests.factories import make_payload

BASE = "/api/v1/players"


async def _create(client, **overrides) -> dict:
    res = await client.post(BASE, json=make_payload(**overrides))
    assert res.status_code == 200, res.text
    return res.json()


# ─── create ──────────────────────────────────────────────────────

async def test_create_returns_derived_fields(client):
    body = await _create(client)
    assert body["id"] >= 1
    assert body["banned"] is False
    assert body["level"] == 5
    assert body["untilNextLevel"] == 600
    assert body["birthday"] == make_payload()["birthday"]


async def test_create_without_race_is_rejected(client):
    payload = make_payload()
    del payload["race"]
    res = await client.post(BASE, json=payload)
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_INPUT"
    assert res.json()["error"]["context"]["field"] == "race"
    assert (await client.get(f"{BASE}/count")).json() == 0


async def test_create_with_unknown_race_is_validation_error(client):
    res = await client.post(BASE, json=make_payload(race="WIZARD"))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"
    detail = res.json()["error"]["details"][0]
    assert (detail["field"], detail["location"]) == ("race", "body")


async def test_create_with_early_birthday_is_rejected(client):
    res = await client.post(BASE, json=make_payload(birthday=MIN_BIRTHDAY_MILLIS - 1))
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "birthday"


async def test_create_with_overflowing_birthday_is_rejected(client):
    res = await client.post(BASE, json=make_payload(birthday=10**15))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_INPUT"


# ─── read ────────────────────────────────────────────────────────

async def test_get_existing_player(client):
    created = await _create(client)
    res = await client.get(f"{BASE}/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created


async def test_get_unknown_player_is_404(client):
    res = await client.get(f"{BASE}/999")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "PLAYER_NOT_FOUND"


@pytest.mark.parametrize("bad_id", ["0", "-4"])
async def test_get_out_of_range_id_is_400(client, bad_id):
    res = await client.get(f"{BASE}/{bad_id}")
    assert res.status_code == 400
    assert res.json()["error"]["message"] == "Wrong id"


async def test_get_non_numeric_id_is_400(client):
    res = await client.get(f"{BASE}/abc")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── update ──────────────────────────────────────────────────────

async def test_patch_experience_only(client):
    created = await _create(client, banned=True)
    res = await client.patch(f"{BASE}/{created['id']}", json={"experience": 300})
    assert res.status_code == 200
    body = res.json()
    assert (body["experience"], body["level"], body["untilNextLevel"]) == (300, 2, 300)
    for key in ("name", "title", "race", "profession", "banned", "birthday"):
        assert body[key] == created[key]


async def test_patch_invalid_experience_changes_nothing(client):
    created = await _create(client)
    res = await client.patch(
        f"{BASE}/{created['id']}", json={"name": "Changed", "experience": 0},
    )
    assert res.status_code == 400
    assert (await client.get(f"{BASE}/{created['id']}")).json() == created


async def test_patch_unknown_player_is_404(client):
    res = await client.patch(f"{BASE}/77", json={"name": "Nobody"})
    assert res.status_code == 404


async def test_patch_twice_is_idempotent(client):
    created = await _create(client)
    patch = {"title": "Elessar", "race": "ELF", "experience": 9_000}
    first = (await client.patch(f"{BASE}/{created['id']}", json=patch)).json()
    second = (await client.patch(f"{BASE}/{created['id']}", json=patch)).json()
    assert first == second


# ─── delete ──────────────────────────────────────────────────────

async def test_delete_existing_player(client):
    keep = await _create(client, name="Keep")
    gone = await _create(client, name="Gone")
    res = await client.delete(f"{BASE}/{gone['id']}")
    assert res.status_code == 204
    assert (await client.get(f"{BASE}/{gone['id']}")).status_code == 404
    assert (await client.get(f"{BASE}/{keep['id']}")).status_code == 200


async def test_delete_unknown_player_is_404(client):
    await _create(client)
    res = await client.delete(f"{BASE}/555")
    assert res.status_code == 404
    assert (await client.get(f"{BASE}/count")).json() == 1


# ─── list / count ────────────────────────────────────────────────

async def test_list_without_filters_uses_default_page_size(client):
    for name in ("A", "B", "C", "D"):
        await _create(client, name=name)
    res = await client.get(BASE)
    assert [p["name"] for p in res.json()] == ["A", "B", "C"]
    res = await client.get(BASE, params={"pageNumber": 1})
    assert [p["name"] for p in res.json()] == ["D"]
    assert (await client.get(f"{BASE}/count")).json() == 4


async def test_list_and_count_with_combined_filters(client):
    await _create(client, name="Frodo", experience=100, banned=True)
    await _create(client, name="Sam", experience=300, banned=False)
    await _create(client, name="Gollum", experience=500, banned=True)
    await _create(client, name="Legolas", experience=501, banned=True)
    params = {"minExperience": 100, "maxExperience": 500, "banned": "true"}
    res = await client.get(BASE, params={**params, "pageSize": 10})
    assert [p["name"] for p in res.json()] == ["Frodo", "Gollum"]
    assert (await client.get(f"{BASE}/count", params=params)).json() == 2


async def test_list_orders_by_requested_column(client):
    await _create(client, name="Zed", experience=10)
    await _create(client, name="Amy", experience=20)
    res = await client.get(BASE, params={"order": "name"})
    assert [p["name"] for p in res.json()] == ["Amy", "Zed"]


async def test_list_rejects_oversized_page(client):
    res = await client.get(BASE, params={"pageSize": 1_000})
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "pageSize"


async def test_list_rejects_negative_page_number(client):
    res = await client.get(BASE, params={"pageNumber": -1})
    assert res.status_code == 400


async def test_list_rejects_page_number_past_bigint_offset(client):
    res = await client.get(BASE, params={"pageNumber": str(2**62), "pageSize": 10})
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "pageNumber"


async def test_list_reports_total_count_header(client):
    for name in ("A", "B", "C", "D", "E"):
        await _create(client, name=name)
    res = await client.get(BASE, params={"pageSize": 2})
    assert len(res.json()) == 2
    assert res.headers["X-Total-Count"] == "5"


async def test_huge_range_bounds_are_ordinary_queries(client):
    await _create(client, name="Low", experience=10)
    await _create(client, name="High", experience=MAX_EXPERIENCE)
    above_all = await client.get(BASE, params={"minExperience": str(2**64)})
    assert above_all.status_code == 200
    assert above_all.json() == []
    everyone = await client.get(
        f"{BASE}/count",
        params={"maxLevel": 3_000_000_000, "minExperience": str(-2**64)},
    )
    assert everyone.status_code == 200
    assert everyone.json() == 2
    none_below = await client.get(f"{BASE}/count", params={"maxExperience": str(-2**64)})
    assert none_below.json() == 0


async def test_export_returns_every_match_unpaginated(client):
    for name in ("A", "B", "C", "D"):
        await _create(client, name=name, banned=name != "C")
    res = await client.get(f"{BASE}/export", params={"banned": "true"})
    assert res.status_code == 200
    assert [p["name"] for p in res.json()] == ["A", "B", "D"]


# ─── health ──────────────────────────────────────────────────────

async def test_health_and_readiness(client):
    assert (await client.get("/api/v1/health/")).json()["status"] == "healthy"
    ready = await client.get("/api/v1/health/ready")
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "healthy"


async def test_readiness_reports_missing_player_table(client, test_engine):
    async with test_engine.begin() as conn:
        await conn.run_sync(Player.__table__.drop)
    res = await client.get("/api/v1/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "player_table_missing"


async def test_long_name_patch_is_stored(client):
    created = await _create(client)
    res = await client.patch(f"{BASE}/{created['id']}", json={"name": "x" * 40})
    assert res.status_code == 200
    assert (await client.get(f"{BASE}/{created['id']}")).json()["name"] == "x" * 40
