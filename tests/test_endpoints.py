"""
HTTP API tests.

Requests go through the real application with the database dependency
pointed at the in-memory test engine. Every test requests ``db_session``
so the tables exist and are emptied afterwards.
"""

import uuid

import httpx
import pytest
from sqlalchemy.orm import Session

from adapters.nutrition_adapter import NutritionLookupAdapter
from api.dependencies import get_nutrition_adapter
from main import app
from test_fixtures import BIBIMBAP, CHICKEN_BREAST, FRIED_CHICKEN, KIMCHI_STEW, client

DAY = "2024-03-15"
NEXT_DAY = "2024-03-16"


def _add(attrs, day=DAY):
    r = client.post("/meals", params={"day": day}, json=attrs)
    assert r.status_code == 201, r.text
    return r.json()


def _meal_id(view, name):
    return next(m["meal_id"] for m in view["meals"] if m["name"] == name)


# =============================================================================
# HEALTH
# =============================================================================


def test_health_check():
    r = client.get("/health-check")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "MealLedger"}


def test_database_health(db_session: Session):
    r = client.get("/health-check/db")
    assert r.status_code == 200
    assert r.json()["database"] == "ok"


# =============================================================================
# MEALS
# =============================================================================


def test_add_meal_returns_day_view(db_session: Session):
    """
    Test POST /meals.

    Verifies:
    - 201 with the recomputed day view
    - Summary reflects every meal of the day
    - Goal, progress and status are included
    """
    _add(CHICKEN_BREAST)
    view = _add(BIBIMBAP)

    assert view["date"].startswith(DAY)
    assert [m["name"] for m in view["meals"]] == ["닭가슴살", "비빔밥"]
    summary = view["summary"]
    assert (
        summary["total_calories"], summary["total_carbs"], summary["total_protein"], summary["total_fat"]
    ) == (500, 30, 50, 15)
    assert view["goal"] == 1800
    assert view["progress"] == pytest.approx(500 / 1800)
    assert view["status"] == "under"


@pytest.mark.parametrize(
    "payload",
    [
        {**CHICKEN_BREAST, "calories": -1},
        {**CHICKEN_BREAST, "name": "  "},
        {"name": "닭가슴살"},
    ],
)
def test_add_meal_rejects_invalid_payload(db_session: Session, payload):
    r = client.post("/meals", params={"day": DAY}, json=payload)

    assert r.status_code == 422
    body = r.json()
    assert body["success"] is False
    assert body["error"]["code"] == "VALIDATION_ERROR"
    assert client.get("/meals", params={"day": DAY}).json()["meals"] == []


def test_get_empty_day(db_session: Session):
    r = client.get("/meals", params={"day": DAY})

    assert r.status_code == 200
    view = r.json()
    assert view["meals"] == []
    assert view["summary"]["total_calories"] == 0
    assert view["progress"] == 0


def test_update_meal_moves_between_days(db_session: Session):
    meal_id = _meal_id(_add(CHICKEN_BREAST), "닭가슴살")

    r = client.patch(f"/meals/{meal_id}", json={"calories": 250, "eaten_at": f"{NEXT_DAY}T09:30:00"})

    assert r.status_code == 200
    view = r.json()
    assert view["date"].startswith(NEXT_DAY)
    assert view["summary"]["total_calories"] == 250
    assert client.get("/meals", params={"day": DAY}).json()["meals"] == []


def test_update_missing_meal_is_404(db_session: Session):
    r = client.patch(f"/meals/{uuid.uuid4()}", json={"calories": 100})

    assert r.status_code == 404
    assert r.json()["error"]["code"] == "NOT_FOUND"


def test_delete_meal_returns_updated_day(db_session: Session):
    _add(CHICKEN_BREAST)
    meal_id = _meal_id(_add(BIBIMBAP), "비빔밥")

    r = client.delete(f"/meals/{meal_id}")

    assert r.status_code == 200
    assert [m["name"] for m in r.json()["meals"]] == ["닭가슴살"]
    assert client.get(f"/meals/{meal_id}").status_code == 404


def test_bulk_delete(db_session: Session):
    first = _meal_id(_add(CHICKEN_BREAST), "닭가슴살")
    second = _meal_id(_add(KIMCHI_STEW, NEXT_DAY), "김치찌개")

    r = client.post("/meals/bulk-delete", json={"ids": [first, second]})

    assert r.status_code == 200
    assert r.json() == {"deleted": 2}
    assert client.get("/meals/all").json() == []


def test_bulk_delete_with_unknown_id_deletes_nothing(db_session: Session):
    first = _meal_id(_add(CHICKEN_BREAST), "닭가슴살")

    r = client.post("/meals/bulk-delete", json={"ids": [first, str(uuid.uuid4())]})

    assert r.status_code == 404
    assert len(client.get("/meals/all").json()) == 1


def test_search_meals(db_session: Session):
    _add(CHICKEN_BREAST)
    _add(BIBIMBAP)
    _add(FRIED_CHICKEN, NEXT_DAY)

    r = client.get("/meals/search", params={"q": "닭"})

    assert r.status_code == 200
    assert [m["name"] for m in r.json()] == ["닭가슴살"]
    assert len(client.get("/meals/search", params={"q": ""}).json()) == 3


def test_copy_meal_to_today(db_session: Session):
    meal_id = _meal_id(_add(KIMCHI_STEW), "김치찌개")

    r = client.post(f"/meals/{meal_id}/copy-to-today")

    assert r.status_code == 201
    copy = r.json()
    assert copy["meal_id"] != meal_id
    assert copy["name"] == "김치찌개"
    assert copy["is_favorite"] is False


# =============================================================================
# FAVORITES
# =============================================================================


def test_favorite_lifecycle(db_session: Session):
    meal_id = _meal_id(_add(KIMCHI_STEW), "김치찌개")

    assert client.post(f"/favorites/{meal_id}").json()["is_favorite"] is True
    assert [m["meal_id"] for m in client.get("/favorites").json()] == [meal_id]

    r = client.post(f"/favorites/{meal_id}/add", params={"day": NEXT_DAY})
    assert r.status_code == 201
    assert r.json()["eaten_at"].startswith(NEXT_DAY)
    assert r.json()["is_favorite"] is False

    assert client.post(f"/favorites/{meal_id}/toggle").json()["is_favorite"] is False
    assert client.get("/favorites").json() == []


def test_bulk_remove_favorites_unknown_id(db_session: Session):
    meal_id = _meal_id(_add(KIMCHI_STEW), "김치찌개")
    client.post(f"/favorites/{meal_id}")

    r = client.post("/favorites/bulk-remove", json={"ids": [meal_id, str(uuid.uuid4())]})

    assert r.status_code == 404
    assert len(client.get("/favorites").json()) == 1

    r = client.post("/favorites/bulk-remove", json={"ids": [meal_id]})
    assert r.status_code == 200
    assert client.get("/favorites").json() == []


# =============================================================================
# ANALYTICS & GOAL
# =============================================================================


def test_analytics_endpoints(db_session: Session):
    _add(CHICKEN_BREAST)
    _add(BIBIMBAP)
    _add(FRIED_CHICKEN, NEXT_DAY)

    summary = client.get("/analytics/summary", params={"day": DAY}).json()
    assert summary["total_calories"] == 500

    window = client.get("/analytics/window", params={"anchor": NEXT_DAY, "days": 3}).json()
    assert [s["total_calories"] for s in window] == [0, 500, 900]

    macros = client.get("/analytics/macros", params={"day": DAY}).json()
    assert (macros["carbs"], macros["protein"], macros["fat"]) == (30, 50, 15)

    report = client.get("/analytics/range", params={"anchor": NEXT_DAY, "days": 2}).json()
    assert report["totals"]["calories"] == 1400
    assert report["progress"] == pytest.approx(1400 / 3600)

    month = client.get("/analytics/month", params={"anchor": DAY}).json()
    assert len(month) == 31


def test_window_rejects_zero_days(db_session: Session):
    r = client.get("/analytics/window", params={"anchor": DAY, "days": 0})

    assert r.status_code == 422


def test_goal_endpoints(db_session: Session):
    assert client.get("/goal").json() == {"daily_calorie_goal": 1800, "preset": "lose_weight"}

    assert client.put("/goal", json={"daily_calorie_goal": -5}).json()["daily_calorie_goal"] == 1800

    r = client.put("/goal", json={"daily_calorie_goal": 450})
    assert r.json() == {"daily_calorie_goal": 450, "preset": None}

    _add(KIMCHI_STEW)
    progress = client.get("/analytics/progress", params={"day": DAY}).json()
    assert progress["progress"] == pytest.approx(1.0)
    assert progress["status"] == "on-target"

    r = client.put("/goal/preset/maintain")
    assert r.json() == {"daily_calorie_goal": 2200, "preset": "maintain"}

    assert client.put("/goal/preset/unknown").status_code == 422


# =============================================================================
# NUTRITION LOOKUP
# =============================================================================


def _override_lookup(handler, api_key="sk-test"):
    async def override():
        client_ = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        try:
            yield NutritionLookupAdapter(
                api_key=api_key, base_url="https://llm.test/v1", client=client_
            )
        finally:
            await client_.aclose()

    app.dependency_overrides[get_nutrition_adapter] = override


@pytest.fixture
def restore_lookup():
    yield
    app.dependency_overrides.pop(get_nutrition_adapter, None)


def test_nutrition_lookup(restore_lookup):
    reply = {"choices": [{"message": {"content": "450, 20, 25, 28"}}]}
    _override_lookup(lambda request: httpx.Response(200, json=reply))

    r = client.post("/nutrition/lookup", json={"food_name": "김치찌개"})

    assert r.status_code == 200
    assert r.json() == {"calories": 450, "carbs": 20, "protein": 25, "fat": 28}


def test_nutrition_lookup_unknown_food_is_success(restore_lookup):
    reply = {"choices": [{"message": {"content": "0, 0, 0, 0"}}]}
    _override_lookup(lambda request: httpx.Response(200, json=reply))

    r = client.post("/nutrition/lookup", json={"food_name": "???"})

    assert r.status_code == 200
    assert r.json() == {"calories": 0, "carbs": 0, "protein": 0, "fat": 0}


def test_nutrition_lookup_without_key(restore_lookup):
    _override_lookup(lambda request: httpx.Response(500), api_key="")

    r = client.post("/nutrition/lookup", json={"food_name": "김치찌개"})

    assert r.status_code == 503
    assert r.json()["error"]["code"] == "MISSING_CREDENTIAL"


def test_nutrition_lookup_upstream_error(restore_lookup):
    _override_lookup(lambda request: httpx.Response(500))

    r = client.post("/nutrition/lookup", json={"food_name": "김치찌개"})

    assert r.status_code == 502
    assert r.json()["error"]["code"] == "INVALID_RESPONSE"
