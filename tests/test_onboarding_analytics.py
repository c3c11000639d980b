from datetime import datetime

from quintave import main
from quintave.crud import bucket as bucket_crud
from quintave.crud.bucket import DEFAULT_BUCKETS


async def test_onboarding_seeds_default_buckets(client, auth_headers):
    response = await client.post("/api/v1/onboarding/complete", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert sorted(b["name"] for b in body["buckets"]) == sorted(DEFAULT_BUCKETS)

    me = (await client.get("/api/v1/auth/me", headers=auth_headers)).json()
    assert me["has_completed_onboarding"] is True


async def test_onboarding_twice_does_not_duplicate(client, auth_headers):
    await client.post("/api/v1/onboarding/complete", headers=auth_headers)
    response = await client.post("/api/v1/onboarding/complete", headers=auth_headers)

    assert response.status_code == 200
    assert len(response.json()["buckets"]) == 5


async def test_onboarding_respects_existing_buckets(client, auth_headers, create_buckets):
    await create_buckets(2)

    response = await client.post("/api/v1/onboarding/complete", headers=auth_headers)

    assert len(response.json()["buckets"]) == 5


async def test_onboarding_works_after_trial(client, expired_user, headers_for):
    response = await client.post("/api/v1/onboarding/complete", headers=await headers_for(expired_user))
    assert response.status_code == 200


async def test_financial_progress_window(client, auth_headers, create_buckets):
    bucket, = await create_buckets(1)
    now = datetime.utcnow().isoformat()
    for tx_type, amount in (("INCOME", "100"), ("EXPENSE", "40")):
        await client.post(
            "/api/v1/transactions",
            json={"bucket_id": bucket["id"], "type": tx_type, "amount": amount, "category": "Planned", "date": now},
            headers=auth_headers,
        )

    response = await client.get("/api/v1/analytics/financial-progress", params={"days": 7}, headers=auth_headers)

    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 8
    assert rows[-1]["money_in"] == 100.0
    assert rows[-1]["money_out"] == 40.0
    assert rows[-1]["net"] == 60.0


async def test_financial_progress_defaults_to_thirty_days(client, auth_headers):
    response = await client.get("/api/v1/analytics/financial-progress", headers=auth_headers)
    assert len(response.json()) == 31


async def test_financial_progress_rejects_bad_window(client, auth_headers):
    response = await client.get("/api/v1/analytics/financial-progress", params={"days": 0}, headers=auth_headers)
    assert response.status_code == 422


async def test_root_and_health(client):
    assert (await client.get("/")).json()["version"] == "1.0.0"
    assert (await client.get("/health")).status_code == 200


async def test_onboarding_counts_buckets_under_owner_lock(client, user, auth_headers, create_buckets, monkeypatch):
    await create_buckets(4)
    calls = []
    original = bucket_crud._count_buckets_locked

    async def counting(user_id, db):
        calls.append(user_id)
        return await original(user_id, db)

    monkeypatch.setattr(bucket_crud, "_count_buckets_locked", counting)

    response = await client.post("/api/v1/onboarding/complete", headers=auth_headers)

    assert response.status_code == 200
    assert calls == [user.id]
    assert len(response.json()["buckets"]) == 5


async def test_lifespan_creates_tables(monkeypatch):
    calls = []

    async def fake_create():
        calls.append(True)

    monkeypatch.setattr(main, "create_db_and_tables", fake_create)

    async with main.app.router.lifespan_context(main.app):
        pass

    assert calls == [True]
