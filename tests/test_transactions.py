import uuid
from datetime import datetime, timedelta


def tx_payload(bucket_id, tx_type="EXPENSE", amount="10.00", **extra):
    payload = {
        "bucket_id": bucket_id,
        "type": tx_type,
        "amount": amount,
        "category": "Planned",
        "date": datetime.utcnow().isoformat(),
    }
    payload.update(extra)
    return payload


async def test_income_fans_out_to_every_bucket(client, auth_headers, create_buckets):
    buckets = await create_buckets(5)

    response = await client.post(
        "/api/v1/transactions",
        json=tx_payload(buckets[2]["id"], "INCOME", "100"),
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["amount"] == "100.00"

    listed = (await client.get("/api/v1/buckets", headers=auth_headers)).json()
    assert [b["allocated"] for b in listed] == ["20.00"] * 5
    assert [b["balance"] for b in listed] == ["0.00"] * 5


async def test_income_with_uneven_split(client, auth_headers, create_buckets):
    buckets = await create_buckets(3)

    await client.post("/api/v1/transactions", json=tx_payload(buckets[0]["id"], "INCOME", "100"), headers=auth_headers)

    listed = (await client.get("/api/v1/buckets", headers=auth_headers)).json()
    assert [b["allocated"] for b in listed] == ["33.33"] * 3


async def test_expense_debits_only_its_bucket(client, auth_headers, create_buckets):
    buckets = await create_buckets(2)

    response = await client.post(
        "/api/v1/transactions",
        json=tx_payload(buckets[0]["id"], "EXPENSE", "30", category="Unplanned", description="Groceries"),
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["description"] == "Groceries"

    first = (await client.get(f"/api/v1/buckets/{buckets[0]['id']}", headers=auth_headers)).json()
    second = (await client.get(f"/api/v1/buckets/{buckets[1]['id']}", headers=auth_headers)).json()
    assert first["balance"] == "-30.00"
    assert second["balance"] == "0.00"


async def test_amount_must_be_positive(client, auth_headers, create_buckets):
    bucket, = await create_buckets(1)

    response = await client.post("/api/v1/transactions", json=tx_payload(bucket["id"], amount="0"), headers=auth_headers)

    assert response.status_code == 422


async def test_unknown_bucket_is_404(client, auth_headers):
    response = await client.post(
        "/api/v1/transactions",
        json=tx_payload(str(uuid.uuid4())),
        headers=auth_headers,
    )

    assert response.status_code == 404
    assert response.json()["detail"] == "Bucket not found"


async def test_list_get_and_delete(client, auth_headers, create_buckets):
    bucket, = await create_buckets(1)
    created = (await client.post("/api/v1/transactions", json=tx_payload(bucket["id"]), headers=auth_headers)).json()

    listed = await client.get("/api/v1/transactions", headers=auth_headers)
    assert [t["id"] for t in listed.json()] == [created["id"]]

    fetched = await client.get(f"/api/v1/transactions/{created['id']}", headers=auth_headers)
    assert fetched.status_code == 200
    assert fetched.json()["category"] == "Planned"

    deleted = await client.delete(f"/api/v1/transactions/{created['id']}", headers=auth_headers)
    assert deleted.status_code == 204
    assert (await client.get(f"/api/v1/transactions/{created['id']}", headers=auth_headers)).status_code == 404


async def test_offset_dates_are_stored_as_utc(client, auth_headers, create_buckets):
    bucket, = await create_buckets(1)
    today = datetime.utcnow().date()
    yesterday = today - timedelta(days=1)
    # 23:30 at UTC-5 yesterday is 04:30 UTC today
    local_time = f"{yesterday.isoformat()}T23:30:00-05:00"

    response = await client.post(
        "/api/v1/transactions",
        json=tx_payload(bucket["id"], "INCOME", "10", date=local_time),
        headers=auth_headers,
    )
    assert response.status_code == 201
    assert response.json()["date"] == f"{today.isoformat()}T04:30:00"

    rows = (await client.get("/api/v1/analytics/financial-progress", params={"days": 2}, headers=auth_headers)).json()
    money_in = {r["date"]: r["money_in"] for r in rows}
    assert money_in[today.isoformat()] == 10.0
    assert money_in[yesterday.isoformat()] == 0.0


async def test_zulu_dates_are_accepted(client, auth_headers, create_buckets):
    bucket, = await create_buckets(1)

    response = await client.post(
        "/api/v1/transactions",
        json=tx_payload(bucket["id"], date="2026-03-01T12:00:00.000Z"),
        headers=auth_headers,
    )

    assert response.status_code == 201
    assert response.json()["date"] == "2026-03-01T12:00:00"
