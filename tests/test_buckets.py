from datetime import datetime


async def test_list_buckets_starts_empty(client, auth_headers):
    response = await client.get("/api/v1/buckets", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == []


async def test_bucket_cap_is_five(client, auth_headers, create_buckets):
    await create_buckets(5)

    response = await client.post("/api/v1/buckets", json={"name": "One too many"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["detail"] == "Maximum of 5 buckets allowed"

    listed = await client.get("/api/v1/buckets", headers=auth_headers)
    assert len(listed.json()) == 5


async def test_create_bucket_with_opening_balance(client, auth_headers):
    response = await client.post(
        "/api/v1/buckets",
        json={"name": "Savings", "balance": "125.50"},
        headers=auth_headers,
    )

    assert response.status_code == 201
    body = response.json()
    assert body["name"] == "Savings"
    assert body["balance"] == "125.50"
    assert body["allocated"] == "0.00"


async def test_update_balance(client, auth_headers, create_buckets):
    bucket, = await create_buckets(1)

    response = await client.patch(
        f"/api/v1/buckets/{bucket['id']}/balance",
        json={"new_balance": "-12.40"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.json()["balance"] == "-12.40"


async def test_buckets_are_private(client, make_user, headers_for, create_buckets):
    bucket, = await create_buckets(1)
    stranger = await make_user(google_id="google-stranger", email="stranger@example.com")
    headers = await headers_for(stranger)

    assert (await client.get(f"/api/v1/buckets/{bucket['id']}", headers=headers)).status_code == 404
    assert (await client.get("/api/v1/buckets", headers=headers)).json() == []


async def test_summary_reports_overspending(client, auth_headers, create_buckets):
    buckets = await create_buckets(5)
    target = buckets[0]
    now = datetime.utcnow().isoformat()

    income = await client.post(
        "/api/v1/transactions",
        json={"bucket_id": target["id"], "type": "INCOME", "amount": "100", "category": "Planned", "date": now},
        headers=auth_headers,
    )
    assert income.status_code == 201
    expense = await client.post(
        "/api/v1/transactions",
        json={"bucket_id": target["id"], "type": "EXPENSE", "amount": "30", "category": "Impulse", "date": now},
        headers=auth_headers,
    )
    assert expense.status_code == 201

    response = await client.get("/api/v1/buckets/summary", headers=auth_headers)
    assert response.status_code == 200
    overview = response.json()
    by_id = {b["id"]: b for b in overview["buckets"]}

    summary = by_id[target["id"]]
    assert summary["allocated"] == "20.00"
    assert summary["spent"] == "30.00"
    assert summary["remaining"] == "-10.00"
    assert summary["is_overspent"] is True
    assert summary["debt"] == "10.00"
    assert summary["percent_used"] == 150.0
    assert overview["total_debt"] == "10.00"

    untouched = by_id[buckets[1]["id"]]
    assert untouched["spent"] == "0.00"
    assert untouched["is_overspent"] is False
