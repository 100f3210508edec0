BASE = "/api/v1/groups"


def member_ids(group):
    return [m["id"] for m in group["members"]]


def test_create_group_makes_caller_owner(client):
    res = client.post(f"{BASE}/", json={"name": "  Flatmates ", "emoji": "🏠"})

    assert res.status_code == 201
    body = res.json()
    assert body["name"] == "Flatmates"
    assert body["emoji"] == "🏠"
    assert body["owner_id"] == "demo-user"
    assert [(m["name"], m["role"]) for m in body["members"]] == [("Demo User", "owner")]
    assert body["expenses"] == []


def test_blank_group_name_is_rejected(client):
    assert client.post(f"{BASE}/", json={"name": ""}).status_code == 422
    assert client.post(f"{BASE}/", json={"name": "   "}).status_code == 400


def test_list_groups_summary(client, group):
    res = client.get(f"{BASE}/")

    assert res.status_code == 200
    assert res.json() == [{
        "id": group["id"],
        "name": "Goa Trip",
        "description": "",
        "emoji": "👥",
        "member_count": 3,
        "total_expenses": 0,
        "is_owner": True,
    }]


def test_dinner_settles_in_two_transfers(client, group):
    owner, sam, jordan = member_ids(group)

    res = client.post(f"{BASE}/{group['id']}/expenses", json={
        "amount": 1200,
        "category": "Food",
        "description": "Dinner",
    })
    assert res.status_code == 201
    expense = res.json()
    assert expense["paid_by"] == owner
    assert expense["split_type"] == "equal"
    assert [s["amount"] for s in expense["shares"]] == [400.0, 400.0, 400.0]

    balances = client.get(f"{BASE}/{group['id']}/balances").json()
    assert [(b["member_id"], b["balance"]) for b in balances] == [
        (owner, 800.0), (sam, -400.0), (jordan, -400.0),
    ]
    assert balances[1]["formatted"] == "-₹400.00"

    body = client.get(f"{BASE}/{group['id']}/settlements").json()
    assert [(s["from_name"], s["to_name"], s["amount"]) for s in body["settlements"]] == [
        ("Sam", "Demo User", 400.0),
        ("Jordan", "Demo User", 400.0),
    ]
    assert body["settlements"][0]["formatted"] == "₹400.00"
    assert body["is_settled"] is False


def test_exact_and_percentage_splits(client, group):
    owner, sam, jordan = member_ids(group)
    url = f"{BASE}/{group['id']}/expenses"

    exact = client.post(url, json={
        "amount": 900, "category": "Stay", "paid_by": sam, "split_type": "exact",
        "shares": [{"member_id": owner, "amount": 300}, {"member_id": sam, "amount": 300},
                   {"member_id": jordan, "amount": 300}],
    })
    assert exact.status_code == 201

    pct = client.post(url, json={
        "amount": 1000, "category": "Fuel", "paid_by": jordan, "split_type": "percentage",
        "shares": [{"member_id": owner, "percentage": 50}, {"member_id": sam, "percentage": 30},
                   {"member_id": jordan, "percentage": 20}],
    })
    assert pct.status_code == 201
    assert [s["amount"] for s in pct.json()["shares"]] == [500.0, 300.0, 200.0]

    balances = {b["member_id"]: b["balance"] for b in client.get(f"{BASE}/{group['id']}/balances").json()}
    assert balances == {owner: -800.0, sam: 300.0, jordan: 500.0}
    assert sum(balances.values()) == 0

    expenses = client.get(url).json()
    assert [e["category"] for e in expenses] == ["Stay", "Fuel"]


def test_equal_split_between_listed_members(client, group):
    owner, sam, _ = member_ids(group)

    res = client.post(f"{BASE}/{group['id']}/expenses", json={
        "amount": 100, "category": "Snacks",
        "shares": [{"member_id": owner}, {"member_id": sam}],
    })

    assert res.status_code == 201
    assert [(s["member_id"], s["amount"]) for s in res.json()["shares"]] == [(owner, 50.0), (sam, 50.0)]


def test_expense_validation(client, group):
    owner, sam, jordan = member_ids(group)
    url = f"{BASE}/{group['id']}/expenses"

    mismatch = client.post(url, json={
        "amount": 1200, "category": "Food", "split_type": "exact",
        "shares": [{"member_id": owner, "amount": 500}, {"member_id": sam, "amount": 500}],
    })
    assert mismatch.status_code == 400
    assert "must equal expense amount" in mismatch.json()["detail"]

    duplicate = client.post(url, json={
        "amount": 100, "category": "Food",
        "shares": [{"member_id": sam}, {"member_id": sam}],
    })
    assert duplicate.status_code == 400

    unknown = client.post(url, json={
        "amount": 100, "category": "Food", "shares": [{"member_id": "mem-nope"}],
    })
    assert unknown.status_code == 400

    bad_payer = client.post(url, json={"amount": 100, "category": "Food", "paid_by": "mem-nope"})
    assert bad_payer.status_code == 400

    zero = client.post(url, json={"amount": 0, "category": "Food"})
    assert zero.status_code == 400

    bad_pct = client.post(url, json={
        "amount": 100, "category": "Food", "split_type": "percentage",
        "shares": [{"member_id": owner, "percentage": 60}, {"member_id": jordan, "percentage": 30}],
    })
    assert bad_pct.status_code == 400

    assert client.get(url).json() == []


def test_within_a_cent_is_accepted(client, group):
    owner, sam, _ = member_ids(group)

    res = client.post(f"{BASE}/{group['id']}/expenses", json={
        "amount": 100, "category": "Tea", "split_type": "exact",
        "shares": [{"member_id": owner, "amount": "50.00"}, {"member_id": sam, "amount": "49.99"}],
    })

    assert res.status_code == 201


def test_unknown_group_is_404(client):
    assert client.get(f"{BASE}/grp-missing").status_code == 404
    assert client.get(f"{BASE}/grp-missing/settlements").status_code == 404


def test_outsiders_are_forbidden(client, group, auth_headers):
    stranger = auth_headers()

    res = client.get(f"{BASE}/{group['id']}", headers=stranger)
    assert res.status_code == 403
    assert res.json()["detail"] == "You are not a member of this group"

    assert client.get(f"{BASE}/{group['id']}/balances", headers=stranger).status_code == 403
    assert client.get(f"{BASE}/", headers=stranger).json() == []


def test_invited_member_can_read_but_not_manage(client, group, auth_headers):
    sam = auth_headers(user_id="sam-1", name="Sam", email="Sam@Example.com")

    assert client.get(f"{BASE}/{group['id']}", headers=sam).status_code == 200
    assert [g["is_owner"] for g in client.get(f"{BASE}/", headers=sam).json()] == [False]

    res = client.post(f"{BASE}/{group['id']}/expenses", headers=sam, json={"amount": 30, "category": "Chai"})
    assert res.status_code == 201
    assert res.json()["paid_by"] == group["members"][1]["id"]

    add = client.post(f"{BASE}/{group['id']}/members", headers=sam, json={"email": "x@example.com"})
    assert add.status_code == 403
    assert add.json()["detail"] == "Only group owner can add members"

    assert client.delete(f"{BASE}/{group['id']}", headers=sam).status_code == 403


def test_duplicate_member_email(client, group):
    res = client.post(f"{BASE}/{group['id']}/members", json={"email": "SAM@example.com"})

    assert res.status_code == 400
    assert res.json()["detail"] == "User is already a member"


def test_member_name_defaults_to_email(client, group):
    res = client.post(f"{BASE}/{group['id']}/members", json={"email": "riya@example.com"})

    assert res.status_code == 201
    assert res.json()["name"] == "riya@example.com"
    assert res.json()["role"] == "member"


def test_delete_group_cascades(client, group):
    client.post(f"{BASE}/{group['id']}/expenses", json={"amount": 90, "category": "Taxi"})

    res = client.delete(f"{BASE}/{group['id']}")

    assert res.status_code == 200
    assert client.get(f"{BASE}/{group['id']}").status_code == 404
    metrics = client.get("/api/v1/system/metrics").json()
    assert metrics["groups"] == 0
    assert metrics["group_expenses"] == 0


def test_small_balances_are_not_reported_as_settled(client, group):
    empty = client.get(f"{BASE}/{group['id']}/settlements").json()
    assert empty["settlements"] == []
    assert empty["is_settled"] is True

    client.post(f"{BASE}/{group['id']}/expenses", json={"amount": "0.03", "category": "Candy"})

    body = client.get(f"{BASE}/{group['id']}/settlements").json()
    assert [(s["from_name"], s["amount"]) for s in body["settlements"]] == [("Sam", 0.01), ("Jordan", 0.01)]
    assert body["is_settled"] is False


def test_group_listing_only_returns_visible_groups(client, group, auth_headers):
    other = auth_headers()
    theirs = client.post(f"{BASE}/", headers=other, json={"name": "Office Lunch"}).json()
    invited = auth_headers(user_id="jordan-1", name="Jordan", email="jordan@example.com")

    assert [g["id"] for g in client.get(f"{BASE}/").json()] == [group["id"]]
    assert [g["id"] for g in client.get(f"{BASE}/", headers=other).json()] == [theirs["id"]]
    assert [g["id"] for g in client.get(f"{BASE}/", headers=invited).json()] == [group["id"]]
