import pytest

BASE = "/api/v1/splits"


@pytest.fixture
def pizza(client):
    res = client.post(f"{BASE}/", json={
        "title": "Pizza night",
        "total_amount": 900,
        "participants": [
            {"id": "me", "name": "Me", "share_amount": 300, "paid_amount": 300, "role": "payer", "status": "paid"},
            {"id": "a", "name": "Asha", "share_amount": 300},
            {"id": "b", "name": "Ben", "share_amount": 300},
        ],
    })
    assert res.status_code == 201
    return res.json()


def test_create_split(pizza):
    assert pizza["id"].startswith("split-")
    assert pizza["remaining"] == 600.0
    assert pizza["read"] is False
    assert [p["id"] for p in pizza["participants"]] == ["me", "a", "b"]
    assert pizza["participants"][1]["status"] == "pending"


def test_create_split_validation(client):
    assert client.post(f"{BASE}/", json={"title": "x", "total_amount": 10, "participants": []}).status_code == 422
    assert client.post(f"{BASE}/", json={
        "title": "x", "total_amount": 0, "participants": [{"name": "A", "share_amount": 0}],
    }).status_code == 422
    assert client.post(f"{BASE}/", json={
        "title": "   ", "total_amount": 10, "participants": [{"name": "A", "share_amount": 10}],
    }).status_code == 400


def test_participant_ids_are_scoped_to_their_split(client, pizza):
    res = client.post(f"{BASE}/", json={
        "title": "Movie", "total_amount": 400,
        "participants": [{"id": "a", "name": "Asha", "share_amount": 400}],
    })

    assert res.status_code == 201


def test_pay_defaults_to_outstanding_share(client, pizza):
    res = client.put(f"{BASE}/{pizza['id']}/pay", json={"participant_id": "a"})

    assert res.status_code == 200
    body = res.json()
    asha = body["split"]["participants"][1]
    assert asha["paid_amount"] == 300.0
    assert asha["status"] == "paid"
    assert asha["paid_at"] is not None
    assert body["remaining"] == 300.0


def test_partial_then_capped_payment(client, pizza):
    partial = client.put(f"{BASE}/{pizza['id']}/pay", json={"participant_id": "b", "amount": 100}).json()
    assert partial["split"]["participants"][2]["status"] == "partial"
    assert partial["remaining"] == 500.0

    capped = client.put(f"{BASE}/{pizza['id']}/pay", json={"participant_id": "b", "amount": 5000}).json()
    assert capped["split"]["participants"][2]["paid_amount"] == 300.0
    assert capped["split"]["participants"][2]["status"] == "paid"
    assert capped["remaining"] == 300.0


def test_pay_unknown_participant_or_split(client, pizza):
    assert client.put(f"{BASE}/{pizza['id']}/pay", json={"participant_id": "zz"}).status_code == 404
    assert client.put(f"{BASE}/split-missing/pay", json={"participant_id": "a"}).status_code == 404
    assert client.put(f"{BASE}/{pizza['id']}/pay", json={"participant_id": "a", "amount": 0}).status_code == 422


def test_status_filter_and_search(client, pizza):
    coffee = client.post(f"{BASE}/", json={
        "title": "Coffee", "total_amount": 200,
        "participants": [{"name": "Chirag", "share_amount": 200, "paid_amount": 200, "status": "paid"}],
    }).json()
    assert coffee["remaining"] == 0.0

    def ids(**params):
        return [s["id"] for s in client.get(f"{BASE}/", params=params).json()]

    assert ids() == [pizza["id"]]
    assert ids(status="settled") == [coffee["id"]]
    assert ids(status="all") == [pizza["id"], coffee["id"]]
    assert ids(status="all", search="PIZZA") == [pizza["id"]]
    assert ids(status="all", search="chir") == [coffee["id"]]
    assert client.get(f"{BASE}/", params={"status": "bogus"}).status_code == 422


def test_settling_everyone_moves_split_to_settled(client, pizza):
    for pid in ("a", "b"):
        client.put(f"{BASE}/{pizza['id']}/pay", json={"participant_id": pid})

    assert client.get(f"{BASE}/").json() == []
    assert client.get(f"{BASE}/{pizza['id']}").json()["remaining"] == 0.0


def test_mark_read(client, pizza):
    res = client.put(f"{BASE}/{pizza['id']}/read", json={"read": True})

    assert res.status_code == 200
    assert res.json()["read"] is True


def test_splits_are_private(client, pizza, auth_headers):
    other = auth_headers()

    assert client.get(f"{BASE}/{pizza['id']}", headers=other).status_code == 404
    assert client.get(f"{BASE}/", params={"status": "all"}, headers=other).json() == []
