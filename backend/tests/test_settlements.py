from splitledger.models import Expense


def _create(client, amount, payer, participants, description="Expense"):
    res = client.post("/api/expenses", json={
        "description": description, "amount": amount,
        "payer": payer, "participants": participants,
    })
    assert res.status_code == 200
    return res.json()


def test_settlements_empty(client):
    res = client.get("/api/settlements")
    assert res.status_code == 200
    assert res.json() == {"balances": [], "settlements": []}


def test_settlements_three_way_split(client):
    _create(client, 90.0, "A", ["A", "B", "C"])
    res = client.get("/api/settlements")
    assert res.status_code == 200
    data = res.json()
    assert [(b["person"], b["net"]) for b in data["balances"]] == [("A", 60.0), ("B", -30.0), ("C", -30.0)]
    assert data["balances"][0]["owed_by"] == {"B": 30.0, "C": 30.0}
    assert data["balances"][1]["owes"] == {"A": 30.0}
    assert data["settlements"] == [
        {"debtor": "B", "creditor": "A", "amount": 30.0},
        {"debtor": "C", "creditor": "A", "amount": 30.0},
    ]


def test_settlements_round_to_cents(client):
    _create(client, 100.0, "A", ["A", "B", "C"])
    data = client.get("/api/settlements").json()
    assert data["balances"][0]["net"] == 66.67
    assert [s["amount"] for s in data["settlements"]] == [33.33, 33.33]


def test_deleting_expense_updates_settlements(client):
    _create(client, 100.0, "A", ["A", "B"])
    second = _create(client, 60.0, "B", ["A", "B"])
    data = client.get("/api/settlements").json()
    assert data["settlements"] == [{"debtor": "B", "creditor": "A", "amount": 20.0}]

    client.delete(f"/api/expenses/{second['id']}")
    data = client.get("/api/settlements").json()
    assert data["settlements"] == [{"debtor": "B", "creditor": "A", "amount": 50.0}]


def test_report(client):
    _create(client, 60.0, "A", ["A", "B"], description="Lunch")
    _create(client, 40.0, "B", ["A", "B", "C"], description="Taxi")
    res = client.get("/api/settlements/report")
    assert res.status_code == 200
    data = res.json()
    assert data["total_amount"] == 100.0
    assert data["expense_count"] == 2
    assert data["average_amount"] == 50.0
    assert data["largest_amount"] == 60.0
    assert data["smallest_amount"] == 40.0
    assert data["person_count"] == 3
    assert data["spending_by_person"] == [
        {"person": "A", "paid": 60.0},
        {"person": "B", "paid": 40.0},
    ]
    assert data["generated_at"]
    assert len(data["balances"]) == 3
    assert data["settlements"]


def test_root(client):
    res = client.get("/")
    assert res.status_code == 200
    assert res.json()["message"] == "Split Ledger API"


def test_tiny_expense_has_no_zero_transfers(client):
    _create(client, 0.01, "A", ["A", "B", "C"])
    data = client.get("/api/settlements").json()
    # Every share is a third of a cent, so nobody owes a whole cent.
    assert data["settlements"] == []


def test_cent_amounts_settle_in_whole_cents(client):
    _create(client, 0.05, "A", ["A", "B", "C"])
    data = client.get("/api/settlements").json()
    assert data["settlements"] == [
        {"debtor": "B", "creditor": "A", "amount": 0.02},
        {"debtor": "C", "creditor": "A", "amount": 0.01},
    ]


def test_malformed_stored_expense_reports_400(client, db_session):
    db_session.add(Expense(description="Broken", amount=10.0, payer="A", participants=[]))
    db_session.commit()
    res = client.get("/api/settlements")
    assert res.status_code == 400
    assert "at least one participant" in res.json()["detail"]
    assert client.get("/api/settlements/report").status_code == 400
