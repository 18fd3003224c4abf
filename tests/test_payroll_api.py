"""Period summary, flagged activity, red flags and visibility over the HTTP API.

The client fixture pins "now" to Wednesday 2025-01-15 12:00 America/New_York,
so ``this`` is 2025-01-13..19, ``last`` is 2025-01-06..12 and ``lastPayPeriod``
is 2024-12-30..2025-01-12.
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

ET = ZoneInfo("America/New_York")


def _at(month, day, hour, minute=0, year=2025):
    return datetime(year, month, day, hour, minute, tzinfo=ET)


@pytest.fixture
def staff(seed):
    alice = seed.employee("Alice", "Archer")
    bob = seed.employee("Bob")
    carol = seed.employee("Carol", "Cruz")
    tester = seed.employee("Test", "Account")
    dave = seed.employee("Dave", active=False)
    erin = seed.employee("Erin")

    a_bi = seed.rate(alice.id, 15.0, schedule="Biweekly", tax="W-2")
    a_wk = seed.rate(alice.id, 20.0, schedule="Weekly", tax="1099")
    b_wk = seed.rate(bob.id, 18.0, schedule="Weekly", tax="1099")
    c_none = seed.rate(carol.id, 12.0, schedule="None", tax="None")
    seed.rate(tester.id, 10.0, schedule="Weekly", tax="None")
    seed.rate(erin.id, 10.0, schedule="Weekly", tax="None")

    # This week: Alice 5 x 9h = 45h.
    for day in range(13, 18):
        seed.shift(alice.id, _at(1, day, 8), _at(1, day, 17))
    # Bob: a 3-minute blip and a 4h shift.
    seed.shift(bob.id, _at(1, 14, 10), _at(1, 14, 10, 3))
    seed.shift(bob.id, _at(1, 14, 11), _at(1, 14, 15))
    # Carol: closed by the terminal at 18:30, then still clocked in.
    seed.shift(carol.id, _at(1, 13, 9), _at(1, 13, 18, 30))
    seed.punch(carol.id, "in", _at(1, 15, 8))
    # Excluded people.
    seed.shift(tester.id, _at(1, 13, 6), _at(1, 13, 21))
    seed.shift(dave.id, _at(1, 13, 9), _at(1, 13, 17))

    return {
        "alice": alice.id, "bob": bob.id, "carol": carol.id, "erin": erin.id,
        "a_bi": a_bi.id, "a_wk": a_wk.id, "b_wk": b_wk.id, "c_none": c_none.id,
    }


def _commit(client, employee_id, arrangement_id, hours, rate, gross, *,
            start="2025-01-06", end="2025-01-13", method="cash"):
    resp = client.post("/ledger/payments", json={
        "employee_id": employee_id,
        "arrangement_id": arrangement_id,
        "pay_period_start": start,
        "pay_period_end": end,
        "hours_worked": hours,
        "hourly_rate": rate,
        "gross_amount": gross,
        "payment_method": method,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_window_endpoint(client):
    resp = client.get("/payroll/window", params={"period": "lastPayPeriod"})
    assert resp.status_code == 200
    assert resp.json() == {
        "selection": "lastPayPeriod",
        "start": "2024-12-30",
        "end": "2025-01-13",
        "display_end": "2025-01-12",
    }


def test_unknown_period_is_rejected(client):
    assert client.get("/payroll", params={"period": "nextWeek"}).status_code == 422


def test_period_summary_for_this_week(client, staff):
    resp = client.get("/payroll", params={"period": "this"})
    assert resp.status_code == 200
    data = resp.json()

    assert [e["name"] for e in data["employees"]] == ["Alice Archer", "Bob", "Carol Cruz"]

    alice = data["employees"][0]
    assert alice["total_hours"] == pytest.approx(45)
    assert alice["status"] == "unpaid"
    allocs = {a["arrangement_id"]: a for a in alice["allocations"]}
    assert allocs[staff["a_bi"]]["hours"] == pytest.approx(40)
    assert allocs[staff["a_bi"]]["amount"] == pytest.approx(600)
    assert allocs[staff["a_wk"]]["hours"] == pytest.approx(5)
    assert allocs[staff["a_wk"]]["amount"] == pytest.approx(100)
    assert alice["total_pay"] == pytest.approx(700)
    # The week is still running, so nothing is offered for settlement yet.
    assert alice["quick_pay"] == []

    carol = data["employees"][2]
    assert carol["has_incomplete_shifts"] is True
    assert carol["total_hours"] == pytest.approx(9.5)
    assert [s["flags"]["is_auto_clock_out"] for s in carol["worked_shifts"]] == [True, False]

    assert data["total_hours"] == pytest.approx(45 + 4.05 + 9.5)
    assert data["total_payroll"] == pytest.approx(700 + 72.9 + 114)
    assert data["paid_count"] == 0


def test_shift_display_fields(client, staff):
    data = client.get("/payroll").json()
    first = data["employees"][0]["worked_shifts"][0]
    assert first["date"] == "2025-01-13"
    assert first["day_name"] == "Monday"
    assert first["clock_in"] == "8:00 AM"
    assert first["clock_out"] == "5:00 PM"
    assert first["hours_display"] == "9h"


def test_flagged_activity(client, staff):
    resp = client.get("/payroll/flagged", params={"period": "this"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 1
    item = data["items"][0]
    assert item["employee_name"] == "Bob"
    assert item["reason"] == "Shift under 5 minutes"
    assert item["hours_worked"] == pytest.approx(0.05)


def test_red_flags(client, staff):
    data = client.get("/payroll/red-flags", params={"period": "this"}).json()
    assert [e["name"] for e in data["employees"]] == ["Bob", "Carol Cruz"]
    assert data["total_flagged_shifts"] == 2

    bob, carol = data["employees"]
    assert bob["shifts"][0]["hours_worked"] == pytest.approx(0.05)
    assert bob["average_shift_hours"] == pytest.approx((0.05 + 4) / 2)
    # The open shift is not a red flag; the 18:30 close is.
    assert len(carol["shifts"]) == 1
    assert carol["shifts"][0]["flags"]["is_auto_clock_out"] is True
    assert carol["average_shift_hours"] == pytest.approx(9.5)


def _alice_worked_last_week(seed, staff):
    for day in range(6, 11):
        seed.shift(staff["alice"], _at(1, day, 8), _at(1, day, 17))


def test_last_week_offers_quick_pay(client, seed, staff):
    _alice_worked_last_week(seed, staff)
    alice = client.get("/payroll", params={"period": "last"}).json()["employees"][0]
    assert alice["total_hours"] == pytest.approx(45)
    assert sorted(q["suggested_amount"] for q in alice["quick_pay"]) == [100, 600]


def test_current_week_cannot_be_committed(client, staff):
    resp = client.post("/ledger/payments", json={
        "employee_id": staff["alice"],
        "arrangement_id": staff["a_wk"],
        "pay_period_start": "2025-01-13",
        "pay_period_end": "2025-01-20",
        "hours_worked": 5,
        "hourly_rate": 20,
        "gross_amount": 100,
        "payment_method": "cash",
    })
    assert resp.status_code == 422
    assert resp.json()["detail"] == "Pay period has not ended yet"

    alice = client.get("/payroll").json()["employees"][0]
    assert alice["status"] == "unpaid"


def test_commit_moves_employee_through_partial_to_paid(client, seed, staff):
    _alice_worked_last_week(seed, staff)
    _commit(client, staff["alice"], staff["a_bi"], 40, 15, 600, method="check")

    alice = client.get("/payroll", params={"period": "last"}).json()["employees"][0]
    assert alice["status"] == "partial"
    allocs = {a["arrangement_id"]: a for a in alice["allocations"]}
    assert allocs[staff["a_bi"]]["status"] == "paid"
    assert allocs[staff["a_bi"]]["hours"] == 0
    assert allocs[staff["a_bi"]]["paid_amount"] == pytest.approx(600)
    assert allocs[staff["a_wk"]]["status"] == "unpaid"
    assert allocs[staff["a_wk"]]["hours"] == pytest.approx(5)
    assert [q["arrangement_id"] for q in alice["quick_pay"]] == [staff["a_wk"]]
    assert alice["last_payment_method"] == "check"
    assert alice["total_pay"] == pytest.approx(700)

    _commit(client, staff["alice"], staff["a_wk"], 5, 20, 100)

    data = client.get("/payroll", params={"period": "last"}).json()
    alice = data["employees"][0]
    assert alice["status"] == "paid"
    assert alice["quick_pay"] == []
    assert alice["paid_amount"] == pytest.approx(700)
    assert data["paid_count"] == 1


def test_quick_pay_endpoint(client, seed, staff):
    _alice_worked_last_week(seed, staff)
    resp = client.get(
        f"/employees/{staff['alice']}/quick-pay",
        params={"arrangement_id": staff["a_wk"], "period": "last"},
    )
    assert resp.status_code == 200
    q = resp.json()
    assert q["suggested_amount"] == 100
    assert q["estimated_amount"] == pytest.approx(100)
    assert q["payment_method"] == "cash"

    _commit(client, staff["alice"], staff["a_wk"], 5, 20, 100)
    q = client.get(
        f"/employees/{staff['alice']}/quick-pay",
        params={"arrangement_id": staff["a_wk"], "period": "last"},
    ).json()
    assert q["suggested_amount"] == 0


def test_last_payment_method_comes_from_latest_record(client, seed, staff):
    _alice_worked_last_week(seed, staff)
    _commit(client, staff["alice"], staff["a_wk"], 2, 20, 40, start="2024-12-30", end="2025-01-06", method="check")
    _commit(client, staff["alice"], staff["a_bi"], 40, 15, 600, method="cash")

    alice = client.get("/payroll", params={"period": "last"}).json()["employees"][0]
    assert alice["last_payment_method"] == "cash"
    assert [q["payment_method"] for q in alice["quick_pay"]] == ["cash"]


def test_quick_pay_for_open_week_is_zero(client, staff):
    q = client.get(
        f"/employees/{staff['alice']}/quick-pay",
        params={"arrangement_id": staff["a_wk"], "period": "this"},
    ).json()
    assert q["suggested_amount"] == 0
    assert q["hours"] == 0


def test_quick_pay_for_foreign_arrangement_is_404(client, staff):
    resp = client.get(
        f"/employees/{staff['alice']}/quick-pay",
        params={"arrangement_id": staff["b_wk"], "period": "this"},
    )
    assert resp.status_code == 404


def test_employee_without_hours_is_hidden(client, staff):
    names = [e["name"] for e in client.get("/payroll").json()["employees"]]
    assert "Erin" not in names
    assert "Dave" not in names
    assert "Test Account" not in names


def test_last_week_shows_only_weekly_arrangements(client, seed, staff):
    seed.shift(staff["alice"], _at(1, 7, 9), _at(1, 7, 17))
    seed.shift(staff["carol"], _at(1, 7, 9), _at(1, 7, 17))

    data = client.get("/payroll", params={"period": "last"}).json()
    assert [e["name"] for e in data["employees"]] == ["Alice Archer"]


def test_last_pay_period_shows_only_biweekly_arrangements(client, seed, staff):
    seed.shift(staff["alice"], _at(1, 2, 9), _at(1, 2, 17))
    seed.shift(staff["bob"], _at(1, 2, 9), _at(1, 2, 17))

    data = client.get("/payroll", params={"period": "lastPayPeriod"}).json()
    assert [e["name"] for e in data["employees"]] == ["Alice Archer"]


def test_last_week_sees_biweekly_settlement_that_started_earlier(client, seed, staff):
    seed.shift(staff["alice"], _at(1, 7, 9), _at(1, 7, 17))
    _commit(client, staff["alice"], staff["a_bi"], 8, 15, 120, start="2024-12-30", end="2025-01-13")
    # A weekly settlement for the week before must not count for last week.
    _commit(client, staff["alice"], staff["a_wk"], 0.5, 20, 10, start="2024-12-30", end="2025-01-06")

    alice = client.get("/payroll", params={"period": "last"}).json()["employees"][0]
    statuses = {a["arrangement_id"]: a["status"] for a in alice["allocations"]}
    assert statuses == {staff["a_bi"]: "paid", staff["a_wk"]: "unpaid"}
    assert alice["status"] == "partial"


def test_payroll_load_failure_fails_closed(client, staff, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from payrecon.infra.db.repositories.clock_event_repository import ClockEventRepository

    def _boom(self, *args, **kwargs):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(ClockEventRepository, "list_for_range", _boom)
    resp = client.get("/payroll")
    assert resp.status_code == 503
    assert "Could not load payroll data" in resp.json()["detail"]
