from datetime import timedelta

from sqlalchemy import select

from daycare.models.attendance import ChildCheckIn
from daycare.utils.timezones import center_today, utcnow


def test_check_in_and_out(client, login, make_classroom, make_child):
    login("staff")
    room = make_classroom()
    child = make_child()

    res = client.post(f"/api/classrooms/{room['id']}/check-in", json={"child_id": child["id"]})
    assert res.status_code == 201

    present = client.get(f"/api/classrooms/{room['id']}/checked-in").json()
    assert [p["child_id"] for p in present] == [child["id"]]

    res = client.post(f"/api/classrooms/{room['id']}/check-out", json={"child_id": child["id"]})
    assert res.status_code == 200
    assert res.json()["total_hours"] >= 0

    assert client.get(f"/api/classrooms/{room['id']}/checked-in").json() == []

    history = client.get(f"/api/children/{child['id']}/attendance").json()
    assert len(history) == 1
    assert history[0]["check_out_time"] is not None


def test_double_check_in_is_rejected(client, login, make_classroom, make_child):
    login("staff")
    room = make_classroom()
    child = make_child()
    url = f"/api/classrooms/{room['id']}/check-in"
    assert client.post(url, json={"child_id": child["id"]}).status_code == 201

    res = client.post(url, json={"child_id": child["id"]})
    assert res.status_code == 400
    assert res.json()["detail"] == "Child is already checked in"


def test_check_out_without_check_in(client, login, make_classroom, make_child):
    login("staff")
    room = make_classroom()
    child = make_child()
    res = client.post(f"/api/classrooms/{room['id']}/check-out", json={"child_id": child["id"]})
    assert res.status_code == 400


def test_check_in_unknown_child_or_classroom(client, login, make_classroom):
    login("staff")
    room = make_classroom()
    assert client.post(f"/api/classrooms/{room['id']}/check-in", json={"child_id": "nope"}).status_code == 404
    assert client.post("/api/classrooms/nope/check-in", json={"child_id": "nope"}).status_code == 404


def test_staff_sign_in_is_idempotent(client, login):
    login("staff")
    first = client.post("/api/staff/sign-in", json={"notes": "opening"})
    second = client.post("/api/staff/sign-in")
    assert first.status_code == 201
    assert first.json()["id"] == second.json()["id"]

    on_duty = client.get("/api/staff/currently-signed-in").json()
    assert [s["name"] for s in on_duty] == ["Sam Lee"]


def test_staff_sign_out(client, login):
    login("staff")
    assert client.post("/api/staff/sign-out").status_code == 400

    client.post("/api/staff/sign-in")
    res = client.post("/api/staff/sign-out")
    assert res.status_code == 200
    assert res.json()["total_hours"] >= 0
    assert client.get("/api/staff/currently-signed-in").json() == []

    history = client.get("/api/staff/attendance").json()
    assert len(history) == 1
    assert history[0]["sign_out_time"] is not None


def test_staff_attendance_date_filter(client, login):
    login("staff")
    client.post("/api/staff/sign-in")
    res = client.get("/api/staff/attendance", params={"start_date": "2000-01-01", "end_date": "2000-12-31"})
    assert res.json() == []


def test_parent_cannot_sign_in(client, login):
    login("parent")
    assert client.post("/api/staff/sign-in").status_code == 403


def test_check_in_rejected_while_earlier_day_still_open(client, login, make_classroom, make_child, users, run_db):
    login("staff")
    room = make_classroom()
    child = make_child()
    yesterday = center_today() - timedelta(days=1)

    async def seed(session):
        session.add(
            ChildCheckIn(
                child_id=child["id"],
                classroom_id=room["id"],
                check_in_time=utcnow() - timedelta(days=1),
                date=yesterday,
                checked_in_by=users["staff"],
            )
        )
        await session.commit()
    run_db(seed)

    res = client.post(f"/api/classrooms/{room['id']}/check-in", json={"child_id": child["id"]})
    assert res.status_code == 400

    # Checking out closes the stale row and frees the child for a new check-in
    assert client.post(f"/api/classrooms/{room['id']}/check-out", json={"child_id": child["id"]}).status_code == 200

    async def open_rows(session):
        result = await session.execute(
            select(ChildCheckIn).where(
                ChildCheckIn.child_id == child["id"], ChildCheckIn.check_out_time.is_(None)
            )
        )
        return result.scalars().all()
    assert run_db(open_rows) == []

    assert client.post(f"/api/classrooms/{room['id']}/check-in", json={"child_id": child["id"]}).status_code == 201
