def test_create_and_list_with_occupancy(client, login, make_classroom, make_child):
    login("staff")
    room = make_classroom(name="Butterflies", capacity=8)
    child = make_child()
    client.post(f"/api/classrooms/{room['id']}/assign-child", json={"child_id": child["id"]})
    client.post(f"/api/classrooms/{room['id']}/check-in", json={"child_id": child["id"]})

    rooms = client.get("/api/classrooms").json()
    assert len(rooms) == 1
    assert rooms[0]["checked_in_count"] == 1
    assert rooms[0]["enrolled_count"] == 1


def test_capacity_must_be_positive(client, login):
    login("staff")
    res = client.post("/api/classrooms", json={"name": "Bad", "capacity": 0})
    assert res.status_code == 422


def test_roster_moves_child_between_classrooms(client, login, make_classroom, make_child):
    login("staff")
    a = make_classroom(name="A")
    b = make_classroom(name="B")
    child = make_child()

    client.post(f"/api/classrooms/{a['id']}/assign-child", json={"child_id": child["id"]})
    client.post(f"/api/classrooms/{b['id']}/assign-child", json={"child_id": child["id"]})

    assert client.get(f"/api/classrooms/{a['id']}").json()["roster"] == []
    roster_b = client.get(f"/api/classrooms/{b['id']}").json()["roster"]
    assert [r["child_id"] for r in roster_b] == [child["id"]]


def test_remove_child_from_roster(client, login, make_classroom, make_child):
    login("staff")
    room = make_classroom()
    child = make_child()
    url = f"/api/classrooms/{room['id']}/remove-child"
    assert client.post(url, json={"child_id": child["id"]}).status_code == 404

    client.post(f"/api/classrooms/{room['id']}/assign-child", json={"child_id": child["id"]})
    assert client.post(url, json={"child_id": child["id"]}).status_code == 200
    assert client.get(f"/api/classrooms/{room['id']}").json()["roster"] == []


def test_patch_classroom(client, login, make_classroom):
    login("staff")
    room = make_classroom()
    res = client.patch(f"/api/classrooms/{room['id']}", json={"capacity": 20, "age_group": "Toddlers"})
    assert res.status_code == 200
    assert res.json()["capacity"] == 20
    assert res.json()["name"] == room["name"]


def test_deactivate_is_director_only_and_soft(client, login, make_classroom):
    login("staff")
    room = make_classroom()
    assert client.delete(f"/api/classrooms/{room['id']}").status_code == 403

    login("director")
    res = client.delete(f"/api/classrooms/{room['id']}")
    assert res.status_code == 200
    assert res.json()["is_active"] is False
    assert client.get("/api/classrooms").json() == []
    assert client.get(f"/api/classrooms/{room['id']}").status_code == 200


def test_dashboard_overview(client, login, make_classroom, make_child):
    login("staff")
    client.post("/api/staff/sign-in")
    room = make_classroom()
    for name in ("Ava", "Leo"):
        child = make_child(first_name=name)
        client.post(f"/api/classrooms/{room['id']}/check-in", json={"child_id": child["id"]})

    body = client.get("/api/dashboard/overview").json()
    assert body["total_children_checked_in"] == 2
    assert body["total_staff_signed_in"] == 1
    assert body["classrooms"][0]["checked_in_count"] == 2


def test_checked_in_for_unknown_classroom_is_404(client, login):
    login("staff")
    assert client.get("/api/classrooms/nope/checked-in").status_code == 404
