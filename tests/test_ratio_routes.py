import pytest

from helpers import months_ago


@pytest.fixture
def room(client, login, make_classroom):
    login("director")
    return make_classroom(name="Butterflies", capacity=10)


def assign(client, staff_id, classroom_id):
    return client.post(
        "/api/ratio/staff-assignments",
        json={"staff_id": staff_id, "classroom_id": classroom_id},
    )


def sign_in_as(client, login, who):
    login(who)
    assert client.post("/api/staff/sign-in").status_code == 201


def check_in_infants(client, make_child, classroom_id, n):
    for i in range(n):
        child = make_child(first_name=f"Baby{i}", date_of_birth=months_ago(6))
        res = client.post(f"/api/classrooms/{classroom_id}/check-in", json={"child_id": child["id"]})
        assert res.status_code == 201


def test_only_director_assigns_staff(client, login, room, users):
    login("staff")
    assert assign(client, users["staff"], room["id"]).status_code == 403


def test_assignment_validation(client, login, room, users):
    assert assign(client, "nope", room["id"]).status_code == 404
    assert assign(client, users["parent"], room["id"]).status_code == 404
    assert assign(client, users["staff"], "nope").status_code == 404

    first = assign(client, users["staff"], room["id"])
    assert first.status_code == 201
    assert first.json()["status"] == "active"
    assert assign(client, users["staff"], room["id"]).status_code == 400


def test_remove_assignment_lifecycle(client, login, room, users):
    assignment = assign(client, users["staff"], room["id"]).json()
    url = f"/api/ratio/staff-assignments/{assignment['id']}"

    res = client.delete(url)
    assert res.status_code == 200
    assert res.json()["status"] == "removed"
    assert client.delete(url).status_code == 400
    assert client.delete("/api/ratio/staff-assignments/nope").status_code == 404

    # Removed assignments free the slot for a new one
    assert assign(client, users["staff"], room["id"]).status_code == 201


def test_empty_classroom_has_no_limit(client, login, room):
    body = client.get(f"/api/ratio/classroom/{room['id']}").json()
    status = body["current_status"]
    assert status["children_count"] == 0
    assert status["required_ratio"] is None
    assert status["required_ratio_display"] == "no limit"
    assert status["status_indicator"] == "good"
    assert body["classroom"]["name"] == "Butterflies"


def test_ratio_walks_from_warning_to_critical(client, login, room, users, make_child):
    assign(client, users["staff"], room["id"])
    sign_in_as(client, login, "staff")

    check_in_infants(client, make_child, room["id"], 4)
    body = client.get(f"/api/ratio/classroom/{room['id']}").json()
    status = body["current_status"]
    assert status["staff_count"] == 1
    assert status["required_ratio"] == 4
    assert status["max_allowed_children"] == 4
    assert status["dominant_group"] == "infant"
    assert status["status_indicator"] == "warning"
    assert body["staff_assignments"][0]["is_signed_in"] is True
    assert all(c["ratio_group"] == "infant" for c in body["children"])

    check_in_infants(client, make_child, room["id"], 1)
    status = client.get(f"/api/ratio/classroom/{room['id']}").json()["current_status"]
    assert status["is_over_ratio"] is True
    assert status["status_indicator"] == "critical"
    assert status["status_color"] == "#E74C3C"


def test_unassigned_signed_in_staff_do_not_count(client, login, room, users, make_child):
    assign(client, users["staff"], room["id"])
    sign_in_as(client, login, "staff2")
    check_in_infants(client, make_child, room["id"], 1)

    body = client.get(f"/api/ratio/classroom/{room['id']}").json()
    assert body["current_status"]["staff_count"] == 0
    assert body["current_status"]["is_over_ratio"] is True
    assert body["staff_assignments"][0]["is_signed_in"] is False


def test_removed_assignment_stops_counting(client, login, room, users, make_child):
    assignment = assign(client, users["staff"], room["id"]).json()
    sign_in_as(client, login, "staff")
    check_in_infants(client, make_child, room["id"], 2)
    assert client.get(f"/api/ratio/classroom/{room['id']}").json()["current_status"]["staff_count"] == 1

    login("director")
    client.delete(f"/api/ratio/staff-assignments/{assignment['id']}")
    status = client.get(f"/api/ratio/classroom/{room['id']}").json()["current_status"]
    assert status["staff_count"] == 0
    assert status["is_over_ratio"] is True


def test_unknown_birth_date_counts_but_does_not_bind(client, login, room, users, make_child):
    assign(client, users["staff"], room["id"])
    sign_in_as(client, login, "staff")
    for dob in (months_ago(50), None):
        child = make_child(date_of_birth=dob)
        client.post(f"/api/classrooms/{room['id']}/check-in", json={"child_id": child["id"]})

    status = client.get(f"/api/ratio/classroom/{room['id']}").json()["current_status"]
    assert status["children_count"] == 2
    assert status["unclassified_count"] == 1
    assert status["required_ratio"] == 10
    assert status["dominant_group"] == "pre_k"


def test_checked_out_children_leave_the_ratio(client, login, room, users, make_child):
    assign(client, users["staff"], room["id"])
    sign_in_as(client, login, "staff")
    child = make_child(date_of_birth=months_ago(6))
    client.post(f"/api/classrooms/{room['id']}/check-in", json={"child_id": child["id"]})
    client.post(f"/api/classrooms/{room['id']}/check-out", json={"child_id": child["id"]})

    status = client.get(f"/api/ratio/classroom/{room['id']}").json()["current_status"]
    assert status["children_count"] == 0


def test_overview_counts_classrooms_over_ratio(client, login, make_classroom, users, make_child):
    login("director")
    ok_room = make_classroom(name="Alpha")
    over_room = make_classroom(name="Bravo")
    assign(client, users["staff"], ok_room["id"])

    sign_in_as(client, login, "staff")
    check_in_infants(client, make_child, ok_room["id"], 2)
    check_in_infants(client, make_child, over_room["id"], 1)

    body = client.get("/api/ratio/overview").json()
    assert body["summary"] == {
        "total_classrooms": 2,
        "total_staff_signed_in": 1,
        "total_children_checked_in": 3,
        "classrooms_over_ratio": 1,
    }
    names = [c["name"] for c in body["classrooms"]]
    assert names == ["Alpha", "Bravo"]
    assert body["classrooms"][0]["status_indicator"] == "good"
    assert body["classrooms"][1]["status_indicator"] == "critical"
    assert body["classrooms"][1]["main_age_group"] == "infant"


def test_staff_assignments_visibility(client, login, room, users):
    assign(client, users["staff"], room["id"])

    login("staff")
    own = client.get(f"/api/ratio/staff/{users['staff']}/assignments")
    assert own.status_code == 200
    assert [a["classroom_name"] for a in own.json()["assignments"]] == ["Butterflies"]
    assert client.get(f"/api/ratio/staff/{users['staff2']}/assignments").status_code == 403

    login("director")
    res = client.get(f"/api/ratio/staff/{users['staff2']}/assignments")
    assert res.status_code == 200
    assert res.json()["assignments"] == []


def test_unknown_classroom_ratio_is_404(client, login, room):
    assert client.get("/api/ratio/classroom/nope").status_code == 404


def test_group_counts_carry_labels(client, login, room, users, make_child):
    assign(client, users["staff"], room["id"])
    sign_in_as(client, login, "staff")
    check_in_infants(client, make_child, room["id"], 2)

    groups = client.get(f"/api/ratio/classroom/{room['id']}").json()["current_status"]["children_by_group"]
    assert groups == [
        {"group": "infant", "label": "Infant (under 19 months) (1:4)", "count": 2, "required_ratio": 4}
    ]


def test_parent_cannot_view_staff_assignments(client, login, room, users):
    login("parent")
    assert client.get(f"/api/ratio/staff/{users['staff']}/assignments").status_code == 403
    assert client.get(f"/api/ratio/staff/{users['parent']}/assignments").status_code == 200
