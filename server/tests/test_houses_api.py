from __future__ import annotations

from mohalla.models.house import House
from mohalla.models.member import Member


def _member_payload(name: str, age: int, gender: str = "Male", **fields) -> dict:
    payload = {"name": name, "age": age, "gender": gender}
    payload.update(fields)
    return payload


def _member(name: str, age: int, gender: str = "Male", **fields) -> Member:
    return Member(name=name, age=age, gender=gender, **fields)


def test_create_house_with_members(client, authorize, editor_user):
    authorize(editor_user)
    resp = client.post(
        "/houses",
        json={
            "number": " 21 ",
            "street": "Main Street",
            "taleem": True,
            "members": [
                _member_payload(
                    "Ahmed Khan",
                    45,
                    fatherName="Abdul Khan",
                    occupation="Businessman",
                    dawatCounts={"3-day": 2},
                    role="Head",
                ),
                _member_payload("Ali Khan", 12, occupation="Child", maktab="yes"),
            ],
        },
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    assert body["number"] == "21"
    assert body["taleem"] is True
    assert body["mashwara"] is False
    assert body["totalMembers"] == 2
    assert body["adultsCount"] == 1
    assert body["childrenCount"] == 1

    head, child = body["members"]
    assert head["fatherName"] == "Abdul Khan"
    assert head["dawatCounts"] == {"3-day": 2, "10-day": 0, "40-day": 0, "4-month": 0}
    assert head["isChild"] is False
    assert head["education"] == "Below 8th"
    assert child["isChild"] is True
    assert child["role"] == "Member"


def test_duplicate_house_number_conflicts(client, authorize, editor_user, add_house):
    add_house("7")
    authorize(editor_user)
    resp = client.post("/houses", json={"number": "7", "street": "Park Road"})
    assert resp.status_code == 409
    assert resp.json()["code"] == "conflicting_unique_value"
    assert resp.json()["field"] == "number"


def test_update_to_existing_number_conflicts(client, authorize, editor_user, add_house):
    add_house("1")
    second = add_house("2")
    authorize(editor_user)
    resp = client.put(f"/houses/{second.id}", json={"number": "1"})
    assert resp.status_code == 409


def test_create_rejects_invalid_member(client, authorize, editor_user):
    authorize(editor_user)
    resp = client.post(
        "/houses",
        json={"number": "3", "street": "Park Road", "members": [_member_payload("Old", 121)]},
    )
    assert resp.status_code == 422
    resp = client.post(
        "/houses",
        json={"number": "3", "street": "Park Road", "members": [_member_payload("Someone", 30, gender="Other")]},
    )
    assert resp.status_code == 422


def test_write_requires_editor_role(client, authorize, viewer_user):
    authorize(viewer_user)
    resp = client.post("/houses", json={"number": "1", "street": "Main Street"})
    assert resp.status_code == 403


def test_listing_requires_authentication(client):
    resp = client.get("/houses")
    assert resp.status_code == 401


def test_list_houses_paginates(client, authorize, viewer_user, db_session):
    db_session.add_all([House(number=f"{index:03d}", street="Main Street") for index in range(120)])
    db_session.commit()

    authorize(viewer_user)
    resp = client.get("/houses?page=1&limit=50")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 120
    assert body["totalPages"] == 3
    assert body["currentPage"] == 1
    assert len(body["houses"]) == 50
    assert body["houses"][0]["number"] == "000"

    last_page = client.get("/houses?page=3&limit=50").json()
    assert len(last_page["houses"]) == 20
    assert last_page["houses"][-1]["number"] == "119"


def test_list_houses_rejects_bad_pagination(client, authorize, viewer_user):
    authorize(viewer_user)
    resp = client.get("/houses?page=0")
    assert resp.status_code == 400
    assert resp.json()["field"] == "page"
    assert resp.json()["code"] == "invalid_parameter"

    resp = client.get("/houses?limit=101")
    assert resp.status_code == 400
    assert resp.json()["field"] == "limit"


def test_list_houses_rejects_non_numeric_age(client, authorize, viewer_user):
    authorize(viewer_user)
    resp = client.get("/houses?minAge=old")
    assert resp.status_code == 400
    assert resp.json()["field"] == "minAge"


def test_list_ignores_unknown_parameters(client, authorize, viewer_user, add_house):
    add_house("1")
    authorize(viewer_user)
    resp = client.get("/houses?colour=blue&dawatCountKey=3-day")
    assert resp.status_code == 200
    assert resp.json()["total"] == 1


def test_member_filters_match_within_one_member(client, authorize, viewer_user, add_house):
    add_house(
        "1",
        members=[_member("Abdullah", 40, occupation="Hafiz"), _member("Khadija", 35, gender="Female")],
    )
    add_house("2", members=[_member("Aisha", 28, gender="Female", occupation="Hafiz")])
    authorize(viewer_user)

    def numbers(query: str) -> list[str]:
        resp = client.get(f"/houses?{query}")
        assert resp.status_code == 200, resp.text
        return [house["number"] for house in resp.json()["houses"]]

    assert numbers("occupation=Hafiz") == ["1", "2"]
    assert numbers("gender=Female") == ["1", "2"]
    assert numbers("occupation=Hafiz&gender=Female") == ["2"]


def test_search_matches_member_name_number_or_street(client, authorize, viewer_user, add_house):
    add_house("10", street="Market Lane", members=[_member("Zubair Patel", 50)])
    add_house("20", street="Station Road", members=[_member("Yunus", 30)])
    add_house("31", street="Canal Street", members=[_member("Idris", 30)])
    authorize(viewer_user)

    def numbers(term: str) -> list[str]:
        return [house["number"] for house in client.get("/houses", params={"search": term}).json()["houses"]]

    assert numbers("patel") == ["10"]
    assert numbers("STATION") == ["20"]
    assert numbers("1") == ["10", "31"]
    assert numbers("%") == []


def test_street_and_age_filters(client, authorize, viewer_user, add_house):
    add_house("1", street="Main Street", members=[_member("Adam", 70)])
    add_house("2", street="Main Street", members=[_member("Bashir", 25)])
    add_house("3", street="Park Road", members=[_member("Dawud", 25)])
    authorize(viewer_user)

    resp = client.get("/houses", params={"street": "Main Street", "minAge": "18", "maxAge": "60"})
    assert [house["number"] for house in resp.json()["houses"]] == ["2"]


def test_maktab_filter_limits_to_children(client, authorize, viewer_user, add_house):
    add_house("1", members=[_member("Yasir", 20, maktab="yes")])
    add_house("2", members=[_member("Hamza", 11, maktab="yes")])
    add_house("3", members=[_member("Musa", 9, maktab="no")])
    authorize(viewer_user)

    resp = client.get("/houses", params={"maktab": "yes", "minAge": "10"})
    assert [house["number"] for house in resp.json()["houses"]] == ["2"]
    resp = client.get("/houses", params={"maktab": "yes"})
    assert [house["number"] for house in resp.json()["houses"]] == ["2"]


def test_dawat_count_filter(client, authorize, viewer_user, add_house):
    add_house("1", members=[_member("Imran", 44, dawat="40-day", dawat_counts={"40-day": 2})])
    add_house("2", members=[_member("Salman", 33, dawat="3-day", dawat_counts={"3-day": 2})])
    authorize(viewer_user)

    resp = client.get("/houses", params={"dawatCountKey": "40-day", "dawatCountTimes": "2"})
    assert [house["number"] for house in resp.json()["houses"]] == ["1"]
    resp = client.get("/houses", params={"dawatCountKey": "1-year", "dawatCountTimes": "0"})
    assert resp.json()["total"] == 0
    resp = client.get("/houses", params={"dawat": "3-day"})
    assert [house["number"] for house in resp.json()["houses"]] == ["2"]


def test_overview_stats(client, add_house):
    empty = client.get("/houses/stats/overview")
    assert empty.status_code == 200
    assert empty.json() == {
        "totalHouses": 0,
        "totalMembers": 0,
        "totalAdults": 0,
        "totalChildren": 0,
        "totalHafiz": 0,
        "totalUlma": 0,
        "housesWithTaleem": 0,
        "housesWithMashwara": 0,
    }

    add_house(
        "1",
        taleem=True,
        members=[_member("Ahmed", 45, occupation="Hafiz"), _member("Fatima", 40, gender="Female"), _member("Ali", 12)],
    )
    add_house("2", street="Park Road", mashwara=True, members=[_member("Mohammed", 50, occupation="Ulma"), _member("Aisha", 15, gender="Female")])

    stats = client.get("/houses/stats/overview").json()
    assert stats == {
        "totalHouses": 2,
        "totalMembers": 5,
        "totalAdults": 4,
        "totalChildren": 1,
        "totalHafiz": 1,
        "totalUlma": 1,
        "housesWithTaleem": 1,
        "housesWithMashwara": 1,
    }

    filtered = client.get("/houses/stats/overview", params={"street": "Park Road"}).json()
    assert filtered["totalHouses"] == 1
    assert filtered["totalMembers"] == 2
    assert filtered["housesWithTaleem"] == 0


def test_get_and_delete_house(client, authorize, editor_user, add_house, db_session):
    house = add_house("5", members=[_member("Omar", 42)])
    authorize(editor_user)

    resp = client.get(f"/houses/{house.id}")
    assert resp.status_code == 200
    assert resp.json()["members"][0]["name"] == "Omar"

    resp = client.delete(f"/houses/{house.id}")
    assert resp.status_code == 204
    assert client.get(f"/houses/{house.id}").status_code == 404
    db_session.expire_all()
    assert db_session.query(Member).count() == 0


def test_update_house_replaces_members(client, authorize, editor_user, add_house):
    house = add_house("6", members=[_member("Old Member", 60)], notes="Corner house")
    authorize(editor_user)
    resp = client.put(
        f"/houses/{house.id}",
        json={"street": "New Street", "mashwara": True, "members": [_member_payload("New Member", 8, maktab="yes")]},
    )
    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["street"] == "New Street"
    assert body["mashwara"] is True
    assert body["notes"] == "Corner house"
    assert [member["name"] for member in body["members"]] == ["New Member"]
    assert body["childrenCount"] == 1


def test_member_lifecycle(client, authorize, editor_user, add_house):
    house = add_house("8", members=[_member("Head", 50, role="Head")])
    authorize(editor_user)

    resp = client.post(f"/houses/{house.id}/members", json=_member_payload("Yusuf", 13, occupation="Child"))
    assert resp.status_code == 201, resp.text
    members = resp.json()["members"]
    assert [member["name"] for member in members] == ["Head", "Yusuf"]
    yusuf = members[1]
    assert yusuf["isChild"] is True

    resp = client.put(f"/houses/{house.id}/members/{yusuf['id']}", json={"age": 14, "occupation": "Student"})
    assert resp.status_code == 200, resp.text
    updated = next(member for member in resp.json()["members"] if member["id"] == yusuf["id"])
    assert updated["isChild"] is False
    assert updated["occupation"] == "Student"
    assert resp.json()["adultsCount"] == 2

    resp = client.delete(f"/houses/{house.id}/members/{yusuf['id']}")
    assert resp.status_code == 200
    assert [member["name"] for member in resp.json()["members"]] == ["Head"]

    assert client.delete(f"/houses/{house.id}/members/{yusuf['id']}").status_code == 404
    assert client.put(f"/houses/999/members/{yusuf['id']}", json={"age": 3}).status_code == 404


def test_oversized_numbers_are_rejected(client, authorize, viewer_user):
    authorize(viewer_user)
    resp = client.get("/houses", params={"page": "99999999999999999999"})
    assert resp.status_code == 400
    assert resp.json()["field"] == "page"
    assert resp.json()["kind"] == "out_of_range"

    resp = client.get("/houses", params={"minAge": "99999999999999999999"})
    assert resp.status_code == 400
    assert resp.json()["field"] == "minAge"
    assert resp.json()["kind"] == "out_of_range"

    resp = client.get("/houses/stats/overview", params={"maxAge": "-3"})
    assert resp.status_code == 400
    assert resp.json()["field"] == "maxAge"


def test_half_specified_dawat_count_is_not_an_error(client, authorize, viewer_user, add_house):
    add_house("1", members=[_member("Imran", 44, dawat_counts={"3-day": 2})])
    authorize(viewer_user)

    resp = client.get("/houses", params={"dawatCountTimes": "abc"})
    assert resp.status_code == 200
    assert resp.json()["total"] == 1

    for times in ("abc", "99999999999999999999"):
        resp = client.get("/houses", params={"dawatCountKey": "3-day", "dawatCountTimes": times})
        assert resp.status_code == 200
        assert resp.json()["total"] == 0


def test_unknown_member_values_return_no_houses(client, authorize, viewer_user, add_house):
    add_house("1", members=[_member("Imran", 44, occupation="Hafiz")])
    authorize(viewer_user)

    for params in ({"occupation": "Foo"}, {"gender": "male"}, {"maktab": "maybe"}, {"dawat": "1-year"}):
        resp = client.get("/houses", params=params)
        assert resp.status_code == 200, params
        assert resp.json()["total"] == 0
        assert client.get("/houses/stats/overview", params=params).json()["totalHouses"] == 0
