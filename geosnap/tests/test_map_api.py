def test_map_groups_modes(client, make_user, make_photo):
    user, headers = make_user()
    make_photo(headers, lat=10.7769, lng=106.7009, rating=5, address="Ben Thanh")
    make_photo(headers, lat=10.7770, lng=106.7010, rating=3)
    make_photo(headers, lat=10.80, lng=106.80)

    r = client.get("/api/map/groups", params={"zoom": 14, "user_id": user["id"]})
    assert r.status_code == 200
    body = r.json()
    assert body["mode"] == "detailed"
    assert body["photo_count"] == 3
    counts = sorted(g["count"] for g in body["groups"])
    assert counts == [1, 2]

    pair = next(g for g in body["groups"] if g["count"] == 2)
    assert pair["average_rating"] == 4
    assert pair["marker"]["kind"] == "photo"
    assert pair["marker"]["size"] == 56
    assert pair["marker"]["border_color"] == "#FFD700"
    assert pair["marker"]["badge"] == 2
    assert pair["preview"]["more"] == 0
    assert len(pair["preview"]["photos"]) == 2

    r = client.get("/api/map/groups", params={"zoom": 13, "user_id": user["id"]})
    body = r.json()
    assert body["mode"] == "overview"
    single = next(g for g in body["groups"] if g["count"] == 1)
    assert single["marker"] == {"kind": "dot", "radius": 6, "fill_color": "#FF6B6B"}
    south, west = body["bounds"][0]
    assert round(south, 4) == round(10.7769 - 0.01, 4)
    assert round(west, 4) == round(106.7009 - 0.01, 4)


def test_map_groups_empty(client, make_user):
    user, _ = make_user()
    r = client.get("/api/map/groups", params={"user_id": user["id"]})
    body = r.json()
    assert body["groups"] == []
    assert body["bounds"] is None
    assert body["center"] == [10.7769, 106.7009]
    assert body["zoom"] == 13
    assert body["mode"] == "overview"


def test_map_groups_rejects_bad_zoom(client):
    r = client.get("/api/map/groups", params={"zoom": 99})
    assert r.status_code == 422


def test_health(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.json()["status"] == "ok"
