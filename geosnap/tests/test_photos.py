def test_create_and_get_photo(client, make_user, make_photo):
    _, headers = make_user()
    photo = make_photo(headers, lat=10.7721, lng=106.6980, rating=5,
                       address="Ben Thanh Market", caption="busy")
    assert photo["rating"] == 5
    assert photo["likes_count"] == 0

    r = client.get(f"/api/photos/{photo['id']}")
    assert r.status_code == 200
    got = r.json()["photo"]
    assert got["address"] == "Ben Thanh Market"
    assert got["latitude"] == 10.7721
    assert got["user_liked"] is False


def test_create_requires_auth_and_valid_payload(client, make_user):
    r = client.post("/api/photos", json={"image": "x", "latitude": 1, "longitude": 2})
    assert r.status_code in (401, 403)

    _, headers = make_user()
    r = client.post("/api/photos", headers=headers, json={"image": "x", "latitude": 1})
    assert r.status_code == 422
    r = client.post("/api/photos", headers=headers,
                    json={"image": "x", "latitude": 95, "longitude": 2})
    assert r.status_code == 422
    r = client.post("/api/photos", headers=headers,
                    json={"image": "x", "latitude": 1, "longitude": 2, "rating": 6})
    assert r.status_code == 422


def test_get_missing_photo_404(client):
    r = client.get("/api/photos/999999")
    assert r.status_code == 404


def test_list_filters_by_user_and_box(client, make_user, make_photo):
    user, headers = make_user()
    near = make_photo(headers, lat=21.0285, lng=105.8542)
    far = make_photo(headers, lat=21.5, lng=105.8542)

    r = client.get("/api/photos", params={"user_id": user["id"]})
    assert r.status_code == 200
    ids = [p["id"] for p in r.json()["photos"]]
    # newest first
    assert ids == [far["id"], near["id"]]

    r = client.get("/api/photos", params={
        "user_id": user["id"], "lat": 21.0285, "lng": 105.8542, "radius": 0.01})
    photos = r.json()["photos"]
    assert [p["id"] for p in photos] == [near["id"]]
    assert photos[0]["distance_km"] == 0.0


def test_list_pagination(client, make_user, make_photo):
    user, headers = make_user()
    for _ in range(3):
        make_photo(headers)
    r = client.get("/api/photos", params={"user_id": user["id"], "limit": 2})
    assert len(r.json()["photos"]) == 2
    r = client.get("/api/photos", params={"user_id": user["id"], "limit": 2, "offset": 2})
    assert len(r.json()["photos"]) == 1


def test_update_only_by_owner(client, make_user, make_photo):
    _, owner = make_user()
    _, stranger = make_user()
    photo = make_photo(owner, rating=2)

    r = client.put(f"/api/photos/{photo['id']}", headers=stranger, json={"rating": 5})
    assert r.status_code == 403

    r = client.put(f"/api/photos/{photo['id']}", headers=owner,
                   json={"rating": 4, "caption": "edited"})
    assert r.status_code == 200
    updated = r.json()["photo"]
    assert updated["rating"] == 4
    assert updated["caption"] == "edited"


def test_like_toggle(client, make_user, make_photo):
    _, owner = make_user()
    _, fan = make_user()
    photo = make_photo(owner)

    r = client.post(f"/api/photos/{photo['id']}/like", headers=fan)
    assert r.json() == {"message": "Photo liked", "liked": True, "likes_count": 1}

    r = client.get(f"/api/photos/{photo['id']}", headers=fan)
    assert r.json()["photo"]["user_liked"] is True
    assert r.json()["photo"]["likes_count"] == 1

    r = client.post(f"/api/photos/{photo['id']}/like", headers=fan)
    assert r.json()["liked"] is False
    assert r.json()["likes_count"] == 0


def test_like_missing_photo(client, make_user):
    _, headers = make_user()
    r = client.post("/api/photos/999999/like", headers=headers)
    assert r.status_code == 404


def test_delete_cascades_comments(client, make_user, make_photo):
    _, owner = make_user()
    _, stranger = make_user()
    photo = make_photo(owner)
    r = client.post(f"/api/comments/photo/{photo['id']}", headers=stranger, json={"text": "nice"})
    assert r.status_code == 201
    client.post(f"/api/photos/{photo['id']}/like", headers=stranger)

    r = client.delete(f"/api/photos/{photo['id']}", headers=stranger)
    assert r.status_code == 403

    r = client.delete(f"/api/photos/{photo['id']}", headers=owner)
    assert r.status_code == 200
    assert client.get(f"/api/photos/{photo['id']}").status_code == 404

    r = client.get(f"/api/comments/photo/{photo['id']}")
    assert r.json() == {"comments": [], "total": 0}
