"""Ground listing endpoints."""
from conftest import auth, create_ground, signup


async def test_create_ground(client, owner):
    ground = await create_ground(client, owner["token"])

    assert ground["title"] == "Green Turf Arena"
    assert ground["owner_id"] == owner["user"]["id"]
    assert ground["available"] is True
    assert ground["price"] == {"amount": 500, "currency": "INR", "negotiable": False}
    assert ground["location"] == {"address": "12 MG Road, Pune", "lat": 18.52, "lng": 73.85}
    assert ground["sport_tags"] == ["Football", "Cricket"]
    assert ground["owner"]["upi_id"] == "owner@okbank"


async def test_tags_accept_comma_separated_strings(client, owner):
    ground = await create_ground(
        client, owner["token"],
        sport_tags="Football, Cricket,,football ,Cricket",
        facility_tags=" Parking ",
    )
    assert ground["sport_tags"] == ["Football", "Cricket", "football"]
    assert ground["facility_tags"] == ["Parking"]


async def test_renter_cannot_create_ground(client, renter):
    response = await client.post("/api/grounds", json={"title": "Mine"}, headers=auth(renter["token"]))
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden_role"


async def test_create_ground_requires_token(client):
    response = await client.post("/api/grounds", json={"title": "Mine"})
    assert response.status_code == 401


async def test_create_ground_requires_title(client, owner):
    response = await client.post("/api/grounds", json={"description": "x"}, headers=auth(owner["token"]))
    assert response.status_code == 422


async def test_public_list_hides_unavailable_grounds(client, owner):
    visible = await create_ground(client, owner["token"], title="Visible")
    hidden = await create_ground(client, owner["token"], title="Hidden")
    await client.patch(f"/api/grounds/{hidden['id']}", json={"available": False}, headers=auth(owner["token"]))

    response = await client.get("/api/grounds")
    assert [g["id"] for g in response.json()] == [visible["id"]]

    response = await client.get("/api/grounds/owner", headers=auth(owner["token"]))
    assert [g["id"] for g in response.json()] == [visible["id"], hidden["id"]]


async def test_filter_by_sport(client, owner):
    football = await create_ground(client, owner["token"], sport_tags=["Football"])
    await create_ground(client, owner["token"], sport_tags=["Badminton"])

    response = await client.get("/api/grounds", params={"sport": "football"})
    assert [g["id"] for g in response.json()] == [football["id"]]


async def test_owner_list_requires_owner(client, renter):
    response = await client.get("/api/grounds/owner", headers=auth(renter["token"]))
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden_role"


async def test_owner_list_only_own_grounds(client, owner, ground):
    other_owner = await signup(client, "other-owner@example.com", role="owner")
    await create_ground(client, other_owner["token"], title="Elsewhere")

    response = await client.get("/api/grounds/owner", headers=auth(owner["token"]))
    assert [g["id"] for g in response.json()] == [ground["id"]]


async def test_get_ground(client, ground):
    response = await client.get(f"/api/grounds/{ground['id']}")
    assert response.status_code == 200
    assert response.json()["title"] == ground["title"]


async def test_get_unknown_ground(client):
    response = await client.get("/api/grounds/999")
    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


async def test_update_ground(client, owner, ground):
    response = await client.patch(
        f"/api/grounds/{ground['id']}",
        json={"title": "Green Turf Arena II", "price": {"amount": 650, "negotiable": True}},
        headers=auth(owner["token"]),
    )
    assert response.status_code == 200, response.text
    body = response.json()
    assert body["title"] == "Green Turf Arena II"
    assert body["price"] == {"amount": 650, "currency": "INR", "negotiable": True}
    # Untouched fields keep their values
    assert body["sport_tags"] == ["Football", "Cricket"]
    assert body["location"]["address"] == "12 MG Road, Pune"


async def test_update_by_other_owner_is_forbidden(client, ground):
    other_owner = await signup(client, "other-owner@example.com", role="owner")
    response = await client.patch(
        f"/api/grounds/{ground['id']}", json={"title": "Stolen"}, headers=auth(other_owner["token"])
    )
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden"


async def test_update_unknown_ground(client, owner):
    response = await client.patch("/api/grounds/999", json={"title": "x"}, headers=auth(owner["token"]))
    assert response.status_code == 404


async def test_upload_images(client, owner, ground):
    response = await client.post(
        f"/api/grounds/{ground['id']}/images",
        files=[
            ("thumbnail", ("thumb.jpg", b"thumb", "image/jpeg")),
            ("images", ("north end.jpg", b"one", "image/jpeg")),
            ("images", ("south.jpg", b"two", "image/jpeg")),
        ],
        headers=auth(owner["token"]),
    )

    assert response.status_code == 200, response.text
    body = response.json()
    assert body["thumbnail"].endswith("-thumb.jpg")
    assert len(body["images"]) == 2
    assert body["images"][0].endswith("-north-end.jpg")
    assert (await client.get(body["images"][1])).content == b"two"


async def test_upload_images_by_other_owner(client, ground):
    other_owner = await signup(client, "other-owner@example.com", role="owner")
    response = await client.post(
        f"/api/grounds/{ground['id']}/images",
        files=[("images", ("x.jpg", b"x", "image/jpeg"))],
        headers=auth(other_owner["token"]),
    )
    assert response.status_code == 403


async def test_update_refuses_null_for_required_fields(client, owner, ground):
    for field in ("sport_tags", "images", "title", "available"):
        response = await client.patch(
            f"/api/grounds/{ground['id']}", json={field: None}, headers=auth(owner["token"])
        )
        assert response.status_code == 422, field

    response = await client.get("/api/grounds")
    assert response.status_code == 200
    listed = response.json()
    assert [g["id"] for g in listed] == [ground["id"]]
    assert listed[0]["sport_tags"] == ["Football", "Cricket"]
    assert listed[0]["title"] == "Green Turf Arena"


async def test_update_can_clear_description(client, owner, ground):
    response = await client.patch(
        f"/api/grounds/{ground['id']}", json={"description": None}, headers=auth(owner["token"])
    )
    assert response.status_code == 200, response.text
    assert response.json()["description"] is None


async def test_renter_cannot_update_ground(client, renter, ground):
    response = await client.patch(
        f"/api/grounds/{ground['id']}", json={"title": "Mine now"}, headers=auth(renter["token"])
    )
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden_role"


async def test_renter_cannot_upload_images(client, renter, ground):
    response = await client.post(
        f"/api/grounds/{ground['id']}/images",
        files=[("images", ("x.jpg", b"x", "image/jpeg"))],
        headers=auth(renter["token"]),
    )
    assert response.status_code == 403
    assert response.json()["code"] == "forbidden_role"


async def test_same_filename_uploads_are_kept_apart(client, owner, ground):
    response = await client.post(
        f"/api/grounds/{ground['id']}/images",
        files=[
            ("images", ("pitch.jpg", b"first", "image/jpeg")),
            ("images", ("pitch.jpg", b"second", "image/jpeg")),
        ],
        headers=auth(owner["token"]),
    )

    assert response.status_code == 200, response.text
    first, second = response.json()["images"]
    assert first != second
    assert (await client.get(first)).content == b"first"
    assert (await client.get(second)).content == b"second"
