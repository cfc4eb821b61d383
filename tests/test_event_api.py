from conftest import HOST_PIN


def test_config_defaults(client):
    body = client.get("/api/config").get_json()
    assert body["title"] == "The Peterson's Annual Dinner"
    assert body["date"] == "2024-12-20"
    assert body["secretSantaEnabled"] is False
    assert body["secretSantaGiftLimit"] == 20
    assert body["secretSantaDrawCompleted"] is False


def test_config_patch(client):
    resp = client.patch(
        "/api/config",
        json={"title": "Winter Supper", "secretSantaGiftLimit": 35, "backgroundImageUrl": None},
    )
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["title"] == "Winter Supper"
    assert body["secretSantaGiftLimit"] == 35
    assert client.get("/api/config").get_json()["title"] == "Winter Supper"


def test_config_patch_rejects_bad_data(client):
    assert client.patch("/api/config", json={"secretSantaDrawCompleted": True}).status_code == 400
    assert client.patch("/api/config", json={"nope": 1}).status_code == 400
    assert client.patch("/api/config", json={"secretSantaGiftLimit": "ten"}).status_code == 400
    assert client.patch("/api/config", json={"secretSantaGiftLimit": True}).status_code == 400
    assert client.patch("/api/config", json={"title": None}).status_code == 400
    assert client.patch("/api/config", json=["title"]).status_code == 400

    # A bad field in the payload leaves the good ones unapplied.
    resp = client.patch("/api/config", json={"title": "Changed", "secretSantaEnabled": "yes"})
    assert resp.status_code == 400
    assert client.get("/api/config").get_json()["title"] == "The Peterson's Annual Dinner"


def test_items_crud(client):
    resp = client.post("/api/items", json={"name": "Lasagna"})
    assert resp.status_code == 201
    item = resp.get_json()
    assert item["assignee"] is None

    resp = client.patch(f"/api/items/{item['id']}/assignee", json={"assignee": "Maria"})
    assert resp.get_json()["assignee"] == "Maria"

    resp = client.patch(f"/api/items/{item['id']}/assignee", json={"assignee": ""})
    assert resp.get_json()["assignee"] is None

    assert [i["name"] for i in client.get("/api/items").get_json()] == ["Lasagna"]

    assert client.delete(f"/api/items/{item['id']}").status_code == 204
    assert client.get("/api/items").get_json() == []
    assert client.delete(f"/api/items/{item['id']}").status_code == 404
    assert client.patch("/api/items/999/assignee", json={"assignee": "x"}).status_code == 404


def test_item_requires_name(client):
    assert client.post("/api/items", json={"name": "  "}).status_code == 400
    assert client.post("/api/items", json={}).status_code == 400


def test_rsvp_claims_item(client):
    item = client.post("/api/items", json={"name": "Pie"}).get_json()

    resp = client.post(
        "/api/rsvps",
        json={"firstName": "Sam", "attending": True, "plusOne": True, "itemId": item["id"]},
    )
    assert resp.status_code == 201
    rsvp = resp.get_json()
    assert rsvp["firstName"] == "Sam"
    assert rsvp["plusOne"] is True
    assert rsvp["itemId"] == item["id"]

    items = client.get("/api/items").get_json()
    assert items[0]["assignee"] == "Sam"
    assert len(client.get("/api/rsvps").get_json()) == 1


def test_rsvp_validation(client):
    assert client.post("/api/rsvps", json={"attending": True}).status_code == 400
    assert client.post("/api/rsvps", json={"firstName": "Sam"}).status_code == 400
    assert client.post("/api/rsvps", json={"firstName": "Sam", "attending": "yes"}).status_code == 400
    resp = client.post("/api/rsvps", json={"firstName": "Sam", "attending": False, "itemId": 42})
    assert resp.status_code == 400
    assert client.get("/api/rsvps").get_json() == []


def test_deleting_item_detaches_rsvps(client):
    item = client.post("/api/items", json={"name": "Salad"}).get_json()
    client.post("/api/rsvps", json={"firstName": "Kim", "attending": True, "itemId": item["id"]})

    client.delete(f"/api/items/{item['id']}")
    assert client.get("/api/rsvps").get_json()[0]["itemId"] is None


def test_admin_validate(client):
    assert client.post("/api/admin/validate", json={"pin": HOST_PIN}).get_json() == {"valid": True}
    assert client.post("/api/admin/validate", json={"pin": "1234"}).get_json() == {"valid": False}
    resp = client.post("/api/admin/validate", json={})
    assert resp.status_code == 200
    assert resp.get_json() == {"valid": False}


def test_unknown_route_is_json(client):
    resp = client.get("/api/nothing-here")
    assert resp.status_code == 404
    assert "error" in resp.get_json()
