import pytest

from careers.application.careers.editor import load_editor
from careers.application.careers.page_config import get_page_config

HERO = {
    "id": "hero-1",
    "type": "hero",
    "heading": "Build robots with us",
    "subheading": "We are hiring",
    "backgroundImageUrl": "",
}


def put_page(client, headers, **document):
    body = {"brand_color": "#ff0000", "config": [HERO]}
    body.update(document)
    return client.put("/api/v1/companies/acme/page", json=body, headers=headers)


def test_get_page_starts_empty(client, auth_headers):
    response = client.get("/api/v1/companies/acme/page", headers=auth_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body["config"] == []
    assert body["state"] == "draft_only"
    assert body["published_config"] is None
    assert body["brand_color"] == "#3b82f6"


def test_save_draft_normalizes_blocks(client, auth_headers):
    grid = {"id": "grid-1", "type": "values_grid", "heading": "Values", "items": [{"title": "Trust"}]}

    response = put_page(client, auth_headers, config=[HERO, grid])

    assert response.status_code == 200
    body = response.get_json()
    assert body["config"][1]["items"] == [{"title": "Trust", "text": "", "image_url": ""}]
    assert [e["field"] for e in body["errors"]] == ["config.1.items.0.text"]


def test_invalid_draft_still_saves(client, auth_headers):
    response = put_page(client, auth_headers, brand_color="#12", config=[dict(HERO, heading="")])

    assert response.status_code == 200
    fields = [e["field"] for e in response.get_json()["errors"]]
    assert fields == ["brand_color", "config.0.heading"]


def test_save_draft_rejects_malformed_config(client, auth_headers):
    assert put_page(client, auth_headers, config={"id": "x"}).status_code == 400

    response = put_page(client, auth_headers, config=["not a block"])
    assert response.status_code == 400
    assert response.get_json()["error"] == "InvariantViolation"


def test_add_block(client, auth_headers):
    response = client.post("/api/v1/companies/acme/page/blocks", json={"type": "values_grid"}, headers=auth_headers)

    assert response.status_code == 201
    body = response.get_json()
    assert body["index"] == 0
    assert len(body["block"]["items"]) == 3
    assert "heading" in [e["field"] for e in body["errors"]]


def test_add_unknown_block_type(client, auth_headers):
    response = client.post("/api/v1/companies/acme/page/blocks", json={"type": "carousel"}, headers=auth_headers)

    assert response.status_code == 400


def test_update_block(client, auth_headers):
    put_page(client, auth_headers)

    response = client.put(
        "/api/v1/companies/acme/page/blocks/0",
        json={"heading": "New heading", "subheading": "Still hiring"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert response.get_json()["block"]["heading"] == "New heading"
    assert response.get_json()["errors"] == []


def test_update_block_cannot_change_type(client, auth_headers):
    put_page(client, auth_headers)

    response = client.put(
        "/api/v1/companies/acme/page/blocks/0",
        json={"type": "features"},
        headers=auth_headers,
    )

    assert response.status_code == 400


def test_missing_block_index_is_404(client, auth_headers):
    put_page(client, auth_headers)

    assert client.delete("/api/v1/companies/acme/page/blocks/5", headers=auth_headers).status_code == 404
    assert client.put("/api/v1/companies/acme/page/blocks/5", json={}, headers=auth_headers).status_code == 404


def test_move_and_remove_blocks(client, auth_headers):
    second = dict(HERO, id="hero-2")
    put_page(client, auth_headers, config=[HERO, second])

    moved = client.post("/api/v1/companies/acme/page/blocks/0/move", json={"direction": "down"}, headers=auth_headers)
    assert moved.get_json()["moved"] is True
    assert [b["id"] for b in moved.get_json()["config"]] == ["hero-2", "hero-1"]

    noop = client.post("/api/v1/companies/acme/page/blocks/0/move", json={"direction": "up"}, headers=auth_headers)
    assert noop.get_json()["moved"] is False

    bad = client.post("/api/v1/companies/acme/page/blocks/0/move", json={"direction": "sideways"}, headers=auth_headers)
    assert bad.status_code == 400

    removed = client.delete("/api/v1/companies/acme/page/blocks/0", headers=auth_headers)
    assert removed.get_json()["removed"] == "hero-2"

    page = client.get("/api/v1/companies/acme/page", headers=auth_headers).get_json()
    assert [b["id"] for b in page["config"]] == ["hero-1"]


def test_publish_copies_draft(client, auth_headers):
    put_page(client, auth_headers)

    response = client.post("/api/v1/companies/acme/page/publish", headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json()["state"] == "published"
    assert response.get_json()["changed"] is True

    page = client.get("/api/v1/companies/acme/page", headers=auth_headers).get_json()
    assert page["published_config"] == page["config"]
    assert page["state"] == "published"


def test_publish_twice_is_idempotent(client, auth_headers):
    put_page(client, auth_headers)

    first = client.post("/api/v1/companies/acme/page/publish", headers=auth_headers).get_json()
    second = client.post("/api/v1/companies/acme/page/publish", headers=auth_headers).get_json()

    assert second["changed"] is False
    assert second["published_at"] == first["published_at"]


def test_publish_refuses_invalid_draft(client, auth_headers):
    put_page(client, auth_headers, config=[dict(HERO, heading="")])

    response = client.post("/api/v1/companies/acme/page/publish", headers=auth_headers)

    assert response.status_code == 422
    assert [f["field"] for f in response.get_json()["fields"]] == ["config.0.heading"]

    page = client.get("/api/v1/companies/acme/page", headers=auth_headers).get_json()
    assert page["state"] == "draft_only"


def test_later_draft_edits_do_not_touch_published(client, auth_headers):
    put_page(client, auth_headers)
    client.post("/api/v1/companies/acme/page/publish", headers=auth_headers)

    put_page(client, auth_headers, config=[dict(HERO, heading="Draft only")])

    page = client.get("/api/v1/companies/acme/page", headers=auth_headers).get_json()
    assert page["published_config"][0]["heading"] == "Build robots with us"
    assert page["config"][0]["heading"] == "Draft only"


def test_editor_autosave_writes_draft(app, company, timers):
    with app.app_context():
        editor = load_editor(company_id=company.id, autosave=True, timer_factory=timers)
        editor.add_block("hero")
        editor.add_block("features")

        timers.created[-1].fire()

        page_config = get_page_config(company_id=company.id)
        assert [b["type"] for b in page_config.config] == ["hero", "features"]
        assert not editor.dirty


@pytest.mark.parametrize("method, path", [
    ("get", "/api/v1/companies/acme/page"),
    ("post", "/api/v1/companies/acme/page/publish"),
    ("get", "/api/v1/companies/acme/jobs"),
    ("get", "/api/v1/companies/acme/audit"),
])
def test_other_company_cannot_touch_page(client, company, other_headers, method, path):
    response = getattr(client, method)(path, headers=other_headers)

    assert response.status_code == 403


def test_autosave_uses_configured_debounce(app, company, timers):
    with app.app_context():
        editor = load_editor(company_id=company.id, autosave=True, timer_factory=timers)
        editor.add_block("hero")

    assert timers.created[0].delay == app.config["AUTOSAVE_DEBOUNCE_SECONDS"]


def test_block_with_non_string_type_saves_with_type_error(client, auth_headers):
    response = put_page(client, auth_headers, config=[{"type": ["hero"]}, HERO])

    assert response.status_code == 200
    body = response.get_json()
    assert [e["field"] for e in body["errors"]] == ["config.0.type"]
    assert body["config"][0]["type"] == ["hero"]


def test_missing_block_ids_are_assigned_once_on_save(client, auth_headers):
    id_less = {key: value for key, value in HERO.items() if key != "id"}

    saved = put_page(client, auth_headers, config=[id_less]).get_json()
    block_id = saved["config"][0]["id"]

    assert block_id
    assert saved["errors"] == []
    again = client.get("/api/v1/companies/acme/page", headers=auth_headers).get_json()
    assert again["config"][0]["id"] == block_id


@pytest.mark.parametrize("path", [
    "/api/v1/companies/acme/page/blocks",
    "/api/v1/companies/acme/page/blocks/0/move",
])
def test_block_routes_reject_non_object_bodies(client, auth_headers, path):
    put_page(client, auth_headers)

    response = client.post(path, json=["hero"], headers=auth_headers)

    assert response.status_code == 400


def test_add_block_rejects_non_string_type(client, auth_headers):
    response = client.post("/api/v1/companies/acme/page/blocks", json={"type": ["hero"]}, headers=auth_headers)

    assert response.status_code == 400
