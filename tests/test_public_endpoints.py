from __future__ import annotations

import dataclasses

import pytest
from fastapi.testclient import TestClient

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


@pytest.fixture
def client(sandbox_settings) -> TestClient:
    import app as app_module

    return TestClient(app_module.create_app(sandbox_settings))


def test_send_index_html_on_accept_text_html(client):
    r = client.get("/does_not_exist", headers={"accept": HTML_ACCEPT})
    assert r.status_code == 200
    assert "<html" in r.text


def test_send_json_404_on_anything_but_text_html(client):
    r = client.get("/does_not_exist", headers={"accept": "application/json"})
    assert r.status_code == 404
    body = r.json()
    assert body["error"] == "Not Found"
    assert body["statusCode"] == 404


def test_serves_static_files_from_public_dir(client):
    r = client.get("/robots.txt")
    assert r.status_code == 200
    assert r.text == "User-agent: *\n"


def test_directory_root_serves_index(client):
    r = client.get("/", headers={"accept": "application/json"})
    assert r.status_code == 200
    assert "<html" in r.text


def test_hoodie_status_falls_back_to_development_version(client, monkeypatch):
    from importlib import metadata

    import endpoints.public_endpoints as public

    def _missing(name: str) -> str:
        raise metadata.PackageNotFoundError(name)

    monkeypatch.setattr(public.metadata, "version", _missing)
    assert public.resolve_version() == "development"


def test_hoodie_client_files(client):
    r = client.get("/hoodie/client.js")
    assert r.status_code == 200
    assert "hoodie client" in r.text

    # client.min.js is not present in the sandbox data dir
    r = client.get("/hoodie/client.min.js", headers={"accept": "application/json"})
    assert r.status_code == 404
    assert r.json()["error"] == "Not Found"


def test_json_404_when_app_has_no_index(sandbox_settings, tmp_path):
    import app as app_module

    (sandbox_settings.public_dir / "index.html").unlink()
    c = TestClient(app_module.create_app(sandbox_settings))

    r = c.get("/does_not_exist", headers={"accept": HTML_ACCEPT})
    assert r.status_code == 404
    assert r.json()["error"] == "Not Found"


def test_missing_public_dir_still_answers(sandbox_settings, tmp_path):
    import app as app_module

    settings = dataclasses.replace(sandbox_settings, public_dir=tmp_path / "nope")
    c = TestClient(app_module.create_app(settings))

    assert c.get("/hoodie").status_code == 200
    r = c.get("/anything", headers={"accept": "application/json"})
    assert r.status_code == 404
    assert r.json()["statusCode"] == 404
