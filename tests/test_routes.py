import pandas as pd
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

import app_state
import config_paths
from helpers.sitemap_utils import SCHEMA
from routers.error_handlers import register_error_handlers
from routers.sitemap_routes import router

NS = {"sm": SCHEMA}


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(config_paths, "SITEMAP_DOMAIN", "https://fly.example")
    monkeypatch.setattr(config_paths, "SITEMAP_INDEX_LOC", "https://fly.example/")
    monkeypatch.setattr(config_paths, "SITEMAP_ITEMS_PER_FILE", 2)
    monkeypatch.setattr(app_state, "PAGES_DF", pd.DataFrame(
        [
            {"loc": "/", "priority": "1.0", "changefreq": "daily", "lastmod": ""},
            {"loc": "/about", "priority": "", "changefreq": "", "lastmod": "2024-01-01"},
            {"loc": "/map", "priority": "0.7", "changefreq": "weekly", "lastmod": ""},
        ]
    ))
    app = FastAPI()
    app.include_router(router)
    register_error_handlers(app)
    return TestClient(app)


def test_first_document(client, parse_xml):
    response = client.get("/sitemap.xml")
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("application/xml")
    root = parse_xml(response.text)
    assert [e.text for e in root.findall(".//sm:loc", NS)] == [
        "https://fly.example/",
        "https://fly.example/about",
    ]


def test_numbered_document(client, parse_xml):
    response = client.get("/sitemap-1.xml")
    assert response.status_code == 200
    root = parse_xml(response.text)
    assert [e.text for e in root.findall(".//sm:loc", NS)] == ["https://fly.example/map"]


@pytest.mark.parametrize("path", ["/sitemap-2.xml", "/sitemap-0.xml"])
def test_unknown_document_is_404(client, path):
    assert client.get(path).status_code == 404


def test_index(client, parse_xml):
    response = client.get("/sitemap-index.xml")
    assert response.status_code == 200
    root = parse_xml(response.text)
    assert root.tag == f"{{{SCHEMA}}}sitemapindex"
    assert [e.text for e in root.findall(".//sm:loc", NS)] == [
        "https://fly.example/sitemap.xml",
        "https://fly.example/sitemap-1.xml",
    ]


def test_empty_dataset_serves_empty_urlset(client, monkeypatch, parse_xml):
    monkeypatch.setattr(app_state, "PAGES_DF", pd.DataFrame(columns=app_state.PAGE_COLUMNS))
    response = client.get("/sitemap.xml")
    assert response.status_code == 200
    assert list(parse_xml(response.text)) == []


def test_bad_lastmod_is_422(client, monkeypatch):
    monkeypatch.setattr(app_state, "PAGES_DF", pd.DataFrame([{"loc": "/x", "lastmod": "no such day"}]))
    response = client.get("/sitemap.xml")
    assert response.status_code == 422
    assert "no such day" in response.json()["detail"]


def test_invalid_row_is_422(client, monkeypatch):
    monkeypatch.setattr(app_state, "PAGES_DF", pd.DataFrame([{"loc": "/x", "priority": "7"}]))
    response = client.get("/sitemap.xml")
    assert response.status_code == 422
    assert response.json()["detail"] == "Invalid page data"


def test_app_loads_pages_file_on_startup(tmp_path, monkeypatch, parse_xml):
    import main

    pages = tmp_path / "pages.csv"
    pages.write_text("loc,priority\n/one,0.9\n/two,none\n", encoding="utf-8")
    monkeypatch.setattr(config_paths, "PAGES_FILE", pages)
    monkeypatch.setattr(config_paths, "SITEMAP_DOMAIN", "https://app.example")
    monkeypatch.setattr(app_state, "PAGES_DF", app_state.PAGES_DF)

    with TestClient(main.app) as app_client:
        response = app_client.get("/sitemap.xml")
    assert response.status_code == 200
    root = parse_xml(response.text)
    assert [e.text for e in root.findall(".//sm:loc", NS)] == [
        "https://app.example/one",
        "https://app.example/two",
    ]
    assert len(root.findall(".//sm:priority", NS)) == 1


def test_missing_pages_file_leaves_dataset_empty(tmp_path, monkeypatch):
    import main

    monkeypatch.setattr(config_paths, "PAGES_FILE", tmp_path / "absent.csv")
    monkeypatch.setattr(app_state, "PAGES_DF", app_state.PAGES_DF)
    assert main.load_pages_dataset().empty


def test_unrelated_value_error_is_not_page_data():
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/boom")
    def boom():
        raise ValueError("programming error")

    response = TestClient(app, raise_server_exceptions=False).get("/boom")
    assert response.status_code == 500
