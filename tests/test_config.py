from __future__ import annotations

import json
from pathlib import Path

from scholarmeta.app import create_app
from scholarmeta.config import load_config

_ENV = (
    "DEBUG",
    "DATA_DIR",
    "CATALOG_PATH",
    "GOOGLE_SCHOLAR_ENABLED",
    "CITATION_PAGE_SIZE",
    "LOG_LEVEL",
    "SECRET_KEY",
)


def _clear_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    cfg = load_config(repo_root=tmp_path)

    assert cfg["DEBUG"] is False
    assert cfg["DATA_DIR"] == tmp_path / "data"
    assert cfg["CATALOG_PATH"] == tmp_path / "data" / "catalog.json"
    assert cfg["GOOGLE_SCHOLAR_ENABLED"] is True
    assert cfg["CITATION_PAGE_SIZE"] == 50
    assert cfg["LOG_LEVEL"] == "INFO"
    assert cfg["SECRET_KEY"] and cfg["SECRET_KEY"] != "scholarmeta-dev"


def test_env_overrides(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.setenv("DEBUG", "yes")
    monkeypatch.setenv("CATALOG_PATH", str(tmp_path / "c.json"))
    monkeypatch.setenv("GOOGLE_SCHOLAR_ENABLED", "off")
    monkeypatch.setenv("CITATION_PAGE_SIZE", "10")
    monkeypatch.setenv("LOG_LEVEL", "warning")

    cfg = load_config(repo_root=tmp_path)
    assert cfg["DEBUG"] is True
    assert cfg["CATALOG_PATH"] == tmp_path / "c.json"
    assert cfg["GOOGLE_SCHOLAR_ENABLED"] is False
    assert cfg["CITATION_PAGE_SIZE"] == 10
    assert cfg["LOG_LEVEL"] == "WARNING"
    assert cfg["SECRET_KEY"] == "scholarmeta-dev"


def test_bad_values_fall_back(monkeypatch, tmp_path):
    _clear_env(monkeypatch)
    monkeypatch.setenv("CITATION_PAGE_SIZE", "-3")
    monkeypatch.setenv("LOG_LEVEL", "chatty")
    monkeypatch.setenv("GOOGLE_SCHOLAR_ENABLED", "maybe")

    cfg = load_config(repo_root=tmp_path)
    assert cfg["CITATION_PAGE_SIZE"] == 50
    assert cfg["LOG_LEVEL"] == "INFO"
    assert cfg["GOOGLE_SCHOLAR_ENABLED"] is True


def test_app_loads_catalog_from_config_path(monkeypatch, tmp_path, sample_catalog):
    _clear_env(monkeypatch)
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps(sample_catalog), encoding="utf-8")
    monkeypatch.setenv("CATALOG_PATH", str(path))

    app = create_app(load_config(repo_root=Path(tmp_path)))
    r = app.test_client().get("/api/preprints/preprint/9/meta/")
    assert r.status_code == 200
    assert app.config["CITATION_PAGE_SIZE"] == 50
