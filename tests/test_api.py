from __future__ import annotations

from scholarmeta.app import create_app


def test_meta_api_lists_tags_in_emission_order(client):
    r = client.get("/api/jmeta/article/indexing/meta/")
    assert r.status_code == 200
    assert r.headers.get("X-Request-ID")
    data = r.get_json()

    assert data["submission_id"] == 42
    assert data["best_id"] == "indexing"
    assert data["kind"] == "ojs2"
    assert data["canonical"] is True

    keys = [t["key"] for t in data["tags"]]
    assert keys[:3] == [
        "googleScholarRevision",
        "googleScholarJournalTitle",
        "googleScholarJournalAbbrev",
    ]
    assert keys[-2:] == ["googleScholarReference0", "googleScholarReference1"]
    assert len(keys) == len(set(keys))


def test_meta_api_version_guard(client):
    r = client.get("/api/jmeta/article/indexing/meta/?version=2")
    assert r.status_code == 200
    data = r.get_json()
    assert data["canonical"] is False
    assert data["tags"] == []


def test_meta_api_errors(client):
    r = client.get("/api/jmeta/issue/42/meta/")
    assert r.status_code == 400
    err = r.get_json()["error"]
    assert err["code"] == "invalid_kind"
    assert err["details"]["allowed"] == ["article", "preprint"]
    assert err["request_id"] == r.headers["X-Request-ID"]

    r = client.get("/api/nope/article/42/meta/")
    assert r.status_code == 404
    assert r.get_json()["error"]["code"] == "context_not_found"

    r = client.get("/api/jmeta/article/999/meta/")
    assert r.status_code == 404
    assert r.get_json()["error"]["code"] == "submission_not_found"


def test_meta_api_malformed_date_is_internal_error(tmp_path, sample_catalog):
    pub = sample_catalog["contexts"][0]["submissions"][0]["publication"]
    pub["date_published"] = "sometime in May"
    app = create_app({"DATA_DIR": tmp_path, "CATALOG": sample_catalog, "DEBUG": True})

    r = app.test_client().get("/api/jmeta/article/indexing/meta/")
    assert r.status_code == 500
    err = r.get_json()["error"]
    assert err["code"] == "meta_failed"
    assert "ValueError" in err["details"]["traceback"]


def test_error_envelope_shape_and_request_ids(client):
    ok = client.get("/api/jmeta/article/indexing/meta/")
    missing = client.get("/api/jmeta/article/999/meta/")
    assert ok.headers["X-Request-ID"] != missing.headers["X-Request-ID"]

    err = missing.get_json()["error"]
    assert err == {
        "code": "submission_not_found",
        "message": "Submission not found",
        "request_id": missing.headers["X-Request-ID"],
    }


def test_landing_errors_are_html_not_json(client):
    r = client.get("/nope/article/view/42")
    assert r.status_code == 404
    assert r.mimetype == "text/html"
    assert "X-Request-ID" not in r.headers
