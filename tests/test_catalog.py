from __future__ import annotations

import json

import pytest

from scholarmeta.catalog import Catalog, CatalogError, CitationStore
from scholarmeta.records import ApplicationKind, CitationRecord


def test_submission_lookup_by_url_path_or_id(sample_catalog):
    catalog = Catalog.from_dict(sample_catalog)
    by_path = catalog.submission("jmeta", ApplicationKind.JOURNAL_ARTICLE, "indexing")
    by_id = catalog.submission("jmeta", ApplicationKind.JOURNAL_ARTICLE, "42")
    assert by_path is not None and by_path is by_id
    assert by_path.best_id == "indexing"

    assert catalog.submission("jmeta", ApplicationKind.PREPRINT, "42") is None
    assert catalog.submission("nope", ApplicationKind.JOURNAL_ARTICLE, "42") is None


def test_issue_lookup_is_scoped_to_context(sample_catalog):
    catalog = Catalog.from_dict(sample_catalog)
    issue = catalog.issue("jmeta", 7)
    assert issue is not None and issue.year == 2023
    assert catalog.issue("preprints", 7) is None
    assert catalog.issue("jmeta", None) is None


def test_citations_drain_every_page_in_seq_order():
    store = CitationStore(
        {
            1: [
                CitationRecord("c", seq=3),
                CitationRecord("a", seq=1),
                CitationRecord("b", seq=2),
            ]
        },
        page_size=2,
    )
    assert store.get_page(1, offset=0, limit=2) == [
        CitationRecord("a", seq=1),
        CitationRecord("b", seq=2),
    ]
    assert list(store.iter_raw_citations(1)) == ["a", "b", "c"]
    assert list(store.iter_raw_citations(99)) == []


def test_files_and_pub_id_types(sample_catalog):
    catalog = Catalog.from_dict(sample_catalog)
    assert catalog.files.get(501).mimetype == "application/pdf"
    assert catalog.files.get(12345) is None
    assert [p.display_type for p in catalog.pub_id_types] == ["URN"]


def test_invalid_catalog_raises():
    with pytest.raises(CatalogError):
        Catalog.from_dict({"contexts": [{"primary_locale": "en"}]})
    with pytest.raises(CatalogError):
        Catalog.from_dict({"contexts": [{"path": "x", "submissions": [{"id": 1, "kind": "wiki"}]}]})


def test_from_path(tmp_path, sample_catalog):
    p = tmp_path / "catalog.json"
    p.write_text(json.dumps(sample_catalog), encoding="utf-8")
    catalog = Catalog.from_path(p)
    assert catalog.context("jmeta").localized_name() == "Journal of Metadata"

    with pytest.raises(CatalogError):
        Catalog.from_path(tmp_path / "missing.json")

    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    with pytest.raises(CatalogError):
        Catalog.from_path(bad)
