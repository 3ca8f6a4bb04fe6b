from __future__ import annotations

import copy
from typing import Any

import pytest

from scholarmeta.app import create_app

SAMPLE_CATALOG: dict[str, Any] = {
    "pub_id_types": [{"pub_id_type": "other::urn", "display_type": "URN"}],
    "files": [
        {"id": 501, "mimetype": "application/pdf"},
        {"id": 502, "mimetype": "text/html"},
        {"id": 503, "mimetype": "application/epub+zip"},
    ],
    "contexts": [
        {
            "path": "jmeta",
            "primary_locale": "en",
            "name": {"en": "Journal of Metadata"},
            "abbreviation": {"en": "J. Meta."},
            "online_issn": "1234-5678",
            "issues": [
                {
                    "id": 7,
                    "year": 2023,
                    "volume": "12",
                    "number": "3",
                    "date_published": "2023-06-01",
                }
            ],
            "submissions": [
                {
                    "id": 42,
                    "kind": "ojs2",
                    "issue_id": 7,
                    "publication": {
                        "id": 420,
                        "locale": "en",
                        "url_path": "indexing",
                        "doi": "10.5555/jmeta.42",
                        "date_published": "2023-05-10",
                        "pages": "101-118",
                        "title": {"en": "Indexing Scholarly Landing Pages"},
                        "abstract": {
                            "en": "<p>How citation <em>meta tags</em> reach crawlers.</p>"
                        },
                        "subjects": {"en": ["Information science"]},
                        "keywords": {"en": ["metadata", "indexing"]},
                        "pub_ids": {"other::urn": "urn:nbn:de:0000-jmeta42"},
                        "authors": [
                            {
                                "given_name": {"en": "Ada"},
                                "family_name": {"en": "Lovelace"},
                                "affiliation": {"en": "X University"},
                            },
                            {
                                "given_name": {"en": "Charles"},
                                "family_name": {"en": "Babbage"},
                            },
                        ],
                        "galleys": [
                            {"id": 1, "submission_file_id": 501, "label": "PDF"},
                            {"id": 2, "submission_file_id": 502, "label": "HTML"},
                            {"id": 3, "submission_file_id": 503, "label": "EPUB"},
                        ],
                        "citations": [
                            {"raw_citation": "Roe, R. (2019). Crawlers & catalogs.", "seq": 2},
                            {"raw_citation": "Doe, J. (2020). Meta tags in practice.", "seq": 1},
                        ],
                    },
                }
            ],
        },
        {
            "path": "preprints",
            "primary_locale": "en",
            "name": {"en": "Open Preprint Server"},
            "submissions": [
                {
                    "id": 9,
                    "kind": "ops",
                    "publication": {
                        "id": 90,
                        "locale": "en",
                        "date_published": "2024-01-15",
                        "title": {"en": "A Preprint About Preprints"},
                        "authors": [
                            {
                                "given_name": {"en": "Grace"},
                                "family_name": {"en": "Hopper"},
                            }
                        ],
                    },
                }
            ],
        },
    ],
}


@pytest.fixture()
def sample_catalog() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_CATALOG)


@pytest.fixture()
def app(tmp_path, sample_catalog):
    app = create_app(
        {
            "DATA_DIR": tmp_path / "data",
            "CATALOG": sample_catalog,
            "SECRET_KEY": "test",
            "CITATION_PAGE_SIZE": 1,
        }
    )
    app.config.update(TESTING=True)
    return app


@pytest.fixture()
def client(app):
    return app.test_client()
