from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Iterator

from pydantic import BaseModel, Field, ValidationError

from .records import (
    ApplicationKind,
    AuthorRecord,
    CitationRecord,
    ContextRecord,
    GalleyRecord,
    IssueRecord,
    PubIdType,
    PublicationRecord,
    SubmissionFileRecord,
    SubmissionRecord,
)


class CatalogError(Exception):
    """Catalog document is missing, unreadable or malformed."""


# ----------------------------- Document schema -----------------------------


class AuthorIn(BaseModel):
    given_name: dict[str, str] = Field(default_factory=dict)
    family_name: dict[str, str] = Field(default_factory=dict)
    affiliation: dict[str, str] = Field(default_factory=dict)


class GalleyIn(BaseModel):
    id: int
    submission_file_id: int | None = None
    url_path: str = ""
    label: str = ""


class CitationIn(BaseModel):
    raw_citation: str
    seq: int = 0


class PublicationIn(BaseModel):
    id: int
    locale: str
    url_path: str = ""
    doi: str = ""
    date_published: str = ""
    pages: str = ""
    title: dict[str, str] = Field(default_factory=dict)
    prefix: dict[str, str] = Field(default_factory=dict)
    subtitle: dict[str, str] = Field(default_factory=dict)
    abstract: dict[str, str] = Field(default_factory=dict)
    subjects: dict[str, list[str]] = Field(default_factory=dict)
    keywords: dict[str, list[str]] = Field(default_factory=dict)
    pub_ids: dict[str, str] = Field(default_factory=dict)
    authors: list[AuthorIn] = Field(default_factory=list)
    galleys: list[GalleyIn] = Field(default_factory=list)
    citations: list[CitationIn] = Field(default_factory=list)


class SubmissionIn(BaseModel):
    id: int
    kind: ApplicationKind = ApplicationKind.JOURNAL_ARTICLE
    issue_id: int | None = None
    publication: PublicationIn


class IssueIn(BaseModel):
    id: int
    year: int | None = None
    volume: str = ""
    number: str = ""
    show_volume: bool = True
    show_number: bool = True
    date_published: str = ""


class ContextIn(BaseModel):
    path: str
    primary_locale: str = "en"
    name: dict[str, str] = Field(default_factory=dict)
    abbreviation: dict[str, str] = Field(default_factory=dict)
    acronym: dict[str, str] = Field(default_factory=dict)
    online_issn: str = ""
    print_issn: str = ""
    issn: str = ""
    issues: list[IssueIn] = Field(default_factory=list)
    submissions: list[SubmissionIn] = Field(default_factory=list)


class FileIn(BaseModel):
    id: int
    mimetype: str


class PubIdTypeIn(BaseModel):
    pub_id_type: str
    display_type: str


class CatalogIn(BaseModel):
    contexts: list[ContextIn] = Field(default_factory=list)
    files: list[FileIn] = Field(default_factory=list)
    pub_id_types: list[PubIdTypeIn] = Field(default_factory=list)


# ----------------------------- Collaborators -----------------------------


class FileIndex:
    """Submission file lookup by id."""

    def __init__(self, files: dict[int, SubmissionFileRecord]) -> None:
        self._files = files

    def get(self, submission_file_id: int) -> SubmissionFileRecord | None:
        return self._files.get(submission_file_id)


class CitationStore:
    """
    Parsed citations per publication, read back in pages of `page_size`.
    Order is `seq`, then insertion order.
    """

    def __init__(
        self, citations: dict[int, list[CitationRecord]], *, page_size: int = 50
    ) -> None:
        self._citations = {
            pid: sorted(rows, key=lambda c: c.seq) for pid, rows in citations.items()
        }
        self.page_size = max(1, int(page_size))

    def get_page(
        self, publication_id: int, *, offset: int, limit: int
    ) -> list[CitationRecord]:
        rows = self._citations.get(publication_id, [])
        return rows[offset : offset + limit]

    def iter_citations(self, publication_id: int) -> Iterator[CitationRecord]:
        offset = 0
        while True:
            page = self.get_page(publication_id, offset=offset, limit=self.page_size)
            if not page:
                return
            yield from page
            offset += len(page)

    def iter_raw_citations(self, publication_id: int) -> Iterator[str]:
        for c in self.iter_citations(publication_id):
            yield c.raw_citation


def _publication_record(p: PublicationIn) -> PublicationRecord:
    return PublicationRecord(
        id=p.id,
        locale=p.locale,
        url_path=p.url_path,
        doi=p.doi,
        date_published=p.date_published,
        pages=p.pages,
        title=dict(p.title),
        prefix=dict(p.prefix),
        subtitle=dict(p.subtitle),
        abstract=dict(p.abstract),
        subjects={k: list(v) for k, v in p.subjects.items()},
        keywords={k: list(v) for k, v in p.keywords.items()},
        stored_pub_ids=dict(p.pub_ids),
        authors=[
            AuthorRecord(
                given_name=dict(a.given_name),
                family_name=dict(a.family_name),
                affiliation=dict(a.affiliation),
            )
            for a in p.authors
        ],
        galleys=[
            GalleyRecord(
                id=g.id,
                submission_file_id=g.submission_file_id,
                url_path=g.url_path,
                label=g.label,
            )
            for g in p.galleys
        ],
    )


class Catalog:
    """In-memory host state loaded from a JSON catalog document."""

    def __init__(self, doc: CatalogIn, *, citation_page_size: int = 50) -> None:
        self._contexts: dict[str, ContextRecord] = {}
        self._issues: dict[tuple[str, int], IssueRecord] = {}
        self._submissions: dict[str, list[SubmissionRecord]] = {}
        citations: dict[int, list[CitationRecord]] = {}

        for c in doc.contexts:
            self._contexts[c.path] = ContextRecord(
                path=c.path,
                primary_locale=c.primary_locale,
                name=dict(c.name),
                abbreviation=dict(c.abbreviation),
                acronym=dict(c.acronym),
                online_issn=c.online_issn,
                print_issn=c.print_issn,
                issn=c.issn,
            )
            for i in c.issues:
                self._issues[(c.path, i.id)] = IssueRecord(**i.model_dump())

            subs: list[SubmissionRecord] = []
            for s in c.submissions:
                subs.append(
                    SubmissionRecord(
                        id=s.id,
                        current_publication=_publication_record(s.publication),
                        context_path=c.path,
                        kind=s.kind,
                        issue_id=s.issue_id,
                    )
                )
                citations[s.publication.id] = [
                    CitationRecord(raw_citation=r.raw_citation, seq=r.seq)
                    for r in s.publication.citations
                ]
            self._submissions[c.path] = subs

        self.files = FileIndex(
            {f.id: SubmissionFileRecord(id=f.id, mimetype=f.mimetype) for f in doc.files}
        )
        self.citations = CitationStore(citations, page_size=citation_page_size)
        self.pub_id_types = [
            PubIdType(pub_id_type=p.pub_id_type, display_type=p.display_type)
            for p in doc.pub_id_types
        ]

    @classmethod
    def from_dict(cls, data: Any, *, citation_page_size: int = 50) -> "Catalog":
        try:
            doc = CatalogIn.model_validate(data)
        except ValidationError as e:
            raise CatalogError(f"Invalid catalog: {e}") from e
        return cls(doc, citation_page_size=citation_page_size)

    @classmethod
    def from_path(cls, path: Path, *, citation_page_size: int = 50) -> "Catalog":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError as e:
            raise CatalogError(f"Catalog not found: {path}") from e
        except json.JSONDecodeError as e:
            raise CatalogError(f"Catalog is not valid JSON: {path}") from e
        return cls.from_dict(data, citation_page_size=citation_page_size)

    def context(self, path: str) -> ContextRecord | None:
        return self._contexts.get(path)

    def issue(self, context_path: str, issue_id: int | None) -> IssueRecord | None:
        if issue_id is None:
            return None
        return self._issues.get((context_path, issue_id))

    def submission(
        self, context_path: str, kind: ApplicationKind, best_id: str
    ) -> SubmissionRecord | None:
        """Match on publication url_path first, then on the numeric submission id."""
        subs = [s for s in self._submissions.get(context_path, []) if s.kind is kind]
        for s in subs:
            if s.current_publication.url_path and s.current_publication.url_path == best_id:
                return s
        for s in subs:
            if str(s.id) == best_id:
                return s
        return None

    def submissions(self, context_path: str) -> list[SubmissionRecord]:
        return list(self._submissions.get(context_path, []))
