from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

Localized = Mapping[str, str]

_LEADING_WORD_RX = re.compile(r"^[^\W\d_]+\W")
_ROMAN_RX = re.compile(r"^[MDCLXVUI]+\W", re.I)
_STRIP_WORD_RX = re.compile(r"^[^\W\d_]+[:.]?")


class ApplicationKind(str, Enum):
    """Which host application is rendering the landing page."""

    JOURNAL_ARTICLE = "ojs2"
    PREPRINT = "ops"


def pick_localized(values: Localized | None, locale: str) -> str:
    """
    Localized value for exactly *locale*, or "" when absent.
    Used for context settings, which have no cross-locale fallback.
    """
    if not values:
        return ""
    return str(values.get(locale) or "").strip()


def fallback_locale(
    values: Localized | None, locale: str, primary_locale: str = ""
) -> str:
    """
    Locale to read *values* in: *locale* if it has a value, then
    *primary_locale*, then the first locale with a value. "" when all are empty.
    """
    if not values:
        return ""
    for loc in (locale, primary_locale):
        if loc and pick_localized(values, loc):
            return loc
    for loc, v in values.items():
        if str(v or "").strip():
            return loc
    return ""


def localized_with_fallback(
    values: Localized | None, locale: str, primary_locale: str = ""
) -> str:
    """Value in *locale*, else in *primary_locale*, else the first non-empty one."""
    loc = fallback_locale(values, locale, primary_locale)
    return pick_localized(values, loc) if loc else ""


@dataclass(frozen=True)
class ContextRecord:
    path: str
    primary_locale: str
    name: dict[str, str] = field(default_factory=dict)
    abbreviation: dict[str, str] = field(default_factory=dict)
    acronym: dict[str, str] = field(default_factory=dict)
    online_issn: str = ""
    print_issn: str = ""
    issn: str = ""

    def localized_name(self, locale: str | None = None) -> str:
        return pick_localized(self.name, locale or self.primary_locale)


@dataclass(frozen=True)
class IssueRecord:
    id: int
    year: int | None = None
    volume: str = ""
    number: str = ""
    show_volume: bool = True
    show_number: bool = True
    date_published: str = ""


@dataclass(frozen=True)
class AuthorRecord:
    given_name: dict[str, str] = field(default_factory=dict)
    family_name: dict[str, str] = field(default_factory=dict)
    affiliation: dict[str, str] = field(default_factory=dict)

    def full_name(self, locale: str) -> str:
        """
        "Given Family" in *locale*. Each part falls back to the first locale
        that has it, since an author always has a display name.
        """
        given = localized_with_fallback(self.given_name, locale)
        family = localized_with_fallback(self.family_name, locale)
        return " ".join(p for p in (given, family) if p)


@dataclass(frozen=True)
class SubmissionFileRecord:
    id: int
    mimetype: str


@dataclass(frozen=True)
class GalleyRecord:
    id: int
    submission_file_id: int | None = None
    url_path: str = ""
    label: str = ""

    @property
    def best_galley_id(self) -> str:
        return self.url_path or str(self.id)


@dataclass(frozen=True)
class CitationRecord:
    raw_citation: str
    seq: int = 0


@dataclass(frozen=True)
class PubIdType:
    pub_id_type: str  # key in PublicationRecord.stored_pub_ids, e.g. "other::urn"
    display_type: str  # e.g. "URN"


@dataclass(frozen=True)
class PublicationRecord:
    id: int
    locale: str
    url_path: str = ""
    doi: str = ""
    date_published: str = ""
    pages: str = ""
    title: dict[str, str] = field(default_factory=dict)
    prefix: dict[str, str] = field(default_factory=dict)
    subtitle: dict[str, str] = field(default_factory=dict)
    abstract: dict[str, str] = field(default_factory=dict)
    subjects: dict[str, list[str]] = field(default_factory=dict)
    keywords: dict[str, list[str]] = field(default_factory=dict)
    stored_pub_ids: dict[str, str] = field(default_factory=dict)
    authors: list[AuthorRecord] = field(default_factory=list)
    galleys: list[GalleyRecord] = field(default_factory=list)

    def full_title(self, locale: str, primary_locale: str = "") -> str:
        """
        Prefix, title and subtitle, all read in the first locale that has a
        title: *locale*, then *primary_locale*, then any other.
        """
        loc = fallback_locale(self.title, locale, primary_locale)
        if not loc:
            return ""
        title = pick_localized(self.title, loc)
        prefix = pick_localized(self.prefix, loc)
        subtitle = pick_localized(self.subtitle, loc)
        if prefix:
            title = f"{prefix} {title}".strip()
        if subtitle:
            title = f"{title}: {subtitle}"
        return title

    def page_array(self) -> list[list[str]]:
        """
        Split `pages` into ranges: "pp. 12-19, 25" -> [["12", "19"], ["25"]].
        A leading word ("pp.", "p:") is dropped unless it is a roman numeral.
        """
        pages = (self.pages or "").strip()
        if _LEADING_WORD_RX.match(pages) and not _ROMAN_RX.match(pages):
            pages = _STRIP_WORD_RX.sub("", pages, count=1)
        pages = pages.strip()
        if not pages:
            return []
        out: list[list[str]] = []
        for rng in pages.split(","):
            out.append([p.strip() for p in rng.replace("--", "-").split("-", 1)])
        return out

    @property
    def starting_page(self) -> str:
        ranges = self.page_array()
        return ranges[0][0] if ranges else ""

    @property
    def ending_page(self) -> str:
        ranges = self.page_array()
        return ranges[-1][-1] if ranges else ""


@dataclass(frozen=True)
class SubmissionRecord:
    id: int
    current_publication: PublicationRecord
    context_path: str = ""
    kind: ApplicationKind = ApplicationKind.JOURNAL_ARTICLE
    issue_id: int | None = None

    @property
    def best_id(self) -> str:
        return self.current_publication.url_path or str(self.id)


@dataclass(frozen=True)
class TagEntry:
    key: str
    html: str

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key, "html": self.html}
