from __future__ import annotations

from dataclasses import dataclass

from .dates import format_date, year_of
from .htmlutil import meta_tag
from .records import (
    ApplicationKind,
    ContextRecord,
    IssueRecord,
    PublicationRecord,
    TagEntry,
    pick_localized,
)
from .textutil import first_nonempty


@dataclass(frozen=True)
class JournalVariant:
    """Journal articles: journal identity, issue-aware dates, pagination."""

    kind: ApplicationKind = ApplicationKind.JOURNAL_ARTICLE
    path_segment: str = "article"

    def container_tags(self, context: ContextRecord) -> list[TagEntry]:
        locale = context.primary_locale
        out = [
            TagEntry(
                "googleScholarJournalTitle",
                meta_tag("citation_journal_title", context.localized_name()),
            )
        ]

        abbrev = first_nonempty(
            pick_localized(context.abbreviation, locale),
            pick_localized(context.acronym, locale),
        )
        if abbrev:
            out.append(
                TagEntry(
                    "googleScholarJournalAbbrev",
                    meta_tag("citation_journal_abbrev", abbrev),
                )
            )

        issn = first_nonempty(context.online_issn, context.print_issn, context.issn)
        if issn:
            out.append(TagEntry("googleScholarIssn", meta_tag("citation_issn", issn)))
        return out

    def date_tags(
        self, publication: PublicationRecord, issue: IssueRecord | None
    ) -> list[TagEntry]:
        out: list[TagEntry] = []

        # Publication date wins unless the issue is dated to another year.
        published = publication.date_published
        if published and (
            issue is None or not issue.year or issue.year == year_of(published)
        ):
            out.append(
                TagEntry(
                    "googleScholarDate",
                    meta_tag("citation_date", format_date(published)),
                )
            )
        elif issue is not None and issue.year:
            out.append(
                TagEntry("googleScholarDate", meta_tag("citation_date", issue.year))
            )
        elif issue is not None and issue.date_published:
            out.append(
                TagEntry(
                    "googleScholarDate",
                    meta_tag("citation_date", format_date(issue.date_published)),
                )
            )

        if issue is not None:
            if issue.show_volume and issue.volume:
                out.append(
                    TagEntry(
                        "googleScholarVolume", meta_tag("citation_volume", issue.volume)
                    )
                )
            if issue.show_number and issue.number:
                out.append(
                    TagEntry(
                        "googleScholarNumber", meta_tag("citation_issue", issue.number)
                    )
                )

        if publication.pages:
            start = publication.starting_page
            if start:
                out.append(
                    TagEntry("googleScholarStartPage", meta_tag("citation_firstpage", start))
                )
            end = publication.ending_page
            if end:
                out.append(
                    TagEntry("googleScholarEndPage", meta_tag("citation_lastpage", end))
                )
        return out


@dataclass(frozen=True)
class PreprintVariant:
    """Preprint servers: publisher identity and an online date only."""

    kind: ApplicationKind = ApplicationKind.PREPRINT
    path_segment: str = "preprint"

    def container_tags(self, context: ContextRecord) -> list[TagEntry]:
        return [
            TagEntry(
                "googleScholarPublisher",
                meta_tag("citation_publisher", context.localized_name()),
            )
        ]

    def date_tags(
        self, publication: PublicationRecord, issue: IssueRecord | None
    ) -> list[TagEntry]:
        if not publication.date_published:
            return []
        return [
            TagEntry(
                "googleScholarDate",
                meta_tag("citation_online_date", format_date(publication.date_published)),
            )
        ]


Variant = JournalVariant | PreprintVariant

_VARIANTS: dict[ApplicationKind, Variant] = {
    ApplicationKind.JOURNAL_ARTICLE: JournalVariant(),
    ApplicationKind.PREPRINT: PreprintVariant(),
}


def variant_for(kind: ApplicationKind) -> Variant:
    return _VARIANTS[ApplicationKind(kind)]
