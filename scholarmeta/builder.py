from __future__ import annotations

import logging
from typing import Callable, Iterable, Iterator, Optional, Protocol, Sequence

from .htmlutil import lang_code, meta_tag, strip_markup
from .records import (
    ApplicationKind,
    ContextRecord,
    IssueRecord,
    PubIdType,
    SubmissionFileRecord,
    SubmissionRecord,
    TagEntry,
    localized_with_fallback,
)
from .variants import variant_for

log = logging.getLogger(__name__)

GS_META_REVISION = "1.1"

PDF_MIMETYPE = "application/pdf"
HTML_MIMETYPE = "text/html"

# (context, path_segment, action, args) -> absolute URL
UrlBuilder = Callable[[ContextRecord, str, str, Sequence[str]], str]

# Mutates the reference list in place; receives the submission id.
ReferencesHook = Callable[[list[str], int], None]


class CitationSource(Protocol):
    def iter_raw_citations(self, publication_id: int) -> Iterator[str]: ...


class FileResolver(Protocol):
    def get(self, submission_file_id: int) -> Optional[SubmissionFileRecord]: ...


def is_canonical_request(requested_args: Sequence[str]) -> bool:
    """
    False for versioned landing pages (".../view/<id>/version/<n>").
    Only the latest version's canonical URL carries citation tags.
    """
    args = list(requested_args or [])
    return not (len(args) > 1 and args[1] == "version")


def _author_tags(
    submission: SubmissionRecord, primary_locale: str
) -> list[TagEntry]:
    publication = submission.current_publication
    locale = publication.locale
    out: list[TagEntry] = []
    for i, author in enumerate(publication.authors):
        out.append(
            TagEntry(
                f"googleScholarAuthor{i}",
                meta_tag("citation_author", author.full_name(locale)),
            )
        )
        affiliation = localized_with_fallback(
            author.affiliation, locale, primary_locale
        )
        if affiliation:
            out.append(
                TagEntry(
                    f"googleScholarAuthor{i}Affiliation",
                    meta_tag("citation_author_institution", affiliation),
                )
            )
    return out


def _localized_list_tags(
    key_prefix: str, values_by_locale: dict[str, list[str]]
) -> list[TagEntry]:
    # One counter across all locales keeps keys unique.
    out: list[TagEntry] = []
    i = 0
    for locale, values in (values_by_locale or {}).items():
        for value in values or []:
            out.append(
                TagEntry(
                    f"{key_prefix}{i}",
                    meta_tag("citation_keywords", value, lang=lang_code(locale)),
                )
            )
            i += 1
    return out


def _galley_tags(
    context: ContextRecord,
    submission: SubmissionRecord,
    path_segment: str,
    *,
    url_builder: UrlBuilder,
    files: FileResolver,
) -> list[TagEntry]:
    out: list[TagEntry] = []
    best_id = submission.best_id
    for i, galley in enumerate(submission.current_publication.galleys):
        file = files.get(galley.submission_file_id) if galley.submission_file_id else None
        if file is None:
            log.debug(
                "galley %s: submission file %s not found, skipped",
                galley.id,
                galley.submission_file_id,
            )
            continue

        if file.mimetype == PDF_MIMETYPE:
            url = url_builder(
                context, path_segment, "download", [best_id, galley.best_galley_id]
            )
            out.append(
                TagEntry(
                    f"googleScholarPdfUrl{i}",
                    meta_tag("citation_pdf_url", url, escape_content=False),
                )
            )
        elif file.mimetype == HTML_MIMETYPE:
            url = url_builder(
                context, path_segment, "view", [best_id, galley.best_galley_id]
            )
            out.append(
                TagEntry(
                    f"googleScholarHtmlUrl{i}",
                    meta_tag("citation_fulltext_html_url", url, escape_content=False),
                )
            )
    return out


def _reference_tags(
    submission: SubmissionRecord,
    *,
    citations: CitationSource,
    references_hook: ReferencesHook | None,
) -> list[TagEntry]:
    references = list(
        citations.iter_raw_citations(submission.current_publication.id)
    )
    if references_hook is not None:
        references_hook(references, submission.id)
    return [
        TagEntry(f"googleScholarReference{i}", meta_tag("citation_reference", ref))
        for i, ref in enumerate(references)
    ]


def build_tags(
    kind: ApplicationKind,
    context: ContextRecord,
    issue: IssueRecord | None,
    submission: SubmissionRecord,
    *,
    url_builder: UrlBuilder,
    pub_id_types: Iterable[PubIdType],
    citations: CitationSource,
    files: FileResolver,
    references_hook: ReferencesHook | None = None,
) -> list[TagEntry]:
    """
    Google Scholar meta tags for a submission landing page, in emission order.

    Optional fields that are absent produce no tag. Nothing is written
    anywhere: attaching the entries to a page is the caller's job.
    """
    variant = variant_for(kind)
    publication = submission.current_publication
    locale = publication.locale
    lang = lang_code(locale)

    tags: list[TagEntry] = [
        TagEntry("googleScholarRevision", meta_tag("gs_meta_revision", GS_META_REVISION))
    ]
    tags.extend(variant.container_tags(context))
    tags.extend(_author_tags(submission, context.primary_locale))

    tags.append(
        TagEntry(
            "googleScholarTitle",
            meta_tag(
                "citation_title",
                publication.full_title(locale, context.primary_locale),
            ),
        )
    )
    tags.append(TagEntry("googleScholarLanguage", meta_tag("citation_language", lang)))

    tags.extend(variant.date_tags(publication, issue))

    if publication.doi:
        tags.append(
            TagEntry("googleScholarPublicationDOI", meta_tag("citation_doi", publication.doi))
        )

    for pub_id_type in pub_id_types:
        value = publication.stored_pub_ids.get(pub_id_type.pub_id_type)
        if value:
            display = pub_id_type.display_type
            tags.append(
                TagEntry(
                    f"googleScholarPubId{display}",
                    meta_tag(f"citation_{display.lower()}", value),
                )
            )

    abstract_url = url_builder(context, variant.path_segment, "view", [submission.best_id])
    tags.append(
        TagEntry(
            "googleScholarHtmlUrl",
            meta_tag("citation_abstract_html_url", abstract_url, escape_content=False),
        )
    )

    abstract = localized_with_fallback(
        publication.abstract, locale, context.primary_locale
    )
    if abstract:
        tags.append(
            TagEntry(
                "googleScholarAbstract",
                meta_tag("citation_abstract", strip_markup(abstract), lang=lang),
            )
        )

    tags.extend(_localized_list_tags("googleScholarSubject", publication.subjects))
    tags.extend(_localized_list_tags("googleScholarKeyword", publication.keywords))

    tags.extend(
        _galley_tags(
            context,
            submission,
            variant.path_segment,
            url_builder=url_builder,
            files=files,
        )
    )
    tags.extend(
        _reference_tags(
            submission, citations=citations, references_hook=references_hook
        )
    )
    return tags
