from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

from .builder import (
    CitationSource,
    FileResolver,
    UrlBuilder,
    build_tags,
    is_canonical_request,
)
from .headers import HeaderSink
from .hooks import ARTICLE_VIEW, PREPRINT_VIEW, REFERENCES, HookRegistry
from .records import (
    ApplicationKind,
    ContextRecord,
    IssueRecord,
    PubIdType,
    SubmissionRecord,
)

log = logging.getLogger(__name__)

_HOOK_KINDS: dict[str, ApplicationKind] = {
    ARTICLE_VIEW: ApplicationKind.JOURNAL_ARTICLE,
    PREPRINT_VIEW: ApplicationKind.PREPRINT,
}


@dataclass
class ViewRequest:
    """What a landing-page handler hands to the view hooks."""

    context: ContextRecord
    requested_args: list[str] = field(default_factory=list)
    headers: HeaderSink = field(default_factory=HeaderSink)


class GoogleScholarPlugin:
    """Injects Google Scholar meta tags into submission landing pages."""

    display_name = "Google Scholar Indexing"
    description = (
        "Enables Google Scholar indexing by adding citation meta tags "
        "to submission landing pages."
    )
    settings_file = "settings.xml"

    def __init__(
        self,
        hooks: HookRegistry,
        *,
        url_builder: UrlBuilder,
        pub_id_types: Iterable[PubIdType] = (),
        citations: CitationSource,
        files: FileResolver,
        enabled: bool = True,
    ) -> None:
        self.hooks = hooks
        self.url_builder = url_builder
        self.pub_id_types = list(pub_id_types)
        self.citations = citations
        self.files = files
        self.enabled = enabled
        self.category = ""
        self.path = ""

    def register(self, category: str, path: str) -> bool:
        self.category = category
        self.path = path
        if self.enabled:
            self.hooks.add(ARTICLE_VIEW, self.submission_view)
            self.hooks.add(PREPRINT_VIEW, self.submission_view)
        return True

    def submission_view(self, hook_name: str, args: list[Any]) -> bool:
        """
        View hook handler.

        Journal hook args: (request, issue, submission)
        Preprint hook args: (request, submission)

        Always returns False so later handlers still run.
        """
        kind = _HOOK_KINDS[hook_name]
        request: ViewRequest = args[0]
        issue: IssueRecord | None = None
        if kind is ApplicationKind.JOURNAL_ARTICLE:
            issue, submission = args[1], args[2]
        else:
            submission = args[1]

        if not is_canonical_request(request.requested_args):
            log.debug(
                "submission %s: versioned URL %s, no citation tags",
                submission.id,
                "/".join(request.requested_args),
            )
            return False

        tags = build_tags(
            kind,
            request.context,
            issue,
            submission,
            url_builder=self.url_builder,
            pub_id_types=self.pub_id_types,
            citations=self.citations,
            files=self.files,
            references_hook=self._references_hook,
        )
        request.headers.extend(tags)
        log.debug("submission %s: %d citation tags", submission.id, len(tags))
        return False

    def _references_hook(self, references: list[str], submission_id: int) -> None:
        self.hooks.call(REFERENCES, references, submission_id)


def dispatch_view(
    hooks: HookRegistry,
    request: ViewRequest,
    submission: SubmissionRecord,
    issue: IssueRecord | None = None,
) -> bool:
    """Fire the view hook matching the submission's application kind."""
    if submission.kind is ApplicationKind.PREPRINT:
        return hooks.call(PREPRINT_VIEW, request, submission)
    return hooks.call(ARTICLE_VIEW, request, issue, submission)
