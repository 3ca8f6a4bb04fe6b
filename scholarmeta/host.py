from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from flask import current_app, url_for

from .catalog import Catalog
from .hooks import HookRegistry
from .plugin import GoogleScholarPlugin
from .records import ApplicationKind, ContextRecord

EXTENSION_KEY = "scholarmeta"

PATH_SEGMENTS: dict[str, ApplicationKind] = {
    "article": ApplicationKind.JOURNAL_ARTICLE,
    "preprint": ApplicationKind.PREPRINT,
}


@dataclass
class HostState:
    catalog: Catalog
    hooks: HookRegistry
    plugin: GoogleScholarPlugin


def get_host() -> HostState:
    return current_app.extensions[EXTENSION_KEY]


def build_url(
    context: ContextRecord, path_segment: str, action: str, args: Sequence[str]
) -> str:
    """Absolute URL of a landing page ("view") or galley file ("download")."""
    parts = [str(a) for a in args]
    if action == "download":
        return url_for(
            "galley_download",
            context_path=context.path,
            segment=path_segment,
            best_id=parts[0],
            galley_id=parts[1],
            _external=True,
        )
    if action == "view":
        return url_for(
            "submission_view",
            context_path=context.path,
            segment=path_segment,
            rest="/".join(parts),
            _external=True,
        )
    raise ValueError(f"Unsupported action: {action!r}")
