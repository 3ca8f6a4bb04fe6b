from __future__ import annotations

import logging
import traceback

from flask import Flask, current_app, request

from ..builder import is_canonical_request
from ..errors import BadRequest, InternalError, NotFound, json_response
from ..host import PATH_SEGMENTS, get_host
from ..plugin import ViewRequest, dispatch_view

log = logging.getLogger(__name__)


def register(app: Flask) -> None:
    @app.get("/api/<context_path>/<segment>/<best_id>/meta/")
    def api_submission_meta(context_path: str, segment: str, best_id: str):
        host = get_host()
        kind = PATH_SEGMENTS.get(segment)
        if kind is None:
            raise BadRequest(
                code="invalid_kind",
                message=f"Unknown submission path: {segment}",
                details={"allowed": sorted(PATH_SEGMENTS)},
            )

        context = host.catalog.context(context_path)
        if context is None:
            raise NotFound(code="context_not_found", message="Context not found")

        submission = host.catalog.submission(context_path, kind, best_id)
        if submission is None:
            raise NotFound(code="submission_not_found", message="Submission not found")

        requested_args = [best_id]
        version = (request.args.get("version") or "").strip()
        if version:
            requested_args += ["version", version]

        view = ViewRequest(context=context, requested_args=requested_args)
        try:
            dispatch_view(
                host.hooks,
                view,
                submission,
                host.catalog.issue(context_path, submission.issue_id),
            )
        except Exception:
            log.exception("meta tags failed for %s/%s/%s", context_path, segment, best_id)
            tb = traceback.format_exc()
            details = (
                {"traceback": tb} if bool(current_app.config.get("DEBUG")) else None
            )
            raise InternalError(
                code="meta_failed", message="Building meta tags failed", details=details
            )

        return json_response(
            {
                "submission_id": submission.id,
                "best_id": submission.best_id,
                "kind": kind.value,
                "canonical": is_canonical_request(requested_args),
                "tags": [e.to_json() for e in view.headers.entries()],
            }
        )
