from __future__ import annotations

from flask import Flask, render_template

from ..errors import NotFound
from ..host import PATH_SEGMENTS, get_host
from ..plugin import ViewRequest, dispatch_view
from ..records import localized_with_fallback


def register(app: Flask) -> None:
    @app.get("/<context_path>/<segment>/view/<path:rest>")
    def submission_view(context_path: str, segment: str, rest: str):
        host = get_host()
        kind = PATH_SEGMENTS.get(segment)
        context = host.catalog.context(context_path)
        if kind is None or context is None:
            raise NotFound(message="Page not found")

        requested_args = [a for a in rest.split("/") if a]
        if not requested_args:
            raise NotFound(message="Page not found")

        submission = host.catalog.submission(context_path, kind, requested_args[0])
        if submission is None:
            raise NotFound(message="Submission not found")

        issue = host.catalog.issue(context_path, submission.issue_id)
        request = ViewRequest(context=context, requested_args=requested_args)
        dispatch_view(host.hooks, request, submission, issue)

        publication = submission.current_publication
        locale = publication.locale
        return render_template(
            "landing.html",
            head_markup=request.headers.render(),
            journal_name=context.localized_name(),
            title=publication.full_title(locale, context.primary_locale),
            authors=[a.full_name(locale) for a in publication.authors],
            abstract=localized_with_fallback(
                publication.abstract, locale, context.primary_locale
            ),
            locale=locale,
        )

    @app.get("/<context_path>/<segment>/download/<best_id>/<galley_id>/")
    def galley_download(context_path: str, segment: str, best_id: str, galley_id: str):
        host = get_host()
        kind = PATH_SEGMENTS.get(segment)
        if kind is None or host.catalog.context(context_path) is None:
            raise NotFound(message="Page not found")

        submission = host.catalog.submission(context_path, kind, best_id)
        if submission is None:
            raise NotFound(message="Submission not found")

        galley = next(
            (
                g
                for g in submission.current_publication.galleys
                if g.best_galley_id == galley_id
            ),
            None,
        )
        if galley is None:
            raise NotFound(message="Galley not found")

        # File contents are not part of the catalog; answer with the label only.
        return f"{galley.label or galley.best_galley_id}\n", 200, {
            "Content-Type": "text/plain; charset=utf-8"
        }
