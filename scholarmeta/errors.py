from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask import Flask, Response, g, jsonify, render_template, request


@dataclass(frozen=True)
class APIError(Exception):
    status: int
    code: str
    message: str
    details: dict[str, Any] | None = None

    def to_json(self, rid: str) -> dict[str, Any]:
        err: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "request_id": rid,
        }
        if self.details:
            err["details"] = self.details
        return {"error": err}


class BadRequest(APIError):
    def __init__(
        self,
        *,
        code: str = "bad_request",
        message: str = "Bad request",
        details: dict[str, Any] | None = None,
        status: int = 400,
    ) -> None:
        super().__init__(status=status, code=code, message=message, details=details)


class NotFound(APIError):
    def __init__(
        self,
        *,
        code: str = "not_found",
        message: str = "Not found",
        details: dict[str, Any] | None = None,
        status: int = 404,
    ) -> None:
        super().__init__(status=status, code=code, message=message, details=details)


class InternalError(APIError):
    def __init__(
        self,
        *,
        code: str = "internal_error",
        message: str = "Internal error",
        details: dict[str, Any] | None = None,
        status: int = 500,
    ) -> None:
        super().__init__(status=status, code=code, message=message, details=details)


def json_response(body: dict[str, Any], status: int = 200) -> tuple[Response, int]:
    """JSON body stamped with the id `create_app` assigns to every request."""
    resp = jsonify(body)
    resp.headers["X-Request-ID"] = g.request_id
    return resp, status


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(APIError)
    def _handle_api_error(err: APIError):
        status = int(err.status)
        # Landing pages get a plain HTML error page, /api/ gets the JSON envelope.
        if not request.path.startswith("/api/"):
            body = render_template("error.html", status=status, message=str(err.message))
            return body, status
        return json_response(err.to_json(g.request_id), status)
