"""Middleware: report request IDs and open CORS."""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

REQUEST_ID_HEADER = "X-Request-ID"

# Client-supplied IDs end up in log lines; anything else is replaced
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def resolve_request_id(supplied: str | None) -> str:
    """Keep a well-formed client request ID, otherwise mint a UUID4."""
    if supplied and _REQUEST_ID_RE.fullmatch(supplied):
        return supplied
    return str(uuid.uuid4())


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each analysis request with an ID for log correlation.

    The reporter client sends ``X-Request-ID`` with every attempt, so all
    retries of one submission can be followed in the service logs. The ID is
    echoed on the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = rid
        return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Open CORS: answer every preflight and decorate every response.

    Any origin may call the API, whether or not the request carries an
    ``Origin`` header. Browser clients may read the request ID.
    """

    def __init__(self, app: ASGIApp, allow_headers: list[str]):
        super().__init__(app)
        self.cors_headers = {
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Headers": ", ".join(allow_headers),
            "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
            "Access-Control-Expose-Headers": REQUEST_ID_HEADER,
        }

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=200, headers=self.cors_headers)

        response = await call_next(request)
        response.headers.update(self.cors_headers)
        return response
