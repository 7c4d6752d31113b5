"""
Review Board Backend — Permissive CORS Middleware
==================================================

What:  Attaches the same three cross-origin headers to every response and
       answers OPTIONS pre-flight requests directly.
Why not CORSMiddleware: Starlette's middleware only adds headers when the
       request carries an Origin header, and only short-circuits OPTIONS
       when Access-Control-Request-Method is present. This API promises the
       headers on every response, error responses included, and a bare 200
       for every OPTIONS request.

Headers:
    Access-Control-Allow-Origin:  *
    Access-Control-Allow-Methods: GET, POST, DELETE, OPTIONS
    Access-Control-Allow-Headers: Content-Type
"""

from typing import Dict

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

CORS_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


def apply_cors_headers(response: Response) -> Response:
    """Set the CORS headers on `response` in place and return it."""
    for name, value in CORS_HEADERS.items():
        response.headers[name] = value
    return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """
    OPTIONS → 200 with an empty body and the CORS headers, never routed.
    Anything else → routed as usual, CORS headers added to the response.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.method == "OPTIONS":
            return apply_cors_headers(Response(status_code=200))

        response = await call_next(request)
        return apply_cors_headers(response)
