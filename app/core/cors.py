# app/core/cors.py
"""
CORS handling for the /api routes.

Starlette's CORSMiddleware cannot express the rule mobile clients rely
on (no Origin header => wildcard origin with credentials turned off),
so the headers are computed here:

  - development: echo the Origin, or "*" when there is none
  - production, allow-listed Origin: echo it, credentials allowed
  - production, no Origin (mobile apps): "*", credentials "false"
  - production, unknown Origin: no Access-Control-Allow-Origin at all
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.config import Settings

ALLOW_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS"
ALLOW_HEADERS = "Content-Type, Authorization, Accept, X-Requested-With"


def cors_headers(origin: str | None, settings: Settings) -> dict[str, str]:
    origin = origin or ""
    headers = {
        "Access-Control-Allow-Methods": ALLOW_METHODS,
        "Access-Control-Allow-Headers": ALLOW_HEADERS,
        "Access-Control-Allow-Credentials": "true",
    }

    if not settings.is_production:
        headers["Access-Control-Allow-Origin"] = origin or "*"
    elif origin in settings.CORS_ALLOWED_ORIGINS:
        headers["Access-Control-Allow-Origin"] = origin
    elif not origin:
        headers["Access-Control-Allow-Origin"] = "*"
        headers["Access-Control-Allow-Credentials"] = "false"

    return headers


class CorsMiddleware(BaseHTTPMiddleware):
    """
    Answer preflight requests and decorate responses under `path_prefix`.

    Paths outside the prefix (health check, docs) are passed through untouched.
    """

    def __init__(self, app, settings: Settings, path_prefix: str = "/api"):
        super().__init__(app)
        self.settings = settings
        self.path_prefix = path_prefix.rstrip("/") + "/"

    async def dispatch(self, request: Request, call_next) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        headers = cors_headers(request.headers.get("origin"), self.settings)

        if request.method == "OPTIONS":
            return Response(status_code=200, headers=headers)

        response = await call_next(request)
        response.headers.update(headers)
        return response
