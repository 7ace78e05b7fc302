"""Middleware that stamps each response with the origin allowed to read it."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request


class AllowOriginMiddleware(BaseHTTPMiddleware):
    """Echo a fixed origin in Access-Control-Allow-Origin, chosen by request path.

    Error responses get the header too, so browsers can read the message.
    """

    def __init__(self, app, default_origin: str, path_origins: dict[str, str] | None = None):
        super().__init__(app)
        self.default_origin = default_origin
        self.path_origins = path_origins or {}

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        origin = self.path_origins.get(request.url.path, self.default_origin)
        response.headers["Access-Control-Allow-Origin"] = origin
        return response
