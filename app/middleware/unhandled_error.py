"""Middleware that turns unexpected exceptions into the sanitized 500 response.

It sits inside the origin and access-log middlewares, so those still see the response.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from app.api.exception_handlers import unhandled_error_handler


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            return unhandled_error_handler(request, exc)
