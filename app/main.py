from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from app.api.exception_handlers import register_exception_handlers
from app.api.router import api_router
from app.core.config import get_settings
from app.middleware.allow_origin import AllowOriginMiddleware
from app.middleware.request_logging import RequestLoggingMiddleware
from app.middleware.unhandled_error import UnhandledErrorMiddleware

settings = get_settings()

app = FastAPI(title="E-commerce Account Service")

# Added first so it runs innermost: unexpected errors become a 500 that the
# middlewares below still stamp and log
app.add_middleware(UnhandledErrorMiddleware)

# Preflight handling for both browser-facing callers
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.frontend_origin, settings.product_service_origin],
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
# The lookup route is for the product service; every other route is for the frontend
app.add_middleware(
    AllowOriginMiddleware,
    default_origin=settings.frontend_origin,
    path_origins={"/api/user/": settings.product_service_origin},
)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)
app.include_router(api_router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok"}
