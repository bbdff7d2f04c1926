"""
User Directory: FastAPI service (port 8000)
Relays the /users collection to the hosted document API:
  - GET/POST        /users
  - GET/PUT/DELETE  /users/{id}
Also exposes /health, /health/ready and /metrics for Prometheus.
The listing/form workflows live in user_directory.services.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from user_directory.controllers import system_controller, users_controller
from user_directory.core.config import settings
from user_directory.core.dependencies import close_http_client, init_http_client
from user_directory.core.logging import get_logger
from user_directory.middleware import MetricsMiddleware, RequestIDMiddleware
from user_directory.schemas import ErrorResponse

logger = get_logger(__name__)


# ── Lifespan ──────────────────────────────────────────────────────────────
@asynccontextmanager
async def lifespan(_app: FastAPI):
    init_http_client()
    logger.info("User directory starting, relaying to %s", settings.REMOTE_COLLECTION_URL)
    yield
    await close_http_client()
    logger.info("User directory shutting down")


# ── FastAPI App ───────────────────────────────────────────────────────────
app = FastAPI(
    title="User Directory",
    description="Pass-through /users API over the hosted user collection.",
    version=settings.SERVICE_VERSION,
    lifespan=lifespan,
    responses={
        500: {"model": ErrorResponse, "description": "Upstream unreachable"},
    },
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(MetricsMiddleware)
app.add_middleware(RequestIDMiddleware)


# ── Global exception handler ─────────────────────────────────────────────
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    req_id = getattr(request.state, "request_id", None)
    logger.exception("Unhandled exception", extra={"request_id": req_id})
    return JSONResponse(
        status_code=500,
        content={"error": "internal_server_error", "detail": str(exc), "request_id": req_id},
    )


app.include_router(system_controller.router)
app.include_router(users_controller.router)


# ── Entrypoint ────────────────────────────────────────────────────────────
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.SERVICE_PORT, log_level="info")
