# piloo/main.py
"""
FastAPI application entry point.
Includes security middleware, global error handlers, all REST routers and
the /ws notification socket.
"""

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from piloo.routers import (
    account, ai_chat, alerts, auth, cameras, demo_requests, employees, health, notifications,
    recordings, search, stats, subscription_plans, system_settings, users, zones,
)
from piloo.config import settings
from piloo.services.seed import seed_demo_data
from piloo.storage import InvalidRecordError, get_storage
from piloo.utils.logger import get_logger
import time

logger = get_logger(__name__)

app = FastAPI(
    title="Piloo Surveillance API",
    description="CCTV dashboard backend: entity store, REST API and real-time notifications.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS (dashboard is served from a different origin) ─────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],   # Restrict to the dashboard origin in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ── API Key Middleware ───────────────────────────────────────────────────────
class APIKeyMiddleware(BaseHTTPMiddleware):
    """
    Optional lightweight API key auth for the REST surface.
    Login, signup, the public demo form and health stay open.
    Set API_KEY in .env. Leave empty to disable auth.
    """
    open_paths = {
        "/api/auth/login", "/api/auth/signup", "/api/demo-request", "/api/health",
        "/docs", "/redoc", "/openapi.json",
    }

    async def dispatch(self, request: Request, call_next):
        if request.url.path in self.open_paths or not settings.API_KEY:
            return await call_next(request)

        api_key = request.headers.get("X-API-Key") or request.query_params.get("api_key")
        if api_key != settings.API_KEY:
            return JSONResponse(
                status_code=status.HTTP_401_UNAUTHORIZED,
                content={"message": "Invalid or missing API key"},
            )
        return await call_next(request)


if settings.API_KEY:
    app.add_middleware(APIKeyMiddleware)


# ── Request Timing Middleware ────────────────────────────────────────────────
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    response = await call_next(request)
    duration = round((time.time() - start) * 1000, 2)
    logger.debug(f"{request.method} {request.url.path} → {response.status_code} ({duration}ms)")
    return response


# ── Exception Handlers ───────────────────────────────────────────────────────
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": "Invalid request data", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail},
                        headers=getattr(exc, "headers", None))


@app.exception_handler(InvalidRecordError)
async def invalid_record_handler(request: Request, exc: InvalidRecordError):
    logger.warning(f"Rejected {exc.entity} write on {request.url.path}: {exc.reason}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": f"Invalid {exc.entity} data", "errors": [exc.reason]},
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Internal server error"},
    )


# ── Routers ──────────────────────────────────────────────────────────────────
app.include_router(auth.router,               prefix="/api", tags=["🔑 Auth"])
app.include_router(users.router,              prefix="/api", tags=["👤 Users"])
app.include_router(cameras.router,            prefix="/api", tags=["📹 Cameras"])
app.include_router(zones.router,              prefix="/api", tags=["🗺️  Zones"])
app.include_router(alerts.router,             prefix="/api", tags=["🔔 Alerts"])
app.include_router(employees.router,          prefix="/api", tags=["🧑‍💼 Employees"])
app.include_router(system_settings.router,    prefix="/api", tags=["⚙️  Settings"])
app.include_router(subscription_plans.router, prefix="/api", tags=["💳 Subscription Plans"])
app.include_router(account.router,            prefix="/api", tags=["💳 Account Subscription"])
app.include_router(demo_requests.router,      prefix="/api", tags=["📩 Demo Requests"])
app.include_router(search.router,             prefix="/api", tags=["🔍 Search"])
app.include_router(recordings.router,         prefix="/api", tags=["🎞️  Recordings"])
app.include_router(stats.router,              prefix="/api", tags=["📊 Stats & Analytics"])
app.include_router(ai_chat.router,            prefix="/api", tags=["🤖 AI Chat"])
app.include_router(notifications.router,      prefix="/api", tags=["📡 Notifications"])
app.include_router(health.router,             prefix="/api", tags=["💚 Health"])
app.include_router(notifications.ws_router)


# ── Startup ───────────────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup():
    logger.info("🚀 Piloo Backend starting up...")
    storage = get_storage()
    logger.info(f"✅ Entity store ready ({storage.backend})")
    if settings.SEED_DEMO_DATA:
        seed_demo_data(storage)
    logger.info(f"🌐 Listening on http://{settings.BACKEND_IP}:{settings.BACKEND_PORT}")
    logger.info("📖 API docs at /docs — notifications on /ws")


@app.on_event("shutdown")
async def shutdown():
    logger.info("🛑 Piloo Backend shutting down...")
