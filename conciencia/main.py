# Copyright (c) 2025 The Conciencia Authors
# This file is part of the Conciencia - Your Therapy Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from conciencia.config import load_settings
from conciencia.routers import chat_router, healthz_router, profile_router
from conciencia.routers import records_router, goals_router, habits_router
from conciencia.routers import achievements_router, conversations_router
from conciencia.services.supabase_client import BackendError
from conciencia.utils.rate_limit_utils import limiter

logging.basicConfig(
    level=load_settings().log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    docs_url="/docs",
    redoc_url="/redoc",
    title="Conciencia API",
    description="Therapy journal backend: chat relay and journal CRUD",
    version="1.0"
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# CORS open to all origins
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)

# Include routers
app.include_router(chat_router.router)
app.include_router(profile_router.router)
app.include_router(records_router.router)
app.include_router(goals_router.router)
app.include_router(habits_router.router)
app.include_router(achievements_router.router)
app.include_router(conversations_router.router)
app.include_router(healthz_router.router)


# ---------------------- EXCEPTION HANDLERS ----------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )


@app.exception_handler(BackendError)
async def backend_error_handler(request: Request, exc: BackendError):
    logger.error(f"[Supabase] {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=502,
        content={"detail": "Supabase request failed", "upstream_status": exc.status_code}
    )


@app.get("/")
def read_root():
    return {"message": "Conciencia backend live"}


@app.get("/health", tags=["Infra"])
def health_check():
    return {"status": "ok"}
