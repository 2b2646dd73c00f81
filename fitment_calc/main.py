"""FastAPI app entry point for the fitment calculator."""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from fitment_calc.api.routes import router
from fitment_calc.config import get_settings
from fitment_calc.core.logging import log_request, log_response, logger, setup_logging

settings = get_settings()
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup / shutdown."""
    logger.info("Starting fitment calculator API...")
    yield
    logger.info("Shutting down...")


app = FastAPI(
    title="Fitment Calculator API",
    description="Tire and wheel fitment geometry: diameter, poke, clearance, speedometer error",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)


# Request logging middleware
@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.time()
    log_request(request.method, request.url.path)

    response = await call_next(request)

    duration_ms = (time.time() - start) * 1000
    log_response(request.method, request.url.path, response.status_code, duration_ms)

    return response


# Routes
app.include_router(router, prefix="/api")


@app.get("/health")
async def health():
    return {"status": "ok", "service": "fitment-calculator"}
