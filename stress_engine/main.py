# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Neura - Your Smart Assistant project.
# Licensed under the MIT License - see the LICENSE file for details.


from fastapi import FastAPI
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from apscheduler.schedulers.background import BackgroundScheduler
from pytz import timezone
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from stress_engine.config import STORE_BACKEND, STRESS_ENGINE_HOUR, STRESS_ENGINE_TIMEZONE
from stress_engine.models import database
from stress_engine.models import *  # registers all models

from stress_engine.routers import stress_router, healthz_router
from stress_engine.services.stress_engine import daily_stress_engine
from stress_engine.utils.rate_limit_utils import limiter


# Create DB tables in one go
if STORE_BACKEND == "sql":
    database.Base.metadata.create_all(bind=database.engine)

# Scheduler setup
scheduler = BackgroundScheduler(job_defaults={"misfire_grace_time": 60})

@asynccontextmanager
async def lifespan(app: FastAPI):

    # 🧮 Recalculate every student's stress index once a day
    scheduler.add_job(
        daily_stress_engine,
        "cron",
        hour=STRESS_ENGINE_HOUR,
        minute=0,
        timezone=timezone(STRESS_ENGINE_TIMEZONE),
        id="daily_stress_engine",
        replace_existing=True,
    )

    scheduler.start()
    yield
    scheduler.shutdown()

# Create FastAPI app with lifespan
app = FastAPI(
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    title="Financial Stress Engine API",
    description="Student financial stress index backend",
    version="1.0"
)

app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)

# Include routers
app.include_router(stress_router.router)
app.include_router(healthz_router.router)


# ---------------------- ADDING EXCEPTION HANDLER ----------------------
@app.exception_handler(RateLimitExceeded)
async def rate_limit_exceeded_handler(request, exc):
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please slow down."}
    )

@app.get("/health", tags=["Infra"])
def health_check():
    return {"status": "ok"}
