from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from cinema_scheduler.api.routes import catalog, generator, health, screenings, stats
from cinema_scheduler.core.config import get_settings
from cinema_scheduler.core.exceptions import AppError

settings = get_settings()


@asynccontextmanager
async def lifespan(_: FastAPI):
    logging.getLogger("cinema_scheduler").setLevel(settings.log_level)
    yield


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )

app = FastAPI(title=settings.project_name, lifespan=lifespan)
app.add_exception_handler(AppError, app_error_handler)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router, prefix=settings.api_prefix, tags=["health"])
app.include_router(catalog.router, prefix=settings.api_prefix, tags=["catalog"])
app.include_router(screenings.router, prefix=f"{settings.api_prefix}/screenings", tags=["screenings"])
app.include_router(generator.router, prefix=settings.api_prefix, tags=["generator"])
app.include_router(stats.router, prefix=settings.api_prefix, tags=["stats"])
