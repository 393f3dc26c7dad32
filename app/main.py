import logging

from fastapi import FastAPI
from slowapi.errors import RateLimitExceeded
from slowapi import _rate_limit_exceeded_handler
from slowapi.middleware import SlowAPIMiddleware

from app.core.config import settings
from app.core.logging import setup_logging
from app.core.rate_limiter import limiter
from app.database import AsyncSessionLocal, engine, init_db
from app.middleware.request_logger import RequestLoggerMiddleware

from app.api.health import router as health_router
from app.api.routers import enquiries, properties, rooms


# -------------------------------------------------
# Logging
# -------------------------------------------------

setup_logging()
logger = logging.getLogger(__name__)

logger.info("Starting application")


# -------------------------------------------------
# FastAPI
# -------------------------------------------------

app = FastAPI(
    title=settings.app_name,
    description="Room availability and enquiry capture",
    version="0.1.0",
)

# -------------------------------------------------
# Rate Limiting (slowapi)
# -------------------------------------------------
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(RequestLoggerMiddleware)

app.include_router(health_router)
app.include_router(properties.router)
app.include_router(rooms.router)
app.include_router(enquiries.router)


# -------------------------------------------------
# Lifecycle
# -------------------------------------------------


@app.on_event("startup")
async def on_startup():
    logger.info("FastAPI startup")
    await init_db()

    if settings.seed_demo_data:
        from app.services.seed_service import seed_demo_data

        async with AsyncSessionLocal() as session:
            await seed_demo_data(session)


@app.on_event("shutdown")
async def on_shutdown():
    logger.info("FastAPI shutdown")
    await engine.dispose()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=8000)
