import logging

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from redis import Redis
from redis.exceptions import RedisError
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import settings
from .database import get_db
from .redis_client import get_redis
from .routers import appointments, availability, services
from .services.availability import StoredDataError

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app = FastAPI(title="Booking Availability API")

app.include_router(availability.router)
app.include_router(appointments.router)
app.include_router(services.router)


@app.exception_handler(StoredDataError)
def stored_data_error_handler(request: Request, exc: StoredDataError):
    logger.error(f"Unreadable stored row while serving {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
def health(
    db: Session = Depends(get_db),
    redis: Redis | None = Depends(get_redis),
):
    try:
        db_ok = db.execute(text("SELECT 1")).scalar() == 1
    except SQLAlchemyError:
        logger.exception("Database health check failed")
        db_ok = False

    redis_ok = None  # not configured
    if redis is not None:
        try:
            redis_ok = bool(redis.ping())
        except RedisError:
            logger.exception("Redis health check failed")
            redis_ok = False

    return {"database": db_ok, "redis": redis_ok}
