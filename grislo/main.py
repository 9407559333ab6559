import logging

from fastapi import Depends, FastAPI
from redis.exceptions import RedisError

from .deps import get_redis
from .routers import admin, calendar, pickup_locations, reservations, schedule
from .schemas.service_config import ServiceConfig
from .services.service_config import get_service_config

logging.basicConfig(level=logging.INFO)

app = FastAPI(title="Grislo Reservation API")

app.include_router(calendar.router)
app.include_router(reservations.router)
app.include_router(schedule.router)
app.include_router(pickup_locations.router)
app.include_router(admin.router)


@app.get("/health")
def health(redis=Depends(get_redis)):
    try:
        return {"redis": redis.ping()}
    except RedisError:
        return {"redis": False}


@app.get("/config")
def public_config(config: ServiceConfig = Depends(get_service_config)):
    return config.model_dump(exclude={"admin_password"})
