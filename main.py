import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

import database
from api import (
    health_router,
    menu_items_router,
    orders_router,
    outlets_router,
    pages_router,
)
from config import settings
from errors import register_error_handlers

logger = logging.getLogger("qmanage")

app = FastAPI(title="Qmanage Campus Ordering API")

allow_origins = settings.allowed_origins

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health_router)
app.include_router(outlets_router)
app.include_router(menu_items_router)
app.include_router(orders_router)
app.include_router(pages_router)


@app.on_event("startup")
def _on_startup() -> None:
    try:
        database.connect()
    except PyMongoError as exc:
        logger.critical("MongoDB connection error: %s", exc)
        raise SystemExit(1) from exc
    logger.info("MongoDB connected (%s)", settings.database_name)
    if allow_origins == ["*"]:
        logger.warning(
            "CORS is set to allow all origins with credentials; set ALLOWED_ORIGINS to explicit values outside local dev."
        )


@app.on_event("shutdown")
def _on_shutdown() -> None:
    database.close()


@app.get("/")
def read_root():
    return {"message": "Qmanage Campus Ordering API"}


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
