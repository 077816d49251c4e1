"""
Main entry point for the league API.
"""
from contextlib import asynccontextmanager

from fastapi import FastAPI

from volleyleague.routes import admins, game_days, newsletters, seasons, standings, teams
from volleyleague.utils.db_async import DATABASE_URL, dispose_engine, init_db
from volleyleague.utils.db_url import describe_database_url

from volleyleague.logging_config import setup_logging
from volleyleague.config import settings

import logging
logger = logging.getLogger(__name__)

setup_logging(
    level=settings.log_level,
    access_log=settings.access_log,
    sql_echo=settings.sql_echo,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting league API (env={settings.env})")
    logger.info(f"DB target: {describe_database_url(DATABASE_URL)}")

    if settings.is_dev and settings.auto_init_db:
        logger.info("Creating missing tables…")
        try:
            await init_db()
            logger.info("DB ready.")
        except Exception:
            logger.exception("init_db failed")
            raise
    else:
        logger.info("Skipping init_db(); run `alembic upgrade head` to migrate")

    yield

    try:
        await dispose_engine()
        logger.info("DB engine disposed.")
    except Exception:
        logger.exception("Failed to dispose DB engine")


app = FastAPI(title="Volleyball League", lifespan=lifespan)
app.include_router(seasons.router)
app.include_router(game_days.router)
app.include_router(standings.router)
app.include_router(teams.router)
app.include_router(newsletters.router)
app.include_router(admins.router)


@app.get("/health")
async def health_check():
    """Health Check Endpoint"""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
