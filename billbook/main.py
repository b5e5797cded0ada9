# billbook/main.py
import logging

from fastapi import FastAPI

from billbook.api.v1 import v1_router
from billbook.core.config import settings
from billbook.core.db import init_models
from billbook.core.logging_config import setup_logging

setup_logging()
logger = logging.getLogger("billbook")

app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG)


@app.on_event("startup")
async def startup():
    await init_models()
    logger.info("%s started (%s)", settings.APP_NAME, settings.ENVIRONMENT)


@app.get("/health")
async def health():
    return {"status": "ok", "message": f"{settings.APP_NAME} running"}


app.include_router(v1_router)
