import os
import sys

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from tortoise import Tortoise

from apps import create_app
from apps.services.status_service import StatusLookupService
from apps.services.store import TortoiseStatusStore
from apps.utils.logger import configure_logging
from apps.utils.redis_ import RedisManager
from config import LOG_FORMAT, LOG_LEVEL, LOG_QUIET_LOGGERS, TORTOISE_ORM

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(LOG_LEVEL, LOG_FORMAT, LOG_QUIET_LOGGERS)
    logger.info("starting up")
    await Tortoise.init(config=TORTOISE_ORM)
    await RedisManager.init()

    # 匹配引擎 + 存储适配层
    app.state.status_service = StatusLookupService(TortoiseStatusStore())
    logger.info("status service ready")

    yield

    await RedisManager.close()
    await Tortoise.close_connections()
    logger.info("shut down")

app = create_app(lifespan=lifespan)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=8000)
