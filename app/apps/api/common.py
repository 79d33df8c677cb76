import logging
import time

from fastapi import APIRouter
from tortoise import connections

from apps.utils import response
from apps.utils.redis_ import RedisManager

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/common", tags=["公共接口"])


def _elapsed_ms(start: float) -> float:
    return round((time.time() - start) * 1000, 2)


@router.get("/health", summary="系统健康检查", description="检查数据库和Redis状态（无需登录）")
async def health_check():
    """
    系统健康检查接口
    :return:
    """
    start_time = time.time()
    health_data = {
        "timestamp": int(start_time * 1000),
        "status": "healthy",
        "components": {}
    }

    # 检查数据库
    db_start = time.time()
    try:
        await connections.get("default").execute_query("SELECT 1")
        health_data["components"]["database"] = {
            "status": "healthy",
            "response_time_ms": _elapsed_ms(db_start),
            "message": "数据库连接正常"
        }
    except Exception as e:
        logger.warning("database health check failed: %s", e, extra={"event": "health_check"})
        health_data["components"]["database"] = {
            "status": "unhealthy",
            "message": f"数据库连接失败: {str(e)}"
        }
        health_data["status"] = "unhealthy"

    # 检查Redis
    redis_start = time.time()
    try:
        await RedisManager.get_client().ping()
        health_data["components"]["redis"] = {
            "status": "healthy",
            "response_time_ms": _elapsed_ms(redis_start),
            "message": "Redis连接正常"
        }
    except Exception as e:
        logger.warning("redis health check failed: %s", e, extra={"event": "health_check"})
        health_data["components"]["redis"] = {
            "status": "unhealthy",
            "message": f"Redis连接失败: {str(e)}"
        }
        health_data["status"] = "unhealthy"

    health_data["response_time_ms"] = _elapsed_ms(start_time)
    status_code = 200 if health_data["status"] == "healthy" else 503
    return response(data=health_data, status_code=status_code)
