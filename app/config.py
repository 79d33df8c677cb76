"""
系统配置文件
统一管理所有配置项，按功能模块分组
"""

import os
from starlette.config import Config
from starlette.datastructures import CommaSeparatedStrings
from pydantic import Secret

BASE_PATH = os.path.dirname(os.path.abspath(__file__))

# 配置对象，优先读取环境变量，其次读取 .env
config = Config(os.path.join(BASE_PATH, ".env"))

# =============================================================================
# 基础配置
# =============================================================================

DEBUG = config("DEBUG", cast=bool, default=False)
LOG_LEVEL = config("LOG_LEVEL", default="INFO")
LOG_FORMAT = config("LOG_FORMAT", default="json")  # json / text
LOG_QUIET_LOGGERS = config("LOG_QUIET_LOGGERS", cast=CommaSeparatedStrings, default="tortoise,aiosqlite,asyncpg")
API_PREFIX = config("API_PREFIX", default="/api/v1")
CORS_ORIGINS = config("CORS_ORIGINS", cast=CommaSeparatedStrings, default="*")

# 安全配置
SECRET_KEY = Secret(config("SECRET_KEY", default="status-admin-dev-secret"))

# Token配置
REFRESH_MAX_AGE = config("REFRESH_MAX_AGE", cast=int, default=60)  # 刷新token时间（秒）
MAX_AGE = config("MAX_AGE", cast=int, default=60 * 60)             # 登录有效性Token（秒）

# =============================================================================
# 状态公告配置
# =============================================================================

# 列表接口单页最大条数
STATUS_PAGE_SIZE_MAX = config("STATUS_PAGE_SIZE_MAX", cast=int, default=100)

# =============================================================================
# 数据库配置
# =============================================================================

DB_HOST = config("POSTGRES_HOST", default="localhost")
DB_PORT = config("POSTGRES_PORT", cast=int, default=5432)
DB_USER = config("POSTGRES_USER", default="postgres")
DB_PASSWORD = Secret(config("POSTGRES_PASSWORD", cast=str, default="postgres"))
DB_DATABASE = config("POSTGRES_DB", default="status_admin")

# 数据库连接URL，测试时可以直接指定 sqlite://:memory:
DATABASE_URL = config(
    "DATABASE_URL",
    default=f"postgres://{DB_USER}:{DB_PASSWORD.get_secret_value()}@{DB_HOST}:{DB_PORT}/{DB_DATABASE}",
)

# Tortoise ORM配置
TORTOISE_ORM = {
    "connections": {
        "default": DATABASE_URL,
    },
    "apps": {
        "models": {
            "models": ["aerich.models"],
            "default_connection": "default",
        }
    },
    "use_tz": True,
    "timezone": "UTC",
}

# 动态添加模型
for _ in sorted(os.listdir(os.path.join(BASE_PATH, "apps", "models"))):
    if _.endswith(".py") and _ not in ("__init__.py", "base.py"):
        TORTOISE_ORM["apps"]["models"]["models"].append(f"apps.models.{_.split('.')[0]}")

# =============================================================================
# Redis配置
# =============================================================================

REDIS_HOST = config("REDIS_HOST", default="localhost")
REDIS_PORT = config("REDIS_PORT", cast=int, default=6379)
REDIS_PASSWORD = config("REDIS_PASSWORD", cast=str, default="")
REDIS_DB = config("REDIS_DB", cast=int, default=0)
