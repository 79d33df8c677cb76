import os
import importlib

from fastapi import FastAPI, Request
from fastapi.openapi.utils import get_openapi
from starlette.middleware.cors import CORSMiddleware
from tortoise.exceptions import ValidationError as ModelValidationError

from apps.core.errors import StatusExpressionError
from apps.middleware.middleware import load_middleware
from apps.services.status_service import InvalidTimeWindow
from apps.services.store import StatusNotFound
from apps.utils import response
from config import API_PREFIX, CORS_ORIGINS, DEBUG


def init_cors(app):
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(CORS_ORIGINS),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )


def init_routes(app):
    api_dir = os.path.join(os.path.dirname(__file__), 'api')
    exclude_dirs = ['__pycache__']

    # 遍历 api 目录，自动注册每个模块里的 router
    for root, dirs, files in os.walk(api_dir):
        dirs[:] = sorted(d for d in dirs if d not in exclude_dirs)

        # 将文件路径转换为包名
        package_name = root.replace(api_dir, 'apps.api').replace(os.sep, '.')
        for filename in sorted(files):
            if filename.endswith('.py') and filename != '__init__.py':
                module_name = f"{package_name}.{filename[:-3]}"
                module = importlib.import_module(module_name)
                if hasattr(module, 'router'):
                    app.include_router(module.router, prefix=API_PREFIX)


def init_exception_handlers(app):
    @app.exception_handler(StatusExpressionError)
    async def expression_error_handler(request: Request, exc: StatusExpressionError):
        return response(code=400, message=str(exc), status_code=400,
                        data={"expression": exc.expression, "position": exc.position})

    @app.exception_handler(InvalidTimeWindow)
    async def time_window_error_handler(request: Request, exc: InvalidTimeWindow):
        return response(code=400, message=str(exc), status_code=400)

    @app.exception_handler(ModelValidationError)
    async def model_validation_error_handler(request: Request, exc: ModelValidationError):
        return response(code=400, message=str(exc), status_code=400)

    @app.exception_handler(StatusNotFound)
    async def not_found_handler(request: Request, exc: StatusNotFound):
        return response(code=404, message=str(exc), status_code=404)


def custom_openapi(app: FastAPI):
    if app.openapi_schema:
        return app.openapi_schema

    openapi_schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )

    # 用 Header 的方式注入 token
    openapi_schema.setdefault("components", {})["securitySchemes"] = {
        "BearerAuth": {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT"
        },
    }

    app.openapi_schema = openapi_schema
    return app.openapi_schema


def create_app(lifespan=None):
    app = FastAPI(
        title="Status Admin",
        description="状态公告发布与查询服务",
        version="1.0.0",
        debug=DEBUG,
        lifespan=lifespan,
    )
    init_cors(app)
    load_middleware(app)
    init_exception_handlers(app)
    init_routes(app)

    app.openapi = lambda: custom_openapi(app)
    return app
