from datetime import datetime, date, timezone
from typing import Optional, Any

from fastapi.encoders import jsonable_encoder
from starlette.responses import JSONResponse

DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def format_datetime(dt: datetime) -> str:
    # 带时区的时间统一转成 UTC 再输出
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return dt.strftime(DATETIME_FORMAT)


def response(
        data: Optional[Any] = None,
        code: int = 200,
        message: str = "success",
        status_code: int = 200,
        **kwargs
) -> JSONResponse:
    resp = {
        "code": code,
        "message": message,
        "data": jsonable_encoder(data,
                                 custom_encoder={
                                     datetime: format_datetime,
                                     date: lambda d: d.strftime("%Y-%m-%d")
                                 }),
        **kwargs
    }
    return JSONResponse(content=resp, status_code=status_code)
