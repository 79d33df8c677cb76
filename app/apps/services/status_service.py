"""
状态公告服务

check 为客户端公开查询；其余为后台管理的增删改查。
"""
import asyncio
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from apps.core.comparator import validate_expression
from apps.core.errors import MalformedExpression
from apps.core.matcher import StatusMatcher, select_applicable
from apps.core.version import WILDCARD
from apps.core.window import as_aware, utc_now
from apps.services.store import CURRENT, TortoiseStatusStore

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = (
    "device_types",
    "device_sem_version",
    "app_sem_version",
    "start_time",
    "end_time",
    "is_activated",
    "type",
    "title",
    "contents",
    "url",
)
EXPRESSION_FIELDS = ("device_sem_version", "app_sem_version")
WINDOW_FIELDS = ("start_time", "end_time")
# 与 Status 模型的列宽一致
EXPRESSION_MAX_LENGTH = 255

# check 接口排序，最终顺序由 select_applicable 决定
CHECK_ORDERING = ("start_time", "created_at")


class InvalidTimeWindow(ValueError):
    pass


def check_expression(expression) -> None:
    validate_expression(expression)
    if len(expression) > EXPRESSION_MAX_LENGTH:
        raise MalformedExpression(f"表达式长度不能超过 {EXPRESSION_MAX_LENGTH}", expression, EXPRESSION_MAX_LENGTH)


def check_time_window(start_time: Optional[datetime], end_time: Optional[datetime]) -> None:
    if start_time is None and end_time is None:
        return
    if start_time is None or end_time is None:
        raise InvalidTimeWindow("开始时间和结束时间必须同时设置")
    if as_aware(start_time) >= as_aware(end_time):
        raise InvalidTimeWindow("结束时间必须晚于开始时间")


class StatusLookupService:

    def __init__(self, store=None, matcher: StatusMatcher = None):
        self.store = store or TortoiseStatusStore()
        self.matcher = matcher or StatusMatcher()

    async def check(self, device_type: str = WILDCARD, device_version: str = WILDCARD,
                    app_version: str = WILDCARD, now: datetime = None) -> List:
        """
        查询客户端当前适用的公告，没有命中时返回空列表
        """
        now = now or utc_now()
        candidates = await self.store.find(window=CURRENT, is_activated=True, now=now, order_by=CHECK_ORDERING)
        return select_applicable(candidates, device_type or WILDCARD, device_version or WILDCARD,
                                 app_version or WILDCARD, now=now, matcher=self.matcher)

    async def list(self, window: Optional[str] = None, skip: int = 0, limit: Optional[int] = None,
                   now: datetime = None) -> Tuple[List, int]:
        now = now or utc_now()
        items, total = await asyncio.gather(
            self.store.find(window=window, now=now, skip=skip, limit=limit),
            self.store.count(window=window, now=now),
        )
        return items, total

    async def add(self, fields: Dict[str, Any]):
        values = {key: value for key, value in fields.items() if key in WRITABLE_FIELDS}
        for field in EXPRESSION_FIELDS:
            check_expression(values.get(field))
        check_time_window(values.get("start_time"), values.get("end_time"))
        status = await self.store.insert(values)
        logger.info("status %s created", status.id, extra={"event": "status_created", "status_id": status.id})
        return status

    async def update(self, status_id: int, fields: Dict[str, Any]):
        """
        部分更新；start_time / end_time 必须成对出现，同时为 None 表示清除时间窗口
        """
        set_fields = {key: value for key, value in fields.items() if key in WRITABLE_FIELDS}
        unset_fields = ()
        for field in EXPRESSION_FIELDS:
            if field in set_fields:
                check_expression(set_fields[field])

        window_keys = [field for field in WINDOW_FIELDS if field in set_fields]
        if len(window_keys) == 1:
            raise InvalidTimeWindow("开始时间和结束时间必须同时修改")
        if window_keys:
            start_time, end_time = set_fields["start_time"], set_fields["end_time"]
            if start_time is None and end_time is None:
                del set_fields["start_time"], set_fields["end_time"]
                unset_fields = WINDOW_FIELDS
            else:
                check_time_window(start_time, end_time)

        status = await self.store.update_by_id(status_id, set_fields, unset_fields)
        logger.info("status %s updated", status_id, extra={"event": "status_updated", "status_id": status_id})
        return status

    async def set_activation(self, status_id: int, activated: bool):
        status = await self.store.update_by_id(status_id, {"is_activated": activated})
        logger.info("status %s %s", status_id, "activated" if activated else "deactivated",
                    extra={"event": "status_activation", "status_id": status_id})
        return status

    async def remove(self, status_id: int) -> None:
        await self.store.delete_by_id(status_id)
        logger.info("status %s deleted", status_id, extra={"event": "status_deleted", "status_id": status_id})
