"""
状态公告存储适配层

匹配引擎只依赖这里的 find / count / insert / update_by_id / delete_by_id，
数据库异常原样抛给调用方，不做重试。
"""
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from tortoise.expressions import Q

from apps.core.window import utc_now
from apps.models.status import Status

CURRENT = "current"
EXPIRED = "expired"

# 列表接口默认排序
LIST_ORDERING = ("-is_activated", "start_time", "end_time", "created_at")


class StatusNotFound(LookupError):
    def __init__(self, status_id):
        self.status_id = status_id
        super().__init__(f"状态公告不存在: {status_id}")


def window_condition(window: Optional[str], now: datetime) -> Optional[Q]:
    if window == CURRENT:
        return Q(end_time__gt=now) | Q(end_time__isnull=True)
    if window == EXPIRED:
        return Q(end_time__lte=now)
    if window is not None:
        raise ValueError(f"未知的时间窗口筛选: {window}")
    return None


class TortoiseStatusStore:

    def _query(self, window: Optional[str] = None, is_activated: Optional[bool] = None,
               now: Optional[datetime] = None):
        conditions = []
        condition = window_condition(window, now or utc_now())
        if condition is not None:
            conditions.append(condition)
        if is_activated is not None:
            conditions.append(Q(is_activated=is_activated))
        if conditions:
            return Status.filter(*conditions)
        return Status.all()

    async def find(self, window: Optional[str] = None, is_activated: Optional[bool] = None,
                   now: Optional[datetime] = None, order_by: Iterable[str] = LIST_ORDERING,
                   skip: int = 0, limit: Optional[int] = None) -> List[Status]:
        query = self._query(window, is_activated, now).order_by(*order_by)
        if skip:
            query = query.offset(skip)
        if limit is not None:
            query = query.limit(limit)
        return await query

    async def count(self, window: Optional[str] = None, is_activated: Optional[bool] = None,
                    now: Optional[datetime] = None) -> int:
        return await self._query(window, is_activated, now).count()

    async def get(self, status_id: int) -> Status:
        status = await Status.get_or_none(id=status_id)
        if status is None:
            raise StatusNotFound(status_id)
        return status

    async def insert(self, fields: Dict[str, Any]) -> Status:
        return await Status.create(**fields)

    async def update_by_id(self, status_id: int, set_fields: Dict[str, Any],
                           unset_fields: Iterable[str] = ()) -> Status:
        status = await self.get(status_id)
        for field, value in set_fields.items():
            setattr(status, field, value)
        for field in unset_fields:
            setattr(status, field, None)
        await status.save()
        return status

    async def delete_by_id(self, status_id: int) -> None:
        deleted = await Status.filter(id=status_id).delete()
        if not deleted:
            raise StatusNotFound(status_id)
