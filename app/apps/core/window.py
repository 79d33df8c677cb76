"""
公告时间窗口判断

current: 未过期即可，包括尚未开始的（预约发布的公告也要提前下发给客户端）
expired: 设置了结束时间且结束时间 <= now
两者不是互补关系：没有时间窗口的公告永远 current，永远不会 expired。
"""
from datetime import datetime, timezone
from typing import Optional


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_aware(value: Optional[datetime]) -> Optional[datetime]:
    """无时区的时间按 UTC 处理"""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def is_current(status, now: datetime) -> bool:
    end_time = as_aware(getattr(status, "end_time", None))
    if end_time is None:
        return True
    return end_time > as_aware(now)


def is_expired(status, now: datetime) -> bool:
    end_time = as_aware(getattr(status, "end_time", None))
    return end_time is not None and end_time <= as_aware(now)
