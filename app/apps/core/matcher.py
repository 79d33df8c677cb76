"""
状态公告匹配
"""
import logging
from typing import Iterable, List, Optional, Union

from apps.core.comparator import validate_expression
from apps.core.errors import StatusExpressionError
from apps.core.version import WILDCARD, VersionToken
from apps.core.window import as_aware, is_current, utc_now

logger = logging.getLogger(__name__)

VersionLike = Union[str, VersionToken]


def _requested_version(value: VersionLike) -> Optional[VersionToken]:
    """请求中的 "*" 返回 None，表示不限制该维度"""
    if isinstance(value, VersionToken):
        return None if value.is_wildcard else value
    if value is None or value == WILDCARD:
        return None
    return VersionToken.parse(value)


class StatusMatcher:
    """
    判断一条公告是否命中 (device_type, device_version, app_version)

    请求版本号非法属于调用方错误，直接抛出 MalformedVersion；
    已入库的表达式解析失败属于数据问题，只记录告警并视为不命中。
    """

    def matches(self, status, device_type: str, device_version: VersionLike, app_version: VersionLike) -> bool:
        device_token = _requested_version(device_version)
        app_token = _requested_version(app_version)
        return (
            self.match_device_type(status, device_type)
            and self._match_field(status, "device_sem_version", device_token)
            and self._match_field(status, "app_sem_version", app_token)
        )

    @staticmethod
    def match_device_type(status, device_type: str) -> bool:
        if device_type is None or device_type == WILDCARD:
            return True
        device_types = getattr(status, "device_types", None) or []
        return WILDCARD in device_types or device_type in device_types

    def _match_field(self, status, field: str, candidate: Optional[VersionToken]) -> bool:
        if candidate is None:
            return True
        expression = getattr(status, field, None)
        try:
            groups = validate_expression(expression)
        except StatusExpressionError as exc:
            logger.warning(
                "status %s has corrupt %s: %s", getattr(status, "id", None), field, exc,
                extra={"event": "corrupt_expression", "status_id": getattr(status, "id", None),
                       "field": field, "expression": expression},
            )
            return False
        return any(group.evaluate(candidate) for group in groups)


def _check_order_key(status):
    # 没有开始时间的排最前，开始时间相同按创建时间
    start_time = as_aware(getattr(status, "start_time", None))
    created_at = as_aware(getattr(status, "created_at", None))
    return (
        start_time is not None,
        start_time.timestamp() if start_time else 0.0,
        created_at.timestamp() if created_at else 0.0,
    )


def select_applicable(statuses: Iterable, device_type: str = WILDCARD, device_version: VersionLike = WILDCARD,
                      app_version: VersionLike = WILDCARD, now=None, matcher: StatusMatcher = None) -> List:
    """
    过滤出 已激活 + current + 命中 的公告，并按 start_time、created_at 升序排列
    """
    matcher = matcher or StatusMatcher()
    now = now or utc_now()
    # 请求版本号只解析一次
    device_token = _requested_version(device_version) or WILDCARD
    app_token = _requested_version(app_version) or WILDCARD
    selected = [
        status for status in statuses
        if getattr(status, "is_activated", False)
        and is_current(status, now)
        and matcher.matches(status, device_type, device_token, app_token)
    ]
    return sorted(selected, key=_check_order_key)
