"""
版本范围匹配引擎

状态公告按 设备类型 / 设备系统版本 / 应用版本 进行投放，
本包只做纯计算，不涉及任何 I/O。
"""
from apps.core.comparator import (
    Comparator,
    ComparatorSet,
    evaluate_expression,
    parse_expression,
    validate_expression,
)
from apps.core.errors import (
    MalformedComparator,
    MalformedExpression,
    MalformedVersion,
    StatusExpressionError,
)
from apps.core.matcher import StatusMatcher, select_applicable
from apps.core.version import VersionToken
from apps.core.window import is_current, is_expired

__all__ = [
    "Comparator",
    "ComparatorSet",
    "MalformedComparator",
    "MalformedExpression",
    "MalformedVersion",
    "StatusExpressionError",
    "StatusMatcher",
    "VersionToken",
    "evaluate_expression",
    "is_current",
    "is_expired",
    "parse_expression",
    "select_applicable",
    "validate_expression",
]
