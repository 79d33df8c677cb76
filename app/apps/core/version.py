"""
版本号解析

版本号按 "." 切分为若干段，每段要么是通配符 "*"，要么是数字/字母串：
两边都是纯数字时按数值比较，否则按字符串字典序比较（区分大小写）。
段数不足的一方，缺失的段视为通配符，所以 "1.2" 可以和 "1.2.5" 比较。
"""
import re
from functools import lru_cache
from typing import Tuple

from apps.core.errors import MalformedVersion

WILDCARD = "*"

# 与 /status/check 查询参数的校验规则保持一致
VERSION_CHARSET = re.compile(r"[0-9A-Za-z.*-]")
_NUMERIC = re.compile(r"[0-9]+")


def compare_segment(left: str, right: str) -> int:
    if left == WILDCARD or right == WILDCARD:
        return 0
    if _NUMERIC.fullmatch(left) and _NUMERIC.fullmatch(right):
        # 不转 int，超长数字串也能比较
        left, right = left.lstrip("0") or "0", right.lstrip("0") or "0"
        if len(left) != len(right):
            return (len(left) > len(right)) - (len(left) < len(right))
    return (left > right) - (left < right)


class VersionToken:
    """解析后的版本号，可与另一个版本号逐段比较"""

    __slots__ = ("raw", "segments")

    def __init__(self, raw: str, segments: Tuple[str, ...]):
        self.raw = raw
        self.segments = segments

    @classmethod
    def parse(cls, raw: str) -> "VersionToken":
        return _parse_cached(raw)

    @property
    def is_wildcard(self) -> bool:
        return all(segment == WILDCARD for segment in self.segments)

    def compare(self, other: "VersionToken") -> int:
        """
        逐段比较，遇到第一个不相等且非通配的段即返回
        :return: 负数 / 0 / 正数，0 表示在通配规则下相等
        """
        for left, right in zip(self.segments, other.segments):
            result = compare_segment(left, right)
            if result:
                return result
        # 多出来的段与缺失段（通配）比较，始终相等
        return 0

    def __eq__(self, other):
        if not isinstance(other, VersionToken):
            return NotImplemented
        return self.segments == other.segments

    def __hash__(self):
        return hash(self.segments)

    def __repr__(self):
        return f"VersionToken({self.raw!r})"

    def __str__(self):
        return self.raw


@lru_cache(maxsize=1024)
def _parse_cached(raw: str) -> VersionToken:
    if not raw:
        raise MalformedVersion("版本号不能为空", raw, 0)
    for position, char in enumerate(raw):
        if not VERSION_CHARSET.fullmatch(char):
            raise MalformedVersion(f"版本号包含非法字符 {char!r}", raw, position)
    return VersionToken(raw, tuple(raw.split(".")))
