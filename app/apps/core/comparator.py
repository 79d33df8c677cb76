"""
比较器与版本表达式

表达式语法：
    expression     := comparator_set ("|" comparator_set)*     # OR
    comparator_set := comparator (whitespace comparator)*      # AND
    comparator     := "*" | operator? version
    operator       := ">=" | "<=" | ">" | "<" | "="

例：">=1.2.0 <2.0.0|=3.1.*"
"""
import re
from functools import lru_cache
from typing import Tuple, Union

from apps.core.errors import MalformedComparator, MalformedExpression, MalformedVersion
from apps.core.version import WILDCARD, VersionToken

OPERATORS = (">=", "<=", ">", "<", "=")
MATCH_ANY = "*"

_OPERATOR_PREFIX = re.compile(r"[<>=!~^]*")
_TOKEN = re.compile(r"\S+")


class Comparator:
    """单个 运算符 + 版本号"""

    __slots__ = ("operator", "version")

    def __init__(self, operator: str, version: VersionToken):
        self.operator = operator
        self.version = version

    @classmethod
    def parse(cls, token: str) -> "Comparator":
        if token == MATCH_ANY:
            return cls(MATCH_ANY, VersionToken.parse(WILDCARD))

        operator = _OPERATOR_PREFIX.match(token).group(0)
        if operator and operator not in OPERATORS:
            raise MalformedComparator(f"不支持的运算符 {operator!r}", token, 0)
        raw_version = token[len(operator):]
        try:
            version = VersionToken.parse(raw_version)
        except MalformedVersion as exc:
            raise MalformedComparator(exc.message, token, len(operator) + exc.position) from exc
        # 不带运算符视为 "="
        return cls(operator or "=", version)

    def evaluate(self, candidate: VersionToken) -> bool:
        if self.operator == MATCH_ANY:
            return True
        result = candidate.compare(self.version)
        if self.operator == "=":
            return result == 0
        if self.operator == ">":
            return result > 0
        if self.operator == ">=":
            return result >= 0
        if self.operator == "<":
            return result < 0
        return result <= 0

    def __eq__(self, other):
        if not isinstance(other, Comparator):
            return NotImplemented
        return self.operator == other.operator and self.version == other.version

    def __hash__(self):
        return hash((self.operator, self.version))

    def __repr__(self):
        if self.operator == MATCH_ANY:
            return "Comparator('*')"
        return f"Comparator('{self.operator}{self.version}')"


class ComparatorSet:
    """空白分隔的一组比较器，全部满足才算满足"""

    __slots__ = ("comparators",)

    def __init__(self, comparators: Tuple[Comparator, ...]):
        self.comparators = comparators

    @classmethod
    def parse(cls, expr: str, source: str = None, offset: int = 0) -> "ComparatorSet":
        """
        :param expr: AND 分组文本
        :param source: 完整表达式，仅用于错误信息
        :param offset: expr 在完整表达式中的起始位置
        """
        source = expr if source is None else source
        comparators = []
        for match in _TOKEN.finditer(expr):
            try:
                comparators.append(Comparator.parse(match.group(0)))
            except MalformedComparator as exc:
                raise MalformedExpression(exc.message, source, offset + match.start() + exc.position) from exc
        if not comparators:
            raise MalformedExpression("比较器分组不能为空", source, offset)
        return cls(tuple(comparators))

    def evaluate(self, candidate: VersionToken) -> bool:
        return all(comparator.evaluate(candidate) for comparator in self.comparators)

    def __eq__(self, other):
        if not isinstance(other, ComparatorSet):
            return NotImplemented
        return self.comparators == other.comparators

    def __hash__(self):
        return hash(self.comparators)

    def __repr__(self):
        return f"ComparatorSet({' '.join(repr(c) for c in self.comparators)})"


@lru_cache(maxsize=1024)
def parse_expression(expr: str) -> Tuple[ComparatorSet, ...]:
    """
    解析完整表达式为 OR 分组，结果按原始字符串缓存
    """
    groups = []
    offset = 0
    for part in expr.split("|"):
        groups.append(ComparatorSet.parse(part, source=expr, offset=offset))
        offset += len(part) + 1
    return tuple(groups)


def evaluate_expression(expr: str, candidate: Union[VersionToken, str]) -> bool:
    if isinstance(candidate, str):
        candidate = VersionToken.parse(candidate)
    return any(group.evaluate(candidate) for group in parse_expression(expr))


def validate_expression(expr: str) -> Tuple[ComparatorSet, ...]:
    """
    写入前校验，失败统一抛出 MalformedExpression
    """
    if not isinstance(expr, str):
        raise MalformedExpression("表达式必须是字符串", repr(expr), 0)
    return parse_expression(expr)
