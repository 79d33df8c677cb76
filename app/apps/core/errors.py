"""
版本表达式相关异常
"""
from typing import Optional


class StatusExpressionError(ValueError):
    """表达式解析失败的基类，携带原始表达式和出错位置"""

    def __init__(self, message: str, expression: Optional[str] = None, position: int = 0):
        self.message = message
        self.expression = expression
        self.position = position
        super().__init__(str(self))

    def __str__(self):
        if self.expression is None:
            return self.message
        return f"{self.message}: '{self.expression}' (位置 {self.position})"


class MalformedVersion(StatusExpressionError):
    """版本号为空或包含非法字符"""


class MalformedComparator(StatusExpressionError):
    """运算符非法或版本部分无法解析"""


class MalformedExpression(StatusExpressionError):
    """表达式为空或 AND/OR 分组非法"""
