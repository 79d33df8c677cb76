"""
状态公告表单验证
"""
from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from apps.core.comparator import validate_expression
from apps.services.status_service import EXPRESSION_MAX_LENGTH

VERSION_PATTERN = r"^[0-9A-Za-z.*-]+$"


def _check_expression(v):
    if v is None:
        return v
    # MalformedExpression 继承自 ValueError，pydantic 会转成字段错误
    validate_expression(v)
    return v


def _check_url(v):
    if v and not v.startswith(("http://", "https://")):
        raise ValueError("链接必须以 http:// 或 https:// 开头")
    return v


class StatusCreateForm(BaseModel):
    """创建状态公告表单"""
    device_types: List[str] = Field(..., min_length=1, description="设备类型，* 表示全部")
    device_sem_version: str = Field(..., max_length=EXPRESSION_MAX_LENGTH, description="设备系统版本表达式，例：>=1.2.0 <2.0.0|=3.1.*")
    app_sem_version: str = Field(..., max_length=EXPRESSION_MAX_LENGTH, description="应用版本表达式")
    type: str = Field(..., min_length=1, max_length=50, description="公告类型")
    title: str = Field(..., min_length=1, max_length=200, description="公告标题")
    contents: Optional[str] = Field(None, description="公告内容")
    url: Optional[str] = Field(None, max_length=500, description="跳转链接，可为空字符串")
    is_activated: bool = Field(..., description="是否启用")
    start_time: Optional[datetime] = Field(None, description="开始时间")
    end_time: Optional[datetime] = Field(None, description="结束时间")

    @field_validator("device_sem_version", "app_sem_version")
    @classmethod
    def check_expression(cls, v):
        return _check_expression(v)

    @field_validator("url")
    @classmethod
    def check_url(cls, v):
        return _check_url(v)

    @model_validator(mode="after")
    def validate_window(self):
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("开始时间和结束时间必须同时设置")
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValueError("结束时间必须晚于开始时间")
        return self


class StatusUpdateForm(BaseModel):
    """更新状态公告表单，所有字段都是可选的；start_time 和 end_time 同时传 null 表示清除时间窗口"""
    device_types: Optional[List[str]] = Field(None, min_length=1, description="设备类型")
    device_sem_version: Optional[str] = Field(None, max_length=EXPRESSION_MAX_LENGTH, description="设备系统版本表达式")
    app_sem_version: Optional[str] = Field(None, max_length=EXPRESSION_MAX_LENGTH, description="应用版本表达式")
    type: Optional[str] = Field(None, min_length=1, max_length=50, description="公告类型")
    title: Optional[str] = Field(None, min_length=1, max_length=200, description="公告标题")
    contents: Optional[str] = Field(None, description="公告内容")
    url: Optional[str] = Field(None, max_length=500, description="跳转链接")
    is_activated: Optional[bool] = Field(None, description="是否启用")
    start_time: Optional[datetime] = Field(None, description="开始时间")
    end_time: Optional[datetime] = Field(None, description="结束时间")

    @field_validator("device_sem_version", "app_sem_version")
    @classmethod
    def check_expression(cls, v):
        return _check_expression(v)

    @field_validator("url")
    @classmethod
    def check_url(cls, v):
        return _check_url(v)

    @model_validator(mode="after")
    def validate_window(self):
        window_fields = {"start_time", "end_time"} & self.model_fields_set
        if len(window_fields) == 1:
            raise ValueError("开始时间和结束时间必须同时修改")
        if (self.start_time is None) != (self.end_time is None) and window_fields:
            raise ValueError("开始时间和结束时间必须同时设置或同时清除")
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValueError("结束时间必须晚于开始时间")
        return self

    @model_validator(mode="after")
    def validate_required_not_null(self):
        # 只有时间窗口和内容允许显式置空
        for name in ("device_types", "device_sem_version", "app_sem_version", "type", "title", "is_activated"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} 不能为空")
        return self


class StatusListQuery(BaseModel):
    """状态公告列表查询"""
    filter: Optional[Literal["current", "expired"]] = Field(None, description="current: 未过期（含未开始）, expired: 已过期")
    skip: int = Field(default=0, ge=0, description="跳过条数")
    limit: int = Field(default=20, ge=1, description="每页数量")


class StatusCheckQuery(BaseModel):
    """客户端查询当前适用的公告"""
    device_type: str = Field(default="*", min_length=1, description="设备类型")
    device_version: str = Field(default="*", pattern=VERSION_PATTERN, description="设备系统版本")
    app_version: str = Field(default="*", pattern=VERSION_PATTERN, description="应用版本")
