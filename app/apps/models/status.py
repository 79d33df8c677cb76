from typing import List

from tortoise import fields

from apps.models.base import BaseModel


class Status(BaseModel):
    """状态公告（维护通知等）"""

    id = fields.IntField(pk=True, description="公告ID")

    # 投放规则
    device_types: List[str] = fields.JSONField(description="设备类型列表，* 表示全部")
    device_sem_version = fields.CharField(max_length=255, description="设备系统版本表达式")
    app_sem_version = fields.CharField(max_length=255, description="应用版本表达式")

    # 时间窗口，两者同时设置或同时为空
    start_time = fields.DatetimeField(null=True, description="开始时间")
    end_time = fields.DatetimeField(null=True, index=True, description="结束时间")

    is_activated = fields.BooleanField(default=False, description="是否启用")

    # 展示内容
    type = fields.CharField(max_length=50, description="公告类型")
    title = fields.CharField(max_length=200, description="公告标题")
    contents = fields.TextField(null=True, description="公告内容")
    url = fields.CharField(max_length=500, null=True, description="跳转链接")

    class Meta:
        table = "status"
        ordering = ["-is_activated", "start_time", "end_time", "created_at"]
        table_description = "状态公告表"

    def __str__(self):
        return f"Status({self.id}): {self.title}"
