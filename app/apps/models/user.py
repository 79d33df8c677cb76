from tortoise import fields

from apps.models.base import BaseModel


class User(BaseModel):
    id = fields.IntField(pk=True, description="用户ID")
    username = fields.CharField(max_length=20, unique=True, index=True, description="用户名")
    password = fields.CharField(max_length=128, description="密码")
    is_active = fields.BooleanField(default=True, description="是否可用")

    class Meta:
        table = "user"
        table_description = "管理员表"

    def __str__(self):
        return self.username
