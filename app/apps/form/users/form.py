from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    access_token: str
    token_type: str


class AdminCreate(BaseModel):
    username: str = Field(..., min_length=2, max_length=20, title="用户名", description="用户名长度在2到20之间")
    password: str = Field(..., min_length=8, max_length=100, title="密码", description="密码长度在8到100之间")
