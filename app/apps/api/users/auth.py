import logging
import time

from fastapi import Depends, Form, APIRouter, Request
from redis.asyncio import Redis

from apps.dependencies.auth import get_token_str, get_current_user
from apps.form.users.form import TokenResponse
from apps.models.user import User
from apps.utils import response
from apps.utils.common import get_hash, get_client_ip
from apps.utils.redis_ import get_redis_client, token_key, refresh_token_key
from apps.utils.token_ import gen_token, decode_token
from config import MAX_AGE, REFRESH_MAX_AGE

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["用户认证"])


async def _issue_token(redis_client: Redis, user_id: int, ip: str) -> dict:
    login_time = time.time()
    token = gen_token(user_id, ip, login_time, seconds=MAX_AGE)
    await redis_client.set(token_key(user_id, login_time), token, MAX_AGE)
    await redis_client.set(refresh_token_key(user_id, login_time), token, REFRESH_MAX_AGE)
    return {
        "access_token": token,
        "token_type": "bearer"
    }


async def _revoke_token(redis_client: Redis, info: dict) -> None:
    user_id = info.get("user_id")
    login_time = info.get("login_time")
    await redis_client.delete(token_key(user_id, login_time))
    await redis_client.delete(refresh_token_key(user_id, login_time))


@router.post("/login", summary="登录接口", response_model=TokenResponse, description="登录接口")
async def login(request: Request, username: str = Form(...), password: str = Form(...),
                redis_client: Redis = Depends(get_redis_client)):
    user = await User.get_or_none(username=username, password=get_hash(password), is_active=True)
    if not user:
        logger.info("login failed for %s", username, extra={"event": "login_failed"})
        return response(code=0, message="用户名或密码错误", status_code=401)
    resp = await _issue_token(redis_client, user.id, get_client_ip(request))
    logger.info("user %s logged in", user.username, extra={"event": "login"})
    return response(data=resp, message="登录成功！")


@router.get("/logout", summary="注销接口", description="注销接口", dependencies=[Depends(get_current_user)])
async def logout(
        redis_client: Redis = Depends(get_redis_client),
        token: str = Depends(get_token_str),
):
    is_login, info = decode_token(token)
    if not is_login:
        return response(code=0, message=info, status_code=401)
    await _revoke_token(redis_client, info)
    return response(message="注销成功！")


@router.get("/refresh_token", summary="刷新token", description="刷新token接口")
async def refresh_token(
        request: Request,
        redis_client: Redis = Depends(get_redis_client),
        token: str = Depends(get_token_str),
):
    is_login, info = decode_token(token)
    if not is_login:
        return response(code=0, message=info, status_code=401)
    # token 本身仍需有效且未被注销
    stored_token = await redis_client.get(token_key(info.get("user_id"), info.get("login_time")))
    client_ip = get_client_ip(request)
    if stored_token != token or client_ip != info.get("ip"):
        return response(code=0, message="登录失效！请重新登录！", status_code=401)
    await _revoke_token(redis_client, info)
    resp = await _issue_token(redis_client, info.get("user_id"), client_ip)
    return response(data=resp, message="刷新token成功！")
