import logging

from fastapi import HTTPException, Depends, Request, Security
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from redis.asyncio import Redis

from apps.models.user import User
from apps.utils.common import get_client_ip
from apps.utils.redis_ import get_redis_client, token_key, refresh_token_key
from apps.utils.token_ import decode_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(scheme_name="BearerAuth", auto_error=True)


def get_token_str(
    credentials: HTTPAuthorizationCredentials = Security(bearer_scheme)
) -> str:
    """
    安全地获取 Bearer Token 字符串。
    """
    if credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="无效的认证方式（必须是 Bearer）"
        )
    return credentials.credentials


async def get_current_user(
        request: Request,
        token: str = Depends(get_token_str),
        redis_client: Redis = Depends(get_redis_client),
) -> User:
    if not token:
        raise HTTPException(status_code=401, detail="登录失效， 请重新登录！")
    is_login, info = decode_token(token)
    if not is_login:
        raise HTTPException(status_code=401, detail=info)

    user_id = info.get("user_id")
    login_time = info.get("login_time")

    # token 只能在签发时的客户端IP上使用
    client_ip = get_client_ip(request)
    if client_ip != info.get("ip"):
        logger.warning("token ip mismatch for user %s: token=%s client=%s", user_id, info.get("ip"), client_ip,
                       extra={"event": "token_ip_mismatch"})
        raise HTTPException(status_code=401, detail="登录失效， 请重新登录！")

    stored_token = await redis_client.get(token_key(user_id, login_time))
    if stored_token != token:
        raise HTTPException(status_code=401, detail="登录失效， 请重新登录！")

    # 刷新 key 的有效期比 token 短，过期后需要调用 /auth/refresh_token
    refresh_token = await redis_client.get(refresh_token_key(user_id, login_time))
    if refresh_token != token:
        raise HTTPException(status_code=403, detail="请刷新token")

    user = await User.get_or_none(id=user_id, is_active=True)
    if not user:
        raise HTTPException(status_code=401, detail="用户不存在! 请重新登录")

    return user
