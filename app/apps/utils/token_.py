import time

import jwt

from config import SECRET_KEY

ALGORITHM = "HS256"


def gen_token(user_id, ip, login_time=None, seconds=60 * 60):
    login_time = time.time() if login_time is None else login_time
    # jwt 主体容易被解码，不要放敏感信息
    payload = {
        "user_id": user_id,
        "login_time": login_time,
        "ip": ip,
        "exp": int(login_time + seconds),
    }
    return jwt.encode(payload=payload, key=SECRET_KEY.get_secret_value(), algorithm=ALGORITHM)


def decode_token(token):
    """
    token解密
    :return: (是否有效, 载荷或错误信息)
    """
    try:
        info = jwt.decode(jwt=token, key=SECRET_KEY.get_secret_value(), algorithms=[ALGORITHM],
                          options={'verify_exp': True})
        return True, info
    except jwt.ExpiredSignatureError:
        return False, "Token 已过期！请重新登录！"
    except jwt.InvalidTokenError:
        return False, "Token 验证失败！请重新登录！"
