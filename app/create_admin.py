"""
创建或重置后台管理员

用法: python create_admin.py <username> <password>
"""
import argparse
import asyncio
import logging

from pydantic import ValidationError
from tortoise import Tortoise

from apps.form.users.form import AdminCreate
from apps.models.user import User
from apps.utils.common import get_hash
from apps.utils.logger import configure_logging
from config import LOG_FORMAT, LOG_LEVEL, LOG_QUIET_LOGGERS, TORTOISE_ORM

logger = logging.getLogger("create_admin")


async def create_admin(username: str, password: str) -> User:
    user, created = await User.get_or_create(username=username, defaults={"password": get_hash(password)})
    if not created:
        user.password = get_hash(password)
        user.is_active = True
        await user.save()
    logger.info("admin %s %s", username, "created" if created else "reset")
    return user


async def main(args):
    await Tortoise.init(config=TORTOISE_ORM)
    try:
        await create_admin(args.username, args.password)
    finally:
        await Tortoise.close_connections()


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description='创建或重置后台管理员')
    parser.add_argument('username', help='用户名')
    parser.add_argument('password', help='密码')
    configure_logging(LOG_LEVEL, LOG_FORMAT, LOG_QUIET_LOGGERS)
    parsed = parser.parse_args()
    try:
        AdminCreate(username=parsed.username, password=parsed.password)
    except ValidationError as e:
        parser.error(str(e))
    asyncio.run(main(parsed))
