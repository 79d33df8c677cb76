# Gunicorn 配置文件
# 生产环境: gunicorn -c gunicorn.conf.py asgi:app

import multiprocessing
import os

# 服务器套接字
bind = os.environ.get("GUNICORN_BIND", "0.0.0.0:8000")
backlog = 2048

# Worker 进程，匹配是纯计算，按CPU核数起即可
workers = int(os.environ.get('GUNICORN_WORKERS', multiprocessing.cpu_count() * 2 + 1))
worker_class = "uvicorn.workers.UvicornWorker"
timeout = 30
keepalive = 2

# 重启
max_requests = 1000
max_requests_jitter = 50
preload_app = False  # 每个 worker 在 lifespan 中各自初始化数据库和Redis连接

# 日志 - 应用日志格式由 LOG_FORMAT 决定，统一输出到 stdout
accesslog = None
errorlog = "-"
loglevel = os.environ.get("LOG_LEVEL", "info").lower()
capture_output = True

# 只信任这些代理发来的 X-Forwarded-For，由 uvicorn worker 改写 request.client
forwarded_allow_ips = os.environ.get("FORWARDED_ALLOW_IPS", "127.0.0.1")

# 安全
limit_request_line = 4094
limit_request_fields = 100
limit_request_field_size = 8190
