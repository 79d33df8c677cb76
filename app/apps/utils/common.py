import hashlib


def get_hash(keyword: str) -> str:
    sha = hashlib.sha256()
    sha.update(keyword.encode('utf-8'))
    return sha.hexdigest()


def get_client_ip(request) -> str:
    """
    反向代理的真实IP由 uvicorn/gunicorn 按 forwarded_allow_ips 改写到 request.client，
    这里不读 X-Forwarded-For
    """
    return request.client.host if request.client else ""
