import uuid


def uuid_hex_token() -> str:
    """
    生成 128 位随机 UUID (v4) 的十六进制表示，不含 '-' 分隔符。

    >>> len(uuid_hex_token())
    32
    """
    return uuid.uuid4().hex


def strip_scheme(url: str) -> str:
    """去掉 http:// 或 https:// 前缀以及末尾的 '/'"""
    for scheme in ("https://", "http://"):
        if url.startswith(scheme):
            url = url[len(scheme):]
            break
    return url.rstrip("/")


def ensure_scheme(url: str, default_scheme: str = "https") -> str:
    """确保 URL 带有协议前缀 (oss2 需要 http:// 或 https://)"""
    if url.startswith(("http://", "https://")):
        return url
    return f"{default_scheme}://{url}"
