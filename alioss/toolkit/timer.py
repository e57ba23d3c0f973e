import datetime


def format_iso_datetime(val: datetime.datetime, *, use_z: bool = True, timespec: str = "milliseconds") -> str:
    """
    将 datetime 对象格式化为 ISO 8601 字符串。
    - 有时区信息：保留时区并输出 ISO 格式
    - 无时区信息：假定为 UTC

    Args:
        val: 要格式化的 datetime 对象。
        use_z: 如果为 True 且时区为 UTC，输出 'Z' 格式；否则输出 '+00:00' 格式。
        timespec: 时间精度，可选值：'auto', 'hours', 'minutes', 'seconds', 'milliseconds', 'microseconds'。

    Returns:
        ISO 8601 格式的字符串。
    """
    if val.tzinfo is None:
        val = val.replace(tzinfo=datetime.UTC)

    iso_str = val.isoformat(timespec=timespec)

    if use_z and val.utcoffset() == datetime.timedelta(0):
        return iso_str.replace("+00:00", "Z")

    return iso_str


def format_unix_timestamp(ts: int | float, *, use_z: bool = True) -> str:
    """将 Unix 时间戳（秒，OSS 的 last_modified 即此格式）格式化为 UTC ISO 8601 字符串"""
    return format_iso_datetime(datetime.datetime.fromtimestamp(ts, tz=datetime.UTC), use_z=use_z, timespec="seconds")
