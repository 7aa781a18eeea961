from datetime import datetime

MISSING = "N/A"


def format_duration(seconds: float) -> str:
    seconds = max(0, int(seconds))
    hours, rest = divmod(seconds, 3600)
    return f"{hours}h {rest // 60}m"


def _local_time(ts: float | None, fmt: str) -> str:
    if ts is None:
        return MISSING
    try:
        return datetime.fromtimestamp(ts).strftime(fmt)
    except (OverflowError, ValueError, OSError):
        return MISSING


def format_timestamp(ts: float | None) -> str:
    return _local_time(ts, "%b %d %H:%M")


def format_datetime(ts: float | None) -> str:
    return _local_time(ts, "%b %d, %Y %H:%M")


def format_metric(value: float | None) -> str:
    if value is None:
        return MISSING
    return f"{value:g}"


def format_percent_metric(value: float | None) -> str:
    if value is None:
        return MISSING
    return f"{value:g}%"


def format_average(value: float | None, digits: int = 1) -> str:
    if value is None:
        return MISSING
    return f"{value:.{digits}f}"


def format_reward(value: float) -> str:
    return f"{value:.4f}"


def short_wallet(wallet: str | None, head: int = 6, tail: int = 4) -> str:
    if not wallet:
        return "-"
    if len(wallet) <= head + tail:
        return wallet
    return f"{wallet[:head]}…{wallet[-tail:]}"


def format_mining_speed(speed_wei: str | None) -> str:
    """Wei per second as tokens per second, truncated (not rounded) to 8 decimals."""
    if not speed_wei:
        return "-"
    try:
        value = int(str(speed_wei).split(".")[0])
    except ValueError:
        return "-"
    if value <= 0:
        return "-"
    whole, frac = divmod(value, 10 ** 18)
    return f"{whole}.{str(frac).rjust(18, '0')[:8]} NPT/s"
