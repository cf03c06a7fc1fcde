def _trim(value: float, digits: int) -> str:
    text = f"{value:.{digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_duration(seconds: float) -> str:
    """以 "840µs"、"12.5ms"、"1.2s"、"1m15.2s" 的格式顯示耗時。"""
    if seconds <= 0:
        return "0s"
    nanos = seconds * 1e9
    if nanos < 1e3:
        return f"{int(round(nanos))}ns"
    if nanos < 1e6:
        return f"{_trim(nanos / 1e3, 3)}µs"
    if nanos < 1e9:
        return f"{_trim(nanos / 1e6, 6)}ms"

    # 一分鐘以上拆成 h/m/s，小時與分鐘之後的單位即使為 0 也保留
    total_nanos = int(round(nanos))
    hours, rest = divmod(total_nanos, 3600 * 10**9)
    minutes, rest = divmod(rest, 60 * 10**9)
    secs = _trim(rest / 1e9, 9)
    if hours:
        return f"{hours}h{minutes}m{secs}s"
    if minutes:
        return f"{minutes}m{secs}s"
    return f"{secs}s"
