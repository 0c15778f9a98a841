from fractions import Fraction


def format_bytes(num_bytes: int) -> str:
    """Human readable size in IEC units, e.g. 1536 -> '1.5 KiB'."""
    unit = 1024
    if num_bytes < unit:
        return f"{num_bytes} B"
    div, exp = unit, 0
    n = num_bytes // unit
    while n >= unit:
        div *= unit
        exp += 1
        n //= unit
    return f"{num_bytes / div:.1f} {'KMGTPE'[exp]}iB"

def format_elapsed(t_sec: float) -> str:
    ms_total = int(round(t_sec * 1000.0))
    s, ms = divmod(max(ms_total, 0), 1000)
    h, s = divmod(s, 3600); m, s = divmod(s, 60)
    return f"{h:02d}:{m:02d}:{s:02d}.{ms:03d}"

def parse_framerate(value: str) -> Fraction:
    """Parse '5', '2.5' or '30000/1001'. Raises ValueError unless the rate is positive."""
    try:
        rate = Fraction(value.strip())
    except (ValueError, ZeroDivisionError):
        raise ValueError(f"Invalid framerate: {value!r}")
    if rate <= 0:
        raise ValueError(f"Framerate must be positive: {value!r}")
    return rate
