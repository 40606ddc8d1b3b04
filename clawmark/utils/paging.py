from typing import Any


def positive_int(value: Any, default: int) -> int:
    """Parse a paging parameter; missing, non-numeric or non-positive values yield ``default``"""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return default
    return parsed if parsed >= 1 else default
