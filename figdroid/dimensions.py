"""Figma 數值 → Android 尺寸字面值."""

import math
from typing import Optional


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def as_number(value) -> Optional[float]:
    """非數值或 NaN / inf 回傳 None."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if math.isnan(value) or math.isinf(value):
        return None
    return value


def positive_size(value) -> Optional[int]:
    """可用的尺寸（四捨五入後）；<= 0 或無效值回傳 None，由呼叫端改用 wrap_content."""
    number = as_number(value)
    if number is None or number <= 0:
        return None
    return round_half_up(number)


def format_number(value) -> str:
    """整數值不帶小數點：16.0 → '16'，16.5 → '16.5'."""
    number = as_number(value)
    if number is None:
        return "0"
    if float(number).is_integer():
        return str(int(number))
    return repr(float(number))
