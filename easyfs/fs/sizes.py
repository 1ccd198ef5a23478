"""Human-readable byte sizes."""

from typing import Union

from easyfs.common.constants import SIZE_TOO_LARGE, SIZE_UNIT_BASE, SIZE_UNITS


def format_size(raw: Union[int, float]) -> str:
    """Format a byte count with binary units and two decimals.

    Examples: ``1023 -> '1023.00B'``, ``1024 -> '1.00K'``, ``1536 -> '1.50K'``.
    Anything at or beyond ``1024 ** 6`` renders as ``'TooLarge'``.
    """
    divisor = 1
    for unit in SIZE_UNITS:
        if raw < divisor * SIZE_UNIT_BASE:
            return f"{raw / divisor:.2f}{unit}"
        divisor *= SIZE_UNIT_BASE
    return SIZE_TOO_LARGE


def parse_size(value: str) -> int:
    """Parse human-readable size string to bytes.

    Examples: '100MB', '1GB', '500kb', '1.5K', '1073741824'
    """
    value = value.strip().upper()
    multipliers = {"B": 1}
    for power, unit in enumerate(SIZE_UNITS[1:], start=1):
        multipliers[unit] = SIZE_UNIT_BASE**power
        multipliers[f"{unit}B"] = SIZE_UNIT_BASE**power
    for suffix, mult in sorted(multipliers.items(), key=lambda x: -len(x[0])):
        if value.endswith(suffix):
            num = value[: -len(suffix)].strip()
            return int(float(num) * mult)
    return int(value)
