"""
Parsing and display helpers for Kubernetes quantity strings.

Values are normalised to floats (CPU in cores, memory in bytes). Nothing here
raises: unparseable input is logged and treated as zero, since these numbers
are only ever displayed.
"""

import logging
import math
import re
from decimal import Decimal
from typing import Optional, Union

logger = logging.getLogger(__name__)

KIB = 1024
MIB = 1024**2
GIB = 1024**3

Quantity = Optional[Union[str, int, float, Decimal]]

# CPU suffixes map to divisors; dividing keeps "100m" == 0.1 exact.
_CPU_SUFFIXES = (
    ("n", 1_000_000_000),
    ("u", 1_000_000),
    ("µ", 1_000_000),
    ("m", 1000),
)

_MEMORY_SUFFIXES = (
    ("Ki", KIB),
    ("Mi", MIB),
    ("Gi", GIB),
    ("Ti", 1024**4),
    ("Pi", 1024**5),
    ("Ei", 1024**6),
    ("k", 1000),
    ("K", 1000),
    ("M", 1000**2),
    ("G", 1000**3),
    ("T", 1000**4),
    ("P", 1000**5),
    ("E", 1000**6),
)

_LEADING_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def _clean(raw: Quantity) -> str:
    return str(raw).replace('"', "").replace("'", "").strip()


def _leading_number(text: str) -> float:
    match = _LEADING_NUMBER.search(text)
    return float(match.group(0)) if match else 0.0


def _parse_with_suffixes(text: str, suffixes, divide: bool = False) -> Optional[float]:
    for suffix, factor in suffixes:
        if text.endswith(suffix):
            number = float(text[: -len(suffix)])
            return number / factor if divide else number * factor
    return None


def parse_cpu(raw: Quantity) -> float:
    """Converts a K8s CPU quantity ("250m", "100n", "2") to cores."""
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float, Decimal)):
        return float(raw)

    text = _clean(raw)
    if not text:
        return 0.0
    try:
        value = _parse_with_suffixes(text, _CPU_SUFFIXES, divide=True)
        if value is None:
            value = float(text)
        if math.isnan(value) or math.isinf(value):
            raise ValueError(text)
        return value
    except ValueError:
        value = _leading_number(text)
        if not value:
            logger.debug("Could not parse CPU quantity %r; using 0.", raw)
        return value


def parse_memory(raw: Quantity) -> float:
    """Converts a K8s memory quantity ("512Mi", "1G", "1048576") to bytes."""
    if raw is None:
        return 0.0
    if isinstance(raw, (int, float, Decimal)):
        return float(raw)

    text = _clean(raw)
    if not text:
        return 0.0
    try:
        if text.isdigit():
            return float(text)
        value = _parse_with_suffixes(text, _MEMORY_SUFFIXES)
        if value is None:
            value = float(text)
        if math.isnan(value) or math.isinf(value):
            raise ValueError(text)
        return value
    except ValueError:
        value = _leading_number(text)
        if value:
            logger.warning("Unrecognised memory quantity %r; falling back to %s bytes.", raw, value)
        else:
            logger.warning("Could not parse memory quantity %r; using 0.", raw)
        return value
    except Exception as e:
        logger.error("Unexpected error parsing memory quantity %r: %s", raw, e)
        return 0.0


def round_half_up(value: float) -> int:
    """Rounds .5 away from zero for positive values, like the dashboard always has."""
    return int(math.floor(value + 0.5))


def _is_zero(value: float) -> bool:
    return value is None or math.isnan(value) or value == 0


def format_cpu(cores: float) -> str:
    """Renders cores as "0", "500µ", "250m", "2" or "1.50"."""
    if _is_zero(cores):
        return "0"
    micros = round_half_up(cores * 1_000_000)
    if micros < 1000:
        return f"{micros}µ"
    millis = round_half_up(cores * 1000)
    if millis < 1000:
        return f"{millis}m"
    # Rounded before the unit is picked so 0.9996 reads "1", not "1000m".
    if round(cores, 2).is_integer():
        return f"{round(cores):d}"
    return f"{cores:.2f}"


def format_memory(num_bytes: float) -> str:
    """Renders bytes for a single node or pod, preferring whole Gi above 1Gi."""
    if _is_zero(num_bytes):
        return "0"
    if num_bytes >= GIB:
        return f"{num_bytes / GIB:.0f}Gi"
    if num_bytes < KIB:
        return f"{num_bytes:.0f}B"
    if num_bytes < MIB:
        return f"{num_bytes / KIB:.0f}Ki"
    return f"{num_bytes / MIB:.0f}Mi"


def format_group_memory(num_bytes: float) -> str:
    """
    Renders group-level memory, always in Gi: one decimal place below 1Gi,
    nearest whole Gi otherwise.
    """
    if _is_zero(num_bytes):
        return "0Gi"
    gibibytes = num_bytes / GIB
    if 0 < gibibytes < 1:
        return f"{gibibytes:.1f}Gi"
    return f"{round_half_up(gibibytes)}Gi"


def format_whole_gibibytes(num_bytes: float) -> str:
    """Renders a group memory total in whole Gi."""
    if _is_zero(num_bytes):
        return "0Gi"
    return f"{round_half_up(num_bytes / GIB)}Gi"
