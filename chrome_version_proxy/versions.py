import re
from typing import Iterable, Optional

_INT_RE = re.compile(r"([+-]?)([0-9]+)")

INT64_MAX = 2**63 - 1
INT64_MIN = -2**63


def parse_int(text: str) -> Optional[int]:
    """Signed ASCII decimal within the 64-bit range, else None."""
    m = _INT_RE.fullmatch(text)
    if m is None:
        return None
    sign, digits = m.groups()
    digits = digits.lstrip("0") or "0"
    # bounded before int() so huge inputs never reach the conversion
    if len(digits) > 19:
        return None
    value = int(sign + digits)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


def extract_major(version: str) -> int:
    """Leading integer of a dotted version ("143.0.7499.41" -> 143).

    Returns 0 when the first segment is empty, not a number or out of range.
    """
    major = parse_int(version.split(".", 1)[0])
    if major is None:
        return 0
    return major


def find_first_with_major(versions: Iterable[str],
                          target_major: int) -> Optional[str]:
    # versions arrive newest first, so the first match is the newest build
    for v in versions:
        if extract_major(v) == target_major:
            return v
    return None


def fallback_version(target_major: int) -> str:
    return f"{target_major}.0.0.0"
