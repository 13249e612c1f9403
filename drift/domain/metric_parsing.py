import re
from typing import Optional

_NUMBER = re.compile(r"\d+(?:\.\d+)?|\.\d+")


def parse_numeric(value: Optional[str]) -> Optional[float]:
    """
    "2,1 s", "0.05", "340 ms" 같은 표시 문자열에서 첫 숫자 토큰을 읽는다.
    읽을 수 없으면 None (비교 생략).
    """
    if not value:
        return None
    match = _NUMBER.search(value.replace(",", "."))
    if not match:
        return None
    return float(match.group(0))


def parse_seconds(value: Optional[str]) -> Optional[float]:
    number = parse_numeric(value)
    if number is None:
        return None
    if "ms" in value.lower():
        return number / 1000
    return number


def parse_milliseconds(value: Optional[str]) -> Optional[float]:
    number = parse_numeric(value)
    if number is None:
        return None
    unit = value.lower()
    if "ms" in unit:
        return number
    if "s" in unit:
        return number * 1000
    return number
