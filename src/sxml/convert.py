# src/sxml/convert.py
import re
from typing import Optional

from sxml.exceptions import AttributeConversionError

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
# Plain decimal or exponent notation; NaN and Infinity spelled the way they print.
_FLOAT_PATTERN = re.compile(r"[+-]?(?:NaN|Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)")

INT32_MIN, INT32_MAX = -(2 ** 31), 2 ** 31 - 1
INT64_MIN, INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def to_bool(value: str, name: Optional[str] = None) -> bool:
    """Accepts 'true' or 'false' in any letter case."""
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise AttributeConversionError(name, "bool", value)


def _to_bounded_int(value: str, name: Optional[str], type_name: str, low: int, high: int) -> int:
    if not _INTEGER_PATTERN.fullmatch(value):
        raise AttributeConversionError(name, type_name, value)
    number = int(value)
    if not low <= number <= high:
        raise AttributeConversionError(name, type_name, value)
    return number


def to_int32(value: str, name: Optional[str] = None) -> int:
    return _to_bounded_int(value, name, "int", INT32_MIN, INT32_MAX)


def to_int64(value: str, name: Optional[str] = None) -> int:
    return _to_bounded_int(value, name, "long", INT64_MIN, INT64_MAX)


def to_float64(value: str, name: Optional[str] = None) -> float:
    if not _FLOAT_PATTERN.fullmatch(value):
        raise AttributeConversionError(name, "double", value)
    return float(value)


CONVERTERS = {
    "str": lambda value, name=None: value,
    "bool": to_bool,
    "int": to_int32,
    "long": to_int64,
    "double": to_float64,
}
