"""
Utility helper functions for safe data handling.
"""
import math
import re
import unicodedata
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Callable, Iterable, Optional, Union

Number = Union[int, float]

Accessor = Callable[[Any], Any]


def safe_lower(value: Any) -> str:
    """
    Safely lowercase a value, handling None.

    Returns:
        Lowercased string or empty string if None
    """
    if value is None:
        return ""
    return str(value).lower()


def dig(source: Any, *path: str) -> Any:
    """
    Walk nested dicts, returning None as soon as a step is missing.

    dig(doc, "split", "pc", "playlists") is the None-safe form of
    doc["split"]["pc"]["playlists"].
    """
    current = source
    for key in path:
        if not isinstance(current, dict):
            return None
        current = current.get(key)
    return current


def first_present(source: Any, accessors: Iterable[Accessor], default: Any = None) -> Any:
    """
    Try accessors in order and return the first result that is not None.

    The order of accessors matters: it encodes which upstream field name
    wins when several are present.
    """
    for accessor in accessors:
        value = accessor(source)
        if value is not None:
            return value
    return default


def to_number(value: Any, default: Number = 0) -> Number:
    """
    Coerce an upstream value to a number.

    None, booleans and unparsable strings give the default. Integral values
    come back as int so counts stay ints in JSON output.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = value
    else:
        try:
            number = float(str(value).strip())
        except ValueError:
            return default
    if isinstance(number, float):
        if not math.isfinite(number):
            return default
        if number.is_integer():
            return int(number)
    return number


def round_half_up(value: Number, digits: int) -> Number:
    """
    Round to a fixed number of decimals with halves going away from zero
    (0.125 -> 0.13), unlike round() which picks the even neighbour.

    Ints and non-finite values are returned unchanged.
    """
    if isinstance(value, int) or not math.isfinite(value):
        return value
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP))


def slugify(name: str) -> str:
    """
    Operator display name -> asset slug ("Capitão" -> "capitao", "NØKK" -> "nokk").
    """
    folded = unicodedata.normalize("NFKD", name.replace("Ø", "O").replace("ø", "o"))
    ascii_only = folded.encode("ascii", "ignore").decode("ascii")
    return re.sub(r"[^a-z0-9]+", "", ascii_only.lower())
