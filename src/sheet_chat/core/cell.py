"""
Cell values for spreadsheet rows.

Spreadsheet decoders hand back loosely typed values (strings, numbers,
booleans, blanks). Every engine stage works on a tagged ``Cell`` instead so
that numeric parsing and text conversion happen in exactly one place.
"""

import math
import numbers
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any

__all__ = ["CellKind", "Cell", "try_parse_number", "to_text"]

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?$")


class CellKind(Enum):
    """Tag of a cell value."""

    TEXT = "text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ABSENT = "absent"


@dataclass(frozen=True)
class Cell:
    """
    Single spreadsheet cell.

    Attributes:
        kind: Value tag
        value: str for TEXT, float/int for NUMBER, bool for BOOLEAN, None for ABSENT
    """

    kind: CellKind
    value: Any = None

    @classmethod
    def of(cls, raw: Any) -> "Cell":
        """
        Build a cell from a raw decoded value.

        bool is checked before numbers (bool is an int subclass). NaN and
        missing markers become ABSENT. Anything else (dates, timestamps) is
        kept as its text form.
        """
        if isinstance(raw, Cell):
            return raw
        if raw is None:
            return ABSENT
        if isinstance(raw, bool):
            return cls(CellKind.BOOLEAN, raw)
        if isinstance(raw, numbers.Real):
            number = float(raw)
            if math.isnan(number):
                return ABSENT
            if isinstance(raw, numbers.Integral):
                return cls(CellKind.NUMBER, int(raw))
            return cls(CellKind.NUMBER, number)
        if isinstance(raw, str):
            return cls(CellKind.TEXT, raw)
        # pandas.NA / NaT compare as missing
        try:
            if raw != raw:
                return ABSENT
        except TypeError:
            return ABSENT
        return cls(CellKind.TEXT, str(raw))

    @property
    def is_absent(self) -> bool:
        return self.kind is CellKind.ABSENT

    @property
    def is_empty(self) -> bool:
        """True for absent cells and empty text."""
        return self.is_absent or (self.kind is CellKind.TEXT and self.value == "")


ABSENT = Cell(CellKind.ABSENT)


def _format_number(value: float | int) -> str:
    if isinstance(value, int):
        return str(value)
    if value.is_integer():
        return str(int(value))
    return repr(value)


def to_text(cell: Cell) -> str:
    """
    Text form of a cell, used for search, equality and categorical counts.

    Whole floats print without a trailing ``.0`` (10.0 -> "10"), booleans as
    "true"/"false", absent cells as "".
    """
    if cell.kind is CellKind.TEXT:
        return cell.value
    if cell.kind is CellKind.NUMBER:
        return _format_number(cell.value)
    if cell.kind is CellKind.BOOLEAN:
        return "true" if cell.value else "false"
    return ""


def try_parse_number(cell: Cell) -> float | None:
    """
    Numeric value of a cell, or None.

    Numbers pass through, text is parsed when it is a plain decimal literal
    (surrounding whitespace allowed). Booleans, absent cells, empty text and
    non-finite values never count as numbers.
    """
    if cell.kind is CellKind.NUMBER:
        return float(cell.value)
    if cell.kind is not CellKind.TEXT:
        return None
    text = cell.value.strip()
    if not _NUMBER_RE.match(text):
        return None
    number = float(text)
    if not math.isfinite(number):
        return None
    return number
