"""
SortEngine - column sorting for the data table.

A fetched dataset is decoded once into typed cells (number, text or
missing). Sorting is driven by a SortSpec: activating a column header
either flips the direction of the current column or selects a new one,
whose numeric-ness is decided from the first row only. Rows are reordered
in place with a stable sort, so repeated toggles act on the already
reordered sequence.
"""

import locale
import math
import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cmp_to_key
from typing import Any, Callable, Dict, List, Mapping, Optional

# Decimal literals as accepted by native number parsing, e.g. "5", " -1.5 ", "2e3", ".5"
_NUMERIC_TEXT = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity")


class DatasetError(ValueError):
    """Fetched file content is not a usable dataset."""


class EmptyDatasetError(DatasetError):
    """The decoded file has no rows."""


class UnknownColumnError(KeyError):
    """A column outside the selected dataset was activated."""


class CellKind(str, Enum):
    NUMBER = "number"
    TEXT = "text"
    MISSING = "missing"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    raw: Any = None
    number: float = math.nan

    @classmethod
    def from_value(cls, value: Any) -> "Cell":
        """Decide the kind of a JSON scalar once, at decode time."""
        if value is None:
            return MISSING_CELL
        if isinstance(value, bool):
            return cls(CellKind.TEXT, value)
        if isinstance(value, (int, float)):
            if isinstance(value, float) and math.isnan(value):
                return MISSING_CELL
            try:
                number = float(value)
            except OverflowError:
                # int wider than any float
                number = math.inf if value > 0 else -math.inf
            return cls(CellKind.NUMBER, value, number)
        if isinstance(value, str):
            stripped = value.strip()
            if _NUMERIC_TEXT.fullmatch(stripped):
                return cls(CellKind.NUMBER, value, float(stripped.replace("Infinity", "inf")))
            return cls(CellKind.TEXT, value)
        return cls(CellKind.TEXT, value)

    @property
    def text(self) -> str:
        """Text used for display and for lexical comparison."""
        if self.kind is CellKind.MISSING:
            return ""
        return str(self.raw)


MISSING_CELL = Cell(CellKind.MISSING)

Row = Dict[str, Cell]


@dataclass
class TabularDataset:
    """Decoded content of one stored file."""
    columns: List[str]
    rows: List[Row] = field(default_factory=list)

    @classmethod
    def from_records(cls, records: Any) -> "TabularDataset":
        """
        Build a dataset from the JSON array returned by getFileData.

        Column names are the keys of the first row.

        Raises:
            EmptyDatasetError: If there are no rows.
            DatasetError: If the payload is not a list of objects.
        """
        if not isinstance(records, list):
            raise DatasetError("Expected a JSON array of rows")
        if not records:
            raise EmptyDatasetError("Empty file")
        if not all(isinstance(record, Mapping) for record in records):
            raise DatasetError("Every row must be a JSON object")

        columns = [str(key) for key in records[0].keys()]
        rows = [
            {str(key): Cell.from_value(value) for key, value in record.items()}
            for record in records
        ]
        return cls(columns=columns, rows=rows)

    def cell(self, row: Row, column: str) -> Cell:
        return row.get(column, MISSING_CELL)

    def to_records(self) -> List[Dict[str, Any]]:
        """Rows in current order as display text."""
        return [
            {column: self.cell(row, column).text for column in self.columns}
            for row in self.rows
        ]


@dataclass(frozen=True)
class SortSpec:
    column_name: Optional[str] = None
    is_numeric: bool = False
    ascending: bool = True


Comparator = Callable[[Row, Row], int]


def classify(dataset: TabularDataset, column_name: str) -> bool:
    """
    True if the column counts as numeric.

    Only the first row is inspected: a column whose first value is a number
    stays numeric even if later values are text, and vice versa.
    """
    if not dataset.rows:
        return False
    return dataset.cell(dataset.rows[0], column_name).kind is CellKind.NUMBER


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def build_comparator(column_name: str, is_numeric: bool, ascending: bool) -> Comparator:
    """
    Comparator over rows for one column.

    Numeric columns compare the parsed numbers; a non-numeric cell (NaN)
    compares equal to everything, so its final position depends on the
    input order. Text columns use locale collation, with missing cells as
    the empty string. Descending order swaps the operands.
    """
    def cell(row: Row) -> Cell:
        return row.get(column_name, MISSING_CELL)

    if is_numeric:
        def compare(a: Row, b: Row) -> int:
            x, y = cell(a).number, cell(b).number
            if math.isnan(x) or math.isnan(y):
                return 0
            return (x > y) - (x < y)
    else:
        def compare(a: Row, b: Row) -> int:
            return _sign(locale.strcoll(cell(a).text, cell(b).text))

    if ascending:
        return compare

    def reversed_compare(a: Row, b: Row) -> int:
        return compare(b, a)

    return reversed_compare


def on_column_activated(current: SortSpec, column_name: str, dataset: TabularDataset) -> SortSpec:
    """Next SortSpec after a header click."""
    if column_name not in dataset.columns:
        raise UnknownColumnError(column_name)
    if current.column_name == column_name:
        return replace(current, ascending=not current.ascending)
    return SortSpec(column_name=column_name, is_numeric=classify(dataset, column_name), ascending=True)


def apply_sort(dataset: TabularDataset, spec: SortSpec) -> None:
    """Reorder ``dataset.rows`` in place according to ``spec``."""
    if spec.column_name is None:
        return
    comparator = build_comparator(spec.column_name, spec.is_numeric, spec.ascending)
    dataset.rows.sort(key=cmp_to_key(comparator))
