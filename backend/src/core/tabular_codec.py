"""
CSV text -> list of row objects.

Column names come from the header row. Each field is turned into a JSON
scalar: numeric literals become int/float (integral values as int), empty
fields become None and everything else stays a string.
"""

import csv
import io
import math
import re
from typing import Any, Dict, List

import pandas as pd

from backend.src.core.errors import TabularDecodeError
from backend.src.core.logger import get_logger

logger = get_logger(__name__)

_INT_LITERAL = re.compile(r"-?(?:0|[1-9]\d*)")
_FLOAT_LITERAL = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?")

# Integral floats up to this magnitude are emitted as ints ("1e3" -> 1000)
_MAX_EXACT_INT = 2 ** 53


def parse_cell(value: Any) -> Any:
    """Convert one raw CSV field into a JSON-safe scalar."""
    if value is None:
        return None
    if not isinstance(value, str):
        # pandas fills short rows with NaN
        return None if pd.isna(value) else value
    if value == "":
        return None
    if _INT_LITERAL.fullmatch(value):
        try:
            return int(value)
        except ValueError:
            # Longer than the interpreter's int string limit, handled as a float below
            pass
    if _FLOAT_LITERAL.fullmatch(value):
        number = float(value)
        if not math.isfinite(number):
            return value
        if number.is_integer() and abs(number) <= _MAX_EXACT_INT:
            return int(number)
        return number
    return value


def decode_csv(text: str) -> List[Dict[str, Any]]:
    """
    Decode CSV text into rows keyed by header name, in file order.

    An empty input or a header without data rows decodes to an empty list;
    rejecting empty datasets is left to the caller.

    Raises:
        TabularDecodeError: If pandas cannot parse the text.
    """
    try:
        df = pd.read_csv(
            io.StringIO(text),
            dtype=str,               # keep raw text, conversion happens per cell
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return []
    except (pd.errors.ParserError, csv.Error, ValueError) as e:
        logger.error(f"CSV parsing error: {e}")
        raise TabularDecodeError(f"Invalid CSV format: {e}") from e

    return [
        {str(col): parse_cell(value) for col, value in record.items()}
        for record in df.to_dict(orient="records")
    ]
