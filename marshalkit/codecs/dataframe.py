"""pandas DataFrame codec.

Rows become plain mappings: missing values (NaN, NaT, None) become None
and numpy scalars become Python scalars.
"""

from typing import Any, Optional

import numpy as np
import pandas as pd


def to_python(value: Any) -> Any:
    """Convert one cell into a plain Python value."""
    if isinstance(value, (list, dict, tuple)):
        return value
    if pd.isna(value):
        return None
    if isinstance(value, pd.Timestamp):
        return value.to_pydatetime()
    if isinstance(value, np.generic):
        return value.item()
    return value


def frame_to_rows(df: pd.DataFrame) -> list[dict[str, Any]]:
    """Convert a DataFrame into a list of row mappings."""
    return [
        {column: to_python(value) for column, value in row.items()}
        for row in df.to_dict(orient="records")
    ]


def rows_to_frame(rows: list[dict[str, Any]], columns: Optional[list[str]] = None) -> pd.DataFrame:
    """Build a DataFrame from row mappings, keeping `columns` order when given."""
    return pd.DataFrame.from_records(rows, columns=columns)
