"""
Helpers for moving mass configurations between tables, records and
PointMass lists.
"""
from typing import Any, Dict, Iterable, List, Union

import pandas as pd

from ..core.mass import PointMass


def masses_from_data(
    data: Union[pd.DataFrame, Iterable[Any]],
    y_col: str = "y",
    m_col: str = "m",
) -> List[PointMass]:
    """
    Converts a table or a list of records into an ordered list of PointMass.

    Args:
        data (Union[pd.DataFrame, Iterable[Any]]):
            A DataFrame with a position and a mass column, or an iterable of
            records accepted by `PointMass.from_record`.
        y_col (str): Position column, only used for DataFrames.
        m_col (str): Mass column, only used for DataFrames.

    Returns:
        List[PointMass]: The masses, in row order.
    """
    if isinstance(data, pd.DataFrame):
        missing = [c for c in (y_col, m_col) if c not in data.columns]
        if missing:
            raise ValueError(
                f"Mass table is missing column(s) {missing}; available columns "
                f"are {list(data.columns)}."
            )
        return [
            PointMass(y=y, m=m)
            for y, m in zip(data[y_col].to_numpy(), data[m_col].to_numpy())
        ]
    return [PointMass.from_record(r) for r in data]


def masses_to_frame(masses: Iterable[PointMass]) -> pd.DataFrame:
    """Converts a list of PointMass into a DataFrame with 'y' and 'm' columns."""
    return pd.DataFrame([m.to_record() for m in masses], columns=["y", "m"])


def masses_to_records(masses: Iterable[PointMass]) -> List[Dict[str, float]]:
    """Converts a list of PointMass into plain {'y', 'm'} dicts."""
    return [m.to_record() for m in masses]
