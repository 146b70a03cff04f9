"""
Useful assertions
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd


def assert_has_columns(indf: pd.DataFrame, columns: Iterable[str]) -> None:
    """
    Assert that a [pd.DataFrame][pandas.DataFrame] has the given columns

    Parameters
    ----------
    indf
        Data to verify

    columns
        Columns that must be present

    Raises
    ------
    AssertionError
        `indf` is missing some of `columns`
    """
    missing = [c for c in columns if c not in indf.columns]
    if missing:
        msg = (
            f"Missing required columns: {missing}. "
            f"Available columns: {indf.columns.tolist()}"
        )
        raise AssertionError(msg)


def assert_no_duplicate_rows(indf: pd.DataFrame, subset: list[str]) -> None:
    """
    Assert that there is at most one row for each combination of `subset`

    Parameters
    ----------
    indf
        Data to verify

    subset
        Columns which, together, should uniquely identify each row

    Raises
    ------
    AssertionError
        There are rows which share values for all of `subset`
    """
    duplicated = indf.duplicated(subset=subset, keep=False)
    if duplicated.any():
        msg = (
            f"Found rows with duplicate values for {subset}:\n"
            f"{indf.loc[duplicated, subset]}"
        )
        raise AssertionError(msg)
