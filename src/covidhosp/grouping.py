"""
Grouping helpers
"""

from __future__ import annotations

import pandas as pd


def groupby_sum_propagating_nan(
    indf: pd.DataFrame, by: str | list[str], column: str
) -> pd.DataFrame:
    """
    Sum a column within groups, without skipping NaN

    [pandas.core.groupby.DataFrameGroupBy.sum][] treats NaN as zero.
    Here, if any value in a group is NaN, the group's sum is NaN.

    Parameters
    ----------
    indf
        Data to sum

    by
        Column(s) to group by

    column
        Column to sum

    Returns
    -------
    :
        One row per group, with the group columns and `column`

    Examples
    --------
    >>> indf = pd.DataFrame(
    ...     {
    ...         "date": ["d1", "d1", "d2", "d2"],
    ...         "inc": [1.0, 2.0, 3.0, float("nan")],
    ...     }
    ... )
    >>> res = groupby_sum_propagating_nan(indf, "date", "inc")
    >>> res  # doctest: +NORMALIZE_WHITESPACE
       date  inc
    0    d1  3.0
    1    d2  NaN
    """
    grouped = indf.groupby(by, sort=True)[column]
    has_no_nan = grouped.count() == grouped.size()
    res = grouped.sum().where(has_no_nan)

    return res.reset_index()
