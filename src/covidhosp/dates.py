"""
Date helpers
"""

from __future__ import annotations

import pandas as pd

from covidhosp.typing import DateLike

SATURDAY = 5
"""
Value of [pd.Timestamp.dayofweek][pandas.Timestamp.dayofweek] for Saturday
"""


def to_date(value: DateLike) -> pd.Timestamp:
    """
    Convert a value to a normalised [pd.Timestamp][pandas.Timestamp]

    Parameters
    ----------
    value
        Value to convert, e.g. `"2022-01-03"` or a [datetime.date][]

    Returns
    -------
    :
        `value` as a time zone naive timestamp at midnight

    Raises
    ------
    ValueError
        `value` cannot be interpreted as a date

    Examples
    --------
    >>> to_date("2022-01-03")
    Timestamp('2022-01-03 00:00:00')
    """
    try:
        res = pd.Timestamp(value)
    except (TypeError, ValueError) as exc:
        msg = f"Could not interpret {value!r} as a date"
        raise ValueError(msg) from exc

    if res is pd.NaT:
        msg = f"Could not interpret {value!r} as a date"
        raise ValueError(msg)

    return res.normalize()


def get_week_ending_saturday(dates: pd.Series) -> pd.Series:
    """
    Get the Saturday which ends the week of each date

    Weeks run from Sunday to Saturday,
    so Saturdays map to themselves
    and every other day maps to the next Saturday.

    Parameters
    ----------
    dates
        Dates to map

    Returns
    -------
    :
        Week-ending Saturday for each value in `dates`

    Examples
    --------
    >>> get_week_ending_saturday(
    ...     pd.Series(pd.to_datetime(["2022-01-01", "2022-01-02", "2022-01-07"]))
    ... ).tolist()  # doctest: +NORMALIZE_WHITESPACE
    [Timestamp('2022-01-01 00:00:00'),
     Timestamp('2022-01-08 00:00:00'),
     Timestamp('2022-01-08 00:00:00')]
    """
    days_to_saturday = (SATURDAY - dates.dt.dayofweek) % 7

    return dates + pd.to_timedelta(days_to_saturday, unit="D")
