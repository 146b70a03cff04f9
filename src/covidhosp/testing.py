"""
Code to support our tests

This is here, rather than in our `tests` directory
because of the issues that come
when you turn your tests into a package using `__init__.py` files
(for details, see https://docs.pytest.org/en/7.1.x/explanation/goodpractices.html#choosing-an-import-mode).
"""

from __future__ import annotations

from collections.abc import Iterable

import pandas as pd

from covidhosp.constants import RAW_COLUMNS
from covidhosp.typing import DateLike, IncidenceFrame, RawHealthdataFrame


def get_raw_data(
    rows: Iterable[tuple[str, DateLike, float, float]],
    issue_date: DateLike | None = None,
) -> RawHealthdataFrame:
    """
    Get raw data from a compact representation

    Parameters
    ----------
    rows
        Rows of (abbreviation, report date, adult admissions, paediatric admissions)

    issue_date
        If supplied, an `issue_date` column with this value is added
        (as the first column)

    Returns
    -------
    :
        Raw data
    """
    res = pd.DataFrame(list(rows), columns=list(RAW_COLUMNS))
    res["date"] = pd.to_datetime(res["date"]).astype("datetime64[ns]")
    for col in RAW_COLUMNS[2:]:
        res[col] = res[col].astype(float)

    if issue_date is not None:
        res.insert(0, "issue_date", pd.Timestamp(issue_date).as_unit("ns"))

    return res


def get_daily_range_raw_data(
    abbreviations: Iterable[str],
    start: DateLike,
    end: DateLike,
    admissions: float = 1.0,
    issue_date: DateLike | None = None,
) -> RawHealthdataFrame:
    """
    Get raw data with the same admissions for every location and day

    Parameters
    ----------
    abbreviations
        Locations to include

    start
        First report date

    end
        Last report date (inclusive)

    admissions
        Value to use for both adult and paediatric admissions

    issue_date
        Passed to [get_raw_data][(m).]

    Returns
    -------
    :
        Raw data
    """
    return get_raw_data(
        [
            (abbreviation, date, admissions, admissions)
            for date in pd.date_range(start, end, freq="D")
            for abbreviation in abbreviations
        ],
        issue_date=issue_date,
    )


def get_incidence(
    rows: Iterable[tuple[str, DateLike, float]]
    | Iterable[tuple[str, DateLike, float, float]],
) -> IncidenceFrame:
    """
    Get incidence from a compact representation

    Parameters
    ----------
    rows
        Rows of (location, date, inc) or (location, date, inc, cum)

    Returns
    -------
    :
        Incidence
    """
    rows_l = [tuple(r) for r in rows]
    columns = ["location", "date", "inc", "cum"]
    if rows_l:
        columns = columns[: len(rows_l[0])]

    res = pd.DataFrame(rows_l, columns=columns)
    res["date"] = pd.to_datetime(res["date"]).astype("datetime64[ns]")
    for col in columns[2:]:
        res[col] = res[col].astype(float)

    return res
