"""
Merging of time series and daily snapshots

The data provider publishes two kinds of snapshot:

- time series snapshots, which cover every report date up to their issue date
- daily snapshots, which cover a single report date
  and can be re-issued (i.e. corrected) on later issue dates

For issue dates that have a time series snapshot, we simply use it.
For issue dates that only have daily snapshots,
we take the latest time series snapshot issued on or before the issue date
and extend it, one report date at a time,
with the latest daily snapshot issued on or before the issue date.
Report dates with no daily snapshot are kept as explicit gaps
(every known location, with missing admissions),
rather than being dropped.
"""

from __future__ import annotations

import logging

import numpy as np
import pandas as pd

from covidhosp.constants import (
    ADULT_ADMISSIONS_COLUMN,
    PEDIATRIC_ADMISSIONS_COLUMN,
    RAW_COLUMNS,
)
from covidhosp.dates import to_date
from covidhosp.exceptions import NoBaseSnapshotError
from covidhosp.sources import HealthdataSource
from covidhosp.typing import DateLike, RawHealthdataFrame

LOGGER = logging.getLogger(__name__)


def get_latest_daily_releases(daily: pd.DataFrame) -> pd.DataFrame:
    """
    Get the latest release of each report date

    Parameters
    ----------
    daily
        Daily snapshots, with columns `issue_date`, `date` and the raw columns

    Returns
    -------
    :
        The rows of `daily` which belong to the release
        with the largest issue date for their report date
    """
    latest_issue_date = daily.groupby("date")["issue_date"].transform("max")

    return daily.loc[daily["issue_date"] == latest_issue_date]


def get_gap_rows(locations: list[str], date: pd.Timestamp) -> RawHealthdataFrame:
    """
    Get rows which mark a report date as missing for every location

    Parameters
    ----------
    locations
        Location abbreviations to include

    date
        Report date

    Returns
    -------
    :
        One row per location, with missing admissions
    """
    missing = np.full(len(locations), np.nan)

    return pd.DataFrame(
        {
            "state": locations,
            "date": pd.DatetimeIndex([date] * len(locations)).astype("datetime64[ns]"),
            ADULT_ADMISSIONS_COLUMN: missing,
            PEDIATRIC_ADMISSIONS_COLUMN: missing.copy(),
        },
        columns=list(RAW_COLUMNS),
    )


def extend_snapshot_with_daily(
    base: RawHealthdataFrame, daily: pd.DataFrame
) -> RawHealthdataFrame:
    """
    Extend a time series snapshot with daily snapshots

    Parameters
    ----------
    base
        Time series snapshot to extend

    daily
        Daily snapshots to extend with

        These should already be restricted to releases
        issued on or before the issue date of interest.

    Returns
    -------
    :
        `base`, with one block of rows appended
        for every report date after the last report date in `base`
        up to and including the last report date in `daily`
    """
    last_date = base["date"].max()
    max_date = daily["date"].max()
    latest_releases = get_latest_daily_releases(daily)

    pieces = [base[list(RAW_COLUMNS)]]
    # Locations seen so far, in order of first appearance
    locations = list(dict.fromkeys(base["state"]))
    n_filled = 0
    n_gaps = 0
    for new_date in pd.date_range(last_date + pd.Timedelta(days=1), max_date, freq="D"):
        release = latest_releases.loc[latest_releases["date"] == new_date]
        if release.empty:
            LOGGER.debug("No daily data for %s, adding missing values", new_date.date())
            pieces.append(get_gap_rows(locations, new_date))
            n_gaps += 1

        else:
            LOGGER.debug(
                "Adding daily data for %s issued on %s",
                new_date.date(),
                release["issue_date"].iloc[0].date(),
            )
            pieces.append(release[list(RAW_COLUMNS)].assign(date=new_date))
            locations.extend(s for s in release["state"].unique() if s not in locations)
            n_filled += 1

    LOGGER.info(
        "Extended snapshot ending %s with %d days of daily data and %d missing days",
        last_date.date(),
        n_filled,
        n_gaps,
    )

    return pd.concat(pieces, ignore_index=True)


def build_healthdata_data(
    issue_date: DateLike, source: HealthdataSource
) -> RawHealthdataFrame | None:
    """
    Build the raw data as it was available on a given issue date

    Parameters
    ----------
    issue_date
        Issue date of interest

    source
        Source of time series and daily snapshots

    Returns
    -------
    :
        Raw data as of `issue_date`.

        If neither a time series nor a daily snapshot
        was issued on `issue_date`, `None`.

    Raises
    ------
    NoBaseSnapshotError
        Daily snapshots were issued on `issue_date`,
        but there is no time series snapshot on or before `issue_date` to extend.
    """
    issue_date = to_date(issue_date)

    timeseries_snapshot = source.get_timeseries(issue_date)
    if timeseries_snapshot is not None:
        LOGGER.info("Using time series snapshot issued on %s", issue_date.date())
        return timeseries_snapshot

    if issue_date not in source.daily_issue_dates():
        # Nothing was released on this issue date
        return None

    base_issue_dates = source.timeseries_issue_dates()
    base_issue_dates = base_issue_dates[base_issue_dates <= issue_date]
    if base_issue_dates.empty:
        raise NoBaseSnapshotError(issue_date)

    base_issue_date = base_issue_dates.max()
    LOGGER.info(
        "Building data for %s from the time series snapshot issued on %s",
        issue_date.date(),
        base_issue_date.date(),
    )
    base = source.get_timeseries(base_issue_date)
    if base is None:  # pragma: no cover
        raise AssertionError(base_issue_date)

    return extend_snapshot_with_daily(base, daily=source.get_daily(issue_date))
