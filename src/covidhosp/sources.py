"""
Sources of time series and daily snapshots

The loader only relies on the [HealthdataSource][(m).] protocol,
so any storage backend can be plugged in.
[InMemoryHealthdataSource][(m).] keeps both tables in memory,
which is what we use in tests and for data read from CSV files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol

import attr
import pandas as pd
from attrs import define, field

from covidhosp.assertions import assert_has_columns, assert_no_duplicate_rows
from covidhosp.constants import (
    ADULT_ADMISSIONS_COLUMN,
    PEDIATRIC_ADMISSIONS_COLUMN,
    RAW_COLUMNS,
)
from covidhosp.dates import to_date
from covidhosp.typing import DateLike, RawHealthdataFrame


class HealthdataSource(Protocol):
    """
    Protocol for something that can serve time series and daily snapshots
    """

    def timeseries_issue_dates(self) -> pd.DatetimeIndex:
        """Issue dates of the available time series snapshots, sorted"""
        ...

    def daily_issue_dates(self) -> pd.DatetimeIndex:
        """Issue dates of the available daily snapshots, sorted"""
        ...

    def issue_dates(self) -> pd.DatetimeIndex:
        """All issue dates for which any snapshot is available, sorted"""
        ...

    def get_timeseries(self, issue_date: DateLike) -> RawHealthdataFrame | None:
        """Time series snapshot for `issue_date`, `None` if there isn't one"""
        ...

    def get_daily(self, max_issue_date: DateLike) -> pd.DataFrame:
        """Daily snapshots with an issue date on or before `max_issue_date`"""
        ...


def _parse_date_columns(indf: pd.DataFrame) -> pd.DataFrame:
    res = indf.copy()
    for col in ("issue_date", "date"):
        if col in res.columns:
            res[col] = (
                pd.to_datetime(res[col]).dt.normalize().astype("datetime64[ns]")
            )

    return res


def _empty_daily() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "issue_date": pd.Series(dtype="datetime64[ns]"),
            "state": pd.Series(dtype="object"),
            "date": pd.Series(dtype="datetime64[ns]"),
            ADULT_ADMISSIONS_COLUMN: pd.Series(dtype="float64"),
            PEDIATRIC_ADMISSIONS_COLUMN: pd.Series(dtype="float64"),
        }
    )


@define
class InMemoryHealthdataSource:
    """
    Source which holds all snapshots in memory
    """

    timeseries: pd.DataFrame = field(converter=_parse_date_columns)
    """
    Time series snapshots

    One long table with an `issue_date` column
    and the raw columns (see [RAW_COLUMNS][covidhosp.constants.RAW_COLUMNS]).
    All rows with the same `issue_date` make up one snapshot.
    """

    daily: pd.DataFrame = field(
        converter=_parse_date_columns, factory=_empty_daily
    )
    """
    Daily snapshots

    One long table with an `issue_date` column
    and the raw columns.
    All rows with the same `issue_date` and `date` make up one daily release.
    """

    run_checks: bool = True
    """
    If `True`, check the structure of the snapshots on initialisation
    """

    @timeseries.validator
    def validate_timeseries(
        self, attribute: attr.Attribute[Any], value: pd.DataFrame
    ) -> None:
        """
        Validate the time series snapshots

        If `self.run_checks` is `False`, then this is a no-op
        """
        if not self.run_checks:
            return

        assert_has_columns(value, ["issue_date", *RAW_COLUMNS])
        assert_no_duplicate_rows(value, ["issue_date", "state", "date"])

    @daily.validator
    def validate_daily(
        self, attribute: attr.Attribute[Any], value: pd.DataFrame
    ) -> None:
        """
        Validate the daily snapshots

        If `self.run_checks` is `False`, then this is a no-op
        """
        if not self.run_checks:
            return

        assert_has_columns(value, ["issue_date", *RAW_COLUMNS])
        assert_no_duplicate_rows(value, ["issue_date", "state", "date"])

    @classmethod
    def from_csvs(
        cls,
        timeseries_path: Path | str,
        daily_path: Path | str | None = None,
        run_checks: bool = True,
    ) -> InMemoryHealthdataSource:
        """
        Initialise from CSV files

        Parameters
        ----------
        timeseries_path
            Path to the CSV file holding the time series snapshots

        daily_path
            Path to the CSV file holding the daily snapshots

            If not supplied, the source has no daily snapshots.

        run_checks
            Passed to the initialiser

        Returns
        -------
        :
            Initialised source
        """
        dtype = {"state": str}
        timeseries = pd.read_csv(timeseries_path, dtype=dtype)
        if daily_path is None:
            return cls(timeseries=timeseries, run_checks=run_checks)

        daily = pd.read_csv(daily_path, dtype=dtype)

        return cls(timeseries=timeseries, daily=daily, run_checks=run_checks)

    def timeseries_issue_dates(self) -> pd.DatetimeIndex:
        """
        Get the issue dates of the time series snapshots

        Returns
        -------
        :
            Sorted, unique issue dates
        """
        return pd.DatetimeIndex(self.timeseries["issue_date"].unique()).sort_values()

    def daily_issue_dates(self) -> pd.DatetimeIndex:
        """
        Get the issue dates of the daily snapshots

        Returns
        -------
        :
            Sorted, unique issue dates
        """
        return pd.DatetimeIndex(self.daily["issue_date"].unique()).sort_values()

    def issue_dates(self) -> pd.DatetimeIndex:
        """
        Get all issue dates for which any snapshot is available

        Returns
        -------
        :
            Sorted, unique issue dates
        """
        return self.timeseries_issue_dates().union(self.daily_issue_dates())

    def get_timeseries(self, issue_date: DateLike) -> RawHealthdataFrame | None:
        """
        Get the time series snapshot for a given issue date

        Parameters
        ----------
        issue_date
            Issue date of interest

        Returns
        -------
        :
            Raw table of the snapshot
            or `None` if there is no time series snapshot for `issue_date`
        """
        locator = self.timeseries["issue_date"] == to_date(issue_date)
        if not locator.any():
            return None

        return self.timeseries.loc[locator, list(RAW_COLUMNS)].reset_index(drop=True)

    def get_daily(self, max_issue_date: DateLike) -> pd.DataFrame:
        """
        Get the daily snapshots issued on or before a given date

        Parameters
        ----------
        max_issue_date
            Latest issue date to include

        Returns
        -------
        :
            Daily snapshots, with columns `issue_date` and the raw columns
        """
        locator = self.daily["issue_date"] <= to_date(max_issue_date)

        return self.daily.loc[locator, ["issue_date", *RAW_COLUMNS]].reset_index(
            drop=True
        )
