"""
Spatial filtering and temporal aggregation of incidence
"""

from __future__ import annotations

from collections.abc import Collection

import pandas as pd

from covidhosp.dates import get_week_ending_saturday
from covidhosp.grouping import groupby_sum_propagating_nan
from covidhosp.locations import NATIONAL_LOCATION
from covidhosp.typing import IncidenceFrame


def filter_spatial_resolution(
    indf: IncidenceFrame, spatial_resolution: Collection[str]
) -> IncidenceFrame:
    """
    Keep only the locations at the requested spatial resolution(s)

    Parameters
    ----------
    indf
        Incidence to filter

    spatial_resolution
        Spatial resolutions to keep.
        `"state"` keeps every location except the national total,
        `"national"` keeps the national total.

    Returns
    -------
    :
        Filtered incidence
    """
    is_national = indf["location"] == NATIONAL_LOCATION

    keep = pd.Series(False, index=indf.index)
    if "state" in spatial_resolution:
        keep |= ~is_national

    if "national" in spatial_resolution:
        keep |= is_national

    return indf.loc[keep]


def drop_incomplete_last_week(indf: IncidenceFrame) -> IncidenceFrame:
    """
    Drop each location's last week if it is incomplete

    A location's last week is incomplete
    if the location's latest date is before the Saturday that ends that week.
    This is decided for each location independently.

    Parameters
    ----------
    indf
        Daily incidence, with a `sat_date` column
        holding the week-ending Saturday of each row

    Returns
    -------
    :
        `indf`, without the rows of incomplete last weeks
    """
    by_location = indf.groupby("location")
    max_date = by_location["date"].transform("max")
    max_sat_date = by_location["sat_date"].transform("max")

    last_week_is_incomplete = max_date < max_sat_date
    in_last_week = indf["date"] > max_sat_date - pd.Timedelta(days=7)

    return indf.loc[~(last_week_is_incomplete & in_last_week)]


def aggregate_to_weekly(indf: IncidenceFrame) -> IncidenceFrame:
    """
    Aggregate daily incidence to weekly incidence

    Weeks run from Sunday to Saturday
    and are labelled with the date of their Saturday.
    Incomplete last weeks are dropped (see [drop_incomplete_last_week][(m).]).
    If any day in a week has NaN incidence,
    the week's incidence is NaN.

    Parameters
    ----------
    indf
        Daily incidence, with columns `location`, `date` and `inc`

    Returns
    -------
    :
        Weekly incidence, with columns `location`, `date` and `inc`
    """
    with_sat_date = indf.assign(sat_date=get_week_ending_saturday(indf["date"]))
    complete_weeks = drop_incomplete_last_week(with_sat_date)

    res = groupby_sum_propagating_nan(
        complete_weeks.drop(columns="date").rename(columns={"sat_date": "date"}),
        by=["location", "date"],
        column="inc",
    )

    return res


def add_cumulative(indf: IncidenceFrame) -> IncidenceFrame:
    """
    Add cumulative incidence

    Parameters
    ----------
    indf
        Incidence, with columns `location`, `date` and `inc`

    Returns
    -------
    :
        `indf`, sorted by location and date,
        with an extra column `cum` holding the running total of `inc`
        within each location.
        Once `inc` is NaN, `cum` is NaN for all later dates of that location.
    """
    res = indf.sort_values(["location", "date"]).reset_index(drop=True)

    by_location = res.groupby("location")
    seen_nan = res["inc"].isna().astype(int).groupby(res["location"]).cumsum() > 0
    res["cum"] = by_location["inc"].cumsum().where(~seen_nan)

    return res
