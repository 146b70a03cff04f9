"""
Building the incidence data set for many issue dates at once
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

import pandas as pd

from covidhosp.databases.fips_codes import FIPS_CODES
from covidhosp.dates import to_date
from covidhosp.merging import build_healthdata_data
from covidhosp.preprocessing import preprocess_healthdata_data
from covidhosp.sources import HealthdataSource
from covidhosp.typing import DateLike

LOGGER = logging.getLogger(__name__)


def build_healthdata_hosp_data(
    source: HealthdataSource,
    location_reference: pd.DataFrame = FIPS_CODES,
    issue_dates: Iterable[DateLike] | None = None,
) -> pd.DataFrame:
    """
    Build pre-processed incidence for each issue date

    Parameters
    ----------
    source
        Source of time series and daily snapshots

    location_reference
        Reference table used to map location abbreviations to location codes

    issue_dates
        Issue dates to build.
        If not supplied, all issue dates available in `source` are built.

    Returns
    -------
    :
        Incidence with columns `issue_date`, `location`, `date` and `inc`,
        sorted by issue date, location and date.
        Issue dates for which no data was released are skipped.
    """
    if issue_dates is None:
        issue_dates_to_build = source.issue_dates()
    else:
        issue_dates_to_build = pd.DatetimeIndex(
            sorted({to_date(v) for v in issue_dates})
        )

    res_l = []
    for issue_date in issue_dates_to_build:
        raw = build_healthdata_data(issue_date, source=source)
        if raw is None:
            LOGGER.warning("No data was released on %s, skipping", issue_date.date())
            continue

        incidence = preprocess_healthdata_data(
            raw, location_reference=location_reference
        )
        res_l.append(incidence.assign(issue_date=issue_date))

    if not res_l:
        return pd.DataFrame(columns=["issue_date", "location", "date", "inc"])

    res = pd.concat(res_l, ignore_index=True)[["issue_date", "location", "date", "inc"]]

    return res
