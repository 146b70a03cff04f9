"""
Pre-processing of raw data into incidence
"""

from __future__ import annotations

import logging

import pandas as pd

from covidhosp.assertions import assert_has_columns
from covidhosp.constants import (
    ADULT_ADMISSIONS_COLUMN,
    PEDIATRIC_ADMISSIONS_COLUMN,
    RAW_COLUMNS,
)
from covidhosp.databases.fips_codes import FIPS_CODES
from covidhosp.grouping import groupby_sum_propagating_nan
from covidhosp.locations import NATIONAL_LOCATION, map_abbreviations_to_locations
from covidhosp.typing import IncidenceFrame, RawHealthdataFrame

LOGGER = logging.getLogger(__name__)


def calculate_incidence(raw: RawHealthdataFrame) -> pd.DataFrame:
    """
    Calculate incidence from raw data

    Admissions reported on a given day happened on the previous day,
    so the date is moved back by one day.

    Parameters
    ----------
    raw
        Raw data

    Returns
    -------
    :
        Incidence, with columns `abbreviation`, `date` and `inc`.
        If either admissions value is missing, `inc` is NaN.
    """
    return pd.DataFrame(
        {
            "abbreviation": raw["state"],
            "date": raw["date"] - pd.Timedelta(days=1),
            "inc": raw[ADULT_ADMISSIONS_COLUMN] + raw[PEDIATRIC_ADMISSIONS_COLUMN],
        }
    )


def get_national_incidence(incidence: pd.DataFrame) -> pd.DataFrame:
    """
    Get national incidence by summing over all locations

    Parameters
    ----------
    incidence
        Incidence for each (non-national) location

    Returns
    -------
    :
        National incidence, one row per date.
        If any location's incidence is NaN on a date,
        the national incidence for that date is NaN too.
    """
    res = groupby_sum_propagating_nan(incidence, "date", "inc")
    res["location"] = NATIONAL_LOCATION

    return res


def preprocess_healthdata_data(
    raw: RawHealthdataFrame,
    location_reference: pd.DataFrame = FIPS_CODES,
) -> IncidenceFrame:
    """
    Pre-process raw data

    This calculates incidence, moves dates back by one day,
    adds the national total and maps abbreviations to location codes.

    Parameters
    ----------
    raw
        Raw data, e.g. the output of
        [build_healthdata_data][covidhosp.merging.build_healthdata_data]

    location_reference
        Reference table used to map abbreviations to location codes

    Returns
    -------
    :
        Incidence with columns `location`, `date` and `inc`,
        sorted by location and date

    Raises
    ------
    UnknownLocationError
        An abbreviation in `raw` is not in `location_reference`
    """
    assert_has_columns(raw, RAW_COLUMNS)

    incidence = calculate_incidence(raw)

    national_locator = incidence["abbreviation"] == NATIONAL_LOCATION
    if national_locator.any():
        LOGGER.warning(
            "Dropping %d reported national rows, "
            "national incidence is calculated from the other locations",
            national_locator.sum(),
        )
        incidence = incidence.loc[~national_locator]

    national = get_national_incidence(incidence)

    states = incidence.assign(
        location=map_abbreviations_to_locations(
            incidence["abbreviation"], location_reference=location_reference
        )
    ).drop(columns="abbreviation")

    res = (
        pd.concat([states, national], ignore_index=True)[["location", "date", "inc"]]
        .sort_values(["location", "date"])
        .reset_index(drop=True)
    )

    return res
