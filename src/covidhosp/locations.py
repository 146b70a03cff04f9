"""
Mapping between location abbreviations and location codes
"""

from __future__ import annotations

from typing import cast

import pandas as pd

from covidhosp.assertions import assert_has_columns
from covidhosp.exceptions import UnknownLocationError

NATIONAL_LOCATION = "US"
"""
Location code (and abbreviation) of the national total
"""


def lookup_location(abbreviation: str, location_reference: pd.DataFrame) -> str:
    """
    Lookup the location code for a single abbreviation

    Parameters
    ----------
    abbreviation
        Abbreviation to look up, e.g. `"CA"`

    location_reference
        Reference table with `location` and `abbreviation` columns

    Returns
    -------
    :
        Location code for `abbreviation`

    Raises
    ------
    UnknownLocationError
        `abbreviation` is not in `location_reference`
    """
    res_l = location_reference.loc[
        location_reference["abbreviation"] == abbreviation, "location"
    ].tolist()

    if len(res_l) < 1:
        raise UnknownLocationError(
            [abbreviation],
            known_values=location_reference["abbreviation"].tolist(),
        )

    if len(res_l) > 1:  # pragma: no cover
        raise AssertionError(res_l)

    return cast(str, res_l[0])


def map_abbreviations_to_locations(
    abbreviations: pd.Series, location_reference: pd.DataFrame
) -> pd.Series:
    """
    Map a series of abbreviations to location codes

    Unlike a left join, this never leaves gaps:
    every abbreviation must be known.

    Parameters
    ----------
    abbreviations
        Abbreviations to map

    location_reference
        Reference table with `location` and `abbreviation` columns

    Returns
    -------
    :
        Location codes, aligned with `abbreviations`

    Raises
    ------
    UnknownLocationError
        Any of `abbreviations` is not in `location_reference`
    """
    assert_has_columns(location_reference, ["location", "abbreviation"])

    mapping = location_reference.drop_duplicates("abbreviation").set_index(
        "abbreviation"
    )["location"]
    unknown = set(abbreviations.unique()).difference(mapping.index)
    if unknown:
        raise UnknownLocationError(unknown, known_values=mapping.index.tolist())

    return abbreviations.map(mapping)
