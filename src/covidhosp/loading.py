"""
Loading of incidence as it was available on a given issue date

This is the main entry point.
It ties together merging snapshots ([covidhosp.merging][]),
pre-processing ([covidhosp.preprocessing][])
and aggregation ([covidhosp.aggregation][]).
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable
from typing import Any

import attr
import numpy as np
import pandas as pd
from attrs import define, field

from covidhosp.aggregation import (
    add_cumulative,
    aggregate_to_weekly,
    filter_spatial_resolution,
)
from covidhosp.assertions import assert_has_columns
from covidhosp.constants import (
    ADJUSTMENT_CASES,
    ADJUSTMENT_METHODS,
    MEASURES,
    REPLACE_NEGATIVES,
    RESULT_COLUMNS,
    SPATIAL_RESOLUTIONS,
    TEMPORAL_RESOLUTIONS,
)
from covidhosp.databases.fips_codes import FIPS_CODES
from covidhosp.dates import to_date
from covidhosp.exceptions import (
    ConflictingSelectorError,
    NoIssueBeforeAsOfError,
    UnknownIssueDateError,
    UnsupportedOptionError,
)
from covidhosp.merging import build_healthdata_data
from covidhosp.preprocessing import preprocess_healthdata_data
from covidhosp.sources import HealthdataSource
from covidhosp.typing import DateLike, IncidenceFrame

LOGGER = logging.getLogger(__name__)


def resolve_issue_date(
    available_issue_dates: Iterable[DateLike],
    issue_date: DateLike | None = None,
    as_of: DateLike | None = None,
) -> pd.Timestamp:
    """
    Resolve which issue date to use

    Parameters
    ----------
    available_issue_dates
        Issue dates for which data is available

    issue_date
        Requested issue date.
        This must be one of `available_issue_dates`.

    as_of
        Requested 'as of' date.
        The latest issue date on or before this date is used.

    If neither `issue_date` nor `as_of` is supplied,
    the latest available issue date is used.

    Returns
    -------
    :
        Issue date to use

    Raises
    ------
    ConflictingSelectorError
        Both `issue_date` and `as_of` were supplied

    NoIssueBeforeAsOfError
        `as_of` is before all available issue dates

    UnknownIssueDateError
        `issue_date` is not one of the available issue dates
        (or there are no available issue dates at all)

    Examples
    --------
    >>> resolve_issue_date(
    ...     ["2022-01-01", "2022-01-05", "2022-01-15"], as_of="2022-01-10"
    ... )
    Timestamp('2022-01-05 00:00:00')
    """
    if issue_date is not None and as_of is not None:
        raise ConflictingSelectorError(issue_date=issue_date, as_of=as_of)

    available = pd.DatetimeIndex(
        [to_date(v) for v in available_issue_dates]
    ).sort_values()

    if as_of is not None:
        as_of = to_date(as_of)
        candidates = available[available <= as_of]
        if candidates.empty:
            raise NoIssueBeforeAsOfError(
                as_of=as_of,
                earliest_issue_date=None if available.empty else available.min(),
            )

        return candidates.max()

    if issue_date is None:
        if available.empty:
            raise UnknownIssueDateError(
                issue_date="latest", available_issue_dates=available
            )

        return available.max()

    issue_date = to_date(issue_date)
    if issue_date not in available:
        raise UnknownIssueDateError(
            issue_date=issue_date, available_issue_dates=available
        )

    return issue_date


def adjust_reporting_anomalies(
    indf: IncidenceFrame, adjustment_cases: str, adjustment_method: str
) -> IncidenceFrame:
    """
    Adjust reporting anomalies

    Only `"none"` is supported for both `adjustment_cases` and `adjustment_method`,
    in which case `indf` is returned unchanged.

    Parameters
    ----------
    indf
        Incidence to adjust

    adjustment_cases
        Times and locations with reporting anomalies to adjust

    adjustment_method
        How the anomalies are adjusted

    Returns
    -------
    :
        Adjusted incidence

    Raises
    ------
    UnsupportedOptionError
        `adjustment_cases` or `adjustment_method` is not supported
    """
    assert_option_is_supported(adjustment_cases, "adjustment_cases", ADJUSTMENT_CASES)
    assert_option_is_supported(
        adjustment_method, "adjustment_method", ADJUSTMENT_METHODS
    )

    return indf


def assert_option_is_supported(
    value: Any, option: str, supported_values: Collection[Any]
) -> None:
    """
    Assert that an option's value is supported

    Parameters
    ----------
    value
        Value to check

    option
        Name of the option (used in the error message)

    supported_values
        Supported values for `option`

    Raises
    ------
    UnsupportedOptionError
        `value` is not in `supported_values`
    """
    if not any(_is_same_option_value(value, v) for v in supported_values):
        raise UnsupportedOptionError(
            value, option=option, supported_values=supported_values
        )


def _is_same_option_value(value: Any, supported_value: Any) -> bool:
    # Avoid 0 == False and 1 == True
    value_is_bool = isinstance(value, (bool, np.bool_))
    if value_is_bool or isinstance(supported_value, (bool, np.bool_)):
        return (
            value_is_bool
            and isinstance(supported_value, (bool, np.bool_))
            and bool(value) is bool(supported_value)
        )

    return bool(value == supported_value)


def _to_tuple_of_str(value: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(value, str):
        return (value,)

    return tuple(value)


@define
class HealthdataLoader:
    """
    Loader of incidence as it was available on a given issue date

    The options are validated when the loader is created,
    so an unsupported option fails early.
    """

    spatial_resolution: tuple[str, ...] = field(
        default=("state",), converter=_to_tuple_of_str
    )
    """
    Spatial resolution(s) to include

    Any combination of `"state"` and `"national"`.
    A single string is also accepted.
    """

    temporal_resolution: str = field(default="weekly")
    """
    Temporal resolution, `"daily"` or `"weekly"`
    """

    measure: str = field(default="hospitalizations")
    """
    Measure to load, only `"hospitalizations"` is supported
    """

    replace_negatives: bool = field(default=False)
    """
    Whether to replace negative incidence, only `False` is supported
    """

    adjustment_cases: str = field(default="none")
    """
    Times and locations with reporting anomalies to adjust, only `"none"` is supported
    """

    adjustment_method: str = field(default="none")
    """
    How reporting anomalies are adjusted, only `"none"` is supported
    """

    location_reference: pd.DataFrame = field(factory=FIPS_CODES.copy)
    """
    Reference table used to map location abbreviations to location codes
    """

    run_checks: bool = True
    """
    If `True`, check the location reference when the loader is created

    Pre-processing always needs the `location` and `abbreviation` columns,
    so switching this off only defers the failure until the loader is called.
    """

    @spatial_resolution.validator
    def validate_spatial_resolution(
        self, attribute: attr.Attribute[Any], value: tuple[str, ...]
    ) -> None:
        """
        Validate the spatial resolution
        """
        if not value:
            raise UnsupportedOptionError(
                value, option=attribute.name, supported_values=SPATIAL_RESOLUTIONS
            )

        for v in value:
            assert_option_is_supported(v, attribute.name, SPATIAL_RESOLUTIONS)

    @temporal_resolution.validator
    def validate_temporal_resolution(
        self, attribute: attr.Attribute[Any], value: str
    ) -> None:
        """
        Validate the temporal resolution
        """
        assert_option_is_supported(value, attribute.name, TEMPORAL_RESOLUTIONS)

    @measure.validator
    def validate_measure(self, attribute: attr.Attribute[Any], value: str) -> None:
        """
        Validate the measure
        """
        assert_option_is_supported(value, attribute.name, MEASURES)

    @replace_negatives.validator
    def validate_replace_negatives(
        self, attribute: attr.Attribute[Any], value: bool
    ) -> None:
        """
        Validate the replace negatives option
        """
        assert_option_is_supported(value, attribute.name, REPLACE_NEGATIVES)

    @adjustment_cases.validator
    def validate_adjustment_cases(
        self, attribute: attr.Attribute[Any], value: str
    ) -> None:
        """
        Validate the adjustment cases
        """
        assert_option_is_supported(value, attribute.name, ADJUSTMENT_CASES)

    @adjustment_method.validator
    def validate_adjustment_method(
        self, attribute: attr.Attribute[Any], value: str
    ) -> None:
        """
        Validate the adjustment method
        """
        assert_option_is_supported(value, attribute.name, ADJUSTMENT_METHODS)

    @location_reference.validator
    def validate_location_reference(
        self, attribute: attr.Attribute[Any], value: pd.DataFrame
    ) -> None:
        """
        Validate the location reference

        If `self.run_checks` is `False`, then this is a no-op
        """
        if not self.run_checks:
            return

        assert_has_columns(value, ["location", "abbreviation"])

    def __call__(
        self,
        source: HealthdataSource,
        issue_date: DateLike | None = None,
        as_of: DateLike | None = None,
    ) -> IncidenceFrame:
        """
        Load incidence

        Parameters
        ----------
        source
            Source of time series and daily snapshots

        issue_date
            Issue date to load.
            Cannot be supplied at the same time as `as_of`.

        as_of
            Load the data from the latest issue date on or before this date.
            Cannot be supplied at the same time as `issue_date`.

        If neither `issue_date` nor `as_of` is supplied,
        the latest available issue date is loaded.

        Returns
        -------
        :
            Incidence with columns `location`, `date`, `inc` and `cum`,
            sorted by location and date.
            For weekly data, `date` is the Saturday that ends each week.
        """
        available_issue_dates = source.issue_dates()
        resolved_issue_date = resolve_issue_date(
            available_issue_dates, issue_date=issue_date, as_of=as_of
        )
        LOGGER.info("Loading data issued on %s", resolved_issue_date.date())

        raw = build_healthdata_data(resolved_issue_date, source=source)
        if raw is None:
            raise UnknownIssueDateError(
                issue_date=resolved_issue_date,
                available_issue_dates=available_issue_dates,
            )

        incidence = preprocess_healthdata_data(
            raw, location_reference=self.location_reference
        )
        incidence = adjust_reporting_anomalies(
            incidence,
            adjustment_cases=self.adjustment_cases,
            adjustment_method=self.adjustment_method,
        )

        res = filter_spatial_resolution(incidence, self.spatial_resolution)
        if self.temporal_resolution == "weekly":
            res = aggregate_to_weekly(res)

        res = add_cumulative(res)[list(RESULT_COLUMNS)]
        LOGGER.info(
            "Loaded %d rows for %d locations",
            res.shape[0],
            res["location"].nunique(),
        )

        return res


def load_healthdata_data(  # noqa: PLR0913
    source: HealthdataSource,
    issue_date: DateLike | None = None,
    as_of: DateLike | None = None,
    spatial_resolution: str | Iterable[str] = "state",
    temporal_resolution: str = "weekly",
    measure: str = "hospitalizations",
    replace_negatives: bool = False,
    adjustment_cases: str = "none",
    adjustment_method: str = "none",
    location_reference: pd.DataFrame = FIPS_CODES,
) -> IncidenceFrame:
    """
    Load incidence of COVID-19 hospital admissions as of a given issue date

    This is a convenience wrapper around [HealthdataLoader][(m).].

    Parameters
    ----------
    source
        Source of time series and daily snapshots

    issue_date
        Issue date to load

    as_of
        Load the data from the latest issue date on or before this date

    spatial_resolution
        `"state"` and/or `"national"`

    temporal_resolution
        `"daily"` or `"weekly"`

    measure
        Must be `"hospitalizations"`

    replace_negatives
        Must be `False`

    adjustment_cases
        Must be `"none"`

    adjustment_method
        Must be `"none"`

    location_reference
        Reference table used to map location abbreviations to location codes

    Returns
    -------
    :
        Incidence with columns `location`, `date`, `inc` and `cum`
    """
    loader = HealthdataLoader(
        spatial_resolution=spatial_resolution,  # type: ignore # converter handles str
        temporal_resolution=temporal_resolution,
        measure=measure,
        replace_negatives=replace_negatives,
        adjustment_cases=adjustment_cases,
        adjustment_method=adjustment_method,
        location_reference=location_reference,
    )

    return loader(source, issue_date=issue_date, as_of=as_of)
