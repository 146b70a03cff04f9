"""
Exceptions that are used throughout
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class UnrecognisedValueError(ValueError):
    """
    Raised when a value is not one of the values we know about
    """

    def __init__(
        self,
        unrecognised_value: Any,
        name: str,
        known_values: Iterable[Any],
    ) -> None:
        """
        Initialise the error

        Parameters
        ----------
        unrecognised_value
            The value that was not recognised

        name
            Name of the thing that `unrecognised_value` was meant to be

        known_values
            The values we do recognise for `name`
        """
        self.unrecognised_value = unrecognised_value
        self.known_values = list(known_values)

        error_msg = (
            f"{unrecognised_value!r} is not a recognised value for {name}. "
            f"Known values: {self.known_values}"
        )
        super().__init__(error_msg)


class UnsupportedOptionError(UnrecognisedValueError):
    """
    Raised when an option is given a value outside of its supported set
    """

    def __init__(
        self, unrecognised_value: Any, option: str, supported_values: Iterable[Any]
    ) -> None:
        super().__init__(
            unrecognised_value=unrecognised_value,
            name=f"the option `{option}`",
            known_values=supported_values,
        )


class UnknownLocationError(UnrecognisedValueError):
    """
    Raised when a location abbreviation is not in the location reference
    """

    def __init__(self, abbreviations: Iterable[str], known_values: Iterable[str]):
        self.abbreviations = sorted(abbreviations, key=str)
        super().__init__(
            unrecognised_value=(
                self.abbreviations[0]
                if len(self.abbreviations) == 1
                else self.abbreviations
            ),
            name="a location abbreviation",
            known_values=sorted(known_values, key=str),
        )


class ConflictingSelectorError(ValueError):
    """
    Raised when both `issue_date` and `as_of` are supplied
    """

    def __init__(self, issue_date: Any, as_of: Any) -> None:
        error_msg = (
            "Cannot provide both arguments issue_date and as_of. "
            f"Received {issue_date=} and {as_of=}"
        )
        super().__init__(error_msg)


class UnknownIssueDateError(ValueError):
    """
    Raised when a requested issue date is not available
    """

    def __init__(self, issue_date: Any, available_issue_dates: Iterable[Any]) -> None:
        """
        Initialise the error

        Parameters
        ----------
        issue_date
            Requested issue date

        available_issue_dates
            Issue dates that are available
        """
        self.available_issue_dates = list(available_issue_dates)
        choices = ", ".join(_format_date(v) for v in self.available_issue_dates)
        error_msg = (
            f"Invalid issue date ({_format_date(issue_date)}); "
            f"must be one of: {choices}"
        )
        super().__init__(error_msg)


class NoIssueBeforeAsOfError(ValueError):
    """
    Raised when no issue date is on or before the requested `as_of` date
    """

    def __init__(self, as_of: Any, earliest_issue_date: Any) -> None:
        error_msg = (
            f"Provided as_of date ({_format_date(as_of)}) "
            "is earlier than all available issue dates. "
            f"The earliest available issue date is {_format_date(earliest_issue_date)}"
        )
        super().__init__(error_msg)


class NoBaseSnapshotError(ValueError):
    """
    Raised when daily data has no earlier time series snapshot to extend
    """

    def __init__(self, issue_date: Any) -> None:
        error_msg = (
            f"Daily data is available for issue date {_format_date(issue_date)} "
            "but there is no time series snapshot on or before this date to extend"
        )
        super().__init__(error_msg)


def _format_date(value: Any) -> str:
    if hasattr(value, "strftime"):
        return str(value.strftime("%Y-%m-%d"))

    return str(value)
