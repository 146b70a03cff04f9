"""
Tests of `covidhosp.dates`
"""

import datetime as dt
from contextlib import nullcontext as does_not_raise

import numpy as np
import pandas as pd
import pytest

from covidhosp.dates import get_week_ending_saturday, to_date


@pytest.mark.parametrize(
    "value, exp",
    (
        pytest.param("2022-01-03", pd.Timestamp("2022-01-03"), id="iso-string"),
        pytest.param(dt.date(2022, 1, 3), pd.Timestamp("2022-01-03"), id="date"),
        pytest.param(
            dt.datetime(2022, 1, 3, 14, 30), pd.Timestamp("2022-01-03"), id="datetime"
        ),
        pytest.param(
            pd.Timestamp("2022-01-03 08:00"), pd.Timestamp("2022-01-03"), id="timestamp"
        ),
        pytest.param(
            np.datetime64("2022-01-03"), pd.Timestamp("2022-01-03"), id="numpy"
        ),
    ),
)
def test_to_date(value, exp):
    assert to_date(value) == exp


@pytest.mark.parametrize(
    "value, exp",
    (
        pytest.param("2022-01-03", does_not_raise(), id="valid"),
        pytest.param(
            "not a date",
            pytest.raises(ValueError, match="Could not interpret 'not a date'"),
            id="garbage",
        ),
        pytest.param(
            None,
            pytest.raises(ValueError, match="Could not interpret None"),
            id="none",
        ),
    ),
)
def test_to_date_errors(value, exp):
    with exp:
        to_date(value)


def test_get_week_ending_saturday_full_week():
    # Sunday 2022-01-02 to Saturday 2022-01-08
    dates = pd.Series(pd.date_range("2022-01-02", "2022-01-08", freq="D"))

    res = get_week_ending_saturday(dates)

    assert (res == pd.Timestamp("2022-01-08")).all()


@pytest.mark.parametrize(
    "date, exp",
    (
        pytest.param("2022-01-01", "2022-01-01", id="saturday-maps-to-itself"),
        pytest.param("2022-01-02", "2022-01-08", id="sunday-maps-to-next-saturday"),
        pytest.param("2022-01-05", "2022-01-08", id="midweek"),
        pytest.param("2021-12-31", "2022-01-01", id="across-year-boundary"),
    ),
)
def test_get_week_ending_saturday(date, exp):
    res = get_week_ending_saturday(pd.Series(pd.to_datetime([date])))

    assert res.iloc[0] == pd.Timestamp(exp)
