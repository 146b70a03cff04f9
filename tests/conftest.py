"""
Re-useable fixtures etc. for tests

See https://docs.pytest.org/en/7.1.x/reference/fixtures.html#conftest-py-sharing-fixtures-across-multiple-files
"""

import pandas as pd
import pytest

from covidhosp.sources import InMemoryHealthdataSource
from covidhosp.testing import get_daily_range_raw_data, get_raw_data


@pytest.fixture(scope="session", autouse=True)
def pandas_terminal_width():
    # Set pandas terminal width so that doctests don't depend on terminal width.

    # We set the display width to 120 because examples should be short,
    # anything more than this is too wide to read in the source.
    pd.set_option("display.width", 120)

    # Display as many columns as you want (i.e. let the display width do the
    # truncation)
    pd.set_option("display.max_columns", 1000)


@pytest.fixture
def timeseries_snapshots():
    """
    Two time series snapshots

    The one issued on 2022-01-01 covers report dates up to 2021-12-31,
    the one issued on 2022-01-15 covers report dates up to 2022-01-14.
    """
    return pd.concat(
        [
            get_daily_range_raw_data(
                ["CA", "NY"],
                start="2021-12-20",
                end="2021-12-31",
                admissions=1.0,
                issue_date="2022-01-01",
            ),
            get_daily_range_raw_data(
                ["CA", "NY"],
                start="2021-12-20",
                end="2022-01-14",
                admissions=2.0,
                issue_date="2022-01-15",
            ),
        ],
        ignore_index=True,
    )


@pytest.fixture
def daily_snapshots():
    """
    Daily snapshots issued between the two time series snapshots

    - 2022-01-03: report date 2022-01-02 for CA only
    - 2022-01-05: report date 2022-01-04 for CA and NY
      and a correction of report date 2022-01-02 for CA and NY
    """
    return pd.concat(
        [
            get_raw_data([("CA", "2022-01-02", 10.0, 2.0)], issue_date="2022-01-03"),
            get_raw_data(
                [
                    ("CA", "2022-01-02", 11.0, 3.0),
                    ("NY", "2022-01-02", 5.0, 0.0),
                    ("CA", "2022-01-04", 7.0, 1.0),
                    ("NY", "2022-01-04", 4.0, 1.0),
                ],
                issue_date="2022-01-05",
            ),
        ],
        ignore_index=True,
    )


@pytest.fixture
def source(timeseries_snapshots, daily_snapshots):
    return InMemoryHealthdataSource(
        timeseries=timeseries_snapshots, daily=daily_snapshots
    )
