"""
Tests of `covidhosp.merging`
"""

import logging

import numpy as np
import pandas as pd
import pytest

from covidhosp.constants import (
    ADULT_ADMISSIONS_COLUMN,
    PEDIATRIC_ADMISSIONS_COLUMN,
    RAW_COLUMNS,
)
from covidhosp.exceptions import NoBaseSnapshotError
from covidhosp.merging import (
    build_healthdata_data,
    extend_snapshot_with_daily,
    get_gap_rows,
    get_latest_daily_releases,
)
from covidhosp.sources import InMemoryHealthdataSource
from covidhosp.testing import get_raw_data


def get_rows_for_date(res, date):
    return res.loc[res["date"] == pd.Timestamp(date)].set_index("state")


@pytest.mark.parametrize("issue_date", ("2022-01-01", "2022-01-15"))
def test_exact_timeseries_hit_is_returned_unchanged(
    source, timeseries_snapshots, issue_date
):
    res = build_healthdata_data(issue_date, source)

    exp = timeseries_snapshots.loc[
        timeseries_snapshots["issue_date"] == pd.Timestamp(issue_date),
        list(RAW_COLUMNS),
    ].reset_index(drop=True)
    pd.testing.assert_frame_equal(res, exp)


def test_not_available(source):
    assert build_healthdata_data("2022-01-02", source) is None


def test_gap_filled_and_daily_appended(source):
    res = build_healthdata_data("2022-01-03", source)

    assert res.columns.tolist() == list(RAW_COLUMNS)
    assert res["date"].max() == pd.Timestamp("2022-01-02")

    # Base snapshot is kept as is
    base = res.loc[res["date"] <= pd.Timestamp("2021-12-31")]
    assert base.shape[0] == 2 * 12
    assert (base[ADULT_ADMISSIONS_COLUMN] == 1.0).all()

    # No report for 2022-01-01 so every location is there, but missing
    gap = get_rows_for_date(res, "2022-01-01")
    assert sorted(gap.index) == ["CA", "NY"]
    admissions = gap[[ADULT_ADMISSIONS_COLUMN, PEDIATRIC_ADMISSIONS_COLUMN]]
    assert admissions.isna().all().all()

    # Daily report for 2022-01-02 issued on 2022-01-03
    reported = get_rows_for_date(res, "2022-01-02")
    assert reported.index.tolist() == ["CA"]
    assert reported.loc["CA", ADULT_ADMISSIONS_COLUMN] == 10.0
    assert reported.loc["CA", PEDIATRIC_ADMISSIONS_COLUMN] == 2.0


@pytest.mark.parametrize("issue_date", ("2022-01-03", "2022-01-05"))
def test_gap_filled_dtypes(source, issue_date):
    res = build_healthdata_data(issue_date, source)

    assert res["date"].dtype == "datetime64[ns]"
    assert res[ADULT_ADMISSIONS_COLUMN].dtype == "float64"
    assert res[PEDIATRIC_ADMISSIONS_COLUMN].dtype == "float64"


def test_get_gap_rows():
    res = get_gap_rows(["CA", "NY"], pd.Timestamp("2022-01-01"))

    assert res.columns.tolist() == list(RAW_COLUMNS)
    assert res["state"].tolist() == ["CA", "NY"]
    assert res["date"].dtype == "datetime64[ns]"
    assert (res["date"] == pd.Timestamp("2022-01-01")).all()
    for col in (ADULT_ADMISSIONS_COLUMN, PEDIATRIC_ADMISSIONS_COLUMN):
        assert res[col].dtype == "float64"
        assert res[col].isna().all()


def test_latest_correction_wins(source):
    res = build_healthdata_data("2022-01-05", source)

    # Report date 2022-01-02 was re-issued on 2022-01-05
    reported = get_rows_for_date(res, "2022-01-02")
    assert reported.loc["CA", ADULT_ADMISSIONS_COLUMN] == 11.0
    assert reported.loc["CA", PEDIATRIC_ADMISSIONS_COLUMN] == 3.0
    assert reported.loc["NY", ADULT_ADMISSIONS_COLUMN] == 5.0

    for gap_date in ["2022-01-01", "2022-01-03"]:
        gap = get_rows_for_date(res, gap_date)
        assert sorted(gap.index) == ["CA", "NY"]
        assert gap[ADULT_ADMISSIONS_COLUMN].isna().all()

    reported = get_rows_for_date(res, "2022-01-04")
    assert reported.loc["NY", ADULT_ADMISSIONS_COLUMN] == 4.0


def test_daily_issued_after_issue_date_is_ignored(source):
    res_early = build_healthdata_data("2022-01-03", source)
    res_late = build_healthdata_data("2022-01-05", source)

    early = get_rows_for_date(res_early, "2022-01-02")
    late = get_rows_for_date(res_late, "2022-01-02")
    assert early.loc["CA", ADULT_ADMISSIONS_COLUMN] == 10.0
    assert late.loc["CA", ADULT_ADMISSIONS_COLUMN] == 11.0


def test_deterministic_regardless_of_row_order(timeseries_snapshots, daily_snapshots):
    source = InMemoryHealthdataSource(
        timeseries=timeseries_snapshots, daily=daily_snapshots
    )
    source_shuffled = InMemoryHealthdataSource(
        timeseries=timeseries_snapshots,
        daily=daily_snapshots.iloc[::-1].reset_index(drop=True),
    )

    res = build_healthdata_data("2022-01-05", source)
    res_shuffled = build_healthdata_data("2022-01-05", source_shuffled)

    sort_cols = ["date", "state"]
    pd.testing.assert_frame_equal(
        res.sort_values(sort_cols).reset_index(drop=True),
        res_shuffled.sort_values(sort_cols).reset_index(drop=True),
    )


def test_no_base_snapshot(timeseries_snapshots, daily_snapshots):
    daily = pd.concat(
        [
            get_raw_data([("CA", "2021-12-20", 1.0, 1.0)], issue_date="2021-12-21"),
            daily_snapshots,
        ],
        ignore_index=True,
    )
    source = InMemoryHealthdataSource(timeseries=timeseries_snapshots, daily=daily)

    with pytest.raises(
        NoBaseSnapshotError,
        match="no time series snapshot on or before this date to extend",
    ):
        build_healthdata_data("2021-12-21", source)


def test_gap_fill_single_location():
    source = InMemoryHealthdataSource(
        timeseries=get_raw_data(
            [
                ("CA", "2021-12-30", 3.0, 1.0),
                ("CA", "2021-12-31", 4.0, 0.0),
            ],
            issue_date="2022-01-01",
        ),
        daily=get_raw_data([("CA", "2022-01-02", 10.0, 2.0)], issue_date="2022-01-03"),
    )

    res = build_healthdata_data("2022-01-03", source)

    exp = get_raw_data(
        [
            ("CA", "2021-12-30", 3.0, 1.0),
            ("CA", "2021-12-31", 4.0, 0.0),
            ("CA", "2022-01-01", np.nan, np.nan),
            ("CA", "2022-01-02", 10.0, 2.0),
        ]
    )
    pd.testing.assert_frame_equal(res, exp)


def test_extend_logs(caplog):
    base = get_raw_data([("CA", "2021-12-31", 4.0, 0.0)])
    daily = get_raw_data([("CA", "2022-01-02", 10.0, 2.0)], issue_date="2022-01-03")

    with caplog.at_level(logging.INFO, logger="covidhosp.merging"):
        extend_snapshot_with_daily(base, daily)

    assert "1 days of daily data and 1 missing days" in caplog.text


def test_extend_nothing_to_add():
    base = get_raw_data([("CA", "2022-01-02", 4.0, 0.0)])
    daily = get_raw_data([("CA", "2022-01-02", 10.0, 2.0)], issue_date="2022-01-03")

    res = extend_snapshot_with_daily(base, daily)

    pd.testing.assert_frame_equal(res, base)


def test_extend_does_not_modify_inputs():
    base = get_raw_data([("CA", "2021-12-31", 4.0, 0.0)])
    daily = get_raw_data([("CA", "2022-01-02", 10.0, 2.0)], issue_date="2022-01-03")
    base_before = base.copy()
    daily_before = daily.copy()

    extend_snapshot_with_daily(base, daily)

    pd.testing.assert_frame_equal(base, base_before)
    pd.testing.assert_frame_equal(daily, daily_before)


def test_gap_rows_include_locations_first_seen_in_daily_data():
    base = get_raw_data([("CA", "2021-12-31", 4.0, 0.0)])
    daily = get_raw_data(
        [
            ("CA", "2022-01-01", 1.0, 0.0),
            ("GU", "2022-01-01", 1.0, 0.0),
            ("CA", "2022-01-03", 1.0, 0.0),
        ],
        issue_date="2022-01-04",
    )

    res = extend_snapshot_with_daily(base, daily)

    gap = get_rows_for_date(res, "2022-01-02")
    assert gap.index.tolist() == ["CA", "GU"]


def test_get_latest_daily_releases(daily_snapshots):
    res = get_latest_daily_releases(daily_snapshots)

    assert (res["issue_date"] == pd.Timestamp("2022-01-05")).all()
    assert res.shape[0] == 4
