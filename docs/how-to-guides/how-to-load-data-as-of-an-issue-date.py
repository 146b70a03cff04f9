# ---
# jupyter:
#   jupytext:
#     text_representation:
#       extension: .py
#       format_name: percent
#       format_version: '1.3'
#       jupytext_version: 1.16.6
#   kernelspec:
#     display_name: Python 3 (ipykernel)
#     language: python
#     name: python3
# ---

# %% [markdown]
# # How to load data as of an issue date
#
# Here we demonstrate how to reconstruct hospital admissions incidence
# as it was available on a given issue date.
# The data provider releases time series snapshots every so often
# and daily snapshots in between.
# For issue dates with only daily snapshots,
# the latest time series snapshot is extended with the daily snapshots.

# %% [markdown]
# ## Imports

# %%
import logging

import numpy as np
import pandas as pd

from covidhosp.loading import HealthdataLoader, load_healthdata_data
from covidhosp.merging import build_healthdata_data
from covidhosp.sources import InMemoryHealthdataSource

# %%
logging.basicConfig(level=logging.INFO)

# %% [markdown]
# ## Starting point
#
# The starting point is two tables,
# one of time series snapshots and one of daily snapshots.
# Normally you would read these from somewhere
# (e.g. with `InMemoryHealthdataSource.from_csvs`).
# Here we make up some data.

# %%
rng = np.random.default_rng(seed=0)
dates = pd.date_range("2021-12-20", "2021-12-31", freq="D")
timeseries = pd.DataFrame(
    [
        (
            "2022-01-01",
            state,
            date,
            float(rng.integers(0, 50)),
            float(rng.integers(0, 5)),
        )
        for date in dates
        for state in ["CA", "NY", "TX"]
    ],
    columns=[
        "issue_date",
        "state",
        "date",
        "previous_day_admission_adult_covid_confirmed",
        "previous_day_admission_pediatric_covid_confirmed",
    ],
)
daily = pd.DataFrame(
    [
        ("2022-01-03", "CA", "2022-01-02", 10.0, 2.0),
        ("2022-01-03", "NY", "2022-01-02", 8.0, 1.0),
        ("2022-01-03", "TX", "2022-01-02", 12.0, 0.0),
    ],
    columns=timeseries.columns,
)

source = InMemoryHealthdataSource(timeseries=timeseries, daily=daily)
source.issue_dates()

# %% [markdown]
# ## Merged raw data
#
# No time series snapshot was issued on 2022-01-03,
# so the snapshot from 2022-01-01 is extended.
# Nothing was reported for 2022-01-01, so that day is explicitly missing.

# %%
build_healthdata_data("2022-01-03", source).tail(6)

# %% [markdown]
# ## Incidence
#
# The loader pre-processes the merged data,
# adds the national total and aggregates to weeks ending on Saturday.

# %%
load_healthdata_data(
    source,
    issue_date="2022-01-01",
    spatial_resolution=["state", "national"],
    temporal_resolution="weekly",
)

# %% [markdown]
# Use `as_of` to get the latest issue on or before a given date.

# %%
load_healthdata_data(
    source,
    as_of="2022-01-10",
    spatial_resolution="national",
    temporal_resolution="daily",
).tail()

# %% [markdown]
# If you are loading many issue dates with the same options,
# create a loader once and re-use it.

# %%
loader = HealthdataLoader(spatial_resolution=["national"], temporal_resolution="daily")
{
    issue_date.date(): loader(source, issue_date=issue_date)["date"].max().date()
    for issue_date in source.issue_dates()
}
