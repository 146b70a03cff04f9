"""
Type hints that are used throughout
"""

from __future__ import annotations

import datetime as dt
from typing import Union

import numpy as np
import pandas as pd
from typing_extensions import TypeAlias

DateLike: TypeAlias = Union[str, dt.date, dt.datetime, pd.Timestamp, np.datetime64]
"""
Type alias for a value that can be interpreted as a calendar date
"""

RawHealthdataFrame: TypeAlias = pd.DataFrame
"""
Type alias for the raw admissions [pandas.DataFrame][pd.DataFrame] shape

For typing purposes, this is just a direct alias of [pandas.DataFrame][pd.DataFrame].
However, the point of defining this
is to provide greater clarity of the kind of data we expect.

We expect one row per location and report date, with columns
`state` (location abbreviation), `date` (report date),
`previous_day_admission_adult_covid_confirmed`
and `previous_day_admission_pediatric_covid_confirmed`.
Missing admissions are NaN.

```python
  state       date  previous_day_admission_adult_covid_confirmed  previous_day_admission_pediatric_covid_confirmed
0    CA 2021-12-30                                          10.0                                               2.0
1    CA 2021-12-31                                           NaN                                               NaN
```
"""  # noqa: E501

IncidenceFrame: TypeAlias = pd.DataFrame
"""
Type alias for the incidence [pandas.DataFrame][pd.DataFrame] shape

One row per location and date with columns `location`, `date` and `inc`
(and `cum`, once cumulative incidence has been added).
Locations are FIPS codes, with `"US"` for the national total.

```python
  location       date   inc   cum
0       06 2021-12-29  12.0  12.0
1       06 2021-12-30   NaN   NaN
2       US 2021-12-29  40.0  40.0
```
"""
