"""
Column names and option sets
"""

from __future__ import annotations

ADULT_ADMISSIONS_COLUMN = "previous_day_admission_adult_covid_confirmed"
"""
Column holding confirmed adult COVID-19 admissions on the previous day
"""

PEDIATRIC_ADMISSIONS_COLUMN = "previous_day_admission_pediatric_covid_confirmed"
"""
Column holding confirmed paediatric COVID-19 admissions on the previous day
"""

RAW_COLUMNS: tuple[str, ...] = (
    "state",
    "date",
    ADULT_ADMISSIONS_COLUMN,
    PEDIATRIC_ADMISSIONS_COLUMN,
)
"""
Columns of a raw (i.e. not yet pre-processed) snapshot table
"""

RESULT_COLUMNS: tuple[str, ...] = ("location", "date", "inc", "cum")
"""
Columns of the table returned by the loader
"""

SPATIAL_RESOLUTIONS: tuple[str, ...] = ("state", "national")
TEMPORAL_RESOLUTIONS: tuple[str, ...] = ("daily", "weekly")
MEASURES: tuple[str, ...] = ("hospitalizations",)
REPLACE_NEGATIVES: tuple[bool, ...] = (False,)
ADJUSTMENT_CASES: tuple[str, ...] = ("none",)
ADJUSTMENT_METHODS: tuple[str, ...] = ("none",)
