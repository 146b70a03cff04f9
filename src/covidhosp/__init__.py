"""
Reconstruction of COVID-19 hospital admissions data
as it was available on a given issue date.
"""

import importlib.metadata

__version__ = importlib.metadata.version("covidhosp")
