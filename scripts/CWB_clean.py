"""
CWB_clean.py

This script performs data cleaning for Central Weather Bureau (Taiwan) daily station files, as archived by the
historical_weather project.

Functions
---------
- clean_cwb: Clean a CWB daily station file.

Intended Use
------------
Observation frame for the "danshui" field of the merged dataset, which drives the merge.

References
----------
https://github.com/Raingel/historical_weather
"""

import logging

import pandas as pd

from clean_utils import read_raw_csv, station_observations

DATE_COLUMN = 0  # ObsTime
TEMPERATURE_COLUMN = 7  # daily mean temperature, degC
DATE_FORMAT = "%Y-%m-%d"


def clean_cwb(fpath: str, logger: logging.Logger) -> pd.DataFrame:
    """
    Clean a CWB daily station file. Every row carries a value, so an empty temperature is a parse error.

    Parameters
    ----------
    fpath : str
        path to the raw CSV
    logger : logging.Logger
        Logger instance for logging.

    Returns
    -------
    pd.DataFrame
        observation frame (time, value, missing), sorted by date

    Notes
    -----
    CWB marks instrument failures with large negative codes (e.g. -99.8). They are kept here and removed by the
    outlier bound applied at merge time.
    """
    raw = read_raw_csv(fpath, min_columns=TEMPERATURE_COLUMN + 1, logger=logger)
    obs = station_observations(
        raw,
        fpath,
        date_column=DATE_COLUMN,
        value_column=TEMPERATURE_COLUMN,
        date_format=DATE_FORMAT,
        blank_is_missing=False,
        logger=logger,
    )
    logger.info(f"Read {len(obs)} daily temperatures from {fpath}")
    return obs
