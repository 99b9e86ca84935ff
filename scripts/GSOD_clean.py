"""
GSOD_clean.py

This script performs data cleaning for NOAA Global Summary of the Day station files.

Approach
--------
(1) Reads the date and mean temperature columns, trimming the fixed-width padding around the temperature
(2) Converts the GSOD missing value code to missing observations
(3) Converts temperature from degF to degC

Functions
---------
- clean_gsod: Clean a GSOD daily station file.

Intended Use
------------
Observation frame for the "yelizovo" field of the merged dataset.

References
----------
https://www.ncei.noaa.gov/access/search/data-search/global-summary-of-the-day
"""

import logging

import pandas as pd

import calc_clean
from clean_utils import read_raw_csv, station_observations

DATE_COLUMN = 1
TEMPERATURE_COLUMN = 2  # daily mean temperature, degF
DATE_FORMAT = "%Y-%m-%d"
MISSING_TEMPERATURE = 9999.9  # GSOD missing value code for TEMP


def clean_gsod(fpath: str, logger: logging.Logger) -> pd.DataFrame:
    """
    Clean a GSOD daily station file.

    Parameters
    ----------
    fpath : str
        path to the raw CSV
    logger : logging.Logger
        Logger instance for logging.

    Returns
    -------
    pd.DataFrame
        observation frame (time, value, missing) in degC, sorted by date
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
        strip_values=True,
    )

    coded = obs["value"] == MISSING_TEMPERATURE
    obs["missing"] = coded
    obs["value"] = calc_clean._unit_degF_to_degC(obs["value"].where(~coded))

    logger.info(
        f"Read {len(obs)} daily temperatures ({int(coded.sum())} missing) from {fpath}"
    )
    return obs
