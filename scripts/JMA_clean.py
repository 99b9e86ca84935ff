"""
JMA_clean.py

This script performs data cleaning for Japan Meteorological Agency daily station downloads.

Functions
---------
- clean_jma: Clean a JMA daily station file.

Intended Use
------------
Observation frames for the "katsuura" and "nemuro" fields of the merged dataset.

References
----------
https://www.data.jma.go.jp/gmd/risk/obsdl/index.php
"""

import logging

import pandas as pd

from clean_utils import read_raw_csv, station_observations

DATE_COLUMN = 0
TEMPERATURE_COLUMN = 1  # daily mean temperature, degC
DATE_FORMAT = "%m/%d/%Y"


def clean_jma(fpath: str, logger: logging.Logger) -> pd.DataFrame:
    """
    Clean a JMA daily station file. An empty temperature cell is a missing observation.

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
    """
    raw = read_raw_csv(fpath, min_columns=TEMPERATURE_COLUMN + 1, logger=logger)
    obs = station_observations(
        raw,
        fpath,
        date_column=DATE_COLUMN,
        value_column=TEMPERATURE_COLUMN,
        date_format=DATE_FORMAT,
        blank_is_missing=True,
        logger=logger,
    )
    logger.info(
        f"Read {len(obs)} daily temperatures ({int(obs['missing'].sum())} missing) from {fpath}"
    )
    return obs
