"""
NSIDC_clean.py

This script performs data cleaning for the NSIDC Sea Ice Index regional daily extent of the Sea of Okhotsk.

Approach
--------
(1) Reads the day-of-year by year table: one row per (month, day), one column per year from 1978 onward
(2) Unpivots the table to one cell per calendar date
(3) Drops the nonexistent February 29th cells of non-leap years
(4) Converts empty cells to missing observations
(5) Sorts the observations by actual date

Functions
---------
- clean_nsidc: Clean the Sea Ice Index daily extent table.

Intended Use
------------
Observation frame for the "okhotsk" field of the merged dataset.

References
----------
https://nsidc.org/arcticseaicenews/sea-ice-tools/
"""

import inspect
import logging

import numpy as np
import pandas as pd

from clean_utils import (
    first_failure,
    parse_dates,
    parse_values,
    read_raw_csv,
    record_number,
    sort_observations,
)
from merge_errors import RowParseError

BASE_YEAR = 1978  # year of the first value column
MONTH_COLUMN = 0
DAY_COLUMN = 1
FIRST_YEAR_COLUMN = 2


def clean_nsidc(fpath: str, logger: logging.Logger) -> pd.DataFrame:
    """
    Clean the Sea Ice Index daily extent table.

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

    Raises
    ------
    RowParseError
        For the first cell, in reading order, whose date is not a calendar date or whose value is not a number.

    Notes
    -----
    The year of a cell is BASE_YEAR + (column position - FIRST_YEAR_COLUMN), independent of the header text.
    An empty February 29th cell is the placeholder of a non-leap year and produces no observation.
    """
    raw = read_raw_csv(fpath, min_columns=FIRST_YEAR_COLUMN, logger=logger)

    n_rows = raw.shape[0]
    n_years = raw.shape[1] - FIRST_YEAR_COLUMN
    months = raw.iloc[:, MONTH_COLUMN].str.strip().str.zfill(2)
    days = raw.iloc[:, DAY_COLUMN].str.strip().str.zfill(2)
    cells = pd.Series(
        raw.iloc[:, FIRST_YEAR_COLUMN:].to_numpy().ravel(), dtype=object
    ).str.strip()

    # One entry per cell, in reading order (row by row, left to right)
    grid = pd.DataFrame(
        {
            "pos": np.repeat(np.arange(n_rows), n_years),
            "field": np.tile(
                np.arange(FIRST_YEAR_COLUMN, FIRST_YEAR_COLUMN + n_years), n_rows
            ),
            "month": np.repeat(months.to_numpy(), n_years),
            "day": np.repeat(days.to_numpy(), n_years),
            "cell": cells.to_numpy(),
        }
    )
    grid["year"] = BASE_YEAR + grid["field"] - FIRST_YEAR_COLUMN

    # Nonexistent February 29th.
    skip = (grid["month"] == "02") & (grid["day"] == "29") & (grid["cell"] == "")
    grid = grid.loc[~skip].reset_index(drop=True)

    date_text = grid["year"].astype(str) + "-" + grid["month"] + "-" + grid["day"]
    times = parse_dates(date_text, "%Y-%m-%d")
    blank = (grid["cell"] == "").to_numpy()
    values = parse_values(grid["cell"])

    bad_dates = times.isna().to_numpy()
    bad_values = values.isna().to_numpy() & ~blank

    pos = first_failure(bad_dates | bad_values)
    if pos is not None:
        if bad_dates[pos]:
            reason = f"invalid date {date_text.iat[pos]!r}"
        else:
            reason = f"could not parse value {grid['cell'].iat[pos]!r}"
        logger.error(
            f"{inspect.currentframe().f_code.co_name}: {reason} in {fpath}"
        )
        raise RowParseError(
            fpath,
            reason,
            row=record_number(grid["pos"].iat[pos]),
            column=int(grid["field"].iat[pos]) + 1,
        )

    obs = pd.DataFrame(
        {"time": times.to_numpy(), "value": values.to_numpy(), "missing": blank}
    )
    obs = sort_observations(obs)

    logger.info(
        f"Read {len(obs)} daily extents ({int(obs['missing'].sum())} missing) for {n_years} years from {fpath}"
    )
    return obs
