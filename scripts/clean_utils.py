"""
clean_utils.py

Functions
---------
- read_raw_csv: Reads a raw network CSV as text cells, with the file closed on every exit path.
- record_number: Converts a 0-based data row position into the CSV record number used in error messages.
- first_failure: Returns the position of the first failing row in a boolean mask.
- parse_dates: Parses a column of date cells with a fixed format.
- parse_values: Parses a column of numeric cells.
- station_observations: Builds an observation frame from a one-row-per-day station file.
- sort_observations: Stable sort of an observation frame by date.

Intended Use
------------
Support utility functions for the network cleaning scripts. Every cleaning script returns an
observation frame with the columns in OBS_COLUMNS:

- time : datetime64, calendar day (midnight)
- value : float, NaN where missing
- missing : bool, True where the network reported no value for the day

Notes
-----
Row coordinates are 1-based CSV record numbers with the header as record 1, so the first data
row is row 2. Blank lines are not counted, except in tokenizer errors, which report the physical line
number. Column coordinates are 1-based field numbers.
"""

import inspect
import logging
import re
import warnings

import numpy as np
import pandas as pd

from merge_errors import FileOpenError, HeaderReadError, RowParseError

OBS_COLUMNS = ["time", "value", "missing"]


def read_raw_csv(fpath: str, min_columns: int, logger: logging.Logger) -> pd.DataFrame:
    """
    Reads a raw network CSV with a header row. All cells are kept as text and empty cells stay "".

    Parameters
    ----------
    fpath : str
        path to the raw CSV
    min_columns : int
        number of columns the header must have at least
    logger : logging.Logger
        Logger for error reporting.

    Returns
    -------
    pd.DataFrame
        text cells, one row per data record

    Raises
    ------
    FileOpenError
        If the file cannot be opened.
    HeaderReadError
        If the file has no header row or the header has too few columns.
    RowParseError
        If a record cannot be tokenized or has the wrong number of fields.
    """
    try:
        f = open(fpath, "rb")
    except OSError as e:
        logger.error(
            f"{inspect.currentframe().f_code.co_name}: Could not open file: {fpath}"
        )
        raise FileOpenError(fpath) from e

    # Header text is not used, so headers in other encodings (JMA: Shift_JIS) are decoded lossily
    with f, warnings.catch_warnings():
        # pandas only warns when the first record is longer than the header
        warnings.simplefilter("error", pd.errors.ParserWarning)
        try:
            raw = pd.read_csv(
                f,
                header=0,
                index_col=False,
                dtype=str,
                keep_default_na=False,
                encoding="utf-8",
                encoding_errors="replace",
            )
        except pd.errors.EmptyDataError as e:
            logger.error(
                f"{inspect.currentframe().f_code.co_name}: No header row in file: {fpath}"
            )
            raise HeaderReadError(fpath, "no header row") from e
        except pd.errors.ParserWarning as e:
            logger.error(
                f"{inspect.currentframe().f_code.co_name}: Long record in file: {fpath}"
            )
            raise RowParseError(
                fpath, "wrong number of fields, more than the header", row=record_number(0)
            ) from e
        except pd.errors.ParserError as e:
            logger.error(
                f"{inspect.currentframe().f_code.co_name}: Could not tokenize file: {fpath}"
            )
            raise RowParseError(
                fpath, f"malformed record: {e}", row=_tokenizer_line(e)
            ) from e

    if raw.shape[1] < min_columns:
        logger.error(
            f"{inspect.currentframe().f_code.co_name}: Header of {fpath} has {raw.shape[1]} columns, expected at least {min_columns}"
        )
        raise HeaderReadError(
            fpath, f"expected at least {min_columns} columns, found {raw.shape[1]}"
        )

    # Records shorter than the header are padded with NaN by pandas
    pos = first_failure(raw.isna().any(axis=1))
    if pos is not None:
        logger.error(
            f"{inspect.currentframe().f_code.co_name}: Short record in file: {fpath}"
        )
        raise RowParseError(
            fpath,
            f"wrong number of fields, expected {raw.shape[1]}",
            row=record_number(pos),
        )

    return raw


def record_number(pos: int) -> int:
    """Header is record 1, so data row 0 is record 2."""
    return int(pos) + 2


def _tokenizer_line(err: Exception) -> int | None:
    """Line number from a pandas tokenizer message ("Expected 2 fields in line 3, saw 3")."""
    match = re.search(r"line (\d+)", str(err))
    if match is None:
        return None
    return int(match.group(1))


def first_failure(mask) -> int | None:
    """Returns the position of the first True entry of a boolean mask, or None."""
    hits = np.flatnonzero(np.asarray(mask, dtype=bool))
    if hits.size == 0:
        return None
    return int(hits[0])


def parse_dates(cells: pd.Series, date_format: str) -> pd.Series:
    """Parses date cells with a fixed strftime format. Unparsable cells become NaT."""
    return pd.to_datetime(cells, format=date_format, errors="coerce")


def _parse_float(cell: str) -> float:
    # float() is correctly rounded, but also accepts padding and digit separators
    if cell != cell.strip() or "_" in cell:
        return np.nan
    try:
        return float(cell)
    except ValueError:
        return np.nan


def parse_values(cells: pd.Series) -> pd.Series:
    """Parses numeric cells as float. Empty, padded and unparsable cells become NaN."""
    return cells.map(_parse_float).astype("float64")


def station_observations(
    raw: pd.DataFrame,
    fpath: str,
    date_column: int,
    value_column: int,
    date_format: str,
    blank_is_missing: bool,
    logger: logging.Logger,
    strip_values: bool = False,
) -> pd.DataFrame:
    """
    Builds an observation frame from a station file with one row per day, the date and the value in fixed
    columns.

    Parameters
    ----------
    raw : pd.DataFrame
        text cells from read_raw_csv
    fpath : str
        path of the raw CSV, for error messages
    date_column : int
        0-based position of the date column
    value_column : int
        0-based position of the value column
    date_format : str
        strftime format of the date column
    blank_is_missing : bool
        If True an empty value cell is a missing observation, otherwise it is a parse error.
    logger : logging.Logger
        Logger for error reporting.
    strip_values : bool, optional
        Trim whitespace around the value before parsing. Default is False.

    Returns
    -------
    pd.DataFrame
        observation frame sorted by date

    Raises
    ------
    RowParseError
        For the first row whose date or value cannot be parsed. The date is checked first.
    """
    dates = parse_dates(raw.iloc[:, date_column], date_format)

    cells = raw.iloc[:, value_column]
    if strip_values:
        cells = cells.str.strip()
    blank = (cells == "").to_numpy()
    values = parse_values(cells)

    bad_dates = dates.isna().to_numpy()
    bad_values = values.isna().to_numpy()
    if blank_is_missing:
        bad_values = bad_values & ~blank

    pos = first_failure(bad_dates | bad_values)
    if pos is not None:
        if bad_dates[pos]:
            column, what = date_column, "date"
        else:
            column, what = value_column, "value"
        cell = raw.iat[pos, column]
        logger.error(
            f"{inspect.currentframe().f_code.co_name}: Could not parse {what} {cell!r} in {fpath}"
        )
        raise RowParseError(
            fpath,
            f"could not parse {what} {cell!r}",
            row=record_number(pos),
            column=column + 1,
        )

    if blank_is_missing:
        missing = blank
    else:
        missing = np.zeros(len(raw), dtype=bool)

    obs = pd.DataFrame(
        {"time": dates.to_numpy(), "value": values.to_numpy(), "missing": missing}
    )
    return sort_observations(obs)


def sort_observations(obs: pd.DataFrame) -> pd.DataFrame:
    """Stable sort by date, so duplicate dates keep their file order."""
    return obs[OBS_COLUMNS].sort_values("time", kind="stable", ignore_index=True)
