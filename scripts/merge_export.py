"""
merge_export.py

Writes the merged dataset to CSV.

Functions
---------
- format_merged: Converts a merged frame into text cells with the fixed per-field formatting.
- write_merged_csv: Writes a merged frame to CSV, replacing the destination in one step.

Intended Use
------------
Final step of the merge pipeline. Dates are written as YYYY-MM-DD. Values use the shortest decimal that
round-trips to the same float (no exponent), except fields listed as one-decimal, which follow the one-decimal
convention of their network.
"""

import inspect
import logging
import os
import tempfile
from pathlib import Path

import numpy as np
import pandas as pd

from merge_errors import WriteError


def _format_shortest(value: float) -> str:
    return np.format_float_positional(value, trim="-")


def _format_one_decimal(value: float) -> str:
    return f"{value:.1f}"


def format_merged(
    merged: pd.DataFrame, columns: list[str], one_decimal: list[str]
) -> pd.DataFrame:
    """
    Converts a merged frame into text cells.

    Parameters
    ----------
    merged : pd.DataFrame
        merged frame with column "t" and one float column per field
    columns : list[str]
        output column order, starting with "t"
    one_decimal : list[str]
        fields written with exactly one decimal place

    Returns
    -------
    pd.DataFrame
        text cells in output column order
    """
    text = pd.DataFrame(index=merged.index)
    for col in columns:
        if col == "t":
            text[col] = merged[col].dt.strftime("%Y-%m-%d")
        elif col in one_decimal:
            text[col] = merged[col].map(_format_one_decimal)
        else:
            text[col] = merged[col].map(_format_shortest)
    return text


def write_merged_csv(
    merged: pd.DataFrame,
    dst: str,
    columns: list[str],
    one_decimal: list[str],
    logger: logging.Logger,
) -> None:
    """
    Writes the merged frame to dst. The rows go to a temporary file in the destination directory, which then
    replaces dst, so dst never holds a partial file.

    Parameters
    ----------
    merged : pd.DataFrame
        merged frame with column "t" and one float column per field
    dst : str
        output path
    columns : list[str]
        output column order, starting with "t"
    one_decimal : list[str]
        fields written with exactly one decimal place
    logger : logging.Logger
        Logger for status and errors.

    Raises
    ------
    WriteError
        If the temporary file cannot be created or written, or cannot replace dst.
    """
    text = format_merged(merged, columns, one_decimal)
    dst = Path(dst)

    try:
        fd, tmp = tempfile.mkstemp(prefix=f".{dst.name}.tmp.", dir=dst.parent)
    except OSError as e:
        logger.error(
            f"{inspect.currentframe().f_code.co_name}: Could not create temporary file next to {dst}"
        )
        raise WriteError(dst) from e

    replaced = False
    try:
        with os.fdopen(fd, "w", newline="", encoding="utf-8") as f:
            text.to_csv(f, index=False, lineterminator="\n")
        os.chmod(tmp, 0o644)
        os.replace(tmp, dst)
        replaced = True
    except OSError as e:
        logger.error(
            f"{inspect.currentframe().f_code.co_name}: Failed to write merged data to {dst}"
        )
        raise WriteError(dst) from e
    finally:
        if not replaced:
            os.unlink(tmp)

    logger.info(f"Wrote {len(text)} merged days to {dst}")
