"""
MERGE_pipeline.py

This script runs the full clean and merge pipeline for the Sea of Okhotsk dataset.
It cleans the raw file of every network, inner joins them on calendar date, drops
outliers, and exports a single merged CSV.

Input:
    - NSIDC Sea Ice Index daily extent table for the Sea of Okhotsk
    - CWB daily station file for Danshui (drives the merge)
    - JMA daily station files for Katsuura and Nemuro
    - GSOD daily station file for Yelizovo

Output:
    - Merged CSV with one row per day on which every network has a valid value
    - Logfile documenting processing steps

Example:
    Run from command line with MERGE_run.py, from the directory holding data/.

"""

from datetime import timedelta
import time
import inspect
import logging

import pandas as pd

from paths import SOURCE_PATHS, MERGED_CSV, LOGS_DIR
from merge_log_config import LOGGER_NAME, setup_logger, close_logger
from merge_errors import MergeError
from merge_utils import merge_sources
from merge_export import write_merged_csv
from NSIDC_clean import clean_nsidc
from CWB_clean import clean_cwb
from JMA_clean import clean_jma
from GSOD_clean import clean_gsod

# Networks in the order they are read
SOURCE_CLEANERS = {
    "okhotsk": clean_nsidc,
    "danshui": clean_cwb,
    "katsuura": clean_jma,
    "nemuro": clean_jma,
    "yelizovo": clean_gsod,
}

PRIMARY_SOURCE = "danshui"
OUTPUT_COLUMNS = ["t", "danshui", "okhotsk", "katsuura", "nemuro", "yelizovo"]
ONE_DECIMAL_COLUMNS = ["yelizovo"]
LOWER_BOUNDS = {"danshui": -90.0}  # CWB instrument failure codes


def read_sources(
    source_paths: dict[str, str], logger: logging.Logger
) -> dict[str, pd.DataFrame]:
    """
    Cleans the raw file of every network.

    Parameters
    ----------
    source_paths : dict[str, str]
        field name -> path of the raw CSV, for every network in SOURCE_CLEANERS
    logger : logging.Logger
        Logger for error reporting.

    Returns
    -------
    dict[str, pd.DataFrame]
        field name -> observation frame

    Raises
    ------
    MergeError
        The first error met while cleaning.
    """
    sources = {}
    for name, cleaner in SOURCE_CLEANERS.items():
        try:
            sources[name] = cleaner(source_paths[name], logger)
        except MergeError as e:
            logger.error(
                f"{inspect.currentframe().f_code.co_name}: Failed to clean {name}"
            )
            raise e
    return sources


def run_merge(
    source_paths: dict[str, str] = SOURCE_PATHS,
    output_path: str = MERGED_CSV,
    logger: logging.Logger = None,
) -> pd.DataFrame:
    """
    Cleans, merges and exports all networks.

    Parameters
    ----------
    source_paths : dict[str, str], optional
        field name -> path of the raw CSV. Default is paths.SOURCE_PATHS.
    output_path : str, optional
        path of the merged CSV. Default is paths.MERGED_CSV.
    logger : logging.Logger, optional
        Logger instance. Default is the shared logger, unconfigured.

    Returns
    -------
    pd.DataFrame
        the merged frame that was written

    Raises
    ------
    MergeError
        The first error met; nothing is written to output_path.
    """
    if logger is None:
        logger = logging.getLogger(LOGGER_NAME)

    sources = read_sources(source_paths, logger)

    primary = sources[PRIMARY_SOURCE]
    auxiliaries = {
        name: obs for name, obs in sources.items() if name != PRIMARY_SOURCE
    }
    merged = merge_sources(PRIMARY_SOURCE, primary, auxiliaries, LOWER_BOUNDS, logger)
    merged = merged[OUTPUT_COLUMNS]

    try:
        write_merged_csv(
            merged, output_path, OUTPUT_COLUMNS, ONE_DECIMAL_COLUMNS, logger
        )
    except MergeError as e:
        logger.error(
            f"{inspect.currentframe().f_code.co_name}: Failed to export merged data"
        )
        raise e

    return merged


def run_merge_all(verbose: bool = False, logs_dir: str = LOGS_DIR) -> pd.DataFrame:
    """
    Main entry point for running the merge pipeline with the fixed paths in paths.py.

    Parameters
    ----------
    verbose : bool, optional
        If True, log messages are also printed to the console. Default is False.
    logs_dir : str, optional
        Directory for the log file. Default is paths.LOGS_DIR.

    Returns
    -------
    pd.DataFrame
        the merged frame that was written

    Raises
    ------
    MergeError
        The first error met, after it has been logged.
    """

    # Log start time
    start_time = time.time()

    logger, log_filepath = setup_logger("okhotsk", logs_dir=logs_dir, verbose=verbose)

    try:
        merged = run_merge(SOURCE_PATHS, MERGED_CSV, logger)
        logger.info(f"Finished merge: {len(merged)} days written to {MERGED_CSV}")
        return merged

    except MergeError as e:
        logger.error(f"Error traceback: {type(e).__name__}: {e}")
        logger.info("Terminating merge script.")
        raise

    finally:
        elapsed_time_seconds = time.time() - start_time
        formatted_elapsed = str(timedelta(seconds=round(elapsed_time_seconds)))
        logger.info(f"Elapsed time: {formatted_elapsed}")
        logger.info(f"Log saved to {log_filepath}")

        close_logger(logger)
