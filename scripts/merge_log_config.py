"""
merge_log_config.py

Run log for the Okhotsk merge. One log file is written per invocation of the merge, named after the run and
the minute it started, e.g. merge_logs/merge_okhotsk.202001151230.log.

- setup_logger: opens the run log, and mirrors it to stderr when the run is verbose
- close_logger: flushes and detaches the run log once the merge has finished or failed

Every record carries its time and level:

    %(asctime)s - %(levelname)s - %(message)s

Parsers and the joiner log row counts, dropped days and duplicate dates at INFO/WARNING, and every error
at ERROR before it is raised.
"""

import logging
import os
from datetime import datetime

LOGGER_NAME = "sharedLogger"
LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logger(
    run_name: str, logs_dir: str = "merge_logs", verbose: bool = False
) -> tuple[logging.Logger, str]:
    """
    Opens the log for one merge run, creating logs_dir if needed.

    Parameters
    ----------
    run_name : str
        name of the merge run, used in the log filename
    logs_dir : str
        directory of the run logs
    verbose : bool
        If True, records are also printed to stderr.

    Returns
    -------
    logger : logging.Logger
        run logger
    log_filepath : str
        path of the run log
    """
    timestamp = datetime.now().strftime("%Y%m%d%H%M")
    log_filepath = os.path.join(logs_dir, f"merge_{run_name}.{timestamp}.log")
    os.makedirs(logs_dir, exist_ok=True)

    logger = _configure_logger(log_filepath, verbose=verbose)
    logger.info(f"Starting merge run: {run_name}")

    return logger, log_filepath


def close_logger(logger: logging.Logger) -> None:
    """Closes and removes every handler, so the next run opens a fresh log."""
    for handler in logger.handlers[:]:
        handler.close()
        logger.removeHandler(handler)


def _configure_logger(log_file: str, verbose: bool) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)

    # Still open from an earlier run in this process
    if logger.handlers:
        return logger

    logger.setLevel(logging.DEBUG)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(log_file, mode="w")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    if verbose:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.DEBUG)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
