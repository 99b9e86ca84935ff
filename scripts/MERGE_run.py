"""
MERGE_run.py

Inputs:
-------
- Raw network CSVs at the fixed paths in paths.py.

Outputs:
--------
- Merged CSV of all networks, one row per common valid day (paths.MERGED_CSV).
- Log file in paths.LOGS_DIR.

Example usage:
--------------
python MERGE_run.py --verbose

"""

import argparse
import sys
import traceback

from MERGE_pipeline import run_merge_all
from merge_errors import MergeError


def main(argv: list[str] = None) -> int:
    """
    Creates the argument parser, parses the arguments, and runs the merge pipeline.

    Parameters
    ----------
    argv : list[str], optional
        command line arguments. Default is sys.argv[1:].

    Returns
    -------
    int
        exit status: 0 on success, 1 if the run was aborted

    """
    parser = argparse.ArgumentParser(
        prog="MERGE_run",
        description="""Cleans the Sea Ice Index, CWB, JMA and GSOD files, joins them on calendar date,
                        drops outliers, and writes a single merged CSV. Input and output paths are fixed in paths.py.""",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Also print log messages to the console (default: False).",
    )

    args = parser.parse_args(argv)

    try:
        run_merge_all(verbose=args.verbose)
    except MergeError as e:
        # Full chain, including the parser and I/O errors the merge error was raised from
        traceback.print_exception(e, file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
