"""
merge_errors.py

Exceptions raised while cleaning and merging the source networks. Any of these aborts the run.

Classes
-------
- MergeError: Base class, caught by the command-line entry point.
- FileOpenError: A source file is missing or unreadable.
- HeaderReadError: A source file has no header row, or too few columns.
- RowParseError: A date or value cell could not be parsed, or a record is malformed.
- WriteError: The merged output could not be written.

Notes
-----
Row and column coordinates are 1-based CSV record / field numbers, with the header counted as row 1.
"""


class MergeError(Exception):
    """Base class for errors that abort a merge run."""


class FileOpenError(MergeError):
    def __init__(self, fpath):
        self.fpath = str(fpath)
        super().__init__(f"{self.fpath}: could not open file")


class HeaderReadError(MergeError):
    def __init__(self, fpath, reason: str):
        self.fpath = str(fpath)
        self.reason = reason
        super().__init__(f"{self.fpath}: bad header: {reason}")


class RowParseError(MergeError):
    """Raised for the first unparsable cell or malformed record of a source file.

    Parameters
    ----------
    fpath : str
        path of the source file
    reason : str
        what could not be parsed
    row : int, optional
        1-based record number, header included
    column : int, optional
        1-based field number
    """

    def __init__(self, fpath, reason: str, row: int = None, column: int = None):
        self.fpath = str(fpath)
        self.reason = reason
        self.row = row
        self.column = column

        where = self.fpath
        if row is not None:
            where += f": row {row}"
            if column is not None:
                where += f", column {column}"
        super().__init__(f"{where}: {reason}")


class WriteError(MergeError):
    def __init__(self, fpath):
        self.fpath = str(fpath)
        super().__init__(f"{self.fpath}: could not write file")
