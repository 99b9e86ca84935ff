"""
calc_clean.py

This is a script where cleaning related common unit conversions are stored for ease of use.

Functions
---------
_unit_degF_to_degC: Converts temperature from degF to degC

Intended Use
------------
Functions consist of unit conversions applied by the network cleaning scripts before merging.
"""


def _unit_degF_to_degC(data: float) -> float:
    """Converts temperature from degF to degC

    Parameters
    ----------
    data : float
        input data to convert, scalar or pd.Series

    Returns
    -------
    data : float
        data converted to degC
    """
    data = (data - 32) * 5 / 9
    return data
