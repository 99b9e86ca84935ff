"""
This is a script where merge related common functions are stored: date-keyed lookups of cleaned observation
frames and the inner join of all networks onto the primary network's days.
"""

## Import Libraries
import inspect
import logging

import pandas as pd


## Lookup helper functions
# -----------------------------------------------------------------------------
def index_by_date(obs: pd.DataFrame, source: str, logger: logging.Logger) -> pd.DataFrame:
    """Indexes an observation frame by date for exact-date lookups.

    Parameters
    ----------
    obs : pd.DataFrame
        observation frame (time, value, missing)
    source : str
        name of the network, for logging
    logger : logging.Logger
        Logger instance for logging.

    Returns
    -------
    pd.DataFrame
        value and missing columns indexed by a unique DatetimeIndex

    Notes
    -----
    Only the last observation of a duplicated date is kept, so later rows in the file overwrite earlier ones.
    """
    dupes = obs["time"].duplicated(keep="last")
    if dupes.any():
        logger.warning(
            f"{inspect.currentframe().f_code.co_name}: {source} has {int(dupes.sum())} duplicate dates, keeping the last observation of each"
        )
    return obs.loc[~dupes].set_index("time")[["value", "missing"]]


# -----------------------------------------------------------------------------
def merge_sources(
    primary_name: str,
    primary: pd.DataFrame,
    auxiliaries: dict[str, pd.DataFrame],
    lower_bounds: dict[str, float],
    logger: logging.Logger,
) -> pd.DataFrame:
    """Inner joins the auxiliary networks onto the days of the primary network.

    Parameters
    ----------
    primary_name : str
        field name of the primary network
    primary : pd.DataFrame
        observation frame of the primary network, which drives the row order
    auxiliaries : dict[str, pd.DataFrame]
        field name -> observation frame, for every other required network
    lower_bounds : dict[str, float]
        field name -> lowest accepted value
    logger : logging.Logger
        Logger instance for logging.

    Returns
    -------
    pd.DataFrame
        merged frame with column "t" followed by one column per field, in primary order

    Notes
    -----
    Rules, applied in order:
    1. Duplicate days of the primary network: only the first row is kept. Missing primary rows are dropped.
    2. Each auxiliary network must have a non-missing observation on the exact same day.
    3. A value strictly below its lower bound drops the day.
    The input frames are not modified.
    """
    first = primary.loc[~primary["time"].duplicated(keep="first")]
    logger.info(
        f"{primary_name}: {len(primary)} rows, {len(primary) - len(first)} duplicate days dropped"
    )

    merged = pd.DataFrame(
        {"t": first["time"].to_numpy(), primary_name: first["value"].to_numpy()}
    )
    keep = ~first["missing"].to_numpy(dtype=bool)

    for name, obs in auxiliaries.items():
        lookup = index_by_date(obs, name, logger)
        hits = lookup.reindex(merged["t"])
        present = hits["missing"].eq(False).to_numpy()
        logger.info(
            f"{name}: {int((keep & ~present).sum())} days dropped without an observation"
        )
        keep &= present
        merged[name] = hits["value"].to_numpy(dtype="float64")

    merged = merged.loc[keep]

    # Ignore outliers
    for field, floor in lower_bounds.items():
        outliers = (merged[field] < floor).to_numpy()
        logger.info(f"{field}: {int(outliers.sum())} days dropped below {floor}")
        merged = merged.loc[~outliers]

    merged = merged.reset_index(drop=True)
    logger.info(f"Merged {len(merged)} days")
    return merged
