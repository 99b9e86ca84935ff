"""
This script runs tests that the fixed-column station files (CWB, JMA, GSOD) are cleaned as expected
"""

import pandas as pd
import pytest

from CWB_clean import clean_cwb
from JMA_clean import clean_jma
from GSOD_clean import clean_gsod
from merge_errors import FileOpenError, HeaderReadError, RowParseError
from merge_export import format_merged

CWB_HEADER = "ObsTime,StnPres,SeaPres,StnPresMax,StnPresMaxTime,StnPresMin,StnPresMinTime,Temperature"


## -----------------------------------------------------------------------------------------
## CWB: date in the first column, temperature in the eighth, no missing values
@pytest.fixture
def cwb_file(write_csv):
    return write_csv(
        "danshui.csv",
        f"""
        {CWB_HEADER}
        2020-01-02,1015.2,1016.0,1018.1,,1012.0,,16.4
        2020-01-01,1014.9,1015.7,1017.5,,1011.8,,15.5
        2020-01-01,1014.9,1015.7,1017.5,,1011.8,,99.0
        """,
    )


def test_cwb_values(cwb_file, logger):
    """Test that the temperature column is read for every day, sorted with duplicates kept in file order"""
    obs = clean_cwb(cwb_file, logger)
    assert list(obs.columns) == ["time", "value", "missing"]
    assert list(obs["time"]) == [
        pd.Timestamp("2020-01-01"),
        pd.Timestamp("2020-01-01"),
        pd.Timestamp("2020-01-02"),
    ]
    assert list(obs["value"]) == [15.5, 99.0, 16.4]
    assert not obs["missing"].any()


def test_cwb_bad_date(write_csv, logger):
    """Test that a malformed date is reported with its row and the date column"""
    fpath = write_csv(
        "danshui.csv",
        f"""
        {CWB_HEADER}
        2020-01-01,1,1,1,,1,,15.5
        2020/01/02,1,1,1,,1,,16.0
        """,
    )
    with pytest.raises(RowParseError) as err:
        clean_cwb(fpath, logger)
    assert (err.value.row, err.value.column) == (3, 1)


def test_cwb_empty_value_is_an_error(write_csv, logger):
    """Test that CWB rows must carry a temperature"""
    fpath = write_csv(
        "danshui.csv",
        f"""
        {CWB_HEADER}
        2020-01-01,1,1,1,,1,,
        """,
    )
    with pytest.raises(RowParseError) as err:
        clean_cwb(fpath, logger)
    assert (err.value.row, err.value.column) == (2, 8)


def test_cwb_header_too_narrow(write_csv, logger):
    """Test that a header without the temperature column raises HeaderReadError"""
    fpath = write_csv(
        "danshui.csv",
        """
        ObsTime,StnPres
        2020-01-01,1015.2
        """,
    )
    with pytest.raises(HeaderReadError):
        clean_cwb(fpath, logger)


def test_cwb_short_record(write_csv, logger):
    """Test that a record with fewer fields than the header is rejected with its row"""
    fpath = write_csv(
        "danshui.csv",
        f"""
        {CWB_HEADER}
        2020-01-01,1,1,1,,1,,15.5
        2020-01-02,1
        """,
    )
    with pytest.raises(RowParseError) as err:
        clean_cwb(fpath, logger)
    assert err.value.row == 3


def test_cwb_value_keeps_every_digit(write_csv, logger):
    """Test that a long temperature is read as the nearest double and written back unchanged"""
    fpath = write_csv(
        "danshui.csv",
        f"""
        {CWB_HEADER}
        2020-01-01,1,1,1,,1,,912.0685437784987
        """,
    )
    obs = clean_cwb(fpath, logger)
    assert obs["value"].iloc[0] == float("912.0685437784987")
    merged = pd.DataFrame({"t": obs["time"], "danshui": obs["value"]})
    text = format_merged(merged, ["t", "danshui"], [])
    assert text["danshui"].iloc[0] == "912.0685437784987"


def test_cwb_padded_value_is_an_error(write_csv, logger):
    """Test that CWB temperatures are not trimmed, so surrounding spaces make the cell unparsable"""
    fpath = write_csv(
        "danshui.csv",
        f"""
        {CWB_HEADER}
        2020-01-01,1,1,1,,1,," 15.5 "
        """,
    )
    with pytest.raises(RowParseError) as err:
        clean_cwb(fpath, logger)
    assert (err.value.row, err.value.column) == (2, 8)


## -----------------------------------------------------------------------------------------
## JMA: M/D/YYYY dates, empty temperature means missing
@pytest.fixture
def jma_file(write_csv):
    return write_csv(
        "katsuura.csv",
        """
        date,temperature
        1/2/2020,7.1
        1/1/2020,
        12/31/2019,6.5
        """,
    )


def test_jma_values(jma_file, logger):
    """Test that JMA dates are month first and empty cells are flagged missing"""
    obs = clean_jma(jma_file, logger)
    assert list(obs["time"]) == [
        pd.Timestamp("2019-12-31"),
        pd.Timestamp("2020-01-01"),
        pd.Timestamp("2020-01-02"),
    ]
    assert list(obs["missing"]) == [False, True, False]
    assert obs["value"].iloc[0] == 6.5
    assert pd.isna(obs["value"].iloc[1])


def test_jma_bad_value(write_csv, logger):
    """Test that a non-numeric temperature is a parse error, not a missing value"""
    fpath = write_csv(
        "nemuro.csv",
        """
        date,temperature
        1/1/2020,--
        """,
    )
    with pytest.raises(RowParseError) as err:
        clean_jma(fpath, logger)
    assert (err.value.row, err.value.column) == (2, 2)


def test_jma_long_first_record(write_csv, logger):
    """Test that a first record with more fields than the header is rejected instead of truncated"""
    fpath = write_csv(
        "katsuura.csv",
        """
        date,temperature
        1/1/2020,1.0,9
        1/2/2020,2.0
        """,
    )
    with pytest.raises(RowParseError) as err:
        clean_jma(fpath, logger)
    assert err.value.row == 2


def test_jma_long_later_record(write_csv, logger):
    """Test that a later record with more fields than the header is reported with its row"""
    fpath = write_csv(
        "katsuura.csv",
        """
        date,temperature
        1/1/2020,1.0
        1/2/2020,2.0,9
        """,
    )
    with pytest.raises(RowParseError) as err:
        clean_jma(fpath, logger)
    assert err.value.row == 3


def test_jma_shift_jis_header(tmp_path, logger):
    """Test that a Shift_JIS header, as in JMA downloads, does not stop the file from being read"""
    fpath = tmp_path / "katsuura.csv"
    fpath.write_bytes("年月日,平均気温\n".encode("shift_jis") + b"1/1/2020,1.0\n")
    obs = clean_jma(str(fpath), logger)
    assert list(obs["time"]) == [pd.Timestamp("2020-01-01")]
    assert list(obs["value"]) == [1.0]


def test_jma_missing_file(tmp_path, logger):
    """Test that a missing source file raises FileOpenError"""
    with pytest.raises(FileOpenError):
        clean_jma(str(tmp_path / "nemuro.csv"), logger)


## -----------------------------------------------------------------------------------------
## GSOD: padded degF temperature in the third column
@pytest.fixture
def gsod_file(write_csv):
    return write_csv(
        "yelizovo.csv",
        """
        STATION,DATE,TEMP
        32583099999,2020-01-01,"   32.0"
        32583099999,2020-01-02,"  212.0 "
        32583099999,2020-01-03,9999.9
        """,
    )


def test_gsod_converts_to_celsius(gsod_file, logger):
    """Test that padded degF values are trimmed and converted to degC"""
    obs = clean_gsod(gsod_file, logger)
    assert obs["value"].iloc[0] == 0.0
    assert obs["value"].iloc[1] == 100.0


def test_gsod_missing_code(gsod_file, logger):
    """Test that the GSOD missing value code is flagged missing instead of converted"""
    obs = clean_gsod(gsod_file, logger)
    assert list(obs["missing"]) == [False, False, True]
    assert pd.isna(obs["value"].iloc[2])


def test_gsod_bad_value(write_csv, logger):
    fpath = write_csv(
        "yelizovo.csv",
        """
        STATION,DATE,TEMP
        32583099999,2020-01-01,warm
        """,
    )
    with pytest.raises(RowParseError) as err:
        clean_gsod(fpath, logger)
    assert (err.value.row, err.value.column) == (2, 3)
