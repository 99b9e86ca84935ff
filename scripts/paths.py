"""paths.py

Centralized input, output and log path constants.
Enables programmer to change the directory easily in one place if needed.

"""

DATA_DIR = "data"

# Source files, one per network (no trailing slashes)
OKHOTSK_CSV = f"{DATA_DIR}/okhotsk.csv"  # NSIDC Sea Ice Index, Sea of Okhotsk extent
DANSHUI_CSV = f"{DATA_DIR}/danshui.csv"  # CWB, Danshui station
KATSUURA_CSV = f"{DATA_DIR}/katsuura.csv"  # JMA, Katsuura station
NEMURO_CSV = f"{DATA_DIR}/nemuro.csv"  # JMA, Nemuro station
YELIZOVO_CSV = f"{DATA_DIR}/yelizovo.csv"  # GSOD, Yelizovo station

SOURCE_PATHS = {
    "okhotsk": OKHOTSK_CSV,
    "danshui": DANSHUI_CSV,
    "katsuura": KATSUURA_CSV,
    "nemuro": NEMURO_CSV,
    "yelizovo": YELIZOVO_CSV,
}

# Merged output
MERGED_CSV = "data.csv"

LOGS_DIR = "merge_logs"
