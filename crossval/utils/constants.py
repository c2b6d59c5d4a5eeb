# crossval/utils/constants.py

# --- Resampler Defaults ---
DEFAULT_SPLIT_RATIO = 0.8    # FixedSplit / RandomSplit train share
DEFAULT_KFOLD_K = 10         # KFold fold count

# --- Search Defaults ---
DEFAULT_SHA_RATE = 2         # Successive halving discard rate
DEFAULT_HYPERBAND_RATE = 3   # Hyperband discard rate (eta)
DEFAULT_SASHA_TEMP = 1.0     # SASHA initial temperature
DEFAULT_HC_NEIGHBORS = 1     # Hill-climbing neighbours per step

# --- Numerics ---
PROBABILITY_TOLERANCE = 1e-8   # Allowed deviation of a probability vector sum from 1
LOG_TOLERANCE = 1e-9           # Slack for floor/ceil of floating logarithms

# --- Allocation Schedules ---
GEOMETRIC = "geometric"
CONSTANT = "constant"
HYPERBAND = "hyperband"

ALLOCATION_MODES = [GEOMETRIC, CONSTANT, HYPERBAND]

# --- Execution ---
DEFAULT_N_JOBS = 1

# --- Logging ---
LOG_DIR = "logs"
LOG_FILE = "crossval.log"
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"
FILE_LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s] [%(funcName)s] %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
