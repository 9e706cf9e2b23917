from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

import config

# Test runs log to the console only; no logs directory in the working tree.
config.LOGGING_SETTINGS["log_dir"] = ""
