"""Runtime settings read from the environment.

- BLASTER_SEED: integer seed for the process-wide random source
  (default: time-derived)
- BLASTER_PAYLOADS_DIR: directory holding payload definitions
  (default: blaster/payloads/definitions)
- BLASTER_LOG_LEVEL: logging level name for the API entrypoint
- BLASTER_MAX_STRING_LENGTH: longest string a template may ask for
  (default: 65536)
"""

import os
from pathlib import Path
from typing import Optional

_seed = os.environ.get("BLASTER_SEED", "").strip()

RANDOM_SEED: Optional[int] = int(_seed) if _seed else None

PAYLOADS_DIR = Path(
    os.environ.get(
        "BLASTER_PAYLOADS_DIR",
        str(Path(__file__).parent / "payloads" / "definitions"),
    )
)

LOG_LEVEL = os.environ.get("BLASTER_LOG_LEVEL", "INFO").upper()

MAX_STRING_LENGTH = int(os.environ.get("BLASTER_MAX_STRING_LENGTH", "65536"))
