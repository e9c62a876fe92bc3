"""Stream directly to a file, or build once and write once."""

import tempfile
from pathlib import Path

from exactcat import HEX, fcat, write_to

with tempfile.TemporaryDirectory() as tmp:
    log = Path(tmp) / "events.log"
    with log.open("wb") as f:
        for i in range(3):
            # One sink write per piece, no intermediate string
            write_to(f, "event ", i, " id=0x", HEX(0xBEEF + i), "\n")
        # One allocation, one sink write
        fcat(f, "total ", 3, "\n")
    print(log.read_text(), end="")
