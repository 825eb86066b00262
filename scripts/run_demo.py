"""
Demo script: format the size columns of a few sample reports via the public API.

Usage:
    python scripts/run_demo.py               # print the converted reports
    python scripts/run_demo.py --save        # also save each preset as YAML

Each preset is a UnitfmtConfig; with --save it is written to
outputs/<name>.yaml so it can be reused with ``unitfmt --config``.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

DF_REPORT = """\
Filesystem     1B-blocks       Used   Available Use% Mounted on
/dev/sda1    52576092160 8589934592 41270575104  18% /
tmpfs         8246681600          0  8246681600   0% /dev/shm
"""

DU_REPORT = """\
1.5G\tcache
300M\tlogs
12K\tREADME
"""

PRESETS = {
    "df-si": (DF_REPORT, {"to": "si", "fields": "2-4", "header": 1}),
    "df-iec-padded": (DF_REPORT, {"to": "iec-i", "fields": "2-4", "header": 1, "formatting": {"padding": 8}}),
    "du-bytes": (DU_REPORT, {"from": "iec", "formatting": {"grouping": True}}),
}

OUTPUT_ROOT = Path("outputs")

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_demo")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import unitfmt

    save = "--save" in sys.argv

    for name, (report, options) in PRESETS.items():
        config = unitfmt.UnitfmtConfig.model_validate(options)

        log.info("=" * 70)
        log.info("Preset: %s", name)
        log.info("=" * 70)

        for line in unitfmt.format_lines(report.splitlines(), config):
            print(line)

        if save:
            config_path = OUTPUT_ROOT / f"{name}.yaml"
            unitfmt.save_config(config, config_path)
            log.info("  config_path : %s", config_path)

    log.info("All presets processed.")


if __name__ == "__main__":
    main()
