"""Fix clock issues from the command line.

Usage: python scripts/repair_clock_issues.py [--dry-run]

--dry-run only lists the anomalies that a repair would touch.
"""

from __future__ import annotations

import logging
import sys

from workorder_timekeeping.container import build_container
from workorder_timekeeping.main import load_settings


def main(argv: list[str] | None = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    settings = load_settings()
    logging.basicConfig(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(db_config=dict(settings.DB_CONFIG), settings=settings)

    if "--dry-run" in argv:
        anomalies = container.repair_service.detect()
        for a in anomalies:
            print(f"entry {a.entry.entry_id} (worker {a.entry.worker_id}): {a.kind.value}")
        print(f"OK: {len(anomalies)} anomalies found")
        return 0

    report = container.repair_service.repair_anomalies()
    print(
        "OK: fixed={} flagged_for_review={} abandoned={}".format(
            report.entries_fixed,
            report.entries_flagged_for_review,
            ",".join(str(i) for i in report.abandoned_entry_ids) or "-",
        )
    )
    return 1 if report.abandoned_entry_ids else 0


if __name__ == "__main__":
    raise SystemExit(main())
