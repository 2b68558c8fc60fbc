"""
scripts/01_update_data.py
Refresh stored draw history from the NY Open Data SODA API.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from lottostats.pipeline.data_updater import update_game_data
from lottostats.utils.config import get_all_game_slugs
from lottostats.utils.logger import get_logger

log = get_logger("update_data")


def main():
    parser = argparse.ArgumentParser(description="Update lottery draw history")
    parser.add_argument("--lottery", choices=get_all_game_slugs() + ["all"], default="all")
    parser.add_argument("--dry-run", action="store_true", help="Fetch and compare only, no writes")
    args = parser.parse_args()

    targets = get_all_game_slugs() if args.lottery == "all" else [args.lottery]

    results = []
    for slug in targets:
        try:
            results.append(update_game_data(slug, dry_run=args.dry_run))
        except Exception as exc:
            log.error(f"Update failed for {slug}: {exc}")
            results.append({"lottery": slug, "fetched": 0, "changed": False, "saved": False, "error": str(exc)})

    print("\n" + "=" * 60)
    print("DATA UPDATE SUMMARY")
    print("=" * 60)
    for r in results:
        print(
            f"  {r['lottery']:15s} | fetched={r['fetched']:5d} | changed={str(r['changed']):5s}"
            f" | saved={r['saved']}" + (f" | error={r['error']}" if "error" in r else "")
        )
    print("=" * 60)

    if any("error" in r for r in results):
        sys.exit(1)


if __name__ == "__main__":
    main()
