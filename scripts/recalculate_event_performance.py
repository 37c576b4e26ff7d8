from __future__ import annotations

import argparse
import json
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Recompute stored calculated fields for every event performance of a venue."
    )
    parser.add_argument("--venue-id", required=True, help="Venue whose events are recalculated.")
    parser.add_argument(
        "--apply",
        action="store_true",
        help="Persist the recalculated fields. Without this flag, script runs in dry-run mode.",
    )
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))

    from src.api.dependencies import get_event_analytics_service
    from src.core.config import get_settings
    from src.core.logging import configure_logging

    configure_logging(get_settings().log_level)
    service = get_event_analytics_service()
    results = service.recalculate_venue(args.venue_id, apply=args.apply)

    summary = [
        {
            "performanceId": performance_id,
            "totalGrossRevenue": metrics.total_gross_revenue,
            "netEventIncome": metrics.net_event_income,
        }
        for performance_id, metrics in results
    ]
    print(json.dumps(summary, indent=2))
    if not args.apply:
        print(f"\nDry run only: {len(results)} performance(s) computed. Re-run with --apply to persist.")
    else:
        print(f"\nPersisted calculated fields for {len(results)} performance(s).")


if __name__ == "__main__":
    main()
