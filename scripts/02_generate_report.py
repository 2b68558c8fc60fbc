"""
scripts/02_generate_report.py
Print statistics, recommended sets, jackpot odds and quick picks for a game,
or dump them as JSON.
"""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from lottostats.pipeline.report_builder import (
    build_odds_report,
    build_quick_picks,
    build_recommendation_report,
    build_statistics_report,
)
from lottostats.utils import draw_store
from lottostats.utils.config import get_all_game_slugs
from lottostats.utils.formatters import format_date, format_number, format_numbers, format_percentage


def print_statistics(report: dict) -> None:
    main = report["main"]
    latest = report["latest_draw"]
    print(f"\n{report['name']}: {report['total_draws']} draws")
    if latest:
        print(f"  Latest: {format_date(latest['date'])}  {format_numbers(latest['numbers'], latest.get('bonusNumber'))}")

    print("\n  Most frequent:")
    for f in main["most_frequent"]:
        print(f"    {format_number(f['number'])}  {f['count']:5d}  {format_percentage(f['percentage'])}")
    print("\n  Hot:  " + " ".join(format_number(h["number"]) for h in main["hot"]))
    print("  Cold: " + " ".join(format_number(h["number"]) for h in main["cold"]))
    print("\n  Most overdue:")
    for o in main["overdue"]:
        print(f"    {format_number(o['number'])}  {o['draws_since_last_drawn']:4d} draws  ratio={o['overdue_ratio']:.2f}")
    print("\n  Top pairs:")
    for p in main["pairs"]:
        a, b = p["pair"]
        print(f"    {format_number(a)}-{format_number(b)}  {p['count']:4d}  {format_percentage(p['percentage'])}")


def print_recommendations(report: dict) -> None:
    for key, strat in report["strategies"].items():
        print(f"\n  [{strat['name']}] {strat['description']}")
        for s in strat["sets"]:
            print(f"    {format_numbers(s['numbers'], s['bonus_number'])}  confidence={s['confidence_score']}")
            for reason in s["reasoning"]:
                print(f"      - {reason}")


def print_odds(report: dict) -> None:
    odds = report["odds"]
    print(f"\n  Jackpot odds: 1 in {odds['total_combinations']:,}")
    print(f"    {odds['main_combinations']:,} main combinations x {odds['bonus_options']} bonus options")
    print(f"    About {odds['lightning_multiple']:,}x more likely to be struck by lightning")
    print(f"    About {odds['years_at_one_ticket_per_draw']:,} years at one ticket per draw")


def print_quick_picks(report: dict) -> None:
    print("\n  Quick picks:")
    for pick in report["picks"]:
        print(f"    {format_numbers(pick['numbers'], pick['bonus_number'])}")


def main():
    parser = argparse.ArgumentParser(description="Lottery statistics report")
    parser.add_argument("--lottery", choices=get_all_game_slugs(), required=True)
    parser.add_argument("--sets", type=int, default=3, help="Recommended sets per strategy")
    parser.add_argument("--quick-picks", type=int, default=0, help="Random tickets to generate")
    parser.add_argument("--json", action="store_true", help="Print raw JSON instead of text")
    args = parser.parse_args()

    draws = draw_store.load_draws(args.lottery)
    stats = build_statistics_report(args.lottery, draws)
    recs = build_recommendation_report(args.lottery, draws, count=args.sets)
    odds = build_odds_report(args.lottery)
    picks = build_quick_picks(args.lottery, count=args.quick_picks)

    if args.json:
        print(json.dumps({
            "statistics": stats,
            "recommendations": recs,
            "odds": odds["odds"],
            "quick_picks": picks["picks"],
        }, indent=2))
        return

    print_statistics(stats)
    print_recommendations(recs)
    print_odds(odds)
    if picks["picks"]:
        print_quick_picks(picks)


if __name__ == "__main__":
    main()
