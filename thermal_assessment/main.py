#!/usr/bin/env python3
"""
CLI for evaluating a thermal environment investigation.

Usage:
    thermal-assessment investigation.json
    python -m thermal_assessment.main investigation.json --group bg-1 --json
"""

import argparse
import json
import logging
from pathlib import Path

from .aggregation import compute_all_statistics
from .models import Statistics
from .presurvey import score_presurvey
from .schema import load_investigation


def _fmt(value, digits: int = 1, signed: bool = False) -> str:
    if value is None:
        return "-"
    if isinstance(value, int):
        return str(value)
    return f"{value:+.{digits}f}" if signed else f"{value:.{digits}f}"


def load_document(path: str) -> dict:
    """Load an investigation document from a JSON file."""
    with open(Path(path), 'r', encoding='utf-8') as f:
        return json.load(f)


def format_statistics(stats: Statistics, group_name: str) -> str:
    """Format one group's statistics for display."""
    lines = [f"--- {group_name} ({stats.group_id}) ---",
             f"  Valid measurements: {stats.n}"]
    if stats.n == 0:
        lines.append("  (no valid measurements, nothing computed)")
        return '\n'.join(lines)

    if stats.pmv is not None:
        lines.append(f"  PMV / PPD:    {_fmt(stats.pmv, 2, signed=True)} / {stats.ppd}%  "
                     f"[{stats.pmv_category.value}] {stats.pmv_category_label}")
    if stats.wbgt is not None:
        lines.append(f"  WBGT:         {_fmt(stats.wbgt)} °C (eff. {_fmt(stats.wbgt_eff)}, "
                     f"ref. {_fmt(stats.wbgt_ref)})  {stats.wbgt_verdict_label}")
    if stats.phs_verdict is not None:
        dlim = f"{stats.phs_dlim_min} min" if stats.phs_dlim_min is not None else "none"
        lines.append(f"  PHS:          SWreq {stats.phs_sw_req} g/h, SWmax {stats.phs_sw_max} g/h, "
                     f"Dlim {dlim}  {stats.phs_verdict_label}")
    if stats.ireq_verdict is not None:
        dlim = f"{stats.ireq_dlim_min} min" if stats.ireq_dlim_min is not None else "none"
        lines.append(f"  IREQ:         neutral {_fmt(stats.ireq_neutral, 2)} clo, "
                     f"min {_fmt(stats.ireq_min, 2)} clo, available {_fmt(stats.ireq_available, 2)} clo, "
                     f"Dlim {dlim}  {stats.ireq_verdict_label}")
    if stats.dr is not None:
        lines.append(f"  Draught:      DR {stats.dr}% [{stats.dr_category.value}]")
    if stats.vertical_temp_diff is not None:
        lines.append(f"  Vertical Δt:  {_fmt(stats.vertical_temp_diff)} K "
                     f"[{stats.vertical_temp_category.value}]")
    if stats.floor_temp_verdict is not None:
        lines.append(f"  Floor:        {_fmt(stats.floor_temperature)} °C, "
                     f"{stats.floor_temp_verdict.value} [{stats.floor_temp_category.value}]")
    if stats.local_worst_category is not None:
        lines.append(f"  Local worst:  [{stats.local_worst_category.value}]")
    if stats.phs_note:
        lines.append(f"  Note:         {stats.phs_note}")
    return '\n'.join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Thermal environment risk assessment CLI',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  thermal-assessment investigation.json
  thermal-assessment investigation.json --group bg-1
  thermal-assessment investigation.json --json > statistics.json
        '''
    )

    parser.add_argument('investigation', type=str,
                        help='Path to the investigation JSON file')
    parser.add_argument('-g', '--group', action='append', metavar='GROUP_ID',
                        help='Only report this exposure group (can be used multiple times)')
    parser.add_argument('--json', action='store_true',
                        help='Print the statistics records as JSON')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show debug logging')

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    try:
        document = load_document(args.investigation)
        groups, measurements, presurvey = load_investigation(document)
    except FileNotFoundError:
        print(f"Error: Investigation file '{args.investigation}' not found")
        return 1
    except json.JSONDecodeError as e:
        print(f"Error: Invalid JSON in investigation file: {e}")
        return 1
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    if args.group:
        unknown = set(args.group) - {g.id for g in groups}
        if unknown:
            print(f"Error: Unknown exposure group(s): {', '.join(sorted(unknown))}")
            return 1
        groups = [g for g in groups if g.id in args.group]

    statistics = compute_all_statistics(groups, measurements)

    if args.json:
        print(json.dumps([s.to_dict() for s in statistics], indent=2, ensure_ascii=False))
        return 0

    print(f"Loaded {len(groups)} exposure group(s) and {len(measurements)} measurement(s)")

    if presurvey is not None:
        result = score_presurvey(presurvey)
        print("\n--- Pre-survey ---")
        print(f"  Scores:         heat {result.heat_score:g}, cold {result.cold_score:g}, "
              f"comfort {result.comfort_score:g}")
        print(f"  Recommendation: {result.effective_recommendation.value}")

    for group, stats in zip(groups, statistics):
        print()
        print(format_statistics(stats, group.name or group.id))

    return 0


if __name__ == '__main__':
    exit(main())
