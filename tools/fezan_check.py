from __future__ import annotations

"""
Fezan day check script.

Uses:
- fezancal.features.lunar_day_info.get_lunar_day_info
- fezancal.features.directions.get_direction_abbreviation
"""

import argparse

from fezancal.core.errors import LunarError
from fezancal.features.directions import get_direction_abbreviation
from fezancal.features.lunar_day_info import get_lunar_day_info

from tools.common import add_common_args, dump_json, fail, iter_dates, resolve_date_range, setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="Fezan lunar day check")
    add_common_args(parser)
    args = parser.parse_args()
    setup_logging(args.verbose)

    start, end = resolve_date_range(args)
    if start is None or end is None:
        parser.error("--date or --start/--end required")

    rows = []
    for cur in iter_dates(start, end):
        try:
            info = get_lunar_day_info(cur)
        except LunarError as e:
            fail(f"{cur.isoformat()}: {e}")
            return

        if args.json:
            rows.append(info.to_dict())
            continue

        flags = []
        if info.is_no_action_day:
            flags.append("ne-rien")
        if info.is_forbidden_day:
            flags.append("interdit")
        if info.new_moon_time:
            flags.append(f"NL {info.new_moon_time}")

        if args.verbose:
            print(
                f"{cur.isoformat()} {info.day_of_week:<9} L={info.lunar_day:02d} "
                f"{info.fezan.name:<7} {info.fezan.status:<11} "
                f"dir={get_direction_abbreviation(info.direction):<2} "
                f"phase={info.moon_phase.value} {' '.join(flags)}"
            )
        else:
            print(f"{cur.isoformat()}  L={info.lunar_day:02d} {info.fezan.name}")

    if args.json:
        dump_json({"rows": rows})


if __name__ == "__main__":
    main()
