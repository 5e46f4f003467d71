from __future__ import annotations

"""
New moon check script (Meeus ch. 49).

Prints the new moons of a year in UTC and in the calendar timezone.
"""

import argparse

from fezancal.core.config import load_config
from fezancal.core.errors import LunarError
from fezancal.core.newmoon import get_new_moons_for_year
from fezancal.core.timeutil import get_tzinfo
from fezancal.core.validation import validate_year

from tools.common import dump_json, fail, setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="New moon instants of a year")
    parser.add_argument("--year", type=int, required=True)
    parser.add_argument("--json", action="store_true")
    parser.add_argument("--verbose", action="store_true")
    args = parser.parse_args()
    setup_logging(args.verbose)

    tz_name = load_config().timezone
    tzinfo = get_tzinfo(tz_name)
    try:
        validate_year(args.year)
        moons = get_new_moons_for_year(args.year, tzinfo)
    except LunarError as e:
        fail(str(e))
        return

    if args.json:
        dump_json(
            {
                "year": args.year,
                "tz": tz_name,
                "new_moons": [
                    {"utc": m.isoformat(), "local": m.astimezone(tzinfo).isoformat()} for m in moons
                ],
            }
        )
        return

    for m in moons:
        print(f"{m.isoformat()}  ({tz_name} {m.astimezone(tzinfo).strftime('%Y-%m-%d %H:%M')})")
    print(f"count={len(moons)}")


if __name__ == "__main__":
    main()
