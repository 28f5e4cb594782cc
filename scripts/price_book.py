#!/usr/bin/env python3
"""Batch script: value an options book leg by leg.

Usage
-----
    python scripts/price_book.py --input book.csv --output greeks.csv
    python scripts/price_book.py --input book.csv --output greeks.json -v

Input CSV format
----------------
    id,spot,strike,T,sigma,r,q,type,position,quantity,barrier_type,barrier_level,rebate
    1,100,100,1.0,0.20,0.05,0.0,Call,Long,1,None,0,0
    2,100,90,1.0,0.20,0.05,0.0,Put,Short,2,DownOut,80,0
    3,100,100,0.5,0.25,0.05,0.01,Call,Long,1,UpIn,120,0

``q``, ``position``, ``quantity``, ``barrier_type``, ``barrier_level`` and
``rebate`` are optional.

Output
------
    CSV or JSON with columns: id, spot, price, delta, ..., ultima.
    One ``TOTAL`` row per distinct spot aggregates the book.
"""

from __future__ import annotations
import argparse
import csv
import json
import logging
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from optgreeks import GREEK_FIELDS, Greeks, OptionParams, calculate

logger = logging.getLogger("price_book")


def _leg_from_row(row: dict) -> tuple[float, OptionParams]:
    """Parse one book row into (spot, leg)."""
    spot = float(row["spot"])
    leg = OptionParams(
        strike=float(row["strike"]),
        time_to_maturity=float(row["T"]),
        volatility=float(row["sigma"]),
        risk_free_rate=float(row["r"]),
        dividend_yield=float(row.get("q") or 0.0),
        option_type=row["type"],
        position=row.get("position") or "Long",
        quantity=float(row.get("quantity") or 1.0),
        barrier_type=row.get("barrier_type") or "None",
        barrier_level=float(row.get("barrier_level") or 0.0),
        rebate=float(row.get("rebate") or 0.0),
    )
    return spot, leg


def price_book(rows: list[dict]) -> list[dict]:
    """Return one result dict per valid row plus a TOTAL row per spot."""
    results = []
    totals: dict[float, Greeks] = {}

    for i, row in enumerate(rows):
        rid = row.get("id", str(i))
        try:
            spot, leg = _leg_from_row(row)
        except (KeyError, ValueError) as e:
            logger.error("Row %d (id=%s): skipped, %s", i, rid, e)
            continue
        g = calculate(spot, leg)
        totals[spot] = totals.get(spot, Greeks()) + g
        results.append({"id": rid, "spot": spot, **g.as_dict()})

    for spot, g in totals.items():
        results.append({"id": "TOTAL", "spot": spot, **g.as_dict()})
    return results


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Value an options book leg by leg."
    )
    parser.add_argument("--input", required=True, help="Path to book CSV")
    parser.add_argument("--output", required=True, help="Output path (.csv or .json)")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    with open(args.input, newline="") as f:
        rows = list(csv.DictReader(f))

    logger.info("Pricing %d legs...", len(rows))
    results = price_book(rows)

    output_path = Path(args.output)
    if output_path.suffix == ".json":
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2)
    else:
        fieldnames = ["id", "spot", *GREEK_FIELDS]
        with open(output_path, "w", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames)
            writer.writeheader()
            writer.writerows(results)

    priced = sum(1 for r in results if r["id"] != "TOTAL")
    logger.info("Results written to %s (%d priced, %d skipped)",
                args.output, priced, len(rows) - priced)


if __name__ == "__main__":
    main()
