import argparse
import csv
import json
import logging
import sys

from .core import GREEK_FIELDS, BarrierType, OptionParams
from .engine import calculate
from .scenarios import SURFACE_AXES, scenario_surface, spot_profile
from .strategies import STRUCTURES, build_structure

logger = logging.getLogger("optgreeks")


def _positive(s: str) -> float:
    x = float(s)
    if x <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {s}")
    return x


def add_market(parser: argparse.ArgumentParser):
    parser.add_argument("--T", type=float, required=True, help="years to expiry")
    parser.add_argument("--sigma", type=float, required=True, help="annualised vol")
    parser.add_argument("--r", type=float, required=True, help="cont. risk-free")
    parser.add_argument("--q", type=float, default=0.0, help="cont. dividend yield")


def add_leg(parser: argparse.ArgumentParser):
    parser.add_argument("--K", type=_positive, required=True, help="strike")
    parser.add_argument("--kind", default="call", help="call|put")
    parser.add_argument("--position", default="long", help="long|short")
    parser.add_argument("--quantity", type=float, default=1.0)
    parser.add_argument("--barrier-type", dest="barrier_type", default="None",
                        choices=[b.value for b in BarrierType])
    parser.add_argument("--barrier", type=float, default=0.0, help="barrier level")
    parser.add_argument("--rebate", type=float, default=0.0)


def _leg(args) -> OptionParams:
    return OptionParams(
        strike=args.K,
        time_to_maturity=args.T,
        volatility=args.sigma,
        risk_free_rate=args.r,
        dividend_yield=args.q,
        option_type=args.kind,
        position=args.position,
        quantity=args.quantity,
        barrier_type=args.barrier_type,
        barrier_level=args.barrier,
        rebate=args.rebate,
    )


def _legs(args) -> list:
    if getattr(args, "structure", None):
        return build_structure(
            args.structure, args.K,
            time_to_maturity=args.T, volatility=args.sigma,
            risk_free_rate=args.r, dividend_yield=args.q,
            width=args.width, quantity=args.quantity,
        )
    return [_leg(args)]


def _write_csv(header, rows, out=None):
    writer = csv.writer(out or sys.stdout)
    writer.writerow(header)
    writer.writerows(rows)


def cmd_greeks(args):
    g = calculate(args.spot, _leg(args))
    if args.json:
        print(json.dumps(g.as_dict(), indent=2))
        return
    for name, value in g.as_dict().items():
        print(f"{name:>10s}  {value: .10f}")


def cmd_profile(args):
    prof = spot_profile(_legs(args), args.spot_min, args.spot_max, args.steps)
    header = ["spot", *GREEK_FIELDS]
    rows = zip(prof["spot_values"], *(prof[name] for name in GREEK_FIELDS))
    _write_csv(header, rows)


def cmd_surface(args):
    surf = scenario_surface(
        _legs(args), args.spot_min, args.spot_max, args.variable,
        metric=args.metric, steps=args.steps,
    )
    header = [args.variable, *(f"{s:.6g}" for s in surf["spot_values"])]
    rows = ([a, *row] for a, row in zip(surf["axis_values"], surf["values"]))
    _write_csv(header, rows)


def main(argv=None):
    p = argparse.ArgumentParser(prog="optgreeks",
                                description="Black-Scholes Greeks for vanilla and barrier options")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Single leg at one spot
    p_g = sub.add_parser("greeks", help="price and Greeks at one spot")
    p_g.add_argument("--spot", type=_positive, required=True)
    add_leg(p_g)
    add_market(p_g)
    p_g.add_argument("--json", action="store_true", help="emit JSON")
    p_g.set_defaults(func=cmd_greeks)

    # Spot sweep / scenario grid share the range + structure options
    for name, func, help_ in (("profile", cmd_profile, "Greeks across a spot range (CSV)"),
                              ("surface", cmd_surface, "one metric over spot x input (CSV)")):
        sp = sub.add_parser(name, help=help_)
        sp.add_argument("--spot-min", dest="spot_min", type=_positive, required=True)
        sp.add_argument("--spot-max", dest="spot_max", type=_positive, required=True)
        add_leg(sp)
        add_market(sp)
        sp.add_argument("--structure", choices=sorted(STRUCTURES), default=None,
                        help="preset legs centred on --K (overrides the single leg)")
        sp.add_argument("--width", type=float, default=10.0, help="strike spacing for --structure")
        sp.set_defaults(func=func)
        if name == "profile":
            sp.add_argument("--steps", type=int, default=100)
        else:
            sp.add_argument("--steps", type=int, default=40)
            sp.add_argument("--variable", choices=sorted(SURFACE_AXES), default="volatility")
            sp.add_argument("--metric", choices=GREEK_FIELDS, default="price")

    args = p.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.debug("command %s", args.cmd)
    args.func(args)


if __name__ == "__main__":
    main()
