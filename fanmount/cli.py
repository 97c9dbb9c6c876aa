import argparse
import logging
import sys
from dataclasses import replace

from dotenv import load_dotenv

from .config import GeometryConfig, set_config
from .library.catalog import (
    distance_to_turns,
    get_catalog,
    get_spec,
    hex_flats_to_diameter,
    nominal_circular_diameter,
)
from .library.generator import GENERATORS, generate_fastener

load_dotenv()


def cmd_list(args):
    catalog = get_catalog()
    specs = catalog.by_category(args.category) if args.category else catalog.all_specs()
    for spec in specs:
        print(f"{spec.name}\t{spec.category}\t{spec.attributes.get('thread_spec', '')}")


def cmd_show(args):
    spec = get_spec(args.name)
    print(f"{spec.name} ({spec.category})")
    for key, value in spec.attributes.items():
        print(f"  {key}: {value}")


def cmd_derive(args):
    spec = get_spec(args.name)
    print(f"nominal_circular_diameter: {nominal_circular_diameter(spec):.4f}")
    if "nut_across_flats" in spec:
        print(f"nut_circular_diameter: {hex_flats_to_diameter(spec['nut_across_flats']):.4f}")
    if args.distance is not None:
        print(f"turns({args.distance}): {distance_to_turns(spec, args.distance):.4f}")


def cmd_model(args):
    params = {}
    if args.kind == "hex_bolt":
        if args.length is None:
            raise ValueError("--length is required for hex_bolt")
        params = {"length": args.length, "shank": args.shank}
    elif args.thickness is not None:
        params = {"thickness": args.thickness}

    model = generate_fastener(args.kind, args.name, **params)
    lower, upper = model.mesh.bounds
    print(f"{args.kind} {model.spec.name}")
    print(f"  components: {', '.join(model.components)}")
    print(f"  bounds: {tuple(round(float(v), 4) for v in lower)} - {tuple(round(float(v), 4) for v in upper)}")
    if model.turns:
        print(f"  turns: {model.turns:.4f}")
    if model.mesh.is_volume:
        print(f"  volume: {model.mesh.volume:.4f}")


def build_parser():
    parser = argparse.ArgumentParser(prog="fanmount")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--fn", type=int, help="Explicit fragment count for curves")
    sub = parser.add_subparsers(dest="command", required=True)

    list_p = sub.add_parser("list", help="List fastener sizes in the catalog")
    list_p.add_argument("--category", help="Only list one category (metric, unified)")
    list_p.set_defaults(func=cmd_list)

    show_p = sub.add_parser("show", help="Show catalog attributes for one size")
    show_p.add_argument("name")
    show_p.set_defaults(func=cmd_show)

    derive_p = sub.add_parser("derive", help="Show derived dimensions for one size")
    derive_p.add_argument("name")
    derive_p.add_argument("--distance", type=float, help="Convert a thread length to turns")
    derive_p.set_defaults(func=cmd_derive)

    model_p = sub.add_parser("model", help="Generate a fastener model and describe it")
    model_p.add_argument("kind", choices=sorted(GENERATORS))
    model_p.add_argument("name")
    model_p.add_argument("--length", type=float, help="Bolt length under the head")
    model_p.add_argument("--shank", type=float, default=0.0, help="Unthreaded shank length")
    model_p.add_argument("--thickness", type=float, help="Nut/washer thickness")
    model_p.set_defaults(func=cmd_model)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.fn is not None:
            set_config(replace(GeometryConfig.from_env(), fn=args.fn))
        args.func(args)
    except (KeyError, ValueError) as exc:
        print(str(exc).strip("'\""), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
