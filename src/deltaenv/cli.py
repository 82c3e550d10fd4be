"""Command-line interface for deltaenv."""

import argparse
import logging
import sys

from .common import BAT_PAGER, DELTA_PAGER, PAGER
from .env import FIELD_VARIABLES, DeltaEnv
from .errors import field_unset, print_error, unknown_field
from .format import ColorMode, Column, format_value, render_json, render_table
from .pager import resolve_pager_details


def _configure_logging(args: argparse.Namespace) -> None:
    """Send library debug logging to stderr when -v is given."""
    if getattr(args, "verbose", False):
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


def cmd_show(args: argparse.Namespace) -> int:
    """Handle the show command."""
    env = DeltaEnv.init()

    if args.json:
        print(render_json(env.to_dict()))
        return 0

    color_mode = ColorMode.NEVER if args.no_color else ColorMode.AUTO
    rows = []
    for name in DeltaEnv.field_names():
        value = getattr(env, name)
        if name == "pagers":
            rows.append({
                "field": "pagers.primary",
                "value": format_value(value.primary, color_mode),
            })
            rows.append({
                "field": "pagers.fallback",
                "value": format_value(value.fallback, color_mode),
            })
        else:
            rows.append({"field": name, "value": format_value(value, color_mode)})

    columns = [
        Column(name="field", header="FIELD"),
        Column(name="value", header="VALUE"),
    ]
    print(render_table(rows, columns, color_mode=color_mode))
    return 0


def cmd_get(args: argparse.Namespace) -> int:
    """Handle the get command.

    Prints one snapshot field. Exits 1 if the field is unknown or unset.
    """
    known = [n for n in DeltaEnv.field_names() if n != "pagers"]
    known += ["pagers.primary", "pagers.fallback"]

    if args.field not in known:
        print_error(unknown_field(args.field, known), json_mode=args.json)
        return 1

    env = DeltaEnv.init()
    if args.field.startswith("pagers."):
        value = getattr(env.pagers, args.field.split(".", 1)[1])
        variable = DELTA_PAGER if args.field == "pagers.primary" else None
    else:
        value = getattr(env, args.field)
        variable = FIELD_VARIABLES.get(args.field)

    if value is None:
        print_error(field_unset(args.field, variable), json_mode=args.json)
        return 1

    if args.json:
        print(render_json({"field": args.field, "value": str(value)}))
    else:
        print(value)
    return 0


def cmd_pager(args: argparse.Namespace) -> int:
    """Handle the pager command."""
    env, resolution = DeltaEnv.init_with_resolution()

    if args.json:
        print(render_json({
            "primary": env.pagers.primary,
            "fallback": env.pagers.fallback,
            "resolution": resolution.to_dict(),
        }))
    else:
        print(env.pagers.primary or env.pagers.fallback)
    return 0


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handle the resolve command.

    Runs the resolver on an explicit command without reading BAT_PAGER or
    PAGER, so a pager setting can be checked before exporting it.
    """
    if args.from_pager:
        override, general = None, args.command
    else:
        override, general = args.command, None

    program = args.program if args.program is not None else sys.argv[0]
    resolution = resolve_pager_details(override, general, program)

    if args.json:
        print(render_json(resolution.to_dict()))
    else:
        print(resolution.command)
        if resolution.substituted:
            print(
                f"Replaced {resolution.candidate!r} ({resolution.reason.value})",
                file=sys.stderr,
            )
    return 0


def main(argv: list[str] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="deltaenv",
        description="Inspect the environment snapshot and pager resolution",
    )
    parser.add_argument("--version", action="version", version="%(prog)s 0.1.0")

    subparsers = parser.add_subparsers(dest="command_name", help="Commands")

    # show command
    show_parser = subparsers.add_parser("show", help="Show the environment snapshot")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")
    show_parser.add_argument(
        "--no-color", action="store_true", help="Disable colored output"
    )
    show_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log resolution details"
    )
    show_parser.set_defaults(func=cmd_show)

    # get command
    get_parser = subparsers.add_parser("get", help="Print one snapshot field")
    get_parser.add_argument("field", help="Field name, e.g. features or pagers.fallback")
    get_parser.add_argument("--json", action="store_true", help="Output as JSON")
    get_parser.set_defaults(func=cmd_get)

    # pager command
    pager_parser = subparsers.add_parser(
        "pager",
        help=f"Print the pager to use ({DELTA_PAGER}, then {BAT_PAGER}, then {PAGER})",
    )
    pager_parser.add_argument("--json", action="store_true", help="Output as JSON")
    pager_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log resolution details"
    )
    pager_parser.set_defaults(func=cmd_pager)

    # resolve command
    resolve_parser = subparsers.add_parser(
        "resolve", help="Resolve an explicit pager command"
    )
    resolve_parser.add_argument("command", help="Pager command line to check")
    resolve_parser.add_argument(
        "--from-pager",
        action="store_true",
        help=f"Treat the command as coming from {PAGER} instead of {BAT_PAGER}",
    )
    resolve_parser.add_argument(
        "--program", help="Program path for self-recursion checks (default: argv[0])"
    )
    resolve_parser.add_argument("--json", action="store_true", help="Output as JSON")
    resolve_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log resolution details"
    )
    resolve_parser.set_defaults(func=cmd_resolve)

    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    _configure_logging(args)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
