"""Minecrawl CLI entry point.

Provides subcommands for running the room API server and for generating a
single room to the terminal. Accepts configuration via flags and environment
variables, with optional .env loading.

Run `python run.py --help` for details.
"""

import argparse
import json
import os
import signal
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

_color_init()
# Disable colors if output is not a real terminal (e.g., during pytest capture)
_COLOR_ENABLED = sys.stdout.isatty()


def _load_version() -> str:
    try:
        with open("VERSION", "r", encoding="utf-8") as f:
            return f.read().strip()
    except OSError:
        return "0.1.0"


__version__ = _load_version()


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    Minecrawl room server

    Run the room API server or print a generated room. Configuration can be
    provided via CLI flags or environment variables. If both are present, CLI
    flags take precedence.
    """

    epilog = dedent(
        """
        Environment variables:
          HOST                 Bind address for the web server (default: 0.0.0.0)
          PORT                 Port for the web server (default: 5000)
          MINECRAWL_LOG_LEVEL  debug | info | warn | error (default: info)
          MINECRAWL_LOG_JSON   Emit structured log lines as JSON when set to 1
          ROOM_*               Generation tunables (see minecrawl/room/config.py)

        Examples:
          # Run the server on the default host and port
          python run.py server

          # Print a seeded 20x20 room with everything revealed
          python run.py generate --width 20 --height 20 --bombs 25 --seed 7 --reveal

          # Dump the room snapshot as JSON
          python run.py generate --seed 7 --json
        """
    )

    parser = argparse.ArgumentParser(
        prog="minecrawl",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"Minecrawl {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    server_parser = subparsers.add_parser(
        "server",
        help="Run the room API web server",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    server_parser.add_argument("--host", default=None, help="Host interface to bind (default: env HOST or 0.0.0.0)")
    server_parser.add_argument("--port", type=int, default=None, help="Port to listen on (default: env PORT or 5000)")
    server_parser.add_argument("--debug", action="store_true", help="Enable Flask debug mode")
    server_parser.set_defaults(command="server")

    gen_parser = subparsers.add_parser(
        "generate",
        help="Generate one room and print it",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    gen_parser.add_argument("--width", type=int, default=15)
    gen_parser.add_argument("--height", type=int, default=15)
    gen_parser.add_argument("--side", default="LEFT", type=str.upper, choices=["TOP", "RIGHT", "BOTTOM", "LEFT"],
                            help="Entrance side")
    gen_parser.add_argument("--bombs", type=int, default=0)
    gen_parser.add_argument("--enemies", type=int, default=0)
    gen_parser.add_argument("--coins", type=int, default=0)
    gen_parser.add_argument("--seed", type=int, default=None)
    gen_parser.add_argument("--reveal", action="store_true", help="Show hidden cells and entities")
    gen_parser.add_argument("--json", action="store_true", help="Print the JSON snapshot instead of ASCII")
    gen_parser.set_defaults(command="generate")

    # If no subcommand provided, default to server
    if len(argv) == 0:
        argv = ["server"]

    return parser.parse_args(argv)


def run_generate(args: argparse.Namespace) -> int:
    from minecrawl.room import Room

    try:
        room = Room(
            args.width,
            args.height,
            30,
            args.side,
            args.bombs,
            args.enemies,
            args.coins,
            seed=args.seed,
        )
    except ValueError as exc:
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 2
    if args.json:
        payload = room.to_dict(reveal_all=args.reveal)
        payload["metrics"] = room.metrics
        print(json.dumps(payload))
    else:
        print(room.render_ascii(reveal_all=args.reveal))
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()

    mode = (getattr(args, "command", None) or "server").lower()
    if mode == "generate":
        return run_generate(args)

    host = getattr(args, "host", None) or os.getenv("HOST", "0.0.0.0")
    port = int(getattr(args, "port", None) or os.getenv("PORT", "5000"))

    def handle_sigint(sig, frame):
        print("\n[INFO] Shutting down server...")
        sys.exit(0)

    signal.signal(signal.SIGINT, handle_sigint)

    # Import server entrypoints only after environment is ready
    from minecrawl.logging_utils import log
    from minecrawl.server import start_server

    title = f"{Fore.CYAN}{Style.BRIGHT}Minecrawl Server Bootup{Style.RESET_ALL}" if _COLOR_ENABLED else "Minecrawl Server Bootup"

    def label(text: str) -> str:
        return f"{Fore.YELLOW}{text}{Style.RESET_ALL}" if _COLOR_ENABLED else text

    def value(val: str | int) -> str:
        return f"{Fore.GREEN}{val}{Style.RESET_ALL}" if _COLOR_ENABLED else str(val)

    divider = (Fore.MAGENTA + "=" * 40 + Style.RESET_ALL) if _COLOR_ENABLED else "=" * 40
    lines = [
        divider,
        f"  {title}",
        divider,
        f"  {label('Mode:'):12} {value(mode.upper())}",
        f"  {label('Host:'):12} {value(host)}",
        f"  {label('Port:'):12} {value(port)}",
        f"  {label('Version:'):12} {value(__version__)}",
        divider,
        "",
    ]
    print("\n".join(lines))
    log.info(event="startup", mode=mode, host=host, port=port)

    start_server(host=host, port=port, debug=bool(getattr(args, "debug", False)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
