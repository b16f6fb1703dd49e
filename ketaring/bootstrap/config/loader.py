import argparse
import os
from functools import lru_cache
from pathlib import Path

DEFAULT_CONFIGFILE = "ketaring.yaml"
CONFIG_ENV = "KETARINGCONFIG"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ketactl",
        description=(
            "Inspect a static Ketama cluster.\n\n"
            "ketactl builds the consistent-hashing ring described by a ketaring\n"
            "configuration file and reports which node owns a given key."
        ),
        formatter_class=argparse.RawTextHelpFormatter
    )

    parser.add_argument(
        "-c", "--config",
        type=str,
        help="Path to a ketaring configuration file"
    )

    parser.add_argument(
        "-l", "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help=(
            "Logging verbosity.\n"
            "Choose among: DEBUG, INFO, WARNING, ERROR, CRITICAL.\n\n"
            "DEBUG    → ring construction details.\n"
            "WARNING  → only warnings and errors (default).\n\n"
            "Example:\n"
            "  --log-level DEBUG"
        ),
    )

    parser.add_argument(
        "-o", "--output",
        type=str,
        default="yaml",
        choices=["yaml", "json"],
        help="Output format of command results."
    )

    sub = parser.add_subparsers(dest="command", required=True)

    locate = sub.add_parser("locate", help="Show the node owning each key.")
    locate.add_argument("keys", nargs="+", metavar="KEY")

    replicas = sub.add_parser(
        "replicas",
        help="Show the distinct nodes following a key on the ring."
    )
    replicas.add_argument("key", metavar="KEY")
    replicas.add_argument("-n", "--count", type=int, default=2)

    sub.add_parser("ring", help="Summarize the ring and its distribution.")

    return parser


@lru_cache
def get_cli_args() -> argparse.Namespace:
    return build_parser().parse_args()


def find_configfile(raw: str | None = None) -> Path:
    # Priority: CLI > ENV > default file in current working directory
    raw = raw or os.getenv(CONFIG_ENV)

    if raw is None:
        file = Path.cwd() / DEFAULT_CONFIGFILE
    else:
        file = Path(raw)

    if not file.is_file():
        raise SystemExit(
            f"[config] Configuration file not found: '{file}'.\n"
            "  - Use --config <file.yaml>\n"
            f"  - Or set the {CONFIG_ENV} environment variable\n"
            f"  - Or place a '{DEFAULT_CONFIGFILE}' file in the current working directory."
        )

    return file


@lru_cache
def get_configfile() -> Path:
    args = get_cli_args()
    return find_configfile(args.config)
