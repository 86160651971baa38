"""Entry point: ``stcli [--config-file PATH]`` or ``python -m stcli``."""

import argparse

from stcli.cli import run
from stcli.helpers import ST_CONFIG


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stcli",
        description="Interactive command line client for the SpaceTraders API",
    )
    parser.add_argument(
        "-c",
        "--config-file",
        default=ST_CONFIG["STCLI_CONFIG_FILE"],
        help="Config file to load at startup (default: %(default)s)",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    run(args.config_file)


if __name__ == "__main__":
    main()
