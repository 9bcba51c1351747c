"""Argument parsing functionality for remix-release."""

import argparse


def build_parser():
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="remix-release",
        description=(
            "Propagate a release version across the monorepo, then commit and tag it"
        ),
        add_help=True,
    )

    parser.add_argument("version",
                        metavar="VERSION",
                        help="Version to release, e.g. 1.2.3",
                        nargs="?",
                        type=str)
    parser.add_argument("--show-current",
                        dest="SHOW_CURRENT",
                        help="Print the current version of a package (default: remix) and exit",
                        nargs="?",
                        const="remix",
                        type=str)

    parser.add_argument("-r", "--root",
                        dest="ROOT_DIR",
                        help="Repository root (default: current directory)",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML, YML, or JSON)",
                        action="store",
                        type=str)
    parser.add_argument("--cdn-base",
                        dest="CDN_BASE",
                        help="Base URL of the package CDN used in import maps",
                        action="store",
                        type=str)
    parser.add_argument("--skip-clean-check",
                        dest="SKIP_CLEAN_CHECK",
                        help="Do not require a clean working directory before updating files.",
                        action="store_true")
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version is None and args.SHOW_CURRENT is None:
        parser.error("VERSION is required unless --show-current is given")
    return args
