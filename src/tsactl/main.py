"""
tsactl - command line tool for the tinySA spectrum analyzer
"""

import sys

from .cli import create_cli_parser, run_command


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = create_cli_parser()

    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        parser.print_help()
        return 0

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    return run_command(args)


if __name__ == "__main__":
    sys.exit(main())
