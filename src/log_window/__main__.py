#!/usr/bin/env python3
"""log-window main entry point

Usage:
    python -m log_window replay --records 500 --steps end,retreat,retreat,start
    python -m log_window replay --records 200 --steps advance:80,head:10 --verbose
"""

from __future__ import annotations

import sys

from log_window.cli import cmd_replay, create_parser


def main() -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command == "replay":
        return cmd_replay(args)
    else:
        parser.print_help()
        return 0


if __name__ == "__main__":
    sys.exit(main())
