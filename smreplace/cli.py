"""Find and replace text in one column of a SQLite media database.

Usage:
    smreplace "/run/media/old/Music/" "/run/media/new/Music/" library.db
    smreplace -y --table tracks --column path "D:\\Music" "E:\\Music" index.sqlite3
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence, TextIO

from .core import banner
from .database import DatabaseError, ReplaceDatabase
from .help import print_help
from .logging_utils import new_session_id, setup_logging
from .options import Config, HelpRequested, OptionError, VersionRequested, parse_args
from .prompt import confirm
from .settings_store import load_settings

log = logging.getLogger("SMReplace")

EXIT_OK = 0
EXIT_DATABASE_ERROR = 1
EXIT_USAGE = 2


def main(argv: Optional[Sequence[str]] = None, stdin: Optional[TextIO] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    print(banner())

    settings = load_settings()
    try:
        config = parse_args(args, settings)
    except HelpRequested:
        print_help()
        return EXIT_OK
    except VersionRequested:
        return EXIT_OK
    except OptionError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print_help()
        return EXIT_USAGE

    setup_logging({**settings, "debug": config.debug}, new_session_id())
    try:
        return run(config, stdin=stdin)
    except DatabaseError as exc:
        log.error("%s", exc)
        return EXIT_DATABASE_ERROR


def run(config: Config, stdin: Optional[TextIO] = None) -> int:
    with ReplaceDatabase(config.db_path) as db:
        count = db.count_matches(config.table, config.column, config.search_text)
        print(
            f"Found {count} records matching '{config.search_text}' in {config.column} "
            f"of SM database: {config.db_path}"
        )
        if count == 0:
            print("Nothing to replace.")
            return EXIT_OK
        if config.dry_run:
            print("Dry-run mode enabled; no changes written.")
            return EXIT_OK

        if config.prompt and not confirm(config.replace_text, stdin=stdin):
            print("Replace aborted.")
            log.info("User declined replacing %r in %s.%s", config.search_text, config.table, config.column)
            return EXIT_OK

        print(
            f"Replacing '{config.search_text}' with '{config.replace_text}' in {config.column} "
            f"of SM database: {config.db_path}"
        )
        updated = db.replace(config.table, config.column, config.search_text, config.replace_text)
        print(f"Updated {updated} row(s).")
    return EXIT_OK


def entry_point() -> None:
    sys.exit(main())
