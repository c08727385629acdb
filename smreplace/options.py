"""Command-line parsing for smreplace.

The grammar is small enough that it is parsed by hand rather than with
argparse: short flags may be clustered (``-yc FilePath``) and each
value-taking flag in a cluster consumes the next argument in turn
(``-ct COLUMN TABLE``), and the database path is only accepted once it names
a file that exists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from .core import DEFAULT_COLUMN, DEFAULT_TABLE

log = logging.getLogger("SMReplace.options")


class ExitRequested(Exception):
    """Parsing stopped early because the user asked for information."""


class HelpRequested(ExitRequested):
    pass


class VersionRequested(ExitRequested):
    pass


class OptionError(Exception):
    """The command line could not be turned into a Config."""


class MissingArgument(OptionError):
    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"{kind.capitalize()} argument missing")


class UnknownOption(OptionError):
    def __init__(self, option: str):
        self.option = option
        super().__init__(f"Unknown option: {option}")


class MissingDatabase(OptionError):
    def __init__(self):
        super().__init__("No database specified (the database path must name an existing file)")


class MultipleDatabases(OptionError):
    def __init__(self, first: str, second: str):
        self.first = first
        self.second = second
        super().__init__(f"Multiple primary databases specified: {first!r} and {second!r}")


@dataclass(frozen=True)
class Config:
    db_path: str
    search_text: str
    replace_text: str
    table: str = DEFAULT_TABLE
    column: str = DEFAULT_COLUMN
    prompt: bool = True
    dry_run: bool = False
    debug: bool = False


# flag -> (Config field, human readable kind used in MissingArgument)
VALUE_FLAGS: Dict[str, tuple] = {
    "--column": ("column", "column"),
    "--table": ("table", "table"),
    "--search": ("search_text", "search text"),
    "--replace": ("replace_text", "replacement text"),
}
SHORT_VALUE_FLAGS = {"c": "--column", "t": "--table", "s": "--search", "r": "--replace"}
SHORT_SWITCHES = {"y": "--no-prompt", "h": "--help"}

POSITIONAL_ORDER = ("search_text", "replace_text")


def _path_exists(token: str) -> bool:
    try:
        return Path(token).expanduser().exists()
    except (OSError, ValueError):
        return False


def parse_args(args: Sequence[str], settings: Optional[dict] = None) -> Config:
    """Turn the arguments after the program name into a Config.

    Raises HelpRequested/VersionRequested when the user asked for them and an
    OptionError subclass when the arguments are unusable.
    """
    settings = settings or {}
    values: Dict[str, Optional[str]] = {
        "db_path": None,
        "table": None,
        "column": None,
        "search_text": None,
        "replace_text": None,
    }
    prompt = True
    dry_run = False
    debug = bool(settings.get("debug", False))

    tokens: List[str] = list(args)
    i = 0

    def take_value(flag: str) -> None:
        nonlocal i
        field, kind = VALUE_FLAGS[flag]
        if i + 1 >= len(tokens):
            raise MissingArgument(kind)
        i += 1
        values[field] = tokens[i]

    def switch(flag: str) -> None:
        nonlocal prompt, dry_run, debug
        if flag == "--no-prompt":
            prompt = False
        elif flag == "--dry-run":
            dry_run = True
        elif flag == "--debug":
            debug = True
        elif flag == "--help":
            raise HelpRequested()
        elif flag == "--version":
            raise VersionRequested()
        else:
            raise UnknownOption(flag)

    while i < len(tokens):
        token = tokens[i]
        if token in VALUE_FLAGS:
            take_value(token)
        elif token.startswith("--"):
            switch(token)
        elif token.startswith("-") and len(token) > 1:
            # Cluster of short flags; the cluster token itself stays at index i
            # while value flags advance past the arguments they consume.
            for c in token[1:]:
                if c in SHORT_VALUE_FLAGS:
                    take_value(SHORT_VALUE_FLAGS[c])
                elif c in SHORT_SWITCHES:
                    switch(SHORT_SWITCHES[c])
                else:
                    raise UnknownOption(f"-{c}")
        else:
            _assign_positional(values, token)
        i += 1

    if values["db_path"] is None:
        raise MissingDatabase()
    if not values["search_text"]:
        raise MissingArgument("search text")

    config = Config(
        db_path=values["db_path"],
        search_text=values["search_text"],
        replace_text=values["replace_text"],
        table=values["table"] or settings.get("table") or DEFAULT_TABLE,
        column=values["column"] or settings.get("column") or DEFAULT_COLUMN,
        prompt=prompt,
        dry_run=dry_run,
        debug=debug,
    )
    log.debug("Parsed configuration: %s", config)
    return config


def _assign_positional(values: Dict[str, Optional[str]], token: str) -> None:
    for field in POSITIONAL_ORDER:
        if values[field] is None:
            values[field] = token
            return
    if values["db_path"] is not None:
        raise MultipleDatabases(values["db_path"], token)
    if not _path_exists(token):
        log.debug("Skipping %r: not an existing path", token)
        return
    values["db_path"] = token
