import sys
from typing import Optional, TextIO

HELP_TEXT = """\
Usage: smreplace <search_text> <replacement_text> <database> [options]

Options:
  -c, --column <column>   Column to search and replace (default: FilePath)
  -t, --table <table>     Table holding the column (default: justinmetadata)
  -s, --search <text>     Search text, if you want to give it out of order
  -r, --replace <text>    Replacement text, if you want to give it out of order
  -y, --no-prompt         Replace without asking for confirmation
      --dry-run           Report how many rows match without writing
      --debug             Verbose logging
      --version           Print the version and exit
  -h, --help              Display this help message

Short flags can be combined; value flags take the following arguments in
order, e.g. -yct FilePath justinmetadata.
"""


def print_help(out: Optional[TextIO] = None) -> None:
    print(HELP_TEXT, file=out if out is not None else sys.stdout)
