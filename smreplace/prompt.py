import sys
from typing import Optional, TextIO


def confirm(replace_text: str, stdin: Optional[TextIO] = None, out: Optional[TextIO] = None) -> bool:
    """Ask before replacing; only a literal "yes" (any case, padded or not) proceeds."""
    stdin = stdin if stdin is not None else sys.stdin
    out = out if out is not None else sys.stdout
    print(f"Replace with '{replace_text}'?  Type 'yes' to confirm", file=out)
    out.flush()
    answer = stdin.readline()
    return answer.strip().lower() == "yes"
