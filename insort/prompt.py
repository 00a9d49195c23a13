from __future__ import annotations

import sys
from typing import Optional, TextIO

from .rules import CONFIRM_ANSWER, PROMPT_TEMPLATE


def confirm_create(
    filename: str,
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
) -> bool:
    """
    Ask whether a missing file should be created.

    Writes the prompt without a trailing newline, reads one line and
    returns True only for a "y" answer (surrounding whitespace ignored).
    EOF on stdin counts as "no".
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    stdout.write(PROMPT_TEMPLATE.format(filename=filename))
    stdout.flush()
    answer = stdin.readline()
    return answer.strip() == CONFIRM_ANSWER
