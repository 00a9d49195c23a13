"""
Core reconciliation logic lives here.

Responsibilities:
- decoding the target file to text
- file creation policy when the target is missing
- merging additions into the loaded lines
- sort + de-duplication
- change detection and in-place rewrite
- status reporting
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
import tempfile
from pathlib import Path
from typing import Callable, Iterable, List, Optional, TextIO, Tuple

from charset_normalizer import from_bytes

from .errors import NotFoundError, UndecodableError
from .models import CreationPolicy, ReconcileReport
from .prompt import confirm_create
from .rules import (
    CHANGED_TEMPLATE,
    DECLINED_REASON,
    EMPTY_ADDITION_WARNING,
    LINE_TERMINATOR,
    NOT_ALLOWED_REASON,
    TARGET_ENCODING,
    UNCHANGED_TEMPLATE,
    UNDECODABLE_REASON,
)

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


def decode_text(raw: bytes) -> Tuple[str, Optional[str]]:
    """
    Decode file bytes to text.

    Rules:
    - Empty input decodes to "" with no encoding.
    - Strict UTF-8 first; a leading BOM is dropped.
    - Otherwise the best guess of charset-normalizer.
    - If neither decodes, the strict UTF-8 UnicodeDecodeError is raised.
    """
    if not raw:
        return "", None

    try:
        return raw.decode("utf-8-sig"), "utf-8"
    except UnicodeDecodeError as e:
        strict_error = e

    match = from_bytes(raw).best()
    if match is not None:
        try:
            return raw.decode(match.encoding), match.encoding
        except (UnicodeDecodeError, LookupError):
            logger.debug("detected encoding %s failed to decode", match.encoding)

    raise strict_error


def split_lines(text: str) -> List[str]:
    """Split on LF, drop a trailing CR from each line and discard empty lines."""
    lines = []
    for line in text.split(LINE_TERMINATOR):
        if line.endswith("\r"):
            line = line[:-1]
        if line:
            lines.append(line)
    return lines


def load_lines(
    path: str,
    policy: CreationPolicy,
    confirm: Optional[Confirm] = None,
) -> Tuple[List[str], bool, Optional[str]]:
    """
    Read the target into its original snapshot.

    Returns (lines, missing, encoding). A missing file yields an empty
    snapshot when the creation policy allows it, otherwise NotFoundError.
    Any other OSError propagates unchanged.
    """
    try:
        raw = Path(path).read_bytes()
    except FileNotFoundError:
        if policy is CreationPolicy.NEVER:
            raise NotFoundError(path, NOT_ALLOWED_REASON)
        if policy is CreationPolicy.PROMPT:
            confirm = confirm or confirm_create
            if not confirm(path):
                raise NotFoundError(path, DECLINED_REASON)
        logger.debug("%s does not exist, starting from an empty snapshot", path)
        return [], True, None

    try:
        text, encoding = decode_text(raw)
    except UnicodeDecodeError as e:
        raise UndecodableError(path, f"{UNDECODABLE_REASON}: {e}") from e
    lines = split_lines(text)
    logger.debug("loaded %d lines from %s (encoding=%s)", len(lines), path, encoding)
    return lines, False, encoding


def merge_additions(lines: List[str], additions: Iterable[str], err: TextIO) -> Tuple[List[str], int]:
    """
    Append additions to a copy of lines, in the order given.

    Empty additions are skipped with one warning each. An addition with
    embedded line terminators contributes each of its non-empty lines.
    Duplicates are left for normalize_lines().
    """
    merged = list(lines)
    skipped = 0
    for addition in additions:
        if addition == "":
            print(EMPTY_ADDITION_WARNING, file=err)
            skipped += 1
            continue
        merged.extend(split_lines(addition))
    return merged, skipped


def normalize_lines(lines: Iterable[str]) -> List[str]:
    # code point order; the set removes duplicates
    return sorted(set(lines))


def has_changed(original: List[str], normalized: List[str]) -> bool:
    if len(original) != len(normalized):
        return True
    return any(a != b for a, b in zip(original, normalized))


def render_lines(lines: List[str]) -> str:
    if not lines:
        return ""
    return LINE_TERMINATOR.join(lines) + LINE_TERMINATOR


def _current_umask() -> int:
    # os.umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask


def write_atomic(path: str, content: str) -> None:
    """
    Replace the file at path with content.

    The text goes to a temp file in the same directory which then replaces
    the target, so readers never observe a partial file. Symlinks are
    followed and the file they point to is replaced. Permission bits of an
    existing target are kept; a new file gets the umask default.
    """
    target = os.path.realpath(path)
    dir_ = os.path.dirname(target) or "."
    fd, tmp_path = tempfile.mkstemp(prefix=".insort_tmp_", dir=dir_)
    try:
        with os.fdopen(fd, "w", encoding=TARGET_ENCODING, newline="") as tmp:
            tmp.write(content)
        if os.path.exists(target):
            shutil.copymode(target, tmp_path)
        else:
            os.chmod(tmp_path, 0o666 & ~_current_umask())
        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except FileNotFoundError:
            pass
        raise


def _delta_parts(delta: int) -> Tuple[str, int, str]:
    magnitude = abs(delta)
    return ("-" if delta < 0 else "+"), magnitude, ("line" if magnitude == 1 else "lines")


def format_delta(delta: int) -> str:
    sign, magnitude, noun = _delta_parts(delta)
    return f"{sign}{magnitude} {noun}"


def format_status(report: ReconcileReport) -> str:
    if not report.changed:
        return UNCHANGED_TEMPLATE.format(filename=report.filename)

    sign, magnitude, noun = _delta_parts(report.delta)
    return CHANGED_TEMPLATE.format(
        filename=report.filename,
        sign=sign,
        magnitude=magnitude,
        noun=noun,
    )


def reconcile(
    path: str,
    additions: Iterable[str] = (),
    policy: CreationPolicy = CreationPolicy.PROMPT,
    confirm: Optional[Confirm] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None,
) -> ReconcileReport:
    """
    Sort and de-duplicate the lines of path in place, merging additions.

    The file is rewritten only if the normalized lines differ from what was
    on disk. The status line goes to out, skip warnings go to err.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr

    original, missing, encoding = load_lines(path, policy, confirm)
    merged, skipped = merge_additions(original, additions, err)
    normalized = normalize_lines(merged)
    changed = has_changed(original, normalized)

    report = ReconcileReport(
        filename=path,
        changed=changed,
        created=missing and changed,
        original_lines=len(original),
        final_lines=len(normalized),
        delta=len(normalized) - len(original),
        skipped_additions=skipped,
        encoding=encoding,
    )

    if changed:
        write_atomic(path, render_lines(normalized))
        logger.info("rewrote %s: %d -> %d lines", path, report.original_lines, report.final_lines)
    else:
        logger.debug("%s already normalized", path)

    print(format_status(report), file=out)
    return report
