"""
Deterministic reconciliation rules.

This file exists to make the output format and user-facing wording explicit.
"""

LINE_TERMINATOR = "\n"
TARGET_ENCODING = "utf-8"  # UTF-8 without BOM

CONFIRM_ANSWER = "y"
PROMPT_TEMPLATE = "{filename} does not exist. create it? (y/n) >"

EMPTY_ADDITION_WARNING = "Warning: empty string passed as addition, skipping."
UNCHANGED_TEMPLATE = "{filename} left unchanged."
CHANGED_TEMPLATE = "{filename} sorted and de-duplicated; delta: {sign}{magnitude} {noun}"

NOT_ALLOWED_REASON = "file not found and creation is not allowed"
DECLINED_REASON = "file not found and user declined creation"
UNDECODABLE_REASON = "file is not decodable as text"
