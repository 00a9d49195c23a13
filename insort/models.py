from __future__ import annotations

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class CreationPolicy(str, Enum):
    ALWAYS = "always"
    NEVER = "never"
    PROMPT = "prompt"

    @classmethod
    def from_flags(cls, create: bool = False, no_create: bool = False) -> "CreationPolicy":
        if create and no_create:
            raise ValueError("create and no_create are mutually exclusive")
        if create:
            return cls.ALWAYS
        if no_create:
            return cls.NEVER
        return cls.PROMPT


class ReconcileReport(BaseModel):
    filename: str
    changed: bool
    created: bool = False
    original_lines: int = Field(default=0, ge=0)
    final_lines: int = Field(default=0, ge=0)
    delta: int = 0
    skipped_additions: int = Field(default=0, ge=0)
    encoding: Optional[str] = Field(default=None, examples=["utf-8", None])
