"""Centralized configuration for seqflow."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

OutputMode = Literal["ast", "tokens", "spans"]


@dataclass
class OutputConfig:
    """Configuration for CLI output."""

    mode: OutputMode = "ast"
    indent: int | None = 2
    verbose: bool = False
