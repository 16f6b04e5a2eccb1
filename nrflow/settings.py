"""Parse options and their environment overrides."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel

_TRUTHY = {"1", "true", "yes", "on"}


class ParseOptions(BaseModel):
    """Options controlling how a flow record array is turned into a FlowSet."""

    # Last record wins instead of raising DuplicateIdError.
    allow_duplicate_ids: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ParseOptions":
        """Build options from `NRFLOW_*` environment variables."""
        env = os.environ if environ is None else environ
        raw = str(env.get("NRFLOW_ALLOW_DUPLICATE_IDS") or "").strip().lower()
        return cls(allow_duplicate_ids=raw in _TRUTHY)


LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def default_log_level() -> str:
    """`NRFLOW_LOG_LEVEL` when it names a known level, otherwise `warning`."""
    level = str(os.getenv("NRFLOW_LOG_LEVEL") or "").strip().lower()
    return level if level in LOG_LEVELS else "warning"
