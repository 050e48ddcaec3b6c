# follower_scout/extractor/models.py
"""
Data models for the follower extractor.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ExtractionSource(str, Enum):
    """Which strategy of the chain produced the count."""

    EMBEDDED_STATE = "embedded-state"
    META_DESCRIPTION = "meta-description"
    RAW_PATTERN = "raw-pattern"


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Best-effort follower count; both fields are None when nothing matched."""

    count: Optional[int] = None
    source: Optional[ExtractionSource] = None

    @property
    def found(self) -> bool:
        return self.count is not None

    def as_dict(self) -> dict[str, object]:
        return {"count": self.count, "source": self.source.value if self.source else None}
