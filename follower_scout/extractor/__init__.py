# File: follower_scout/extractor/__init__.py
"""follower_scout.extractor: best-effort follower count from a profile page.

``extract(html)`` runs the strategies in a fixed order and the first one that
yields a number wins::

    embedded-state  ->  meta-description  ->  raw-pattern

It is a pure function of the document text: no I/O and no shared state.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence, Tuple

from follower_scout.extractor.deep_search import find_follower_count
from follower_scout.extractor.models import ExtractionResult, ExtractionSource
from follower_scout.extractor.numbers import to_number
from follower_scout.extractor.strategies import (
    ProfilePage,
    from_embedded_state,
    from_meta_description,
    from_raw_patterns,
)
from follower_scout.logger import logger

Strategy = Callable[[ProfilePage], Optional[int]]

STRATEGIES: Sequence[Tuple[ExtractionSource, Strategy]] = (
    (ExtractionSource.EMBEDDED_STATE, from_embedded_state),
    (ExtractionSource.META_DESCRIPTION, from_meta_description),
    (ExtractionSource.RAW_PATTERN, from_raw_patterns),
)


def extract(html: str) -> ExtractionResult:
    """Return the follower count found in *html* and the strategy that found it."""
    if not html:
        return ExtractionResult()
    page = ProfilePage(html)
    for source, strategy in STRATEGIES:
        count = strategy(page)
        if count is not None:
            logger.debug("Follower count %d detected via %s", count, source.value)
            return ExtractionResult(count=count, source=source)
    logger.debug("No follower count in %d chars of HTML", len(html))
    return ExtractionResult()


__all__ = [
    "ExtractionResult",
    "ExtractionSource",
    "STRATEGIES",
    "extract",
    "find_follower_count",
    "to_number",
]
