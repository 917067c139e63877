"""Language histogram summarisation."""

from __future__ import annotations

from typing import Mapping

from ..models import LanguageSummary


def summarize_languages(histogram: Mapping[str, object]) -> LanguageSummary:
    """Convert byte counts into percentages rounded to one decimal."""
    counts = {
        name: int(value)
        for name, value in histogram.items()
        if isinstance(value, (int, float)) and not isinstance(value, bool) and value > 0
    }
    total = sum(counts.values())
    if not total:
        return LanguageSummary()
    ordered = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return LanguageSummary(
        percentages=tuple((name, round(count * 100 / total, 1)) for name, count in ordered)
    )


__all__ = ["summarize_languages"]
