"""
Route summary aggregation.

Folds per-segment analyses into round-trip totals and the better-direction
decision.
"""

import logging
from dataclasses import replace
from functools import reduce
from typing import Iterable

from core.models.analysis import SegmentAnalysis, RouteSummary
from core.wind.models import WindImpact

logger = logging.getLogger(__name__)

# Exhaustive over WindImpact: (counts as headwind distance, counts as favorable segment)
IMPACT_CONTRIBUTIONS = {
    WindImpact.UNFAVORABLE: (True, False),
    WindImpact.CROSSWIND: (False, False),
    WindImpact.FAVORABLE: (False, True),
}

assert set(IMPACT_CONTRIBUTIONS) == set(WindImpact), "Every wind impact needs a contribution"


def add_segment(summary: RouteSummary, analysis: SegmentAnalysis) -> RouteSummary:
    """Return a new summary with one more segment folded in."""
    distance = analysis.distance_km
    headwind_normal, favorable_normal = IMPACT_CONTRIBUTIONS[analysis.normal.impact]
    headwind_reverse, favorable_reverse = IMPACT_CONTRIBUTIONS[analysis.reverse.impact]

    return replace(
        summary,
        total_time_normal=summary.total_time_normal + analysis.estimated_time_minutes,
        total_time_reverse=summary.total_time_reverse + analysis.estimated_time_reverse_minutes,
        headwind_distance_normal=summary.headwind_distance_normal + (distance if headwind_normal else 0.0),
        headwind_distance_reverse=summary.headwind_distance_reverse + (distance if headwind_reverse else 0.0),
        favorable_segments_normal=summary.favorable_segments_normal + int(favorable_normal),
        favorable_segments_reverse=summary.favorable_segments_reverse + int(favorable_reverse),
        total_distance=summary.total_distance + distance,
    )


def summarize_route(analyses: Iterable[SegmentAnalysis]) -> RouteSummary:
    """
    Aggregate segment analyses into a RouteSummary.

    Args:
        analyses: Per-segment results in riding order

    Returns:
        RouteSummary: Totals per direction; ``best_direction`` is normal on ties
    """
    summary = reduce(add_segment, analyses, RouteSummary())
    logger.info(
        f"Route summary: normal {summary.total_time_normal:.1f} min, "
        f"reverse {summary.total_time_reverse:.1f} min, best {summary.best_direction}"
    )
    return summary
