"""
Core route analysis algorithms.

Geometry, GPX extraction, segment building, forecast alignment, the wind
impact model and the aggregation of per-segment results.
"""
