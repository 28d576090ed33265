"""
Aggregation and projection engines.

This package contains the pure computations behind every number the
tracker shows.
"""

from .aggregation import AggregationEngine
from .projection import ProjectionEngine, recommend_grade, validate_target

__all__ = [
    "AggregationEngine",
    "ProjectionEngine",
    "recommend_grade",
    "validate_target",
]
