"""
Grade scale models.

Contains the GradeStatus enum and the fixed GradeScale used by every
aggregate and projection.
"""

from enum import Enum
from typing import Optional

from ..config import GRADE_POINTS, UNSCORED_GRADES


class GradeStatus(Enum):
    """
    How a grade participates in the aggregates.

    SCORED: Letter grade with a numeric weight, counts toward GPA
    UNSCORED: S/U, counts toward credit totals only
    ABSENT: No grade (or a string that isn't on the scale)
    """
    SCORED = "scored"
    UNSCORED = "unscored"
    ABSENT = "absent"


class GradeScale:
    """
    Fixed letter-grade to grade-point mapping.

    ABSENT and UNSCORED are aggregated identically (credits only), but they
    are kept apart so "no grade" and "S/U" can be counted separately.

    Usage:
        GradeScale.weight("B+")   # 4.0
        GradeScale.weight("S")    # None
        GradeScale.status("")     # GradeStatus.ABSENT
    """

    POINTS = GRADE_POINTS
    UNSCORED = UNSCORED_GRADES

    @classmethod
    def status(cls, grade) -> GradeStatus:
        if not isinstance(grade, str):
            return GradeStatus.ABSENT
        if grade in cls.POINTS:
            return GradeStatus.SCORED
        if grade in cls.UNSCORED:
            return GradeStatus.UNSCORED
        return GradeStatus.ABSENT

    @classmethod
    def weight(cls, grade) -> Optional[float]:
        """Grade points for a scored grade, None for anything excluded from GPA."""
        if cls.status(grade) is GradeStatus.SCORED:
            return cls.POINTS[grade]
        return None

    @classmethod
    def is_known(cls, grade: str) -> bool:
        """True for every letter on the scale, scored or not."""
        return grade in cls.POINTS or grade in cls.UNSCORED
