"""
Projection Engine.

This module answers "what do I need on my remaining modules to reach a
target GPA?".
"""

import logging
import math

from ..config import GRADE_THRESHOLDS, FLOOR_GRADE, MAX_GRADE_POINT
from ..errors import ValidationError
from ..models import GradeStatus, ProjectionResult
from .aggregation import usable

logger = logging.getLogger(__name__)


def validate_target(target_gpa) -> float:
    """
    Parse a target GPA.

    Raises:
        ValidationError: not a finite number in [0, 5.0]
    """
    message = f"Please enter a valid target GPA between 0 and {MAX_GRADE_POINT}"
    if isinstance(target_gpa, bool) or target_gpa is None:
        raise ValidationError(message)
    try:
        target = float(str(target_gpa).strip()) if isinstance(target_gpa, str) else float(target_gpa)
    except (TypeError, ValueError):
        raise ValidationError(message)
    if not math.isfinite(target) or not 0 <= target <= MAX_GRADE_POINT:
        raise ValidationError(message)
    return target


def recommend_grade(required_average: float) -> str:
    """Lowest letter grade whose threshold covers the required average."""
    for threshold, letter in GRADE_THRESHOLDS:
        if required_average >= threshold:
            return letter
    return FLOOR_GRADE


class ProjectionEngine:
    """
    Forward projection toward a target GPA.

    ═══════════════════════════════════════════════════════════════════════════
    HOW IT WORKS
    ═══════════════════════════════════════════════════════════════════════════

    1. Split records into LOCKED (scored grade) and OPEN (no grade, or S/U).
    2. locked_points = sum(weight x credits), locked_credits, open_credits.
    3. No open credits: the GPA can't move any more, so just compare it.
    4. Otherwise:
           required_total   = target x (locked_credits + open_credits)
           required_open    = required_total - locked_points
           required_average = required_open / open_credits
    5. Achievable iff required_average <= 5.0. The average is reported as-is
       (7.0 means "you'd need 7 points per MC", it isn't clamped to 5.0).
    6. recommend_grade() turns the average into an approximate letter. That
       letter is a display aid; it plays no part in the achievability check.

    Example:
        8 MCs locked at 4.0 (32 points), 8 MCs open, target 4.5
        required_total = 72, required_open = 40, required_average = 5.0
        → A+, achievable (5.0 is exactly the maximum)
    ═══════════════════════════════════════════════════════════════════════════
    """

    def project_required_grade(self, records, target_gpa) -> ProjectionResult:
        target = validate_target(target_gpa)

        locked_points = 0.0
        locked_credits = 0
        open_credits = 0
        for record in usable(records):
            if record.grade_status is GradeStatus.SCORED:
                locked_points += record.grade_points
                locked_credits += record.credits
            else:
                open_credits += record.credits

        if open_credits == 0:
            final_gpa = locked_points / locked_credits if locked_credits > 0 else 0.0
            if locked_credits > 0:
                message = f"You have no remaining modules that affect GPA. Your final GPA is {final_gpa:.2f}"
            else:
                message = "No modules with grades that affect GPA found."
            return ProjectionResult(
                target_gpa=target,
                locked_credits=locked_credits,
                open_credits=0,
                locked_points=locked_points,
                achievable=final_gpa >= target,
                message=message,
                final_gpa=final_gpa,
            )

        required_total = target * (locked_credits + open_credits)
        required_open_points = required_total - locked_points
        required_average = required_open_points / open_credits

        achievable = required_average <= MAX_GRADE_POINT
        grade = recommend_grade(required_average)
        logger.debug("Projection target=%s required_average=%s achievable=%s",
                     target, required_average, achievable)

        if achievable:
            message = (
                f"To achieve {target:g} GPA, average {required_average:.2f} grade points per MC "
                f"in remaining {open_credits} MCs (≈{grade} grades)"
            )
        else:
            message = (
                f"Target GPA of {target:g} is not achievable. Would need "
                f"{required_average:.2f} grade points per MC (max {MAX_GRADE_POINT})."
            )

        return ProjectionResult(
            target_gpa=target,
            locked_credits=locked_credits,
            open_credits=open_credits,
            locked_points=locked_points,
            achievable=achievable,
            message=message,
            required_open_points=required_open_points,
            required_average=required_average,
            recommended_grade=grade,
        )
