"""
Requirements schema models.

The schema is user-configured: a total credit requirement plus an ordered
list of categories, each with its own credit requirement and chart color.
It has its own lifecycle, independent of the record store.
"""

from dataclasses import dataclass, field, replace
from typing import Optional

from ..config import CHART_COLORS
from ..errors import ValidationError


def _check_credits(value, what: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{what} must be a non-negative whole number")
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{what} must be a non-negative whole number")
    if number < 0:
        raise ValidationError(f"{what} must be a non-negative whole number")
    return number


@dataclass(frozen=True)
class CategoryRequirement:
    """One configured category. required_credits may be 0."""
    name: str
    required_credits: int = 0
    color: str = CHART_COLORS[0]

    def to_dict(self) -> dict:
        return {"name": self.name, "requiredCredits": self.required_credits, "color": self.color}


@dataclass(frozen=True)
class RequirementsSchema:
    """
    Immutable snapshot of the degree requirements.

    Every mutator returns a new schema. Categories are never removed
    implicitly: a category stays configured after its last matching record
    is deleted, until the user removes it.

    Usage:
        schema = RequirementsSchema().with_total(160)
        schema = schema.add_category("Core", 40)
        schema = schema.ensure_categories(["Core", "Electives"])
    """
    total_credits: int = 0
    categories: tuple = field(default_factory=tuple)

    @property
    def names(self) -> list:
        return [c.name for c in self.categories]

    def get(self, name: str) -> Optional[CategoryRequirement]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def next_color(self) -> str:
        return CHART_COLORS[len(self.categories) % len(CHART_COLORS)]

    def with_total(self, total_credits) -> "RequirementsSchema":
        return replace(self, total_credits=_check_credits(total_credits, "Total credits"))

    def add_category(self, name: str, required_credits=0, color: str = "") -> "RequirementsSchema":
        """
        Configure a new category.

        Raises:
            ValidationError: empty name, duplicate name, or bad credit value
        """
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        if self.get(name) is not None:
            raise ValidationError(f"Category '{name}' is already configured")
        category = CategoryRequirement(
            name=name,
            required_credits=_check_credits(required_credits, "Required credits"),
            color=color or self.next_color(),
        )
        return replace(self, categories=self.categories + (category,))

    def update_category(self, name: str, required_credits=None, color: str = None) -> "RequirementsSchema":
        existing = self.get(name)
        if existing is None:
            raise ValidationError(f"Category '{name}' is not configured")
        updated = existing
        if required_credits is not None:
            updated = replace(updated, required_credits=_check_credits(required_credits, "Required credits"))
        if color:
            updated = replace(updated, color=color)
        return replace(self, categories=tuple(updated if c.name == name else c for c in self.categories))

    def remove_category(self, name: str) -> "RequirementsSchema":
        if self.get(name) is None:
            raise ValidationError(f"Category '{name}' is not configured")
        return replace(self, categories=tuple(c for c in self.categories if c.name != name))

    def ensure_categories(self, names) -> "RequirementsSchema":
        """Add a zero-credit entry for every name not configured yet (import path)."""
        schema = self
        for name in names:
            name = (name or "").strip()
            if name and schema.get(name) is None:
                schema = schema.add_category(name, 0)
        return schema

    def to_dict(self) -> dict:
        return {
            "totalCredits": self.total_credits,
            "categories": [c.to_dict() for c in self.categories],
        }
