"""
Term label model.

A term is a (year, part) pair such as "Year 2 Semester 1". Records store
the label text; Term gives it structure for validation and ordering.
"""

import re
from dataclasses import dataclass
from typing import Optional

from ..config import (
    TERM_PARTS,
    TERM_PART_WEIGHTS,
    MIN_YEAR,
    MAX_YEAR,
    UNPARSEABLE_TERM_ORDER,
)
from ..errors import ValidationError

_TERM_PATTERN = re.compile(r"^Year (\d+) (.+)$")


@dataclass(frozen=True)
class Term:
    """
    Structured term label.

    ORDERING:
    ---------
    sort key = year * 10 + part weight, where the parts weigh
    Semester 1 = 1, Semester 2 = 2, Special Term 1 = 3, Special Term 2 = 4.

    So "Year 1 Special Term 2" (14) comes before "Year 2 Semester 1" (21).
    """
    year: int
    part: str

    @property
    def label(self) -> str:
        return f"Year {self.year} {self.part}"

    @property
    def sort_key(self) -> int:
        return self.year * 10 + TERM_PART_WEIGHTS[self.part]

    @classmethod
    def parse(cls, label) -> Optional["Term"]:
        """Parse "Year N Part" text. Returns None for anything out of domain."""
        if not isinstance(label, str):
            return None
        match = _TERM_PATTERN.match(label.strip())
        if not match:
            return None
        year = int(match.group(1))
        part = match.group(2).strip()
        if part not in TERM_PART_WEIGHTS or not MIN_YEAR <= year <= MAX_YEAR:
            return None
        return cls(year, part)

    @classmethod
    def from_input(cls, year, part: str) -> "Term":
        """
        Build a term from form input.

        Raises:
            ValidationError: year is not a number in 1..6, or part is unknown
        """
        try:
            year_num = int(str(year).strip())
        except (TypeError, ValueError):
            raise ValidationError(f"Please enter a valid year between {MIN_YEAR} and {MAX_YEAR}")
        if not MIN_YEAR <= year_num <= MAX_YEAR:
            raise ValidationError(f"Please enter a valid year between {MIN_YEAR} and {MAX_YEAR}")
        if part not in TERM_PART_WEIGHTS:
            raise ValidationError(f"Term part must be one of: {', '.join(TERM_PARTS)}")
        return cls(year_num, part)


def term_order(label) -> int:
    """Ordering value for a term label; unparseable labels sort last."""
    term = Term.parse(label)
    return term.sort_key if term else UNPARSEABLE_TERM_ORDER
