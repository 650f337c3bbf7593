"""Retail planning calendar generator.

The planning year has 52 weeks laid out on a 4-5-4 retail calendar: each
fiscal quarter holds months of 4, 5, and 4 weeks, and the fiscal year starts
in February.
"""

from __future__ import annotations

from dataclasses import dataclass

WEEKS_PER_YEAR = 52

# Fiscal month order with week counts (4-5-4 per quarter)
RETAIL_MONTHS: tuple[tuple[str, int], ...] = (
    ("Feb", 4),
    ("Mar", 5),
    ("Apr", 4),
    ("May", 4),
    ("Jun", 5),
    ("Jul", 4),
    ("Aug", 4),
    ("Sep", 5),
    ("Oct", 4),
    ("Nov", 4),
    ("Dec", 5),
    ("Jan", 4),
)


def week_token(seq_no: int) -> str:
    """Return the week token for a 1-based position (1 -> 'W01')."""
    return f"W{seq_no:02d}"


def month_token(seq_no: int) -> str:
    """Return the month token for a 1-based fiscal month (1 -> 'M01')."""
    return f"M{seq_no:02d}"


def canonical_weeks() -> list[str]:
    """The ordered 52-week timeline every aggregate is aligned to."""
    return [week_token(i) for i in range(1, WEEKS_PER_YEAR + 1)]


@dataclass(frozen=True)
class CalendarWeek:
    """One generated calendar row.

    Attributes:
        seq_no: Position in the year (1-52).
        week: Week token.
        week_label: Display label.
        month: Fiscal month token.
        month_label: Month display label.
    """

    seq_no: int
    week: str
    week_label: str
    month: str
    month_label: str

    def to_row(self) -> dict[str, int | str]:
        """Column mapping for bulk inserts."""
        return {
            "seq_no": self.seq_no,
            "week": self.week,
            "week_label": self.week_label,
            "month": self.month,
            "month_label": self.month_label,
        }


def generate_retail_calendar() -> list[CalendarWeek]:
    """Generate the 52 calendar weeks in fiscal order.

    Returns:
        Calendar weeks W01..W52 with their fiscal months.
    """
    weeks: list[CalendarWeek] = []
    seq_no = 1
    for month_index, (month_label, week_count) in enumerate(RETAIL_MONTHS, start=1):
        for _ in range(week_count):
            weeks.append(
                CalendarWeek(
                    seq_no=seq_no,
                    week=week_token(seq_no),
                    week_label=f"Week {seq_no:02d}",
                    month=month_token(month_index),
                    month_label=month_label,
                )
            )
            seq_no += 1
    return weeks
