"""
Requirement resolution.
Merges date-specific shift requirements with the recurring weekly template.
"""

import logging
from datetime import date
from typing import Optional

from .timezone import day_of_week
from .types import ShiftRequirement, ShiftType, StaffingCounts, TemplateEntry


logger = logging.getLogger(__name__)

RequirementsMap = dict[date, dict[ShiftType, StaffingCounts]]


def select_template_name(
    template_entries: list[TemplateEntry],
    requested: Optional[str] = None,
) -> Optional[str]:
    """
    Pick the one template a generation run uses.

    A requested name wins outright. Otherwise the lowest active template name
    (ascending) is used, so overlapping active templates resolve the same way
    on every run regardless of the order rows come back from the store.
    """
    if requested:
        return requested

    active_names = sorted({t.name for t in template_entries if t.is_active})
    if not active_names:
        return None
    if len(active_names) > 1:
        logger.warning(
            f"{len(active_names)} active weekly templates ({', '.join(active_names)}); using '{active_names[0]}'"
        )
    return active_names[0]


def resolve_requirements(
    dates: list[date],
    explicit_requirements: list[ShiftRequirement],
    template_entries: list[TemplateEntry],
    template_name: Optional[str] = None,
) -> RequirementsMap:
    """
    Build date -> shift type -> required counts for every date in `dates`.

    Explicit requirements always take precedence over the template, per
    shift type: a date can take its open counts from an explicit row and its
    close counts from the template. Dates with neither get no entry for that
    shift.
    """
    wanted = set(dates)
    result: RequirementsMap = {d: {} for d in dates}

    # 1: Explicit rows
    for req in explicit_requirements:
        if req.date not in wanted:
            continue
        result[req.date][req.shift_type] = req.counts

    # 2: Template fallback
    selected = select_template_name(template_entries, template_name)
    template_rows = [
        t for t in template_entries
        if t.is_active and selected is not None and t.name == selected
    ]
    by_weekday: dict[int, list[TemplateEntry]] = {}
    for row in template_rows:
        by_weekday.setdefault(row.day_of_week, []).append(row)

    for d in dates:
        for row in by_weekday.get(day_of_week(d), []):
            if row.shift_type not in result[d]:
                result[d][row.shift_type] = row.counts

    return result
