from collections.abc import Iterable

from workforce_analytics.schemas.analytics import TypeCount
from workforce_analytics.schemas.records import EmployeeRecord

ALL_TYPES = "all"


def resolve_cohort(employees: Iterable[EmployeeRecord], type_filter: str) -> set[str]:
    """Employee ids in scope for ``type_filter`` ("all" keeps everyone)."""
    if type_filter == ALL_TYPES:
        return {emp.id for emp in employees}
    return {emp.id for emp in employees if emp.employment_type == type_filter}


def employee_type_distribution(
    employees: Iterable[EmployeeRecord], cohort: set[str]
) -> list[TypeCount]:
    """
    Headcount per employment type, counted after the cohort filter.

    Slices come out in order of first appearance in the roster.
    """
    counts: dict[str, int] = {}
    seen: set[str] = set()
    for emp in employees:
        if emp.id not in cohort or emp.id in seen:
            continue
        seen.add(emp.id)
        counts[emp.employment_type] = counts.get(emp.employment_type, 0) + 1
    return [TypeCount(name=name, value=value) for name, value in counts.items()]
