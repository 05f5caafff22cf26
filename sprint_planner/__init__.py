"""
Sprint Planner

A tool for sizing sprints in business hours and tracking remaining effort per person.
"""

__version__ = "1.0.0"

from .models import (
    AppConfig,
    Holiday,
    LeaveType,
    Person,
    PersonLeave,
    Role,
    Sprint,
    SprintPlanningData,
    SprintPlanningTask,
    SprintStatus,
    TaskStatus
)

from .calendar import (
    is_weekend,
    business_day_count,
    business_day_count_excluding,
    expand_holiday_dates,
    holiday_templates
)

from .capacity import (
    FormatError,
    SprintCapacity,
    daily_hours_from_string,
    planned_hours_for_sprint,
    calculate_sprint_capacity
)

from .analyzer import (
    EffortAnalyzer,
    EffortStatus,
    PersonEffort,
    SprintEffortSummary,
    analyze_sprint_effort
)

from .visualizer import (
    Visualizer,
    TextReporter,
    HTMLReporter
)

__all__ = [
    # Version
    "__version__",

    # Models
    "AppConfig",
    "Holiday",
    "LeaveType",
    "Person",
    "PersonLeave",
    "Role",
    "Sprint",
    "SprintPlanningData",
    "SprintPlanningTask",
    "SprintStatus",
    "TaskStatus",

    # Calendar
    "is_weekend",
    "business_day_count",
    "business_day_count_excluding",
    "expand_holiday_dates",
    "holiday_templates",

    # Capacity
    "FormatError",
    "SprintCapacity",
    "daily_hours_from_string",
    "planned_hours_for_sprint",
    "calculate_sprint_capacity",

    # Analyzer
    "EffortAnalyzer",
    "EffortStatus",
    "PersonEffort",
    "SprintEffortSummary",
    "analyze_sprint_effort",

    # Visualizer
    "Visualizer",
    "TextReporter",
    "HTMLReporter",
]
