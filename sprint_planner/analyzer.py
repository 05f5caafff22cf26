"""
Sprint Effort Analyzer

Calculates planned, leave and remaining hours per person for a sprint.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional
from enum import Enum

from .models import Person, PersonLeave, SprintPlanningTask


logger = logging.getLogger(__name__)


class EffortStatus(Enum):
    """Effort health status."""
    HEALTHY = "healthy"          # under 80%
    AT_CAPACITY = "at_capacity"  # 80% and up, hours still left
    OVERLOADED = "overloaded"    # negative remaining hours


AT_CAPACITY_THRESHOLD = 80.0


@dataclass
class PersonEffort:
    """Effort picture for one person in one sprint."""
    person_id: str
    name: str
    sprint_hours: float
    planned_hours: float = 0.0
    leave_hours: float = 0.0
    task_count: int = 0

    @property
    def remaining_hours(self) -> float:
        """Hours left after tasks and leaves; negative means over-allocated."""
        return self.sprint_hours - self.planned_hours - self.leave_hours

    @property
    def utilization_percent(self) -> Optional[float]:
        """Share of sprint hours used, None when the sprint has no hours."""
        if self.sprint_hours <= 0:
            return None
        return (self.planned_hours + self.leave_hours) / self.sprint_hours * 100

    @property
    def status(self) -> EffortStatus:
        if self.remaining_hours < 0:
            return EffortStatus.OVERLOADED
        utilization = self.utilization_percent
        if utilization is not None and utilization >= AT_CAPACITY_THRESHOLD:
            return EffortStatus.AT_CAPACITY
        return EffortStatus.HEALTHY

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        utilization = self.utilization_percent
        return {
            "person_id": self.person_id,
            "name": self.name,
            "task_count": self.task_count,
            "hours": {
                "sprint": round(self.sprint_hours, 2),
                "planned": round(self.planned_hours, 2),
                "leave": round(self.leave_hours, 2),
                "remaining": round(self.remaining_hours, 2)
            },
            "utilization_percent": round(utilization, 1) if utilization is not None else None,
            "status": self.status.value
        }


@dataclass
class SprintEffortSummary:
    """Effort summary for a whole team in one sprint."""
    sprint_hours: float
    members: list[PersonEffort] = field(default_factory=list)
    dangling_person_ids: list[str] = field(default_factory=list)
    calculated_at: datetime = field(default_factory=datetime.now)

    @property
    def team_size(self) -> int:
        return len(self.members)

    @property
    def team_capacity_hours(self) -> float:
        return self.sprint_hours * len(self.members)

    @property
    def total_planned_hours(self) -> float:
        return sum(m.planned_hours for m in self.members)

    @property
    def total_leave_hours(self) -> float:
        return sum(m.leave_hours for m in self.members)

    @property
    def total_remaining_hours(self) -> float:
        return sum(m.remaining_hours for m in self.members)

    @property
    def overloaded_count(self) -> int:
        return len([m for m in self.members if m.status == EffortStatus.OVERLOADED])

    @property
    def at_capacity_count(self) -> int:
        return len([m for m in self.members if m.status == EffortStatus.AT_CAPACITY])

    @property
    def healthy_count(self) -> int:
        return len([m for m in self.members if m.status == EffortStatus.HEALTHY])

    def get_member(self, person_id: str) -> Optional[PersonEffort]:
        for member in self.members:
            if member.person_id == person_id:
                return member
        return None

    def get_most_loaded(self, n: int = 3) -> list[PersonEffort]:
        """Get the N people with the fewest remaining hours."""
        return sorted(self.members, key=lambda m: m.remaining_hours)[:n]

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "calculated_at": self.calculated_at.isoformat(),
            "summary": {
                "sprint_hours": round(self.sprint_hours, 2),
                "team_size": self.team_size,
                "team_capacity_hours": round(self.team_capacity_hours, 2),
                "planned_hours": round(self.total_planned_hours, 2),
                "leave_hours": round(self.total_leave_hours, 2),
                "remaining_hours": round(self.total_remaining_hours, 2),
                "healthy": self.healthy_count,
                "at_capacity": self.at_capacity_count,
                "overloaded": self.overloaded_count
            },
            "members": [m.to_dict() for m in self.members],
            "dangling_person_ids": self.dangling_person_ids
        }


class EffortAnalyzer:
    """
    Aggregates task costs and leaves into per-person sprint effort.

    Tasks on hold contribute nothing. A person who is both analyst and
    developer on a task carries both costs. Assignments and leaves that
    point at unknown people are left out of every sum and listed on the
    summary instead.

    Usage:
        analyzer = EffortAnalyzer()
        summary = analyzer.analyze(
            sprint_hours=80,
            tasks=[SprintPlanningTask(...)],
            leaves=[PersonLeave(...)],
            people=[Person(...)]
        )
    """

    def analyze_person(
        self,
        person: Person,
        sprint_hours: float,
        tasks: list[SprintPlanningTask],
        leaves: list[PersonLeave]
    ) -> PersonEffort:
        """
        Analyze effort for a single person.

        Args:
            person: Team member
            sprint_hours: Total planned hours of the sprint
            tasks: Sprint planning tasks
            leaves: Sprint person leaves

        Returns:
            PersonEffort with planned and leave hours filled in
        """
        effort = PersonEffort(
            person_id=person.id,
            name=person.full_name,
            sprint_hours=sprint_hours
        )

        for task in tasks:
            if task.is_on_hold:
                continue

            assigned = False
            if person.id in task.responsible_analyst:
                effort.planned_hours += task.analysis_cost
                assigned = True
            if person.id in task.responsible_developer:
                effort.planned_hours += task.software_cost
                assigned = True
            if assigned:
                effort.task_count += 1

        effort.leave_hours = sum(
            leave.hours for leave in leaves if leave.person_id == person.id
        )
        return effort

    def find_dangling_references(
        self,
        tasks: list[SprintPlanningTask],
        leaves: list[PersonLeave],
        people: list[Person]
    ) -> list[str]:
        """Person ids referenced by active tasks or leaves but not in people."""
        known = {p.id for p in people}
        referenced = set()
        for task in tasks:
            if not task.is_on_hold:
                referenced |= task.responsible_people
        referenced |= {leave.person_id for leave in leaves}
        return sorted(referenced - known)

    def analyze(
        self,
        sprint_hours: float,
        tasks: Optional[list[SprintPlanningTask]] = None,
        leaves: Optional[list[PersonLeave]] = None,
        people: Optional[list[Person]] = None
    ) -> SprintEffortSummary:
        """
        Analyze effort for the whole team.

        Args:
            sprint_hours: Total planned hours of the sprint
            tasks: Sprint planning tasks
            leaves: Sprint person leaves
            people: Team members, in display order

        Returns:
            SprintEffortSummary with one row per person
        """
        tasks = tasks or []
        leaves = leaves or []
        people = people or []

        members = [
            self.analyze_person(person, sprint_hours, tasks, leaves)
            for person in people
        ]

        dangling = self.find_dangling_references(tasks, leaves, people)
        if dangling:
            logger.warning(
                "Ignoring %d unknown person id(s) in sprint effort: %s",
                len(dangling), ", ".join(dangling)
            )

        return SprintEffortSummary(
            sprint_hours=sprint_hours,
            members=members,
            dangling_person_ids=dangling
        )


# Convenience function
def analyze_sprint_effort(
    sprint_hours: float,
    tasks: Optional[list[SprintPlanningTask]] = None,
    leaves: Optional[list[PersonLeave]] = None,
    people: Optional[list[Person]] = None
) -> SprintEffortSummary:
    """
    Quick function to analyze sprint effort.

    Example:
        summary = analyze_sprint_effort(80, tasks, leaves, people)

        for member in summary.members:
            print(f"{member.name}: {member.remaining_hours}h left")
    """
    analyzer = EffortAnalyzer()
    return analyzer.analyze(sprint_hours, tasks, leaves, people)
