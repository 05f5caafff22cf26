"""
Domain Models for Sprint Planner

Sprints, holidays, people, leaves and planning tasks as they are stored on
disk (camelCase JSON) and used by the capacity and effort calculations.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Optional, Union
from enum import Enum


DateLike = Union[date, datetime, str]


def to_date(value: DateLike) -> date:
    """
    Reduce a date-like value to a calendar day.

    Aware datetimes and ISO strings with an offset are converted to UTC
    first so that the same instant always lands on the same day regardless
    of the local time zone.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        if len(value) > 10:
            if value.endswith("Z"):
                value = value[:-1] + "+00:00"
            return to_date(datetime.fromisoformat(value))
        return date.fromisoformat(value)
    raise TypeError(f"Cannot interpret {value!r} as a date")


class SprintStatus(Enum):
    """Sprint lifecycle status."""
    SAVED = "Kaydedildi"
    PLANNING = "Planlanıyor"
    COMPLETED = "Tamamlandı"


class Role(Enum):
    """Team member role."""
    ANALYST = "Analist"
    DEVELOPER = "Developer"


class LeaveType(Enum):
    """Kind of hour deduction recorded against a person."""
    LEAVE = "İzin"
    TRAINING = "Eğitim"


class TaskStatus(Enum):
    """Planning task status."""
    NOT_STARTED = "Başlanmadı"
    IN_DEVELOPMENT = "Geliştirme"
    HOLD = "HOLD"
    COMPLETED = "Tamamlandı"


@dataclass
class Person:
    """A team member who can be assigned to planning tasks."""
    id: str
    first_name: str
    last_name: str
    role: Role = Role.DEVELOPER
    ldap: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @classmethod
    def from_dict(cls, data: dict) -> "Person":
        return cls(
            id=str(data["id"]),
            first_name=data.get("firstName", ""),
            last_name=data.get("lastName", ""),
            role=Role(data.get("role", Role.DEVELOPER.value)),
            ldap=data.get("ldap", "")
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "role": self.role.value,
            "ldap": self.ldap
        }


@dataclass
class Holiday:
    """A closed, inclusive run of calendar days off."""
    id: str
    name: str
    start_date: date
    end_date: date

    @classmethod
    def from_dict(cls, data: dict) -> "Holiday":
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            start_date=to_date(data["startDate"]),
            end_date=to_date(data["endDate"])
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat()
        }


@dataclass
class Sprint:
    """A planning sprint over an inclusive date range."""
    id: str
    name: str
    start_date: date
    end_date: date
    status: SprintStatus = SprintStatus.SAVED

    @property
    def is_deletable(self) -> bool:
        """Only sprints that have not entered planning may be deleted."""
        return self.status == SprintStatus.SAVED

    @property
    def is_completed(self) -> bool:
        return self.status == SprintStatus.COMPLETED

    @classmethod
    def from_dict(cls, data: dict) -> "Sprint":
        status = data.get("status")
        return cls(
            id=str(data["id"]),
            name=data.get("name", ""),
            start_date=to_date(data["startDate"]),
            end_date=to_date(data["endDate"]),
            status=SprintStatus(status) if status else SprintStatus.SAVED
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "status": self.status.value
        }


@dataclass
class PersonLeave:
    """Hours deducted from one person's capacity within a sprint."""
    id: str
    person_id: str
    type: LeaveType = LeaveType.LEAVE
    hours: float = 0.0
    description: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "PersonLeave":
        hours = float(data.get("hours") or 0)
        if hours < 0:
            raise ValueError(f"Leave hours must be non-negative, got {hours}")
        return cls(
            id=str(data["id"]),
            person_id=str(data.get("personId", "")),
            type=LeaveType(data.get("type") or LeaveType.LEAVE.value),
            hours=hours,
            description=data.get("description", "")
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "personId": self.person_id,
            "type": self.type.value,
            "hours": self.hours,
            "description": self.description
        }


@dataclass
class SprintPlanningTask:
    """A task planned into a sprint, with its responsible people and costs."""
    id: str
    task_name: str
    sp: float = 0.0
    sprint_end_target: str = ""
    current_status: TaskStatus = TaskStatus.NOT_STARTED
    responsible_analyst: set[str] = field(default_factory=set)
    responsible_developer: set[str] = field(default_factory=set)
    delay_reason: str = ""
    analysis_cost: float = 0.0
    software_cost: float = 0.0
    analysis_task_sp: float = 0.0
    software_task_sp: float = 0.0
    test_task_sp: float = 0.0
    component: str = ""

    @property
    def is_on_hold(self) -> bool:
        return self.current_status == TaskStatus.HOLD

    @property
    def responsible_people(self) -> set[str]:
        """Everyone assigned to the task in either role."""
        return self.responsible_analyst | self.responsible_developer

    @classmethod
    def from_dict(cls, data: dict) -> "SprintPlanningTask":
        status = data.get("currentStatus")
        return cls(
            id=str(data["id"]),
            task_name=data.get("taskName", ""),
            sp=float(data.get("sp") or 0),
            sprint_end_target=data.get("sprintEndTarget", ""),
            current_status=TaskStatus(status) if status else TaskStatus.NOT_STARTED,
            responsible_analyst={str(p) for p in data.get("responsibleAnalyst") or []},
            responsible_developer={str(p) for p in data.get("responsibleDeveloper") or []},
            delay_reason=data.get("delayReason", ""),
            analysis_cost=float(data.get("analysisCost") or 0),
            software_cost=float(data.get("softwareCost") or 0),
            analysis_task_sp=float(data.get("analysisTaskSP") or 0),
            software_task_sp=float(data.get("softwareTaskSP") or 0),
            test_task_sp=float(data.get("testTaskSP") or 0),
            component=data.get("component", "")
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "taskName": self.task_name,
            "sp": self.sp,
            "sprintEndTarget": self.sprint_end_target,
            "currentStatus": self.current_status.value,
            "responsibleAnalyst": sorted(self.responsible_analyst),
            "responsibleDeveloper": sorted(self.responsible_developer),
            "delayReason": self.delay_reason,
            "analysisCost": self.analysis_cost,
            "softwareCost": self.software_cost,
            "analysisTaskSP": self.analysis_task_sp,
            "softwareTaskSP": self.software_task_sp,
            "testTaskSP": self.test_task_sp,
            "component": self.component
        }


@dataclass
class SprintPlanningData:
    """Tasks and leaves owned by a single sprint."""
    tasks: list[SprintPlanningTask] = field(default_factory=list)
    person_leaves: list[PersonLeave] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SprintPlanningData":
        raw_tasks = data.get("tasks")
        if not raw_tasks:
            # Older files kept tasks under "0", "1", ... instead of a list
            raw_tasks = [
                value for key, value in data.items()
                if key not in ("tasks", "personLeaves")
                and isinstance(value, dict) and value.get("id")
            ]
        return cls(
            tasks=[SprintPlanningTask.from_dict(t) for t in raw_tasks],
            person_leaves=[PersonLeave.from_dict(l) for l in data.get("personLeaves") or []]
        )

    def to_dict(self) -> dict:
        return {
            "tasks": [t.to_dict() for t in self.tasks],
            "personLeaves": [l.to_dict() for l in self.person_leaves]
        }


@dataclass
class AppConfig:
    """Team-wide planning settings."""
    daily_planning_hour: str = "08:00"
    people: list[Person] = field(default_factory=list)

    def find_person(self, person_id: str) -> Optional[Person]:
        for person in self.people:
            if person.id == person_id:
                return person
        return None

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        return cls(
            daily_planning_hour=data.get("dailyPlanningHour", "08:00"),
            people=[Person.from_dict(p) for p in data.get("people") or []]
        )

    def to_dict(self) -> dict:
        return {
            "dailyPlanningHour": self.daily_planning_hour,
            "people": [p.to_dict() for p in self.people]
        }
