"""
Flat-file Record Stores

Each collection lives in its own JSON file under the data directory and is
read and rewritten whole on every change. The last writer wins.
"""

import json
import logging
import os
from typing import Any, Optional

from .capacity import validate_hour_string
from .models import (
    AppConfig,
    Holiday,
    Person,
    PersonLeave,
    Sprint,
    SprintPlanningData,
    SprintPlanningTask,
    SprintStatus,
)


logger = logging.getLogger(__name__)


DEFAULT_COMPONENTS = [
    "Roadmap_Torus",
    "Teknik RoadMap_Torus",
    "Kaizen_Torus",
    "Problem_Torus",
]

DEFAULT_SPRINT_END_TARGETS = [
    "Geliştirme",
    "Tamamlama",
    "Test Tamamlama",
    "Analiz Tamamlama",
]


class StoreError(Exception):
    """Base class for record store failures."""


class RecordNotFoundError(StoreError):
    """Raised when a record id does not exist."""


class DuplicateRecordError(StoreError):
    """Raised when creating a record whose id already exists."""


class SprintLockedError(StoreError):
    """Raised when deleting a sprint that has left the Saved status."""


class JsonFile:
    """A single JSON document on disk."""

    def __init__(self, path: str):
        self.path = path

    @property
    def exists(self) -> bool:
        return os.path.exists(self.path)

    def read(self, default: Any = None) -> Any:
        """Load the document, returning default when the file is missing."""
        if not self.exists:
            return default
        try:
            with open(self.path, encoding="utf-8") as f:
                return json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"Corrupt data file {self.path}: {e}") from e

    def write(self, data: Any) -> None:
        """Overwrite the document."""
        os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        logger.debug("Wrote %s", self.path)


class ConfigStore:
    """Daily planning hour and the people list, kept in config.json."""

    def __init__(self, data_dir: str, default_daily_hour: str = "08:00"):
        self.file = JsonFile(os.path.join(data_dir, "config.json"))
        self.default_daily_hour = default_daily_hour

    def read(self) -> AppConfig:
        data = self.file.read()
        if data is None:
            return AppConfig(daily_planning_hour=self.default_daily_hour)
        return AppConfig.from_dict(data)

    def write(self, config: AppConfig) -> None:
        """
        Persist the config.

        Raises:
            FormatError: If the daily planning hour is not HH:mm
        """
        validate_hour_string(config.daily_planning_hour)
        self.file.write(config.to_dict())

    def list_people(self) -> list[Person]:
        return self.read().people

    def add_person(self, person: Person) -> Person:
        config = self.read()
        if config.find_person(person.id):
            raise DuplicateRecordError(f"Person {person.id} already exists")
        config.people.append(person)
        self.write(config)
        return person

    def update_person(self, person: Person) -> Person:
        config = self.read()
        for i, existing in enumerate(config.people):
            if existing.id == person.id:
                config.people[i] = person
                self.write(config)
                return person
        raise RecordNotFoundError(f"Person {person.id} not found")

    def delete_person(self, person_id: str) -> None:
        config = self.read()
        config.people = [p for p in config.people if p.id != person_id]
        self.write(config)


class HolidayStore:
    """Holiday intervals, kept in holidays.json."""

    def __init__(self, data_dir: str):
        self.file = JsonFile(os.path.join(data_dir, "holidays.json"))

    def list_holidays(self) -> list[Holiday]:
        return [Holiday.from_dict(h) for h in self.file.read(default=[])]

    def _write(self, holidays: list[Holiday]) -> None:
        self.file.write([h.to_dict() for h in holidays])

    def upsert(self, holiday: Holiday) -> list[Holiday]:
        holidays = self.list_holidays()
        for i, existing in enumerate(holidays):
            if existing.id == holiday.id:
                holidays[i] = holiday
                break
        else:
            holidays.append(holiday)
        self._write(holidays)
        return holidays

    def delete(self, holiday_id: str) -> list[Holiday]:
        holidays = [h for h in self.list_holidays() if h.id != holiday_id]
        self._write(holidays)
        return holidays


class SprintStore:
    """Sprints, kept in sprints.json."""

    def __init__(self, data_dir: str):
        self.file = JsonFile(os.path.join(data_dir, "sprints.json"))

    def _read_raw(self) -> list[dict]:
        return self.file.read(default=[])

    def list_sprints(self, include_completed: bool = True) -> list[Sprint]:
        sprints = [Sprint.from_dict(s) for s in self._read_raw()]
        if not include_completed:
            sprints = [s for s in sprints if not s.is_completed]
        return sprints

    def get(self, sprint_id: str) -> Sprint:
        for sprint in self.list_sprints():
            if sprint.id == sprint_id:
                return sprint
        raise RecordNotFoundError(f"Sprint {sprint_id} not found")

    def upsert(self, data: dict) -> list[Sprint]:
        """
        Create or update a sprint from its JSON form.

        New sprints start as Saved. An update that leaves out the status
        keeps the stored one.
        """
        raw = self._read_raw()
        for i, existing in enumerate(raw):
            if str(existing.get("id")) == str(data["id"]):
                merged = {**existing, **{k: v for k, v in data.items() if v is not None}}
                raw[i] = Sprint.from_dict(merged).to_dict()
                break
        else:
            raw.append(Sprint.from_dict(data).to_dict())

        self.file.write(raw)
        return [Sprint.from_dict(s) for s in raw]

    def set_status(self, sprint_id: str, status: SprintStatus) -> Sprint:
        sprint = self.get(sprint_id)
        sprint.status = status
        self.upsert(sprint.to_dict())
        logger.info("Sprint %s moved to %s", sprint_id, status.value)
        return sprint

    def start_planning(self, sprint_id: str) -> Sprint:
        """
        Move a sprint into planning.

        Raises:
            SprintLockedError: If the sprint is already completed
        """
        sprint = self.get(sprint_id)
        if sprint.is_completed:
            raise SprintLockedError(f"Sprint {sprint_id} is {sprint.status.value} and cannot be reopened")
        return self.set_status(sprint_id, SprintStatus.PLANNING)

    def delete(self, sprint_id: str) -> list[Sprint]:
        """
        Delete a sprint.

        Raises:
            SprintLockedError: If the sprint is no longer in Saved status
        """
        sprints = self.list_sprints()
        current = next((s for s in sprints if s.id == sprint_id), None)
        if current and not current.is_deletable:
            raise SprintLockedError(
                f"Sprint {sprint_id} is {current.status.value}; only "
                f"{SprintStatus.SAVED.value} sprints can be deleted"
            )

        remaining = [s for s in sprints if s.id != sprint_id]
        self.file.write([s.to_dict() for s in remaining])
        return remaining


class PlanningStore:
    """Per-sprint tasks and leaves, one sprintPlanning<id>.json per sprint."""

    def __init__(self, data_dir: str):
        self.data_dir = data_dir

    def _file(self, sprint_id: str) -> JsonFile:
        safe_id = os.path.basename(str(sprint_id))
        return JsonFile(os.path.join(self.data_dir, f"sprintPlanning{safe_id}.json"))

    def read(self, sprint_id: str) -> SprintPlanningData:
        data = self._file(sprint_id).read()
        if not data:
            return SprintPlanningData()
        return SprintPlanningData.from_dict(data)

    def _write(self, sprint_id: str, planning: SprintPlanningData) -> None:
        self._file(sprint_id).write(planning.to_dict())

    def initialize(self, sprint_id: str) -> bool:
        """Create an empty planning file if none exists. Returns True if created."""
        file = self._file(sprint_id)
        if file.exists:
            return False
        self._write(sprint_id, SprintPlanningData())
        return True

    def save_tasks(self, sprint_id: str, tasks: list[SprintPlanningTask]) -> SprintPlanningData:
        planning = self.read(sprint_id)
        planning.tasks = tasks
        self._write(sprint_id, planning)
        return planning

    def save_leaves(self, sprint_id: str, leaves: list[PersonLeave]) -> SprintPlanningData:
        planning = self.read(sprint_id)
        planning.person_leaves = leaves
        self._write(sprint_id, planning)
        return planning


class LookupStore:
    """A plain list of strings with a fallback when the file is missing."""

    def __init__(self, data_dir: str, filename: str, defaults: Optional[list[str]] = None):
        self.file = JsonFile(os.path.join(data_dir, filename))
        self.defaults = defaults or []

    def read(self) -> list[str]:
        return self.file.read(default=list(self.defaults))

    def write(self, values: list[str]) -> list[str]:
        self.file.write(values)
        return values
