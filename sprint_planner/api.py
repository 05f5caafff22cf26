"""
FastAPI Backend for Sprint Planner

Provides REST API over the flat-file stores plus the capacity and
remaining-effort calculations.
"""

import logging
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import APIRouter, Body, Depends, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .analyzer import EffortAnalyzer, SprintEffortSummary
from .calendar import holiday_templates
from .capacity import FormatError, SprintCapacity, calculate_sprint_capacity
from .config import Config
from .models import (
    AppConfig,
    Holiday,
    LeaveType,
    Person,
    PersonLeave,
    Role,
    Sprint,
    SprintPlanningTask,
    SprintStatus,
    TaskStatus,
)
from .store import (
    DEFAULT_COMPONENTS,
    DEFAULT_SPRINT_END_TARGETS,
    ConfigStore,
    DuplicateRecordError,
    HolidayStore,
    LookupStore,
    PlanningStore,
    RecordNotFoundError,
    SprintLockedError,
    SprintStore,
)
from .visualizer import Visualizer


logger = logging.getLogger(__name__)


@dataclass
class Stores:
    """Everything a request handler needs, built once per app."""
    config: Config
    app_config: ConfigStore
    holidays: HolidayStore
    sprints: SprintStore
    planning: PlanningStore
    components: LookupStore
    sprint_end_targets: LookupStore

    @classmethod
    def from_config(cls, config: Config) -> "Stores":
        data_dir = config.data_dir
        return cls(
            config=config,
            app_config=ConfigStore(data_dir, default_daily_hour=config.default_daily_hour),
            holidays=HolidayStore(data_dir),
            sprints=SprintStore(data_dir),
            planning=PlanningStore(data_dir),
            components=LookupStore(data_dir, "components.json", DEFAULT_COMPONENTS),
            sprint_end_targets=LookupStore(data_dir, "sprintEndTargets.json", DEFAULT_SPRINT_END_TARGETS)
        )


def get_stores(request: Request) -> Stores:
    return request.app.state.stores


analyzer = EffortAnalyzer()
visualizer = Visualizer()


def _new_id() -> str:
    return str(uuid4())


# Pydantic models for API
class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def _require_text(value: str) -> str:
    if not value or not value.strip():
        raise ValueError("must not be blank")
    return value.strip()


class PersonIn(CamelModel):
    id: str = Field(default_factory=_new_id)
    first_name: str
    last_name: str
    role: Role
    ldap: str

    @field_validator("first_name", "last_name", "ldap")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)


class ConfigIn(CamelModel):
    daily_planning_hour: str
    people: list[PersonIn] = Field(default_factory=list)


class HolidayIn(CamelModel):
    id: str = Field(default_factory=_new_id)
    name: str
    start_date: date
    end_date: date

    @field_validator("name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)


class SprintIn(CamelModel):
    id: str = Field(default_factory=_new_id)
    name: str
    start_date: date
    end_date: date
    status: Optional[SprintStatus] = None

    @field_validator("name")
    @classmethod
    def not_blank(cls, value: str) -> str:
        return _require_text(value)


class TaskIn(CamelModel):
    id: str = Field(default_factory=_new_id)
    task_name: str = ""
    sp: float = 0
    sprint_end_target: str = ""
    current_status: TaskStatus = TaskStatus.NOT_STARTED
    responsible_analyst: list[str] = Field(default_factory=list)
    responsible_developer: list[str] = Field(default_factory=list)
    delay_reason: str = ""
    analysis_cost: float = 0
    software_cost: float = 0
    analysis_task_sp: float = Field(0, alias="analysisTaskSP")
    software_task_sp: float = Field(0, alias="softwareTaskSP")
    test_task_sp: float = Field(0, alias="testTaskSP")
    component: str = ""


class LeaveIn(CamelModel):
    id: str = Field(default_factory=_new_id)
    person_id: str
    type: LeaveType = LeaveType.LEAVE
    hours: float = Field(0, ge=0)
    description: str = ""


def _check_people_exist(stores: Stores, person_ids: set[str]) -> None:
    """Reject references to people who are not configured."""
    known = {p.id for p in stores.app_config.list_people()}
    unknown = sorted(person_ids - known)
    if unknown:
        logger.warning("Rejected unknown person id(s): %s", ", ".join(unknown))
        raise HTTPException(status_code=400, detail=f"Unknown person id(s): {', '.join(unknown)}")


def _get_sprint(stores: Stores, sprint_id: str) -> Sprint:
    try:
        return stores.sprints.get(sprint_id)
    except RecordNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


def _sprint_capacity(stores: Stores, sprint: Sprint, include_holidays: Optional[bool]) -> SprintCapacity:
    if include_holidays is None:
        include_holidays = stores.config.include_holidays
    try:
        return calculate_sprint_capacity(
            sprint,
            stores.app_config.read().daily_planning_hour,
            stores.holidays.list_holidays(),
            include_holidays
        )
    except FormatError as e:
        raise HTTPException(status_code=500, detail=f"Stored config is invalid: {e}")


def _sprint_effort(
    stores: Stores,
    sprint_id: str,
    include_holidays: Optional[bool]
) -> tuple[Sprint, SprintCapacity, SprintEffortSummary]:
    sprint = _get_sprint(stores, sprint_id)
    capacity = _sprint_capacity(stores, sprint, include_holidays)
    planning = stores.planning.read(sprint_id)

    summary = analyzer.analyze(
        sprint_hours=capacity.planned_hours,
        tasks=planning.tasks,
        leaves=planning.person_leaves,
        people=stores.app_config.list_people()
    )
    return sprint, capacity, summary


router = APIRouter()


# Health check
@router.get("/health")
async def health_check(stores: Stores = Depends(get_stores)):
    """Health check endpoint."""
    return {
        "status": "healthy",
        "timestamp": datetime.now().isoformat(),
        "data_dir": stores.config.data_dir
    }


# Config endpoints
@router.get("/api/config")
async def get_config(stores: Stores = Depends(get_stores)):
    """Get daily planning hour and people."""
    return stores.app_config.read().to_dict()


@router.put("/api/config")
async def put_config(body: ConfigIn, stores: Stores = Depends(get_stores)):
    """Replace the config. The daily planning hour must be HH:mm."""
    try:
        stores.app_config.write(AppConfig.from_dict(body.to_record()))
    except FormatError as e:
        logger.warning("Rejected config update: %s", e)
        raise HTTPException(status_code=400, detail="dailyPlanningHour format HH:mm")
    return {"ok": True}


# People endpoints
@router.get("/api/people")
async def list_people(stores: Stores = Depends(get_stores)):
    return [p.to_dict() for p in stores.app_config.list_people()]


@router.post("/api/people", status_code=201)
async def create_person(body: PersonIn, stores: Stores = Depends(get_stores)):
    try:
        person = stores.app_config.add_person(Person.from_dict(body.to_record()))
    except DuplicateRecordError:
        raise HTTPException(status_code=409, detail="Person already exists")
    return person.to_dict()


@router.put("/api/people")
async def update_person(body: PersonIn, stores: Stores = Depends(get_stores)):
    try:
        person = stores.app_config.update_person(Person.from_dict(body.to_record()))
    except RecordNotFoundError:
        raise HTTPException(status_code=404, detail="Not found")
    return person.to_dict()


@router.delete("/api/people")
async def delete_person(id: Optional[str] = None, stores: Stores = Depends(get_stores)):
    if not id:
        raise HTTPException(status_code=400, detail="id required")
    stores.app_config.delete_person(id)
    return {"ok": True}


# Holiday endpoints
@router.get("/api/holidays")
async def list_holidays(stores: Stores = Depends(get_stores)):
    return [h.to_dict() for h in stores.holidays.list_holidays()]


@router.get("/api/holidays/templates")
async def get_holiday_templates(year: Optional[int] = None):
    """Fixed-date national holidays for a year, ready to POST."""
    return holiday_templates(year or date.today().year)


@router.post("/api/holidays", status_code=201)
async def create_holiday(body: HolidayIn, stores: Stores = Depends(get_stores)):
    holidays = stores.holidays.upsert(Holiday.from_dict(body.to_record()))
    return [h.to_dict() for h in holidays]


@router.put("/api/holidays")
async def update_holiday(body: HolidayIn, stores: Stores = Depends(get_stores)):
    holidays = stores.holidays.upsert(Holiday.from_dict(body.to_record()))
    return [h.to_dict() for h in holidays]


@router.delete("/api/holidays")
async def delete_holiday(id: Optional[str] = None, stores: Stores = Depends(get_stores)):
    if not id:
        raise HTTPException(status_code=400, detail="id required")
    return [h.to_dict() for h in stores.holidays.delete(id)]


# Sprint endpoints
@router.get("/api/sprints")
async def list_sprints(include_completed: bool = True, stores: Stores = Depends(get_stores)):
    return [s.to_dict() for s in stores.sprints.list_sprints(include_completed=include_completed)]


@router.post("/api/sprints", status_code=201)
async def create_sprint(body: SprintIn, stores: Stores = Depends(get_stores)):
    return [s.to_dict() for s in stores.sprints.upsert(body.to_record())]


@router.put("/api/sprints")
async def update_sprint(body: SprintIn, stores: Stores = Depends(get_stores)):
    return [s.to_dict() for s in stores.sprints.upsert(body.to_record())]


@router.delete("/api/sprints")
async def delete_sprint(id: Optional[str] = None, stores: Stores = Depends(get_stores)):
    if not id:
        raise HTTPException(status_code=400, detail="id required")
    try:
        sprints = stores.sprints.delete(id)
    except SprintLockedError as e:
        logger.warning("Refused to delete sprint: %s", e)
        raise HTTPException(
            status_code=409,
            detail=f"Only {SprintStatus.SAVED.value} sprints can be deleted"
        )
    return [s.to_dict() for s in sprints]


@router.post("/api/sprints/{sprint_id}/start-planning")
async def start_planning(sprint_id: str, stores: Stores = Depends(get_stores)):
    """Move a sprint into planning and create its planning file."""
    _get_sprint(stores, sprint_id)
    try:
        sprint = stores.sprints.start_planning(sprint_id)
    except SprintLockedError as e:
        logger.warning("Refused to start planning: %s", e)
        raise HTTPException(status_code=409, detail=str(e))
    stores.planning.initialize(sprint_id)
    return sprint.to_dict()


# Capacity endpoints
@router.get("/api/sprints/capacity")
async def list_sprint_capacity(
    include_holidays: Optional[bool] = None,
    stores: Stores = Depends(get_stores)
):
    """Business days and planned hours for every sprint."""
    return [
        _sprint_capacity(stores, sprint, include_holidays).to_dict()
        for sprint in stores.sprints.list_sprints()
    ]


@router.get("/api/sprints/{sprint_id}/capacity")
async def get_sprint_capacity(
    sprint_id: str,
    include_holidays: Optional[bool] = None,
    stores: Stores = Depends(get_stores)
):
    sprint = _get_sprint(stores, sprint_id)
    return _sprint_capacity(stores, sprint, include_holidays).to_dict()


# Sprint planning endpoints
@router.get("/api/sprint-planning/{sprint_id}")
async def get_planning_tasks(sprint_id: str, stores: Stores = Depends(get_stores)):
    return [t.to_dict() for t in stores.planning.read(sprint_id).tasks]


@router.post("/api/sprint-planning/{sprint_id}")
async def save_planning_tasks(
    sprint_id: str,
    body: list[TaskIn],
    stores: Stores = Depends(get_stores)
):
    """Replace the sprint's tasks, keeping its leaves."""
    tasks = [SprintPlanningTask.from_dict(t.to_record()) for t in body]

    referenced = set()
    for task in tasks:
        referenced |= task.responsible_people
    _check_people_exist(stores, referenced)

    stores.planning.save_tasks(sprint_id, tasks)
    return {"success": True}


@router.put("/api/sprint-planning/{sprint_id}")
async def initialize_planning(sprint_id: str, stores: Stores = Depends(get_stores)):
    stores.planning.initialize(sprint_id)
    return {"initialized": True}


@router.get("/api/sprint-planning/{sprint_id}/leaves")
async def get_planning_leaves(sprint_id: str, stores: Stores = Depends(get_stores)):
    return [l.to_dict() for l in stores.planning.read(sprint_id).person_leaves]


@router.post("/api/sprint-planning/{sprint_id}/leaves")
async def save_planning_leaves(
    sprint_id: str,
    body: list[LeaveIn],
    stores: Stores = Depends(get_stores)
):
    """Replace the sprint's person leaves, keeping its tasks."""
    leaves = [PersonLeave.from_dict(l.to_record()) for l in body]
    _check_people_exist(stores, {l.person_id for l in leaves})

    stores.planning.save_leaves(sprint_id, leaves)
    return {"success": True}


@router.get("/api/sprint-planning/{sprint_id}/effort")
async def get_sprint_effort(
    sprint_id: str,
    include_holidays: Optional[bool] = None,
    stores: Stores = Depends(get_stores)
):
    """Planned, leave and remaining hours per person."""
    sprint, capacity, summary = _sprint_effort(stores, sprint_id, include_holidays)
    return {
        "sprint": sprint.to_dict(),
        "capacity": capacity.to_dict(),
        **summary.to_dict()
    }


# Report endpoints
@router.get("/api/reports/effort/{sprint_id}/text")
async def get_effort_text_report(
    sprint_id: str,
    locale: Optional[str] = None,
    include_holidays: Optional[bool] = None,
    stores: Stores = Depends(get_stores)
):
    sprint, _, summary = _sprint_effort(stores, sprint_id, include_holidays)
    report = visualizer.effort_report(
        summary, sprint.name, format="text", locale=locale or stores.config.locale
    )
    return {"report": report}


@router.get("/api/reports/effort/{sprint_id}/html", response_class=HTMLResponse)
async def get_effort_html_report(
    sprint_id: str,
    locale: Optional[str] = None,
    include_holidays: Optional[bool] = None,
    stores: Stores = Depends(get_stores)
):
    sprint, _, summary = _sprint_effort(stores, sprint_id, include_holidays)
    return visualizer.effort_report(
        summary, sprint.name, format="html", locale=locale or stores.config.locale
    )


@router.get("/api/reports/capacity/text")
async def get_capacity_text_report(
    locale: Optional[str] = None,
    include_holidays: Optional[bool] = None,
    stores: Stores = Depends(get_stores)
):
    capacities = [
        _sprint_capacity(stores, sprint, include_holidays)
        for sprint in stores.sprints.list_sprints()
    ]
    return {"report": visualizer.capacity_report(capacities, locale or stores.config.locale)}


# Lookup endpoints
@router.get("/api/current-statuses")
async def get_current_statuses():
    return [status.value for status in TaskStatus]


@router.get("/api/components")
async def get_components(stores: Stores = Depends(get_stores)):
    return stores.components.read()


@router.post("/api/components")
async def save_components(body: list[str] = Body(...), stores: Stores = Depends(get_stores)):
    return stores.components.write(body)


@router.get("/api/sprint-end-targets")
async def get_sprint_end_targets(stores: Stores = Depends(get_stores)):
    return stores.sprint_end_targets.read()


@router.post("/api/sprint-end-targets")
async def save_sprint_end_targets(body: list[str] = Body(...), stores: Stores = Depends(get_stores)):
    return stores.sprint_end_targets.write(body)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


def create_app(config: Optional[Config] = None) -> FastAPI:
    """
    Build the API application.

    Args:
        config: Service configuration, loaded from config/config.yaml when omitted
    """
    config = config or Config()

    # Lifespan context manager
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup and shutdown events."""
        configure_logging(config.log_level)
        logger.info("Sprint Planner API starting up, data dir %s", config.data_dir)
        yield
        logger.info("Sprint Planner API shutting down")

    app = FastAPI(
        title="Sprint Planner",
        description="API for sprint capacity and remaining-effort planning",
        version="1.0.0",
        lifespan=lifespan
    )
    app.state.stores = Stores.from_config(config)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


app = create_app()


# Run with: uvicorn sprint_planner.api:app --reload
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
