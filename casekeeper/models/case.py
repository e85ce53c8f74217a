"""Case data models."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Union

from ..exceptions import NotFoundError
from ..utils.time import format_timestamp, parse_optional_timestamp, utc_now
from .task import Task, new_id, pick


class CaseType(Enum):
    """Kinds of legal matters."""

    LITIGATION = "litigation"
    ARBITRATION = "arbitration"
    SPECIAL_PROJECT = "special_project"
    RETAINER = "retainer"
    DISPUTE_RESOLUTION = "dispute_resolution"


class CaseStatus(Enum):
    """Lifecycle status of a case."""

    ACTIVE = "active"
    DORMANT = "dormant"
    ARCHIVED = "archived"


class PartyType(Enum):
    """Legal person kinds."""

    COMPANY = "company"
    INDIVIDUAL = "individual"


class PartySide(Enum):
    """Which side of a case a party is on; values name the case collections."""

    CLIENT = "clients"
    OPPONENT = "opponents"


class TrashKind(Enum):
    """Deletable entity kinds; values name the case collections."""

    TASK = "tasks"
    LOG = "logs"
    REMINDER = "reminders"
    DEADLINE = "deadlines"


LEGACY_CASE_TYPES = {
    "诉讼": CaseType.LITIGATION,
    "仲裁": CaseType.ARBITRATION,
    "专项法律服务": CaseType.SPECIAL_PROJECT,
    "常年法律顾问": CaseType.RETAINER,
    "争议解决": CaseType.DISPUTE_RESOLUTION,
}


def parse_case_type(value: Optional[str]) -> CaseType:
    """Read a case type, accepting legacy labels."""
    if not value:
        return CaseType.LITIGATION
    if value in LEGACY_CASE_TYPES:
        return LEGACY_CASE_TYPES[value]
    return CaseType(value)


@dataclass
class Party:
    """A client or opponent."""

    id: str
    name: str
    party_type: PartyType = PartyType.COMPANY
    id_code: str = ""  # Credit code or ID card number
    address: str = ""
    note: Optional[str] = None

    @classmethod
    def create(
        cls,
        name: str,
        party_type: PartyType = PartyType.COMPANY,
        id_code: str = "",
        address: str = "",
        note: Optional[str] = None,
    ) -> "Party":
        """Create a party with a new id."""
        return cls(id=new_id(), name=name, party_type=party_type, id_code=id_code, address=address, note=note)

    def matches(self, query: str) -> bool:
        """Case-insensitive name match, or substring of the ID code."""
        return query.lower() in self.name.lower() or query in self.id_code

    def to_dict(self) -> dict[str, Any]:
        result = {
            "id": self.id,
            "name": self.name,
            "type": self.party_type.value,
            "id_code": self.id_code,
            "address": self.address,
        }
        if self.note:
            result["note"] = self.note
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Party":
        return cls(
            id=data["id"],
            name=data.get("name", ""),
            party_type=PartyType(data.get("type", "company")),
            id_code=pick(data, "id_code", "idCode", ""),
            address=data.get("address", ""),
            note=data.get("note"),
        )


@dataclass
class Personnel:
    """A judge, clerk, arbitrator or other contact on a proceeding."""

    id: str
    role: str = ""
    name: str = ""
    contact: str = ""
    note: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "role": self.role,
            "name": self.name,
            "contact": self.contact,
            "note": self.note,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Personnel":
        return cls(
            id=data["id"],
            role=data.get("role", ""),
            name=data.get("name", ""),
            contact=data.get("contact", ""),
            note=data.get("note", ""),
        )


@dataclass
class Proceeding:
    """A litigation stage (e.g., first instance)."""

    id: str
    stage_name: str = ""
    my_role: str = ""
    case_no: str = ""
    court_name: str = ""
    court_address: str = ""
    personnel: list[Personnel] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "stage_name": self.stage_name,
            "my_role": self.my_role,
            "case_no": self.case_no,
            "court_name": self.court_name,
            "court_address": self.court_address,
            "personnel": [p.to_dict() for p in self.personnel],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Proceeding":
        return cls(
            id=data["id"],
            stage_name=pick(data, "stage_name", "stageName", ""),
            my_role=pick(data, "my_role", "myRole", ""),
            case_no=pick(data, "case_no", "caseNo", ""),
            court_name=pick(data, "court_name", "courtName", ""),
            court_address=pick(data, "court_address", "courtAddress", ""),
            personnel=[Personnel.from_dict(p) for p in data.get("personnel") or []],
        )


@dataclass
class Log:
    """A dated case log entry."""

    id: str
    date: datetime
    content: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "date": format_timestamp(self.date), "content": self.content}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Log":
        return cls(
            id=data["id"],
            date=parse_optional_timestamp(data.get("date")) or utc_now(),
            content=data.get("content", ""),
        )


@dataclass
class Reminder:
    """A scheduled reminder (local date and time strings)."""

    id: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    title: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "date": self.date, "time": self.time, "title": self.title}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Reminder":
        return cls(
            id=data["id"],
            date=data.get("date", ""),
            time=data.get("time", ""),
            title=data.get("title", ""),
        )


@dataclass
class Deadline:
    """A filing or procedural deadline."""

    id: str
    date: str  # YYYY-MM-DD
    title: str
    completed: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "date": self.date,
            "title": self.title,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Deadline":
        return cls(
            id=data["id"],
            date=data.get("date", ""),
            title=data.get("title", ""),
            completed=bool(data.get("completed", False)),
        )


CaseEntity = Union[Task, Log, Reminder, Deadline]

ENTITY_TYPES = {
    TrashKind.TASK: Task,
    TrashKind.LOG: Log,
    TrashKind.REMINDER: Reminder,
    TrashKind.DEADLINE: Deadline,
}


@dataclass
class Trash:
    """Soft-deleted entities of one case, newest first."""

    tasks: list[Task] = field(default_factory=list)
    logs: list[Log] = field(default_factory=list)
    reminders: list[Reminder] = field(default_factory=list)
    deadlines: list[Deadline] = field(default_factory=list)

    def items(self, kind: TrashKind) -> list:
        """The trash collection for an entity kind."""
        return getattr(self, kind.value)

    @property
    def is_empty(self) -> bool:
        return not any(self.items(kind) for kind in TrashKind)

    def to_dict(self) -> dict[str, Any]:
        return {kind.value: [e.to_dict() for e in self.items(kind)] for kind in TrashKind}

    @classmethod
    def from_dict(cls, data: Optional[dict[str, Any]]) -> "Trash":
        data = data or {}
        return cls(**{
            kind.value: [ENTITY_TYPES[kind].from_dict(e) for e in data.get(kind.value) or []]
            for kind in TrashKind
        })


@dataclass
class Case:
    """A legal matter with its parties, proceedings, work and trash."""

    id: str
    name: str
    case_type: CaseType = CaseType.LITIGATION
    status: CaseStatus = CaseStatus.ACTIVE
    client_contact_name: str = ""
    client_contact_info: str = ""
    special_project_remarks: str = ""
    clients: list[Party] = field(default_factory=list)
    opponents: list[Party] = field(default_factory=list)
    proceedings: list[Proceeding] = field(default_factory=list)
    tasks: list[Task] = field(default_factory=list)
    logs: list[Log] = field(default_factory=list)
    reminders: list[Reminder] = field(default_factory=list)
    deadlines: list[Deadline] = field(default_factory=list)
    trash: Trash = field(default_factory=Trash)

    @classmethod
    def create(cls, name: str, case_type: CaseType = CaseType.LITIGATION) -> "Case":
        """Create an empty active case with a new id."""
        return cls(id=new_id(), name=name, case_type=case_type)

    def items(self, kind: TrashKind) -> list:
        """The live collection for an entity kind."""
        return getattr(self, kind.value)

    def get_task(self, task_id: str) -> Optional[Task]:
        """Get a live task by ID."""
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def replace_task(self, task: Task) -> "Case":
        """Return a copy of this case with the same-id task swapped in."""
        return replace(self, tasks=[task if t.id == task.id else t for t in self.tasks])

    def add_task(self, task: Task) -> None:
        """Add a task (newest first)."""
        self.tasks.insert(0, task)

    def add_log(self, content: str, date: Optional[datetime] = None) -> Log:
        """Add a log entry (newest first)."""
        log = Log(id=new_id(), date=date or utc_now(), content=content)
        self.logs.insert(0, log)
        return log

    def add_reminder(self, date: str, time: str, title: str) -> Reminder:
        """Add a reminder (newest first)."""
        reminder = Reminder(id=new_id(), date=date, time=time, title=title)
        self.reminders.insert(0, reminder)
        return reminder

    def add_deadline(self, date: str, title: str) -> Deadline:
        """Add a deadline (newest first)."""
        deadline = Deadline(id=new_id(), date=date, title=title)
        self.deadlines.insert(0, deadline)
        return deadline

    @property
    def is_archived(self) -> bool:
        return self.status == CaseStatus.ARCHIVED

    def with_status(self, status: CaseStatus) -> "Case":
        """Return a copy of this case with a new status."""
        return replace(self, status=status)

    def link_party(self, party: Party, side: PartySide) -> None:
        """
        Put a copy of a directory party on one side of the case.

        Linking the same party id again replaces the earlier copy, and a
        party is never on both sides at once.
        """
        for other in PartySide:
            setattr(self, other.value, [p for p in getattr(self, other.value) if p.id != party.id])
        getattr(self, side.value).append(replace(party))

    def get_proceeding(self, proceeding_id: str) -> Optional[Proceeding]:
        for proceeding in self.proceedings:
            if proceeding.id == proceeding_id:
                return proceeding
        return None

    def add_proceeding(
        self,
        stage_name: str,
        my_role: str = "",
        case_no: str = "",
        court_name: str = "",
        court_address: str = "",
    ) -> Proceeding:
        """Add a litigation stage after the existing ones."""
        proceeding = Proceeding(
            id=new_id(),
            stage_name=stage_name,
            my_role=my_role,
            case_no=case_no,
            court_name=court_name,
            court_address=court_address,
        )
        self.proceedings.append(proceeding)
        return proceeding

    def add_personnel(
        self,
        proceeding_id: str,
        role: str,
        name: str,
        contact: str = "",
        note: str = "",
    ) -> Personnel:
        """
        Add a contact (judge, clerk, arbitrator) to a proceeding.

        Raises:
            NotFoundError: If the proceeding does not exist
        """
        proceeding = self.get_proceeding(proceeding_id)
        if proceeding is None:
            raise NotFoundError("proceedings", proceeding_id)

        person = Personnel(id=new_id(), role=role, name=name, contact=contact, note=note)
        proceeding.personnel.append(person)
        return person

    @property
    def running_tasks(self) -> list[Task]:
        return [t for t in self.tasks if t.is_running]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "id": self.id,
            "name": self.name,
            "type": self.case_type.value,
            "status": self.status.value,
            "client_contact_name": self.client_contact_name,
            "client_contact_info": self.client_contact_info,
            "special_project_remarks": self.special_project_remarks,
            "clients": [p.to_dict() for p in self.clients],
            "opponents": [p.to_dict() for p in self.opponents],
            "litigation": {"proceedings": [p.to_dict() for p in self.proceedings]},
            "tasks": [t.to_dict() for t in self.tasks],
            "logs": [log.to_dict() for log in self.logs],
            "reminders": [r.to_dict() for r in self.reminders],
            "deadlines": [d.to_dict() for d in self.deadlines],
            "trash": self.trash.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Case":
        """Create from dictionary, filling absent collections with empty defaults."""
        litigation = data.get("litigation") or {}

        return cls(
            id=data["id"],
            name=data.get("name", ""),
            case_type=parse_case_type(data.get("type")),
            status=CaseStatus(data.get("status", "active")),
            client_contact_name=pick(data, "client_contact_name", "clientContactName", ""),
            client_contact_info=pick(data, "client_contact_info", "clientContactInfo", ""),
            special_project_remarks=pick(
                data, "special_project_remarks", "specialProjectRemarks", ""
            ),
            clients=[Party.from_dict(p) for p in data.get("clients") or []],
            opponents=[Party.from_dict(p) for p in data.get("opponents") or []],
            proceedings=[Proceeding.from_dict(p) for p in litigation.get("proceedings") or []],
            tasks=[Task.from_dict(t) for t in data.get("tasks") or []],
            logs=[Log.from_dict(log) for log in data.get("logs") or []],
            reminders=[Reminder.from_dict(r) for r in data.get("reminders") or []],
            deadlines=[Deadline.from_dict(d) for d in data.get("deadlines") or []],
            trash=Trash.from_dict(data.get("trash")),
        )
