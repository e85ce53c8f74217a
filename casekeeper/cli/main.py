"""casekeeper CLI - Legal case and billable time tracker."""

import time
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.live import Live
from rich.table import Table
from rich.text import Text

from .. import __version__
from ..config.settings import get_settings
from ..exceptions import InvalidRangeError, NotFoundError, SnapshotError
from ..models import (
    AppData,
    Case,
    CaseStatus,
    CaseType,
    Party,
    PartySide,
    PartyType,
    Task,
    TaskType,
    TrashKind,
)
from ..storage import SnapshotStore, TimerRefStore
from ..utils.logging import get_logger, setup_logging
from ..utils.time import format_datetime, format_duration, utc_now

app = typer.Typer(
    name="casekeeper",
    help="Legal case manager with billable time tracking.",
    no_args_is_help=True,
)
case_app = typer.Typer(help="Create, list, archive and delete cases.", no_args_is_help=True)
task_app = typer.Typer(help="Track time on tasks.", no_args_is_help=True)
log_app = typer.Typer(help="Case log entries.", no_args_is_help=True)
reminder_app = typer.Typer(help="Case reminders.", no_args_is_help=True)
deadline_app = typer.Typer(help="Case deadlines.", no_args_is_help=True)
trash_app = typer.Typer(help="Soft-deleted items.", no_args_is_help=True)
timer_app = typer.Typer(help="The running timer.", no_args_is_help=True)
export_app = typer.Typer(help="Export data.", no_args_is_help=True)
party_app = typer.Typer(help="The party directory (clients, opponents).", no_args_is_help=True)
proceeding_app = typer.Typer(help="Litigation stages and their personnel.", no_args_is_help=True)

app.add_typer(case_app, name="case")
app.add_typer(task_app, name="task")
app.add_typer(log_app, name="log")
app.add_typer(reminder_app, name="reminder")
app.add_typer(deadline_app, name="deadline")
app.add_typer(trash_app, name="trash")
app.add_typer(timer_app, name="timer")
app.add_typer(export_app, name="export")
app.add_typer(party_app, name="party")
app.add_typer(proceeding_app, name="proceeding")

console = Console()
logger = get_logger(__name__)


@app.callback()
def _configure_logging(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log timer decisions at DEBUG level"),
    plain: bool = typer.Option(False, "--plain", help="Plain log lines on stderr instead of Rich output"),
):
    settings = get_settings()
    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_file=settings.log_file,
        rich_output=not plain,
    )


def _store() -> SnapshotStore:
    return SnapshotStore(get_settings().data_file)


def _load(store: SnapshotStore) -> AppData:
    try:
        return store.load()
    except SnapshotError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


def _require_case(data: AppData, case_id: str) -> Case:
    case = data.get_case(case_id)
    if case is None:
        console.print(f"[red]Error: Case not found: {case_id}[/red]")
        raise typer.Exit(1)
    return case


def _require_task(case: Case, task_id: str) -> Task:
    task = case.get_task(task_id)
    if task is None:
        console.print(f"[red]Error: Task not found: {task_id}[/red]")
        raise typer.Exit(1)
    return task


def _require_party(data: AppData, party_id: str) -> Party:
    party = data.get_party(party_id)
    if party is None:
        console.print(f"[red]Error: Party not found: {party_id}[/red]")
        raise typer.Exit(1)
    return party


def _update_task(case_id: str, task_id: str, operation) -> Task:
    """Load, apply one timer operation to a task, save. Returns the new task."""
    store = _store()
    data = _load(store)
    case = _require_case(data, case_id)
    task = operation(_require_task(case, task_id))
    data.replace_case(case.replace_task(task))
    store.save(data)
    return task


def _task_state(task: Task) -> str:
    if task.is_completed:
        return "[green]completed[/green]"
    if task.is_running:
        return "[yellow]running[/yellow]"
    return "open"


# ---- cases ----


@case_app.command("add")
def case_add(
    name: str = typer.Argument(..., help="Case name"),
    case_type: CaseType = typer.Option(
        CaseType.LITIGATION,
        "--type", "-t",
        help="Kind of matter",
    ),
):
    """Create a new case."""
    store = _store()
    data = _load(store)
    case = Case.create(name, case_type)
    data.add_case(case)
    store.save(data)
    console.print(f"Created case [bold]{case.id}[/bold]: {name}")


@case_app.command("list")
def case_list(
    show_all: bool = typer.Option(False, "--all", "-a", help="Include archived cases"),
):
    """List open cases (active and dormant)."""
    data = _load(_store())
    cases = data.cases if show_all else data.open_cases

    if not cases:
        console.print("No cases yet." if not data.cases else "No open cases.")
        return

    table = Table(title=f"Cases ({len(cases)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Status")
    table.add_column("Tasks", justify="right")

    for case in cases:
        table.add_row(case.id, case.name, case.case_type.value, case.status.value, str(len(case.tasks)))

    console.print(table)


@case_app.command("archived")
def case_archived():
    """List archived cases."""
    data = _load(_store())

    if not data.archived_cases:
        console.print("No archived cases.")
        return

    table = Table(title=f"Archived cases ({len(data.archived_cases)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type")

    for case in data.archived_cases:
        table.add_row(case.id, case.name, case.case_type.value)

    console.print(table)
    console.print("[dim]Restore with: casekeeper case set-status CASE_ID active[/dim]")


@case_app.command("set-status")
def case_set_status(
    case_id: str = typer.Argument(..., help="Case ID"),
    new_status: CaseStatus = typer.Argument(..., help="active, dormant or archived"),
):
    """Change a case's status (archiving, or restoring from the archive)."""
    store = _store()
    data = _load(store)
    case = _require_case(data, case_id)

    if case.status == new_status:
        console.print(f"Case {case_id} is already {new_status.value}")
        return

    data.set_case_status(case_id, new_status)
    store.save(data)
    logger.info(f"Case {case_id} status {case.status.value} -> {new_status.value}")
    console.print(f"Case [bold]{case_id}[/bold]: {case.status.value} -> {new_status.value}")


@case_app.command("delete")
def case_delete(
    case_id: str = typer.Argument(..., help="Case ID"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """
    Permanently delete a case with all its tasks, logs and trash.

    Unlike 'trash delete', this cannot be undone.
    """
    store = _store()
    data = _load(store)
    case = _require_case(data, case_id)

    if not yes and not typer.confirm(f"Delete case '{case.name}' and everything in it?"):
        console.print("Cancelled")
        raise typer.Exit(1)

    data.remove_case(case_id)
    store.save(data)
    logger.info(f"Deleted case {case_id} ({len(case.tasks)} tasks)")
    console.print(f"Deleted case [bold]{case_id}[/bold]: {case.name}")


@case_app.command("link-party")
def case_link_party(
    case_id: str = typer.Argument(..., help="Case ID"),
    party_id: str = typer.Argument(..., help="Party ID from the directory"),
    side: PartySide = typer.Option(PartySide.CLIENT, "--as", help="clients or opponents"),
):
    """Add a directory party to a case as client or opponent."""
    store = _store()
    data = _load(store)
    case = _require_case(data, case_id)
    party = _require_party(data, party_id)

    case.link_party(party, side)
    store.save(data)
    console.print(f"Linked {party.name} to {case.name} as {side.value[:-1]}")


@app.command()
def status(
    case_id: str = typer.Argument(..., help="Case ID"),
):
    """
    Show a case with its tracked time and trash contents.
    """
    from ..tracking import task_duration

    data = _load(_store())
    case = _require_case(data, case_id)
    now = utc_now()

    console.print(f"\n[bold]Case: {case.name}[/bold] ({case.id})")
    console.print(f"Type: {case.case_type.value}  Status: {case.status.value}")

    for side in PartySide:
        names = ", ".join(p.name for p in getattr(case, side.value))
        if names:
            console.print(f"{side.value.capitalize()}: {names}")
    for proceeding in case.proceedings:
        court = f" at {proceeding.court_name}" if proceeding.court_name else ""
        console.print(f"Proceeding: {proceeding.stage_name}{court} [dim]({proceeding.id})[/dim]")

    total = sum(task_duration(t, now) for t in case.tasks)
    console.print(f"\nTasks: {len(case.tasks)}")
    console.print(f"  Running: {len(case.running_tasks)}")
    console.print(f"  Completed: {sum(1 for t in case.tasks if t.is_completed)}")
    console.print(f"  Tracked time: {format_duration(total)}")

    console.print(f"Logs: {len(case.logs)}")
    console.print(f"Reminders: {len(case.reminders)}")
    console.print(f"Deadlines: {len(case.deadlines)}")

    if not case.trash.is_empty:
        counts = ", ".join(
            f"{len(case.trash.items(kind))} {kind.value}" for kind in TrashKind if case.trash.items(kind)
        )
        console.print(f"\n[dim]Trash: {counts}[/dim]")


# ---- tasks ----


@task_app.command("add")
def task_add(
    case_id: str = typer.Argument(..., help="Case ID"),
    desc: str = typer.Argument(..., help="What the work is"),
    task_type: TaskType = typer.Option(TaskType.DOCUMENT, "--type", "-t", help="Kind of work"),
    assignee: str = typer.Option("", "--assignee", "-a", help="Who does the work"),
):
    """Add a task to a case."""
    store = _store()
    data = _load(store)
    case = _require_case(data, case_id)
    task = Task.create(desc=desc, task_type=task_type, assignee=assignee)
    case.add_task(task)
    store.save(data)
    console.print(f"Added task [bold]{task.id}[/bold]: {desc}")


@task_app.command("list")
def task_list(
    case_id: str = typer.Argument(..., help="Case ID"),
):
    """List the tasks of a case with tracked time."""
    from ..tracking import task_duration

    data = _load(_store())
    case = _require_case(data, case_id)
    now = utc_now()

    table = Table(title=f"Tasks: {case.name}")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Description")
    table.add_column("State")
    table.add_column("Sessions", justify="right")
    table.add_column("Time", justify="right")

    for task in case.tasks:
        table.add_row(
            task.id,
            task.type_label,
            task.desc,
            _task_state(task),
            str(len(task.sessions)),
            format_duration(task_duration(task, now)),
        )

    console.print(table)


@task_app.command("start")
def task_start(
    case_id: str = typer.Argument(..., help="Case ID"),
    task_id: str = typer.Argument(..., help="Task ID"),
):
    """
    Start the timer on a task.

    Any other running task is paused first.
    """
    from ..tracking import running_tasks, start_timer

    store = _store()
    data = _load(store)
    case = _require_case(data, case_id)
    task = _require_task(case, task_id)

    if task.is_completed:
        console.print(f"[yellow]Task {task_id} is completed; reopen it first.[/yellow]")
        return

    paused = [timer for timer, _ in running_tasks(data.cases) if timer.task.id != task_id]
    data = data.with_cases(start_timer(data.cases, case_id, task_id))
    store.save(data)

    for other in paused:
        console.print(f"Paused {other.task.id} ({other.case.name})")
    console.print(f"[green]Started[/green] {task_id}")


@task_app.command("pause")
def task_pause(
    case_id: str = typer.Argument(..., help="Case ID"),
    task_id: str = typer.Argument(..., help="Task ID"),
):
    """Pause a running task."""
    from ..tracking import pause_task, task_duration

    task = _update_task(case_id, task_id, pause_task)
    console.print(f"Paused {task_id} at {format_duration(task_duration(task))}")


@task_app.command("complete")
def task_complete(
    case_id: str = typer.Argument(..., help="Case ID"),
    task_id: str = typer.Argument(..., help="Task ID"),
):
    """Mark a task completed, stopping its timer."""
    from ..tracking import complete_task, task_duration

    task = _update_task(case_id, task_id, complete_task)
    console.print(f"[green]Completed[/green] {task_id} ({format_duration(task_duration(task))})")


@task_app.command("reopen")
def task_reopen(
    case_id: str = typer.Argument(..., help="Case ID"),
    task_id: str = typer.Argument(..., help="Task ID"),
):
    """Reopen a completed task. The timer is not restarted."""
    from ..tracking import reopen_task

    _update_task(case_id, task_id, reopen_task)
    console.print(f"Reopened {task_id}")


@task_app.command("add-time")
def task_add_time(
    case_id: str = typer.Argument(..., help="Case ID"),
    task_id: str = typer.Argument(..., help="Task ID"),
    start: str = typer.Argument(..., help="Start, e.g. 2025-01-15T09:00 (local time)"),
    end: str = typer.Argument(..., help="End, e.g. 2025-01-15T10:30 (local time)"),
):
    """Record a work session entered by hand."""
    from ..tracking import add_manual_session, task_duration

    try:
        task = _update_task(case_id, task_id, lambda t: add_manual_session(t, start, end))
    except InvalidRangeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"Added session to {task_id}; total {format_duration(task_duration(task))}")


# ---- logs, reminders, deadlines ----


@log_app.command("add")
def log_add(
    case_id: str = typer.Argument(..., help="Case ID"),
    content: str = typer.Argument(..., help="Log text"),
):
    """Add a log entry to a case."""
    if not content.strip():
        console.print("[red]Error: Log text is empty[/red]")
        raise typer.Exit(1)

    store = _store()
    data = _load(store)
    log = _require_case(data, case_id).add_log(content)
    store.save(data)
    console.print(f"Added log [bold]{log.id}[/bold]")


@reminder_app.command("add")
def reminder_add(
    case_id: str = typer.Argument(..., help="Case ID"),
    date: str = typer.Argument(..., help="Date (YYYY-MM-DD)"),
    at: str = typer.Argument(..., help="Time (HH:MM)"),
    title: str = typer.Argument(..., help="What to remember"),
):
    """Add a reminder to a case."""
    store = _store()
    data = _load(store)
    reminder = _require_case(data, case_id).add_reminder(date, at, title)
    store.save(data)
    console.print(f"Added reminder [bold]{reminder.id}[/bold]")


@deadline_app.command("add")
def deadline_add(
    case_id: str = typer.Argument(..., help="Case ID"),
    date: str = typer.Argument(..., help="Date (YYYY-MM-DD)"),
    title: str = typer.Argument(..., help="Deadline description"),
):
    """Add a deadline to a case."""
    store = _store()
    data = _load(store)
    deadline = _require_case(data, case_id).add_deadline(date, title)
    store.save(data)
    console.print(f"Added deadline [bold]{deadline.id}[/bold]")


# ---- party directory ----


@party_app.command("add")
def party_add(
    name: str = typer.Argument(..., help="Party name"),
    party_type: PartyType = typer.Option(PartyType.COMPANY, "--type", "-t", help="company or individual"),
    id_code: str = typer.Option("", "--id-code", help="Credit code or ID card number"),
    address: str = typer.Option("", "--address", help="Registered address"),
    note: Optional[str] = typer.Option(None, "--note", help="Free-form note"),
):
    """Add a party to the directory."""
    if not name.strip():
        console.print("[red]Error: Party name is empty[/red]")
        raise typer.Exit(1)

    store = _store()
    data = _load(store)
    party = Party.create(name, party_type, id_code=id_code, address=address, note=note)
    data.add_party(party)
    store.save(data)
    console.print(f"Added party [bold]{party.id}[/bold]: {name}")


@party_app.command("list")
def party_list(
    search: str = typer.Option("", "--search", "-s", help="Filter by name or ID code"),
):
    """List directory parties, sorted by name."""
    data = _load(_store())
    parties = data.search_parties(search)

    if not parties:
        console.print("No parties found.")
        return

    table = Table(title=f"Parties ({len(parties)})")
    table.add_column("ID", style="cyan")
    table.add_column("Type")
    table.add_column("Name")
    table.add_column("ID Code")
    table.add_column("Address")

    for party in parties:
        table.add_row(party.id, party.party_type.value, party.name, party.id_code, party.address)

    console.print(table)


@party_app.command("edit")
def party_edit(
    party_id: str = typer.Argument(..., help="Party ID"),
    name: Optional[str] = typer.Option(None, "--name", help="New name"),
    party_type: Optional[PartyType] = typer.Option(None, "--type", "-t", help="company or individual"),
    id_code: Optional[str] = typer.Option(None, "--id-code", help="New ID code"),
    address: Optional[str] = typer.Option(None, "--address", help="New address"),
    note: Optional[str] = typer.Option(None, "--note", help="New note"),
):
    """
    Edit a directory party. Only the given fields change.

    Cases already linked to the party keep their own copy.
    """
    changes = {
        "name": name,
        "party_type": party_type,
        "id_code": id_code,
        "address": address,
        "note": note,
    }
    changes = {k: v for k, v in changes.items() if v is not None}
    if not changes:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    store = _store()
    data = _load(store)
    party = replace(_require_party(data, party_id), **changes)
    data.replace_party(party)
    store.save(data)
    console.print(f"Updated party [bold]{party_id}[/bold]: {', '.join(changes)}")


@party_app.command("delete")
def party_delete(
    party_id: str = typer.Argument(..., help="Party ID"),
):
    """Remove a party from the directory."""
    store = _store()
    data = _load(store)
    party = _require_party(data, party_id)

    data.remove_party(party_id)
    store.save(data)
    console.print(f"Deleted party [bold]{party_id}[/bold]: {party.name}")


# ---- proceedings ----


@proceeding_app.command("add")
def proceeding_add(
    case_id: str = typer.Argument(..., help="Case ID"),
    stage_name: str = typer.Argument(..., help="Stage, e.g. 'First instance'"),
    my_role: str = typer.Option("", "--role", help="Our client's role, e.g. plaintiff"),
    case_no: str = typer.Option("", "--case-no", help="Court case number"),
    court_name: str = typer.Option("", "--court", help="Court or tribunal"),
    court_address: str = typer.Option("", "--court-address", help="Court address"),
):
    """Add a litigation stage to a case."""
    store = _store()
    data = _load(store)
    proceeding = _require_case(data, case_id).add_proceeding(
        stage_name,
        my_role=my_role,
        case_no=case_no,
        court_name=court_name,
        court_address=court_address,
    )
    store.save(data)
    console.print(f"Added proceeding [bold]{proceeding.id}[/bold]: {stage_name}")


@proceeding_app.command("list")
def proceeding_list(
    case_id: str = typer.Argument(..., help="Case ID"),
):
    """Show a case's proceedings with their personnel."""
    case = _require_case(_load(_store()), case_id)

    if not case.proceedings:
        console.print("No proceedings.")
        return

    for proceeding in case.proceedings:
        console.print(f"\n[bold]{proceeding.stage_name}[/bold] [dim]({proceeding.id})[/dim]")
        if proceeding.case_no:
            console.print(f"  Case no.: {proceeding.case_no}")
        if proceeding.court_name:
            console.print(f"  Court: {proceeding.court_name}")
        if proceeding.my_role:
            console.print(f"  Our role: {proceeding.my_role}")
        for person in proceeding.personnel:
            contact = f" - {person.contact}" if person.contact else ""
            console.print(f"  {person.role}: {person.name}{contact}")


@proceeding_app.command("add-personnel")
def proceeding_add_personnel(
    case_id: str = typer.Argument(..., help="Case ID"),
    proceeding_id: str = typer.Argument(..., help="Proceeding ID"),
    role: str = typer.Argument(..., help="Role, e.g. judge or clerk"),
    name: str = typer.Argument(..., help="Name"),
    contact: str = typer.Option("", "--contact", help="Phone or email"),
    note: str = typer.Option("", "--note", help="Free-form note"),
):
    """Add a judge, clerk or other contact to a proceeding."""
    store = _store()
    data = _load(store)
    case = _require_case(data, case_id)

    try:
        person = case.add_personnel(proceeding_id, role, name, contact=contact, note=note)
    except NotFoundError as e:
        logger.warning(str(e))
        console.print(f"[red]Error: Proceeding not found: {proceeding_id}[/red]")
        raise typer.Exit(1)

    store.save(data)
    console.print(f"Added {role} [bold]{name}[/bold] ({person.id})")


# ---- trash ----


def _trash_move(kind: str, case_id: str, item_id: str, operation, verb: str) -> None:
    store = _store()
    data = _load(store)
    case = _require_case(data, case_id)

    try:
        data.replace_case(operation(case, kind, item_id))
    except NotFoundError as e:
        logger.warning(str(e))
        raise typer.Exit(1)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    store.save(data)
    console.print(f"{verb} {kind} {item_id}")


@trash_app.command("delete")
def trash_delete(
    kind: str = typer.Argument(..., help="task, log, reminder or deadline"),
    case_id: str = typer.Argument(..., help="Case ID"),
    item_id: str = typer.Argument(..., help="Item ID"),
):
    """Move an item to the case trash."""
    from ..trash import soft_delete

    _trash_move(kind, case_id, item_id, soft_delete, "Trashed")


@trash_app.command("restore")
def trash_restore(
    kind: str = typer.Argument(..., help="task, log, reminder or deadline"),
    case_id: str = typer.Argument(..., help="Case ID"),
    item_id: str = typer.Argument(..., help="Item ID"),
):
    """Restore an item from the case trash."""
    from ..trash import restore

    _trash_move(kind, case_id, item_id, restore, "Restored")


@trash_app.command("list")
def trash_list(
    kind: str = typer.Argument(..., help="task, log, reminder or deadline"),
    case_id: str = typer.Argument(..., help="Case ID"),
):
    """List trashed items of one kind."""
    from ..trash import list_trash

    data = _load(_store())
    case = _require_case(data, case_id)

    try:
        items = list_trash(case, kind)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not items:
        console.print("Trash is empty.")
        return

    table = Table(title=f"Trash ({len(items)})")
    table.add_column("ID", style="cyan")
    table.add_column("Item")
    for item in items:
        label = getattr(item, "desc", None) or getattr(item, "title", None) or getattr(item, "content", "")
        table.add_row(item.id, label)
    console.print(table)


# ---- timer ----


def _elapsed(task: Task) -> str:
    from ..tracking import task_duration

    return format_duration(task_duration(task))


def _timer_text(case: Case, task: Task) -> Text:
    state = "running" if task.is_running else "paused"
    return Text.assemble(
        (_elapsed(task), "bold"),
        f"  {task.desc or task.type_label}  ({case.name}, {state})",
    )


@timer_app.command("show")
def timer_show():
    """Show the running task, or the last one timed."""
    from ..tracking import ActiveTimerLocator

    settings = get_settings()
    data = _load(_store())
    ref_store = TimerRefStore(settings.timer_ref_file)
    active = ActiveTimerLocator(ref_store).locate(data.cases)

    if active is None:
        console.print("No active task.")
        return

    if ref_store.minimized:
        console.print(_elapsed(active.task))
        return
    console.print(_timer_text(active.case, active.task))
    if active.task.sessions:
        console.print(f"Last started: {format_datetime(active.task.sessions[-1].start)}")


@timer_app.command("watch")
def timer_watch(
    seconds: Optional[float] = typer.Option(
        None,
        "--seconds", "-s",
        help="Stop after this many seconds (default: until Ctrl+C)",
    ),
):
    """Live display of the running task, refreshed every second."""
    from ..tracking import ActiveTimerLocator, DisplayTicker

    settings = get_settings()
    data = _load(_store())
    active = ActiveTimerLocator(TimerRefStore(settings.timer_ref_file)).locate(data.cases)

    if active is None:
        console.print("No active task.")
        return

    if not active.task.is_running:
        console.print(_timer_text(active.case, active.task))
        return

    with Live(_timer_text(active.case, active.task), console=console) as live:
        ticker = DisplayTicker(
            lambda: live.update(_timer_text(active.case, active.task)),
            interval=settings.tick_interval,
        )
        with ticker:
            try:
                if seconds is not None:
                    time.sleep(seconds)
                else:
                    while True:
                        time.sleep(3600)
            except KeyboardInterrupt:
                pass


@timer_app.command("minimize")
def timer_minimize():
    """Show only the elapsed time in `timer show`."""
    TimerRefStore(get_settings().timer_ref_file).set_minimized(True)
    console.print("Timer minimized")


@timer_app.command("expand")
def timer_expand():
    """Show full task details in `timer show`."""
    TimerRefStore(get_settings().timer_ref_file).set_minimized(False)
    console.print("Timer expanded")


# ---- import / export ----


@export_app.command("csv")
def export_csv(
    output: Path = typer.Option(
        None,
        "--output", "-o",
        help="CSV file (default: <export dir>/time_export.csv)",
    ),
):
    """Export tracked time of all tasks as CSV."""
    from ..reports import export_tasks_csv

    data = _load(_store())
    if output is None:
        output = get_settings().export_dir / "time_export.csv"

    path = export_tasks_csv(data.cases, output)
    console.print(f"Exported {sum(len(c.tasks) for c in data.cases)} tasks to {path}")


@export_app.command("backup")
def export_backup(
    output_dir: Path = typer.Option(
        None,
        "--output-dir", "-o",
        help="Directory for the backup (default: export dir)",
    ),
):
    """Write a dated JSON backup of all data."""
    store = _store()
    _load(store)
    path = store.export_backup(output_dir or get_settings().export_dir)
    console.print(f"Backup saved to: {path}")


@app.command("import")
def import_data(
    json_file: Path = typer.Argument(..., help="JSON backup to import"),
):
    """
    Replace all data with the contents of a JSON backup.
    """
    if not json_file.exists():
        console.print(f"[red]Error: File not found: {json_file}[/red]")
        raise typer.Exit(1)

    try:
        data = _store().import_file(json_file)
    except SnapshotError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"Imported {len(data.cases)} cases, {len(data.parties)} parties")


@app.command()
def version():
    """Show version information."""
    console.print(f"casekeeper v{__version__}")
    console.print("Legal case manager with billable time tracking")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
