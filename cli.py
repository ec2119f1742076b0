import typer
from rich.console import Console
from rich.table import Table
from typing import Optional, List
from datetime import datetime

from classbook.config import settings
from classbook.database import SessionLocal, init_db, drop_db
from classbook.logger import configure_logging
from classbook.exceptions import ClassbookException
from classbook.crud import (
    create_classroom, list_classrooms, require_classroom,
    create_session, get_sessions_by_class,
    create_sequence, get_sequences_by_class, require_sequence,
    update_sequence, delete_sequence, get_link_by_session,
    count_links_for_sequence
)
from classbook.schemas import ClassroomCreate, SessionCreate, SequenceCreate, SequenceUpdate
from classbook.sequence_engine import (
    assign_sessions_to_sequence, unassign_session, reorder_sequences,
    auto_assign_sequences, get_class_statistics, get_sessions_by_sequence
)

app = typer.Typer(help="Classbook CLI - plan teaching sequences over your class sessions")
console = Console()

STATUS_STYLES = {
    "planned": "dim",
    "in-progress": "yellow",
    "completed": "green",
}

CLEARABLE_FIELDS = ("description", "theme", "objectives", "resources")

def _split(values: Optional[str]) -> Optional[List[str]]:
    """Comma-separated option to list (None stays None)"""
    if values is None:
        return None
    return [v.strip() for v in values.split(",") if v.strip()]

@app.callback()
def main():
    """Configure logging before any command runs"""
    configure_logging(settings.log_level)

@app.command()
def init():
    """Initialize database tables"""
    init_db()
    console.print("[green]✓[/green] Database initialized successfully!")

@app.command()
def reset_db():
    """Delete all data and reinitialize database (WARNING: irreversible!)"""
    confirm = typer.confirm("⚠️  This will DELETE ALL DATA. Are you sure?")
    if not confirm:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    console.print("[yellow]Dropping all tables...[/yellow]")
    drop_db()
    console.print("[yellow]Recreating tables...[/yellow]")
    init_db()
    console.print("[green]✓[/green] Database reset complete! All data deleted.")

@app.command()
def create_class(
    name: str = typer.Option(..., prompt="Class name (e.g., 2nde B)"),
    level: str = typer.Option(..., prompt="Level (e.g., 2nde, 6eme)"),
    subject: Optional[str] = typer.Option(None, help="Subject taught"),
    color: str = typer.Option("#4CAF50", help="Display color")
):
    """Create a new class"""
    db = SessionLocal()
    try:
        classroom = create_classroom(db, ClassroomCreate(name=name, level=level, subject=subject, color=color))
        console.print(f"[green]✓[/green] Class created! ID: {classroom.id}")
    finally:
        db.close()

@app.command()
def list_classes():
    """List all classes"""
    db = SessionLocal()
    try:
        classrooms = list_classrooms(db)
        if not classrooms:
            console.print("[yellow]No classes yet. Use 'create-class' first.[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Level")
        table.add_column("Subject")
        for classroom in classrooms:
            table.add_row(classroom.id, classroom.name, classroom.level, classroom.subject or "-")
        console.print(table)
    finally:
        db.close()

@app.command()
def add_session(
    class_id: str = typer.Option(..., prompt="Class ID"),
    subject: str = typer.Option(..., prompt="Subject / topic"),
    date: str = typer.Option(..., prompt="Date and time (YYYY-MM-DD HH:MM)"),
    duration: int = typer.Option(settings.default_session_duration, help="Duration in minutes"),
    description: Optional[str] = typer.Option(None, help="Notes for the session")
):
    """Schedule a session for a class"""
    db = SessionLocal()
    try:
        require_classroom(db, class_id)
        session = create_session(db, SessionCreate(
            class_id=class_id,
            subject=subject,
            description=description,
            date=datetime.strptime(date, "%Y-%m-%d %H:%M"),
            duration=duration
        ))
        console.print(f"[green]✓[/green] Session scheduled! ID: {session.id}")
    except ValueError as e:
        console.print(f"[red]✗[/red] Invalid input: {str(e)}")
        raise typer.Exit(code=1)
    except ClassbookException as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()

@app.command()
def list_sessions(class_id: str):
    """List the sessions of a class with their sequence"""
    db = SessionLocal()
    try:
        sessions = get_sessions_by_class(db, class_id)
        if not sessions:
            console.print(f"[yellow]No sessions for class {class_id}[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Date", style="cyan", width=16)
        table.add_column("ID", style="dim")
        table.add_column("Subject")
        table.add_column("Minutes", justify="right")
        table.add_column("Sequence")
        for session in sessions:
            link = get_link_by_session(db, session.id)
            sequence_label = f"{link.sequence.name} #{link.order_in_sequence}" if link else "-"
            table.add_row(
                session.date.strftime("%Y-%m-%d %H:%M"),
                session.id,
                session.subject,
                str(session.duration),
                sequence_label
            )
        console.print(table)
    finally:
        db.close()

@app.command(name="create-sequence")
def create_sequence_cmd(
    class_id: str = typer.Option(..., prompt="Class ID"),
    name: str = typer.Option(..., prompt="Sequence name"),
    session_count: int = typer.Option(..., prompt="Number of sessions"),
    color: str = typer.Option(settings.default_sequence_color, help="Display color"),
    description: Optional[str] = typer.Option(None, help="Description"),
    theme: Optional[str] = typer.Option(None, help="Theme (e.g., Histoire moderne)"),
    objectives: Optional[str] = typer.Option(None, help="Objectives (comma-separated)"),
    resources: Optional[str] = typer.Option(None, help="Resources (comma-separated)")
):
    """Create a sequence at the end of the class's program"""
    db = SessionLocal()
    try:
        require_classroom(db, class_id)
        sequence = create_sequence(db, SequenceCreate(
            class_id=class_id,
            name=name,
            description=description,
            color=color,
            session_count=session_count,
            theme=theme,
            objectives=_split(objectives),
            resources=_split(resources)
        ))
        console.print(f"[green]✓[/green] Sequence created! ID: {sequence.id} (position {sequence.order + 1})")
    except ValueError as e:
        console.print(f"[red]✗[/red] Invalid input: {str(e)}")
        raise typer.Exit(code=1)
    except ClassbookException as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()

@app.command()
def list_sequences(class_id: str):
    """List the sequences of a class in program order"""
    db = SessionLocal()
    try:
        sequences = get_sequences_by_class(db, class_id)
        if not sequences:
            console.print(f"[yellow]No sequences for class {class_id}[/yellow]")
            return

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("#", justify="right")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Sessions", justify="right")
        table.add_column("Status")
        for sequence in sequences:
            assigned = count_links_for_sequence(db, sequence.id)
            style = STATUS_STYLES.get(sequence.status, "")
            table.add_row(
                str(sequence.order + 1),
                sequence.id,
                sequence.name,
                f"{assigned}/{sequence.session_count}",
                f"[{style}]{sequence.status}[/{style}]" if style else sequence.status
            )
        console.print(table)
    finally:
        db.close()

@app.command()
def show_sequence(sequence_id: str):
    """Show a sequence and its sessions"""
    db = SessionLocal()
    try:
        sequence = require_sequence(db, sequence_id)
        console.print(f"\n[bold]{sequence.name}[/bold] ({sequence.status})")
        if sequence.theme:
            console.print(f"  Theme: {sequence.theme}")
        if sequence.description:
            console.print(f"  {sequence.description}")
        if sequence.objectives:
            console.print("  Objectives:")
            for objective in sequence.objectives:
                console.print(f"    - {objective}")

        sessions = get_sessions_by_sequence(db, sequence_id)
        console.print(f"\n[cyan]Sessions ({len(sessions)}/{sequence.session_count}):[/cyan]")
        for session in sessions:
            console.print(f"  {session.order_in_sequence}. {session.date:%Y-%m-%d %H:%M} - {session.subject}")
    except ClassbookException as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()

@app.command(name="update-sequence")
def update_sequence_cmd(
    sequence_id: str,
    name: Optional[str] = typer.Option(None, help="New name"),
    session_count: Optional[int] = typer.Option(None, help="New number of sessions"),
    color: Optional[str] = typer.Option(None, help="New color"),
    description: Optional[str] = typer.Option(None, help="New description"),
    theme: Optional[str] = typer.Option(None, help="New theme"),
    objectives: Optional[str] = typer.Option(None, help="New objectives (comma-separated)"),
    resources: Optional[str] = typer.Option(None, help="New resources (comma-separated)"),
    clear: Optional[List[str]] = typer.Option(
        None, "--clear", help="Field to empty (description, theme, objectives, resources); repeatable"
    )
):
    """Update sequence fields"""
    db = SessionLocal()
    try:
        unknown = set(clear or []) - set(CLEARABLE_FIELDS)
        if unknown:
            raise ValueError(f"cannot clear {', '.join(sorted(unknown))}")
        updates = {
            "name": name,
            "session_count": session_count,
            "color": color,
            "description": description,
            "theme": theme,
            "objectives": _split(objectives),
            "resources": _split(resources)
        }
        fields = {k: v for k, v in updates.items() if v is not None}
        fields.update({field: None for field in clear or []})
        sequence = update_sequence(db, sequence_id, SequenceUpdate(**fields))
        if sequence:
            console.print(f"[green]✓[/green] Sequence updated successfully!")
        else:
            console.print(f"[red]✗[/red] Sequence {sequence_id} not found")
    except ValueError as e:
        console.print(f"[red]✗[/red] Invalid input: {str(e)}")
        raise typer.Exit(code=1)
    finally:
        db.close()

@app.command(name="delete-sequence")
def delete_sequence_cmd(sequence_id: str):
    """Delete a sequence (its sessions become unassigned)"""
    db = SessionLocal()
    try:
        if delete_sequence(db, sequence_id):
            console.print(f"[green]✓[/green] Sequence deleted")
        else:
            console.print(f"[red]✗[/red] Sequence {sequence_id} not found")
    finally:
        db.close()

@app.command()
def reorder(
    class_id: str,
    sequence_ids: List[str] = typer.Argument(..., help="All sequence IDs of the class, in the new order")
):
    """Reorder the sequences of a class"""
    db = SessionLocal()
    try:
        reorder_sequences(db, class_id, sequence_ids)
        console.print(f"[green]✓[/green] Sequences reordered")
    finally:
        db.close()

@app.command()
def assign(
    sequence_id: str,
    session_ids: Optional[List[str]] = typer.Argument(None, help="Session IDs in sequence order (none clears the sequence)")
):
    """Set the sessions of a sequence"""
    db = SessionLocal()
    try:
        sequence = require_sequence(db, sequence_id)
        assign_sessions_to_sequence(db, sequence_id, session_ids or [])
        db.refresh(sequence)
        console.print(f"[green]✓[/green] {len(session_ids or [])} session(s) assigned to {sequence.name} ({sequence.status})")
    except ClassbookException as e:
        console.print(f"[red]✗[/red] {e.message}")
        raise typer.Exit(code=1)
    finally:
        db.close()

@app.command()
def unassign(session_id: str):
    """Remove a session from its sequence"""
    db = SessionLocal()
    try:
        unassign_session(db, session_id)
        console.print(f"[green]✓[/green] Session {session_id} is no longer assigned")
    finally:
        db.close()

@app.command()
def auto_assign(class_id: str):
    """Fill sequences in program order with the earliest free sessions"""
    db = SessionLocal()
    try:
        plan = auto_assign_sequences(db, class_id)
        if not plan:
            console.print("[yellow]Nothing to assign: no free sessions or all sequences complete.[/yellow]")
            return
        for item in plan:
            sequence = require_sequence(db, item.sequence_id)
            console.print(f"  {sequence.name}: +{len(item.session_ids)} session(s) ({sequence.status})")
        console.print(f"[green]✓[/green] Auto-assignment complete")
    finally:
        db.close()

@app.command()
def stats(class_id: str):
    """Show sequence planning progress for a class"""
    db = SessionLocal()
    try:
        statistics = get_class_statistics(db, class_id)
        console.print(f"\n[bold]Planning progress for class {class_id}[/bold]")
        console.print(f"  Sequences: {statistics.total_sequences}")
        console.print(f"  Sessions: {statistics.total_sessions}")
        console.print(f"  Assigned: {statistics.assigned_sessions}")
        console.print(f"  Unassigned: {statistics.unassigned_sessions}")
        console.print(f"  Completion: {statistics.completion_percentage}%")
    finally:
        db.close()

if __name__ == "__main__":
    app()
