"""Command-line interface for roadmapkit."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from roadmapkit.bootstrap import create_roadmap
from roadmapkit.logging_config import configure_logging
from roadmapkit.models import Settings, TaskStatus
from roadmapkit.sync import RoadmapStore, scan_git_history

app = typer.Typer(
    name="roadmapkit",
    help="Project roadmap tracking driven by tagged Git commits",
    add_completion=False,
)
console = Console()

STATUS_STYLES = {
    "pending": "dim",
    "in_progress": "yellow",
    "completed": "green",
}


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs"),
) -> None:
    """Track features and tasks in roadmap.json from Git commit tags."""
    try:
        settings = Settings()
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] Invalid settings: {escape(str(e))}")
        raise typer.Exit(1)

    configure_logging("DEBUG" if verbose else settings.log_level)


@app.command()
def init(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Project path"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing roadmap"),
) -> None:
    """Initialize a roadmap in a project."""
    try:
        settings = Settings()
        roadmap_path = create_roadmap(path, roadmap_filename=settings.roadmap_filename, force=force)

        console.print(f"[bold green]✓[/bold green] Roadmap initialized: {roadmap_path}")
        console.print("\n[bold cyan]📋 Next steps:[/bold cyan]")
        console.print(f"  1. Edit {roadmap_path.name} to add your features and tasks")
        console.print("  2. Reference tasks in commits: \\[task:<id>] \\[status:in_progress|completed] \\[debt:<text>]")
        console.print("  3. Run \"roadmapkit scan\" to sync with Git")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def scan(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Project path"),
    max_commits: Optional[int] = typer.Option(
        None, "--max-commits", "-n", min=1, help="Maximum commits to scan (default from settings)"
    ),
) -> None:
    """Scan Git history and update the roadmap."""
    try:
        scan_git_history(path, console=console, max_commits=max_commits)
    except FileNotFoundError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        console.print("[yellow]  Run \"roadmapkit init\" to create one[/yellow]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def status(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Project path"),
) -> None:
    """Show project and feature progress."""
    try:
        settings = Settings()
        roadmap = RoadmapStore(path / settings.roadmap_filename).load()
        info = roadmap.project_info

        console.print(f"\n[bold]{escape(info.name)}[/bold] v{escape(info.version)}")
        console.print(f"[cyan]Total progress:[/cyan] {info.total_progress}%")
        last_sync = info.last_sync.isoformat() if info.last_sync else "never"
        console.print(f"[cyan]Last sync:[/cyan] {last_sync}\n")

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Feature", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Priority", style="blue")
        table.add_column("Tasks", justify="right", style="yellow")
        table.add_column("Progress", justify="right", style="green")

        for feature in roadmap.features:
            completed = sum(1 for task in feature.tasks if task.status == TaskStatus.COMPLETED)
            table.add_row(
                escape(feature.id),
                escape(feature.name),
                str(feature.priority),
                f"{completed}/{len(feature.tasks)}",
                f"{feature.progress}%",
            )

        console.print(table)

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def tasks(
    path: Path = typer.Option(Path("."), "--path", "-p", help="Project path"),
    status_filter: Optional[TaskStatus] = typer.Option(None, "--status", "-s", help="Only show tasks in this status"),
) -> None:
    """List tasks with their status, complexity and debt."""
    try:
        settings = Settings()
        roadmap = RoadmapStore(path / settings.roadmap_filename).load()

        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Feature", style="cyan")
        table.add_column("Task", style="cyan")
        table.add_column("Name", style="white")
        table.add_column("Status")
        table.add_column("Complexity", justify="right", style="yellow")
        table.add_column("Debt", justify="right", style="red")

        shown = 0
        for feature, task in roadmap.iter_tasks():
            if status_filter is not None and task.status != status_filter:
                continue
            style = STATUS_STYLES.get(str(task.status), "white")
            table.add_row(
                escape(feature.id),
                escape(task.id),
                escape(task.name),
                f"[{style}]{task.status}[/{style}]",
                str(task.metrics.complexity_score),
                str(len(task.technical_debt)),
            )
            shown += 1

        console.print(table)
        console.print(f"\n[dim]{shown} task(s)[/dim]")

    except Exception as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
