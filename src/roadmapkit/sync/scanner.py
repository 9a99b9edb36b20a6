"""Scan orchestration - reconciles the roadmap with recent commit history."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional, Set

import structlog
from rich.console import Console
from rich.markup import escape

from roadmapkit.extraction.git_extractor import GitExtractor
from roadmapkit.extraction.tags import parse_commit_tags
from roadmapkit.models.config import ScanConfig, Settings
from roadmapkit.sync.locator import build_task_index
from roadmapkit.sync.progress import recalculate_progress
from roadmapkit.sync.store import RoadmapStore
from roadmapkit.sync.updater import update_task

logger = structlog.get_logger(__name__)


class ScanResult:
    """Result of a scan."""

    def __init__(
        self,
        processed_commits: int = 0,
        updated_tasks: int = 0,
        new_debts: int = 0,
        total_progress: int = 0,
        warnings: Optional[List[str]] = None,
    ):
        self.processed_commits = processed_commits
        self.updated_tasks = updated_tasks
        self.new_debts = new_debts
        self.total_progress = total_progress
        self.warnings = warnings or []


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # Watermarks written without an offset are taken as UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class RoadmapScanner:
    """Applies tagged commits to the roadmap and refreshes derived fields.

    The roadmap is loaded once, updated in memory and written back once at
    the end of a successful pass. The ``last_sync`` watermark is read before
    the walk and replaced only in that final write.
    """

    def __init__(
        self,
        config: ScanConfig,
        console: Optional[Console] = None,
        store: Optional[RoadmapStore] = None,
    ):
        """Initialize the scanner.

        Args:
            config: Scan configuration
            console: Rich console for inline warnings (optional)
            store: Roadmap store (defaults to the file at config.roadmap_path)
        """
        self.config = config
        self.console = console or Console()
        self.store = store or RoadmapStore(config.roadmap_path)

    def scan(self) -> ScanResult:
        """Run one scan.

        Returns:
            ScanResult with the counters of this pass

        Raises:
            ValueError: If the project is not a Git repository or the roadmap is invalid
            FileNotFoundError: If the roadmap does not exist
        """
        extractor = GitExtractor(self.config)
        roadmap = self.store.load()

        last_sync = _as_utc(roadmap.project_info.last_sync)
        task_index = build_task_index(roadmap)
        # Tasks whose status was already set by a newer commit in this pass
        status_applied: Set[str] = set()
        result = ScanResult()

        logger.info(
            "scan_started",
            project_root=str(self.config.project_root),
            last_sync=last_sync.isoformat() if last_sync else None,
            max_commits=self.config.max_commits,
        )

        # Newest first; iter_commits stops at config.max_commits
        for commit in extractor.iter_commits():
            if last_sync is not None and commit.authored_at <= last_sync:
                continue

            result.processed_commits += 1
            tags = parse_commit_tags(commit.message)
            if not tags.has_task:
                continue

            location = task_index.get(tags.task_id)
            if location is None:
                warning = f'Task "{tags.task_id}" not found in roadmap (commit {commit.short_hash})'
                result.warnings.append(warning)
                logger.warning("task_not_found", task_id=tags.task_id, commit=commit.short_hash)
                self.console.print(f"[yellow]⚠ {escape(warning)}[/yellow]")
                continue

            stats = extractor.get_commit_stats(commit.hash)
            update_task(
                location.task,
                commit,
                tags,
                stats,
                keep_status=location.task.id in status_applied,
            )
            if tags.status is not None:
                status_applied.add(location.task.id)
            result.updated_tasks += 1
            result.new_debts += len(tags.debts)

        recalculate_progress(roadmap)
        roadmap.project_info.last_sync = datetime.now(timezone.utc)
        self.store.save(roadmap)

        result.total_progress = roadmap.project_info.total_progress
        logger.info(
            "scan_completed",
            processed_commits=result.processed_commits,
            updated_tasks=result.updated_tasks,
            new_debts=result.new_debts,
            total_progress=result.total_progress,
        )
        return result


def print_summary(result: ScanResult, console: Console) -> None:
    """Print the operator-facing summary of a scan."""
    console.print("\n[bold cyan]📊 Summary:[/bold cyan]")
    console.print(f"  • Processed commits: {result.processed_commits}")
    console.print(f"  • Updated tasks: {result.updated_tasks}")
    console.print(f"  • New technical debts: {result.new_debts}")
    console.print(f"  [green]• Total progress: {result.total_progress}%[/green]")

    if result.updated_tasks == 0 and result.processed_commits > 0:
        console.print(
            "\n[yellow]💡 Tip: Use commit tags like \\[task:id] \\[status:completed] to track tasks[/yellow]"
        )


def scan_git_history(
    project_root: Path,
    console: Optional[Console] = None,
    settings: Optional[Settings] = None,
    max_commits: Optional[int] = None,
) -> ScanResult:
    """Scan a project's Git history and update its roadmap.

    Args:
        project_root: Path to the project's Git working tree
        console: Rich console for progress and summary output (optional)
        settings: Application settings (loaded from the environment if None)
        max_commits: Override of the configured commit cap

    Returns:
        ScanResult of the pass
    """
    console = console or Console()
    config = ScanConfig.from_settings(Path(project_root), settings)
    if max_commits is not None:
        config = config.model_copy(update={"max_commits": max_commits})

    scanner = RoadmapScanner(config, console=console)
    with console.status("Scanning Git history..."):
        result = scanner.scan()

    console.print("[bold green]✓[/bold green] Roadmap updated successfully")
    print_summary(result, console)
    return result
