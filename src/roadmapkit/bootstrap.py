"""Creation of a starter roadmap for a project."""

import json
import tomllib
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Tuple

import structlog

from roadmapkit.models.roadmap import Feature, Priority, ProjectInfo, Roadmap, Task
from roadmapkit.sync.store import RoadmapStore

logger = structlog.get_logger(__name__)

# Checked in order; the first marker present decides the environment
ENVIRONMENT_MARKERS: Tuple[Tuple[str, str], ...] = (
    ("package.json", "javascript"),
    ("requirements.txt", "python"),
    ("Pipfile", "python"),
    ("pyproject.toml", "python"),
    ("go.mod", "go"),
    ("Cargo.toml", "rust"),
    ("pom.xml", "java"),
    ("build.gradle", "java"),
    ("Gemfile", "ruby"),
    ("composer.json", "php"),
)

DEFAULT_STACKS = {
    "javascript": ["JavaScript"],
    "python": ["Python"],
    "go": ["Go"],
    "rust": ["Rust"],
    "java": ["Java"],
    "ruby": ["Ruby"],
    "php": ["PHP"],
}

JS_FRAMEWORKS = (
    ("react", "React"),
    ("next", "Next.js"),
    ("vue", "Vue"),
    ("express", "Express"),
    ("@nestjs/core", "NestJS"),
    ("prisma", "Prisma"),
    ("typescript", "TypeScript"),
)


def detect_environment(project_root: Path) -> str:
    """Guess the project's ecosystem from well-known marker files.

    Returns:
        Environment name, or "generic" when no marker is found
    """
    for marker, environment in ENVIRONMENT_MARKERS:
        if (project_root / marker).exists():
            return environment
    return "generic"


def _read_package_json(project_root: Path) -> Dict[str, Any]:
    try:
        with open(project_root / "package.json", "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("package_json_unreadable", error=str(e))
        return {}
    return data if isinstance(data, dict) else {}


def _read_pyproject(project_root: Path) -> Dict[str, Any]:
    path = project_root / "pyproject.toml"
    if not path.exists():
        return {}
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("pyproject_unreadable", error=str(e))
        return {}
    project = data.get("project")
    return project if isinstance(project, dict) else {}


def _javascript_stack(package: Dict[str, Any]) -> List[str]:
    dependencies: Dict[str, Any] = {}
    dependencies.update(package.get("dependencies") or {})
    dependencies.update(package.get("devDependencies") or {})
    stack = [label for name, label in JS_FRAMEWORKS if name in dependencies]
    return stack or ["JavaScript"]


def build_project_info(project_root: Path, environment: str) -> ProjectInfo:
    """Build project metadata from the directory name and package manifests."""
    info = ProjectInfo(
        name=project_root.resolve().name or "My Project",
        stack=DEFAULT_STACKS.get(environment, []),
    )

    manifest: Dict[str, Any] = {}
    if environment == "javascript":
        manifest = _read_package_json(project_root)
        info.stack = _javascript_stack(manifest)
    elif environment == "python":
        manifest = _read_pyproject(project_root)

    if manifest.get("name"):
        info.name = str(manifest["name"])
    if manifest.get("description"):
        info.description = str(manifest["description"])
    if manifest.get("version"):
        info.version = str(manifest["version"])

    return info


def build_starter_roadmap(project_root: Path) -> Roadmap:
    """Build a roadmap with one example feature for a project."""
    environment = detect_environment(project_root)
    logger.info("environment_detected", environment=environment)

    example_task = Task(
        id="setup-repository",
        name="Set up repository",
        description="Reference this task in a commit with [task:setup-repository] [status:completed]",
        priority=Priority.HIGH,
    )
    example_feature = Feature(
        id="setup",
        name="Project setup",
        description="Initial project configuration",
        priority=Priority.HIGH,
        tasks=[example_task],
    )

    roadmap = Roadmap(
        project_info=build_project_info(project_root, environment),
        features=[example_feature],
    )
    roadmap.project_info.last_sync = datetime.now(timezone.utc)
    return roadmap


def create_roadmap(project_root: Path, roadmap_filename: str = "roadmap.json", force: bool = False) -> Path:
    """Write a starter roadmap into a project.

    Args:
        project_root: Project directory
        roadmap_filename: Name of the roadmap file
        force: Overwrite an existing roadmap

    Returns:
        Path of the written roadmap

    Raises:
        FileExistsError: If the roadmap exists and force is False
        ValueError: If project_root is not a directory
    """
    project_root = Path(project_root)
    if not project_root.is_dir():
        raise ValueError(f"Project path is not a directory: {project_root}")

    store = RoadmapStore(project_root / roadmap_filename)
    if store.exists() and not force:
        raise FileExistsError(f"Roadmap already exists: {store.path} (use --force to overwrite)")

    store.save(build_starter_roadmap(project_root))
    logger.info("roadmap_created", path=str(store.path))
    return store.path
