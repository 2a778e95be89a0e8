from typing import Dict, Any, List, Optional, Union
from datetime import datetime
from enum import Enum
from pathlib import Path
import logging

from orbit_map.core.config import settings
from orbit_map.core.errors import OrbitMapError
from orbit_map.core.orbits import ingest, transform, aggregate


# -----------------------------------------------------------------------------
# PIPELINE MODULE - Orchestration
# Purpose: run parse -> build -> count in order, turn errors into a failed run,
# keep a step-by-step log of what happened
# -----------------------------------------------------------------------------


RESULT_TEMPLATE = "The total number of direct and indirect orbits is {total}"


class PipelineStatus(Enum):
    """Pipeline execution status."""

    COMPLETED = "completed"
    FAILED = "failed"


class PipelineStep(Enum):
    """Individual pipeline steps."""

    PARSE = "parse"
    BUILD = "build"
    COUNT = "count"


# Configure logging for pipeline
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


class PipelineLogger:
    """Custom logger for orbit map pipeline runs."""

    def __init__(self, source: str):
        """
        Initialize a pipeline logger scoped to one map source.

        Args:
            source: File path or upload name the run is processing.

        Example:
            logger = PipelineLogger("map_data.txt")
        """
        self.source = source
        self.start_time = datetime.now()
        self.logs = []

    def log(self, step: str, message: str, level: str = "info"):
        """Record a pipeline message and mirror it to the module logger."""
        timestamp = datetime.now().isoformat()
        log_entry = {
            "timestamp": timestamp,
            "step": step,
            "message": message,
            "level": level,
            "elapsed_seconds": (datetime.now() - self.start_time).total_seconds(),
        }
        self.logs.append(log_entry)

        if level == "error":
            logger.error(f"[{self.source}] {step}: {message}")
        elif level == "warning":
            logger.warning(f"[{self.source}] {step}: {message}")
        else:
            logger.info(f"[{self.source}] {step}: {message}")

    def get_logs(self) -> List[Dict[str, Any]]:
        return self.logs


def format_result(total: int) -> str:
    """The single line printed for a successful run."""
    return RESULT_TEMPLATE.format(total=total)


def _failed(pipeline_logger: PipelineLogger, step: str, error: OrbitMapError) -> Dict[str, Any]:
    pipeline_logger.log(step, f"Failed: {error.message}", "error")
    return {
        "status": PipelineStatus.FAILED,
        "error": error.message,
        "error_code": error.error_code,
        "detail": error.to_detail(),
        "logs": pipeline_logger.get_logs(),
    }


def run_orbit_pipeline(
    lines: List[str],
    root_identifier: Optional[str] = None,
    starting_depth: Optional[int] = None,
    allow_orphans: Optional[bool] = None,
    source: str = "<lines>",
    pipeline_logger: Optional[PipelineLogger] = None,
) -> Dict[str, Any]:
    """
    Run the complete orbit pipeline over already-read lines.

    Anything left as None falls back to the configured settings.

    Args:
        lines: Raw map lines ("AAA)BBB")
        root_identifier: Sentinel the tree hangs off
        starting_depth: Depth of the root's direct children
        allow_orphans: Drop unreachable bodies instead of failing
        source: Label used in log messages
        pipeline_logger: Reuse an existing run log (file runs pass theirs in)

    Returns:
        {"status": COMPLETED, "result": {...}, "logs": [...]} or
        {"status": FAILED, "error": ..., "error_code": ..., "detail": ..., "logs": [...]}

    Example flow:
        1. Parse: lines → relationships
        2. Build: relationships → tree
        3. Count: tree → total orbits
    """
    if root_identifier is None:
        root_identifier = settings.ROOT_IDENTIFIER
    if starting_depth is None:
        starting_depth = settings.STARTING_DEPTH
    if allow_orphans is None:
        allow_orphans = settings.ALLOW_ORPHANS

    pipeline_logger = pipeline_logger or PipelineLogger(source)
    pipeline_logger.log("pipeline", f"Starting orbit pipeline (root {root_identifier})")

    step = PipelineStep.PARSE
    try:
        # STEP 1: PARSE
        relationships = ingest.parse_lines(lines)
        pipeline_logger.log(step.value, f"Parsed {len(relationships)} relationships")

        # STEP 2: BUILD
        step = PipelineStep.BUILD
        tree, orphans = transform.build_tree_with_orphans(
            relationships, root_identifier, allow_orphans
        )
        bodies = aggregate.count_bodies(tree)
        pipeline_logger.log(
            step.value, f"Built tree: {len(tree)} top-level bodies, {bodies} in total"
        )
        if orphans:
            pipeline_logger.log(
                step.value,
                f"Dropped {len(orphans)} bodies not connected to {root_identifier}",
                "warning",
            )

        # STEP 3: COUNT
        step = PipelineStep.COUNT
        total = aggregate.count_total_orbits(tree, starting_depth)
        pipeline_logger.log(step.value, f"Counted {total} direct and indirect orbits")

    except OrbitMapError as e:
        return _failed(pipeline_logger, step.value, e)

    return {
        "status": PipelineStatus.COMPLETED,
        "result": {
            "root": root_identifier,
            "relationships": len(relationships),
            "bodies": bodies,
            "max_depth": aggregate.max_depth(tree, starting_depth),
            "total_orbits": total,
        },
        "tree": tree,
        "starting_depth": starting_depth,
        "logs": pipeline_logger.get_logs(),
    }


def run_orbit_pipeline_from_file(
    path: Union[str, Path, None] = None, **options: Any
) -> Dict[str, Any]:
    """
    Read the map file completely, then run the pipeline on it.

    A file that cannot be read is reported as a failed run, nothing is parsed.
    """
    path = str(path if path is not None else settings.MAP_PATH)
    pipeline_logger = PipelineLogger(path)
    pipeline_logger.log("read", "Reading orbit map...")

    try:
        lines = ingest.read_map_file(path)
    except OrbitMapError as e:
        return _failed(pipeline_logger, "read", e)

    pipeline_logger.log("read", f"Read {len(lines)} lines")
    return run_orbit_pipeline(
        lines, source=path, pipeline_logger=pipeline_logger, **options
    )
