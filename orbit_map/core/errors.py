"""Error taxonomy for orbit map processing.

Every error carries a stable ``error_code`` and a ``context`` dict so the API
can return a structured ``HTTPException.detail`` and the CLI can log something
more useful than a bare message.
"""

from typing import Any, Dict, List, Optional


class OrbitMapError(Exception):
    """Base class for all orbit map failures."""

    error_code = "ORBIT_MAP_ERROR"

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def to_detail(self) -> Dict[str, Any]:
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class InputReadError(OrbitMapError):
    """The map source could not be opened, read or decoded."""

    error_code = "INPUT_READ_ERROR"

    def __init__(self, source: str, reason: str):
        super().__init__(
            f"Could not read orbit map from {source}: {reason}",
            {"source": source, "reason": reason},
        )
        self.source = source


class MalformedLineError(OrbitMapError):
    """A line is not of the form ``PARENT)CHILD``."""

    error_code = "MALFORMED_LINE"

    def __init__(self, line: str, line_number: Optional[int] = None):
        where = f" (line {line_number})" if line_number is not None else ""
        super().__init__(
            f"Malformed orbit relationship{where}: {line!r}",
            {"line": line, "line_number": line_number},
        )
        self.line = line
        self.line_number = line_number


class CycleError(OrbitMapError):
    """A body was reached again while it was still on its own ancestor path."""

    error_code = "CYCLE_DETECTED"

    def __init__(self, cycle: List[str]):
        super().__init__(
            f"Orbit map contains a cycle: {' -> '.join(cycle)}",
            {"cycle": cycle},
        )
        self.cycle = cycle


class MultipleRootsOrOrphanError(OrbitMapError):
    """Some bodies cannot be reached from the root identifier."""

    error_code = "ORPHAN_BODIES"

    def __init__(self, orphans: List[str], roots: List[str]):
        message = f"{len(orphans)} bodies are not connected to the root"
        if roots:
            message += f" (foreign roots: {', '.join(roots)})"
        super().__init__(message, {"orphans": orphans, "roots": roots})
        self.orphans = orphans
        self.roots = roots
