"""
Detection use case — report which mode a project directory would run in.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from wpnow.core.models.options import Mode
from wpnow.core.services.detection import MODE_PREDICATES, infer_mode

logger = logging.getLogger(__name__)


@dataclass
class DetectResult:
    """Result of the detect use case."""

    project_path: Path | None = None
    mode: Mode | None = None
    checks: dict[str, bool] = field(default_factory=dict)
    error: str | None = None

    def to_dict(self) -> dict:
        if self.error:
            return {"error": self.error}
        return {
            "project_path": str(self.project_path),
            "mode": self.mode.value if self.mode else None,
            "checks": self.checks,
        }


def run_detect(project_path: Path | None = None) -> DetectResult:
    """Infer the mode for ``project_path`` (default: cwd).

    ``checks`` records every predicate's answer, not only the winning
    one, so a surprising result can be explained.
    """
    result = DetectResult()
    path = Path(os.path.abspath(project_path or os.getcwd()))
    result.project_path = path

    if not path.is_dir():
        result.error = f"Not a directory: {path}"
        return result

    for predicate, mode in MODE_PREDICATES:
        result.checks[mode.value] = predicate(path)
    result.mode = infer_mode(path)
    logger.info("Detected %s mode for %s", result.mode, path)
    return result
