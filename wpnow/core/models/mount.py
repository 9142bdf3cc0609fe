"""
Mount mapping — one host directory bound into the execution environment.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class MountRole(StrEnum):
    """Why a mapping exists. The orchestrator hooks extra steps on roles."""

    INDEX = "index"
    WORDPRESS = "wordpress"
    WP_CONTENT = "wp-content"
    PROJECT = "project"
    SQLITE = "sqlite"


class MountMapping(BaseModel):
    """``source`` is a host path, ``target`` a path inside the runtime."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    role: MountRole

    def __str__(self) -> str:
        return f"{self.source} → {self.target} [{self.role}]"
