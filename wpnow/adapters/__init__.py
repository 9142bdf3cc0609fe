"""Adapters — the PHP execution environment contract and its stand-ins.

Public re-exports for convenient access.
"""

from wpnow.adapters.base import (
    CodeRunner,
    ExecutionEnvironment,
    FileStore,
    Mounter,
    PhpRequest,
    PhpResponse,
    RequestHandlerConfig,
    RequestRunner,
    RuntimeFactory,
    Server,
)
from wpnow.adapters.mock import MockRuntime, mock_runtime_factory
from wpnow.adapters.registry import RuntimeRegistry

__all__ = [
    "CodeRunner",
    "ExecutionEnvironment",
    "FileStore",
    "MockRuntime",
    "Mounter",
    "PhpRequest",
    "PhpResponse",
    "RequestHandlerConfig",
    "RequestRunner",
    "RuntimeFactory",
    "RuntimeRegistry",
    "Server",
    "mock_runtime_factory",
]
