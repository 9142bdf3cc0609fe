"""
Runtime contract — what wp-now needs from a PHP execution environment.

The environment itself (PHP interpreter, virtual filesystem, request
dispatch) is an external collaborator. Instead of one wide handle the
contract is split into narrow capabilities so each piece of wp-now
depends only on what it actually calls:

    Mounter        bind host directories into the virtual filesystem
    FileStore      read, write and inspect files inside the environment
    RequestRunner  dispatch an HTTP request to the served site
    CodeRunner     execute a snippet of PHP
    Server         serve the site on a host/port (optional)

A concrete runtime usually implements all of them. ``ExecutionEnvironment``
names the combination the orchestrator is built against.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field


class PhpRequest(BaseModel):
    """An HTTP request addressed to the site inside the runtime."""

    url: str
    method: str = "GET"
    form_data: dict[str, str] | None = None
    headers: dict[str, str] = Field(default_factory=dict)


class PhpResponse(BaseModel):
    """What the runtime returned for a request or a code run."""

    status: int = 200
    text: str = ""
    headers: dict[str, str] = Field(default_factory=dict)


@dataclass(frozen=True)
class RequestHandlerConfig:
    """Construction parameters for a runtime's request handler.

    ``is_static_file_path`` receives a request path (relative to the
    document root) and decides whether the runtime may stream the file
    directly instead of routing it through PHP.
    """

    document_root: str
    absolute_url: str
    is_static_file_path: Callable[[str], bool]


@runtime_checkable
class Mounter(Protocol):
    def mount(self, source: str, target: str) -> None:
        """Make host directory ``source`` visible at ``target``."""


@runtime_checkable
class FileStore(Protocol):
    def write_file(self, path: str, content: str) -> None: ...

    def read_file_as_text(self, path: str) -> str: ...

    def file_exists(self, path: str) -> bool: ...

    def is_dir(self, path: str) -> bool: ...

    def mkdir_tree(self, path: str) -> None: ...

    def chdir(self, path: str) -> None: ...


@runtime_checkable
class RequestRunner(Protocol):
    def request(self, request: PhpRequest) -> PhpResponse: ...


@runtime_checkable
class CodeRunner(Protocol):
    def run(self, code: str) -> PhpResponse: ...


@runtime_checkable
class Server(Protocol):
    def serve(self, host: str, port: int) -> None:
        """Block serving the site until interrupted."""


@runtime_checkable
class ExecutionEnvironment(Mounter, FileStore, RequestRunner, Protocol):
    """The capabilities wp-now's orchestrator requires together."""


class RuntimeFactory(Protocol):
    """Builds an execution environment for one PHP version."""

    def __call__(
        self, php_version: str, handler: RequestHandlerConfig
    ) -> ExecutionEnvironment: ...
