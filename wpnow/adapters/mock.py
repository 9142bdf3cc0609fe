"""
Mock runtime — in-memory stand-in for a PHP execution environment.

Used by the test suite and by ``wp-now start --mock``. Mounted paths
resolve to the real host directories (writes go through, like a bind
mount); everything else lives in memory. Requests and code runs never
execute PHP: they are recorded and answered from canned responses.
"""

from __future__ import annotations

import posixpath
from dataclasses import dataclass
from pathlib import Path

from wpnow.adapters.base import PhpRequest, PhpResponse, RequestHandlerConfig


@dataclass(frozen=True)
class RuntimeCall:
    """One recorded call against the mock."""

    operation: str
    args: tuple


def _norm(path: str) -> str:
    return posixpath.normpath("/" + path.lstrip("/"))


def _parents(path: str) -> list[str]:
    parts: list[str] = []
    current = path
    while current != "/":
        parts.append(current)
        current = posixpath.dirname(current)
    parts.append("/")
    return parts


class MockRuntime:
    """Recording test double implementing every runtime capability.

    Can be configured with per-request responses and with failures for
    any operation name (``mount``, ``write_file``, ``request``, …).
    """

    def __init__(
        self,
        php_version: str = "8.0",
        handler: RequestHandlerConfig | None = None,
        default_output: str = "[mock] executed",
    ):
        self.php_version = php_version
        self.handler = handler
        self.cwd = "/"
        self._default_output = default_output
        self._mounts: list[tuple[str, str]] = []
        self._files: dict[str, str] = {}
        self._dirs: set[str] = {"/"}
        self._responses: dict[tuple[str, str], PhpResponse] = {}
        self._failures: dict[str, Exception] = {}
        self._call_log: list[RuntimeCall] = []

    # ── Introspection ───────────────────────────────────────────────

    @property
    def call_log(self) -> list[RuntimeCall]:
        """Every call this mock has received, in order."""
        return self._call_log

    @property
    def call_count(self) -> int:
        return len(self._call_log)

    def calls(self, operation: str) -> list[RuntimeCall]:
        return [c for c in self._call_log if c.operation == operation]

    @property
    def mounts(self) -> list[tuple[str, str]]:
        """``(source, target)`` pairs in the order they were mounted."""
        return [(source, target) for target, source in self._mounts]

    @property
    def requests(self) -> list[PhpRequest]:
        return [c.args[0] for c in self.calls("request")]

    # ── Configuration ───────────────────────────────────────────────

    def set_response(self, method: str, url: str, response: PhpResponse) -> None:
        """Answer ``method url`` with a custom response."""
        self._responses[(method.upper(), url)] = response

    def set_failure(self, operation: str, error: Exception | None = None) -> None:
        """Make every call to ``operation`` raise ``error``."""
        self._failures[operation] = error or RuntimeError(f"Mock failure: {operation}")

    def reset(self) -> None:
        """Clear call log, responses and failures. Filesystem state stays."""
        self._call_log.clear()
        self._responses.clear()
        self._failures.clear()

    # ── Internals ───────────────────────────────────────────────────

    def _record(self, operation: str, *args) -> None:
        self._call_log.append(RuntimeCall(operation=operation, args=args))
        if operation in self._failures:
            raise self._failures[operation]

    def _host_path(self, path: str) -> Path | None:
        """Resolve a virtual path through the mount table.

        The longest matching target wins; among equal targets the most
        recent mount shadows older ones.
        """
        best: tuple[str, str] | None = None
        for target, source in self._mounts:
            if path == target or path.startswith(target.rstrip("/") + "/"):
                if best is None or len(target) >= len(best[0]):
                    best = (target, source)
        if best is None:
            return None
        rel = posixpath.relpath(path, best[0])
        return Path(best[1]) if rel == "." else Path(best[1]) / rel

    # ── Mounter ─────────────────────────────────────────────────────

    def mount(self, source: str, target: str) -> None:
        target = _norm(target)
        self._record("mount", source, target)
        self._mounts.append((target, str(source)))
        self._dirs.update(_parents(target))

    # ── FileStore ───────────────────────────────────────────────────

    def write_file(self, path: str, content: str) -> None:
        path = _norm(path)
        self._record("write_file", path, content)
        host = self._host_path(path)
        if host is not None:
            host.parent.mkdir(parents=True, exist_ok=True)
            host.write_text(content, encoding="utf-8")
            return
        self._files[path] = content
        self._dirs.update(_parents(posixpath.dirname(path)))

    def read_file_as_text(self, path: str) -> str:
        path = _norm(path)
        self._record("read_file_as_text", path)
        host = self._host_path(path)
        if host is not None:
            return host.read_text(encoding="utf-8")
        if path not in self._files:
            raise FileNotFoundError(path)
        return self._files[path]

    def file_exists(self, path: str) -> bool:
        path = _norm(path)
        self._record("file_exists", path)
        host = self._host_path(path)
        if host is not None:
            return host.exists()
        return path in self._files or path in self._dirs

    def is_dir(self, path: str) -> bool:
        path = _norm(path)
        self._record("is_dir", path)
        host = self._host_path(path)
        if host is not None:
            return host.is_dir()
        return path in self._dirs

    def mkdir_tree(self, path: str) -> None:
        path = _norm(path)
        self._record("mkdir_tree", path)
        host = self._host_path(path)
        if host is not None:
            host.mkdir(parents=True, exist_ok=True)
            return
        self._dirs.update(_parents(path))

    def chdir(self, path: str) -> None:
        path = _norm(path)
        self._record("chdir", path)
        host = self._host_path(path)
        exists = host.is_dir() if host is not None else path in self._dirs
        if not exists:
            raise FileNotFoundError(f"No such directory: {path}")
        self.cwd = path

    # ── RequestRunner / CodeRunner ──────────────────────────────────

    def request(self, request: PhpRequest) -> PhpResponse:
        self._record("request", request)
        custom = self._responses.get((request.method.upper(), request.url))
        if custom is not None:
            return custom
        return PhpResponse(
            status=200,
            text=f"{self._default_output}: {request.method} {request.url}",
        )

    def run(self, code: str) -> PhpResponse:
        self._record("run", code)
        return PhpResponse(status=200, text=self._default_output)


def mock_runtime_factory(php_version: str, handler: RequestHandlerConfig) -> MockRuntime:
    """``RuntimeFactory`` that builds a fresh ``MockRuntime``."""
    return MockRuntime(php_version=php_version, handler=handler)
