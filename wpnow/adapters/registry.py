"""
Runtime registry — resolves which execution environment to build.

Runtimes are external collaborators. The registry maps a name to a
``RuntimeFactory``; a factory can also be referenced directly as
``package.module:attribute`` and is imported on demand. Mock mode
swaps every lookup for the in-memory ``MockRuntime``.
"""

from __future__ import annotations

import importlib
import logging
from typing import Any

from wpnow.adapters.base import RuntimeFactory
from wpnow.adapters.mock import mock_runtime_factory
from wpnow.core.config.errors import ConfigError

logger = logging.getLogger(__name__)

MOCK_RUNTIME = "mock"


class RuntimeRegistry:
    """Central registry for runtime factories.

    Features:
        - Register/unregister factories by name
        - Import ``module:attribute`` references on demand
        - Mock mode: every lookup yields the mock runtime
    """

    def __init__(self, mock_mode: bool = False):
        self._factories: dict[str, RuntimeFactory] = {MOCK_RUNTIME: mock_runtime_factory}
        self._mock_mode = mock_mode

    @property
    def mock_mode(self) -> bool:
        return self._mock_mode

    def set_mock_mode(self, enabled: bool) -> None:
        self._mock_mode = enabled

    def register(self, name: str, factory: RuntimeFactory) -> None:
        if name in self._factories:
            logger.warning("Overwriting existing runtime: %s", name)
        self._factories[name] = factory
        logger.debug("Registered runtime: %s", name)

    def unregister(self, name: str) -> None:
        self._factories.pop(name, None)

    def list_runtimes(self) -> list[str]:
        return list(self._factories.keys())

    def resolve(self, reference: str | None) -> RuntimeFactory:
        """Find the factory for ``reference``.

        Args:
            reference: A registered name, a ``module:attribute`` path,
                or None (only valid in mock mode).

        Raises:
            ConfigError: If nothing usable is configured or the
                reference cannot be imported.
        """
        if self._mock_mode:
            return self._factories[MOCK_RUNTIME]

        if not reference:
            raise ConfigError(
                "No PHP runtime configured. Set 'runtime' in wp-now.yml, "
                "pass --runtime module:factory, or use --mock."
            )

        if reference in self._factories:
            return self._factories[reference]

        if ":" not in reference:
            known = ", ".join(self.list_runtimes())
            raise ConfigError(
                f"Unknown runtime '{reference}'. "
                f"Registered: {known}; or use the form 'package.module:factory'."
            )

        factory = _import_reference(reference)
        self._factories[reference] = factory
        return factory


def _import_reference(reference: str) -> Any:
    module_name, _, attribute = reference.partition(":")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ConfigError(f"Cannot import runtime module '{module_name}': {e}") from e

    factory = getattr(module, attribute, None)
    if factory is None or not callable(factory):
        raise ConfigError(f"Runtime '{reference}' is not a callable factory")
    logger.debug("Loaded runtime factory %s", reference)
    return factory
