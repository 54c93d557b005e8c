"""Dependency injection container.

Explicit registration and resolution of the application's adapters and
services, without an external framework. Tests build a bare Container
and register fakes; production code uses ``Container.create_default``.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        container = Container.create_default()
        planner = container.resolve(RoutePlannerService)

        container = Container()
        container.register(LedgerRepositoryPort, lambda: FakeRepository())

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Bind a type to the factory that builds it."""
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Build, or return the cached instance of, a registered type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        with self._lock:
            self._singletons.clear()

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Create a container with the production bindings.

        The ledger repository is a singleton, so every planner resolved
        from this container shares one snapshot.
        """
        from .adapters.ledger import JsonlLedgerRepository
        from .ports.ledger import LedgerRepositoryPort
        from .services import RoutePlannerService

        config = config or get_config()
        container = cls(config=config)

        container.register(
            LedgerRepositoryPort,
            lambda: JsonlLedgerRepository(config.ledger),
        )
        container.register(
            RoutePlannerService,
            lambda: RoutePlannerService(
                ledger_repository=container.resolve(LedgerRepositoryPort),
                config=config,
            ),
        )

        return container
