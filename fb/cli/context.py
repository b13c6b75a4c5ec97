"""Per-invocation state shared by the root callback and subcommands."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path

from fb.config.manager import ConfigManager
from fb.config.settings import Settings
from fb.integrations.ticket_service import TicketService, create_ticket_service
from fb.state.store import StateStore
from fb.workflow.checkout import CheckoutManager


@dataclass
class CliContext:
    """Lazily wires configuration, state, and the API for one command.

    Attributes:
        home: Base directory for config.yaml and state files
        verbose: Print timing metrics and debug logs to stderr
        started: perf_counter() at invocation start
    """

    home: Path
    verbose: bool = False
    started: float = field(default_factory=time.perf_counter)
    _settings: Settings | None = field(default=None, repr=False)

    @property
    def settings(self) -> Settings:
        """Configuration, loaded on first access."""
        if self._settings is None:
            self._settings = ConfigManager(self.home).load()
        return self._settings

    @property
    def store(self) -> StateStore:
        return StateStore(self.home)

    def connect(self) -> TicketService:
        """Load configuration and return a discovered TicketService."""
        return create_ticket_service(self.settings)

    def checkout_manager(self) -> CheckoutManager:
        return CheckoutManager(self.store, self.connect)

    def elapsed(self) -> float:
        return time.perf_counter() - self.started


__all__ = [
    "CliContext",
]
