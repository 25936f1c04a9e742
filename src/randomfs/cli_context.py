"""
CLI Context for managing application dependencies.

Provides a clean way to manage CLI-level dependencies like settings and the
RandomFS instance, avoiding global state and enabling dependency injection.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .filesystem import RandomFS, create_randomfs
from .settings import Settings, create_settings_from_env


@dataclass
class CLIContext:
    """
    Shared context for CLI commands.

    Settings are loaded once per command; the RandomFS instance (and with it
    the IPFS connection check) is created on first use only, so commands
    such as parse never touch the network.
    """
    settings: Settings
    _fs: Optional[RandomFS] = None

    @classmethod
    def from_env(cls) -> CLIContext:
        """Create CLI context from environment variables."""
        return cls(settings=create_settings_from_env())

    @classmethod
    def with_fake_store(cls) -> CLIContext:
        """Create a context backed by an in-memory content store."""
        from .storage.fakes import FakeContentStore

        settings = create_settings_from_env()
        return cls(settings=settings, _fs=RandomFS(settings, FakeContentStore()))

    @property
    def fs(self) -> RandomFS:
        """Get or create the RandomFS instance (lazy initialization)."""
        if self._fs is None:
            self._fs = create_randomfs(self.settings)
        return self._fs
