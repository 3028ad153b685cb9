"""Shared CLI context with lazy-initialized dependencies."""

from pathlib import Path

from calfeed.config import FeedConfig
from calfeed.feed_service import FeedService
from calfeed.sources.json_store import JSONRecordStore


class CLIContext:
    """Shared context with lazy-initialized dependencies for CLI commands.

    Usage:
        ctx = CLIContext()
        result = ctx.service.generate(FeedMode.PUBLIC)
    """

    def __init__(
        self,
        verbose: bool = False,
        quiet: bool = False,
        data_dir: Path | None = None,
    ):
        """Initialize CLI context.

        Args:
            verbose: If True, enable info logging on the console
            quiet: If True, suppress non-error output
            data_dir: Optional override for the record store directory
        """
        self.verbose = verbose
        self.quiet = quiet
        self.data_dir = data_dir

        # Lazy-loaded dependencies
        self._config: FeedConfig | None = None
        self._store: JSONRecordStore | None = None
        self._service: FeedService | None = None

    @property
    def config(self) -> FeedConfig:
        """Get configuration (lazy-loaded)."""
        if self._config is None:
            config = FeedConfig.from_env()
            if self.data_dir is not None:
                config = config.model_copy(update={"data_dir": self.data_dir})
            self._config = config
        return self._config

    @property
    def store(self) -> JSONRecordStore:
        """Get record store (lazy-loaded)."""
        if self._store is None:
            self._store = JSONRecordStore(self.config.data_dir)
        return self._store

    @property
    def service(self) -> FeedService:
        """Get feed service (lazy-loaded)."""
        if self._service is None:
            self._service = FeedService(self.store, config=self.config)
        return self._service


# Global context instance (set by Typer callback)
_ctx: CLIContext | None = None


def get_context() -> CLIContext:
    """Get the current CLI context.

    Raises:
        RuntimeError: If context not initialized
    """
    if _ctx is None:
        raise RuntimeError("CLI context not initialized. This should not happen.")
    return _ctx


def set_context(ctx: CLIContext) -> None:
    """Set the global CLI context."""
    global _ctx
    _ctx = ctx
