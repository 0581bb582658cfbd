"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000, push_interval=0.5)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False
    workers: int = 1
    log_level: str = "info"

    # Templates
    autoescape: bool = True

    # Push streams (seconds between re-renders)
    push_interval: float = 1.0

    # Route prefixes used by App.mount()
    update_prefix: str = "/update"
    stream_prefix: str = "/sse"

    def __post_init__(self) -> None:
        if self.push_interval <= 0:
            msg = f"push_interval must be positive, got {self.push_interval!r}"
            raise ValueError(msg)
