import os

from quark_signal.core.exceptions import ConfigurationError

DEFAULT_MAX_DISPATCH_DEPTH = 128


def _int_from_env(name: str, default: int) -> int:
    raw = os.environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc


class Settings:
    """Django-inspired settings container with explicit configuration."""

    def __init__(self) -> None:
        self.environment = os.environ.get("QUARK_SIGNAL_ENV", "base")
        self.log_level = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Nested dispatch ceiling; kept well under the interpreter's
        # recursion limit since every level costs at least two frames.
        self.max_dispatch_depth = _int_from_env(
            "SIGNAL_MAX_DISPATCH_DEPTH", DEFAULT_MAX_DISPATCH_DEPTH
        )

    def validate(self) -> dict:
        """Validate configuration and return any errors."""
        errors = {}

        if self.max_dispatch_depth < 1:
            errors["max_dispatch_depth"] = (
                "SIGNAL_MAX_DISPATCH_DEPTH must be a positive integer, "
                f"got {self.max_dispatch_depth!r}"
            )

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors["log_level"] = f"Unknown LOG_LEVEL {self.log_level!r}"

        return errors


settings = Settings()
