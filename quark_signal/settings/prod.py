import os

from quark_signal.settings.base import Settings, _int_from_env

PROD_MAX_DISPATCH_DEPTH = 32


class ProdSettings(Settings):
    """Production: quieter logs and a tighter guard on runaway dispatch loops."""

    def __init__(self) -> None:
        super().__init__()
        self.environment = "prod"
        self.log_level = os.environ.get("LOG_LEVEL", "WARNING").upper()
        self.max_dispatch_depth = _int_from_env(
            "SIGNAL_MAX_DISPATCH_DEPTH", PROD_MAX_DISPATCH_DEPTH
        )


settings = ProdSettings()
