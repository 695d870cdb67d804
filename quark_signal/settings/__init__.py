import importlib
import os

from dotenv import load_dotenv

from quark_signal.core.exceptions import ConfigurationError

load_dotenv()


def load_settings(module_path=None):
    """Import the selected settings module and reject invalid values early.

    The module comes from ``QUARK_SIGNAL_SETTINGS_MODULE`` unless given
    explicitly; it must expose a module-level ``settings`` object.
    """
    module_path = module_path or os.environ.get(
        "QUARK_SIGNAL_SETTINGS_MODULE",
        "quark_signal.settings.base",
    )
    module = importlib.import_module(module_path)
    loaded = getattr(module, "settings")

    errors = loaded.validate()
    if errors:
        raise ConfigurationError(f"Invalid settings in {module_path}: {errors}")
    return loaded


settings = load_settings()

__all__ = ["settings", "load_settings"]
