class ConfigurationError(Exception):
    """Raised when required configuration is missing or invalid."""


class SignalError(Exception):
    """Base class for errors raised by a Signal."""


class InvalidListenerError(SignalError, TypeError):
    """Raised when a non-callable is passed where a listener is expected."""


class DuplicateListenerError(SignalError):
    """Raised when the same callback/context pair is registered twice."""


class ListenerNotFoundError(SignalError, LookupError):
    """Raised when removing a callback/context pair that is not registered."""


class DispatchLimitError(SignalError, RuntimeError):
    """Raised when nested dispatches exceed the configured depth."""
