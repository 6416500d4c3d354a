class PluginResourcesError(Exception):
    """Base class for all plugin resource errors."""


class CommandNotFoundError(PluginResourcesError, LookupError):
    """Raised when a command name was never registered."""

    def __init__(self, message: str, command_name: str):
        super().__init__(message)
        self.command_name = command_name


class MissingMessageError(PluginResourcesError, KeyError):
    """Raised when a message bundle or a key inside it cannot be found."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.key = key

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0])


class ResourceLookupError(PluginResourcesError, RuntimeError):
    """Raised when resolving or opening a resource fails unexpectedly."""
