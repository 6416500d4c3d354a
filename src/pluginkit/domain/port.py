from abc import ABC, abstractmethod
from typing import Any


class Command(ABC):
    """
    A named unit of work a plugin exposes to the editor.

    Subclasses set ``command_name`` to be registered through
    ``PluginResources.register_commands``; the registry builds one instance
    per name on first use, so commands need a no-argument constructor.
    """

    command_name: str | None = None

    @classmethod
    def get_command_name(cls) -> str:
        """
        :returns: The name the command is registered under
        :rtype: str
        :raises ValueError: If the class doesn't set ``command_name``
        """
        if not cls.command_name:
            raise ValueError(f"{cls.__name__} does not define a command_name")
        return cls.command_name

    @abstractmethod
    def execute(self, *args, **kwargs) -> Any:
        """Runs the command and returns its result."""
