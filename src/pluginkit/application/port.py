from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, BinaryIO

from pluginkit.domain.exception import MissingMessageError
from pluginkit.domain.service import format_message

if TYPE_CHECKING:
    from pluginkit.application.service import PluginResources


class ResourceLocator(ABC):
    """Abstract interface for looking up resources bundled with a plugin."""

    @abstractmethod
    def locate(self, resource: str) -> str | None:
        """
        Resolve a bundled resource to a directly readable URL.

        :param resource: Resource path relative to the plugin's root
        :type resource: str
        :returns: A file:// URL, or None if the plugin bundles no such resource
        :rtype: str | None
        """

    @abstractmethod
    def open(self, resource: str) -> BinaryIO | None:
        """
        Open a bundled resource for binary reading.

        :param resource: Resource path relative to the plugin's root
        :type resource: str
        :returns: An open binary stream, or None if the resource is missing
        :rtype: BinaryIO | None
        """

    def close(self) -> None:
        """Release anything acquired while resolving resources."""


class MessageBundle(ABC):
    """Abstract locale-resolved table of message templates."""

    base_name: str
    locale: str

    @abstractmethod
    def get_string(self, key: str) -> str:
        """
        Return the raw template for a key.

        :param key: The message key
        :type key: str
        :returns: The message template
        :rtype: str
        :raises MissingMessageError: If the bundle has no such key
        """

    @abstractmethod
    def keys(self) -> list[str]:
        """Return every key defined by the bundle."""

    def __contains__(self, key: object) -> bool:
        return key in self.keys()

    def format(self, key: str, *args: Any) -> str:
        """
        Look up a template and substitute positional arguments into it.

        :param key: The message key
        :type key: str
        :param args: Values for the ``{0}``, ``{1}``, ... placeholders
        :returns: The formatted message
        :rtype: str
        :raises MissingMessageError: If the bundle has no such key
        """
        return format_message(self.get_string(key), *args)

    def _missing(self, key: str) -> MissingMessageError:
        return MissingMessageError(f"Can't find resource for bundle {self.base_name}, key {key}", key)


class PluginDirectory(ABC):
    """Abstract registry of every plugin's resources, shared process-wide."""

    @property
    @abstractmethod
    def locale(self) -> str:
        """The locale used to resolve message bundles."""

    @abstractmethod
    def add_plugin_resources(self, resources: "PluginResources") -> None:
        """
        Register a plugin's resources under the plugin's name.

        :param resources: The initialized plugin resources
        :type resources: PluginResources
        """

    @abstractmethod
    def get_plugin_resources(self, name: str) -> "PluginResources":
        """
        Return the resources registered for a plugin name.

        :raises KeyError: If no plugin is registered under the name
        """

    @abstractmethod
    def get_message(self, key: str, *args: Any) -> str:
        """
        Format a message from any known bundle.

        :param key: The message key
        :type key: str
        :param args: Positional arguments for the template
        :returns: The formatted message, or ``key`` itself if no bundle defines it
        :rtype: str
        """

    @abstractmethod
    def get_property(self, name: str, default: str | None = None) -> str | None:
        """
        Return a process-wide property.

        :param name: The property name
        :type name: str
        :param default: Value returned when the property is not set
        :type default: str | None
        :returns: The property value or ``default``
        :rtype: str | None
        """
