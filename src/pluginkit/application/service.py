import logging
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any, BinaryIO
from urllib.request import urlopen

import msgspec
import msgspec.toml

from pluginkit.application.adapter import load_message_bundle
from pluginkit.application.port import MessageBundle, PluginDirectory, ResourceLocator
from pluginkit.domain.exception import CommandNotFoundError, ResourceLookupError
from pluginkit.domain.port import Command
from pluginkit.domain.service import concat_path, load_properties, splice_plugin_name, to_file_url
from pluginkit.domain.value_object import (
    OPTION_SUFFIX,
    OVERRIDE_SUBDIRECTORY,
    PLUGIN_PROPERTIES,
    PLUGIN_PROPERTIES_ENCODING,
    USAGE_SUFFIX,
    VIM_FILES_PROPERTY,
    PluginName,
    Settings,
)

logger = logging.getLogger(__name__)

CommandFactory = Callable[[], Any]


class PluginResources:
    """
    Registry of one plugin's commands, properties, messages and resources.

    A host creates one instance per plugin, calls :meth:`initialize` with the
    plugin's dotted name and then :meth:`register_command` for each command.

    .. note::
        Instances are not thread safe. The host is expected to finish setup
        before handing the registry to concurrent callers.
    """

    def __init__(self, directory: PluginDirectory, locator: ResourceLocator, bundle_base_name: str):
        """
        :param directory: Registry of all plugins, shared by the process
        :type directory: PluginDirectory
        :param locator: Locator for resources bundled with this plugin
        :type locator: ResourceLocator
        :param bundle_base_name: Dotted base name of the plugin's message bundle
        :type bundle_base_name: str
        """
        self.directory = directory
        self.locator = locator
        self.bundle_base_name = bundle_base_name
        self._plugin_name: PluginName | None = None
        self._properties: dict[str, str] | None = None
        self._bundle: MessageBundle | None = None
        self._missing_resources: set[str] = set()
        self._command_factories: dict[str, CommandFactory] = {}
        self._command_instances: dict[str, Any] = {}

    def initialize(self, name: str) -> None:
        """
        Sets the plugin name and registers this instance with the directory.

        Calling it again overwrites the name without clearing any caches.

        :param name: The fully qualified plugin name, e.g. ``org.eclim.jdt``
        :type name: str
        """
        self._plugin_name = PluginName.parse(name)
        self.directory.add_plugin_resources(self)

    @property
    def name(self) -> str | None:
        return self._plugin_name.name if self._plugin_name else None

    @property
    def short_name(self) -> str | None:
        return self._plugin_name.short_name if self._plugin_name else None

    def get_name(self) -> str | None:
        return self.name

    def register_command(self, name: str, factory: CommandFactory) -> None:
        """
        Registers a command factory under a name.

        The directory is asked for the command's options and usage messages;
        a missing options message is logged as an error and a missing usage
        message as a warning. Registration itself always succeeds.

        :param name: The command name
        :type name: str
        :param factory: Zero-argument callable building the command, usually the command class
        :type factory: Callable[[], Any]
        """
        self._command_factories[name] = factory

        options_key = name + OPTION_SUFFIX
        if self.directory.get_message(options_key) == options_key:
            logger.error(self.directory.get_message("command.missing.options", name))

        usage_key = name + USAGE_SUFFIX
        if self.directory.get_message(usage_key) == usage_key:
            logger.warning(self.directory.get_message("command.missing.usage", name))

    def register_commands(self, *commands: type[Command]) -> None:
        """
        Registers command classes under their ``command_name``.

        :param commands: Command classes to register
        :type commands: type[Command]
        :raises ValueError: If a class doesn't define a ``command_name``
        """
        for command in commands:
            self.register_command(command.get_command_name(), command)

    def get_command(self, name: str) -> Any:
        """
        Returns the single instance of a registered command, building it on
        first use.

        :param name: The command name
        :type name: str
        :returns: The command instance
        :rtype: Any
        :raises CommandNotFoundError: If no command is registered under the name
        """
        if name in self._command_instances:
            return self._command_instances[name]
        if not self.contains_command(name):
            raise CommandNotFoundError(self.directory.get_message("command.not.found", name), name)
        command = self._command_factories[name]()
        self._command_instances[name] = command
        return command

    def contains_command(self, name: str) -> bool:
        return name in self._command_factories

    def command_names(self) -> list[str]:
        return list(self._command_factories)

    def get_message(self, key: str, *args: Any) -> str:
        """
        Formats a message from this plugin's bundle.

        :param key: The message key
        :type key: str
        :param args: Values for the ``{0}``, ``{1}``, ... placeholders
        :returns: The formatted message
        :rtype: str
        :raises MissingMessageError: If the bundle or the key is missing
        """
        return self.get_resource_bundle().format(key, *args)

    def get_resource_bundle(self) -> MessageBundle:
        if self._bundle is None:
            self._bundle = load_message_bundle(self.locator, self.bundle_base_name, self.directory.locale)
        return self._bundle

    def get_property(self, name: str, default: str | None = None) -> str | None:
        """
        Looks up a property, preferring process-wide properties over the
        plugin's ``plugin.properties`` and that over ``default``.

        :param name: The property name
        :type name: str
        :param default: Value returned when neither source defines the property
        :type default: str | None
        :returns: The resolved value
        :rtype: str | None
        """
        if self._properties is None:
            self._properties = self._load_properties()
        return self.directory.get_property(name, self._properties.get(name, default))

    def _load_properties(self) -> dict[str, str]:
        try:
            stream = self.locator.open(PLUGIN_PROPERTIES)
            if stream is None:
                raise FileNotFoundError(PLUGIN_PROPERTIES)
            with stream:
                return load_properties(stream, PLUGIN_PROPERTIES_ENCODING)
        except Exception:
            logger.warning(
                "Error loading %s for plugin '%s'", PLUGIN_PROPERTIES, self.name or self.bundle_base_name, exc_info=True
            )
            return {}

    def get_resource(self, resource: str) -> str | None:
        """
        Resolves a resource to a file:// URL.

        The user's override directory (``<vim.files>/eclim``) is searched first,
        with the plugin's short name spliced in after the ``resources``
        segment, then the resources bundled with the plugin. Resources found
        in neither place are remembered and never looked up again.

        :param resource: The resource path, e.g. ``/resources/templates/logger.gst``
        :type resource: str
        :returns: The resource URL, or None if it does not exist
        :rtype: str | None
        :raises ResourceLookupError: If resolution fails unexpectedly
        """
        if resource in self._missing_resources:
            return None

        try:
            override = self._override_path(resource)
            if override is not None and os.path.exists(override):
                return to_file_url(override)

            url = self.locator.locate(resource)
            if url is not None:
                return url
        except Exception as e:
            raise ResourceLookupError(f"Failed to resolve resource '{resource}' for plugin '{self.name}'") from e

        self._missing_resources.add(resource)
        logger.debug("Unable to locate resource in '%s': %s", self.name, resource)
        return None

    def _override_path(self, resource: str) -> str | None:
        vim_files = self.directory.get_property(VIM_FILES_PROPERTY)
        if not vim_files:
            return None
        return concat_path(
            os.path.abspath(vim_files),
            OVERRIDE_SUBDIRECTORY,
            splice_plugin_name(resource, self.short_name or ""),
        )

    def get_resource_as_stream(self, resource: str) -> BinaryIO | None:
        """
        Opens a resource resolved by :meth:`get_resource` for binary reading.

        :param resource: The resource path
        :type resource: str
        :returns: An open stream the caller must close, or None if not found
        :rtype: BinaryIO | None
        :raises ResourceLookupError: If resolving or opening the resource fails
        """
        url = self.get_resource(resource)
        if url is None:
            return None
        try:
            return urlopen(url)
        except Exception as e:
            raise ResourceLookupError(f"Failed to open resource '{resource}' for plugin '{self.name}'") from e

    def close(self) -> None:
        """Releases anything acquired while resolving bundled resources."""
        self.locator.close()


def load_settings(source: dict | str | Path | Settings | None = None) -> Settings:
    """
    Decodes settings from a dict or from a JSON or TOML file.

    :param source: Settings, a plain dict, or a path to a ``.json``/``.toml`` file
    :type source: dict | str | Path | Settings | None
    :returns: The decoded settings, defaults when ``source`` is None
    :rtype: Settings
    :raises msgspec.ValidationError: If the data doesn't match the settings schema
    """
    if source is None:
        return Settings()
    if isinstance(source, Settings):
        return source
    if isinstance(source, dict):
        return msgspec.convert(source, type=Settings)

    path = Path(source)
    data = path.read_bytes()
    if path.suffix == ".toml":
        return msgspec.toml.decode(data, type=Settings)
    return msgspec.json.decode(data, type=Settings)
