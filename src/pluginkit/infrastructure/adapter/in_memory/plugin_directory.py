import logging
from collections.abc import Iterator
from typing import Any

from pluginkit.application.adapter import load_message_bundle
from pluginkit.application.port import MessageBundle, PluginDirectory
from pluginkit.application.service import PluginResources
from pluginkit.domain.exception import CommandNotFoundError, MissingMessageError
from pluginkit.domain.value_object import CORE_BUNDLE_BASE_NAME, Settings
from pluginkit.infrastructure.adapter.package.resource_locator import PackageResourceLocator

logger = logging.getLogger(__name__)


class InMemoryPluginDirectory(PluginDirectory):
    """Keeps every plugin's resources in a dict keyed by plugin name."""

    def __init__(self, settings: Settings | None = None, core_bundle: MessageBundle | None = None):
        """
        :param settings: Process-wide settings, defaults to empty settings
        :type settings: Settings | None
        :param core_bundle: Messages shared by all plugins, defaults to the bundled core messages
        :type core_bundle: MessageBundle | None
        """
        self.settings = settings if settings is not None else Settings()
        self._core_bundle = core_bundle
        self._registry: dict[str, PluginResources] = {}

    @property
    def locale(self) -> str:
        return self.settings.resolve_locale()

    @property
    def core_bundle(self) -> MessageBundle:
        if self._core_bundle is None:
            locator = PackageResourceLocator.for_package("pluginkit")
            self._core_bundle = load_message_bundle(locator, CORE_BUNDLE_BASE_NAME, self.locale)
        return self._core_bundle

    def add_plugin_resources(self, resources: PluginResources) -> None:
        self._registry[resources.name] = resources
        logger.info("Registered plugin resources: %s", resources.name)

    def get_plugin_resources(self, name: str) -> PluginResources:
        try:
            return self._registry[name]
        except KeyError:
            raise KeyError(self.get_message("plugin.not.found", name)) from None

    def plugin_names(self) -> list[str]:
        return list(self._registry)

    def _bundles(self) -> Iterator[MessageBundle]:
        yield self.core_bundle
        for resources in self._registry.values():
            try:
                bundle = resources.get_resource_bundle()
            except MissingMessageError:
                logger.debug("Plugin '%s' has no message bundle", resources.name)
                continue
            except Exception:
                logger.warning("Error loading message bundle for plugin '%s'", resources.name, exc_info=True)
                continue
            yield bundle

    def get_message(self, key: str, *args: Any) -> str:
        for bundle in self._bundles():
            if key in bundle:
                return bundle.format(key, *args)
        return key

    def get_command(self, name: str) -> Any:
        """
        Returns a command from whichever plugin registered it.

        :param name: The command name
        :type name: str
        :returns: The command instance
        :rtype: Any
        :raises CommandNotFoundError: If no plugin registered the command
        """
        for resources in self._registry.values():
            if resources.contains_command(name):
                return resources.get_command(name)
        raise CommandNotFoundError(self.get_message("command.not.found", name), name)

    def get_property(self, name: str, default: str | None = None) -> str | None:
        return self.settings.get_property(name, default)

    def close(self) -> None:
        for resources in self._registry.values():
            resources.close()
