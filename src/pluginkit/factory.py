from pathlib import Path
from types import ModuleType

from pluginkit.application.port import PluginDirectory
from pluginkit.application.service import PluginResources, load_settings
from pluginkit.domain.value_object import Settings
from pluginkit.infrastructure.adapter.in_memory.plugin_directory import InMemoryPluginDirectory
from pluginkit.infrastructure.adapter.package.resource_locator import PackageResourceLocator


def create_directory(settings: Settings | dict | str | Path | None = None) -> InMemoryPluginDirectory:
    """
    Creates the process-wide plugin directory.

    :param settings: Settings, a dict, or a path to a JSON/TOML settings file
    :type settings: Settings | dict | str | Path | None
    :returns: An empty plugin directory
    :rtype: InMemoryPluginDirectory
    """
    return InMemoryPluginDirectory(load_settings(settings))


def create(
    name: str,
    package: str | ModuleType,
    bundle_base_name: str,
    directory: PluginDirectory | None = None,
) -> PluginResources:
    """
    Factory function to create and initialize the resources of one plugin.

    :param name: The fully qualified plugin name, e.g. ``org.eclim.jdt``
    :type name: str
    :param package: The package the plugin's resources are bundled in
    :type package: str | ModuleType
    :param bundle_base_name: Dotted base name of the plugin's message bundle
    :type bundle_base_name: str
    :param directory: Directory to register with, a new one is created if omitted
    :type directory: PluginDirectory | None
    :returns: Initialized plugin resources
    :rtype: PluginResources
    """
    if directory is None:
        directory = create_directory()
    resources = PluginResources(
        directory=directory,
        locator=PackageResourceLocator.for_package(package),
        bundle_base_name=bundle_base_name,
    )
    resources.initialize(name)
    return resources
