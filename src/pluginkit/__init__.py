"""
pluginkit - Plugin resource registry

Gives each plugin of an IDE integration one place to register its commands
and to look up its properties, localized messages and resources, with a user
override directory taking precedence over the resources the plugin ships.
"""

from pluginkit.application.service import PluginResources, load_settings
from pluginkit.domain.exception import (
    CommandNotFoundError,
    MissingMessageError,
    PluginResourcesError,
    ResourceLookupError,
)
from pluginkit.domain.port import Command
from pluginkit.domain.value_object import Settings
from pluginkit.factory import create, create_directory
from pluginkit.infrastructure.adapter.in_memory.plugin_directory import InMemoryPluginDirectory
from pluginkit.infrastructure.adapter.package.resource_locator import PackageResourceLocator

__all__ = [
    "Command",
    "PluginResources",
    "InMemoryPluginDirectory",
    "PackageResourceLocator",
    "Settings",
    "create",
    "create_directory",
    "load_settings",
    "PluginResourcesError",
    "CommandNotFoundError",
    "MissingMessageError",
    "ResourceLookupError",
]
