import locale
import os
from collections.abc import Mapping

import msgspec

from pluginkit.domain.service import derive_short_name

OPTION_SUFFIX = ".options"
USAGE_SUFFIX = ".usage"

PLUGIN_PROPERTIES = "plugin.properties"
PLUGIN_PROPERTIES_ENCODING = "latin-1"
VIM_FILES_PROPERTY = "vim.files"
OVERRIDE_SUBDIRECTORY = "eclim"

CORE_BUNDLE_BASE_NAME = "resources.messages"

ENV_VIM_FILES = "PLUGINKIT_VIM_FILES"
ENV_LOCALE = "PLUGINKIT_LOCALE"


class PluginName(msgspec.Struct, frozen=True, forbid_unknown_fields=True):
    """Fully qualified plugin name and the short name used to scope resources."""

    name: str
    short_name: str

    @classmethod
    def parse(cls, name: str) -> "PluginName":
        return cls(name=name, short_name=derive_short_name(name))


class Settings(msgspec.Struct, forbid_unknown_fields=True):
    """
    Process-wide configuration shared by every plugin registry.

    ``system_properties`` take precedence over any plugin's own
    ``plugin.properties``. ``locale`` selects message bundles; when unset the
    interpreter's current locale is used.
    """

    system_properties: dict[str, str] = msgspec.field(default_factory=dict)
    locale: str | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Builds settings from environment variables.

        :param environ: Mapping to read from, defaults to ``os.environ``
        :type environ: Mapping[str, str] | None
        :returns: Settings populated from the environment
        :rtype: Settings
        """
        environ = os.environ if environ is None else environ
        properties = {}
        if environ.get(ENV_VIM_FILES):
            properties[VIM_FILES_PROPERTY] = environ[ENV_VIM_FILES]
        return cls(system_properties=properties, locale=environ.get(ENV_LOCALE) or None)

    def get_property(self, name: str, default: str | None = None) -> str | None:
        return self.system_properties.get(name, default)

    def resolve_locale(self) -> str:
        if self.locale:
            return self.locale
        return locale.getlocale()[0] or ""
