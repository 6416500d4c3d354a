import re

from pluginkit.application.port import MessageBundle, ResourceLocator
from pluginkit.domain.exception import MissingMessageError
from pluginkit.domain.service import load_properties


class PropertiesMessageBundle(MessageBundle):
    """Message bundle backed by the merged contents of ``.properties`` files."""

    def __init__(self, base_name: str, messages: dict[str, str], locale: str = ""):
        self.base_name = base_name
        self.locale = locale
        self._messages = dict(messages)

    def get_string(self, key: str) -> str:
        try:
            return self._messages[key]
        except KeyError:
            raise self._missing(key) from None

    def keys(self) -> list[str]:
        return list(self._messages)

    def __contains__(self, key: object) -> bool:
        return key in self._messages


def locale_suffixes(locale: str) -> list[str]:
    """
    Returns bundle file suffixes from least to most specific.

    ``"en_US.UTF-8"`` yields ``["", "_en", "_en_US"]``; encoding and modifier
    parts of the locale are ignored.

    :param locale: A locale name such as ``de_DE`` or ``pt-BR``
    :type locale: str
    :returns: Suffixes to append to the bundle's base path
    :rtype: list[str]
    """
    tag = re.split(r"[.@]", locale, maxsplit=1)[0].replace("-", "_")
    parts = [part for part in tag.split("_") if part]
    return [""] + ["_" + "_".join(parts[: i + 1]) for i in range(len(parts))]


def load_message_bundle(locator: ResourceLocator, base_name: str, locale: str = "") -> PropertiesMessageBundle:
    """
    Loads a bundle by its dotted base name, overlaying locale specific files
    on top of the base file.

    :param locator: Locator for the plugin's bundled resources
    :type locator: ResourceLocator
    :param base_name: Dotted base name, e.g. ``org.eclim.messages``
    :type base_name: str
    :param locale: Locale used to pick the more specific files
    :type locale: str
    :returns: The merged bundle
    :rtype: PropertiesMessageBundle
    :raises MissingMessageError: If not even one bundle file exists
    """
    path = base_name.replace(".", "/")
    messages: dict[str, str] = {}
    found = False
    for suffix in locale_suffixes(locale):
        stream = locator.open(f"{path}{suffix}.properties")
        if stream is None:
            continue
        with stream:
            messages.update(load_properties(stream))
        found = True
    if not found:
        raise MissingMessageError(f"Can't find bundle for base name {base_name}, locale {locale}")
    return PropertiesMessageBundle(base_name, messages, locale)
