"""Shared fixtures for building plugin resource trees on disk."""

import pytest

from pluginkit.domain.value_object import Settings
from pluginkit.infrastructure.adapter.in_memory.plugin_directory import InMemoryPluginDirectory
from pluginkit.infrastructure.adapter.package.resource_locator import PackageResourceLocator

PLUGIN_FILES = {
    "plugin.properties": "# jdt plugin\nk=file\nlogger.name = org.example.Log\n",
    "messages.properties": (
        "greeting=Hello, {0}!\n"
        "farewell=Goodbye\n"
        "java_format.options=-p project -f file\n"
        "java_format.usage=Formats a java source file.\n"
    ),
    "messages_de.properties": "greeting=Hallo, {0}!\n",
    "resources/templates/logger.gst": "bundled logger template",
}


@pytest.fixture
def write_files():
    """Returns a helper writing a {relative path: text} mapping under a root."""

    def write(root, files):
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return root

    return write


@pytest.fixture
def plugin_root(tmp_path, write_files):
    return write_files(tmp_path / "plugin", PLUGIN_FILES)


@pytest.fixture
def vim_files(tmp_path):
    path = tmp_path / "vim"
    path.mkdir()
    return path


@pytest.fixture
def settings(vim_files):
    return Settings(system_properties={"vim.files": str(vim_files)}, locale="en_US")


@pytest.fixture
def directory(settings):
    return InMemoryPluginDirectory(settings)


@pytest.fixture
def locator(plugin_root):
    locator = PackageResourceLocator(plugin_root)
    yield locator
    locator.close()
