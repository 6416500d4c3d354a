from contextlib import ExitStack
from importlib.resources import as_file, files
from importlib.resources.abc import Traversable
from pathlib import Path
from types import ModuleType
from typing import BinaryIO

from pluginkit.application.port import ResourceLocator


class PackageResourceLocator(ResourceLocator):
    """Locates resources shipped inside a Python package (or any Traversable root)."""

    def __init__(self, root: Traversable):
        """
        :param root: Directory the resource paths are relative to
        :type root: Traversable
        """
        self.root = root
        self._stack = ExitStack()
        self._extracted: dict[str, Path] = {}

    @classmethod
    def for_package(cls, package: str | ModuleType) -> "PackageResourceLocator":
        return cls(files(package))

    def _lookup(self, resource: str) -> Traversable | None:
        node = self.root
        for part in resource.replace("\\", "/").split("/"):
            if part:
                node = node.joinpath(part)
        return node if node.is_file() else None

    def locate(self, resource: str) -> str | None:
        """
        Returns a file:// URL for a bundled resource.

        Resources that don't live on the filesystem (zip imports) are extracted
        to a temporary file which stays in place until :meth:`close`.

        :param resource: Resource path relative to the root
        :type resource: str
        :returns: The resource URL or None if missing
        :rtype: str | None
        """
        node = self._lookup(resource)
        if node is None:
            return None
        if isinstance(node, Path):
            return node.resolve().as_uri()
        if resource not in self._extracted:
            self._extracted[resource] = self._stack.enter_context(as_file(node))
        return self._extracted[resource].resolve().as_uri()

    def open(self, resource: str) -> BinaryIO | None:
        node = self._lookup(resource)
        if node is None:
            return None
        return node.open("rb")

    def close(self) -> None:
        self._stack.close()
        self._extracted.clear()
