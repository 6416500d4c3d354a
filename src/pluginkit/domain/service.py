"""Pure helpers for plugin names, resource paths, messages and properties text."""

import os
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Any, BinaryIO

_RESOURCES_SEGMENT = re.compile(r"(?:^|[/\\])resources(?=[/\\]|$)")
_PLACEHOLDER = re.compile(r"''|\{(\d+)\}")
_ESCAPE = re.compile(r"\\(u[0-9a-fA-F]{4}|.)", re.DOTALL)
_ESCAPES = {"t": "\t", "n": "\n", "r": "\r", "f": "\f"}
_WHITESPACE = " \t\f"


def derive_short_name(name: str) -> str:
    """Returns the part of a dotted plugin name after the last '.'."""
    return name.rsplit(".", 1)[-1]


def concat_path(*parts: str) -> str:
    """
    Joins path fragments with '/', normalizing backslashes and collapsing
    repeated separators. Empty fragments are skipped.

    :param parts: Path fragments to join
    :returns: The joined path
    :rtype: str
    """
    joined = "/".join(part.replace("\\", "/") for part in parts if part)
    return re.sub(r"/{2,}", "/", joined)


def splice_plugin_name(resource: str, short_name: str) -> str:
    """
    Injects ``short_name`` right after the ``resources`` segment of a resource
    path, so ``/resources/templates/x`` becomes ``/resources/jdt/templates/x``.
    Paths without that segment are returned unchanged.
    """
    match = _RESOURCES_SEGMENT.search(resource)
    if match is None:
        return resource
    end = match.end()
    return concat_path(resource[:end], short_name, resource[end:])


def to_file_url(path: str) -> str:
    """
    Converts a filesystem path into a percent-encoded file:// URL using
    forward slashes. Relative paths are made absolute first.
    """
    return Path(os.path.abspath(path)).as_uri()


def format_message(template: str, *args: Any) -> str:
    """
    Substitutes positional ``{0}``, ``{1}``, ... placeholders in a message
    template. Placeholders without a matching argument are left as they are
    and a doubled single quote collapses to one.

    :param template: The message template
    :type template: str
    :param args: Values substituted by position
    :returns: The formatted message
    :rtype: str
    """

    def repl(match: re.Match) -> str:
        if match.group(1) is None:
            return "'"
        index = int(match.group(1))
        if index >= len(args):
            return match.group(0)
        return str(args[index])

    return _PLACEHOLDER.sub(repl, template)


def _unescape(text: str) -> str:
    def repl(match: re.Match) -> str:
        token = match.group(1)
        if len(token) == 5 and token[0] == "u":
            return chr(int(token[1:], 16))
        return _ESCAPES.get(token, token)

    return _ESCAPE.sub(repl, text)


def _continues(line: str) -> bool:
    # an odd number of trailing backslashes escapes the line break
    return (len(line) - len(line.rstrip("\\"))) % 2 == 1


def _logical_lines(text: str) -> Iterator[str]:
    pending = None
    for raw in text.splitlines():
        line = raw.lstrip(_WHITESPACE)
        if pending is None:
            if not line or line[0] in "#!":
                continue
            pending = ""
        if _continues(line):
            pending += line[:-1]
            continue
        yield pending + line
        pending = None
    if pending:
        yield pending


def _split_entry(line: str) -> tuple[str, str]:
    index = 0
    while index < len(line):
        char = line[index]
        if char == "\\":
            index += 2
            continue
        if char in "=:" or char in _WHITESPACE:
            break
        index += 1
    key = line[:index]
    value = line[index:].lstrip(_WHITESPACE)
    if value[:1] in ("=", ":"):
        value = value[1:].lstrip(_WHITESPACE)
    return _unescape(key), _unescape(value)


def parse_properties(text: str) -> dict[str, str]:
    """
    Parses ``.properties`` text into a dict.

    Supports ``key=value``, ``key: value`` and ``key value`` entries, ``#`` and
    ``!`` comments, backslash line continuations and the usual escapes
    including ``\\uXXXX``. When a key repeats, the last entry wins.

    :param text: The properties file contents
    :type text: str
    :returns: Mapping of keys to values
    :rtype: dict[str, str]
    """
    properties = {}
    for line in _logical_lines(text):
        key, value = _split_entry(line)
        properties[key] = value
    return properties


def load_properties(stream: BinaryIO, encoding: str | None = None) -> dict[str, str]:
    """
    Reads and parses a binary ``.properties`` stream.

    :param stream: The stream to read
    :type stream: BinaryIO
    :param encoding: Fixed encoding to decode with. When None the content is
        decoded as UTF-8, falling back to ISO-8859-1 if it isn't valid UTF-8.
    :type encoding: str | None
    :returns: Mapping of keys to values
    :rtype: dict[str, str]
    """
    data = stream.read()
    if encoding is not None:
        return parse_properties(data.decode(encoding))
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError:
        text = data.decode("latin-1")
    return parse_properties(text)
