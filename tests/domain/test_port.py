"""
Tests for domain port (Command).

This module tests the Command base class:
- abstract execute method
- command_name lookup
"""

import pytest

from pluginkit.domain.port import Command


class TestCommand:
    """Test cases for Command."""

    def test_command_with_execute(self):
        class EchoCommand(Command):
            command_name = "echo"

            def execute(self, value: str) -> str:
                return value

        assert EchoCommand().execute("hi") == "hi"

    def test_command_without_execute_cannot_be_built(self):
        class InvalidCommand(Command):
            def run(self):
                pass

        with pytest.raises(TypeError, match="abstract"):
            InvalidCommand()

    def test_inherited_execute_is_enough(self):
        class BaseCommand(Command):
            def execute(self):
                return "base"

        class ChildCommand(BaseCommand):
            command_name = "child"

        assert ChildCommand().execute() == "base"
        assert ChildCommand.get_command_name() == "child"

    def test_get_command_name(self):
        class FormatCommand(Command):
            command_name = "java_format"

            def execute(self):
                return None

        assert FormatCommand.get_command_name() == "java_format"

    def test_missing_command_name(self):
        class UnnamedCommand(Command):
            def execute(self):
                return None

        with pytest.raises(ValueError, match="UnnamedCommand does not define a command_name"):
            UnnamedCommand.get_command_name()
