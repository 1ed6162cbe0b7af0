"""
Interactive tree editing session.

The session reads one command per line, applies it to its current tree and
reports the outcome. Command failures are reported on the error stream and
never end the session; only `EXIT` or the end of input does.
"""

import logging
from collections.abc import Callable, Iterable
from typing import TextIO

import click

from treetransformer.commands.parser import (
    CommandParseError,
    CommandParser,
    CommandType,
    ParsedCommand,
)
from treetransformer.config import TransformerSettings
from treetransformer.core.tree import Tree
from treetransformer.exceptions import TreeTransformerError
from treetransformer.execution.transformer import diff
from treetransformer.structure.serialization import deserialize_tree, serialize_tree

logger = logging.getLogger(__name__)

GREETING = "Welcome to the interactive mode of Tree Transformer!"
HELP_MESSAGE = """Tree Transformer supports the following commands:
ADD(<int: parent_index>, <int: child_index>), REMOVE(<int: leaf index>), SAVE <filename>.tt, LOAD <filename>.tt, DIFF <filename>.tt, SHOW, HELP, EXIT
Please enter your command:"""


class InteractiveSession:
    """Line-driven editor for a single tree.

    The dispatch table is built per session, so several sessions can run in
    the same process without sharing state.

    Params:
        input_lines: Source of command lines, e.g. a text stream
        output: Stream receiving trees, scripts and help text
        errors: Stream receiving failure messages
        tree: Initial tree; a new empty tree when omitted
        settings: Settings providing the serialized file extension
    """

    def __init__(
        self,
        input_lines: Iterable[str],
        output: TextIO,
        errors: TextIO,
        tree: Tree | None = None,
        settings: TransformerSettings | None = None,
    ):
        self.tree = tree if tree is not None else Tree()
        self.settings = settings or TransformerSettings()
        self._input_lines = input_lines
        self._output = output
        self._errors = errors
        self._parser = CommandParser()
        self._handlers: dict[CommandType, Callable[[ParsedCommand], None]] = {
            CommandType.ADD: self._handle_add,
            CommandType.REMOVE: self._handle_remove,
            CommandType.SAVE: self._handle_save,
            CommandType.LOAD: self._handle_load,
            CommandType.DIFF: self._handle_diff,
            CommandType.SHOW: self._handle_show,
            # the prompt printed after every command is the help text
            CommandType.HELP: lambda command: None,
        }

    def run(self) -> Tree:
        """
        Process commands until `EXIT` or the end of input.

        Returns:
            The tree as left by the last command
        """
        self._echo(GREETING)
        self._echo(HELP_MESSAGE)
        for raw_line in self._input_lines:
            line = raw_line.strip()
            if not line:
                continue
            if not self.execute(line):
                break
        return self.tree

    def execute(self, line: str) -> bool:
        """
        Execute a single command line.

        Params:
            line: The command to run

        Returns:
            False once the session should stop, True otherwise
        """
        try:
            command = self._parser.parse(line)
        except CommandParseError as e:
            logger.debug("Rejected command: %s", e)
            self._echo("Invalid command received!", err=True)
            self._echo(HELP_MESSAGE)
            return True

        if command.command_type is CommandType.EXIT:
            return False

        try:
            self._handlers[command.command_type](command)
        except (TreeTransformerError, OSError) as e:
            logger.debug("Command %r failed", line, exc_info=True)
            self._echo(f"Command execution failed! {e}", err=True)
        self._echo(HELP_MESSAGE)
        return True

    def _echo(self, message: str, err: bool = False) -> None:
        click.echo(message, file=self._errors if err else self._output)

    def _handle_add(self, command: ParsedCommand) -> None:
        if len(command.arguments) == 1:
            self.tree.add_root(command.arguments[0])
        else:
            parent, child = command.arguments
            self.tree.add_node(parent, child)
        self._handle_show(command)

    def _handle_remove(self, command: ParsedCommand) -> None:
        self.tree.remove_node(command.arguments[0])
        self._handle_show(command)

    def _handle_save(self, command: ParsedCommand) -> None:
        path = command.arguments[0]
        serialize_tree(self.tree, path, self.settings.extension)
        logger.info("Saved tree to %s", path)
        self._handle_show(command)

    def _handle_load(self, command: ParsedCommand) -> None:
        self.tree = deserialize_tree(command.arguments[0], self.settings.extension)
        self._handle_show(command)

    def _handle_diff(self, command: ParsedCommand) -> None:
        desired = deserialize_tree(command.arguments[0], self.settings.extension)
        self._echo(str(diff(self.tree, desired)))

    def _handle_show(self, command: ParsedCommand) -> None:
        self._echo(str(self.tree).rstrip("\n"))
