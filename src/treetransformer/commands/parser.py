"""
Parser for interactive session commands.

Supported commands (case-insensitive):
    ADD(<parent>, <child>)   add a node; ADD(<index>) creates a root
    REMOVE(<index>)          remove a leaf
    SAVE <file>.tt           serialize the current tree
    LOAD <file>.tt           replace the current tree with a serialized one
    DIFF <file>.tt           print the edit script from the current tree to a serialized one
    SHOW                     print the current tree
    HELP                     print the command summary
    EXIT                     leave the session
"""

import re
from dataclasses import dataclass
from enum import Enum

from treetransformer.exceptions import TreeTransformerError


class CommandType(Enum):
    """Type of session command."""

    ADD = "add"
    REMOVE = "remove"
    SAVE = "save"
    LOAD = "load"
    DIFF = "diff"
    SHOW = "show"
    HELP = "help"
    EXIT = "exit"


class CommandParseError(TreeTransformerError):
    """Exception raised when a session command cannot be parsed."""

    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Invalid command received: {command.strip()!r}")


@dataclass(frozen=True)
class ParsedCommand:
    """A parsed session command and its arguments."""

    command_type: CommandType
    arguments: tuple[str | int, ...] = ()


_INDEX = r"[+-]?[0-9]+"


class CommandParser:
    """Parser for session commands."""

    ADD_PATTERN = re.compile(
        rf"^add\s*\(\s*(?P<first>{_INDEX})\s*(?:,\s*(?P<second>{_INDEX})\s*)?\)$",
        re.IGNORECASE,
    )
    REMOVE_PATTERN = re.compile(
        rf"^remove\s*\(\s*(?P<index>{_INDEX})\s*\)$", re.IGNORECASE
    )
    PATH_PATTERN = re.compile(r"^(?P<name>save|load|diff)\s+(?P<path>\S.*)$", re.IGNORECASE)
    BARE_PATTERN = re.compile(r"^(?P<name>show|help|exit)$", re.IGNORECASE)

    def parse(self, command: str) -> ParsedCommand:
        """
        Parse a single command line.

        Params:
            command: Raw line entered by the user

        Returns:
            The parsed command

        Raises:
            CommandParseError: If the line is not a supported command
        """
        line = command.strip()

        match = self.ADD_PATTERN.match(line)
        if match:
            if match.group("second") is None:
                return ParsedCommand(CommandType.ADD, (int(match.group("first")),))
            return ParsedCommand(
                CommandType.ADD, (int(match.group("first")), int(match.group("second")))
            )

        match = self.REMOVE_PATTERN.match(line)
        if match:
            return ParsedCommand(CommandType.REMOVE, (int(match.group("index")),))

        match = self.PATH_PATTERN.match(line)
        if match:
            command_type = CommandType(match.group("name").lower())
            return ParsedCommand(command_type, (match.group("path").strip(),))

        match = self.BARE_PATTERN.match(line)
        if match:
            return ParsedCommand(CommandType(match.group("name").lower()))

        raise CommandParseError(command)


def parse_command(command: str) -> ParsedCommand:
    """
    Convenience function to parse a command string.

    Raises:
        CommandParseError: If the command is malformed or unknown
    """
    parser = CommandParser()
    return parser.parse(command)
