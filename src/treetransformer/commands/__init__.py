"""
Interactive command processing.

This package contains the session command parser and the interactive session
that applies parsed commands to a tree.
"""

from treetransformer.commands.parser import (
    CommandParseError,
    CommandParser,
    CommandType,
    ParsedCommand,
    parse_command,
)
from treetransformer.commands.repl import InteractiveSession

__all__ = [
    "CommandParseError",
    "CommandParser",
    "CommandType",
    "ParsedCommand",
    "parse_command",
    "InteractiveSession",
]
