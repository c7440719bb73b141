"""
Exception classes for CL command text processing.

This module defines specific exception types for the error conditions that can
occur while lexing and parsing command text, building parameter schemas, and
loading layout configuration.
"""

from dataclasses import dataclass


@dataclass
class ErrorContext:
    """
    Location information for syntax errors.

    Params:
        command_text: The command text that was being processed
        position: 0-based character offset of the problem, if known
        keyword: Parameter keyword being processed, if any
    """

    command_text: str | None = None
    position: int | None = None
    keyword: str | None = None

    def format_location(self) -> str:
        """
        Format location information as an indented block.

        Returns:
            Multi-line string with column, parameter and a caret under the
            offending character when the position is known
        """
        lines = []

        if self.position is not None:
            lines.append(f"  at column {self.position + 1}")

        if self.keyword:
            lines.append(f"  in parameter {self.keyword}")

        if self.command_text:
            lines.append(f"  command: {self.command_text}")
            if self.position is not None and self.position <= len(self.command_text):
                lines.append("  " + " " * (len("command: ") + self.position) + "^")

        return "\n".join(lines)


class CLPrompterError(Exception):
    """Base exception for all clprompter errors."""

    pass


class CLSyntaxError(CLPrompterError):
    """Raised when command text cannot be turned into a command tree."""

    def __init__(self, reason: str, context: ErrorContext | None = None):
        """
        Initialize the exception.

        Params:
            reason: What went wrong
            context: Optional location information appended to the message
        """
        self.reason = reason
        self.context = context

        message = reason
        if context:
            location_info = context.format_location()
            if location_info:
                message = f"{reason}\n{location_info}"
        super().__init__(message)


class LexError(CLSyntaxError):
    """Raised for an unterminated quoted literal or a missing command token."""

    pass


class ParseError(CLSyntaxError):
    """Raised for unbalanced parentheses or misplaced positional values."""

    pass


class SchemaError(CLPrompterError):
    """Raised when a parameter schema is structurally invalid."""

    def __init__(self, keyword: str, reason: str):
        """
        Initialize the exception.

        Params:
            keyword: The parameter keyword (may be empty for leaf schemas)
            reason: Why the schema is invalid
        """
        self.keyword = keyword
        self.reason = reason
        label = f"'{keyword}'" if keyword else "element"
        super().__init__(f"Invalid schema for {label}: {reason}")


class LayoutConfigError(CLPrompterError):
    """Raised when layout configuration values fail validation."""

    def __init__(self, source: str, reason: str):
        """
        Initialize the exception.

        Params:
            source: Where the configuration came from (mapping, file path)
            reason: Validation details
        """
        self.source = source
        self.reason = reason
        super().__init__(f"Invalid layout configuration from {source}: {reason}")
