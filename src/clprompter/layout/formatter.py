"""
Reflow formatter.

Lays a command out as fixed-column source lines: label at label_position,
command at left_margin, first parameter at kwd_position, continuation lines
at cont_indent, nothing past right_margin. Lines that continue end with the
continuation character, which strips the next line's leading blanks when the
source is read back.

Break rules:
- Between units the line ends with " +".
- Inside a quoted literal at least long_string_threshold characters long,
  a break may follow one of the literal's own blanks; the line then ends with
  "+" directly, so rejoining restores the literal exactly.
- A unit that fits nowhere is cut at the margin as a last resort (logged).
"""

import logging

from clprompter.core.scan import CharRole, scan
from clprompter.layout.case import NONE, convert_case
from clprompter.layout.config import LayoutConfig
from clprompter.layout.units import command_units
from clprompter.parsing.nodes import CommandNode
from clprompter.parsing.parser import parse_command

logger = logging.getLogger(__name__)

LONG_STRING_THRESHOLD = 50

# Space needed to end a line with " +"
CONTINUATION_RESERVE = 2

COMMENT_OPEN = "/*"
COMMENT_CLOSE = "*/"

# A comment is only started on the command's last line with this much room
MIN_COMMENT_START = 10


class ReflowFormatter:
    """
    Formats command trees into column-constrained lines.

    Params:
        config: Column layout
        long_string_threshold: Minimum length (quotes included) of a quoted
            literal that may be broken at one of its blanks
    """

    def __init__(
        self, config: LayoutConfig, long_string_threshold: int = LONG_STRING_THRESHOLD
    ):
        self.config = config
        self.long_string_threshold = long_string_threshold

    @property
    def _indent(self) -> str:
        return " " * (self.config.cont_indent - 1)

    def _convert(self, text: str) -> str:
        if self.config.case == NONE:
            return text
        return convert_case(text, self.config.case)

    def format(self, node: CommandNode) -> str:
        """Format a command as newline-joined source lines."""
        return "\n".join(self.layout(node))

    def layout(self, node: CommandNode) -> list[str]:
        """
        Format a command into source lines.

        Params:
            node: Parsed command, with optional label and trailing comment

        Returns:
            Lines without trailing newlines; every line fits right_margin
            unless a unit had to be cut by the last-resort split
        """
        lines: list[str] = []
        line = self._first_line(node)
        units = [self._convert(unit) for unit in command_units(node)]
        reserve_last = CONTINUATION_RESERVE if node.comment else 0

        for index, unit in enumerate(units):
            more = index < len(units) - 1
            reserve = CONTINUATION_RESERVE if more else reserve_last
            if index == 0:
                separator = self._first_separator(line)
            else:
                separator = " "
            line = self._place(lines, line, separator, unit, reserve)

        if node.comment:
            line = self._place_comment(lines, line, node.comment)

        lines.append(line)
        return lines

    def _first_line(self, node: CommandNode) -> str:
        config = self.config
        name = self._convert(node.name)
        if not node.label:
            return " " * (config.left_margin - 1) + name

        line = " " * (config.label_position - 1) + self._convert(node.label) + ":"
        pad = max(config.left_margin - 1 - len(line), 1)
        return line + " " * pad + name

    def _first_separator(self, line: str) -> str:
        if self.config.kwd_position <= 0:
            return " "
        return " " * max(self.config.kwd_position - 1 - len(line), 1)

    def _fits(self, text: str, reserve: int) -> bool:
        return len(text) + reserve <= self.config.right_margin

    def _break_between(self, lines: list[str], line: str) -> str:
        lines.append(f"{line.rstrip()} {self.config.continuation_char}")
        return self._indent

    def _place(
        self, lines: list[str], line: str, separator: str, unit: str, reserve: int
    ) -> str:
        """
        Append one unit, emitting finished lines into lines.

        Returns:
            The new current (unfinished) line
        """
        candidate = line + separator + unit
        if self._fits(candidate, reserve):
            return candidate

        breaks = self._string_breaks(unit)
        prefix = line + separator
        start = 0
        margin = self.config.right_margin
        cont = self.config.continuation_char

        while True:
            rest = unit[start:]
            if self._fits(prefix + rest, reserve):
                return prefix + rest

            room = margin - len(prefix) - len(cont)
            usable = [p for p in breaks if start < p <= start + room]
            if usable:
                point = usable[-1]
                lines.append(prefix + unit[start:point] + cont)
                prefix = self._indent
                start = point
                continue

            if prefix != self._indent:
                prefix = self._break_between(lines, prefix)
                continue

            # Degraded path: nothing fits on an empty continuation line
            point = self._forced_split(unit, start, room)
            logger.warning(
                "Unit %r does not fit between columns %d and %d; splitting it",
                unit,
                self.config.cont_indent,
                margin,
            )
            lines.append(prefix + unit[start:point] + cont)
            prefix = self._indent
            start = point

    def _forced_split(self, unit: str, start: int, room: int) -> int:
        """Pick a cut position that does not start the next line with a blank."""
        point = min(start + max(room, 1), len(unit) - 1)
        while point > start + 1 and unit[point] == " ":
            point -= 1
        return point

    def _string_breaks(self, unit: str) -> list[int]:
        """
        Offsets in unit where an in-literal break may happen.

        A break before offset p is allowed when p lies inside a quoted literal
        of at least long_string_threshold characters, unit[p - 1] is one of
        the literal's blanks and unit[p] is not a blank.
        """
        literals: list[tuple[int, int]] = []
        open_at = -1
        for step in scan(unit):
            if step.role == CharRole.QUOTE_OPEN and step.char == "'":
                open_at = step.index
            elif step.role == CharRole.QUOTE_CLOSE and open_at >= 0:
                literals.append((open_at, step.index))
                open_at = -1
        if open_at >= 0:
            literals.append((open_at, len(unit)))

        breaks: list[int] = []
        for begin, end in literals:
            if end - begin + 1 < self.long_string_threshold:
                continue
            for p in range(begin + 2, end):
                if unit[p - 1] == " " and unit[p] != " ":
                    breaks.append(p)
        return breaks

    def _place_comment(self, lines: list[str], line: str, comment: str) -> str:
        """Append the trailing comment, wrapping it onto continuation lines if needed."""
        margin = self.config.right_margin
        if len(line) + 1 + len(comment) <= margin:
            return f"{line} {comment}"

        words = _comment_words(comment)
        opening = f" {COMMENT_OPEN} "
        if margin - len(line) - len(opening) - 3 >= MIN_COMMENT_START:
            line = line + opening
        else:
            line = self._break_between(lines, line) + f"{COMMENT_OPEN} "

        cont = self.config.continuation_char
        closing = f" {COMMENT_CLOSE}"
        placed_on_line = False
        while words:
            word = words[0]
            sep = " " if placed_on_line else ""
            # room for " */" or " +" after the text
            if len(line) + len(sep) + len(word) + len(closing) <= margin:
                line = line + sep + word
                placed_on_line = True
                words.pop(0)
                continue

            if placed_on_line:
                lines.append(f"{line} {cont}")
                line = self._indent
                placed_on_line = False
                continue

            room = max(margin - len(line) - len(closing), 1)
            logger.warning(
                "Comment word %r does not fit before column %d; splitting it",
                word,
                margin,
            )
            lines.append(line + word[:room] + cont)
            words[0] = word[room:]
            line = self._indent

        return line + closing


def _comment_words(comment: str) -> list[str]:
    text = comment.strip()
    if text.startswith(COMMENT_OPEN):
        text = text[len(COMMENT_OPEN) :]
    if text.endswith(COMMENT_CLOSE):
        text = text[: -len(COMMENT_CLOSE)]
    return text.split()


def format_command(
    node: CommandNode,
    config: LayoutConfig,
    long_string_threshold: int = LONG_STRING_THRESHOLD,
) -> str:
    """
    Convenience function to format a parsed command.

    Params:
        node: Parsed command
        config: Column layout
        long_string_threshold: Minimum length of a breakable quoted literal

    Returns:
        Newline-joined source lines
    """
    return ReflowFormatter(config, long_string_threshold).format(node)


def reflow(text: str, config: LayoutConfig) -> str:
    """
    Parse one logical command and format it.

    Params:
        text: Command text with continuations already joined
        config: Column layout

    Returns:
        Newline-joined source lines

    Raises:
        LexError: If the text cannot be tokenized into a command
        ParseError: If the command is structurally invalid
    """
    return format_command(parse_command(text), config)
