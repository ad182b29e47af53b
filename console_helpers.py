"""
Console Helpers
===============

Small stateless helpers shared by the command-line tools: reading a line from
the user, cleaning up pasted file paths, and printing colored text with rich.

Styles are carried by the rich ``Text`` objects themselves, so there is no
global "current color" to reset after a segment is printed.
"""

from typing import Optional, TextIO

from rich.console import Console
from rich.text import Text


# Palette used across the tools. Unknown names fall back to the default.
STYLES = {
    "red": "red",
    "green": "green",
    "yellow": "yellow",
    "cyan": "cyan",
}
DEFAULT_STYLE = "white"


def prompt_line(
    console: Console,
    prompt: str,
    stream: Optional[TextIO] = None,
) -> Optional[str]:
    """
    Print a prompt and read one line of input.

    Args:
        console: Console used to display the prompt
        prompt: Prompt text, a single space is appended
        stream: Optional stream to read from instead of the terminal

    Returns:
        The line without its line ending, or None when the line is empty

    Raises:
        EOFError: When the input is exhausted
    """
    line = console.input(f"{prompt} ", markup=False, stream=stream)

    # Console.input keeps the newline when reading from a stream and
    # returns "" at end of stream instead of raising like input() does
    if stream is not None:
        if not line:
            raise EOFError("No more input")
        line = line.rstrip("\r\n")

    return line or None


def strip_surrounding_quotes(path: Optional[str]) -> Optional[str]:
    """Remove one leading and one trailing double quote, as pasted from a file browser."""
    if not path:
        return None

    if path.startswith('"'):
        path = path[1:]
    if path.endswith('"'):
        path = path[:-1]

    return path or None


def apply_style(text: str, color: str) -> Text:
    """Return ``text`` styled with one of the palette colors."""
    return Text(text, style=STYLES.get(color, DEFAULT_STYLE))


def print_styled(console: Console, text: str, color: str, end: str = "\n") -> None:
    console.print(apply_style(text, color), end=end, soft_wrap=True)
