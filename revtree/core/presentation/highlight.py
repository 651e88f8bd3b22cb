"""Terminal syntax highlighting for 'revtree cat --highlight'.

Uses the 16-color ANSI palette so output follows the user's terminal theme.
"""

from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pygments.lexer import Lexer
    from pygments.token import _TokenType

RESET = "\x1b[0m"
DIM = "\x1b[2m"
DARK_GRAY = "\x1b[90m"
GREEN = "\x1b[92m"
BLUE = "\x1b[94m"
MAGENTA = "\x1b[95m"
CYAN = "\x1b[96m"

# Extensions pygments' filename matching gets wrong or does not know
EXTENSION_TO_LEXER: dict[str, str] = {
    ".h": "c",
    ".tsx": "typescript",
    ".jsx": "javascript",
    ".mod": "text",
}


def _get_lexer(path: PurePath) -> "Lexer":
    """Pick a lexer from the file name, falling back to plain text."""
    from pygments.lexers import get_lexer_by_name, get_lexer_for_filename
    from pygments.util import ClassNotFound

    name = EXTENSION_TO_LEXER.get(path.suffix)
    try:
        if name:
            return get_lexer_by_name(name)
        return get_lexer_for_filename(path.name)
    except ClassNotFound:
        return get_lexer_by_name("text")


def _token_colors() -> dict["_TokenType", str]:
    from pygments.token import Token

    return {
        Token.Keyword: MAGENTA,
        Token.Name.Function: BLUE,
        Token.Name.Class: BLUE,
        Token.String: GREEN,
        Token.Comment: DARK_GRAY,
        Token.Number: CYAN,
    }


def _color_for(token_type: "_TokenType", colors: dict["_TokenType", str]) -> str | None:
    # Token types are hierarchical (Token.Keyword.Namespace); the most
    # specific mapped ancestor wins.
    for ttype in reversed(token_type.split()):
        if ttype in colors:
            return colors[ttype]
    return None


def render_highlighted(code: str, path: PurePath) -> str:
    """Render code with ANSI colors and dimmed line numbers.

    Args:
        code: File content.
        path: File path, used only to choose the lexer.

    Returns:
        Highlighted text, one numbered line per source line, without a
        trailing newline.
    """
    from pygments import lex

    colors = _token_colors()
    lines: list[str] = []
    current: list[str] = []

    for token_type, value in lex(code, _get_lexer(path)):
        color = _color_for(token_type, colors)
        for i, part in enumerate(value.split("\n")):
            if i > 0:
                lines.append("".join(current))
                current = []
            if part:
                current.append(f"{color}{part}{RESET}" if color else part)

    if current or not lines:
        lines.append("".join(current))

    return "\n".join(f"{DIM}{n:>4} {RESET}{line}" for n, line in enumerate(lines, start=1))
