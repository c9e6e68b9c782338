"""Syntax highlighter for code blocks, driven by Pygments lexers and styles."""

import logging
from typing import Dict, List, Tuple

from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.styles import get_style_by_name
from pygments.token import _TokenType
from pygments.util import ClassNotFound

from PySide6.QtGui import QColor, QFont, QSyntaxHighlighter, QTextCharFormat, QTextDocument


# (start column, length, token type) for each highlighted span on a line, in UTF-16 code units
LineTokens = List[Tuple[int, int, _TokenType]]


def utf16_length(text: str) -> int:
    """Get the length of `text` in UTF-16 code units, the unit Qt uses for text positions."""
    return len(text.encode("utf-16-le")) // 2


class CodeBlockHighlighter(QSyntaxHighlighter):
    """Highlights a whole code document using tokens computed once per content change."""

    def __init__(self, parent: QTextDocument, style_name: str = "monokai") -> None:
        """
        Initialize the highlighter.

        Args:
            parent: The document to highlight
            style_name: Name of the Pygments style to take colours from
        """
        super().__init__(parent)
        self._logger = logging.getLogger("CodeBlockHighlighter")

        try:
            self._style = get_style_by_name(style_name)

        except ClassNotFound:
            self._logger.warning("Unknown code style '%s', using default", style_name)
            self._style = get_style_by_name("default")

        self._language: str | None = None
        self._lexer: Lexer = TextLexer(stripnl=False, ensurenl=False)
        self._formats: Dict[_TokenType, QTextCharFormat] = {}
        self._tokens_by_line: List[LineTokens] = []

    def language(self) -> str | None:
        return self._language

    def background_color(self) -> QColor:
        """Get the background colour of the active style."""
        return QColor(self._style.background_color)

    def set_language(self, language: str | None) -> bool:
        """
        Set the language used to lex the code.

        Args:
            language: Language name, or None for plain text

        Returns:
            True if the language changed
        """
        if language == self._language:
            return False

        self._language = language
        self._lexer = self._create_lexer(language)
        self._tokens_by_line = []
        return True

    def set_code(self, code: str) -> None:
        """
        Lex `code` and cache the tokens for each line.

        No highlighting is done here: the caller either sets the document text, which
        highlights every line, or calls `rehighlight` if the text is already in place.
        """
        self._tokens_by_line = self._lex_lines(code)

    def _create_lexer(self, language: str | None) -> Lexer:
        if not language:
            return TextLexer(stripnl=False, ensurenl=False)

        try:
            return get_lexer_by_name(language, stripnl=False, ensurenl=False)

        except ClassNotFound:
            self._logger.debug("No lexer for language '%s'", language)
            return TextLexer(stripnl=False, ensurenl=False)

    def _lex_lines(self, code: str) -> List[LineTokens]:
        lines: List[LineTokens] = [[]]
        column = 0

        for token_type, value in self._lexer.get_tokens(code):
            parts = value.split("\n")
            for i, part in enumerate(parts):
                if i > 0:
                    lines.append([])
                    column = 0

                if part:
                    length = utf16_length(part)
                    lines[-1].append((column, length, token_type))
                    column += length

        return lines

    def _format_for(self, token_type: _TokenType) -> QTextCharFormat:
        text_format = self._formats.get(token_type)
        if text_format is not None:
            return text_format

        style = self._style.style_for_token(token_type)
        text_format = QTextCharFormat()
        if style["color"]:
            text_format.setForeground(QColor(f"#{style['color']}"))

        if style["bold"]:
            text_format.setFontWeight(QFont.Weight.Bold)

        if style["italic"]:
            text_format.setFontItalic(True)

        if style["underline"]:
            text_format.setFontUnderline(True)

        self._formats[token_type] = text_format
        return text_format

    def highlightBlock(self, text: str) -> None:  # pylint: disable=invalid-name
        """Apply highlighting to the given block of text."""
        try:
            block_num = self.currentBlock().blockNumber()
            if block_num >= len(self._tokens_by_line):
                return

            text_length = utf16_length(text)
            for start, length, token_type in self._tokens_by_line[block_num]:
                if start >= text_length:
                    break

                self.setFormat(start, length, self._format_for(token_type))

        except Exception:
            self._logger.exception("highlighting exception")
