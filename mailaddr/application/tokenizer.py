from typing import List, Optional

from mailaddr.domain.constants import ESCAPE_CHAR, OPERATORS
from mailaddr.domain.node import Node, Op, Text


class Tokenizer:
    """Split raw header text into operator and text nodes.

    Walks the input one character at a time. While a paired operator is open
    (`"`, `(`, `<`, `:`) every other operator character is plain text until
    the matching closer shows up. A backslash escapes the next operator or
    backslash; before any other character it is kept as-is.

    One instance per input; not reusable.
    """

    def __init__(self, text: str):
        self.text = text
        self.expecting_op: Optional[str] = None
        self.escaped = False
        self._current: Optional[List[str]] = None
        self._nodes: List[Node] = []

    def tokenize(self) -> List[Node]:
        for char in self.text:
            self._check(char)
        self._flush()
        return [node for node in self._nodes if node.value.strip()]

    def _check(self, char: str) -> None:
        if (char in OPERATORS or char == ESCAPE_CHAR) and self.escaped:
            # エスケープされた演算子/バックスラッシュはそのまま文字として扱う
            self.escaped = False
            self._accumulate(char)
        elif char == self.expecting_op:
            self._emit_op(char)
            self.expecting_op = None
        elif self.expecting_op is None and char in OPERATORS:
            self._emit_op(char)
            self.expecting_op = OPERATORS[char]
        elif char == ESCAPE_CHAR:
            self.escaped = True
        else:
            if self.escaped:
                # 認識できないエスケープはバックスラッシュごと残す
                self._accumulate(ESCAPE_CHAR)
                self.escaped = False
            self._accumulate(char)

    def _accumulate(self, char: str) -> None:
        if self._current is None:
            self._current = []
        self._current.append(char)

    def _emit_op(self, char: str) -> None:
        self._flush()
        self._nodes.append(Op(char))

    def _flush(self) -> None:
        if self._current is not None:
            self._nodes.append(Text("".join(self._current).strip()))
        self._current = None


def tokenize(text: str) -> List[Node]:
    return Tokenizer(text).tokenize()
