from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class Op:
    """A single operator character emitted by the tokenizer."""

    value: str


@dataclass(frozen=True)
class Text:
    """A run of literal text between operators."""

    value: str


Node = Union[Op, Text]
