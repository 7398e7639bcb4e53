"""Compiled once at import; read-only and safe to share between threads."""

import re

from mailaddr.domain.constants import QUOTE_CHARS

# "wei wa>ng < onevcat <addr>" のような入れ子の "<" 以前を切り捨てる
LESS_THAN_OP_RE = re.compile(r"^[^<]*<\s*")

STRICT_EMAIL_RE = re.compile(r"^[A-Z0-9a-z._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,64}")

LOOSE_EMAIL_RE = re.compile(r"\s*\b[^@\s]+@[^\s]+\b\s*")

# 前後が同じ引用符の場合だけ外す（"a@b.com' のような食い違いはそのまま残す）
QUOTED_EMAIL_RE = re.compile("([" + re.escape("".join(QUOTE_CHARS)) + r"]).+@.+\1")


def truncate_unexpected_less_than(value: str) -> str:
    return LESS_THAN_OP_RE.sub("", value, count=1)


def is_email(value: str) -> bool:
    return STRICT_EMAIL_RE.match(value) is not None


def trim_quote(value: str) -> str:
    """Strip one pair of matching quotes around a value that contains "@"."""
    if QUOTED_EMAIL_RE.fullmatch(value):
        return value[1:-1]
    return value
