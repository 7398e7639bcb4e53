import logging
from typing import Callable, Dict, List, Optional, Sequence, Union

from mailaddr.application.tokenizer import tokenize
from mailaddr.domain.address import Address, Group, Mail
from mailaddr.domain.constants import SEPARATORS
from mailaddr.domain.node import Node, Op, Text
from mailaddr.domain.patterns import (
    LOOSE_EMAIL_RE,
    is_email,
    trim_quote,
    truncate_unexpected_less_than,
)

ADDRESS = "address"
COMMENT = "comment"
GROUP = "group"
TEXT = "text"

# 演算子 -> 遷移先の状態（それ以外の演算子は TEXT に戻る）
_TRANSITIONS: Dict[str, str] = {"<": ADDRESS, "(": COMMENT, ":": GROUP}


class _Buckets:
    """Per-candidate accumulation: one ordered list of strings per state."""

    def __init__(self):
        self.address: List[str] = []
        self.comment: List[str] = []
        self.group: List[str] = []
        self.text: List[str] = []

    def append(self, state: str, value: str) -> None:
        if state == ADDRESS:
            self.address.append(value)
        elif state == COMMENT:
            self.comment.append(value)
        elif state == GROUP:
            self.group.append(value)
        else:
            self.text.append(value)

    def promote_comment(self) -> None:
        if not self.text and self.comment:
            self.text = self.comment
            self.comment = []


class _PendingGroup:
    """A group whose member text has not been parsed yet."""

    def __init__(self, name: str, members_text: Optional[str]):
        self.name = name
        self.members_text = members_text
        self.members: List[Union[Address, "_PendingGroup"]] = []
        self.address: Optional[Address] = None


def _built(item: Union[Address, _PendingGroup]) -> Address:
    return item.address if isinstance(item, _PendingGroup) else item


class AddressParserService:
    """Turn header text into an ordered list of `Address`.

    The text is tokenized, split at top-level `,`/`;` into candidates, and
    each candidate is resolved on its own. Group members go through the
    same steps from an explicit work stack, so nesting depth is not limited
    by the interpreter recursion limit.

    Stateless apart from the injected tokenizer; one instance can be shared.
    """

    def __init__(self, tokenizer: Callable[[str], List[Node]] = tokenize):
        self._tokenize = tokenizer

    def parse(self, text: str) -> List[Address]:
        items = self._resolve_text(text)
        self._expand_groups([item for item in items if isinstance(item, _PendingGroup)])
        return [_built(item) for item in items]

    @staticmethod
    def split(nodes: Sequence[Node]) -> List[List[Node]]:
        candidates: List[List[Node]] = []
        current: List[Node] = []
        for node in nodes:
            if isinstance(node, Op) and node.value in SEPARATORS:
                if current:
                    candidates.append(current)
                current = []
            else:
                current.append(node)
        if current:
            candidates.append(current)
        return candidates

    def resolve(self, nodes: Sequence[Node]) -> Optional[Address]:
        item = self._resolve_candidate(nodes)
        if isinstance(item, _PendingGroup):
            self._expand_groups([item])
            return item.address
        return item

    def _resolve_text(self, text: str) -> List[Union[Address, "_PendingGroup"]]:
        candidates = self.split(self._tokenize(text))
        logging.debug(f"アドレス候補: {len(candidates)}件")

        items: List[Union[Address, _PendingGroup]] = []
        for candidate in candidates:
            item = self._resolve_candidate(candidate)
            if item is not None:
                items.append(item)
        return items

    def _expand_groups(self, groups: List["_PendingGroup"]) -> None:
        # 入れ子のグループは再帰せずスタックで展開し、子から順に確定させる
        stack = list(groups)
        created = list(groups)
        while stack:
            group = stack.pop()
            if group.members_text is None:
                continue
            group.members = self._resolve_text(group.members_text)
            children = [m for m in group.members if isinstance(m, _PendingGroup)]
            stack.extend(children)
            created.extend(children)

        for group in reversed(created):
            group.address = Address(group.name, Group(_built(m) for m in group.members))

    def _resolve_candidate(
        self, nodes: Sequence[Node]
    ) -> Union[Address, "_PendingGroup", None]:
        if not nodes:
            return None

        buckets = _Buckets()
        state = TEXT
        is_group = False

        for node in nodes:
            if isinstance(node, Op):
                state = _TRANSITIONS.get(node.value, TEXT)
                if state == GROUP:
                    is_group = True
            elif isinstance(node, Text):
                value = node.value
                if state == ADDRESS:
                    value = truncate_unexpected_less_than(value)
                buckets.append(state, value)

        buckets.promote_comment()

        if is_group:
            return self._build_group(buckets)
        return self._build_mailbox(buckets)

    @staticmethod
    def _build_group(buckets: _Buckets) -> "_PendingGroup":
        name = " ".join(buckets.text)
        members_text = ",".join(buckets.group) if buckets.group else None
        return _PendingGroup(name, members_text)

    def _build_mailbox(self, buckets: _Buckets) -> Address:
        if not buckets.address and buckets.text:
            _extract_strict(buckets)
        if not buckets.address:
            _extract_loose(buckets)

        buckets.promote_comment()

        if len(buckets.address) > 1:
            # 最初のアドレスだけ残し、残りは表示名側へ回す
            keep, *rest = buckets.address
            buckets.text.extend(rest)
            buckets.address = [keep]

        temp_text = " ".join(buckets.text) or None
        temp_address = trim_quote(" ".join(buckets.address)) or None

        address = temp_address or temp_text or ""
        name = temp_text or temp_address or ""
        if address == name:
            if "@" in address:
                name = ""
            else:
                address = ""
        return Address(name, Mail(address))


def _extract_strict(buckets: _Buckets) -> None:
    for index in range(len(buckets.text) - 1, -1, -1):
        if is_email(buckets.text[index]):
            buckets.address.append(buckets.text.pop(index))
            return


def _extract_loose(buckets: _Buckets) -> None:
    for index in range(len(buckets.text) - 1, -1, -1):
        value = buckets.text[index]
        match = LOOSE_EMAIL_RE.search(value)
        if match is None:
            continue
        logging.debug(f"緩い条件でアドレスを抽出: {match.group(0).strip()}")
        buckets.text[index] = value[: match.start()] + value[match.end():]
        buckets.address = [match.group(0).strip()]
        return
