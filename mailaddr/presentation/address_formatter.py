from typing import Iterable

from mailaddr.domain.address import Address, Group
from mailaddr.domain.constants import ESCAPE_CHAR, OPERATORS


def _needs_quote(name: str) -> bool:
    return any(c in OPERATORS or c == ESCAPE_CHAR for c in name)


def _quote(name: str) -> str:
    if not _needs_quote(name):
        return name
    escaped = name.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2).replace('"', ESCAPE_CHAR + '"')
    return f'"{escaped}"'


def _escape_group_body(members: str) -> str:
    # グループ本体の中では終端の ";" とバックスラッシュだけが特別扱いされる
    closer = OPERATORS[":"]
    return members.replace(ESCAPE_CHAR, ESCAPE_CHAR * 2).replace(closer, ESCAPE_CHAR + closer)


def format_address(address: Address) -> str:
    """Render an address the way `parse` reads it back.

    Mailbox: `name <addr>`, `<addr>` without a name, bare name without an
    address. Group: `name: member, member;`, with `;` and backslashes in the
    members escaped so nested groups and quoted names survive the outer pass.
    """
    name = _quote(address.name)
    if isinstance(address.entry, Group):
        members = _escape_group_body(format_addresses(address.entry.members))
        return f"{name}: {members};" if members else f"{name}:;"

    email = address.entry.address
    if not email:
        return name
    if not name:
        return f"<{email}>"
    return f"{name} <{email}>"


def format_addresses(addresses: Iterable[Address]) -> str:
    return ", ".join(format_address(a) for a in addresses)
