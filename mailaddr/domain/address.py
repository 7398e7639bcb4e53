from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple, Union


@dataclass(frozen=True)
class Mail:
    """A single mailbox entry. The address may be empty when none was found."""

    address: str

    def __post_init__(self):
        if not isinstance(self.address, str):
            raise TypeError("Mail.address must be a str")


@dataclass(frozen=True, init=False)
class Group:
    """A named group entry (`name: a, b;`). Members keep their input order.

    Members are stored as a tuple so that `Group([a, b]) == Group((a, b))`.
    """

    members: Tuple["Address", ...] = ()

    def __init__(self, members: Iterable["Address"] = ()):
        members = tuple(members)
        for member in members:
            if not isinstance(member, Address):
                raise TypeError("Group members must be Address instances")
        object.__setattr__(self, "members", members)


Entry = Union[Mail, Group]


@dataclass(frozen=True)
class Address:
    """Value object for one parsed header address: a mailbox or a group."""

    name: str
    entry: Entry

    def __post_init__(self):
        if not isinstance(self.name, str):
            raise TypeError("Address.name must be a str")
        if not isinstance(self.entry, (Mail, Group)):
            raise TypeError("Address.entry must be Mail or Group")

    @classmethod
    def mailbox(cls, name: str, address: str) -> "Address":
        return cls(name, Mail(address))

    @classmethod
    def group(cls, name: str, members: Iterable["Address"] = ()) -> "Address":
        return cls(name, Group(members))

    @property
    def is_group(self) -> bool:
        return isinstance(self.entry, Group)

    @property
    def email(self) -> Optional[str]:
        """Mailbox address string, or None for groups."""
        if isinstance(self.entry, Mail):
            return self.entry.address
        return None
