from typing import List

from mailaddr.application.address_parser_service import AddressParserService
from mailaddr.domain.address import Address


class AddressList:
    """Value object for the ordered result of parsing one address header.

    - one entry per top-level candidate, input order preserved
    - groups keep their members nested; see `mailboxes()` to flatten
    """

    def __init__(self, values: List[Address]):
        self.values = values

    @classmethod
    def from_raw_string(cls, text: str) -> "AddressList":
        if not isinstance(text, str):
            raise TypeError(f"header text must be str, not {type(text).__name__}")
        return cls(AddressParserService().parse(text))

    def mailboxes(self) -> List[Address]:
        """Flatten groups (depth-first) into their mailbox addresses."""
        result: List[Address] = []
        stack = list(reversed(self.values))
        while stack:
            address = stack.pop()
            if address.is_group:
                stack.extend(reversed(address.entry.members))
            else:
                result.append(address)
        return result

    def emails(self) -> List[str]:
        unique: List[str] = []
        for address in self.mailboxes():
            email = address.email
            if email and email not in unique:
                unique.append(email)
        return unique

    def to_list(self) -> List[Address]:
        return list(self.values)

    def __len__(self) -> int:
        return len(self.values)
