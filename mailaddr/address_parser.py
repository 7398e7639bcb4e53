from typing import List

from mailaddr.domain.address import Address
from mailaddr.domain.address_list import AddressList


def parse(text: str) -> List[Address]:
    """Parse a To/From/Cc style header value. Never fails on str input."""
    return AddressList.from_raw_string(text).values


def parse_email_addresses(text: str) -> List[str]:
    """Unique mailbox address strings found in `text`, groups flattened."""
    return AddressList.from_raw_string(text).emails()
