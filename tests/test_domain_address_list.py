"""Domain: AddressList value object"""


def test_from_raw_string_keeps_input_order():
    from mailaddr.domain.address import Address
    from mailaddr.domain.address_list import AddressList

    addresses = AddressList.from_raw_string("B <b@example.com>, a@example.com")
    assert addresses.values == [
        Address.mailbox("B", "b@example.com"),
        Address.mailbox("", "a@example.com"),
    ]
    assert len(addresses) == 2
    assert addresses.to_list() == addresses.values


def test_mailboxes_flattens_nested_groups_depth_first():
    from mailaddr.domain.address import Address
    from mailaddr.domain.address_list import AddressList

    a = Address.mailbox("", "a@example.com")
    b = Address.mailbox("B", "b@example.com")
    c = Address.mailbox("", "c@example.com")
    nested = Address.group("Outer", [a, Address.group("Inner", [b]), Address.group("Empty")])

    assert AddressList([nested, c]).mailboxes() == [a, b, c]


def test_emails_skips_empty_and_duplicates_without_lowercasing():
    from mailaddr.domain.address import Address
    from mailaddr.domain.address_list import AddressList

    addresses = AddressList(
        [
            Address.mailbox("", "User@Example.com"),
            Address.mailbox("nobody", ""),
            Address.mailbox("again", "User@Example.com"),
            Address.mailbox("", "user@example.com"),
        ]
    )
    assert addresses.emails() == ["User@Example.com", "user@example.com"]


def test_from_raw_string_rejects_non_string():
    import pytest

    from mailaddr.domain.address_list import AddressList

    with pytest.raises(TypeError, match="str"):
        AddressList.from_raw_string(b"a@example.com")
