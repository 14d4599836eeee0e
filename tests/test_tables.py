"""Tests for the address role / flag code tables."""

import pytest

from zimbra_mail.errors import UnknownCodeError
from zimbra_mail.soap.tables import ADDRESS_ROLES, MESSAGE_FLAGS, SORT_ORDERS, CodeTable


def test_address_roles_both_ways():
    assert ADDRESS_ROLES.name("t") == "to"
    assert ADDRESS_ROLES.code("reply-to") == "r"
    assert ADDRESS_ROLES.name("rf") == "resent-from"
    for code in ADDRESS_ROLES:
        assert ADDRESS_ROLES.code(ADDRESS_ROLES.name(code)) == code


def test_unknown_code_and_name():
    with pytest.raises(UnknownCodeError):
        ADDRESS_ROLES.name("zz")
    with pytest.raises(KeyError):
        ADDRESS_ROLES.code("everyone")


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        ADDRESS_ROLES._names["q"] = "quoted"


def test_duplicate_names_rejected():
    with pytest.raises(ValueError):
        CodeTable("test", {"a": "same", "b": "same"})


def test_flags_and_sort_orders():
    assert len(MESSAGE_FLAGS) == 13
    assert MESSAGE_FLAGS.name("!") == "Urgent"
    assert "dateDesc" in SORT_ORDERS
