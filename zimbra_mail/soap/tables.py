"""Fixed Zimbra code tables: address roles, message flags, search sort orders."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterator, Mapping

from zimbra_mail.errors import UnknownCodeError


class CodeTable:
    """Immutable two-way mapping between single-letter wire codes and names."""

    def __init__(self, kind: str, names_by_code: Mapping[str, str]):
        self.kind = kind
        self._names = MappingProxyType(dict(names_by_code))
        self._codes = MappingProxyType({name: code for code, name in names_by_code.items()})
        if len(self._codes) != len(self._names):
            raise ValueError(f"{kind} table maps two codes to the same name")

    def name(self, code: str) -> str:
        try:
            return self._names[code]
        except KeyError:
            raise UnknownCodeError(f"Unknown {self.kind} code {code!r}") from None

    def code(self, name: str) -> str:
        try:
            return self._codes[name]
        except KeyError:
            raise UnknownCodeError(f"Unknown {self.kind} {name!r}") from None

    def names(self) -> tuple[str, ...]:
        return tuple(self._names.values())

    def codes(self) -> tuple[str, ...]:
        return tuple(self._names)

    def __contains__(self, code: object) -> bool:
        return code in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)


# https://files.zimbra.com/docs/soap_api/8.8.15/api-reference/zimbraMail/SendMsg.html#tbl-SendMsgRequest-m-e-t
ADDRESS_ROLES = CodeTable(
    "address role",
    {
        "f": "from",
        "t": "to",
        "c": "cc",
        "b": "bcc",
        "r": "reply-to",
        "s": "sender",  # also read-receipt
        "n": "notification",  # read-receipt notification
        "rf": "resent-from",
    },
)

# https://files.zimbra.com/docs/soap_api/8.8.15/api-reference/zimbraMail/SendMsg.html#tbl-SendMsgResponse-m-f
MESSAGE_FLAGS = CodeTable(
    "message flag",
    {
        "u": "Unread",
        "f": "Flagged",
        "a": "Has attachment",
        "r": "Replied",
        "s": "Sent by me",
        "w": "Forwarded",
        "v": "Calendar invite",
        "d": "Draft",
        "x": "IMAP-Deleted",
        "n": "Notification sent",
        "!": "Urgent",
        "?": "Low-priority",
        "+": "Priority",
    },
)

# https://files.zimbra.com/docs/soap_api/8.8.15/api-reference/zimbraMail/Search.html#tbl-SearchRequest-sortBy
SORT_ORDERS = (
    "none",  # no cursor possible
    "dateAsc", "dateDesc",
    "subjAsc", "subjDesc",
    "nameAsc", "nameDesc",
    "rcptAsc", "rcptDesc",
    "attachAsc", "attachDesc",
    "flagAsc", "flagDesc",
    "priorityAsc", "priorityDesc",
    "idAsc", "idDesc",
    "readAsc", "readDesc",
)
