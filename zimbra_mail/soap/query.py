"""Structured search to Zimbra query string.

    ["some search"]                                  -> '"some search"'
    {"in": "/Inbox/Subfolder", "date": ">=-3days"}   -> 'in:"/Inbox/Subfolder" date:">=-3days"'

Search tips: https://wiki.zimbra.com/wiki/Zimbra_Web_Client_Search_Tips

Only embedded double quotes are escaped (doubled). Wildcards and colons
inside values reach the server's query grammar untouched.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional, Tuple, Union

# A bare term, or (field, value) where a None or int field means a bare term
SearchTerm = Union[str, Tuple[Optional[Union[str, int]], str]]
SearchSpec = Union[str, Mapping[Union[str, int, None], str], Iterable[SearchTerm]]


def quote(value: str) -> str:
    return '"' + str(value).replace('"', '""') + '"'


def _terms(spec: SearchSpec) -> Iterable[tuple[str | int | None, str]]:
    if isinstance(spec, str):
        yield None, spec
    elif isinstance(spec, Mapping):
        yield from spec.items()
    else:
        for term in spec:
            if isinstance(term, str):
                yield None, term
            else:
                name, value = term
                yield name, value


def build_query(spec: SearchSpec) -> str:
    """Render a search spec left to right, one space-separated token per entry."""
    rendered = []
    for name, value in _terms(spec):
        if name is None or isinstance(name, int):
            rendered.append(quote(value))
        else:
            rendered.append(f"{name}:{quote(value)}")
    return " ".join(rendered)
