"""Pydantic models for the abbreviated Zimbra JSON objects (subset we need).

Field names follow the Python side; aliases are the wire keys.
https://files.zimbra.com/docs/soap_api/8.8.15/api-reference/zimbraMail/Search.html#tbl-SearchResponse-m
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

_WIRE_CONFIG = {"populate_by_name": True, "extra": "ignore"}


class WireAddress(BaseModel):
    """Message address ``e``."""

    address: str = Field(..., alias="a")
    type: str = Field(..., alias="t")  # role code, see tables.ADDRESS_ROLES
    display: Optional[str] = Field(None, alias="d")
    personal: Optional[str] = Field(None, alias="p")

    model_config = _WIRE_CONFIG


class WirePart(BaseModel):
    """MIME part ``mp``; containers carry their children in ``mp`` again."""

    part: str
    content_type: Optional[str] = Field(None, alias="ct")
    size: Optional[int] = Field(None, alias="s")
    disposition: Optional[str] = Field(None, alias="cd")
    filename: Optional[str] = None
    is_body: bool = Field(False, alias="body")
    content: Optional[str] = None
    parts: list[WirePart] = Field(default_factory=list, alias="mp")

    model_config = _WIRE_CONFIG

    @field_validator("is_body", mode="before")
    @classmethod
    def _exactly_true(cls, value: Any) -> bool:
        # 1, "true" and friends do not mark a body
        return value is True

    @field_validator("part", mode="before")
    @classmethod
    def _part_as_text(cls, value: Any) -> Any:
        return str(value) if isinstance(value, int) else value


class WireMessage(BaseModel):
    """Message ``m`` as returned by SearchResponse / GetMsgResponse."""

    id: str
    message_id_header: Optional[str] = Field(None, alias="mid")
    folder_id: Optional[str] = Field(None, alias="l")
    conversation_id: Optional[str] = Field(None, alias="cid")
    date_ms: Optional[int] = Field(None, alias="d")
    subject: Optional[str] = Field(None, alias="su")
    addresses: list[WireAddress] = Field(default_factory=list, alias="e")
    fragment: Optional[str] = Field(None, alias="fr")
    flags: Optional[str] = Field(None, alias="f")
    size: Optional[int] = Field(None, alias="s")
    parts: list[WirePart] = Field(default_factory=list, alias="mp")

    model_config = _WIRE_CONFIG


class WireFolder(BaseModel):
    """Folder as returned by GetFolderResponse."""

    id: str
    name: Optional[str] = None
    path: Optional[str] = Field(None, alias="absFolderPath")
    parent_id: Optional[str] = Field(None, alias="l")
    view: Optional[str] = None
    unread: Optional[int] = Field(None, alias="u")
    count: Optional[int] = Field(None, alias="n")
    size: Optional[int] = Field(None, alias="s")
    folders: list[WireFolder] = Field(default_factory=list, alias="folder")

    model_config = _WIRE_CONFIG
