"""Upload items and the three kinds of content source they can carry."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from zimbra_mail.errors import UploadError, UploadFailure


@dataclass(frozen=True)
class BufferSource:
    data: bytes


@dataclass(frozen=True)
class FileSource:
    path: Path


@dataclass(frozen=True)
class StreamSource:
    stream: BinaryIO


Source = Union[BufferSource, FileSource, StreamSource]


@dataclass(frozen=True)
class UploadItem:
    """A file to attach: a basename plus where its bytes come from.

    Once uploaded, ``attachment_id`` holds the server id and the item can be
    sent any number of times without uploading again.
    """

    basename: str
    source: Optional[Source] = None
    attachment_id: Optional[str] = None

    @classmethod
    def from_buffer(cls, basename: str, data: bytes) -> "UploadItem":
        return cls(basename, BufferSource(data))

    @classmethod
    def from_file(cls, path: Union[str, Path], basename: Optional[str] = None) -> "UploadItem":
        path = Path(path)
        return cls(basename or path.name, FileSource(path))

    @classmethod
    def from_stream(cls, basename: str, stream: BinaryIO) -> "UploadItem":
        return cls(basename, StreamSource(stream))

    @classmethod
    def uploaded(cls, attachment_id: str, basename: str = "") -> "UploadItem":
        return cls(basename, attachment_id=attachment_id)


def _read_stream(item: UploadItem, stream: BinaryIO) -> bytes:
    if getattr(stream, "closed", False) or not callable(getattr(stream, "read", None)):
        raise UploadError(
            UploadFailure.INVALID_SOURCE,
            f"Upload for {item.basename} failed because stream is not a valid resource",
            basename=item.basename,
        )
    try:
        stream.seek(0)
        data = stream.read()
    except (OSError, ValueError) as e:
        raise UploadError(
            UploadFailure.INVALID_SOURCE,
            f"Upload for {item.basename} failed because stream cannot be rewound or read",
            basename=item.basename,
        ) from e
    if isinstance(data, str):
        raise UploadError(
            UploadFailure.INVALID_SOURCE,
            f"Upload for {item.basename} failed because stream is opened in text mode",
            basename=item.basename,
        )
    return data


def materialize(item: UploadItem) -> bytes:
    """Read the whole source into memory. Streams are rewound first."""
    if not item.basename:
        raise UploadError(UploadFailure.INVALID_SOURCE, "Incorrect upload definition, basename must always be provided")

    source = item.source
    if isinstance(source, BufferSource):
        if not isinstance(source.data, (bytes, bytearray, memoryview)):
            raise UploadError(
                UploadFailure.INVALID_SOURCE,
                f"Upload for {item.basename} failed because buffer holds {type(source.data).__name__}, not bytes",
                basename=item.basename,
            )
        return bytes(source.data)
    if isinstance(source, FileSource):
        try:
            return source.path.read_bytes()
        except OSError as e:
            raise UploadError(
                UploadFailure.INVALID_SOURCE,
                f"Unable to retrieve file {source.path} contents",
                basename=item.basename,
            ) from e
    if isinstance(source, StreamSource):
        return _read_stream(item, source.stream)
    raise UploadError(
        UploadFailure.INVALID_SOURCE,
        f"Incorrect upload definition for {item.basename}, a buffer, file or stream must be provided",
        basename=item.basename,
    )
