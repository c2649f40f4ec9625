"""
Tests des interfaces port (ABC) et des objets du transport.
"""

from dataclasses import FrozenInstanceError

import pytest

from src.core.ports import IFileSystem, IMediaToolkit, IMessagingTransport
from src.core.ports.transport import AlbumEntry, TransportHandle
from src.core.value_objects import MediaKind


@pytest.mark.parametrize("port", [IFileSystem, IMediaToolkit, IMessagingTransport])
def test_ports_are_abstract(port) -> None:
    """Les ports ne peuvent pas etre instancies directement."""
    with pytest.raises(TypeError):
        port()


def test_transport_handle_is_frozen() -> None:
    handle = TransportHandle(file_id="abc", kind=MediaKind.PHOTO)
    with pytest.raises(FrozenInstanceError):
        handle.file_id = "other"


def test_album_entry_defaults() -> None:
    entry = AlbumEntry(handle=TransportHandle(file_id="abc", kind=MediaKind.VIDEO))
    assert entry.caption == ""
    assert entry.width is None and entry.height is None
