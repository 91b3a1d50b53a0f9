import logging
import struct

from .exceptions import UnsupportedTagError

logger = logging.getLogger(__name__)

ID3_HEADER_SIZE = 10
ID3V1_SIZE = 128
ID3_HDR_FMT = ">3s B B B 4s"


def parse_syncsafe(size_bytes) -> int:
    """Decode a 4-byte sync-safe integer (7 significant bits per byte)."""
    return ((size_bytes[0] & 0x7F) << 21) | ((size_bytes[1] & 0x7F) << 14) | ((size_bytes[2] & 0x7F) << 7) | (size_bytes[3] & 0x7F)


def skip_id3(data):
    """Return ``data`` positioned past a leading ID3v2 tag.

    The result is a view over ``data`` when a tag is skipped, and ``data``
    itself when there is no tag.

    Raises:
        UnsupportedTagError: if the buffer starts with an ID3v1 "TAG" marker
    """
    tag = bytes(data[:3])
    if tag == b"TAG":
        raise UnsupportedTagError("Only ID3v2 tags are supported.")
    if tag != b"ID3":
        return data

    view = memoryview(data)
    if len(view) < ID3_HEADER_SIZE:
        logger.warning("ID3 header truncated: %d of %d bytes", len(view), ID3_HEADER_SIZE)
        return view[len(view):]

    _, major, revision, flags, raw_size = struct.unpack_from(ID3_HDR_FMT, view, 0)
    offset = parse_syncsafe(raw_size) + ID3_HEADER_SIZE
    logger.debug("Skipping ID3v2.%d.%d tag (flags=0x%02x), audio starts at %d", major, revision, flags, offset)
    return view[offset:]


def strip_id3v1(data):
    """Drop a trailing 128-byte ID3v1 tag, if present."""
    if len(data) < ID3V1_SIZE or bytes(data[-ID3V1_SIZE:-ID3V1_SIZE + 3]) != b"TAG":
        return data
    return memoryview(data)[:-ID3V1_SIZE]
