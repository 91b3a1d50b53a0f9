import logging
from dataclasses import dataclass
from typing import Iterator, Optional

from .header import HEADER_SIZE, FrameHeader, decode_header

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Frame:
    header: FrameHeader
    data: memoryview  # view over the source buffer, not a copy
    offset: int


def find_sync(data, start: int = 0) -> Optional[int]:
    """Return the offset of the next 12-bit sync pattern at or after ``start``."""
    for idx in range(start, len(data) - 1):
        if data[idx] == 0xFF and (data[idx + 1] & 0xF0) == 0xF0:
            return idx
    return None


def iter_frames(data) -> Iterator[Frame]:
    """Lazily yield the frames found in ``data``.

    Each frame's data runs from its own start up to the start of the next
    confirmed frame, so bytes that sit between frames stay attached to the
    frame before them. Bytes in front of the first frame belong to it too.
    The last frame runs to the end of the buffer. False sync matches are
    skipped one byte at a time; after a confirmed header the scan resumes
    past the frame body.
    """
    view = memoryview(data)
    prev_start = 0
    search_from = 0
    pending: Optional[FrameHeader] = None
    emitted = 0; skipped = 0

    while True:
        idx = find_sync(view, search_from)
        if idx is None:
            break
        header = decode_header(view[idx:idx + HEADER_SIZE])
        if header is None:
            skipped += 1
            search_from = idx + 1
            continue
        if pending is not None:
            yield Frame(header=pending, data=view[prev_start:idx], offset=prev_start)
            emitted += 1
            prev_start = idx
        pending = header
        search_from = idx + header.frame_size

    if pending is not None:
        yield Frame(header=pending, data=view[prev_start:], offset=prev_start)
        emitted += 1

    logger.debug("Scanned %d bytes: %d frames, %d false syncs skipped", len(view), emitted, skipped)
