from pathlib import Path
from typing import Iterable, Iterator

import numpy as np

from .header import ChannelMode
from .id3 import skip_id3, strip_id3v1
from .scanner import Frame, iter_frames


def summarize_frames(frames: Iterable[Frame]) -> dict:
    """Aggregate playback figures over a sequence of frames.

    Returns:
        Dict with keys:
        - total_frames: number of frames
        - padded_frames: frames with the padding bit set
        - duration_ms: summed frame durations
        - average_bitrate_kbps: bitrate weighted by frame duration
        - vbr: True when more than one bitrate occurs
        - stereo: True when any frame is not mono
        - sample_rates: sorted distinct sample rates
        - total_bytes: summed frame data spans
        - valid: True when at least one frame was found
    """
    headers = []
    total_bytes = 0
    for fr in frames:
        headers.append(fr.header)
        total_bytes += len(fr.data)

    if not headers:
        return {"total_frames": 0, "padded_frames": 0, "duration_ms": 0.0, "average_bitrate_kbps": 0.0,
                "vbr": False, "stereo": False, "sample_rates": [], "total_bytes": 0, "valid": False}

    bitrates = np.array([h.bitrate_kbps for h in headers], dtype=np.int64)
    durations = np.array([h.duration_ms for h in headers], dtype=np.float64)
    padded = np.array([h.padded for h in headers], dtype=bool)
    rates = np.unique(np.array([h.sample_rate_hz for h in headers], dtype=np.int64))

    return {
        "total_frames": len(headers),
        "padded_frames": int(padded.sum()),
        "duration_ms": float(durations.sum()),
        "average_bitrate_kbps": float(np.average(bitrates, weights=durations)),
        "vbr": bool(np.unique(bitrates).size > 1),
        "stereo": any(h.channel_mode is not ChannelMode.MONO for h in headers),
        "sample_rates": [int(r) for r in rates],
        "total_bytes": total_bytes,
        "valid": True,
    }


class MP3Stream:
    def __init__(self, data, trim_trailer: bool = False):
        self.data = data
        self.audio = skip_id3(data)
        if trim_trailer:
            self.audio = strip_id3v1(self.audio)

    @classmethod
    def from_file(cls, path, **kwargs) -> "MP3Stream":
        return cls(Path(path).read_bytes(), **kwargs)

    def frames(self) -> Iterator[Frame]:
        """Start a new pass over the frames of the audio section."""
        return iter_frames(self.audio)

    def __iter__(self) -> Iterator[Frame]:
        return self.frames()

    def stats(self) -> dict:
        return summarize_frames(self.frames())


def frames_for_file(path: str) -> Iterator[Frame]:
    return MP3Stream.from_file(path).frames()


def analyze_file(path: str, trim_trailer: bool = False) -> dict:
    return MP3Stream.from_file(path, trim_trailer=trim_trailer).stats()
