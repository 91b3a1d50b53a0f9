from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional

HEADER_SIZE = 4


class MPEGVersion(IntEnum):
    MPEG1 = 1
    MPEG2 = 2


class Layer(IntEnum):
    I = 1
    II = 2
    III = 3


class ChannelMode(Enum):
    STEREO = "Stereo"
    JOINT_STEREO = "Joint Stereo"
    DUAL = "Dual"
    MONO = "Mono"


VERSIONS = {
    0b00011000: MPEGVersion.MPEG1,
    0b00010000: MPEGVersion.MPEG2,
}

LAYERS = {
    0b00000010: Layer.III,
    0b00000100: Layer.II,
    0b00000110: Layer.I,
}

# Index 0 is "free" and index 15 is "bad"; both are rejected.
BITRATES = {
    (MPEGVersion.MPEG1, Layer.I):   (0, 32, 64, 96, 128, 160, 192, 224, 256, 288, 320, 352, 384, 416, 448, 0),
    (MPEGVersion.MPEG1, Layer.II):  (0, 32, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 384, 0),
    (MPEGVersion.MPEG1, Layer.III): (0, 32, 40, 48, 56, 64, 80, 96, 112, 128, 160, 192, 224, 256, 320, 0),
    (MPEGVersion.MPEG2, Layer.I):   (0, 32, 48, 56, 64, 80, 96, 112, 128, 144, 160, 176, 192, 224, 256, 0),
    (MPEGVersion.MPEG2, Layer.II):  (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0),
    (MPEGVersion.MPEG2, Layer.III): (0, 8, 16, 24, 32, 40, 48, 56, 64, 80, 96, 112, 128, 144, 160, 0),
}

SAMPLE_RATES = {
    MPEGVersion.MPEG1: (44100, 48000, 32000, 0),
    MPEGVersion.MPEG2: (22050, 24000, 16000, 0),
}

CHANNEL_MODES = {
    0b00: ChannelMode.STEREO,
    0b01: ChannelMode.JOINT_STEREO,
    0b10: ChannelMode.DUAL,
    0b11: ChannelMode.MONO,
}

SAMPLES_PER_FRAME = {
    (MPEGVersion.MPEG1, Layer.I): 384,
    (MPEGVersion.MPEG1, Layer.II): 1152,
    (MPEGVersion.MPEG1, Layer.III): 1152,
    (MPEGVersion.MPEG2, Layer.I): 384,
    (MPEGVersion.MPEG2, Layer.II): 1152,
    (MPEGVersion.MPEG2, Layer.III): 576,
}


@dataclass(frozen=True)
class FrameHeader:
    """Decoded fixed fields of one MPEG audio frame header.

    Attributes:
        raw: copy of the 4 header bytes
        has_crc: literal value of the protection bit (1 -> True)
        duration_ms: playback time of the frame in milliseconds
        frame_size: size of the whole frame in bytes, header included
    """
    raw: bytes
    version: MPEGVersion
    layer: Layer
    has_crc: bool
    bitrate_kbps: int
    sample_rate_hz: int
    padded: bool
    channel_mode: ChannelMode
    samples_per_frame: int
    duration_ms: float
    frame_size: int

    @property
    def channels(self) -> int:
        return 1 if self.channel_mode is ChannelMode.MONO else 2


def frame_size(samples: int, bitrate_kbps: int, sample_rate_hz: int, layer: Layer, padded: bool) -> int:
    numerator = samples * bitrate_kbps * 125
    slot = 4 if layer is Layer.I else 1
    return numerator // sample_rate_hz + (slot if padded else 0)


def decode_header(window) -> Optional[FrameHeader]:
    """Decode the frame header at the front of ``window``.

    Returns None when the bytes are not a supported header (bad sync,
    MPEG-2.5, reserved layer, free or bad bitrate, reserved sample rate)
    or when fewer than 4 bytes are available.
    """
    if len(window) < HEADER_SIZE:
        return None
    b0, b1, b2, b3 = window[0], window[1], window[2], window[3]

    if b0 != 0xFF:
        return None
    if (b1 & 0xF0) != 0xF0:
        return None

    version = VERSIONS.get(b1 & 0b00011000)
    if version is None:
        return None
    layer = LAYERS.get(b1 & 0b00000110)
    if layer is None:
        return None

    has_crc = bool(b1 & 0x01)

    bitrate = BITRATES[(version, layer)][(b2 & 0xF0) >> 4]
    if not bitrate:
        return None
    sample_rate = SAMPLE_RATES[version][(b2 & 0b00001100) >> 2]
    if not sample_rate:
        return None

    padded = bool(b2 & 0b00000010)
    channel_mode = CHANNEL_MODES[(b3 & 0b11000000) >> 6]

    samples = SAMPLES_PER_FRAME[(version, layer)]
    return FrameHeader(
        raw=bytes(window[:HEADER_SIZE]),
        version=version,
        layer=layer,
        has_crc=has_crc,
        bitrate_kbps=bitrate,
        sample_rate_hz=sample_rate,
        padded=padded,
        channel_mode=channel_mode,
        samples_per_frame=samples,
        duration_ms=1000 * samples / sample_rate,
        frame_size=frame_size(samples, bitrate, sample_rate, layer, padded),
    )
