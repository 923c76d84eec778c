"""This script defines the RIFFWaveFile container and its byte-order helpers.
RIFFWaveFile holds a sample rate and a raw PCM payload and serializes them into
a 44 byte WAVE header followed by the payload.
parse_header reads those 44 bytes back into their fields.
See http://soundfile.sapp.org/doc/WaveFormat/ for the layout.
"""

import numbers
import struct
from dataclasses import dataclass

from ..utils.constants import (
    AUDIO_FORMAT_PCM,
    BITS_PER_SAMPLE,
    CHANNELS,
    CHUNK_SIZE_OFFSET,
    FMT_CHUNK_SIZE,
    HEADER_SIZE,
    MAX_U32,
)

## BYTE ORDER
# Numeric fields are always little-endian and tags always in reading order,
# whatever the host is. struct with an explicit "<" never looks at the host.

def le_u16(value):
    return struct.pack("<H", value)

def le_u32(value):
    return struct.pack("<I", value)

def fourcc(tag):
    """Four ASCII characters written left to right ("RIFF" -> b"RIFF")."""
    raw = tag.encode("ascii")
    if len(raw) != 4:
        raise ValueError(f"chunk tag must be 4 ASCII characters, got {tag!r}")
    return raw

def read_le_u16(buf, offset):
    return struct.unpack_from("<H", buf, offset)[0]

def read_le_u32(buf, offset):
    return struct.unpack_from("<I", buf, offset)[0]

def read_fourcc(buf, offset):
    return bytes(buf[offset:offset + 4]).decode("ascii", errors="replace")

## DERIVED FIELDS
# Computed from sample rate / payload each time, never stored on the container.

def block_align(num_channels=CHANNELS, bits_per_sample=BITS_PER_SAMPLE):
    # bytes per multi-channel sample frame
    return num_channels * bits_per_sample // 8

def byte_rate(sample_rate, num_channels=CHANNELS, bits_per_sample=BITS_PER_SAMPLE):
    return sample_rate * block_align(num_channels, bits_per_sample)

def chunk_size(payload_len):
    return payload_len + CHUNK_SIZE_OFFSET

def check_payload_size(payload_len):
    """Raise ValueError if a payload of `payload_len` bytes overflows the 32-bit size fields."""
    if chunk_size(payload_len) > MAX_U32:
        raise ValueError(f"payload of {payload_len} bytes is too large for a RIFF file")


class RIFFWaveFile:
    """Mono 16-bit PCM WAVE file: a sample rate plus the raw sample bytes."""

    num_channels = CHANNELS
    bits_per_sample = BITS_PER_SAMPLE
    audio_format = AUDIO_FORMAT_PCM

    def __init__(self, sample_rate):
        # bool is an int subclass but never a valid rate
        if isinstance(sample_rate, bool) or not isinstance(sample_rate, numbers.Integral):
            raise ValueError(f"sample rate must be an integer, got {sample_rate!r}")
        sample_rate = int(sample_rate)
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        if byte_rate(sample_rate) > MAX_U32:
            raise ValueError(f"sample rate {sample_rate} does not fit the 32-bit ByteRate field")
        self.sample_rate = sample_rate
        self.data = b""

    def set_payload(self, data):
        data = bytes(data)
        align = block_align(self.num_channels, self.bits_per_sample)
        if len(data) % align != 0:
            raise ValueError(
                f"payload length {len(data)} is not a whole number of {align}-byte samples"
            )
        check_payload_size(len(data))
        self.data = data

    def header(self):
        n = len(self.data)
        parts = [
            # RIFF chunk descriptor
            fourcc("RIFF"),
            le_u32(chunk_size(n)),
            fourcc("WAVE"),
            # "fmt " sub-chunk
            fourcc("fmt "),
            le_u32(FMT_CHUNK_SIZE),
            le_u16(self.audio_format),
            le_u16(self.num_channels),
            le_u32(self.sample_rate),
            le_u32(byte_rate(self.sample_rate, self.num_channels, self.bits_per_sample)),
            le_u16(block_align(self.num_channels, self.bits_per_sample)),
            le_u16(self.bits_per_sample),
            # "data" sub-chunk
            fourcc("data"),
            le_u32(n),
        ]
        out = b"".join(parts)
        assert len(out) == HEADER_SIZE, f"header is {len(out)} bytes, expected {HEADER_SIZE}"
        return out

    def serialize(self):
        return self.header() + self.data


def configure(sample_rate):
    return RIFFWaveFile(sample_rate)


@dataclass(frozen=True)
class WaveHeader:
    chunk_id: str
    chunk_size: int
    format: str
    subchunk1_id: str
    subchunk1_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    subchunk2_id: str
    subchunk2_size: int


def parse_header(data):
    """Decode the 44 byte header at the start of `data`.

    Raises ValueError if the buffer is too short or any of the four chunk tags
    is not the one a PCM WAVE file carries.
    """
    if len(data) < HEADER_SIZE:
        raise ValueError(f"need at least {HEADER_SIZE} bytes for a WAVE header, got {len(data)}")

    hdr = WaveHeader(
        chunk_id=read_fourcc(data, 0),
        chunk_size=read_le_u32(data, 4),
        format=read_fourcc(data, 8),
        subchunk1_id=read_fourcc(data, 12),
        subchunk1_size=read_le_u32(data, 16),
        audio_format=read_le_u16(data, 20),
        num_channels=read_le_u16(data, 22),
        sample_rate=read_le_u32(data, 24),
        byte_rate=read_le_u32(data, 28),
        block_align=read_le_u16(data, 32),
        bits_per_sample=read_le_u16(data, 34),
        subchunk2_id=read_fourcc(data, 36),
        subchunk2_size=read_le_u32(data, 40),
    )

    expected = {"chunk_id": "RIFF", "format": "WAVE", "subchunk1_id": "fmt ", "subchunk2_id": "data"}
    for field, tag in expected.items():
        got = getattr(hdr, field)
        if got != tag:
            raise ValueError(f"{field} is {got!r}, expected {tag!r}")
    return hdr
