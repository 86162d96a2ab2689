"""Builders for minimal audio files used as test fixtures."""

from __future__ import annotations

import struct
from pathlib import Path

# Four MPEG-1 Layer III frames (128 kbit/s, 44.1 kHz, 417 bytes each) of silence
MPEG_AUDIO = (b"\xff\xfb\x90\x00" + b"\x00" * 413) * 4

# Stand-in for FLAC audio frames; mutagen never decodes them
FLAC_AUDIO = b"\xff\xf8\x69\x08" + bytes(range(64))


def flac_streaminfo() -> bytes:
    """STREAMINFO block body: 44.1 kHz, stereo, 16 bit, unknown length."""
    # sample rate (20 bits) | channels - 1 (3 bits) | bits per sample - 1 (5 bits) | samples
    packed = (44100 << 44) | (1 << 41) | (15 << 36)
    return (
        struct.pack(">HH", 4096, 4096)  # min/max block size
        + b"\x00" * 6  # min/max frame size (unknown)
        + packed.to_bytes(8, "big")
        + b"\x00" * 16  # MD5
    )


def create_minimal_mp3(path: Path) -> None:
    """Create an MP3 file with no ID3 tag."""
    path.write_bytes(MPEG_AUDIO)


def create_minimal_flac(path: Path) -> None:
    """Create a FLAC file with only a STREAMINFO block."""
    # Last-block flag set, type 0 (STREAMINFO), 24-bit length 34
    block_header = bytes([0x80, 0x00, 0x00, 0x22])
    path.write_bytes(b"fLaC" + block_header + flac_streaminfo() + FLAC_AUDIO)


# Stand-in for AAC frames inside the mdat atom
MP4_AUDIO = bytes(range(256)) * 2


def mp4_atom(name: bytes, payload: bytes) -> bytes:
    """Box an MP4 atom: 32-bit size, 4-byte name, payload."""
    return struct.pack(">I", 8 + len(payload)) + name + payload


def create_minimal_m4a(path: Path) -> None:
    """Create an M4A file with one sound track and no ilst metadata."""
    ftyp = mp4_atom(b"ftyp", b"M4A " + struct.pack(">I", 0) + b"M4A mp42isom")
    # Version/flags, creation and modification time, timescale, duration, rest
    mvhd = mp4_atom(b"mvhd", b"\x00" * 12 + struct.pack(">II", 44100, 0) + b"\x00" * 80)
    # Version/flags, creation and modification time, timescale, duration, language
    mdhd = mp4_atom(b"mdhd", b"\x00" * 12 + struct.pack(">II", 44100, 0) + b"\x55\xc4\x00\x00")
    # Version/flags, pre-defined, handler type, reserved, empty name
    hdlr = mp4_atom(b"hdlr", b"\x00" * 8 + b"soun" + b"\x00" * 13)
    trak = mp4_atom(b"trak", mp4_atom(b"mdia", mdhd + hdlr))
    moov = mp4_atom(b"moov", mvhd + trak)
    path.write_bytes(ftyp + moov + mp4_atom(b"mdat", MP4_AUDIO))
