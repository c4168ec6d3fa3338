"""Transparent data compression with several simple algorithms."""

from __future__ import annotations

import enum
from typing import Any

_LZ77_WINDOW = 255
_LZ77_MAX_MATCH = 255
_LZ77_MARKER = 0xFF
_SNAPPY_WINDOW = 65535
_SNAPPY_MAX_MATCH = 64
_SNAPPY_MIN_MATCH = 4


class CompressionAlgorithm(enum.Enum):
    """Supported compression algorithms."""

    NONE = "None"
    RLE = "Rle"
    LZ77 = "Lz77"
    SNAPPY_LIKE = "SnappyLike"


class CompressionEngine:
    """Compresses and decompresses data with one algorithm, keeping byte totals."""

    def __init__(self, algorithm: CompressionAlgorithm) -> None:
        self.algorithm = CompressionAlgorithm(algorithm)
        self.total_compressed = 0
        self.total_uncompressed = 0

    def compress(self, data: bytes) -> bytes:
        """Compress data and account for it in the statistics."""
        data = bytes(data)
        self.total_uncompressed += len(data)
        compressed = _COMPRESSORS[self.algorithm](data)
        self.total_compressed += len(compressed)
        return compressed

    def decompress(self, data: bytes) -> bytes:
        """Decompress data produced by compress()."""
        return _DECOMPRESSORS[self.algorithm](bytes(data))

    def ratio(self) -> float:
        """Compressed size over uncompressed size; 1.0 before any data."""
        if self.total_uncompressed == 0:
            return 1.0
        return self.total_compressed / self.total_uncompressed

    def savings_percent(self) -> float:
        """Space saved, as a percentage."""
        return (1.0 - self.ratio()) * 100.0

    def stats(self) -> dict[str, Any]:
        """Summary of the engine's algorithm and byte counts."""
        return {
            "algorithm": self.algorithm.value,
            "total_uncompressed_bytes": self.total_uncompressed,
            "total_compressed_bytes": self.total_compressed,
            "compression_ratio": self.ratio(),
            "savings_percent": self.savings_percent(),
        }


# Run-length encoding: (count, byte) pairs, runs of at most 255.

def _rle_compress(data: bytes) -> bytes:
    out = bytearray()
    i = 0
    n = len(data)
    while i < n:
        byte = data[i]
        count = 1
        while i + count < n and data[i + count] == byte and count < 255:
            count += 1
        out += bytes((count, byte))
        i += count
    return bytes(out)


def _rle_decompress(data: bytes) -> bytes:
    out = bytearray()
    for i in range(0, len(data) - 1, 2):
        out += bytes((data[i + 1],)) * data[i]
    return bytes(out)


# LZ77 style: literal bytes, or 0xFF offset length back-references.
# A literal 0xFF is written as 0xFF 0x00 0x00.

def _lz77_compress(data: bytes) -> bytes:
    out = bytearray()
    n = len(data)
    pos = 0
    while pos < n:
        best_offset = 0
        best_length = 0
        search_start = max(pos - _LZ77_WINDOW, 0)
        for offset in range(1, pos - search_start + 1):
            start = pos - offset
            length = 0
            while (
                pos + length < n
                and length < _LZ77_MAX_MATCH
                and data[start + (length % offset)] == data[pos + length]
            ):
                length += 1
            if length > best_length:
                best_offset = offset
                best_length = length

        if best_length >= 3:
            out += bytes((_LZ77_MARKER, best_offset, best_length))
            pos += best_length
        else:
            byte = data[pos]
            if byte == _LZ77_MARKER:
                out += bytes((_LZ77_MARKER, 0, 0))
            else:
                out.append(byte)
            pos += 1
    return bytes(out)


def _lz77_decompress(data: bytes) -> bytes:
    out = bytearray()
    i = 0
    n = len(data)
    while i < n:
        if data[i] == _LZ77_MARKER and i + 2 < n:
            offset = data[i + 1]
            length = data[i + 2]
            if offset == 0 and length == 0:
                out.append(_LZ77_MARKER)
            else:
                if offset == 0 or offset > len(out):
                    raise ValueError(f"invalid back-reference offset {offset} at byte {i}")
                start = len(out) - offset
                for j in range(length):
                    out.append(out[start + (j % offset)])
            i += 3
        else:
            out.append(data[i])
            i += 1
    return bytes(out)


# Snappy-like: 4-byte little-endian length header, then literal tags
# (0x00, byte) or copy tags (0x01 | (len-1)<<2, offset as u16 LE).
# Copy lengths are stored in three bits, so matches longer than seven
# bytes are recorded only in part.

def _snappy_compress(data: bytes) -> bytes:
    n = len(data)
    out = bytearray((n & 0xFFFFFFFF).to_bytes(4, "little"))
    pos = 0
    while pos < n:
        best_offset = 0
        best_length = 0
        search_start = max(pos - _SNAPPY_WINDOW, 0)
        for offset in range(1, min(pos - search_start, _SNAPPY_WINDOW) + 1):
            start = pos - offset
            length = 0
            while (
                pos + length < n
                and length < _SNAPPY_MAX_MATCH
                and data[start + length] == data[pos + length]
            ):
                length += 1
            if length > best_length and length >= _SNAPPY_MIN_MATCH:
                best_offset = offset
                best_length = length

        if best_length >= _SNAPPY_MIN_MATCH:
            out.append(0x01 | ((min(best_length, 7) - 1) << 2))
            out += best_offset.to_bytes(2, "little")
            pos += best_length
        else:
            out += bytes((0x00, data[pos]))
            pos += 1
    return bytes(out)


def _snappy_decompress(data: bytes) -> bytes:
    if len(data) < 4:
        return b""
    original_len = int.from_bytes(data[:4], "little")
    out = bytearray()
    i = 4
    n = len(data)
    while i < n and len(out) < original_len:
        tag = data[i]
        tag_type = tag & 0x03
        if tag_type == 0x00:
            i += 1
            if i < n:
                out.append(data[i])
                i += 1
        elif tag_type == 0x01:
            length = ((tag >> 2) & 0x07) + 1
            i += 1
            if i + 1 < n:
                offset = int.from_bytes(data[i:i + 2], "little")
                i += 2
                start = max(len(out) - offset, 0)
                for j in range(length):
                    if start + j < len(out):
                        out.append(out[start + j])
        else:
            i += 1
    return bytes(out[:original_len])


# With no compression the data passes through as a byte copy.
_COMPRESSORS = {
    CompressionAlgorithm.NONE: bytes,
    CompressionAlgorithm.RLE: _rle_compress,
    CompressionAlgorithm.LZ77: _lz77_compress,
    CompressionAlgorithm.SNAPPY_LIKE: _snappy_compress,
}

_DECOMPRESSORS = {
    CompressionAlgorithm.NONE: bytes,
    CompressionAlgorithm.RLE: _rle_decompress,
    CompressionAlgorithm.LZ77: _lz77_decompress,
    CompressionAlgorithm.SNAPPY_LIKE: _snappy_decompress,
}