"""UDP header encoding and description."""

from __future__ import annotations

import struct
from dataclasses import dataclass

from .json_tree import JsonNode, JsonType

_HEADER = struct.Struct("!HHHH")

HEADER_LEN = _HEADER.size


@dataclass(frozen=True)
class UdpHeader:
    """The fixed eight-byte UDP header, with fields in host order."""

    src_port: int
    dst_port: int
    length: int
    checksum: int = 0

    def __post_init__(self) -> None:
        for name in ("src_port", "dst_port", "length", "checksum"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"{name} {value} does not fit in 16 bits")

    def pack(self) -> bytes:
        """Encode the header in network byte order."""
        return _HEADER.pack(self.src_port, self.dst_port, self.length, self.checksum)

    @classmethod
    def unpack(cls, data: bytes) -> "UdpHeader":
        """Decode a header from the first eight bytes of ``data``."""
        if len(data) < HEADER_LEN:
            raise ValueError(f"UDP header needs {HEADER_LEN} bytes, got {len(data)}")
        return cls(*_HEADER.unpack_from(data))

    def to_json(self) -> JsonNode:
        """Return the header as a JSON object node."""
        root = JsonNode(JsonType.OBJECT)
        JsonNode(JsonType.INTEGER, "src port", self.src_port, root)
        JsonNode(JsonType.INTEGER, "dst port", self.dst_port, root)
        JsonNode(JsonType.INTEGER, "length", self.length, root)
        JsonNode(JsonType.INTEGER, "checksum", self.checksum, root)
        return root

    def describe(self) -> str:
        """Return a labelled JSON rendering of the header for debug output."""
        return f'"UDP Header": {self.to_json().serialize()}'