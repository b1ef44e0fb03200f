"""Version identifier codec.

Internal version ids are fixed-width strings that sort newest-first::

    <MAX_TS - timestamp_ms : 14 digits><MAX_SEQ - seq : 6 digits><group id : 7 chars>

The public form handed to clients is the lowercase hex encoding of the
internal id's UTF-8 bytes. The reserved "infinite" id (``MAX_TS``/``MAX_SEQ``
with no subtraction) sorts after every generated id and marks null versions
that were created before versioning was ever configured on the bucket.
"""

import binascii
import time
from typing import Callable, Protocol

LENGTH_TS = 14
LENGTH_SEQ = 6
LENGTH_RG = 7

MAX_TS = 10**LENGTH_TS - 1
MAX_SEQ = 10**LENGTH_SEQ - 1


class VersionIdDecodeError(ValueError):
    """A public version id string could not be decoded."""


class VersionIdCodec(Protocol):
    """Protocol for version identifier encoding and generation."""

    def encode(self, internal_id: str) -> str:
        """Encode an internal version id into its public string form."""
        ...

    def decode(self, public_id: str) -> str:
        """Decode a public version id.

        Raises:
            VersionIdDecodeError: If the string is not a valid encoding.
        """
        ...

    def reserved_infinite_id(self, group_id: str) -> str:
        """Return the sentinel id for legacy (pre-versioning) null versions."""
        ...

    def generate(self) -> str:
        """Return a new internal version id, older than none issued before it."""
        ...


def _pad_group(group_id: str) -> str:
    return group_id.ljust(LENGTH_RG)[:LENGTH_RG]


class HexVersionIdCodec:
    """Hex-encoding version id codec.

    Attributes:
        group_id: Replication group id folded into generated ids.
    """

    def __init__(self, group_id: str = "RG001", clock: Callable[[], float] = time.time) -> None:
        self.group_id = group_id
        self._clock = clock
        self._last_ts = 0
        self._seq = 0

    def encode(self, internal_id: str) -> str:
        return internal_id.encode("utf-8").hex()

    def decode(self, public_id: str) -> str:
        try:
            decoded = binascii.unhexlify(public_id).decode("utf-8")
        except (binascii.Error, ValueError) as exc:
            raise VersionIdDecodeError(f"Invalid version id: {public_id!r}") from exc
        if not decoded:
            raise VersionIdDecodeError("Invalid version id: empty")
        return decoded

    def reserved_infinite_id(self, group_id: str) -> str:
        return f"{MAX_TS:0{LENGTH_TS}d}{MAX_SEQ:0{LENGTH_SEQ}d}{_pad_group(group_id)}"

    def generate(self) -> str:
        ts = int(self._clock() * 1000)
        if ts <= self._last_ts:
            # same millisecond, or the clock stepped back
            ts = self._last_ts
            self._seq += 1
            if self._seq > MAX_SEQ:
                ts += 1
                self._seq = 0
        else:
            self._seq = 0
        self._last_ts = ts
        return (
            f"{MAX_TS - ts:0{LENGTH_TS}d}"
            f"{MAX_SEQ - self._seq:0{LENGTH_SEQ}d}"
            f"{_pad_group(self.group_id)}"
        )
