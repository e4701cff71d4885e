# core/compression/base2p15.py
"""
Base-2^15 Bit String Codec
==========================
Packs a bit string into printable characters, 15 payload bits per character,
so a whole counter array can be shipped as a JSON string.

Layout of an encoded string:

    [padding digit][payload char 0][payload char 1]...[payload char k-1]

    padding digit   One lowercase hex digit (0-f): number of zero bits appended
                    to the last payload character to fill it up to 15 bits.
    payload char    chr(value + 0xA1) where value is the next 15 bits read
                    most significant bit first.

Example: the 16-bit string "1000000000000001" is padded with 14 zeros and
encodes as "e" + chr(0x4000 + 0xA1) + chr(0x4000 + 0xA1).

decode_range() extracts a slice of the logical bit string while only looking at
the payload characters that cover it, so reading one counter costs a couple of
characters regardless of the filter size.
"""
import string
from typing import Tuple

OFFSET = 0xA1                   # Keeps every payload char printable
PAYLOAD_BITS = 15
MAX_PAYLOAD_VALUE = (1 << PAYLOAD_BITS) - 1


class InvalidEncodingError(ValueError):
    """Raised when an encoded string does not follow the base-2^15 layout."""
    pass


def _read_padding(encoded: str) -> int:
    """Parse and validate the leading padding digit."""
    if not encoded:
        raise InvalidEncodingError("Encoded string is empty (missing padding digit)")
    digit = encoded[0]
    if digit not in string.hexdigits:
        raise InvalidEncodingError(f"Invalid padding digit {digit!r}, expected a hex digit 0-f")
    padding = int(digit, 16)
    if padding and len(encoded) == 1:
        raise InvalidEncodingError(f"Padding of {padding} bits declared but no payload present")
    return padding


def _payload_bits(character: str) -> str:
    """Convert one payload character to its 15-bit binary representation."""
    value = ord(character) - OFFSET
    if not 0 <= value <= MAX_PAYLOAD_VALUE:
        raise InvalidEncodingError(
            f"Payload character U+{ord(character):04X} outside "
            f"U+{OFFSET:04X}..U+{OFFSET + MAX_PAYLOAD_VALUE:04X}"
        )
    return format(value, "015b")


def bit_length(encoded: str) -> int:
    """Number of logical bits in an encoded string, computed without decoding it."""
    padding = _read_padding(encoded)
    return (len(encoded) - 1) * PAYLOAD_BITS - padding


def decode(encoded: str) -> str:
    """
    Decode a full base-2^15 string into its bit string.

    Raises:
        InvalidEncodingError: Bad padding digit or payload character
    """
    padding = _read_padding(encoded)
    bits = "".join(_payload_bits(character) for character in encoded[1:])
    return bits[:len(bits) - padding]


def _covering_slice(start: int, end: int) -> Tuple[int, int, int]:
    """
    Payload characters [first, last] covering bits [start, end) and the padding
    to declare when that sub-slice is decoded on its own.
    """
    first = start // PAYLOAD_BITS
    last = (end - 1) // PAYLOAD_BITS
    end_padding = (PAYLOAD_BITS - end % PAYLOAD_BITS) % PAYLOAD_BITS
    return first, last, end_padding


def decode_range(encoded: str, start: int, end: int) -> str:
    """
    Decode bits [start, end) of an encoded string.

    Equivalent to decode(encoded)[start:end] but only the payload characters
    spanning the range are converted: the covering characters are re-wrapped as
    a self-contained encoded string (with a synthesized padding digit), decoded,
    and the leading start % 15 bits are dropped.

    Raises:
        ValueError: start < 0 or end < start
        IndexError: end is past the last logical bit
        InvalidEncodingError: A covering character is malformed
    """
    if start < 0 or end < start:
        raise ValueError(f"Invalid bit range [{start}, {end})")
    total_bits = bit_length(encoded)
    if end > total_bits:
        raise IndexError(f"Bit range [{start}, {end}) exceeds encoded length of {total_bits} bits")
    if start == end:
        return ""

    first, last, end_padding = _covering_slice(start, end)
    sub_encoded = format(end_padding, "x") + encoded[1 + first:2 + last]
    return decode(sub_encoded)[start % PAYLOAD_BITS:]


def encode(bit_string: str) -> str:
    """
    Encode a bit string ("0"/"1" characters) as base-2^15.

    Raises:
        ValueError: bit_string contains characters other than 0 and 1
    """
    if bit_string.strip("01"):
        raise ValueError("Bit string may only contain '0' and '1'")

    n_padded_bits = (PAYLOAD_BITS - len(bit_string) % PAYLOAD_BITS) % PAYLOAD_BITS
    padded = bit_string + "0" * n_padded_bits

    payload = "".join(
        chr(int(padded[i:i + PAYLOAD_BITS], 2) + OFFSET)
        for i in range(0, len(padded), PAYLOAD_BITS)
    )
    return format(n_padded_bits, "x") + payload
