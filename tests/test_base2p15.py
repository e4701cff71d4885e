"""Base-2^15 codec: layout, range decoding and malformed input."""
import random

import pytest

from core.compression.base2p15 import (
    OFFSET,
    InvalidEncodingError,
    bit_length,
    decode,
    decode_range,
    encode,
)


def test_encode_empty_bit_string():
    assert encode("") == "0"
    assert decode("0") == ""


def test_encode_full_character_needs_no_padding():
    assert encode("1" * 15) == "0" + chr(0x7FFF + OFFSET)


def test_encode_pads_last_character():
    assert encode("1") == "e" + chr(0x4000 + OFFSET)
    assert encode("1000000000000001") == "e" + chr(0x4000 + OFFSET) * 2


def test_padding_digit_is_lowercase_hex():
    encoded = encode("1" * 20)
    assert encoded[0] == "a"
    assert bit_length(encoded) == 20


def test_decode_drops_padding_from_last_character_only():
    bits = "101" + "0" * 12 + "11"
    assert decode(encode(bits)) == bits


def test_decode_accepts_uppercase_padding_digit():
    encoded = encode("1" * 20)
    assert decode(encoded.upper()[0] + encoded[1:]) == "1" * 20


def test_decode_range_matches_full_decode_for_every_range():
    rng = random.Random(7)
    bits = "".join(rng.choice("01") for _ in range(50))
    encoded = encode(bits)
    for start in range(len(bits) + 1):
        for end in range(start, len(bits) + 1):
            assert decode_range(encoded, start, end) == bits[start:end]


def test_decode_range_at_the_last_character_boundary():
    rng = random.Random(3)
    bits = "".join(rng.choice("01") for _ in range(30))
    encoded = encode(bits)
    assert decode_range(encoded, 26, 30) == bits[26:30]
    assert decode_range(encoded, 15, 30) == bits[15:30]
    assert decode_range(encoded, 0, 15) == bits[:15]


def test_decode_range_only_reads_covering_characters():
    encoded = encode("1" * 45) + "A"  # trailing garbage past the range
    assert decode_range(encoded, 15, 30) == "1" * 15
    with pytest.raises(InvalidEncodingError):
        decode(encoded)


def test_decode_range_rejects_bad_bounds():
    encoded = encode("1" * 10)
    with pytest.raises(ValueError):
        decode_range(encoded, -1, 3)
    with pytest.raises(ValueError):
        decode_range(encoded, 5, 4)
    with pytest.raises(IndexError):
        decode_range(encoded, 8, 11)


def test_empty_range_is_empty():
    assert decode_range(encode("1" * 10), 4, 4) == ""


@pytest.mark.parametrize(
    "encoded",
    [
        "",                         # no padding digit
        "g" + chr(OFFSET),          # not a hex digit
        " " + chr(OFFSET),
        "0A",                       # payload char below the offset
        "0" + chr(OFFSET - 1),
        "0" + chr(OFFSET + 0x8000),  # more than 15 bits of payload
        "3",                        # padding without payload
    ],
)
def test_decode_rejects_malformed_strings(encoded):
    with pytest.raises(InvalidEncodingError):
        decode(encoded)


def test_invalid_encoding_is_a_value_error():
    with pytest.raises(ValueError):
        decode("")


def test_encode_rejects_non_binary_characters():
    with pytest.raises(ValueError):
        encode("0120")


def test_bit_length_without_decoding():
    assert bit_length("0") == 0
    assert bit_length(encode("1" * 31)) == 31
    assert bit_length("0" + chr(OFFSET) * 4) == 60
