import sys

import pytest

from errors import InvalidArgumentError
from pattern import BitPattern, MAX_BITS, PRIME_NUM, INIT_RNUM, parse_bit_count


def test_init_rnum_is_inverse_of_two():
    assert (INIT_RNUM * 2) % PRIME_NUM == 1


def test_from_hex_whole_nibble():
    pat = BitPattern.from_hex("A", 4)
    assert pat.nr_bits == 4
    assert pat.bits == b"\xA0"
    assert pat.hash == 10
    assert pat.cancel == (PRIME_NUM - 8) % PRIME_NUM


def test_from_hex_partial_last_nibble_takes_high_bits():
    pat = BitPattern.from_hex("F", 3)
    assert pat.bits == bytes([0b11100000])
    assert pat.hash == 0b111
    pat = BitPattern.from_hex("1", 1)
    assert pat.bits == b"\x00"
    assert pat.hash == 0


def test_from_hex_multi_byte_buffer_size():
    pat = BitPattern.from_hex("DEADBEE", 26)
    assert len(pat.bits) == 4
    assert pat.bits == bytes([0xDE, 0xAD, 0xBE, 0xC0])


@pytest.mark.parametrize("nr_bits", [1, 2, 5, 8, 9, 17, 64, 333])
def test_hash_and_cancel_match_direct_computation(nr_bits):
    hex_seq = "9C3" * ((nr_bits + 11) // 12)
    pat = BitPattern.from_hex(hex_seq, nr_bits)
    bits = "".join(format(int(d, 16), "04b") for d in hex_seq)
    assert pat.hash == int(bits[:nr_bits], 2) % PRIME_NUM
    assert pat.cancel == (-pow(2, nr_bits - 1, PRIME_NUM)) % PRIME_NUM
    assert 0 <= pat.hash < PRIME_NUM
    assert 0 <= pat.cancel < PRIME_NUM


def test_from_hex_zero_bits_is_universal_pattern():
    pat = BitPattern.from_hex("", 0)
    assert pat.nr_bits == 0
    assert pat.bits == b""


def test_from_hex_accepts_lower_and_upper_case():
    assert BitPattern.from_hex("aBcD", 16).bits == b"\xAB\xCD"


def test_from_hex_insufficient_digits():
    with pytest.raises(InvalidArgumentError, match="Can't obtain 9 bits"):
        _ = BitPattern.from_hex("AB", 9)


def test_from_hex_invalid_character_reports_position():
    with pytest.raises(InvalidArgumentError, match="position 1"):
        _ = BitPattern.from_hex("AZ", 8)


def test_from_hex_ignores_unconsumed_digits():
    pat = BitPattern.from_hex("AZ", 4)
    assert pat.bits == b"\xA0"


@pytest.mark.parametrize("nr_bits", [-1, MAX_BITS + 1, sys.maxsize])
def test_from_hex_rejects_out_of_range_bit_count(nr_bits):
    with pytest.raises(InvalidArgumentError):
        _ = BitPattern.from_hex("FF", nr_bits)


def test_pattern_is_read_only():
    pat = BitPattern.from_hex("A", 4)
    with pytest.raises(AttributeError):
        pat.hash = 0
    with pytest.raises(AttributeError):
        pat.extra = 1


def test_invalid_argument_error_is_value_error():
    with pytest.raises(ValueError):
        _ = BitPattern.from_hex("", 4)


def test_parse_bit_count_valid():
    assert parse_bit_count("0") == 0
    assert parse_bit_count("12") == 12
    assert parse_bit_count(str(MAX_BITS)) == MAX_BITS


@pytest.mark.parametrize("text", ["", "abc", " 12", "-3"])
def test_parse_bit_count_no_digits(text):
    with pytest.raises(InvalidArgumentError, match="No digits found"):
        _ = parse_bit_count(text)


def test_parse_bit_count_trailing_characters():
    with pytest.raises(InvalidArgumentError, match="Extra characters"):
        _ = parse_bit_count("12x")


def test_parse_bit_count_overflow_guard():
    with pytest.raises(InvalidArgumentError, match="exceeds imposed limit"):
        _ = parse_bit_count(str(sys.maxsize))


@pytest.mark.parametrize("text", ["9" * 5000, "1" + "0" * 19])
def test_parse_bit_count_rejects_long_digit_strings(text):
    with pytest.raises(InvalidArgumentError, match="exceeds imposed limit"):
        _ = parse_bit_count(text)


def test_parse_bit_count_leading_zeros():
    assert parse_bit_count("0" * 5000 + "12") == 12
    assert parse_bit_count("000") == 0
