import re
import sys

from bitops import BitWriter
from errors import InvalidArgumentError

# Changing the prime requires changing INIT_RNUM, they are linked.
PRIME_NUM = 167  #: Modulus of the rolling hash
INIT_RNUM = 84  #: Inverse of 2 modulo PRIME_NUM

#: Largest bit count whose byte length can be computed without overflow
MAX_BITS = sys.maxsize - 7

_HEX_DIGITS = "0123456789abcdefABCDEF"
_LEADING_DIGITS = re.compile(r"[0-9]+")


def parse_bit_count(text: str) -> int:
    """Parse the decimal number of significant pattern bits.

    Only ASCII digits are accepted: unlike C ``strtoul`` there is no
    leading whitespace and no sign, so ``" 12"`` and ``"-0"`` are rejected.

    :param text: Decimal digits as given on the command line.
    :type text: str
    :returns: Non-negative bit count.
    :rtype: int
    :raises InvalidArgumentError: If ``text`` is not a plain decimal number
        or exceeds ``MAX_BITS``.
    """
    m = _LEADING_DIGITS.match(text)
    if m is None:
        raise InvalidArgumentError(
            "Failed to parse the number of bits: No digits found"
        )
    if m.end() != len(text):
        raise InvalidArgumentError(
            "Failed to parse the number of bits: "
            "Extra characters at the end of the argument"
        )
    # Bound the digit count first, int() refuses very long strings.
    digits = text.lstrip("0") or "0"
    if len(digits) > len(str(MAX_BITS)) or int(digits) > MAX_BITS:
        raise InvalidArgumentError(
            "Failed to parse the number of bits: "
            "The number exceeds imposed limit"
        )
    return int(digits)


class BitPattern:
    """Bit string searched for, with precomputed rolling-hash constants.

    The hash of a bit string ``Bk...B1B0`` is
    ``(Bk * 2**k + ... + B1 * 2 + B0) mod PRIME_NUM``. When the window
    slides by one bit the leading addend ``Bk * 2**k`` has to go; adding
    ``cancel``, which is ``-(2**k) mod PRIME_NUM``, removes it whenever
    ``Bk`` is set.

    Instances are read-only. Use :meth:`from_hex` to build one.

    :ivar bits: Pattern bits packed MSB-first, left-aligned.
    :type bits: bytes
    :ivar nr_bits: Number of significant bits in ``bits``.
    :type nr_bits: int
    :ivar hash: Hash of the pattern bits.
    :type hash: int
    :ivar cancel: Value cancelling the leading bit of a window hash.
    :type cancel: int
    """

    __slots__ = ("_bits", "_nr_bits", "_hash", "_cancel")

    def __init__(self, bits: bytes, nr_bits: int, hash: int, cancel: int):
        """Wrap precomputed pattern fields; prefer :meth:`from_hex`.

        :param bits: Packed pattern bits.
        :type bits: bytes
        :param nr_bits: Number of significant bits in ``bits``.
        :type nr_bits: int
        :param hash: Hash of the pattern bits.
        :type hash: int
        :param cancel: Cancellation constant for the leading window bit.
        :type cancel: int
        :returns: None
        :rtype: None
        """
        self._bits = bytes(bits)
        self._nr_bits = nr_bits
        self._hash = hash
        self._cancel = cancel

    @property
    def bits(self) -> bytes:
        """Pattern bits packed MSB-first; trailing pad bits are zero."""
        return self._bits

    @property
    def nr_bits(self) -> int:
        """Number of significant bits, 0 for the match-anything pattern."""
        return self._nr_bits

    @property
    def hash(self) -> int:
        """Hash of the pattern bits modulo ``PRIME_NUM``."""
        return self._hash

    @property
    def cancel(self) -> int:
        """Addend removing a set leading bit from a window hash."""
        return self._cancel

    def __repr__(self):
        return (
            f"BitPattern(bits={self._bits.hex()!r}, nr_bits={self._nr_bits},"
            f" hash={self._hash}, cancel={self._cancel})"
        )

    @classmethod
    def from_hex(cls, hex_seq: str, nr_bits: int) -> "BitPattern":
        """Build a pattern from the first ``nr_bits`` bits of ``hex_seq``.

        Digits are consumed left to right; the last one may contribute only
        its high-order bits. Digits past the ones needed are ignored and
        not validated.

        :param hex_seq: Hexadecimal digits, most significant first.
        :type hex_seq: str
        :param nr_bits: Number of significant bits, ``0`` for a pattern
            matching anything.
        :type nr_bits: int
        :returns: The constructed pattern.
        :rtype: BitPattern
        :raises InvalidArgumentError: If ``nr_bits`` is out of range,
            ``hex_seq`` is too short or holds a non-hexadecimal digit.
        """
        if nr_bits < 0 or nr_bits > MAX_BITS:
            raise InvalidArgumentError(
                f"Failed to parse the number of bits: "
                f"{nr_bits} is out of range"
            )
        if nr_bits == 0:
            # Empty pattern matches any data
            return cls(b"", 0, 0, 0)

        if (nr_bits + 3) // 4 > len(hex_seq):
            raise InvalidArgumentError(
                "Failed to parse the bit sequence: "
                f"Can't obtain {nr_bits} bits from the sequence"
            )

        writer = BitWriter()
        hash_val = 0
        rnum = INIT_RNUM
        remaining = nr_bits
        pos = 0
        while remaining > 0:
            digit = hex_seq[pos]
            if digit not in _HEX_DIGITS:
                raise InvalidArgumentError(
                    "Failed to parse the bit sequence: "
                    f"Invalid character at the position {pos}"
                )
            width = min(remaining, 4)
            chunk = int(digit, 16) >> (4 - width)

            writer.write_bits(chunk, width)
            hash_val = ((hash_val << width) + chunk) % PRIME_NUM
            rnum = (rnum << width) % PRIME_NUM

            remaining -= width
            pos += 1

        # rnum is now 2 ** (nr_bits - 1) mod PRIME_NUM
        return cls(
            writer.flush(), nr_bits, hash_val, (PRIME_NUM - rnum) % PRIME_NUM
        )
