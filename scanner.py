"""Bit-level Rabin-Karp search.

The window hash is rolled one bit at a time across the input; windows
whose hash equals the pattern hash are confirmed by a full comparison,
so hash collisions cost an extra comparison but never a wrong answer.
"""
import sys
from typing import Optional

from bitops import extract_bits
from errors import InputTooLargeError
from pattern import BitPattern, PRIME_NUM


def window_hash(buf: bytes, offset: int, nr_bits: int) -> int:
    """Hash ``nr_bits`` bits of ``buf`` starting at bit ``offset``.

    :param buf: Source data.
    :type buf: bytes
    :param offset: Bit offset of the window.
    :type offset: int
    :param nr_bits: Window width in bits.
    :type nr_bits: int
    :returns: Window hash modulo ``PRIME_NUM``.
    :rtype: int
    """
    hash_val = 0
    done = 0
    while done < nr_bits:
        count = min(nr_bits - done, 8)
        hash_val = (
            (hash_val << count) + extract_bits(buf, offset + done, count)
        ) % PRIME_NUM
        done += count
    return hash_val


def matches(pattern: BitPattern, buf: bytes, offset: int) -> bool:
    """Compare the pattern with the bits of ``buf`` at ``offset``.

    The caller guarantees ``offset + pattern.nr_bits <= 8 * len(buf)``.

    :param pattern: Pattern to compare.
    :type pattern: BitPattern
    :param buf: Data to compare against.
    :type buf: bytes
    :param offset: Bit offset in ``buf``.
    :type offset: int
    :returns: ``True`` if every bit matches.
    :rtype: bool
    """
    pat_offset = 0
    while pat_offset < pattern.nr_bits:
        count = min(pattern.nr_bits - pat_offset, 8)
        if extract_bits(buf, offset + pat_offset, count) != extract_bits(
            pattern.bits, pat_offset, count
        ):
            return False
        pat_offset += count
    return True


def scan(pattern: BitPattern, buf: bytes) -> Optional[int]:
    """Find the first occurrence of ``pattern`` in ``buf``.

    :param pattern: Pattern to look for.
    :type pattern: BitPattern
    :param buf: Data to search in.
    :type buf: bytes
    :returns: Lowest bit offset of a match, ``None`` if there is none.
    :rtype: Optional[int]
    :raises InputTooLargeError: If the bit length of ``buf`` exceeds
        ``sys.maxsize``.
    """
    if pattern.nr_bits == 0:
        return 0

    if len(buf) > sys.maxsize // 8:
        raise InputTooLargeError("Input buffer is too large")
    total_bits = len(buf) * 8
    if total_bits < pattern.nr_bits:
        return None

    nr_bits = pattern.nr_bits
    pat_hash = pattern.hash
    cancel = pattern.cancel
    hash_val = window_hash(buf, 0, nr_bits)
    last = total_bits - nr_bits
    for start in range(last + 1):
        if hash_val == pat_hash and matches(pattern, buf, start):
            return start
        if start == last:
            break

        # Drop the leading bit, then shift in the next one.
        # Both offsets lie inside buf for every start in the loop range.
        if (buf[start >> 3] >> (7 - (start & 7))) & 1:
            hash_val = (hash_val + cancel) % PRIME_NUM
        entering = start + nr_bits
        hash_val = (
            (hash_val << 1) + ((buf[entering >> 3] >> (7 - (entering & 7))) & 1)
        ) % PRIME_NUM
    return None
