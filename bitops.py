def extract_bits(buf: bytes, offset: int, count: int) -> int:
    """Extract ``count`` bits of ``buf`` starting at bit ``offset``.

    Within a byte the most significant bit has the lowest offset. The run
    may straddle a byte boundary, in which case the bits taken from the
    first byte form the high-order part of the result.

    :param buf: Source data.
    :type buf: bytes
    :param offset: Bit offset of the first bit to extract.
    :type offset: int
    :param count: Number of bits to extract (1-8).
    :type count: int
    :returns: Integer value of the bit run, ``0 <= value < 2 ** count``.
    :rtype: int
    :raises ValueError: If ``count`` is outside ``[1, 8]``.
    :raises IndexError: If the run does not lie inside ``buf``.
    """
    if not 0 < count <= 8:
        raise ValueError(f"Bit count out of range: {count}")
    if offset < 0 or offset + count > len(buf) * 8:
        raise IndexError(
            f"Bit run [{offset}, {offset + count}) "
            f"outside of {len(buf) * 8}-bit buffer"
        )

    value = 0
    while count > 0:
        # Bits still available in the current byte.
        nr_avail = 8 - (offset & 7)
        nr_consumed = min(count, nr_avail)
        # Low-order bits of the current byte left behind.
        nr_left = nr_avail - nr_consumed

        part = buf[offset >> 3] & ((1 << nr_avail) - 1)
        value = (value << nr_consumed) | (part >> nr_left)

        count -= nr_consumed
        offset += nr_consumed
    return value


class BitWriter:
    """MSB-first bit packer.

    Accumulates individual bits into bytes. Used to lay out the bits of
    a search pattern left-aligned in a byte buffer.

    :ivar buffer: Fully packed bytes.
    :type buffer: bytearray
    :ivar bit_buffer: 8-bit scratch register for accumulating pending bits.
    :type bit_buffer: int
    :ivar pending: Number of valid bits currently held in ``bit_buffer`` (0-7).
    :type pending: int
    """

    def __init__(self):
        """Initialize an empty bit writer.

        :returns: None
        :rtype: None
        """
        self.buffer = bytearray()
        self.bit_buffer = 0
        self.pending = 0

    @property
    def bit_count(self) -> int:
        """Total number of bits written so far.

        :rtype: int
        """
        return len(self.buffer) * 8 + self.pending

    def write_bits(self, value: int, nbits: int):
        """Append the lowest ``nbits`` of ``value``, MSB first.

        :param value: Integer whose bits will be written.
        :type value: int
        :param nbits: Number of bits from ``value`` to write.
        :type nbits: int
        :returns: None
        :rtype: None
        """
        for i in range(nbits - 1, -1, -1):
            self.bit_buffer = (self.bit_buffer << 1) | ((value >> i) & 1)
            self.pending += 1
            if self.pending == 8:
                self.buffer.append(self.bit_buffer)
                self.bit_buffer = 0
                self.pending = 0

    def flush(self) -> bytes:
        """Return the packed bytes, zero-padding the last partial byte.

        :returns: ``ceil(bit_count / 8)`` bytes.
        :rtype: bytes
        """
        if self.pending > 0:
            self.buffer.append(self.bit_buffer << (8 - self.pending))
            self.bit_buffer = 0
            self.pending = 0
        return bytes(self.buffer)
