import argparse
import sys

from typing import List, Optional

from errors import InputTooLargeError, InvalidArgumentError
from pattern import BitPattern, parse_bit_count
from scanner import scan

BM_FOUND = 0  #: Pattern found
BM_NOT_FOUND = 1  #: Pattern not found
BM_USAGE_ERR = 3  #: Wrong command-line usage
BM_INVALID_ARGS = 4  #: Pattern or bit count rejected
BM_NO_MEM = 5  #: Out of memory
BM_IO_ERR = 6  #: Input could not be read


class UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser exiting with ``BM_USAGE_ERR`` on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(BM_USAGE_ERR, f"[!] {self.prog}: {message}\n")


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = UsageArgumentParser(
        prog="bitmatch",
        description="Find a bit pattern at any bit offset of the input. "
                    "Exits with 0 if found, 1 if not.",
    )
    parser.add_argument(
        "pattern", help="Sequence of hexadecimal digits"
    )
    parser.add_argument(
        "bits_nr",
        help="Non-negative number of significant bits in the bit pattern",
    )
    parser.add_argument(
        "-i",
        "--input",
        default="-",
        help="File to search in (default: stdin)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print the bit offset of the match",
    )
    return parser


def _error(message: str) -> None:
    """Print a diagnostic line to stderr.

    :param message: Text to print after the ``[!]`` marker.
    :type message: str
    :returns: None
    :rtype: None
    """
    print(f"[!] {message}", file=sys.stderr)


def read_input(path: str) -> bytes:
    """Read the whole input into memory.

    :param path: File path, or ``-`` for stdin.
    :type path: str
    :returns: Input data.
    :rtype: bytes
    :raises OSError: If the input cannot be read.
    """
    if path == "-":
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def run(hex_seq: str, bits_nr: str, input_path: str = "-",
        verbose: bool = False) -> int:
    """Build the pattern, read the input and search it.

    :param hex_seq: Pattern as hexadecimal digits.
    :type hex_seq: str
    :param bits_nr: Decimal number of significant pattern bits.
    :type bits_nr: str
    :param input_path: File to search in, ``-`` for stdin.
    :type input_path: str
    :param verbose: Print the match offset to stdout.
    :type verbose: bool
    :returns: Process exit code.
    :rtype: int
    """
    try:
        pattern = BitPattern.from_hex(hex_seq, parse_bit_count(bits_nr))
    except InvalidArgumentError as e:
        _error(str(e))
        return BM_INVALID_ARGS
    except MemoryError:
        _error("Failed to allocate memory for the bit pattern")
        return BM_NO_MEM

    if pattern.nr_bits == 0:
        # Empty pattern matches any data, no need to read it.
        if verbose:
            print("Match at bit 0")
        return BM_FOUND

    try:
        data = read_input(input_path)
    except OSError as e:
        _error(f"I/O error: {e}")
        return BM_IO_ERR
    except MemoryError:
        _error("Failed to allocate memory for the input")
        return BM_NO_MEM

    try:
        offset = scan(pattern, data)
    except InputTooLargeError as e:
        _error(f"I/O error: {e}")
        return BM_IO_ERR

    if offset is None:
        return BM_NOT_FOUND
    if verbose:
        print(f"Match at bit {offset}")
    return BM_FOUND


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the CLI tool.

    :param argv: Arguments without the program name, ``sys.argv`` if omitted.
    :type argv: Optional[List[str]]
    :returns: Process exit code.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)
    return run(args.pattern, args.bits_nr, args.input, args.verbose)


if __name__ == "__main__":
    sys.exit(main())
