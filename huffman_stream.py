# filename: huffman_stream.py

import logging

from huffman_core import HuffmanLogic
from huffman_errors import UnknownSymbolError

logger = logging.getLogger(__name__)


def codeword_table(root):
    return HuffmanLogic().generate_codes(root)


def encode(root, symbols, sink):
    """
    Write the codeword of every symbol to sink and return the bit count.

    The table is derived before any bit is written. An unknown symbol stops
    encoding at its position; bits already written stay in the sink.
    """
    codes = codeword_table(root)
    written = 0
    for position, symbol in enumerate(symbols):
        code = codes.get(symbol)
        if code is None:
            raise UnknownSymbolError(symbol, position)
        for ch in code:
            sink.write_bit(1 if ch == "1" else 0)
        written += len(code)
    logger.debug("encoded %d bits", written)
    return written


def decode(root, source):
    """
    Lazily yield symbols by walking the tree one bit at a time.

    A single-leaf tree yields its symbol for every bit, whatever its value.
    Bits left over when the source runs dry in the middle of a codeword are
    dropped without error (they are the padding of the last byte).
    """
    if root.is_leaf:
        while source.has_next():
            source.next_bit()
            yield root.symbol
        return

    current = root
    while source.has_next():
        current = current.right if source.next_bit() else current.left
        if current.is_leaf:
            yield current.symbol
            current = root
    if current is not root:
        logger.debug("discarded an unterminated trailing codeword")
