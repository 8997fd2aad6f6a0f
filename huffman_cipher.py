# filename: huffman_cipher.py
#
# Text form of a tree: one pair of lines per leaf, in left-before-right
# depth-first order. The first line is the symbol code in decimal, the
# second is the leaf's path of '0'/'1' characters. Weights are not kept.
#
#   97
#   0
#   99
#   10
#   98
#   11

import logging
import re

from huffman_core import HuffmanNode
from huffman_errors import MalformedCipherError

logger = logging.getLogger(__name__)

_CODE_LINE = re.compile(r"[0-9]+")
_PATH_LINE = re.compile(r"[01]*")


def serialize(root):
    """Return the (symbol, path) pair of every leaf, left before right."""
    pairs = []

    def walk(node, path):
        if node is None:
            return
        if node.is_leaf:
            pairs.append((node.symbol, path))
            return
        walk(node.left, path + "0")
        walk(node.right, path + "1")

    walk(root, "")
    return pairs


def deserialize(pairs):
    """
    Rebuild a tree from (symbol, path) pairs.

    Internal nodes are created on demand with weight 0 and leaves carry
    weight 0 too. Any inconsistency aborts with MalformedCipherError and no
    tree is returned.
    """
    pairs = list(pairs)
    if not pairs:
        raise MalformedCipherError("cipher document is empty")

    root = None
    seen = set()
    for entry, (symbol, path) in enumerate(pairs, 1):
        if isinstance(symbol, bool) or not isinstance(symbol, int) or symbol < 0:
            raise MalformedCipherError(f"entry {entry}: symbol code {symbol!r} is not a non-negative integer")
        if not isinstance(path, str) or not _PATH_LINE.fullmatch(path):
            raise MalformedCipherError(f"entry {entry}: path {path!r} may only contain '0' and '1'")
        if symbol in seen:
            raise MalformedCipherError(f"entry {entry}: symbol {symbol} appears more than once")
        seen.add(symbol)

        if not path:
            if len(pairs) != 1:
                raise MalformedCipherError(f"entry {entry}: empty path in a document with several symbols")
            root = HuffmanNode(symbol, 0)
            continue

        if root is None:
            root = HuffmanNode(None, 0)
        current = root
        for bit in path[:-1]:
            if current.symbol is not None:
                raise MalformedCipherError(f"entry {entry}: path {path} runs through the leaf of symbol {current.symbol}")
            side = "left" if bit == "0" else "right"
            child = getattr(current, side)
            if child is None:
                child = HuffmanNode(None, 0)
                setattr(current, side, child)
            current = child

        if current.symbol is not None:
            raise MalformedCipherError(f"entry {entry}: path {path} runs through the leaf of symbol {current.symbol}")
        side = "left" if path[-1] == "0" else "right"
        if getattr(current, side) is not None:
            raise MalformedCipherError(f"entry {entry}: path {path} is already taken")
        setattr(current, side, HuffmanNode(symbol, 0))

    _check_complete(root)
    logger.debug("rebuilt tree with %d leaves", len(pairs))
    return root


def _check_complete(node, path=""):
    if node.symbol is not None:
        return
    if node.left is None or node.right is None:
        missing = path + ("0" if node.left is None else "1")
        raise MalformedCipherError(f"no symbol is reachable through path {missing}")
    _check_complete(node.left, path + "0")
    _check_complete(node.right, path + "1")


def dumps(pairs):
    return "".join(f"{symbol}\n{path}\n" for symbol, path in pairs)


def loads(text):
    """Parse cipher text into (symbol, path) pairs. Lines end in '\\n' or '\\r\\n'."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    lines = [line[:-1] if line.endswith("\r") else line for line in lines]

    pairs = []
    for index in range(0, len(lines), 2):
        code_line = lines[index]
        if not _CODE_LINE.fullmatch(code_line):
            raise MalformedCipherError(f"symbol code {code_line!r} is not an integer", line=index + 1)
        if index + 1 == len(lines):
            raise MalformedCipherError("symbol code has no path line", line=index + 1)
        path_line = lines[index + 1]
        if not _PATH_LINE.fullmatch(path_line):
            raise MalformedCipherError(f"path {path_line!r} may only contain '0' and '1'", line=index + 2)
        pairs.append((int(code_line), path_line))
    return pairs


def save(root, output):
    """Write the cipher of the tree to a text stream."""
    output.write(dumps(serialize(root)))


def load(source):
    """Read a cipher from a text stream and rebuild its tree."""
    return deserialize(loads(source.read()))
