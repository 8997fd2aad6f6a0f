# filename: huffman_core.py

import heapq
import logging
from collections import Counter

from huffman_errors import EmptyAlphabetError

logger = logging.getLogger(__name__)

# codeword of the only symbol when the tree is a single leaf
SINGLE_SYMBOL_CODE = "0"


class HuffmanNode:
    __slots__ = ("symbol", "weight", "left", "right")

    def __init__(self, symbol, weight, left=None, right=None):
        self.symbol = symbol
        self.weight = weight
        self.left = left
        self.right = right

    @property
    def is_leaf(self):
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffmanNode(symbol={self.symbol!r}, weight={self.weight})"
        return f"HuffmanNode(weight={self.weight})"


def frequencies_from_counts(counts):
    """Turn a dense list indexed by symbol code into a symbol->count mapping."""
    return {symbol: count for symbol, count in enumerate(counts) if count > 0}


def count_frequencies(symbols):
    return dict(Counter(symbols))


def weighted_path_length(codes, frequencies):
    """Sum of frequency * codeword length over every coded symbol."""
    return sum(frequencies[symbol] * len(code) for symbol, code in codes.items())


class HuffmanLogic:
    def build_tree(self, frequencies):
        """
        Build an optimal prefix-code tree from a symbol->count mapping.

        Counts <= 0 are dropped. Ties on weight are broken by a rank: leaves
        are ranked by ascending symbol, merged nodes are ranked after every
        node created before them. The first node popped becomes the left child.
        """
        leaves = sorted(symbol for symbol, count in frequencies.items() if count > 0)
        if not leaves:
            raise EmptyAlphabetError()

        priority_queue = [
            (frequencies[symbol], rank, HuffmanNode(symbol, frequencies[symbol]))
            for rank, symbol in enumerate(leaves)
        ]
        heapq.heapify(priority_queue)
        next_rank = len(priority_queue)

        # Iteratively merge the two lightest nodes
        while len(priority_queue) > 1:
            left_weight, _, left = heapq.heappop(priority_queue)
            right_weight, _, right = heapq.heappop(priority_queue)
            weight = left_weight + right_weight
            heapq.heappush(priority_queue, (weight, next_rank, HuffmanNode(None, weight, left, right)))
            next_rank += 1

        root = priority_queue[0][2]
        logger.debug("built tree over %d symbols, root weight %d", len(leaves), root.weight)
        return root

    def generate_codes(self, node):
        """Map every leaf symbol to its root-to-leaf path ('0' left, '1' right)."""
        if node is None:
            return {}
        if node.is_leaf:
            return {node.symbol: SINGLE_SYMBOL_CODE}

        codes = {}

        def walk(current, path):
            if current.is_leaf:
                codes[current.symbol] = path
                return
            walk(current.left, path + "0")
            walk(current.right, path + "1")

        walk(node, "")
        return codes
