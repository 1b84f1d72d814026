import heapq
from collections import Counter
from typing import Dict, List, Optional

from errors import InvalidInput


class HuffmanNode:
    """Node of a Huffman tree stored in a :class:`HuffmanTree` arena.

    Children are referenced by their index in the owning arena, never by
    object reference.

    :ivar symbol: Character stored at a leaf; ``None`` for internal nodes.
    :type symbol: str | None
    :ivar freq: Frequency (weight) of the subtree rooted at this node.
    :type freq: int
    :ivar left: Arena index of the left child, ``None`` for leaves.
    :type left: int | None
    :ivar right: Arena index of the right child, ``None`` for leaves.
    :type right: int | None
    """

    def __init__(self, symbol=None, freq=0, left=None, right=None):
        self.symbol = symbol
        self.freq = freq
        self.left = left
        self.right = right

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


class HuffmanTree:
    """Arena owning every node of one Huffman tree.

    A node's index is also its insertion sequence number, which the
    builder uses to break frequency ties.

    :ivar nodes: All nodes, leaves first in ascending symbol order.
    :type nodes: List[HuffmanNode]
    :ivar root: Index of the root node, ``None`` until built.
    :type root: int | None
    """

    def __init__(self):
        self.nodes: List[HuffmanNode] = []
        self.root: Optional[int] = None

    def add(self, node: HuffmanNode) -> int:
        """Store ``node`` and return its index.

        :param node: Node to take ownership of.
        :type node: HuffmanNode
        :returns: Arena index of the stored node.
        :rtype: int
        """
        self.nodes.append(node)
        return len(self.nodes) - 1

    def __getitem__(self, index: int) -> HuffmanNode:
        return self.nodes[index]

    def __len__(self) -> int:
        return len(self.nodes)


def count_frequencies(text: str) -> Dict[str, int]:
    """Count occurrences of every character in ``text``.

    :param text: Input text; may be empty.
    :type text: str
    :returns: Mapping from character to occurrence count.
    :rtype: Dict[str, int]
    """
    return dict(Counter(text))


def build_tree(frequencies: Dict[str, int]) -> HuffmanTree:
    """Build a Huffman tree by repeatedly merging the two rarest nodes.

    Leaves are inserted in ascending symbol order. The queue is keyed on
    ``(freq, index)``, so equal frequencies leave the queue in insertion
    order. The first node removed becomes the left child of the merge.

    :param frequencies: Mapping from symbol to observed frequency.
    :type frequencies: Dict[str, int]
    :returns: The built tree. A single-symbol table yields a lone leaf root.
    :rtype: HuffmanTree
    :raises InvalidInput: If ``frequencies`` is empty.
    """
    if not frequencies:
        raise InvalidInput("Cannot build a Huffman tree without symbols")

    tree = HuffmanTree()
    heap = []
    for symbol in sorted(frequencies):
        index = tree.add(HuffmanNode(symbol=symbol, freq=frequencies[symbol]))
        heap.append((frequencies[symbol], index))
    heapq.heapify(heap)

    while len(heap) > 1:
        left_freq, left = heapq.heappop(heap)
        right_freq, right = heapq.heappop(heap)
        merged = tree.add(
            HuffmanNode(freq=left_freq + right_freq, left=left, right=right)
        )
        heapq.heappush(heap, (left_freq + right_freq, merged))

    tree.root = heap[0][1]
    return tree


def assign_codes(tree: HuffmanTree) -> Dict[str, str]:
    """Map every leaf symbol to its root-to-leaf path.

    ``'0'`` is appended when descending left and ``'1'`` when descending
    right. A tree whose root is a leaf gets the code ``'0'``.

    :param tree: Tree produced by :func:`build_tree`.
    :type tree: HuffmanTree
    :returns: Mapping from symbol to bit-string code.
    :rtype: Dict[str, str]
    """
    codes: Dict[str, str] = {}
    root = tree[tree.root]
    if root.is_leaf():
        codes[root.symbol] = "0"
        return codes
    _walk(tree, tree.root, "", codes)
    return codes


def _walk(tree: HuffmanTree, index: int, prefix: str, codes: Dict[str, str]):
    node = tree[index]
    if node.is_leaf():
        codes[node.symbol] = prefix
        return
    _walk(tree, node.left, prefix + "0", codes)
    _walk(tree, node.right, prefix + "1", codes)


def build_code_table(text: str) -> Dict[str, str]:
    """Frequency analysis, tree construction and code assignment in one call.

    :param text: Non-empty input text.
    :type text: str
    :returns: Prefix-free code table for the characters of ``text``.
    :rtype: Dict[str, str]
    :raises InvalidInput: If ``text`` is empty.
    """
    return assign_codes(build_tree(count_frequencies(text)))
