"""
Prefix tree over dictionary words.

A WordTrie answers exact/prefix queries for whole sequences and can be
walked one character at a time from a previous node, which is what the
streaming recognizers need: many partial matches (hits) stay alive across
cursor steps, each anchored at its own start offset.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import Dict, Iterable, Iterator, List, Optional, Tuple


class MatchState(IntFlag):
    """Result of matching a sequence against a trie."""
    NO_MATCH = 0
    EXACT_ONLY = 1
    PREFIX_ONLY = 2
    PREFIX_AND_EXACT = 3

    @property
    def is_match(self) -> bool:
        return bool(self & MatchState.EXACT_ONLY)

    @property
    def is_prefix(self) -> bool:
        return bool(self & MatchState.PREFIX_ONLY)


class DictNode:
    """Trie node. Read-only once its trie has been built."""

    __slots__ = ("children", "is_word")

    def __init__(self):
        self.children: Dict[str, "DictNode"] = {}
        self.is_word = False


@dataclass
class Hit:
    """A partial match anchored at `begin`, last advanced at `end`."""
    begin: int
    end: int
    node: Optional[DictNode]
    state: MatchState = MatchState.NO_MATCH

    @property
    def length(self) -> int:
        return self.end - self.begin + 1


class WordTrie:
    """
    Immutable prefix tree.

    Example:
        >>> trie = WordTrie(["中华", "中华人民共和国"])
        >>> trie.query("中华")
        <MatchState.PREFIX_AND_EXACT: 3>
        >>> trie.query("中华人民")
        <MatchState.PREFIX_ONLY: 2>
    """

    def __init__(self, words: Iterable[str] = ()):
        self._root = DictNode()
        self._size = 0
        for word in words:
            self._insert(word)

    def _insert(self, word: str) -> None:
        if not word:
            return
        node = self._root
        for char in word:
            child = node.children.get(char)
            if child is None:
                child = DictNode()
                node.children[char] = child
            node = child
        if not node.is_word:
            node.is_word = True
            self._size += 1

    def __len__(self) -> int:
        return self._size

    def __contains__(self, word: str) -> bool:
        return self.query(word).is_match

    def __iter__(self) -> Iterator[str]:
        stack: List[Tuple[DictNode, str]] = [(self._root, "")]
        while stack:
            node, prefix = stack.pop()
            if node.is_word:
                yield prefix
            for char in sorted(node.children, reverse=True):
                stack.append((node.children[char], prefix + char))

    @property
    def root(self) -> DictNode:
        return self._root

    # ------------------------------------------------------------------
    # Stepping
    # ------------------------------------------------------------------

    @staticmethod
    def step(node: DictNode, char: str) -> Optional[DictNode]:
        """Follow one character from `node`; None when no word continues."""
        return node.children.get(char)

    @staticmethod
    def state_of(node: Optional[DictNode]) -> MatchState:
        if node is None:
            return MatchState.NO_MATCH
        state = MatchState.NO_MATCH
        if node.is_word:
            state |= MatchState.EXACT_ONLY
        if node.children:
            state |= MatchState.PREFIX_ONLY
        return state

    def query(self, sequence: str) -> MatchState:
        """Match a whole sequence from the root."""
        if not sequence:
            return MatchState.NO_MATCH
        node: Optional[DictNode] = self._root
        for char in sequence:
            node = self.step(node, char)
            if node is None:
                return MatchState.NO_MATCH
        return self.state_of(node)

    def start_hit(self, char: str, position: int) -> Hit:
        """Match a single character against the root."""
        node = self.step(self._root, char)
        return Hit(begin=position, end=position, node=node, state=self.state_of(node))

    def advance(self, hit: Hit, char: str) -> MatchState:
        """
        Extend `hit` by one character in place.

        Only prefix hits can be advanced; anything else becomes NO_MATCH.
        """
        if hit.node is None or not hit.state.is_prefix:
            hit.node = None
            hit.state = MatchState.NO_MATCH
            return hit.state
        hit.node = self.step(hit.node, char)
        hit.end += 1
        hit.state = self.state_of(hit.node)
        return hit.state


class HitArena:
    """
    Alive hits of one recognizer, keyed by start offset.

    `feed` advances every hit by the character at `position`, then opens a
    new hit rooted at `position`, and reports the (begin, length) of each
    exact match it saw. Hits that stop being prefixes are dropped.
    """

    def __init__(self, trie: WordTrie):
        self._trie = trie
        self._hits: Dict[int, Hit] = {}

    def __len__(self) -> int:
        return len(self._hits)

    def __bool__(self) -> bool:
        return bool(self._hits)

    def advance(self, char: str) -> List[Tuple[int, int]]:
        """Advance the alive hits only."""
        matches: List[Tuple[int, int]] = []
        for begin in list(self._hits):
            hit = self._hits[begin]
            state = self._trie.advance(hit, char)
            if state.is_match:
                matches.append((hit.begin, hit.length))
            if not state.is_prefix:
                del self._hits[begin]
        return matches

    def start(self, char: str, position: int) -> List[Tuple[int, int]]:
        """Open a hit at `position`."""
        hit = self._trie.start_hit(char, position)
        if hit.state.is_prefix:
            self._hits[position] = hit
        if hit.state.is_match:
            return [(position, 1)]
        return []

    def feed(self, char: str, position: int) -> List[Tuple[int, int]]:
        return self.advance(char) + self.start(char, position)

    def clear(self) -> None:
        self._hits.clear()
