"""
Ambiguity resolution for hanseg.

Candidates of one buffer cycle are grouped into conflict regions (maximal
runs of transitively overlapping candidates). Each region is resolved on its
own, so a choice in one region never influences another.

Smart mode picks one non-overlapping combination per region, preferring in
order:
1. fewest resulting lexemes (uncovered characters count as one each)
2. largest coverage by candidates
3. fewest single-character lexemes
4. lexemes positioned earliest

and then joins numbers with the quantifier that follows them. Fine-grained
mode keeps every candidate.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from hanseg.context import BufferContext
from hanseg.lexeme import Lexeme, LexemeType

logger = logging.getLogger(__name__)

# (left type, right type) -> fused type, smart mode only
FUSION_RULES: Dict[Tuple[LexemeType, LexemeType], LexemeType] = {
    (LexemeType.ARABIC, LexemeType.NUMERAL): LexemeType.NUMERAL,
    (LexemeType.ARABIC, LexemeType.QUANTIFIER): LexemeType.COUNT,
    (LexemeType.NUMERAL, LexemeType.QUANTIFIER): LexemeType.COUNT,
}


# ============================================================================
# Conflict Regions
# ============================================================================

@dataclass
class ConflictRegion:
    """Candidates whose spans transitively overlap, in lexeme order."""
    begin: int
    end: int
    lexemes: List[Lexeme]

    @property
    def size(self) -> int:
        return self.end - self.begin


def group_conflicts(candidates: List[Lexeme]) -> List[ConflictRegion]:
    """
    Split sorted candidates into conflict regions.

    Example:
        中华 [0,2) 华人 [1,3) 共和 [4,6) -> two regions: [0,3) and [4,6)
    """
    regions: List[ConflictRegion] = []
    for lexeme in sorted(candidates, key=lambda l: l.sort_key):
        if regions and lexeme.begin_offset < regions[-1].end:
            region = regions[-1]
            region.lexemes.append(lexeme)
            region.end = max(region.end, lexeme.end_offset)
        else:
            regions.append(ConflictRegion(lexeme.begin_offset, lexeme.end_offset, [lexeme]))
    return regions


# ============================================================================
# Path Selection (Dynamic Programming)
# ============================================================================

class _PathNode:
    """Chosen candidate, linked to the rest of the path."""

    __slots__ = ("lexeme", "next")

    def __init__(self, lexeme: Lexeme, next_node: Optional["_PathNode"]):
        self.lexeme = lexeme
        self.next = next_node


@dataclass
class _Choice:
    """Best way to cover a region suffix."""
    # (lexemes, -coverage, single characters); smaller is better
    score: Tuple[int, int, int]
    head: Optional[_PathNode]

    def lexemes(self) -> List[Lexeme]:
        result = []
        node = self.head
        while node is not None:
            result.append(node.lexeme)
            node = node.next
        return result


def _positioned_earlier(a: Optional[_PathNode], b: Optional[_PathNode]) -> bool:
    """Compare begin offsets pairwise; the first difference decides."""
    while a is not None and b is not None:
        if a.lexeme.begin_offset != b.lexeme.begin_offset:
            return a.lexeme.begin_offset < b.lexeme.begin_offset
        a, b = a.next, b.next
    # An exhausted path has nothing positioned earlier
    return a is not None and b is None


def _better(a: _Choice, b: Optional[_Choice]) -> bool:
    if b is None:
        return True
    if a.score != b.score:
        return a.score < b.score
    return _positioned_earlier(a.head, b.head)


def judge(region: ConflictRegion) -> List[Lexeme]:
    """
    Choose the best non-overlapping combination of a region's candidates.

    Works right to left: best[i] is the best cover of region positions
    i..end, built either from a candidate starting at i or from a single
    uncovered character at i.
    """
    if len(region.lexemes) == 1:
        return list(region.lexemes)

    size = region.size
    starting: List[List[Lexeme]] = [[] for _ in range(size)]
    for lexeme in region.lexemes:
        starting[lexeme.begin_offset - region.begin].append(lexeme)

    best: List[Optional[_Choice]] = [None] * (size + 1)
    best[size] = _Choice((0, 0, 0), None)

    for i in range(size - 1, -1, -1):
        choice: Optional[_Choice] = None
        for lexeme in starting[i]:
            rest = best[i + lexeme.length]
            count, coverage, singles = rest.score
            candidate = _Choice(
                (count + 1, coverage - lexeme.length, singles + (lexeme.length == 1)),
                _PathNode(lexeme, rest.head),
            )
            if _better(candidate, choice):
                choice = candidate

        rest = best[i + 1]
        count, coverage, singles = rest.score
        uncovered = _Choice((count + 1, coverage, singles + 1), rest.head)
        if _better(uncovered, choice):
            choice = uncovered

        best[i] = choice

    return best[0].lexemes()


def fuse_counts(path: List[Lexeme]) -> List[Lexeme]:
    """Join adjacent number and quantifier lexemes (三 + 本 -> 三本)."""
    fused: List[Lexeme] = []
    for lexeme in path:
        if fused:
            previous = fused[-1]
            fused_type = FUSION_RULES.get((previous.type, lexeme.type))
            if fused_type is not None and previous.end_offset == lexeme.begin_offset:
                fused[-1] = previous.fuse(lexeme, fused_type)
                continue
        fused.append(lexeme)
    return fused


# ============================================================================
# Arbitrator
# ============================================================================

class Arbitrator:
    """Turns a cycle's candidate set into the path handed to the output queue."""

    def resolve(self, candidates: List[Lexeme], use_smart: bool = True) -> List[Lexeme]:
        """
        Args:
            candidates: Proposals of one cycle, possibly overlapping.
            use_smart: Resolve overlaps and fuse counts; otherwise keep all.

        Returns:
            Lexemes in (begin, longest first) order.
        """
        regions = group_conflicts(candidates)
        path: List[Lexeme] = []
        for region in regions:
            if use_smart:
                path.extend(judge(region))
            else:
                path.extend(region.lexemes)

        if use_smart:
            path = fuse_counts(path)

        logger.debug(f"Arbitrated {len(candidates)} candidates in {len(regions)} regions "
                     f"into {len(path)} lexemes (smart={use_smart})")
        return path

    def process(self, context: BufferContext, use_smart: bool = True) -> None:
        context.set_resolved_path(self.resolve(context.take_candidates(), use_smart))
