"""
hanseg: streaming Chinese word segmenter.

Dictionary-driven segmentation with numeral/quantifier and letter/digit
recognition, in smart (fused, non-overlapping) and fine-grained modes.
"""

import time
from typing import List, Optional, Tuple

__version__ = "0.1.0"


def warm_up(verbose: bool = False) -> Tuple[float, dict]:
    """
    Build the shared dictionary ahead of the first segmentation.

    Args:
        verbose: If True, print timing information.

    Returns:
        Tuple of (total_time_seconds, timing_details_dict)

    Example:
        >>> import hanseg
        >>> elapsed, details = hanseg.warm_up(verbose=True)
        Warming up hanseg...
          Dictionary:       21.4ms
        Total warm-up:      21.4ms
    """
    from hanseg.dictionary import init_dictionary

    timings = {}
    total_start = time.perf_counter()

    if verbose:
        print("Warming up hanseg...")

    t0 = time.perf_counter()
    init_dictionary()
    timings['dictionary'] = (time.perf_counter() - t0) * 1000
    if verbose:
        print(f"  Dictionary:     {timings['dictionary']:>7.1f}ms")

    total_time = time.perf_counter() - total_start
    timings['total'] = total_time * 1000

    if verbose:
        print(f"Total warm-up:    {timings['total']:>7.1f}ms")

    return total_time, timings


def segment(text: str, use_smart: bool = True, config=None):
    """
    Segment a string.

    Args:
        text: Input text.
        use_smart: Smart mode (default) or fine-grained mode.
        config: Optional Configuration (buffer size, stop word filtering, ...).

    Returns:
        SegmentationResult with one LexemeResult per lexeme.

    Example:
        >>> import hanseg
        >>> [w.text for w in hanseg.segment("三本书").lexemes]
        ['三本', '书']
    """
    from hanseg.models import SegmentationResult
    from hanseg.segmenter import Segmenter

    lexemes = Segmenter(text, use_smart=use_smart, config=config).segment()
    return SegmentationResult.from_lexemes(lexemes, source=text, smart=use_smart)


def cut(text: str, use_smart: bool = True, config=None) -> List[str]:
    """
    Segment a string into lexeme texts, leaving out whitespace and
    punctuation.

    Example:
        >>> import hanseg
        >>> hanseg.cut("中华人民共和国成立了")
        ['中华人民共和国', '成立', '了']
    """
    from hanseg.lexeme import LexemeType
    from hanseg.segmenter import Segmenter

    return [
        lexeme.text
        for lexeme in Segmenter(text, use_smart=use_smart, config=config)
        if lexeme.type != LexemeType.UNKNOWN
    ]


from hanseg.dictionary import (  # noqa: E402
    Dictionary, DictionaryNotInitializedError, get_dictionary, init_dictionary,
)
from hanseg.lexeme import Lexeme, LexemeType  # noqa: E402
from hanseg.segmenter import Segmenter  # noqa: E402
from hanseg.settings import Configuration  # noqa: E402

__all__ = [
    "Configuration",
    "Dictionary",
    "DictionaryNotInitializedError",
    "Lexeme",
    "LexemeType",
    "Segmenter",
    "cut",
    "get_dictionary",
    "init_dictionary",
    "segment",
    "warm_up",
]
