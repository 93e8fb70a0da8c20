"""
Shared fixtures for hanseg tests.

Tests use a small, fixed dictionary so expected segmentations do not depend
on the bundled word lists.
"""

import io

import pytest

from hanseg.context import BufferContext
from hanseg.db.connection import dispose_engines
from hanseg.dictionary import Dictionary, clear_dictionary, set_dictionary
from hanseg.segmenter import Segmenter
from hanseg.settings import Configuration

MAIN_WORDS = [
    "中华人民共和国", "中华", "华人", "人民", "共和国", "共和", "中国",
    "研究", "研究生", "生命", "起源", "成立", "北京", "大学", "北京大学",
    "公斤",
]

QUANTIFIER_WORDS = ["个", "本", "张", "只", "分", "分钟", "公斤", "克", "千克", "年", "天"]

STOP_WORDS = ["the", "a", "of", "and"]


@pytest.fixture(autouse=True)
def isolate_shared_state():
    """Every test starts without a shared dictionary or cached engines."""
    clear_dictionary()
    yield
    clear_dictionary()
    dispose_engines()


@pytest.fixture
def dictionary():
    """Small deterministic dictionary."""
    return Dictionary(MAIN_WORDS, QUANTIFIER_WORDS, STOP_WORDS)


@pytest.fixture
def shared_dictionary(dictionary):
    """The small dictionary installed as the process-wide instance."""
    set_dictionary(dictionary)
    return dictionary


@pytest.fixture
def segment(dictionary):
    """Segment a string with the small dictionary; returns the lexeme list."""
    def _segment(text, use_smart=True, **options):
        config = Configuration(use_smart=use_smart, **options)
        return Segmenter(text, dictionary=dictionary, config=config).segment()
    return _segment


@pytest.fixture
def run_recognizers(dictionary):
    """
    Drive recognizers over a whole string in one cycle and return the
    candidates they proposed.
    """
    def _run(recognizers, text):
        context = BufferContext(dictionary, Configuration())
        context.fill_buffer(io.StringIO(text))
        context.init_cursor()
        while True:
            for recognizer in recognizers:
                recognizer.analyze(context)
            if not context.move_cursor():
                break
        return context.take_candidates()
    return _run
