"""
Tests for recognizers.py and counters.py - candidate generation.
"""

import io

from hanseg.context import BufferContext
from hanseg.counters import QuantifierRecognizer
from hanseg.lexeme import LexemeType
from hanseg.recognizers import CJKRecognizer, LetterRecognizer
from hanseg.settings import Configuration


def spans(candidates):
    return [(l.text, l.type) for l in candidates]


class TestCJKRecognizer:
    """Tests for dictionary word matching."""

    def test_nested_words(self, dictionary, run_recognizers):
        """Every dictionary word at every offset is proposed."""
        candidates = run_recognizers([CJKRecognizer(dictionary)], "中华人民共和国")
        assert [l.text for l in candidates] == [
            "中华人民共和国", "中华", "华人", "人民", "共和国", "共和",
        ]
        assert all(l.type == LexemeType.CN_WORD for l in candidates)

    def test_offsets(self, dictionary, run_recognizers):
        """Candidates carry the offsets of the matched text."""
        candidates = run_recognizers([CJKRecognizer(dictionary)], "我在北京大学")
        assert [(l.begin_offset, l.length, l.text) for l in candidates] == [
            (2, 4, "北京大学"), (2, 2, "北京"), (4, 2, "大学"),
        ]

    def test_useless_char_breaks_words(self, dictionary, run_recognizers):
        """Punctuation between characters stops a match."""
        candidates = run_recognizers([CJKRecognizer(dictionary)], "中，华")
        assert candidates == []

    def test_locks_while_hits_alive(self, dictionary):
        """The buffer stays locked while a prefix is open."""
        context = BufferContext(dictionary, Configuration())
        context.fill_buffer(io.StringIO("中华人"))
        context.init_cursor()
        recognizer = CJKRecognizer(dictionary)

        recognizer.analyze(context)
        assert context.is_buffer_locked()
        context.move_cursor()
        recognizer.analyze(context)
        assert context.is_buffer_locked()
        recognizer.reset()
        context.move_cursor()
        recognizer.analyze(context)
        assert not context.is_buffer_locked()


class TestLetterRecognizer:
    """Tests for letter, number and mixed runs."""

    def test_english_words(self, run_recognizers):
        """Letter runs are ENGLISH; identical mixed runs are deduplicated."""
        candidates = run_recognizers([LetterRecognizer()], "hello world")
        assert spans(candidates) == [
            ("hello", LexemeType.ENGLISH),
            ("world", LexemeType.ENGLISH),
        ]

    def test_number_with_separators(self, run_recognizers):
        """Digits joined by , and . form one ARABIC lexeme."""
        candidates = run_recognizers([LetterRecognizer()], "1,000.5元")
        assert ("1,000.5", LexemeType.ARABIC) in spans(candidates)

    def test_trailing_number_connector_excluded(self, run_recognizers):
        """A number does not keep a trailing separator; a mixed run does."""
        candidates = run_recognizers([LetterRecognizer()], "12. ")
        assert spans(candidates) == [
            ("12.", LexemeType.LETTER),
            ("12", LexemeType.ARABIC),
        ]

    def test_mixed(self, run_recognizers):
        """Letters and digits together form a LETTER lexeme."""
        candidates = run_recognizers([LetterRecognizer()], "python3")
        assert spans(candidates) == [
            ("python3", LexemeType.LETTER),
            ("python", LexemeType.ENGLISH),
            ("3", LexemeType.ARABIC),
        ]

    def test_email_like(self, run_recognizers):
        """Connectors keep email-like tokens together."""
        candidates = run_recognizers([LetterRecognizer()], "a.b@c.com")
        assert candidates[0].text == "a.b@c.com"
        assert candidates[0].type == LexemeType.LETTER

    def test_trailing_letter_connectors(self, run_recognizers):
        """Trailing connectors stay in a mixed run: c++."""
        candidates = run_recognizers([LetterRecognizer()], "c++")
        assert ("c++", LexemeType.LETTER) in spans(candidates)

    def test_lowercased(self, run_recognizers):
        """Full-width and upper-case input is matched regularized."""
        candidates = run_recognizers([LetterRecognizer()], "ＩＫ")
        assert spans(candidates) == [("ik", LexemeType.ENGLISH)]


class TestQuantifierRecognizer:
    """Tests for numeral and quantifier candidates."""

    def test_numeral_and_quantifier(self, dictionary, run_recognizers):
        """三本书 yields a numeral and a quantifier."""
        candidates = run_recognizers([QuantifierRecognizer(dictionary)], "三本书")
        assert spans(candidates) == [
            ("三", LexemeType.NUMERAL),
            ("本", LexemeType.QUANTIFIER),
        ]

    def test_quantifier_needs_number(self, dictionary, run_recognizers):
        """A quantifier with no number in front is not proposed."""
        candidates = run_recognizers([QuantifierRecognizer(dictionary)], "本书")
        assert candidates == []

    def test_multi_char_numeral(self, dictionary, run_recognizers):
        """Units join digits into one numeral."""
        candidates = run_recognizers([QuantifierRecognizer(dictionary)], "二十五个")
        assert spans(candidates) == [
            ("二十五", LexemeType.NUMERAL),
            ("个", LexemeType.QUANTIFIER),
        ]

    def test_fraction(self, dictionary, run_recognizers):
        """X分之Y stays one numeral."""
        candidates = run_recognizers([QuantifierRecognizer(dictionary)], "三分之一")
        assert ("三分之一", LexemeType.NUMERAL) in spans(candidates)

    def test_fen_as_quantifier(self, dictionary, run_recognizers):
        """分 not followed by 之 ends the numeral and starts a quantifier."""
        candidates = run_recognizers([QuantifierRecognizer(dictionary)], "三分钟")
        assert spans(candidates) == [
            ("三", LexemeType.NUMERAL),
            ("分钟", LexemeType.QUANTIFIER),
            ("分", LexemeType.QUANTIFIER),
        ]

    def test_arabic_number_enables_quantifier(self, dictionary, run_recognizers):
        """A quantifier right after digits is proposed."""
        recognizers = [LetterRecognizer(), QuantifierRecognizer(dictionary)]
        candidates = run_recognizers(recognizers, "3个")
        assert spans(candidates) == [
            ("3", LexemeType.ARABIC),
            ("个", LexemeType.QUANTIFIER),
        ]

    def test_non_chinese_clears_quantifier_hits(self, dictionary, run_recognizers):
        """A quantifier prefix interrupted by a space is dropped."""
        candidates = run_recognizers([QuantifierRecognizer(dictionary)], "三千 克")
        assert spans(candidates) == [("三千", LexemeType.NUMERAL)]

    def test_reset(self, dictionary):
        """Reset forgets an open numeral run."""
        context = BufferContext(dictionary, Configuration())
        context.fill_buffer(io.StringIO("三十"))
        context.init_cursor()
        recognizer = QuantifierRecognizer(dictionary)
        recognizer.analyze(context)
        assert context.is_buffer_locked()
        recognizer.reset()
        context.move_cursor()
        recognizer.analyze(context)
        # 十 starts a fresh run and is flushed at the end of the stream
        assert [l.text for l in context.take_candidates()] == ["十"]
