"""
Tests for dict_load.py - word list files and the SQLite word store.
"""

import pytest

from hanseg.db.connection import get_session
from hanseg.db.models import WordKind
from hanseg.dict_load import (
    collect_word_lists, count_words, database_exists, init_database,
    load_words_from_db, read_word_list,
)
from hanseg.dictionary import Dictionary
from hanseg.settings import Configuration


def write_list(path, text):
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def config(tmp_path):
    """Word lists with a duplicate and one extension dictionary."""
    return Configuration(
        main_dict=write_list(tmp_path / "main.dic", "中华\n人民\n中华\n"),
        quantifier_dict=write_list(tmp_path / "quantifier.dic", "本\n个\n"),
        stopword_dict=write_list(tmp_path / "stopword.dic", "the\n"),
        ext_dicts=[write_list(tmp_path / "ext.dic", "# extension\n北京大学\n")],
        ext_stopwords=[write_list(tmp_path / "ext_stop.dic", "of\n")],
    )


class TestReadWordList:
    """Tests for word list parsing."""

    def test_skips_comments_and_blanks(self, tmp_path):
        """Comment and blank lines are ignored, words are stripped."""
        path = write_list(tmp_path / "words.dic", "# header\n\n 中华 \n人民\n   \n")
        assert read_word_list(path) == ["中华", "人民"]

    def test_byte_order_mark(self, tmp_path):
        """A leading BOM does not end up in the first word."""
        path = tmp_path / "bom.dic"
        path.write_bytes("﻿中华\n".encode("utf-8"))
        assert read_word_list(path) == ["中华"]

    def test_missing_file(self, tmp_path):
        """Missing files raise."""
        with pytest.raises(FileNotFoundError):
            read_word_list(tmp_path / "missing.dic")


class TestCollectWordLists:
    """Tests for merging configured word lists."""

    def test_extensions_merged(self, config):
        """Extension lists are appended to their base lists."""
        word_lists = collect_word_lists(config)
        assert word_lists[WordKind.MAIN] == ["中华", "人民", "中华", "北京大学"]
        assert word_lists[WordKind.QUANTIFIER] == ["本", "个"]
        assert word_lists[WordKind.STOPWORD] == ["the", "of"]


class TestWordStore:
    """Tests for the SQLite word store."""

    def test_init_database(self, config, tmp_path):
        """Duplicates are stored once."""
        db_path = tmp_path / "words.db"
        counts = init_database(db_path, config)
        assert counts == {WordKind.MAIN: 3, WordKind.QUANTIFIER: 2, WordKind.STOPWORD: 2}

    def test_init_database_again_adds_nothing(self, config, tmp_path):
        """Re-running on an existing store inserts no rows."""
        db_path = tmp_path / "words.db"
        init_database(db_path, config)
        counts = init_database(db_path, config)
        assert sum(counts.values()) == 0

    def test_load_words(self, config, tmp_path):
        """Stored words come back grouped by kind in insertion order."""
        db_path = tmp_path / "words.db"
        init_database(db_path, config)
        with get_session(db_path) as session:
            word_lists = load_words_from_db(session)
            counts = count_words(session)
        assert word_lists[WordKind.MAIN] == ["中华", "人民", "北京大学"]
        assert word_lists[WordKind.STOPWORD] == ["the", "of"]
        assert counts[WordKind.QUANTIFIER] == 2

    def test_progress_callback(self, config, tmp_path):
        """The callback sees the running count."""
        seen = []
        init_database(tmp_path / "words.db", config, batch_size=1, progress_callback=seen.append)
        assert seen == [1, 2, 3, 1, 2, 1, 2]

    def test_database_exists(self, config, tmp_path):
        """Only a populated store counts as existing."""
        db_path = tmp_path / "words.db"
        assert not database_exists(db_path)
        init_database(db_path, config)
        assert database_exists(db_path)

    def test_get_session_missing(self, tmp_path):
        """Opening a missing store raises."""
        with pytest.raises(FileNotFoundError):
            get_session(tmp_path / "missing.db")

    def test_dictionary_from_store(self, config, tmp_path):
        """A configured db_path takes precedence over the word list files."""
        db_path = tmp_path / "words.db"
        init_database(db_path, config)
        config.main_dict = tmp_path / "gone.dic"
        config.db_path = db_path

        dictionary = Dictionary.from_config(config)
        assert dictionary.query_main("北京大学").is_match
        assert dictionary.query_quantifier("本").is_match
        assert dictionary.is_stop_word("of")
