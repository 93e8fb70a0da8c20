"""
Tests for cli.py - Command line interface.
"""

import json
from unittest.mock import patch

import pytest

from hanseg.cli import main


@pytest.fixture
def no_default_db():
    """Ignore any word store configured through HANSEG_DB_PATH."""
    with patch('hanseg.cli.get_db_path', return_value=None):
        yield


class TestCLIBasics:
    """Tests for basic CLI functionality."""

    def test_version(self, capsys):
        """Test version flag."""
        result = main(['--version'])
        assert result == 0
        captured = capsys.readouterr()
        assert 'hanseg' in captured.out
        assert '0.1.0' in captured.out

    def test_help(self, capsys):
        """Test help flag."""
        with pytest.raises(SystemExit) as exc_info:
            main(['--help'])
        assert exc_info.value.code == 0
        captured = capsys.readouterr()
        assert 'Chinese' in captured.out

    def test_no_args(self, capsys):
        """Test running with no arguments."""
        result = main([])
        assert result == 1


class TestCLIOutput:
    """Tests for output formats, using the small test dictionary."""

    def test_simple_output(self, capsys, shared_dictionary, no_default_db):
        """Default output is space separated words."""
        assert main(['三本书']) == 0
        assert capsys.readouterr().out.strip() == '三本 书'

    def test_punctuation_dropped(self, capsys, shared_dictionary, no_default_db):
        """Whitespace and punctuation are left out unless -a is given."""
        assert main(['成立了。']) == 0
        assert capsys.readouterr().out.strip() == '成立 了'
        assert main(['-a', '成立了。']) == 0
        assert capsys.readouterr().out.strip() == '成立 了 。'

    def test_info_output(self, capsys, shared_dictionary, no_default_db):
        """-i prints offsets, text and type per line."""
        assert main(['-i', '三本书']) == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert lines == ['0-2 : 三本 : COUNT', '2-3 : 书 : CN_CHAR']

    def test_json_output(self, capsys, shared_dictionary, no_default_db):
        """-f prints the full result as JSON."""
        assert main(['-f', '三本书']) == 0
        data = json.loads(capsys.readouterr().out)
        assert data['count'] == 2
        assert data['smart'] is True
        first = data['lexemes'][0]
        assert (first['text'], first['type'], first['value']) == ('三本', 'COUNT', 3)
        assert data['lexemes'][1]['value'] is None

    def test_fine_mode(self, capsys, shared_dictionary, no_default_db):
        """--fine keeps numeral and quantifier apart."""
        assert main(['--fine', '三本书']) == 0
        assert capsys.readouterr().out.strip() == '三 本 书'

    def test_file_input(self, capsys, tmp_path, shared_dictionary, no_default_db):
        """--file reads the input from a file."""
        path = tmp_path / 'input.txt'
        path.write_text('中华人民共和国', encoding='utf-8')
        assert main(['--file', str(path)]) == 0
        assert capsys.readouterr().out.strip() == '中华人民共和国'


class TestCLIErrorHandling:
    """Tests for error handling."""

    def test_missing_database(self, capsys, tmp_path):
        """A -d path without a word store fails."""
        result = main(['-d', str(tmp_path / 'missing.db'), '三本书'])
        assert result == 1
        assert 'missing' in capsys.readouterr().err

    def test_missing_file(self, capsys, tmp_path):
        """An unreadable --file fails."""
        assert main(['--file', str(tmp_path / 'nope.txt')]) == 1
        assert 'Error reading' in capsys.readouterr().err


class TestInitDb:
    """Tests for the init-db subcommand."""

    def test_build_and_use(self, capsys, tmp_path):
        """A store built by init-db can be used with -d."""
        db_path = tmp_path / 'words.db'
        assert main(['init-db', '-o', str(db_path)]) == 0
        assert db_path.exists()
        assert 'Word store initialized' in capsys.readouterr().out

        assert main(['-d', str(db_path), '三本书']) == 0
        assert capsys.readouterr().out.strip() == '三本 书'

    def test_force_overwrite(self, tmp_path):
        """--force replaces an existing store without asking."""
        db_path = tmp_path / 'words.db'
        assert main(['init-db', '-o', str(db_path)]) == 0
        assert main(['init-db', '-o', str(db_path), '--force']) == 0

    def test_overwrite_declined(self, capsys, tmp_path):
        """Answering no at the prompt keeps the existing store."""
        db_path = tmp_path / 'words.db'
        assert main(['init-db', '-o', str(db_path)]) == 0
        with patch('builtins.input', return_value='n'):
            assert main(['init-db', '-o', str(db_path)]) == 1
        assert 'Aborted' in capsys.readouterr().out

    def test_missing_word_list(self, capsys, tmp_path):
        """A missing word list is reported before anything is written."""
        db_path = tmp_path / 'words.db'
        result = main(['init-db', '--main', str(tmp_path / 'none.dic'), '-o', str(db_path)])
        assert result == 1
        assert not db_path.exists()
