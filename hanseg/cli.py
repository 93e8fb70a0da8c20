"""
Command line interface for hanseg.

Usage:
    hanseg "中华人民共和国成立了"            # space separated words
    hanseg -i "三本书"                      # one lexeme per line with type and offsets
    hanseg -f "三本书"                      # full JSON
    hanseg --fine "中华人民共和国"          # fine-grained mode
    hanseg --file input.txt                 # segment a file
    hanseg init-db                          # build the SQLite word store
"""

import argparse
import logging
import os
import sys
import time
from pathlib import Path
from typing import Optional

from hanseg import __version__
from hanseg.db.connection import dispose_engines, get_db_path
from hanseg.dict_load import database_exists, init_database
from hanseg.dictionary import init_dictionary
from hanseg.lexeme import LexemeType
from hanseg.models import SegmentationResult
from hanseg.segmenter import Segmenter
from hanseg.settings import (
    DEBUG, DEFAULT_DB_PATH, MAIN_DICT_PATH, QUANTIFIER_DICT_PATH, STOPWORD_DICT_PATH,
    Configuration,
)


def setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose or DEBUG else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def init_db_command(args) -> int:
    """Build the SQLite word store from word list files."""
    db_path = Path(args.output) if args.output else DEFAULT_DB_PATH

    config = Configuration(
        main_dict=Path(args.main) if args.main else MAIN_DICT_PATH,
        quantifier_dict=Path(args.quantifier) if args.quantifier else QUANTIFIER_DICT_PATH,
        stopword_dict=Path(args.stopwords) if args.stopwords else STOPWORD_DICT_PATH,
        ext_dicts=[Path(p) for p in args.ext or []],
        ext_stopwords=[Path(p) for p in args.ext_stopwords or []],
    )

    for path in [config.main_dict, config.quantifier_dict, config.stopword_dict,
                 *config.ext_dicts, *config.ext_stopwords]:
        if not path.exists():
            print(f"Error: word list not found: {path}", file=sys.stderr)
            return 1

    # Confirm overwrite
    if db_path.exists():
        if not args.force:
            print(f"Database already exists: {db_path}")
            response = input("Overwrite? [y/N]: ").strip().lower()
            if response != 'y':
                print("Aborted.")
                return 1
        dispose_engines()
        db_path.unlink()

    print("Initializing word store...")
    print(f"  Main:        {config.main_dict}")
    print(f"  Quantifiers: {config.quantifier_dict}")
    print(f"  Stop words:  {config.stopword_dict}")
    for path in config.ext_dicts:
        print(f"  Extension:   {path}")
    print(f"  Output:      {db_path}")
    print()

    t0 = time.perf_counter()
    try:
        counts = init_database(db_path, config)
    except Exception as e:
        print(f"Error initializing database: {e}", file=sys.stderr)
        return 1

    elapsed = time.perf_counter() - t0
    db_size = os.path.getsize(db_path) / 1024

    print("Word store initialized.")
    for kind, count in counts.items():
        print(f"   {kind.value:<11} {count:,}")
    print(f"   Time: {elapsed:.2f}s")
    print(f"   Size: {db_size:.1f}KB")
    print()
    print("Set HANSEG_DB_PATH to use this database by default:")
    print(f'  export HANSEG_DB_PATH="{db_path.absolute()}"')
    return 0


def main_init_db(args: list) -> int:
    """CLI entry point for init-db subcommand."""
    parser = argparse.ArgumentParser(
        description='Build the hanseg SQLite word store from word lists',
        prog='hanseg init-db',
    )

    parser.add_argument('--main', type=str, metavar='PATH',
                        help='Main dictionary (default: bundled main.dic)')
    parser.add_argument('--quantifier', type=str, metavar='PATH',
                        help='Quantifier dictionary (default: bundled quantifier.dic)')
    parser.add_argument('--stopwords', type=str, metavar='PATH',
                        help='Stop word list (default: bundled stopword.dic)')
    parser.add_argument('--ext', type=str, metavar='PATH', action='append',
                        help='Extension dictionary merged into the main dictionary (repeatable)')
    parser.add_argument('--ext-stopwords', type=str, metavar='PATH', action='append',
                        help='Extension stop word list (repeatable)')
    parser.add_argument('--output', '-o', type=str, metavar='PATH',
                        help=f'Output database path (default: {DEFAULT_DB_PATH})')
    parser.add_argument('--force', '-f', action='store_true',
                        help='Overwrite existing database without prompting')

    parsed = parser.parse_args(args)
    return init_db_command(parsed)


def main(args: Optional[list] = None) -> int:
    """Main CLI entry point."""
    args_list = args if args is not None else sys.argv[1:]

    if args_list and args_list[0] == 'init-db':
        return main_init_db(args_list[1:])

    parser = argparse.ArgumentParser(
        description='Command line interface for hanseg (Chinese word segmenter)',
        prog='hanseg',
        epilog='Subcommands:\n  hanseg init-db    Build the SQLite word store from word lists',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument('text', nargs='*', help='Chinese text to segment')
    parser.add_argument('--file', type=str, metavar='PATH',
                        help='Read input from a UTF-8 file instead of arguments')
    parser.add_argument('--fine', action='store_true',
                        help='Fine-grained mode: keep every candidate, no count fusion')
    parser.add_argument('-i', '--with-info', action='store_true',
                        help='Print one lexeme per line with offsets and type')
    parser.add_argument('-f', '--full', action='store_true',
                        help='Full result as JSON')
    parser.add_argument('-a', '--all-types', action='store_true',
                        help='Keep whitespace and punctuation lexemes in the output')
    parser.add_argument('--filter-stop-words', action='store_true',
                        help='Drop stop words from the output')
    parser.add_argument('-d', '--database', type=str, default=None, metavar='PATH',
                        help='SQLite word store to load the dictionary from')
    parser.add_argument('--verbose', action='store_true',
                        help='Log dictionary loading and buffer cycles')
    parser.add_argument('-v', '--version', action='store_true',
                        help='Show version information')

    parsed = parser.parse_args(args)

    if parsed.version:
        print(f'hanseg {__version__}')
        return 0

    setup_logging(parsed.verbose)

    if parsed.file:
        try:
            text = Path(parsed.file).read_text(encoding='utf-8')
        except OSError as e:
            print(f'Error reading {parsed.file}: {e}', file=sys.stderr)
            return 1
    else:
        text = ' '.join(parsed.text) if parsed.text else ''

    if not text:
        parser.print_help()
        return 1

    db_path = Path(parsed.database) if parsed.database else get_db_path()
    if db_path is not None and not database_exists(db_path):
        print(f'Error: word store missing or empty: {db_path}', file=sys.stderr)
        return 1

    config = Configuration(
        use_smart=not parsed.fine,
        filter_stop_words=parsed.filter_stop_words,
        db_path=db_path,
    )

    try:
        dictionary = init_dictionary(config)
        lexemes = Segmenter(text, dictionary=dictionary, config=config).segment()
    except Exception as e:
        print(f'Error processing text: {e}', file=sys.stderr)
        return 1

    if not parsed.all_types:
        lexemes = [lexeme for lexeme in lexemes if lexeme.type != LexemeType.UNKNOWN]

    if parsed.full:
        result = SegmentationResult.from_lexemes(lexemes, source=text, smart=config.use_smart)
        print(result.model_dump_json())
    elif parsed.with_info:
        for lexeme in lexemes:
            print(lexeme)
    else:
        print(' '.join(lexeme.text for lexeme in lexemes))

    return 0


if __name__ == '__main__':
    sys.exit(main())
