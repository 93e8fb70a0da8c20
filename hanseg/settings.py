"""
Settings and configuration for hanseg.

Module-level defaults can be overridden through environment variables;
per-segmenter options live on the Configuration dataclass.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

# Data directory paths
PACKAGE_DIR = Path(__file__).parent
DATA_DIR = PACKAGE_DIR / "data"

# Bundled word lists (one word per line, UTF-8)
MAIN_DICT_PATH = Path(os.environ.get("HANSEG_MAIN_DICT", DATA_DIR / "main.dic"))
QUANTIFIER_DICT_PATH = Path(os.environ.get("HANSEG_QUANTIFIER_DICT", DATA_DIR / "quantifier.dic"))
STOPWORD_DICT_PATH = Path(os.environ.get("HANSEG_STOPWORD_DICT", DATA_DIR / "stopword.dic"))

# Optional SQLite word store, built with `hanseg init-db`
DEFAULT_DB_PATH = DATA_DIR / "hanseg.db"
DB_PATH = Path(os.environ.get("HANSEG_DB_PATH", DEFAULT_DB_PATH))

# Debug mode
DEBUG = os.environ.get("HANSEG_DEBUG", "").lower() in ("1", "true", "yes")

# Character buffer capacity
BUFFER_SIZE = int(os.environ.get("HANSEG_BUFFER_SIZE", 4096))

# Distance from the buffer end at which a cycle may stop early for a refill
BUFFER_EXHAUST_CRITICAL = 100


@dataclass
class Configuration:
    """
    Options for one segmenter and for the dictionary bootstrap.

    Only `use_smart` changes the matching/arbitration logic; the remaining
    fields control input regularization, output filtering and where the
    word lists come from.
    """
    use_smart: bool = True
    enable_lowercase: bool = True
    filter_stop_words: bool = False
    buffer_size: int = BUFFER_SIZE
    main_dict: Path = MAIN_DICT_PATH
    quantifier_dict: Path = QUANTIFIER_DICT_PATH
    stopword_dict: Path = STOPWORD_DICT_PATH
    ext_dicts: List[Path] = field(default_factory=list)
    ext_stopwords: List[Path] = field(default_factory=list)
    db_path: Optional[Path] = None

    def __post_init__(self):
        if self.buffer_size < 1:
            raise ValueError(f"buffer_size must be positive, got {self.buffer_size}")
