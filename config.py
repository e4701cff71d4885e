# config.py
import tomllib
from pathlib import Path

def _get_version():
    """Read the project version from pyproject.toml"""
    try:
        pyproject_path = Path(__file__).parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
        return data["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        return "unknown"  # Fallback if pyproject.toml is missing

VERSION = _get_version()
FRAME_WIDTH = 70 # For CLI UI headings

# Index builder defaults
DEFAULT_FALSE_POSITIVE_RATE = 0.01
DEFAULT_COUNTER_WIDTH = 4       # Max estimate per counter is 2^4 - 1 = 15
MAX_COUNTER_WIDTH = 32          # Counters are stored as uint32 while building
WIDTH_RANK_MULTIPLIER = 2       # Used by width minimization

# Search defaults
DEFAULT_TOP_K = 25              # How many documents to show per query

# Placeholder replaced by the JSON index when rendering a template
INDEX_TEMPLATE_PLACEHOLDER = "UNIQUE_SEARCH_INDEX_PLACEHOLDER"

class PathConfig:
    BASE_DIR = Path(__file__).parent
    DATA = BASE_DIR / "data"
    PREPROCESSING = BASE_DIR / "core/preprocessing"

    @classmethod
    def get_documents_file(cls):
        """Raw documents ({title, url, body}) consumed by the builder"""
        return cls.DATA / "posts.json"

    @classmethod
    def get_search_index_file(cls):
        """Encoded spectral bloom filter records"""
        return cls.DATA / "search_index.json"

    @classmethod
    def get_stopwords_file(cls):
        return cls.PREPROCESSING / "stopwords.txt"

    @classmethod
    def get_config_path(cls):
        return cls.BASE_DIR / "config.json"
