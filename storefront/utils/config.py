import logging
import os
from pathlib import Path
from dotenv import load_dotenv

from ..models import SortOption

DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[1] / 'data' / 'catalog.json'


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    def __init__(self):
        # Load environment variables from .env file, overriding existing env vars
        load_dotenv(override=True)

        self.CATALOG_PATH = Path(os.getenv('CATALOG_PATH', str(DEFAULT_CATALOG_PATH)))
        self.MAX_RESULTS = int(os.getenv('MAX_RESULTS', '20'))
        self.DEFAULT_SORT = os.getenv('DEFAULT_SORT') or None

        # Opt-in matching improvements; the defaults reproduce the storefront's original behavior
        self.STRICT_WORD_MATCH = _env_flag('STRICT_WORD_MATCH')
        self.PRICE_SHORTCUTS = _env_flag('PRICE_SHORTCUTS')
        self.MATCH_SEARCH_TEXT = _env_flag('MATCH_SEARCH_TEXT')

        self.LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

        self._validate_config()

    def _validate_config(self) -> None:
        """Validate the configuration values."""
        if self.MAX_RESULTS <= 0:
            raise ValueError("MAX_RESULTS must be greater than 0")

        if self.DEFAULT_SORT is not None and self.DEFAULT_SORT not in {option.value for option in SortOption}:
            raise ValueError(f"DEFAULT_SORT must be one of: {', '.join(option.value for option in SortOption)}")

        if not isinstance(logging.getLevelName(self.LOG_LEVEL), int):
            raise ValueError(f"LOG_LEVEL '{self.LOG_LEVEL}' is not a valid logging level")
