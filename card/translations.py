import asyncio
import json
from pathlib import Path
from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)

TRANSLATIONS_DIR = Path(__file__).resolve().parent / "locales"
DEFAULT_LANGUAGE = "en"


class Translations:
    """Translation strings for every language the card ships.

    One instance is shared by the card and its components. Strings are
    loaded from <language>.json files; lookups fall back to English and
    then to the key itself.
    """

    def __init__(self, directory: Optional[Path] = None):
        self.directory = Path(directory) if directory else TRANSLATIONS_DIR
        self._strings: Dict[str, Dict[str, str]] = {}
        self.loaded = False

    @property
    def languages(self):
        return sorted(self._strings)

    async def load_async(self) -> int:
        """Load every translation file in the directory.

        Returns the number of languages loaded. Raises if the directory is
        missing or a file cannot be parsed.
        """
        strings = await asyncio.to_thread(self._read_all)
        self._strings = strings
        self.loaded = True
        logger.debug(f"Loaded translations for {len(strings)} language(s): {', '.join(sorted(strings))}")
        return len(strings)

    def _read_all(self) -> Dict[str, Dict[str, str]]:
        if not self.directory.is_dir():
            raise FileNotFoundError(f"Translations directory not found: {self.directory}")
        strings = {}
        for path in sorted(self.directory.glob("*.json")):
            with open(path, encoding="utf-8") as f:
                strings[path.stem] = json.load(f)
        return strings

    def translate(self, key: str, language: Optional[str] = None) -> str:
        language = (language or DEFAULT_LANGUAGE).split("-")[0].lower()
        for candidate in (language, DEFAULT_LANGUAGE):
            value = self._strings.get(candidate, {}).get(key)
            if value is not None:
                return value
        return key
