import asyncio
import json
import pytest
from card.translations import TRANSLATIONS_DIR, Translations


def test_bundled_translations():
    translations = Translations()
    count = asyncio.run(translations.load_async())

    assert count >= 2
    assert "en" in translations.languages
    assert translations.translate("weather.humidity", "cs") == "Vlhkost"
    assert translations.translate("weather.humidity", "cs-CZ") == "Vlhkost"
    assert TRANSLATIONS_DIR.parts[-2:] == ("card", "locales")


def test_fallbacks(tmp_path):
    (tmp_path / "en.json").write_text(json.dumps({"greeting": "Hello", "farewell": "Bye"}))
    (tmp_path / "fr.json").write_text(json.dumps({"greeting": "Bonjour"}))
    translations = Translations(tmp_path)
    asyncio.run(translations.load_async())

    assert translations.translate("greeting", "fr") == "Bonjour"
    assert translations.translate("farewell", "fr") == "Bye"
    assert translations.translate("missing.key", "fr") == "missing.key"
    assert translations.translate("greeting") == "Hello"


def test_missing_directory_raises(tmp_path):
    translations = Translations(tmp_path / "nowhere")
    with pytest.raises(FileNotFoundError):
        asyncio.run(translations.load_async())
    assert not translations.loaded


def test_invalid_file_raises(tmp_path):
    (tmp_path / "en.json").write_text("{not json")
    with pytest.raises(ValueError):
        asyncio.run(Translations(tmp_path).load_async())
