from typing import Iterable, List, Optional, Sequence, Set

from interfaces.i_translation_engine import ITranslationEngine
from resxsync_models import TranslationResult

DEFAULT_LANGUAGES = ("en", "de", "es", "fr", "it", "ja", "pl", "pt", "ru", "tr", "zh-CN")


class DummyEngine(ITranslationEngine):
    """
    A dummy translation engine for testing and offline use.

    Prefixes every text instead of translating it.
    """

    def __init__(self, prefix: str = "[TEST] ", languages: Optional[Iterable[str]] = None):
        self.prefix = prefix
        self._languages = set(languages) if languages is not None else set(DEFAULT_LANGUAGES)

    @property
    def id(self) -> str:
        return "resxsync.engine.dummy"

    @property
    def name(self) -> str:
        return "Dummy Engine (Test)"

    def get_supported_languages(self) -> Set[str]:
        return set(self._languages)

    def translate_batch(self, texts: Sequence[str], source_lang: str, target_lang: str) -> List[TranslationResult]:
        return [TranslationResult(f"{self.prefix}{text}", source_lang) for text in texts]
