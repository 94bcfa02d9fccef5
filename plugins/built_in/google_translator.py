from typing import List, Sequence, Set

from deep_translator import GoogleTranslator

from interfaces.i_translation_engine import ITranslationEngine
from resxsync_models import TranslationResult
from resxsync_logger import get_logger

logger = get_logger("plugin.google")


class GoogleTranslateEngine(ITranslationEngine):
    """
    Google Translate (Free) engine using deep-translator.
    """

    def __init__(self, proxies=None):
        self._proxies = proxies

    @property
    def id(self) -> str:
        return "resxsync.engine.google_free"

    @property
    def name(self) -> str:
        return "Google Translate (Free)"

    def get_supported_languages(self) -> Set[str]:
        # {"english": "en", "chinese (simplified)": "zh-CN", ...}
        languages = GoogleTranslator().get_supported_languages(as_dict=True)
        codes = set(languages.values())
        logger.info(f"Google Translate supports {len(codes)} languages")
        return codes

    def translate_batch(self, texts: Sequence[str], source_lang: str, target_lang: str) -> List[TranslationResult]:
        if not texts:
            return []

        translator = GoogleTranslator(source=source_lang, target=target_lang, proxies=self._proxies)
        translated = translator.translate_batch(list(texts))
        if len(translated) != len(texts):
            raise RuntimeError(f"Google Translate returned {len(translated)} texts for {len(texts)}")

        # deep-translator returns None for texts it could not translate
        return [TranslationResult(text if text is not None else original, source_lang)
                for original, text in zip(texts, translated)]
