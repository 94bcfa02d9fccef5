from abc import ABC, abstractmethod
from typing import List, Sequence, Set

from resxsync_models import TranslationResult

# Engine API Version - Increment if breaking changes occur
TRANSLATION_ENGINE_API_VERSION = 1


class ITranslationEngine(ABC):
    """
    Interface for translation engines.

    Engines are stateless towards the caller: batching, pacing, masking and
    write-back are handled by the TranslationService.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        pass

    @property
    def version(self) -> str:
        return "1.0.0"

    @abstractmethod
    def get_supported_languages(self) -> Set[str]:
        """Language codes the engine accepts, as it spells them."""
        pass

    @abstractmethod
    def translate_batch(self,
                        texts: Sequence[str],
                        source_lang: str,
                        target_lang: str) -> List[TranslationResult]:
        """
        Translate texts in one call.

        Args:
            texts: Texts to translate, already masked.
            source_lang: Engine language code of the texts.
            target_lang: Engine language code to translate into.

        Returns:
            One TranslationResult per text, in the same order

        Raises:
            Any exception on transport, authentication or quota failure.
        """
        pass

    def is_available(self) -> bool:
        return True
