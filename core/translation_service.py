"""
Batch translation orchestration.

Texts go to the engine in consecutive chunks of at most batch_size items,
with a fixed pause between chunks and none after the last one. A failed
chunk is recorded and the run goes on; the caller decides whether to retry
the failed chunks or to give up. Results are written back to a resource
only when every chunk succeeded.
"""

import time
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Set, Tuple

import resxsync_config as config
from resxsync_models import LanguageSupportReport, TranslateConfig, TranslationResult
from resxsync_exceptions import ProviderCallFailedError, UnsupportedLanguageError
from core.locale_utils import neutral_language
from core.text_utils import mask_placeholders, unmask_placeholders
from interfaces.i_translation_engine import ITranslationEngine
from resxsync_logger import get_logger

logger = get_logger("core.translation_service")


@dataclass
class BatchTranslationResult:
    """
    Outcome of one batch run.

    Attributes:
        texts (List[str]): Source texts in order.
        source_lang (str): Engine code the texts were sent as.
        target_lang (str): Engine code they were translated into.
        batch_size (int): Chunk size used for the run.
        chunk_results (Dict[int, List[TranslationResult]]): Successful chunks by index.
        failures (List[ProviderCallFailedError]): One entry per failed chunk.
        cancelled (bool): The run stopped at a chunk boundary on request.
        applied (bool): Results were written back to a resource.
    """
    texts: List[str]
    source_lang: str
    target_lang: str
    batch_size: int
    chunk_results: Dict[int, List[TranslationResult]] = field(default_factory=dict)
    failures: List[ProviderCallFailedError] = field(default_factory=list)
    cancelled: bool = False
    applied: bool = False

    @property
    def chunk_count(self) -> int:
        return (len(self.texts) + self.batch_size - 1) // self.batch_size

    @property
    def is_complete(self) -> bool:
        return len(self.chunk_results) == self.chunk_count

    @property
    def failed_chunks(self) -> List[int]:
        return [f.chunk_index for f in self.failures]

    @property
    def results(self) -> List[TranslationResult]:
        """Results of the successful chunks, in text order."""
        flat = []
        for index in sorted(self.chunk_results):
            flat.extend(self.chunk_results[index])
        return flat

    def chunk_span(self, index: int) -> Tuple[int, int]:
        """(offset, size) of a chunk."""
        offset = index * self.batch_size
        return offset, min(self.batch_size, len(self.texts) - offset)


class TranslationService:
    """
    Drives a translation engine for whole resources.

    Synchronous: run it on a worker thread (see TranslationWorker) to keep
    a caller responsive. cancel_token is any object with is_set(), usually a
    threading.Event.
    """

    def __init__(self, engine: ITranslationEngine,
                 batch_size: int = config.TRANSLATE_BATCH_SIZE,
                 inter_batch_delay: float = config.TRANSLATE_BATCH_DELAY,
                 sleep: Optional[Callable[[float], None]] = None,
                 mask_tokens: bool = True):
        """
        Args:
            engine: Translation engine to call.
            batch_size: Maximum texts per engine call.
            inter_batch_delay: Seconds to wait between two engine calls.
            sleep: Replaces the inter-chunk wait (tests record delays with it).
            mask_tokens: Protect format placeholders from the engine.
        """
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")
        self.engine = engine
        self.batch_size = batch_size
        self.inter_batch_delay = inter_batch_delay
        self.mask_tokens = mask_tokens
        self._sleep = sleep
        self._supported: Optional[Set[str]] = None

    # =============================================================================
    # LANGUAGES
    # =============================================================================

    def get_supported_languages(self) -> Set[str]:
        """Engine language codes, fetched once per service."""
        if self._supported is None:
            logger.info(f"Fetching supported languages from {self.engine.name}...")
            self._supported = set(self.engine.get_supported_languages())
        return set(self._supported)

    def resolve_language(self, locale: str) -> Optional[str]:
        """
        Engine code for a locale: exact match first, then the neutral language.

        "fr-FR" resolves to "fr-FR" if the engine knows it, else to "fr".
        """
        if not locale:
            return None
        by_lower = {code.lower(): code for code in self.get_supported_languages()}
        code = by_lower.get(locale.lower())
        if code is None:
            code = by_lower.get(neutral_language(locale))
        return code

    def check_languages(self, locales: Iterable[str]) -> LanguageSupportReport:
        """Split locales into supported ones and UnsupportedLanguageError reports."""
        report = LanguageSupportReport()
        for locale in locales:
            if self.resolve_language(locale):
                report.supported.append(locale)
            else:
                error = UnsupportedLanguageError(f"Language not supported by {self.engine.name}: {locale}",
                                                 locale=locale, engine=self.engine.id)
                logger.info(str(error))
                report.unsupported.append(error)
        return report

    def _require_language(self, locale: str) -> str:
        code = self.resolve_language(locale)
        if code is None:
            raise UnsupportedLanguageError(f"Language not supported by {self.engine.name}: {locale}",
                                           locale=locale, engine=self.engine.id)
        return code

    # =============================================================================
    # BATCHES
    # =============================================================================

    def translate_texts(self, texts: Sequence[str], source_lang: str, target_lang: str,
                        cancel_token=None, progress_callback=None) -> BatchTranslationResult:
        """
        Translate texts in chunks.

        Args:
            texts: Texts to translate.
            source_lang: Source locale (resolved to an engine code).
            target_lang: Target locale (resolved to an engine code).
            cancel_token: Checked before every chunk and during the pauses.
            progress_callback: Called with (chunks_done, chunk_count) after each chunk.

        Raises:
            UnsupportedLanguageError: A language is unknown to the engine.
        """
        result = BatchTranslationResult(
            texts=list(texts),
            source_lang=self._require_language(source_lang),
            target_lang=self._require_language(target_lang),
            batch_size=self.batch_size,
        )
        logger.info(f"Translating {len(result.texts)} text(s) {result.source_lang} -> "
                    f"{result.target_lang} in {result.chunk_count} chunk(s)")
        self._run_chunks(result, range(result.chunk_count), cancel_token, progress_callback)
        return result

    def retry_failed(self, result: BatchTranslationResult, cancel_token=None,
                     progress_callback=None) -> BatchTranslationResult:
        """Run the failed chunks of a result again, updating it in place."""
        indices = result.failed_chunks
        if not indices:
            return result
        logger.info(f"Retrying {len(indices)} failed chunk(s): {indices}")
        result.failures = []
        result.cancelled = False
        self._run_chunks(result, indices, cancel_token, progress_callback)
        return result

    def _run_chunks(self, result: BatchTranslationResult, indices: Iterable[int],
                    cancel_token, progress_callback):
        indices = list(indices)
        for position, index in enumerate(indices):
            if position > 0:
                self._wait(cancel_token)
            if cancel_token is not None and cancel_token.is_set():
                result.cancelled = True
                logger.info(f"Translation cancelled before chunk {index + 1}/{result.chunk_count}")
                return

            offset, size = result.chunk_span(index)
            try:
                result.chunk_results[index] = self._translate_chunk(
                    result.texts[offset:offset + size], result.source_lang, result.target_lang)
            except Exception as e:
                failure = ProviderCallFailedError(f"Chunk {index + 1}/{result.chunk_count} failed: {e}",
                                                  chunk_index=index, offset=offset, size=size, cause=e)
                logger.warning(str(failure))
                result.failures.append(failure)

            if progress_callback:
                progress_callback(position + 1, len(indices))

    def _translate_chunk(self, texts: List[str], source_lang: str, target_lang: str) -> List[TranslationResult]:
        if self.mask_tokens:
            masked = [mask_placeholders(text) for text in texts]
        else:
            masked = [(text, {}) for text in texts]

        translated = self.engine.translate_batch([m[0] for m in masked], source_lang, target_lang)
        if len(translated) != len(texts):
            raise RuntimeError(f"Engine returned {len(translated)} results for {len(texts)} texts")

        results = []
        for (_, token_map), item in zip(masked, translated):
            if not isinstance(item, TranslationResult):
                item = TranslationResult(item)
            results.append(TranslationResult(unmask_placeholders(item.translated_text, token_map),
                                             item.detected_source_language))
        return results

    def _wait(self, cancel_token):
        delay = self.inter_batch_delay
        if delay <= 0:
            return
        if self._sleep is not None:
            self._sleep(delay)
        elif cancel_token is not None and hasattr(cancel_token, "wait"):
            cancel_token.wait(delay)
        else:
            time.sleep(delay)

    # =============================================================================
    # RESOURCES
    # =============================================================================

    def translate_resource(self, holder, translate_config: TranslateConfig,
                           cancel_token=None, progress_callback=None) -> BatchTranslationResult:
        """
        Translate the selected rows of one resource into one language.

        Results are written back only when every chunk succeeded; otherwise
        the caller may retry_failed() and apply_result().

        Raises:
            UnsupportedLanguageError: Source or target is unknown to the engine.
        """
        source_lang = self._require_language(translate_config.provider_source_language)
        target_lang = self._require_language(translate_config.provider_target_language)

        texts = holder.get_text_for_translating(translate_config)
        if not texts:
            logger.info(f"[{holder.id}] nothing to translate into {translate_config.target_language}")
            return BatchTranslationResult([], source_lang, target_lang, self.batch_size, applied=True)

        result = self.translate_texts(texts, translate_config.provider_source_language,
                                      translate_config.provider_target_language,
                                      cancel_token, progress_callback)
        self.apply_result(holder, translate_config, result)
        return result

    def apply_result(self, holder, translate_config: TranslateConfig, result: BatchTranslationResult) -> bool:
        """Write a complete result back to the resource. Returns True if written."""
        if result.applied:
            return True
        if not result.is_complete:
            logger.warning(f"[{holder.id}] translation into {translate_config.target_language} incomplete "
                           f"({len(result.failures)} failed chunk(s), cancelled={result.cancelled}), "
                           f"nothing written")
            return False
        holder.set_translated_text(translate_config, result.results)
        result.applied = True
        return True

    def translate_resource_languages(self, holder, translate_config: TranslateConfig,
                                     target_locales: Iterable[str], cancel_token=None,
                                     progress_callback=None) -> Tuple[LanguageSupportReport, Dict[str, BatchTranslationResult]]:
        """
        Translate one resource into several languages.

        Unsupported targets are left out of the run and listed in the report.
        """
        report = self.check_languages(target_locales)
        results = {}
        for locale in report.supported:
            if cancel_token is not None and cancel_token.is_set():
                break
            locale_config = replace(translate_config, target_language=locale)
            results[locale] = self.translate_resource(holder, locale_config, cancel_token, progress_callback)
        return report, results
