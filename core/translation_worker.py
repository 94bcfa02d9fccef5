import threading
from typing import Callable, Optional

from resxsync_models import TranslateConfig
from resxsync_logger import get_logger

logger = get_logger("core.translation_worker")


class TranslationWorker:
    """
    Runs one TranslationService.translate_resource() call on a daemon thread.

    While the worker runs it owns the holder: the caller must not mutate it
    until on_finished or on_error has been called. Callbacks are invoked on
    the worker thread.

    on_progress(chunks_done, chunk_count)
    on_finished(result: BatchTranslationResult)
    on_error(error: Exception)
    """

    def __init__(self, service, holder, translate_config: TranslateConfig,
                 on_progress: Optional[Callable[[int, int], None]] = None,
                 on_finished: Optional[Callable] = None,
                 on_error: Optional[Callable[[Exception], None]] = None):
        self.service = service
        self.holder = holder
        self.translate_config = translate_config
        self.on_progress = on_progress
        self.on_finished = on_finished
        self.on_error = on_error

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self.status = "idle"  # idle, running, finished, canceled, error
        self.result = None
        self.error: Optional[Exception] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.is_running:
            raise RuntimeError("Translation worker is already running")
        self._stop_event.clear()
        self.status = "running"
        self._thread = threading.Thread(target=self._run, name=f"translate-{self.holder.id}", daemon=True)
        self._thread.start()

    def cancel(self):
        """Request cancellation; takes effect at the next chunk boundary or pause."""
        self._stop_event.set()

    def join(self, timeout: Optional[float] = None) -> bool:
        """Wait for the thread. Returns True if it has finished."""
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def _run(self):
        try:
            self.result = self.service.translate_resource(
                self.holder, self.translate_config,
                cancel_token=self._stop_event, progress_callback=self.on_progress)
            self.status = "canceled" if self.result.cancelled else "finished"
            logger.info(f"Translation worker for {self.holder.id} {self.status}")
        except Exception as e:
            self.error = e
            self.status = "error"
            logger.error(f"Translation worker for {self.holder.id} failed: {e}")
            if self.on_error:
                self._invoke(self.on_error, e)
            return

        if self.on_finished:
            self._invoke(self.on_finished, self.result)

    @staticmethod
    def _invoke(callback, *args):
        try:
            callback(*args)
        except Exception as e:
            logger.error(f"Error in translation worker callback: {e}")
