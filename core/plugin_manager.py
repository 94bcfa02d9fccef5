from typing import Dict, List, Optional

import resxsync_config as config
from interfaces.i_translation_engine import ITranslationEngine
from resxsync_logger import get_logger

logger = get_logger("core.plugin_manager")


class PluginManager:
    """Registry of the available translation engines."""

    def __init__(self, register_built_ins: bool = True):
        self.engines: Dict[str, ITranslationEngine] = {}  # id -> instance
        if register_built_ins:
            self._register_built_ins()

    def _register_built_ins(self):
        from plugins.built_in.dummy_engine import DummyEngine
        from plugins.built_in.google_translator import GoogleTranslateEngine

        for engine in (GoogleTranslateEngine(), DummyEngine()):
            self.register_engine(engine)
        logger.info(f"PluginManager initialized. Loaded {len(self.engines)} engines.")

    def register_engine(self, engine: ITranslationEngine) -> bool:
        if engine.id in self.engines:
            logger.warning(f"Engine ID collision: {engine.id}. Ignoring duplicate.")
            return False

        logger.info(f"Registering engine: {engine.name} ({engine.version})")
        self.engines[engine.id] = engine
        return True

    def get_engine(self, engine_id: str) -> Optional[ITranslationEngine]:
        return self.engines.get(engine_id)

    def get_all_engines(self) -> List[ITranslationEngine]:
        return list(self.engines.values())

    def get_active_engine(self, settings: Dict) -> Optional[ITranslationEngine]:
        """Engine named by the 'active_engine' setting, falling back to the dummy engine."""
        engine_id = settings.get("active_engine", config.DEFAULT_ENGINE_ID)
        engine = self.get_engine(engine_id)
        if not engine:
            logger.warning(f"Active engine '{engine_id}' not found. Falling back to Dummy.")
            engine = self.get_engine("resxsync.engine.dummy")
        return engine
