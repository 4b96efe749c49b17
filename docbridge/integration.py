"""
Lifecycle hooks for a host web framework.

A host calls these at fixed points of its own lifecycle:

- ``on_initialize`` while booting, preloading models if configured to
- ``on_console`` / ``on_runner`` before interactive or scripted sessions,
  which need every model class defined regardless of preloading
- ``create_all_indexes`` from a maintenance task
"""
import logging
import os
from typing import List, Optional

from docbridge.config import HostConfig
from docbridge.loader import ModelLoader
from docbridge.naming import DEFAULT_PATTERN


logger = logging.getLogger(__name__)


class HostIntegration:
    """Binds one ModelLoader to one host configuration."""
    
    def __init__(self, config: HostConfig, loader: Optional[ModelLoader] = None):
        self.config = config
        self.loader = loader if loader is not None else ModelLoader()
    
    def on_initialize(self) -> bool:
        """Preload models; returns whether anything was loaded."""
        return self.loader.preload_models(self.config)
    
    def on_console(self) -> None:
        self.loader.load_models(self.config)
    
    def on_runner(self) -> None:
        self.loader.load_models(self.config)
    
    def index_patterns(self) -> List[str]:
        """One recursive pattern per model root, engines included."""
        return [os.path.join(str(root), DEFAULT_PATTERN) for root in self.config.model_paths()]
    
    def create_all_indexes(self) -> List[type]:
        """
        Create indexes for the models of the application and every engine.
        
        A model reachable from two roots is indexed once. Stops at the
        first error, like ModelLoader.create_indexes.
        """
        patterns = self.index_patterns()
        logger.debug(f"Creating indexes for {len(patterns)} model root(s)")
        return self.loader.create_indexes_for(patterns)
