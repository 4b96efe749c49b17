"""
Host configuration for model loading.

Mirrors the host framework's path registry: logical categories (``app/models``)
mapped to physical directories, plus engines that contribute their own model
directories, plus the preload toggle.

Loaded from a YAML file and/or ``DOCBRIDGE_*`` environment variables:

    preload_models: true
    paths:
      app/models:
        - app/models
    engines:
      - name: billing
        root: vendor/engines/billing
"""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, validator


MODELS_PATH_KEY = "app/models"

ENV_CONFIG = "DOCBRIDGE_CONFIG"
ENV_PRELOAD = "DOCBRIDGE_PRELOAD_MODELS"
ENV_MODEL_PATHS = "DOCBRIDGE_MODEL_PATHS"

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}


def _normalize_paths(value):
    """Accept a single directory string where a list is expected."""
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"paths must be a mapping, got {type(value).__name__}")
    return {key: [dirs] if isinstance(dirs, str) else dirs for key, dirs in value.items()}


class EngineSchema(BaseModel):
    """YAML schema for one engine entry."""
    name: str = Field(..., description="Engine name, used in log lines")
    root: str = Field(..., description="Engine root directory")
    paths: Dict[str, List[str]] = Field(default_factory=dict)
    
    @validator("paths", pre=True)
    def _paths(cls, value):
        return _normalize_paths(value)


class ConfigSchema(BaseModel):
    """YAML schema for the whole config file."""
    preload_models: bool = False
    paths: Dict[str, List[str]] = Field(default_factory=dict)
    engines: List[EngineSchema] = Field(default_factory=list)
    
    @validator("paths", pre=True)
    def _paths(cls, value):
        return _normalize_paths(value)


def _resolve(path: Union[str, Path], base: Optional[Path]) -> Path:
    path = Path(path).expanduser()
    if base is not None and not path.is_absolute():
        return base / path
    return path


@dataclass
class EngineConfig:
    """A pluggable package contributing model directories."""
    name: str
    root: Path
    paths: Dict[str, List[Path]] = field(default_factory=dict)
    
    def model_paths(self) -> List[Path]:
        """Engine's own ``app/models`` entries, or ``<root>/app/models``."""
        if MODELS_PATH_KEY in self.paths:
            return list(self.paths[MODELS_PATH_KEY])
        return [self.root / MODELS_PATH_KEY]


@dataclass
class HostConfig:
    """Path registry and preload toggle handed to the loader."""
    paths: Dict[str, List[Path]] = field(default_factory=dict)
    preload_models: bool = False
    engines: List[EngineConfig] = field(default_factory=list)
    
    def model_paths(self) -> List[Path]:
        """Application model roots followed by every engine's model roots."""
        roots = list(self.paths.get(MODELS_PATH_KEY, []))
        for engine in self.engines:
            roots.extend(engine.model_paths())
        return roots
    
    @classmethod
    def from_dict(cls, data: Mapping, base_dir: Optional[Path] = None) -> 'HostConfig':
        """
        Build config from parsed YAML data.
        
        Relative directories resolve against base_dir; an engine's own paths
        resolve against the engine root.
        
        Raises:
            ValueError: If data does not match the config schema
        """
        schema = ConfigSchema(**dict(data))
        
        engines = []
        for engine in schema.engines:
            root = _resolve(engine.root, base_dir)
            engines.append(EngineConfig(
                name=engine.name,
                root=root,
                paths={key: [_resolve(p, root) for p in dirs] for key, dirs in engine.paths.items()}
            ))
        
        return cls(
            paths={key: [_resolve(p, base_dir) for p in dirs] for key, dirs in schema.paths.items()},
            preload_models=schema.preload_models,
            engines=engines
        )
    
    @classmethod
    def from_yaml(cls, yaml_path: Path) -> 'HostConfig':
        """
        Load host configuration from a YAML file.
        
        Raises:
            FileNotFoundError: If YAML file doesn't exist
            ValueError: If the file is not a mapping or fails validation
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Host config not found: {yaml_path}")
        
        with open(yaml_path, 'r') as f:
            data = yaml.safe_load(f)
        
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid host config in {yaml_path}: "
                f"expected mapping, got {type(data).__name__}"
            )
        
        return cls.from_dict(data, base_dir=yaml_path.parent.resolve())
    
    @classmethod
    def from_env(cls, base: Optional['HostConfig'] = None,
                 environ: Optional[Mapping[str, str]] = None) -> 'HostConfig':
        """
        Apply ``DOCBRIDGE_PRELOAD_MODELS`` and ``DOCBRIDGE_MODEL_PATHS`` on top of base.
        
        ``DOCBRIDGE_MODEL_PATHS`` replaces the application model roots and is
        split on ``os.pathsep``; engines are kept.
        
        Raises:
            ValueError: If the preload toggle is not a recognised boolean
        """
        environ = os.environ if environ is None else environ
        base = base or cls()
        config = cls(
            paths={key: list(dirs) for key, dirs in base.paths.items()},
            preload_models=base.preload_models,
            engines=list(base.engines)
        )
        
        preload = environ.get(ENV_PRELOAD)
        if preload is not None:
            config.preload_models = parse_bool(preload, ENV_PRELOAD)
        
        model_paths = environ.get(ENV_MODEL_PATHS)
        if model_paths:
            config.paths[MODELS_PATH_KEY] = [
                Path(p).expanduser() for p in model_paths.split(os.pathsep) if p
            ]
        
        return config


def parse_bool(value: str, name: str) -> bool:
    normalized = value.strip().lower()
    if normalized in TRUE_VALUES:
        return True
    if normalized in FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be true or false, got {value!r}")


def load_config(config_path: Optional[Union[str, Path]] = None,
                environ: Optional[Mapping[str, str]] = None) -> HostConfig:
    """
    Resolve host configuration for the CLI and lifecycle hooks.
    
    Uses config_path, else ``$DOCBRIDGE_CONFIG``, else defaults; environment
    overrides are applied last.
    """
    environ = os.environ if environ is None else environ
    config_path = config_path or environ.get(ENV_CONFIG)
    base = HostConfig.from_yaml(Path(config_path)) if config_path else HostConfig()
    return HostConfig.from_env(base, environ=environ)
