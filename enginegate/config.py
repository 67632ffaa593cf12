"""Configuration schema and loader."""

from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel, Field, PrivateAttr


class EngineConfig(BaseModel):
    path: str = "godot"               # engine binary used when none is given
    debug_mode: bool = False          # appends --debug-godot to every run
    script_path: str | None = None    # defaults to the bundled operations script


class LoggingConfig(BaseModel):
    level: str = "INFO"


class Config(BaseModel):
    """Root configuration."""
    engine: EngineConfig = Field(default_factory=EngineConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    _config_dir: Path = PrivateAttr(default_factory=lambda: Path.cwd())

    def resolved_script_path(self) -> Path | None:
        """Operations script override, relative paths resolved against the config file."""
        if not self.engine.script_path:
            return None
        script = Path(self.engine.script_path).expanduser()
        if not script.is_absolute():
            script = self._config_dir / script
        return script.resolve()


def load_config(path: str | Path = "config.yaml") -> Config:
    """Load config from YAML file."""
    p = Path(path).expanduser()
    resolved_path = p.resolve()
    if p.exists():
        with open(resolved_path) as f:
            data = yaml.safe_load(f) or {}
        config = Config(**data)
        logger.debug(f"Loaded config from {resolved_path}")
    else:
        config = Config()
    config._config_dir = resolved_path.parent
    return config
