from pathlib import Path

from yl_linter.config import Config, load_config


class CliConfig:
    """Resolves --config / --preset into the base Config for a run"""

    def __init__(self, config_file: Path | None = None, preset: str | None = None):
        self.config_file = config_file
        self.preset = preset

    def load(self) -> Config:
        # An explicit file wins over a preset; neither means built-in defaults
        if self.config_file is not None:
            return load_config(self.config_file)
        if self.preset is not None:
            return Config.preset(self.preset)
        return Config()
