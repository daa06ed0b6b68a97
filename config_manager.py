"""Configuration management for the N-Queens solver and experiment suite.

This module provides a thin, explicit wrapper around a JSON configuration file
to centralize the driver defaults, experiment settings, and output naming.

File format (high-level)
------------------------
- solver_settings: default board size, whether to print solution boards, and
  how many of them to print.
- experiment_settings: board sizes, repetitions per size, and output directory.
- output_settings: datestamp toggle and optional run tag for output filenames.

All methods return Python native types; the class does not validate semantics
beyond presence of keys to keep responsibilities minimal.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or use the default config.json template"
            )

        with open(self.config_path, 'r') as f:
            config = json.load(f)
        if not isinstance(config, dict):
            raise ValueError(f"Configuration root must be an object: {self.config_path}")
        return config

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, 'w') as f:
            json.dump(self.config, f, indent=2)

    def get_solver_settings(self):
        """Return driver defaults (default size, solution printing)."""
        return self.config.get("solver_settings", {})

    def get_experiment_settings(self):
        """Return experiment settings (sizes, runs, output dir)."""
        return self.config.get("experiment_settings", {})

    def get_output_settings(self):
        """Return output naming settings (date suffix, run tag)."""
        return self.config.get("output_settings", {})

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        if section not in self.config:
            self.config[section] = {}
        self.config[section][key] = value
        self.save_config()
