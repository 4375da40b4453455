"""
Configuration model for a single gerrit-cli run.

The CLI constructs a RunConfig instance and passes it down into the
pipeline so behavior can be adjusted without relying on global state.
This is distinct from the persisted user/repo defaults, which live in
config_store.
"""

from __future__ import annotations

import tempfile
from dataclasses import dataclass, field
from pathlib import Path

CONFIG_DIR_NAME = "gerrit"
CONFIG_FILE_NAME = "config.ini"

# Resolved once per process.
DEFAULT_CONFIG_PATH = Path(tempfile.gettempdir()) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


@dataclass
class RunConfig:
    """
    Top-level configuration for a gerrit-cli run.
    """

    verbosity: int = 0
    dry_run: bool = False
    config_path: Path = field(default=DEFAULT_CONFIG_PATH)
