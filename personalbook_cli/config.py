"""
CLI Configuration Management
"""

import os
import json
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Optional, Dict, Any

DEFAULT_CONFIG_DIR = Path.home() / ".personalbook"


@dataclass
class CLIConfig:
    """Configuration for the Personal Book CLI"""

    # API settings
    api_base_url: str = "http://localhost:5000/api"
    timeout: float = 30.0

    # Paths
    config_dir: str = field(default_factory=lambda: str(DEFAULT_CONFIG_DIR))
    session_file: str = "session.json"

    verbose: bool = False

    def __post_init__(self):
        if not os.path.isabs(self.session_file):
            self.session_file = str(Path(self.config_dir) / self.session_file)

    @property
    def config_file(self) -> Path:
        return Path(self.config_dir) / "config.json"

    def load_from_file(self, config_path: str) -> None:
        """Load configuration from JSON file"""
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                data = json.load(f)
                for key, value in data.items():
                    if hasattr(self, key):
                        setattr(self, key, value)

    def save_to_file(self, config_path: Optional[str] = None) -> None:
        """Save configuration to JSON file"""
        path = Path(config_path) if config_path else self.config_file
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w') as f:
            json.dump(asdict(self), f, indent=2)

    @classmethod
    def load_default(cls) -> "CLIConfig":
        """Load configuration from the user config directory, then the environment"""
        config_dir = os.environ.get("PERSONALBOOK_CONFIG_DIR") or str(DEFAULT_CONFIG_DIR)
        config = cls(config_dir=config_dir)
        if config.config_file.exists():
            config.load_from_file(str(config.config_file))

        # Override with environment variables
        config._load_from_env()

        return config

    def _load_from_env(self) -> None:
        """Load configuration from environment variables"""
        env_mappings = {
            "PERSONALBOOK_API_URL": "api_base_url",
            "PERSONALBOOK_TIMEOUT": ("timeout", float),
            "PERSONALBOOK_VERBOSE": ("verbose", lambda x: x.lower() == "true"),
        }

        for env_var, mapping in env_mappings.items():
            value = os.environ.get(env_var)
            if value:
                if isinstance(mapping, tuple):
                    attr, converter = mapping
                    setattr(self, attr, converter(value))
                else:
                    setattr(self, mapping, value)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary"""
        return asdict(self)
