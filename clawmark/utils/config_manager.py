import json
import logging
import os
from pathlib import Path
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)


class ConfigManager:
    """Read-only access to the optional config.json next to the service"""

    def __init__(self, config_file: Optional[str] = None):
        """Initialize the configuration manager"""
        # Relative to the current working directory unless CLAWMARK_CONFIG points elsewhere
        self.config_file = Path(config_file or os.environ.get("CLAWMARK_CONFIG", "config.json"))
        self.config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration file"""
        if not self.config_file.exists():
            return {}
        try:
            with open(self.config_file, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Error loading config {self.config_file}: {e}")
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str, default: Any = None) -> Any:
        """Get configuration item"""
        keys = key.split('.')
        value = self.config
        for k in keys:
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def list_config(self) -> Dict[str, Any]:
        """List all configuration items"""
        return self.config
