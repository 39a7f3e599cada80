"""Configuration settings for the MT942 statement parser."""

import os
import json
from typing import Dict, Any
from dataclasses import dataclass, asdict

# File Paths
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
REPORTS_DIR = os.getenv("REPORTS_DIR", os.path.join(BASE_DIR, "reports"))
LOGS_DIR = os.getenv("LOGS_DIR", os.path.join(BASE_DIR, "logs"))

# Input Configuration
MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB", "10"))
FILE_ENCODING = os.getenv("FILE_ENCODING", "utf-8")

# Logging Configuration
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Excel Output Configuration
EXCEL_OUTPUT_FORMAT = os.getenv("EXCEL_OUTPUT_FORMAT", "xlsx")

# Parsing Configuration
ORPHAN_POLICIES = ["notes", "drop", "error"]
ORPHAN_INFORMATION = os.getenv("ORPHAN_INFORMATION", "notes")
APPLY_TIME_OFFSET = os.getenv("APPLY_TIME_OFFSET", "False").lower() == "true"


@dataclass
class Settings:
    """Configuration settings class."""

    # Parsing
    orphan_information: str = ORPHAN_INFORMATION
    apply_time_offset: bool = APPLY_TIME_OFFSET

    # Input
    file_encoding: str = FILE_ENCODING
    max_file_size_mb: int = MAX_FILE_SIZE_MB

    # Output Configuration
    reports_dir: str = REPORTS_DIR
    logs_dir: str = LOGS_DIR
    excel_output_format: str = EXCEL_OUTPUT_FORMAT
    log_level: str = LOG_LEVEL
    log_format: str = LOG_FORMAT

    @classmethod
    def from_env(cls) -> "Settings":
        """Create Settings from environment variables."""
        return cls(
            orphan_information=os.getenv("ORPHAN_INFORMATION", "notes"),
            apply_time_offset=os.getenv("APPLY_TIME_OFFSET", "False").lower() == "true",
            file_encoding=os.getenv("FILE_ENCODING", "utf-8"),
            max_file_size_mb=int(os.getenv("MAX_FILE_SIZE_MB", "10")),
            reports_dir=os.getenv("REPORTS_DIR", REPORTS_DIR),
            logs_dir=os.getenv("LOGS_DIR", LOGS_DIR),
            excel_output_format=os.getenv("EXCEL_OUTPUT_FORMAT", "xlsx"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_format=os.getenv("LOG_FORMAT", LOG_FORMAT),
        )

    def validate(self) -> bool:
        """Validate settings."""
        return (
            self.orphan_information in ORPHAN_POLICIES and
            self.max_file_size_mb > 0 and
            len(self.file_encoding) > 0 and
            len(self.excel_output_format) > 0
        )

    def get_log_level(self) -> str:
        """Get log level as string."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self.log_level.upper() in valid_levels:
            return self.log_level.upper()
        return "INFO"

    def to_dict(self) -> Dict[str, Any]:
        """Convert settings to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        """Create settings from dictionary."""
        return cls(**data)

    def update(self, data: Dict[str, Any]) -> None:
        """Update settings from dictionary."""
        for key, value in data.items():
            if hasattr(self, key):
                setattr(self, key, value)

    def clone(self) -> "Settings":
        """Create a copy of settings."""
        return self.from_dict(self.to_dict())


def load_config_from_file(file_path: str) -> Dict[str, Any]:
    """Load a JSON settings file, e.g. one written by save_config_to_file."""
    with open(file_path, 'r') as f:
        return json.load(f)


def save_config_to_file(config: Dict[str, Any], file_path: str) -> None:
    """Write settings as indented JSON."""
    with open(file_path, 'w') as f:
        json.dump(config, f, indent=2)
