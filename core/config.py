"""
Lead Mapper Configuration
Centralized configuration management
"""

import os
from pathlib import Path
from typing import Optional, Dict, Any
from dotenv import load_dotenv

from ._version import __version__
from .models import DEFAULT_RECORDS_PER_FILE, ExportOptions, coerce_records_per_file


TRUTHY = {'1', 'true', 'yes', 'on'}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip().lower() in TRUTHY


class MapperConfig:
    """
    Centralized configuration for Lead Mapper.
    Loads from .env and provides typed access to all settings.
    """

    def __init__(self, env_file: Optional[Path] = None):
        if env_file is None:
            env_file = Path(__file__).parent.parent / '.env'

        if env_file.exists():
            load_dotenv(env_file)

        self.framework_name = "Lead Mapper"
        self.framework_version = __version__

        # Paths
        self.root_dir = Path(__file__).parent.parent

        output_dir_env = os.getenv('OUTPUT_DIR', 'output')
        if Path(output_dir_env).is_absolute():
            self.output_dir = Path(output_dir_env)
        else:
            self.output_dir = self.root_dir / output_dir_env

        # Export
        self.split_into_files = _env_bool('SPLIT_INTO_FILES', True)
        self.records_per_file = coerce_records_per_file(
            os.getenv('RECORDS_PER_FILE', DEFAULT_RECORDS_PER_FILE)
        )
        self.export_prefix = os.getenv('EXPORT_PREFIX', '').strip() or 'vicidial_leads'

        # Batch processing
        try:
            self.max_workers = max(1, int(os.getenv('MAX_WORKERS', '4')))
        except ValueError:
            self.max_workers = 4

        timeout_env = os.getenv('FILE_TIMEOUT_SECONDS', '').strip()
        try:
            self.file_timeout = float(timeout_env) if timeout_env else None
        except ValueError:
            self.file_timeout = None
        if self.file_timeout is not None and self.file_timeout <= 0:
            self.file_timeout = None

        self.log_level = os.getenv('LOG_LEVEL', 'WARNING').strip().upper() or 'WARNING'

    @property
    def has_timeout(self) -> bool:
        return self.file_timeout is not None

    def get_output_dir(self) -> Path:
        self.output_dir.mkdir(parents=True, exist_ok=True)
        return self.output_dir

    def export_options(self) -> ExportOptions:
        return ExportOptions(
            split_into_files=self.split_into_files,
            records_per_file=self.records_per_file,
            prefix=self.export_prefix,
        )

    def get_config_status(self) -> Dict[str, Any]:
        return {
            'framework': {
                'name': self.framework_name,
                'version': self.framework_version
            },
            'export': {
                'output_dir': str(self.output_dir),
                'split_into_files': self.split_into_files,
                'records_per_file': self.records_per_file,
                'prefix': self.export_prefix,
            },
            'batch': {
                'max_workers': self.max_workers,
                'file_timeout': self.file_timeout,
            },
            'log_level': self.log_level,
        }

    def __repr__(self) -> str:
        status = self.get_config_status()
        return f"MapperConfig({status['export']})"


# Global config instance
_config: Optional[MapperConfig] = None


def get_config() -> MapperConfig:
    global _config
    if _config is None:
        _config = MapperConfig()
    return _config


def reload_config(env_file: Optional[Path] = None) -> MapperConfig:
    global _config
    _config = MapperConfig(env_file)
    return _config
