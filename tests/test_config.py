"""
Tests for environment-driven configuration.
"""

import pytest

from core.config import get_config, reload_config

ENV_VARS = [
    'OUTPUT_DIR', 'SPLIT_INTO_FILES', 'RECORDS_PER_FILE', 'EXPORT_PREFIX',
    'MAX_WORKERS', 'FILE_TIMEOUT_SECONDS', 'LOG_LEVEL',
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield monkeypatch
    reload_config(tmp_path / "missing.env")


class TestMapperConfig:
    """Test defaults and env parsing."""

    def test_defaults(self, clean_env, tmp_path):
        config = reload_config(tmp_path / "missing.env")

        assert config.output_dir.name == "output"
        assert config.split_into_files is True
        assert config.records_per_file == 8000
        assert config.export_prefix == "vicidial_leads"
        assert config.max_workers == 4
        assert config.file_timeout is None
        assert not config.has_timeout
        assert config.log_level == "WARNING"
        assert get_config() is config

    def test_env_overrides(self, clean_env, tmp_path):
        clean_env.setenv('OUTPUT_DIR', str(tmp_path / "exports"))
        clean_env.setenv('SPLIT_INTO_FILES', 'no')
        clean_env.setenv('RECORDS_PER_FILE', '500')
        clean_env.setenv('EXPORT_PREFIX', 'rennes')
        clean_env.setenv('MAX_WORKERS', '2')
        clean_env.setenv('FILE_TIMEOUT_SECONDS', '1.5')
        clean_env.setenv('LOG_LEVEL', 'debug')

        config = reload_config(tmp_path / "missing.env")
        options = config.export_options()

        assert config.output_dir == tmp_path / "exports"
        assert (options.split_into_files, options.records_per_file, options.prefix) == (False, 500, 'rennes')
        assert config.max_workers == 2
        assert config.file_timeout == 1.5
        assert config.log_level == "DEBUG"

    @pytest.mark.parametrize("name,value,attr,expected", [
        ('RECORDS_PER_FILE', 'abc', 'records_per_file', 8000),
        ('RECORDS_PER_FILE', '-5', 'records_per_file', 8000),
        ('MAX_WORKERS', 'many', 'max_workers', 4),
        ('FILE_TIMEOUT_SECONDS', '0', 'file_timeout', None),
        ('FILE_TIMEOUT_SECONDS', 'soon', 'file_timeout', None),
    ])
    def test_invalid_values_fall_back(self, clean_env, tmp_path, name, value, attr, expected):
        clean_env.setenv(name, value)
        config = reload_config(tmp_path / "missing.env")
        assert getattr(config, attr) == expected

    def test_env_file_loaded(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("EXPORT_PREFIX=from_file\n", encoding="utf-8")

        assert reload_config(env_file).export_prefix == "from_file"
        clean_env.delenv('EXPORT_PREFIX', raising=False)

    def test_output_dir_created(self, clean_env, tmp_path):
        clean_env.setenv('OUTPUT_DIR', str(tmp_path / "a" / "b"))
        path = reload_config(tmp_path / "missing.env").get_output_dir()
        assert path.is_dir()

    def test_status(self, clean_env, tmp_path):
        status = reload_config(tmp_path / "missing.env").get_config_status()
        assert status['framework']['name'] == "Lead Mapper"
        assert status['export']['records_per_file'] == 8000
        assert status['batch']['file_timeout'] is None
