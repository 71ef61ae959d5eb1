"""Tests for configuration loading, JSON helpers and logging setup."""

import json
import logging
from unittest.mock import patch

import pytest

from ffadvisor import config
from ffadvisor.logging_config import get_logger, resolve_level, setup_logging
from ffadvisor.models import DepthStatus, Player, PlayerWithStats
from ffadvisor.schemas import AdvisorConfig
from ffadvisor.utils import load_json, save_json, to_jsonable


@pytest.fixture(autouse=True)
def fresh_config():
    config.clear_config_cache()
    yield
    config.clear_config_cache()


class TestConfig:
    """Tests for get_config."""

    def test_bundled_config_is_valid(self):
        """Test the shipped data/advisor_config.json validates."""
        cfg = config.get_config()
        assert cfg.base_url == 'https://api.sleeper.app/v1'
        assert cfg.player_cache_ttl == 3600
        assert cfg.ideal_roster_size['RB'] == 4

    def test_missing_file_uses_defaults(self, tmp_path):
        with patch.object(config, 'CONFIG_PATH', tmp_path / 'missing.json'):
            assert config.get_config() == AdvisorConfig()

    def test_custom_file(self, tmp_path):
        path = tmp_path / 'advisor_config.json'
        path.write_text(json.dumps({'season': '2023', 'week': 9, 'waiver_limit': 5}))
        with patch.object(config, 'CONFIG_PATH', path):
            cfg = config.get_config()
        assert cfg.season == '2023'
        assert cfg.week == 9
        assert cfg.waiver_limit == 5

    def test_config_is_cached(self, tmp_path):
        with patch.object(config, 'CONFIG_PATH', tmp_path / 'missing.json'):
            assert config.get_config() is config.get_config()

    def test_unknown_field_rejected(self, tmp_path):
        path = tmp_path / 'advisor_config.json'
        path.write_text(json.dumps({'sesaon': '2023'}))
        with patch.object(config, 'CONFIG_PATH', path):
            with pytest.raises(ValueError, match='Schema validation failed'):
                config.get_config()

    def test_invalid_position_rejected(self):
        with pytest.raises(ValueError, match='Invalid position'):
            AdvisorConfig(ideal_roster_size={'QB': 2, 'LB': 3})

    def test_week_out_of_range(self):
        with pytest.raises(ValueError):
            AdvisorConfig(week=19)


class TestJsonHelpers:
    """Tests for load_json / save_json."""

    def test_save_dataclasses(self, tmp_path):
        """Test dataclasses and enums are written as plain JSON."""
        path = tmp_path / 'out' / 'player.json'
        player = PlayerWithStats(id='4046', name='Patrick Mahomes', position='QB', avg_points=16.0)

        save_json(path, {'player': player, 'depth': DepthStatus.THIN})

        data = load_json(path)
        assert data['player']['name'] == 'Patrick Mahomes'
        assert data['player']['game_log'] == []
        assert data['depth'] == 'thin'

    def test_to_jsonable_models(self):
        assert to_jsonable(AdvisorConfig())['waiver_limit'] == 10
        assert to_jsonable([Player(id='1', name='A', position='K')])[0]['team'] == 'FA'

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_json(tmp_path / 'nope.json')

    def test_load_invalid_json(self, tmp_path):
        bad = tmp_path / 'bad.json'
        bad.write_text('{not json')
        with pytest.raises(json.JSONDecodeError):
            load_json(bad)


class TestLogging:
    """Tests for logging setup."""

    def test_resolve_level(self, monkeypatch):
        monkeypatch.delenv('FFADVISOR_LOG_LEVEL', raising=False)
        assert resolve_level(None) == logging.INFO
        assert resolve_level('debug') == logging.DEBUG
        assert resolve_level(logging.WARNING) == logging.WARNING
        monkeypatch.setenv('FFADVISOR_LOG_LEVEL', 'ERROR')
        assert resolve_level(None) == logging.ERROR

    def test_setup_logging_file(self, tmp_path):
        logger = setup_logging(log_dir=tmp_path, level='DEBUG', log_to_file=True, log_to_console=False)
        get_logger('advisor').debug('hello')
        for handler in logger.handlers:
            handler.flush()

        log_files = list(tmp_path.glob('ffadvisor_*.log'))
        assert len(log_files) == 1
        assert 'hello' in log_files[0].read_text()

        for handler in logger.handlers:
            handler.close()
        logger.handlers = []

    def test_get_logger_namespace(self):
        assert get_logger('cache').name == 'ffadvisor.cache'
        assert get_logger('ffadvisor.cache').name == 'ffadvisor.cache'
