import json

import pytest

import core.config as config_module
from core.config import (
    DEFAULT_CFG, SessionConfig, SettingsProvider, load_config, save_config,
)
from settings import SPEED_DEFAULT, SPEED_MAX, SPEED_MIN


def write(path, data):
    path.write_text(json.dumps(data), encoding='utf-8')


def test_missing_file_created_with_defaults(config_path):
    cfg = load_config(config_path)
    assert cfg == DEFAULT_CFG
    assert config_path.exists()
    assert json.loads(config_path.read_text(encoding='utf-8'))['speed'] == SPEED_DEFAULT


def test_malformed_file_falls_back_to_defaults(config_path):
    config_path.write_text('{not json', encoding='utf-8')
    assert load_config(config_path) == DEFAULT_CFG


def test_partial_file_merged_over_defaults(config_path):
    write(config_path, {'speed': 4, 'audio': {'muted': True}})
    cfg = load_config(config_path)
    assert cfg['speed'] == 4
    assert cfg['audio'] == {'muted': True, 'volume': 0.8}
    assert cfg['stages'] == DEFAULT_CFG['stages']


def test_speed_clamped(config_path):
    write(config_path, {'speed': 9})
    assert load_config(config_path)['speed'] == SPEED_MAX
    write(config_path, {'speed': -3})
    assert load_config(config_path)['speed'] == SPEED_MIN
    write(config_path, {'speed': 'fast'})
    assert load_config(config_path)['speed'] == SPEED_DEFAULT


def test_unknown_and_duplicate_stages_dropped(config_path):
    write(config_path, {'stages': [99, 3, 2, 3, 'x']})
    assert load_config(config_path)['stages'] == [3, 2]


def test_empty_stage_list_kept(config_path):
    write(config_path, {'stages': []})
    assert load_config(config_path)['stages'] == []


def test_bad_highscore_reads_as_zero(config_path):
    write(config_path, {'highscore': 'lots'})
    assert load_config(config_path)['highscore'] == 0
    write(config_path, {'highscore': -5})
    assert load_config(config_path)['highscore'] == 0


def test_save_config_deep_merges(config_path):
    write(config_path, {'highscore': 120, 'audio': {'muted': False, 'volume': 0.5}})
    save_config({'audio': {'muted': True}}, config_path)
    data = json.loads(config_path.read_text(encoding='utf-8'))
    assert data['highscore'] == 120
    assert data['audio'] == {'muted': True, 'volume': 0.5}


def test_provider_session_config(config_path):
    write(config_path, {'stages': [2, 5], 'speed': 3})
    provider = SettingsProvider(config_path)
    assert provider.session_config() == SessionConfig((2, 5), 3.0)
    assert provider.muted is False
    assert provider.volume == 0.8


def test_provider_save_persists_and_sanitises(config_path):
    provider = SettingsProvider(config_path)
    config = provider.save([4, 4, 99, 2], 12)
    assert config == SessionConfig((4, 2), float(SPEED_MAX))

    reloaded = SettingsProvider(config_path)
    assert reloaded.session_config() == config


def test_provider_save_keeps_high_score(config_path):
    write(config_path, {'highscore': 77})
    SettingsProvider(config_path).save([2], 1)
    assert load_config(config_path)['highscore'] == 77


def test_provider_save_muted(config_path):
    provider = SettingsProvider(config_path)
    provider.save_muted(True)
    assert provider.muted
    assert SettingsProvider(config_path).muted


def test_provider_unwritable_path_still_updates_memory(tmp_path):
    path = tmp_path / 'missing-dir' / 'config.json'
    provider = SettingsProvider(path)
    config = provider.save([3], 2)
    assert config == SessionConfig((3,), 2.0)
    assert not path.exists()


def test_boolean_stage_ids_dropped(config_path):
    write(config_path, {'stages': [True, 1, 2, False]})
    assert load_config(config_path)['stages'] == [1, 2]


def test_failed_write_keeps_previous_file(config_path, monkeypatch):
    write(config_path, {'highscore': 120})

    def broken_dump(obj, fp, **kwargs):
        fp.write('{"highscore": ')
        raise RuntimeError('disk went away')

    monkeypatch.setattr(config_module.json, 'dump', broken_dump)
    with pytest.raises(RuntimeError):
        save_config({'highscore': 200}, config_path)
    monkeypatch.undo()

    assert load_config(config_path)['highscore'] == 120
    assert [p.name for p in config_path.parent.iterdir()] == [config_path.name]
