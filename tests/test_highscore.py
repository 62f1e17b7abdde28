import json

from core.highscore import HighScoreStore


def test_fresh_store_is_zero(config_path):
    assert HighScoreStore(config_path).get() == 0


def test_higher_score_recorded_and_persisted(config_path):
    store = HighScoreStore(config_path)
    assert store.set(150) is True
    assert store.get() == 150
    assert HighScoreStore(config_path).get() == 150


def test_equal_or_lower_score_is_noop(config_path):
    store = HighScoreStore(config_path)
    store.set(150)
    assert store.set(150) is False
    assert store.set(90) is False
    assert store.get() == 150
    assert json.loads(config_path.read_text(encoding='utf-8'))['highscore'] == 150


def test_sequence_is_monotonic(config_path):
    store = HighScoreStore(config_path)
    seen = []
    for score in (5, 3, 40, 12, 40, 41, 0):
        store.set(score)
        seen.append(store.get())
    assert seen == [5, 5, 40, 40, 40, 41, 41]


def test_other_settings_survive_write(config_path):
    config_path.write_text(json.dumps({'speed': 4, 'stages': [2]}), encoding='utf-8')
    HighScoreStore(config_path).set(30)
    data = json.loads(config_path.read_text(encoding='utf-8'))
    assert data['speed'] == 4
    assert data['stages'] == [2]


def test_unwritable_path_keeps_value_in_memory(tmp_path):
    store = HighScoreStore(tmp_path / 'nope' / 'config.json')
    assert store.set(25) is True
    assert store.get() == 25
