from core.admin import AdminPanel
from core.config import SessionConfig
from settings import SPEED_MAX, SPEED_MIN
from stages.catalog import STAGE_GROUPS, STAGE_SETS


def make_panel(stages=(2, 3), speed=2.0):
    return AdminPanel(SessionConfig(tuple(stages), speed))


def test_initial_selection_from_config():
    panel = make_panel()
    assert panel.selected == ['a', 'ka']
    assert panel.speed == 2


def test_toggle_adds_and_removes():
    panel = make_panel()
    assert panel.toggle_group('sa').stage_order == (2, 3, 4)
    assert panel.toggle_group('a').stage_order == (3, 4)
    assert not panel.is_selected('a')


def test_toggle_unknown_group_ignored():
    panel = make_panel()
    assert panel.toggle_group('zz').stage_order == (2, 3)


def test_basic_drill_sorts_first():
    panel = make_panel()
    assert panel.toggle_group('basic').stage_order == (1, 2, 3)


def test_select_all_and_clear_all():
    panel = make_panel()
    assert panel.select_all().stage_order == tuple(sorted(STAGE_SETS))
    assert len(panel.selected) == len(STAGE_GROUPS)
    assert panel.clear_all().stage_order == ()
    assert panel.summary() == 'none'


def test_speed_clamped():
    panel = make_panel()
    assert panel.set_speed(9).speed == float(SPEED_MAX)
    assert panel.set_speed(0).speed == float(SPEED_MIN)
    assert panel.set_speed(3).speed == 3.0


def test_summary_lists_labels_in_panel_order():
    panel = make_panel(stages=(3, 2))
    assert panel.summary() == 'A row, KA row'
