import pytest

from core.config import SessionConfig
from core.errors import ConfigurationError
from core.events import EventKind
from core.highscore import HighScoreStore
from core.matcher import MatchResult
from core.session import Phase
from settings import BASE_FALL_RATE, FALL_TICK_MS, SPAWN_Y, STAGE_TRANSITION_MS
from stages.catalog import SPELLINGS, StageCatalog


def answer(controller):
    """Type the first spelling of the active prompt; return the last result."""
    glyph = controller.state.active_prompt.glyph
    result = None
    for char in controller.catalog.spellings_of(glyph)[0]:
        result = controller.type_char(char)
    return result


def start_playing(controller):
    controller.start()
    controller.update(FALL_TICK_MS)
    assert controller.state.active_prompt is not None


def kinds(events):
    return [e.kind for e in events]


def test_starts_in_title_phase(make_controller):
    controller = make_controller()
    snap = controller.snapshot()
    assert snap.phase is Phase.START
    assert snap.life == 10
    assert snap.score == 0


def test_first_tick_spawns_prompt(make_controller, events):
    controller = make_controller(speed=2.0)
    controller.subscribe(events.append)
    controller.start()
    assert controller.phase is Phase.PLAYING
    assert kinds(events) == [EventKind.SESSION_BEGIN]
    assert controller.state.active_prompt is None

    controller.update(FALL_TICK_MS)
    prompt = controller.state.active_prompt
    assert prompt.glyph in ('F', 'J')
    assert prompt.y == SPAWN_Y
    assert prompt.fall_rate == BASE_FALL_RATE * 2.0


def test_prompt_falls_each_tick(make_controller):
    controller = make_controller(speed=2.0)
    start_playing(controller)
    controller.update(FALL_TICK_MS * 3)
    assert controller.state.active_prompt.y == pytest.approx(SPAWN_Y + 3 * BASE_FALL_RATE * 2.0)


def test_correct_answer_at_spawn_height(make_controller, events):
    controller = make_controller(speed=2.0)
    start_playing(controller)
    first = controller.state.active_prompt
    controller.subscribe(events.append)

    assert answer(controller) is MatchResult.SUCCESS
    snap = controller.snapshot()
    assert snap.score == 13
    assert snap.question_count == 1
    assert snap.input_buffer == ''
    # next prompt is spawned right away
    assert snap.active_prompt is not None
    assert snap.active_prompt.id != first.id
    assert kinds(events) == [EventKind.KEYSTROKE, EventKind.CORRECT]
    assert events[-1].points == 13
    assert events[-1].prompt == first


def test_wrong_key_costs_life(make_controller, events):
    controller = make_controller()
    start_playing(controller)
    controller.subscribe(events.append)

    assert controller.type_char('q') is MatchResult.FAILURE
    snap = controller.snapshot()
    assert snap.life == 9
    assert snap.input_buffer == ''
    assert snap.phase is Phase.PLAYING
    assert kinds(events) == [EventKind.KEYSTROKE, EventKind.MISS]


def test_alternate_spelling_accepted(make_controller):
    catalog = StageCatalog({1: ['F', 'J'], 2: ['し']}, SPELLINGS)
    controller = make_controller(stage_order=(2,), catalog=catalog)
    start_playing(controller)
    assert controller.state.active_prompt.glyph == 'し'

    assert controller.type_char('s') is MatchResult.PENDING
    assert controller.type_char('h') is MatchResult.PENDING
    assert controller.state.input_buffer == 'SH'
    assert controller.type_char('i') is MatchResult.SUCCESS
    assert controller.state.question_count == 1


def test_non_letters_ignored(make_controller):
    controller = make_controller()
    start_playing(controller)
    for key in (' ', '1', 'ab', '', 'あ'):
        assert controller.type_char(key) is None
    assert controller.state.input_buffer == ''
    assert controller.state.life == 10


def test_typing_outside_play_ignored(make_controller):
    controller = make_controller()
    assert controller.type_char('f') is None
    controller.start()
    # no prompt until the first tick
    assert controller.type_char('f') is None


def test_life_exhaustion_ends_session(make_controller, events):
    controller = make_controller()
    start_playing(controller)
    answer(controller)
    score = controller.state.score
    controller.subscribe(events.append)

    for _ in range(10):
        controller.type_char('q')
    snap = controller.snapshot()
    assert snap.phase is Phase.GAME_OVER
    assert snap.life == 0
    assert snap.active_prompt is None
    assert snap.score == score
    assert events[-1].kind is EventKind.GAME_OVER
    assert kinds(events).count(EventKind.MISS) == 10

    # further keys and ticks change nothing
    assert controller.type_char('f') is None
    controller.update(FALL_TICK_MS * 100)
    assert controller.snapshot() == snap


def test_prompt_reaching_floor_ends_session(make_controller, events):
    controller = make_controller(speed=2.0)
    controller.subscribe(events.append)
    start_playing(controller)

    controller.update(FALL_TICK_MS * 200)
    snap = controller.snapshot()
    assert snap.phase is Phase.GAME_OVER
    assert snap.life == 10
    assert snap.active_prompt is None
    assert kinds(events).count(EventKind.GAME_OVER) == 1
    assert controller.scheduler.pending() == 0


def test_stage_clear_after_full_stage(make_controller, events):
    controller = make_controller(stage_order=(1, 2))
    controller.subscribe(events.append)
    start_playing(controller)

    for _ in range(19):
        answer(controller)
        assert controller.phase is Phase.PLAYING
    answer(controller)

    snap = controller.snapshot()
    assert snap.phase is Phase.STAGE_CLEAR
    assert snap.question_count == 20
    assert snap.stage_index == 1
    assert snap.stage_id == 2
    assert snap.active_prompt is None
    assert EventKind.STAGE_CLEAR in kinds(events)


def test_interleaved_questions_use_base_glyphs(make_controller):
    controller = make_controller(stage_order=(2,))
    start_playing(controller)
    for q in range(1, 10):
        answer(controller)
        glyph = controller.state.active_prompt.glyph
        if q % 3 == 0:
            assert glyph in ('F', 'J')
        else:
            assert glyph in ('あ', 'い', 'う', 'え', 'お')


def test_continue_waits_for_transition(make_controller):
    controller = make_controller(stage_order=(1, 2))
    start_playing(controller)
    for _ in range(20):
        answer(controller)

    assert controller.continue_stage() is True
    assert controller.snapshot().transitioning
    # a second request during the delay is ignored
    assert controller.continue_stage() is False

    controller.update(STAGE_TRANSITION_MS - 1)
    assert controller.phase is Phase.STAGE_CLEAR
    controller.update(1)
    snap = controller.snapshot()
    assert snap.phase is Phase.PLAYING
    assert snap.question_count == 0
    assert snap.stage_id == 2
    assert not snap.transitioning

    controller.update(FALL_TICK_MS)
    assert controller.state.active_prompt is not None


def test_last_stage_clears_session(make_controller, events):
    controller = make_controller(stage_order=(1,))
    controller.subscribe(events.append)
    start_playing(controller)
    for _ in range(20):
        answer(controller)

    snap = controller.snapshot()
    assert snap.phase is Phase.CLEAR
    assert snap.stage_id is None
    assert events[-1].kind is EventKind.SESSION_CLEAR
    assert controller.scheduler.pending() == 0


def test_short_stage_length(make_controller):
    controller = make_controller(stage_order=(1, 2), questions_per_stage=3)
    start_playing(controller)
    for _ in range(3):
        answer(controller)
    assert controller.phase is Phase.STAGE_CLEAR


def test_high_score_recorded_once_per_edge(make_controller, events, config_path):
    controller = make_controller(stage_order=(1, 2))
    controller.subscribe(events.append)
    start_playing(controller)
    for _ in range(20):
        answer(controller)

    score = controller.state.score
    assert score > 0
    assert kinds(events).count(EventKind.HIGH_SCORE) == 1
    assert controller.snapshot().new_record
    assert controller.snapshot().high_score == score
    assert HighScoreStore(config_path).get() == score

    # dying straight away at the same score is not a new record
    controller.continue_stage()
    controller.update(STAGE_TRANSITION_MS + FALL_TICK_MS)
    for _ in range(10):
        controller.type_char('q')
    assert controller.phase is Phase.GAME_OVER
    assert kinds(events).count(EventKind.HIGH_SCORE) == 1


def test_lower_score_keeps_record(make_controller, store):
    store.set(10_000)
    controller = make_controller()
    assert controller.snapshot().high_score == 10_000
    start_playing(controller)
    answer(controller)
    for _ in range(10):
        controller.type_char('q')
    snap = controller.snapshot()
    assert snap.phase is Phase.GAME_OVER
    assert not snap.new_record
    assert store.get() == 10_000


def test_restart_from_game_over(make_controller, events):
    controller = make_controller()
    start_playing(controller)
    for _ in range(10):
        controller.type_char('q')
    controller.subscribe(events.append)

    controller.confirm()
    snap = controller.snapshot()
    assert snap.phase is Phase.PLAYING
    assert snap.life == 10
    assert snap.score == 0
    assert snap.stage_index == 0
    assert kinds(events) == [EventKind.SESSION_BEGIN]


def test_reset_cancels_fall_tick(make_controller):
    controller = make_controller()
    start_playing(controller)
    controller.reset()
    assert controller.phase is Phase.START
    assert controller.scheduler.pending() == 0
    controller.update(FALL_TICK_MS * 10)
    assert controller.state.active_prompt is None


def test_reset_during_transition_drops_it(make_controller):
    controller = make_controller(stage_order=(1, 2))
    start_playing(controller)
    for _ in range(20):
        answer(controller)
    controller.continue_stage()
    controller.reset()
    controller.update(STAGE_TRANSITION_MS * 2)
    assert controller.phase is Phase.START


def test_start_ignored_while_playing(make_controller, events):
    controller = make_controller()
    start_playing(controller)
    answer(controller)
    controller.subscribe(events.append)
    controller.start()
    assert controller.state.question_count == 1
    assert events == []


def test_empty_stage_order_rejected(make_controller):
    controller = make_controller(stage_order=())
    with pytest.raises(ConfigurationError):
        controller.start()
    assert controller.phase is Phase.START
    assert controller.scheduler.pending() == 0


def test_unknown_stage_rejected(make_controller):
    controller = make_controller(stage_order=(1, 77))
    with pytest.raises(ConfigurationError):
        controller.confirm()


def test_settings_apply_immediately_on_title(make_controller):
    controller = make_controller(stage_order=(1,))
    new = SessionConfig((3, 4), 4.0)
    assert controller.apply_settings(new) is True
    assert controller.config == new


def test_settings_deferred_during_play(make_controller):
    controller = make_controller(stage_order=(1,), speed=2.0)
    start_playing(controller)
    new = SessionConfig((3,), 5.0)
    assert controller.apply_settings(new) is False
    assert controller.config.stage_order == (1,)
    assert controller.state.active_prompt.fall_rate == BASE_FALL_RATE * 2.0

    controller.reset()
    assert controller.config == new


def test_unsubscribe_stops_events(make_controller, events):
    controller = make_controller()
    controller.subscribe(events.append)
    controller.unsubscribe(events.append)
    controller.start()
    assert events == []


def test_hint_is_first_spelling(make_controller):
    catalog = StageCatalog({1: ['F', 'J'], 2: ['ち']}, SPELLINGS)
    controller = make_controller(stage_order=(2,), catalog=catalog)
    start_playing(controller)
    assert controller.snapshot().hint == 'TI'


def test_non_positive_speed_rejected(make_controller):
    for speed in (0.0, -1.0):
        controller = make_controller(speed=speed)
        with pytest.raises(ConfigurationError):
            controller.start()
        assert controller.phase is Phase.START
        assert controller.scheduler.pending() == 0


def test_interleaved_base_glyph_has_no_hint(make_controller):
    catalog = StageCatalog({1: ['F', 'J'], 2: ['ち']}, SPELLINGS)
    controller = make_controller(stage_order=(2,), catalog=catalog)
    start_playing(controller)
    for _ in range(3):
        assert controller.snapshot().hint == 'TI'
        answer(controller)

    # fourth question is a base-practice prompt
    snap = controller.snapshot()
    assert snap.active_prompt.glyph in ('F', 'J')
    assert snap.hint == ''

    answer(controller)
    assert controller.snapshot().hint == 'TI'
