"""Tests for GameSession scoring, lives, slicing and end-of-game rules."""
from __future__ import annotations

import pytest

from slice_arcade import signals
from slice_arcade.collaborators import ManualPhysics, RecordingRenderer
from slice_arcade.config import GameConfig
from slice_arcade.schedule import CHAIN_SPAWN
from slice_arcade.session import GameSession, SessionState
from slice_arcade.target import Target, TargetState
from slice_arcade.types import HazardPolicy, InvariantError, TargetKind
from slice_arcade.waves import WavePattern


def make_session(seed: int = 7, **overrides):
    renderer = RecordingRenderer()
    physics = ManualPhysics()
    session = GameSession(renderer, physics, config=GameConfig(**overrides), seed=seed)
    return session, renderer, physics


def place(session: GameSession, physics: ManualPhysics, policy: HazardPolicy, at) -> Target:
    target = session._spawn_target(policy)
    physics.move(target.id, at)
    return target


def swipe(session: GameSession, start, end) -> list[Target]:
    session.on_gesture_begin(start)
    return session.on_gesture_sample(end)


class TestStart:
    def test_start_configures_collaborators(self) -> None:
        session, renderer, physics = make_session()
        session.start()
        assert physics.gravity == (0.0, -6.0)
        assert physics.time_scale == 0.85
        assert renderer.score == 0
        assert renderer.lives == 3
        assert session.sequencer.next_wave_queued

    def test_initial_state(self) -> None:
        session, _, _ = make_session()
        assert session.state == SessionState(
            score=0, lives=3, lives_displayed=3, game_ended=False
        )

    def test_seed_is_exposed(self) -> None:
        session, _, _ = make_session(seed=1234)
        assert session.seed == 1234

    def test_random_seed_when_none_given(self) -> None:
        session = GameSession(RecordingRenderer(), ManualPhysics())
        assert isinstance(session.seed, int)


class TestSpawning:
    def test_regular_spawn_plays_launch(self) -> None:
        session, renderer, physics = make_session()
        target = session._spawn_target(HazardPolicy.NEVER)
        assert target.kind is TargetKind.REGULAR
        assert target.state is TargetState.ACTIVE
        assert "launch" in renderer.effects()
        assert renderer.visuals[target.id] is TargetKind.REGULAR
        assert physics.velocities[target.id] == target.velocity

    def test_hazard_spawn_starts_fuse(self) -> None:
        session, renderer, _ = make_session()
        session._spawn_target(HazardPolicy.ALWAYS)
        assert "fuse" in renderer.playing

    def test_second_hazard_restarts_fuse(self) -> None:
        session, renderer, _ = make_session()
        session._spawn_target(HazardPolicy.ALWAYS)
        session._spawn_target(HazardPolicy.ALWAYS)
        assert ("stop_effect", ("fuse",)) in renderer.calls
        assert "fuse" in renderer.playing

    def test_ids_are_unique(self) -> None:
        session, _, _ = make_session()
        ids = [session._spawn_target(HazardPolicy.RANDOM).id for _ in range(10)]
        assert len(set(ids)) == 10

    @pytest.mark.parametrize("seed", range(25))
    def test_pair_one_hazard_is_always_one_of_each(self, seed: int) -> None:
        session, _, _ = make_session(seed=seed)
        session.sequencer.position = 2  # opening wave three
        assert session.sequencer.toss_next_wave() is WavePattern.PAIR_ONE_HAZARD
        kinds = sorted(t.kind.value for t in session.active_targets())
        assert kinds == ["hazard", "regular"]


class TestSlicing:
    def test_slicing_regular_scores_one_and_removes(self) -> None:
        session, renderer, physics = make_session()
        target = place(session, physics, HazardPolicy.NEVER, (500.0, 400.0))
        hits = swipe(session, (300.0, 400.0), (700.0, 400.0))
        assert hits == [target]
        assert session.score == 1
        assert session.active_targets() == []
        assert target.state is TargetState.SLICED
        assert renderer.score == 1
        assert "whack" in renderer.effects()
        assert target.id not in physics.positions

    def test_slicing_hazard_ends_game_without_scoring(self) -> None:
        session, renderer, physics = make_session()
        place(session, physics, HazardPolicy.ALWAYS, (500.0, 400.0))
        swipe(session, (300.0, 400.0), (700.0, 400.0))
        assert session.game_ended
        assert session.score == 0
        assert "explosion" in renderer.effects()

    def test_hazard_death_zeroes_displayed_lives_only(self) -> None:
        session, renderer, physics = make_session()
        place(session, physics, HazardPolicy.ALWAYS, (500.0, 400.0))
        swipe(session, (300.0, 400.0), (700.0, 400.0))
        assert session.lives == 3
        assert session.state.lives_displayed == 0
        assert renderer.lives == 0

    def test_miss_changes_nothing(self) -> None:
        session, _, physics = make_session()
        place(session, physics, HazardPolicy.NEVER, (500.0, 400.0))
        assert swipe(session, (0.0, 0.0), (100.0, 0.0)) == []
        assert session.score == 0
        assert len(session.active_targets()) == 1

    def test_one_sample_can_slice_several_targets(self) -> None:
        session, _, physics = make_session()
        a = place(session, physics, HazardPolicy.NEVER, (300.0, 400.0))
        b = place(session, physics, HazardPolicy.NEVER, (700.0, 400.0))
        hits = swipe(session, (100.0, 400.0), (900.0, 400.0))
        assert hits == [a, b]
        assert session.score == 2

    def test_only_newest_segment_is_tested(self) -> None:
        """A target moving onto an old part of the path is not sliced."""
        session, _, physics = make_session()
        target = place(session, physics, HazardPolicy.NEVER, (500.0, -100.0))
        session.on_gesture_begin((300.0, 400.0))
        session.on_gesture_sample((700.0, 400.0))
        physics.move(target.id, (500.0, 400.0))
        hits = session.on_gesture_sample((700.0, 700.0))
        assert hits == []
        assert session.score == 0

    def test_single_point_gesture_tests_nothing(self) -> None:
        session, renderer, physics = make_session()
        place(session, physics, HazardPolicy.NEVER, (500.0, 400.0))
        assert session.on_gesture_sample((500.0, 400.0)) == []
        assert renderer.path == ()

    def test_path_is_rendered_and_faded(self) -> None:
        session, renderer, _ = make_session()
        session.on_gesture_begin((0.0, 0.0))
        session.on_gesture_sample((10.0, 0.0))
        assert renderer.path == ((0.0, 0.0), (10.0, 0.0))
        session.on_gesture_end()
        assert renderer.calls[-1] == ("fade_path", ())

    def test_swoosh_not_restarted_while_playing(self) -> None:
        session, renderer, _ = make_session()
        session.on_gesture_begin((0.0, 0.0))
        for i in range(1, 6):
            session.on_gesture_sample((float(i), 0.0))
        swooshes = [e for e in renderer.effects() if e.startswith("swoosh")]
        assert len(swooshes) == 1
        session.on_tick(0.3)
        session.on_gesture_sample((50.0, 0.0))
        swooshes = [e for e in renderer.effects() if e.startswith("swoosh")]
        assert len(swooshes) == 2

    def test_input_ignored_after_game_over(self) -> None:
        session, renderer, physics = make_session()
        target = place(session, physics, HazardPolicy.NEVER, (500.0, 400.0))
        session.end_game(triggered_by_bomb=False)
        calls_before = len(renderer.calls)
        assert swipe(session, (300.0, 400.0), (700.0, 400.0)) == []
        assert len(renderer.calls) == calls_before
        assert target.alive


class TestLives:
    def test_regular_exit_costs_a_life(self) -> None:
        session, renderer, physics = make_session()
        target = place(session, physics, HazardPolicy.NEVER, (500.0, -141.0))
        session.on_tick(0.0)
        assert session.lives == 2
        assert target.state is TargetState.EXITED_BOUNDS
        assert session.active_targets() == []
        assert renderer.lives == 2
        assert "wrong" in renderer.effects()

    def test_hazard_exit_is_free(self) -> None:
        session, _, physics = make_session()
        target = place(session, physics, HazardPolicy.ALWAYS, (500.0, -141.0))
        session.on_tick(0.0)
        assert session.lives == 3
        assert target.state is TargetState.EXITED_BOUNDS
        assert not session.game_ended

    def test_target_above_threshold_stays(self) -> None:
        session, _, physics = make_session()
        place(session, physics, HazardPolicy.NEVER, (500.0, -128.0))
        session.on_tick(0.0)
        assert session.lives == 3
        assert len(session.active_targets()) == 1

    def test_three_regular_exits_end_the_game(self) -> None:
        session, _, physics = make_session()
        for expected in (2, 1, 0):
            place(session, physics, HazardPolicy.NEVER, (500.0, -200.0))
            session.on_tick(0.0)
            assert session.lives == expected
        assert session.game_ended
        assert session.state.lives_displayed == 0

    def test_simultaneous_exits_are_all_removed(self) -> None:
        session, _, physics = make_session()
        for x in (100.0, 400.0, 800.0):
            place(session, physics, HazardPolicy.NEVER, (x, -300.0))
        session.on_tick(0.0)
        assert session.active_targets() == []
        assert session.lives == 0
        assert session.game_ended

    def test_subtract_life_at_zero_is_invariant_violation(self) -> None:
        session, _, _ = make_session()
        session._lives = 0
        with pytest.raises(InvariantError):
            session.subtract_life()

    def test_subtract_life_after_game_over_is_noop(self) -> None:
        session, _, _ = make_session()
        session.end_game(triggered_by_bomb=True)
        session.subtract_life()
        assert session.lives == 3


class TestEndGame:
    def test_end_game_freezes_physics_and_input(self) -> None:
        session, _, physics = make_session()
        session.end_game(triggered_by_bomb=False)
        assert session.game_ended
        assert physics.time_scale == 0.0
        assert not session.input_enabled

    def test_end_game_is_idempotent(self) -> None:
        session, renderer, physics = make_session()
        session.end_game(triggered_by_bomb=True)
        state = session.state
        calls = list(renderer.calls)
        history = list(physics.time_scale_history)
        session.end_game(triggered_by_bomb=False)
        assert session.state == state
        assert renderer.calls == calls
        assert physics.time_scale_history == history

    def test_end_game_stops_fuse(self) -> None:
        session, renderer, _ = make_session()
        session._spawn_target(HazardPolicy.ALWAYS)
        session.end_game(triggered_by_bomb=False)
        assert "fuse" not in renderer.playing

    def test_pending_chain_spawns_self_cancel(self) -> None:
        session, _, _ = make_session()
        session.sequencer.position = 6  # opening chain wave
        assert session.sequencer.toss_next_wave() is WavePattern.CHAIN
        assert len(session.scheduler.pending(CHAIN_SPAWN)) == 4
        session.end_game(triggered_by_bomb=False)
        session.on_tick(10.0)
        assert len(session.active_targets()) == 1

    def test_no_waves_after_game_over(self) -> None:
        session, _, _ = make_session()
        session.start()
        session.end_game(triggered_by_bomb=False)
        session.on_tick(5.0)
        session.on_tick(5.0)
        assert session.active_targets() == []
        assert session.sequencer.position == 0


class TestFuseCue:
    def test_fuse_stops_when_last_hazard_leaves(self) -> None:
        session, renderer, physics = make_session()
        place(session, physics, HazardPolicy.ALWAYS, (500.0, -141.0))
        session.on_tick(0.0)
        assert "fuse" not in renderer.playing

    def test_fuse_kept_while_any_hazard_remains(self) -> None:
        session, renderer, physics = make_session()
        first = place(session, physics, HazardPolicy.ALWAYS, (200.0, 400.0))
        place(session, physics, HazardPolicy.ALWAYS, (800.0, 400.0))
        physics.move(first.id, (200.0, -500.0))
        session.on_tick(0.0)
        assert len(session.active_targets()) == 1
        assert "fuse" in renderer.playing


class TestIdempotentRemoval:
    def test_removing_absent_target_is_noop(self) -> None:
        session, renderer, _ = make_session()
        assert session._remove_target(999) is None
        assert renderer.calls == []

    def test_slicing_already_removed_target_is_noop(self) -> None:
        session, _, physics = make_session()
        target = place(session, physics, HazardPolicy.NEVER, (500.0, 400.0))
        session._slice(target)
        session._slice(target)
        assert session.score == 1


class TestSignals:
    def test_slice_signals_flushed_after_sample(self) -> None:
        session, _, physics = make_session()
        seen = []
        session.bus.subscribe("*", lambda name, data: seen.append(name))
        place(session, physics, HazardPolicy.ALWAYS, (500.0, 400.0))
        swipe(session, (300.0, 400.0), (700.0, 400.0))
        assert seen == [signals.TARGET_SPAWNED, signals.TARGET_SLICED, signals.GAME_OVER]

    def test_life_lost_payload(self) -> None:
        session, _, physics = make_session()
        payloads = []
        session.bus.subscribe(signals.LIFE_LOST, lambda name, data: payloads.append(data))
        place(session, physics, HazardPolicy.NEVER, (500.0, -141.0))
        session.on_tick(0.0)
        assert payloads == [{"lives": 2}]

    def test_wave_tossed_signal(self) -> None:
        session, _, _ = make_session()
        tossed = []
        session.bus.subscribe(signals.WAVE_TOSSED, lambda name, data: tossed.append(data))
        session.start()
        session.on_tick(2.0)
        assert tossed == [{"pattern": WavePattern.SINGLE_SAFE, "index": 0}]

    def test_sequence_exhausted_signal(self) -> None:
        session, _, physics = make_session(random_wave_count=0)
        exhausted = []
        session.bus.subscribe(
            signals.SEQUENCE_EXHAUSTED, lambda name, data: exhausted.append(data)
        )
        session.sequencer.position = len(session.sequencer.sequence)
        session.start()
        session.on_tick(2.0)
        assert exhausted == [{"position": 7}]
        session.on_tick(5.0)
        assert exhausted == [{"position": 7}]
