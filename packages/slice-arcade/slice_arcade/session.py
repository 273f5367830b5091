"""GameSession - score, lives, slicing and end-of-game orchestration."""
from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass

from slice_arcade import signals
from slice_arcade.collaborators import PhysicsDelegate, Renderer
from slice_arcade.config import GameConfig
from slice_arcade.gesture import SliceGesture
from slice_arcade.kinematics import RandomKinematics
from slice_arcade.schedule import CHAIN_SPAWN, SWOOSH_DONE, TOSS_WAVE, ScheduledAction, Scheduler
from slice_arcade.signals import SignalBus
from slice_arcade.target import Target, choose_kind
from slice_arcade.types import HazardPolicy, InvariantError, Point, TargetId, TargetKind
from slice_arcade.waves import WaveSequencer, build_sequence

logger = logging.getLogger(__name__)

FUSE = "fuse"
LAUNCH = "launch"
WHACK = "whack"
EXPLOSION = "explosion"
WRONG = "wrong"
SWOOSHES = ("swoosh1", "swoosh2", "swoosh3")


@dataclass(frozen=True, slots=True)
class SessionState:
    score: int
    lives: int
    lives_displayed: int
    game_ended: bool


class GameSession:
    """One play-through, driven by host tick and gesture events.

    All mutation of score, lives and the live target set goes through this
    class. The host forwards ``on_tick(dt)`` every frame and the three
    gesture callbacks as touches arrive; everything visible or audible is
    pushed back out through the renderer and physics delegates.
    """

    def __init__(
        self,
        renderer: Renderer,
        physics: PhysicsDelegate,
        config: GameConfig | None = None,
        seed: int | None = None,
    ) -> None:
        self._config = config if config is not None else GameConfig()
        self._renderer = renderer
        self._physics = physics

        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)

        self.bus = SignalBus()
        self._scheduler = Scheduler()
        self._kinematics = RandomKinematics(self._rng, self._config)
        self._gesture = SliceGesture(self._config.max_path_points)
        self._sequencer = WaveSequencer(
            build_sequence(self._rng, self._config.random_wave_count),
            scheduler=self._scheduler,
            spawn=self._spawn_target,
            physics=physics,
            is_ended=lambda: self._game_ended,
            config=self._config,
        )

        self._targets: dict[TargetId, Target] = {}
        self._next_id: TargetId = 0
        self._score = 0
        self._lives = self._config.starting_lives
        self._lives_displayed = self._lives
        self._game_ended = False
        self._input_enabled = True
        self._fuse_playing = False
        self._swoosh_playing = False
        self._started = False

    # -- Read-only views --

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def score(self) -> int:
        return self._score

    @property
    def lives(self) -> int:
        return self._lives

    @property
    def game_ended(self) -> bool:
        return self._game_ended

    @property
    def input_enabled(self) -> bool:
        return self._input_enabled

    @property
    def state(self) -> SessionState:
        return SessionState(
            score=self._score,
            lives=self._lives,
            lives_displayed=self._lives_displayed,
            game_ended=self._game_ended,
        )

    @property
    def scheduler(self) -> Scheduler:
        return self._scheduler

    @property
    def sequencer(self) -> WaveSequencer:
        return self._sequencer

    @property
    def gesture(self) -> SliceGesture:
        return self._gesture

    @property
    def now(self) -> float:
        return self._scheduler.now

    def active_targets(self) -> list[Target]:
        return list(self._targets.values())

    def target(self, target_id: TargetId) -> Target | None:
        return self._targets.get(target_id)

    # -- Lifecycle --

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        cfg = self._config
        self._physics.set_gravity(cfg.gravity)
        self._physics.set_world_time_scale(cfg.initial_time_scale)
        self._renderer.update_score_display(self._score)
        self._renderer.update_lives_display(self._lives_displayed)
        self._sequencer.start()
        logger.debug("Session started (seed=%d)", self._seed)

    def on_tick(self, dt: float) -> None:
        for action in self._scheduler.advance(dt):
            self._fire(action)

        if not self._game_ended:
            self._sync_positions()
            self._resolve_exits()
        self._update_fuse_cue()
        if not self._game_ended:
            self._sequencer.tick(len(self._targets))

        self.bus.flush()

    # -- Gesture input --

    def on_gesture_begin(self, point: Point) -> None:
        if not self._input_enabled:
            return
        self._gesture.begin(point)
        # A single point is not a drawable path.
        self._renderer.remove_path()

    def on_gesture_sample(self, point: Point) -> list[Target]:
        """Extend the gesture and slice whatever the new segment crosses."""
        if not self._input_enabled:
            return []

        sample = self._gesture.extend(point)
        if sample.path:
            self._renderer.show_path(sample.path)
        else:
            self._renderer.remove_path()

        if not self._swoosh_playing:
            self._play_swoosh()

        if sample.segment is None:
            return []

        self._sync_positions()
        start, end = sample.segment
        radius = self._config.hit_radius
        hits = [t for t in self._targets.values() if t.hit_by(start, end, radius)]
        for target in hits:
            self._slice(target)

        self.bus.flush()
        return hits

    def on_gesture_end(self) -> None:
        self._gesture.end()
        self._renderer.fade_path()

    # -- Scoring and lives --

    def subtract_life(self) -> None:
        if self._game_ended:
            return
        if self._lives <= 0:
            raise InvariantError("subtract_life called with no lives left")

        self._lives -= 1
        self._lives_displayed = self._lives
        self._renderer.play_effect(WRONG)
        self._renderer.update_lives_display(self._lives_displayed)
        self.bus.publish(signals.LIFE_LOST, lives=self._lives)

        if self._lives == 0:
            self.end_game(triggered_by_bomb=False)

    def end_game(self, triggered_by_bomb: bool) -> None:
        if self._game_ended:
            return
        self._game_ended = True
        self._input_enabled = False

        self._physics.set_world_time_scale(0.0)
        self._stop_fuse()
        if triggered_by_bomb:
            self._lives_displayed = 0
            self._renderer.update_lives_display(0)

        logger.info(
            "Game over: score=%d lives=%d bomb=%s",
            self._score, self._lives, triggered_by_bomb,
        )
        self.bus.publish(
            signals.GAME_OVER,
            score=self._score,
            lives=self._lives,
            triggered_by_bomb=triggered_by_bomb,
        )

    # -- Internals --

    def _fire(self, action: ScheduledAction) -> None:
        if action.tag == TOSS_WAVE:
            pattern = self._sequencer.toss_next_wave()
            if pattern is not None:
                self.bus.publish(
                    signals.WAVE_TOSSED,
                    pattern=pattern,
                    index=self._sequencer.position - 1,
                )
            elif self._sequencer.exhausted:
                self.bus.publish(
                    signals.SEQUENCE_EXHAUSTED, position=self._sequencer.position
                )
        elif action.tag == CHAIN_SPAWN:
            self._sequencer.fire_chain_spawn()
        elif action.tag == SWOOSH_DONE:
            self._swoosh_playing = False
        else:
            raise InvariantError(f"Unknown scheduled action: {action.tag!r}")

    def _spawn_target(self, policy: HazardPolicy) -> Target:
        kind = choose_kind(self._rng, policy, self._config.hazard_odds)
        position = self._kinematics.spawn_position()
        params = self._kinematics.launch_params_for(position[0])

        target = Target(
            id=self._next_id,
            kind=kind,
            position=position,
            velocity=params.velocity,
            angular_velocity=params.angular_velocity,
            spawn_time=self._scheduler.now,
        )
        self._next_id += 1

        self._physics.create_body(
            target.id, position, params.velocity, params.angular_velocity
        )
        self._renderer.spawn_visual(target.id, kind, position)
        if kind is TargetKind.HAZARD:
            # Only the newest hazard's fuse is audible.
            self._stop_fuse()
            self._renderer.play_effect(FUSE)
            self._fuse_playing = True
        else:
            self._renderer.play_effect(LAUNCH)

        target.activate()
        self._targets[target.id] = target
        logger.debug("Spawned %s target %d at %s", kind.value, target.id, position)
        self.bus.publish(signals.TARGET_SPAWNED, target_id=target.id, kind=kind)
        return target

    def _remove_target(self, target_id: TargetId) -> Target | None:
        target = self._targets.pop(target_id, None)
        if target is None:
            return None
        self._physics.remove_body(target_id)
        self._renderer.remove_visual(target_id)
        return target

    def _slice(self, target: Target) -> None:
        if self._targets.get(target.id) is not target:
            return
        target.mark_sliced()
        self._remove_target(target.id)
        self.bus.publish(signals.TARGET_SLICED, target_id=target.id, kind=target.kind)

        if target.kind is TargetKind.HAZARD:
            self._renderer.play_effect(EXPLOSION)
            self.end_game(triggered_by_bomb=True)
        else:
            self._renderer.play_effect(WHACK)
            self._score += 1
            self._renderer.update_score_display(self._score)

    def _sync_positions(self) -> None:
        for target in self._targets.values():
            position = self._physics.current_position(target.id)
            if position is not None:
                target.position = position

    def _resolve_exits(self) -> None:
        threshold = self._config.exit_threshold
        exited = [t for t in self._targets.values() if t.below(threshold)]
        for target in exited:
            if self._targets.get(target.id) is not target:
                continue
            target.mark_exited()
            self._remove_target(target.id)
            self.bus.publish(signals.TARGET_EXITED, target_id=target.id, kind=target.kind)
            # Hazards falling away unsliced cost nothing.
            if target.kind is TargetKind.REGULAR:
                self.subtract_life()

    def _update_fuse_cue(self) -> None:
        if not any(t.is_hazard for t in self._targets.values()):
            self._stop_fuse()

    def _stop_fuse(self) -> None:
        if self._fuse_playing:
            self._renderer.stop_effect(FUSE)
            self._fuse_playing = False

    def _play_swoosh(self) -> None:
        self._swoosh_playing = True
        self._renderer.play_effect(self._rng.choice(SWOOSHES))
        self._scheduler.schedule(self._config.swoosh_duration, SWOOSH_DONE)
