"""slice-arcade - Wave sequencing and slice resolution core for an arcade slicing game."""
from __future__ import annotations

from slice_arcade.collaborators import ManualPhysics, PhysicsDelegate, RecordingRenderer, Renderer
from slice_arcade.config import GameConfig
from slice_arcade.gesture import GestureSample, SliceGesture
from slice_arcade.kinematics import LaunchParams, RandomKinematics
from slice_arcade.schedule import ScheduledAction, Scheduler
from slice_arcade.session import GameSession, SessionState
from slice_arcade.signals import SignalBus
from slice_arcade.target import Target, TargetState, choose_kind
from slice_arcade.types import HazardPolicy, IntRange, InvariantError, Point, TargetId, TargetKind
from slice_arcade.waves import WavePattern, WaveSequencer, build_sequence

__all__ = [
    "GameConfig",
    "GameSession",
    "GestureSample",
    "HazardPolicy",
    "IntRange",
    "InvariantError",
    "LaunchParams",
    "ManualPhysics",
    "PhysicsDelegate",
    "Point",
    "RandomKinematics",
    "RecordingRenderer",
    "Renderer",
    "ScheduledAction",
    "Scheduler",
    "SessionState",
    "SignalBus",
    "SliceGesture",
    "Target",
    "TargetId",
    "TargetKind",
    "TargetState",
    "WavePattern",
    "WaveSequencer",
    "build_sequence",
    "choose_kind",
]
