# encounter.py
"""
encounter.py
============

Tick-based encounter simulator for the fuzzy-guarded enemy combatant.

This module plays the part of the game loop around the fuzzy inference
engine, stripped of rendering and physics. Every tick it:

    • Counts down the player's ability cooldown
    • Decays the player's attack intensity accumulator
    • Applies the scripted player actions (swings, ability casts)
    • Evaluates the engine with the four combat measurements
    • Picks the enemy action from the engine's result:
          - STRIKE  when close, aggressive enough and off cooldown
          - STRAFE  when the player's ability is armed and the enemy is near
          - CHASE   otherwise, faster the more aggressive it is

The enemy moves along a single axis toward the player; there is no
pathfinding or collision. Distance fed to the engine is capped the way the
game caps it.

Typical usage::

    engine = FuzzyInferenceEngine()
    sim = EncounterSimulator(engine, EncounterParams())
    sim.reset()
    sim.run(900)

    # logs available in sim.log_aggression, sim.log_state, etc.
"""

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List

from fuzzy_engine.engine import EvaluationResult, FuzzyInferenceEngine
from utils.logger import set_tick_index
from utils.profiler import CodeProfiler

simulation_log = logging.getLogger("simulation")

STRIKE = "STRIKE"
STRAFE = "STRAFE"
CHASE = "CHASE"


# ------------------------------------------------------------
# Dataclasses
# ------------------------------------------------------------

@dataclass
class EncounterParams:
    initial_distance: float = 25.0
    max_sensed_distance: float = 30.0
    enemy_max_hp: float = 50.0
    base_chase_speed: float = 0.012
    aggression_speed_gain: float = 0.002
    attack_radius: float = 3.0
    strafe_radius: float = 8.0
    strike_aggression: float = 45.0
    strike_cooldown_ticks: int = 90
    strike_damage: float = 8.0
    lunge_distance: float = 1.5
    strafe_armed: float = 0.5
    attack_decay: float = 0.05
    attack_increment: float = 2.0
    player_hit_damage: float = 4.0
    player_cooldown_ticks: int = 120
    player_attacks: FrozenSet[int] = frozenset()
    player_ability: FrozenSet[int] = frozenset()
    frame_budget_ms: float = 16.0


def decide_action(
    params: EncounterParams,
    result: EvaluationResult,
    distance: float,
    strike_cooldown: int,
) -> str:
    """Chooses the enemy action for this tick from the engine's verdict."""
    if (
        distance < params.attack_radius
        and result.aggression_output > params.strike_aggression
        and strike_cooldown <= 0
    ):
        return STRIKE
    if result.armed > params.strafe_armed and distance < params.strafe_radius:
        return STRAFE
    return CHASE


def chase_speed(params: EncounterParams, aggression: float) -> float:
    return params.base_chase_speed + max(
        0.0, (aggression - 20.0) * params.aggression_speed_gain
    )


# ------------------------------------------------------------
# Simulator
# ------------------------------------------------------------

@dataclass
class EncounterSimulator:
    engine: FuzzyInferenceEngine
    params: EncounterParams = field(default_factory=EncounterParams)

    tick: int = 0
    distance: float = 0.0
    enemy_hp: float = 0.0
    player_hp: float = 100.0
    attack_intensity: float = 0.0
    player_cooldown: int = 0
    strike_cooldown: int = 0

    log_tick: List[int] = field(default_factory=list)
    log_distance: List[float] = field(default_factory=list)
    log_health: List[float] = field(default_factory=list)
    log_attack: List[float] = field(default_factory=list)
    log_cooldown: List[float] = field(default_factory=list)
    log_aggression: List[float] = field(default_factory=list)
    log_state: List[str] = field(default_factory=list)
    log_action: List[str] = field(default_factory=list)

    # ------------------------------------------------------------
    def reset(self):
        self.tick = 0
        self.distance = self.params.initial_distance
        self.enemy_hp = self.params.enemy_max_hp
        self.player_hp = 100.0
        self.attack_intensity = 0.0
        self.player_cooldown = 0
        self.strike_cooldown = 0

        for log in (self.log_tick, self.log_distance, self.log_health,
                    self.log_attack, self.log_cooldown, self.log_aggression,
                    self.log_state, self.log_action):
            log.clear()

    @property
    def health_percent(self) -> float:
        return max(0.0, self.enemy_hp) / self.params.enemy_max_hp * 100.0

    @property
    def finished(self) -> bool:
        return self.enemy_hp <= 0 or self.player_hp <= 0

    # ------------------------------------------------------------
    def _player_turn(self):
        p = self.params
        if self.player_cooldown > 0:
            self.player_cooldown -= 1
        self.attack_intensity = max(0.0, self.attack_intensity - p.attack_decay)

        if self.tick in p.player_ability and self.player_cooldown <= 0:
            self.player_cooldown = p.player_cooldown_ticks
            simulation_log.info("Player fires ability (cooldown %d).", self.player_cooldown)

        if self.tick in p.player_attacks:
            self.attack_intensity += p.attack_increment
            if self.distance < p.attack_radius:
                self.enemy_hp -= p.player_hit_damage
                simulation_log.info(
                    "Player hits enemy for %.1f (enemy hp %.1f).",
                    p.player_hit_damage, self.enemy_hp,
                )

    # ------------------------------------------------------------
    def step(self) -> EvaluationResult:
        p = self.params
        set_tick_index(self.tick)
        self._player_turn()

        with CodeProfiler("Inference Tick", budget_ms=p.frame_budget_ms):
            result = self.engine.evaluate(
                min(self.distance, p.max_sensed_distance),
                self.health_percent,
                self.attack_intensity,
                float(self.player_cooldown),
            )

        action = decide_action(p, result, self.distance, self.strike_cooldown)
        if action == STRIKE:
            self.player_hp -= p.strike_damage
            self.strike_cooldown = p.strike_cooldown_ticks
            self.distance = max(0.0, self.distance - p.lunge_distance)
            simulation_log.info(
                "Enemy strikes for %.1f (state %s, aggression %.1f).",
                p.strike_damage, result.state_description, result.aggression_output,
            )
        elif action == CHASE:
            self.distance = max(0.0, self.distance - chase_speed(p, result.aggression_output))

        if self.strike_cooldown > 0:
            self.strike_cooldown -= 1

        self.log_tick.append(self.tick)
        self.log_distance.append(self.distance)
        self.log_health.append(self.health_percent)
        self.log_attack.append(self.attack_intensity)
        self.log_cooldown.append(float(self.player_cooldown))
        self.log_aggression.append(result.aggression_output)
        self.log_state.append(result.state_description)
        self.log_action.append(action)

        simulation_log.debug(
            "dist= %.2f hp= %.1f atk= %.2f cd= %d -> aggression= %.2f state= %s action= %s",
            self.distance, self.health_percent, self.attack_intensity,
            self.player_cooldown, result.aggression_output,
            result.state_description, action,
        )
        self.tick += 1
        return result

    # ------------------------------------------------------------
    def run(self, ticks: int):
        for _ in range(ticks):
            if self.finished:
                simulation_log.info(
                    "Encounter over at tick %d (enemy hp %.1f, player hp %.1f).",
                    self.tick, self.enemy_hp, self.player_hp,
                )
                break
            self.step()
