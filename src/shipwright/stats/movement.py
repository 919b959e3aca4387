#!/usr/bin/env python3
"""
SHIPWRIGHT MOVEMENT STATS
-------------------------
Reproduces the source game's ship-info movement figures (max speed,
acceleration, turning) from a finished record's attributes. Read-path
only: nothing here touches the generation pipeline.

Author: Shipwright Team
Date: 2026-10-19
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from shipwright.utils.numbers import format_number, is_number

NO_THRUSTER = "no thruster!"
NO_STEERING = "no steering!"


@dataclass(frozen=True)
class MovementStats:
    has_thruster: bool
    has_steering: Optional[bool] = None
    error: Optional[str] = None
    max_speed: Optional[str] = None
    acceleration: Optional[str] = None
    turning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"hasThruster": self.has_thruster}
        for attr, key in (("has_steering", "hasSteering"), ("error", "error"), ("max_speed", "maxSpeed"),
                          ("acceleration", "acceleration"), ("turning", "turning")):
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data


def _attr(attributes: Mapping[str, Any], key: str) -> float:
    value = attributes.get(key)
    return value if is_number(value) else 0


def calculate_movement_stats(attributes: Mapping[str, Any], mass: Optional[float], drag: Optional[float],
                             is_generic: bool = True) -> MovementStats:
    """
    Generic ships (no cargo loaded yet) report acceleration and turning
    as a 'full cargo - empty' range; a specific ship reports one figure
    for its current mass.
    """
    thrust = _attr(attributes, "thrust")
    reverse_thrust = _attr(attributes, "reverse thrust")
    afterburner_thrust = _attr(attributes, "afterburner thrust")
    turn = _attr(attributes, "turn")

    if not (thrust > 0 or reverse_thrust > 0 or afterburner_thrust > 0):
        return MovementStats(has_thruster=False, error=NO_THRUSTER)
    if not turn > 0:
        return MovementStats(has_thruster=True, has_steering=False, error=NO_STEERING)

    if not is_number(drag) or drag <= 0:
        return MovementStats(True, True, max_speed="0", acceleration="0", turning="0")

    forward_thrust = thrust if thrust > 0 else afterburner_thrust
    max_speed = format_number(60 * forward_thrust / drag)

    if not is_number(mass) or mass <= 0:
        return MovementStats(True, True, max_speed=max_speed, acceleration="0", turning="0")

    reduction = 1 + _attr(attributes, "inertia reduction")
    if reduction <= 0:
        return MovementStats(True, True, max_speed=max_speed, acceleration="0", turning="0")

    empty_mass = mass / reduction
    full_mass = (empty_mass + _attr(attributes, "cargo space")) / reduction
    current_mass = mass / reduction
    if full_mass <= 0:
        return MovementStats(True, True, max_speed=max_speed, acceleration="0", turning="0")

    base_accel = 3600 * forward_thrust * (1 + _attr(attributes, "acceleration multiplier"))
    base_turn = 60 * turn * (1 + _attr(attributes, "turn multiplier"))

    if is_generic:
        acceleration = f"{format_number(base_accel / full_mass)} - {format_number(base_accel / empty_mass)}"
        turning = f"{format_number(base_turn / full_mass)} - {format_number(base_turn / empty_mass)}"
    else:
        acceleration = format_number(base_accel / current_mass)
        turning = format_number(base_turn / current_mass)

    return MovementStats(True, True, max_speed=max_speed, acceleration=acceleration, turning=turning)


def ship_movement_stats(ship: Mapping[str, Any], is_generic: bool = True) -> MovementStats:
    """Convenience wrapper over a validated ship record."""
    attributes = ship.get("attributes") or {}
    return calculate_movement_stats(attributes, attributes.get("mass"), attributes.get("drag"), is_generic)
