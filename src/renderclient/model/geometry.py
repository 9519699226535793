"""
Scene Geometry & Render Request
===============================
Immutable value types for the camera pose and light position, and the
assembly of the wire payload sent to the render service.

Why is this file needed?
------------------------
1. Exact mapping: Every vector is filled from the same "<role>.<axis>" keys,
   so an x value can never land in a y slot.
2. Wire format: `RenderRequest.to_dict()` is the only place that knows the
   JSON shape expected by `POST /render/{scenario_id}`.

Classes:
    Vector3: Three finite world-space components.
    CameraPose: Eye position, look-at target and up hint.
    LightPosition: Position of the point light.
    RenderRequest: The payload of a single submission.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Mapping

import numpy as np

from renderclient.model.fields import (
    AXES, CAMERA_FROM, CAMERA_TO, CAMERA_UP, FIELD_KEYS, LIGHT, ValidationError, field_key
)


@dataclass(frozen=True)
class Vector3:
    x: float
    y: float
    z: float

    def __post_init__(self) -> None:
        if not np.all(np.isfinite(self.as_array())):
            raise ValueError(f"Vector components must be finite, got ({self.x}, {self.y}, {self.z}).")

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=float)

    def to_dict(self) -> Dict[str, float]:
        return {"x": float(self.x), "y": float(self.y), "z": float(self.z)}


@dataclass(frozen=True)
class CameraPose:
    """View transform inputs. `from_` is serialised as "from"."""
    from_: Vector3
    to: Vector3
    up: Vector3

    def is_degenerate(self) -> bool:
        """True when eye and target coincide, leaving no view direction."""
        return bool(np.array_equal(self.from_.as_array(), self.to.as_array()))

    def to_dict(self) -> Dict[str, Dict[str, float]]:
        return {
            "from": self.from_.to_dict(),
            "to": self.to.to_dict(),
            "up": self.up.to_dict(),
        }


@dataclass(frozen=True)
class LightPosition:
    position: Vector3

    def to_dict(self) -> Dict[str, float]:
        return self.position.to_dict()


@dataclass(frozen=True)
class RenderRequest:
    light_position: LightPosition
    camera_position: CameraPose

    def to_dict(self) -> dict:
        return {
            "light_position": self.light_position.to_dict(),
            "camera_position": self.camera_position.to_dict(),
        }


# Demo scene of the render server
DEFAULT_CAMERA = CameraPose(
    from_=Vector3(0.0, 1.5, -5.0),
    to=Vector3(0.0, 1.0, 0.0),
    up=Vector3(0.0, 1.0, 0.0),
)
DEFAULT_LIGHT = LightPosition(Vector3(-5.0, 10.0, -10.0))


def default_field_values() -> Dict[str, float]:
    """Flat "<role>.<axis>" view of the default light and camera."""
    vectors = {
        LIGHT: DEFAULT_LIGHT.position,
        CAMERA_FROM: DEFAULT_CAMERA.from_,
        CAMERA_TO: DEFAULT_CAMERA.to,
        CAMERA_UP: DEFAULT_CAMERA.up,
    }
    return {
        field_key(role, axis): getattr(vec, axis)
        for role, vec in vectors.items()
        for axis in AXES
    }


def _vector(values: Mapping[str, float], role: str) -> Vector3:
    return Vector3(*(values[field_key(role, axis)] for axis in AXES))


def build_request(values: Mapping[str, float]) -> RenderRequest:
    """
    Assembles a RenderRequest from already-parsed field values.

    A missing component is a validation error, never a zero.
    """
    missing = [key for key in FIELD_KEYS if key not in values]
    if missing:
        raise ValidationError([f"{key}: missing value" for key in missing])

    return RenderRequest(
        light_position=LightPosition(_vector(values, LIGHT)),
        camera_position=CameraPose(
            from_=_vector(values, CAMERA_FROM),
            to=_vector(values, CAMERA_TO),
            up=_vector(values, CAMERA_UP),
        ),
    )


def validate_pose(values: Mapping[str, float]) -> None:
    """
    Rejects a camera whose eye and target coincide.

    Runs on parsed values ahead of `build_request`.
    """
    try:
        pose = CameraPose(
            from_=_vector(values, CAMERA_FROM),
            to=_vector(values, CAMERA_TO),
            up=_vector(values, CAMERA_UP),
        )
    except KeyError:
        # Missing components are reported by build_request
        return
    if pose.is_degenerate():
        raise ValidationError(["camera: 'from' and 'to' must differ (no view direction)"])
