import json
import math

import pytest

from renderclient.model.fields import FIELD_KEYS, ValidationError, read_fields
from renderclient.model.geometry import (
    DEFAULT_CAMERA, DEFAULT_LIGHT, CameraPose, Vector3, build_request, default_field_values, validate_pose
)

from conftest import fields_from


class TestVector3:
    def test_rejects_non_finite(self):
        with pytest.raises(ValueError):
            Vector3(0.0, math.nan, 0.0)
        with pytest.raises(ValueError):
            Vector3(math.inf, 0.0, 0.0)

    def test_zero_vector_allowed(self):
        assert Vector3(0.0, 0.0, 0.0).to_dict() == {"x": 0.0, "y": 0.0, "z": 0.0}


class TestBuildRequest:
    def test_each_value_lands_in_its_slot(self):
        # Distinct value per key so any transposition would show up
        values = {key: float(i + 1) * (-1) ** i for i, key in enumerate(FIELD_KEYS)}
        payload = build_request(values).to_dict()

        for key, value in values.items():
            role, axis = key.split(".")
            if role == "light":
                assert payload["light_position"][axis] == value
            else:
                assert payload["camera_position"][role][axis] == value

    def test_documented_example_serializes_exactly(self):
        raw = fields_from(light=(2, 5, 2), eye=(0, 1.5, -5), target=(0, 1, 0), up=(0, 1, 0))
        request = build_request(read_fields(raw))

        assert json.loads(json.dumps(request.to_dict())) == {
            "light_position": {"x": 2.0, "y": 5.0, "z": 2.0},
            "camera_position": {
                "from": {"x": 0.0, "y": 1.5, "z": -5.0},
                "to": {"x": 0.0, "y": 1.0, "z": 0.0},
                "up": {"x": 0.0, "y": 1.0, "z": 0.0},
            },
        }

    def test_missing_component_is_an_error_not_zero(self):
        values = {key: 1.0 for key in FIELD_KEYS}
        del values["to.y"]
        with pytest.raises(ValidationError) as exc:
            build_request(values)
        assert exc.value.problems == ["to.y: missing value"]

    def test_request_is_immutable(self):
        request = build_request(default_field_values())
        with pytest.raises(AttributeError):
            request.light_position = None


class TestValidatePose:
    def test_degenerate_view_rejected(self):
        raw = fields_from(light=(1, 1, 1), eye=(1, 2, 3), target=(1, 2, 3), up=(0, 1, 0))
        with pytest.raises(ValidationError, match="must differ"):
            validate_pose(read_fields(raw))

    def test_distinct_eye_and_target_pass(self):
        validate_pose(default_field_values())

    def test_zero_up_vector_is_not_checked(self):
        raw = fields_from(light=(0, 0, 0), eye=(0, 0, -1), target=(0, 0, 0), up=(0, 0, 0))
        validate_pose(read_fields(raw))


def test_defaults_match_demo_scene():
    values = default_field_values()
    assert values["from.y"] == 1.5 and values["from.z"] == -5.0
    assert values["light.x"] == -5.0 and values["light.y"] == 10.0 and values["light.z"] == -10.0
    assert not DEFAULT_CAMERA.is_degenerate()
    assert DEFAULT_LIGHT.to_dict() == {"x": -5.0, "y": 10.0, "z": -10.0}
    assert isinstance(DEFAULT_CAMERA, CameraPose)
