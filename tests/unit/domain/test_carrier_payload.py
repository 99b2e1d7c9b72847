"""Tests for the AI suggestion payload validator and its derived schema."""

import copy
import json

import pytest

from app.domain.services.carrier_payload import (
    CarrierPayloadValidator,
    carrier_json_schema,
    describe_payload_shape,
)


@pytest.fixture
def validator():
    return CarrierPayloadValidator()


@pytest.fixture
def valid_payload():
    return {
        "items": [
            {
                "id": "ai-1",
                "name": "Rhone Reefer Lines",
                "types": ["reefer", "truck"],
                "lanes": [{"origin": "FR", "destination": "DE"}],
                "description": "Temperature-controlled groupage.",
                "logoEmoji": "❄️",
            }
        ]
    }


class TestValidation:

    def test_valid_payload_passes(self, validator, valid_payload):
        outcome = validator.validate(valid_payload)

        assert outcome.is_valid
        assert outcome.errors == []
        assert outcome.payload == valid_payload
        assert outcome.items[0].logo_emoji == "❄️"

    def test_unknown_properties_are_stripped_at_every_level(self, validator, valid_payload):
        polluted = copy.deepcopy(valid_payload)
        polluted["extra"] = True
        polluted["items"][0]["contact"] = {"email": "fake@example.com"}
        polluted["items"][0]["lanes"][0]["distanceKm"] = 1100

        outcome = validator.validate(polluted)

        assert outcome.is_valid
        assert outcome.payload == validator.validate(valid_payload).payload

    def test_missing_lanes_rejected(self, validator, valid_payload):
        del valid_payload["items"][0]["lanes"]

        outcome = validator.validate(valid_payload)

        assert not outcome.is_valid
        assert outcome.payload is None
        assert any("lanes" in error for error in outcome.errors)

    def test_unknown_transport_type_rejected(self, validator, valid_payload):
        valid_payload["items"][0]["types"] = ["hovercraft"]
        assert not validator.validate(valid_payload).is_valid

    @pytest.mark.parametrize("payload", [None, [], "items", {"items": "nope"}, {}])
    def test_structural_garbage_is_invalid_not_raised(self, validator, payload):
        outcome = validator.validate(payload)
        assert not outcome.is_valid
        assert outcome.items == []

    def test_empty_items_is_valid(self, validator):
        outcome = validator.validate({"items": []})
        assert outcome.is_valid
        assert outcome.items == []

    def test_optional_fields_may_be_null(self, validator, valid_payload):
        valid_payload["items"][0]["description"] = None
        valid_payload["items"][0]["logoEmoji"] = None

        outcome = validator.validate(valid_payload)

        assert outcome.is_valid
        assert "description" not in outcome.payload["items"][0]


class TestDerivedSchema:

    def test_schema_has_no_refs_and_closes_objects(self):
        schema = carrier_json_schema()
        text = json.dumps(schema)

        assert "$ref" not in text
        assert "$defs" not in text
        assert schema["additionalProperties"] is False
        item = schema["properties"]["items"]["items"]
        assert item["additionalProperties"] is False
        assert set(item["required"]) == {"id", "name", "types", "lanes"}
        assert "logoEmoji" in item["properties"]

    def test_strict_schema_requires_every_property(self):
        item = carrier_json_schema(strict=True)["properties"]["items"]["items"]
        assert set(item["required"]) == set(item["properties"])

    def test_transport_enum_in_schema(self):
        text = json.dumps(carrier_json_schema())
        for tag in ("truck", "reefer", "container", "flatbed", "tanker"):
            assert tag in text

    def test_shape_description_mentions_every_field(self):
        shape = describe_payload_shape()
        for field in ('"items"', '"id"', '"name"', '"types"', '"lanes"', '"origin"',
                      '"destination"', '"description"', '"logoEmoji"', '"reefer"'):
            assert field in shape

    def test_schema_copies_are_independent(self):
        carrier_json_schema()["properties"].clear()
        assert "items" in carrier_json_schema()["properties"]
