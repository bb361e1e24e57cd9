"""
Tests for moderations.
"""

import pytest

from openaiwire import encode
from openaiwire.moderations import ModerationModel, ModerationsRequest

MODERATION = {
    "id": "modr-XXXXX",
    "model": "text-moderation-007",
    "results": [{
        "flagged": True,
        "categories": {"harassment": False, "violence": True, "self-harm": False},
        "category_scores": {"harassment": 0.001, "violence": 0.97, "self-harm": 0.0001},
    }],
}


@pytest.mark.unit
class TestModerations:
    """Moderation requests accept one text or several."""

    def test_single_input(self):
        assert encode(ModerationsRequest.of("I want to hurt them.")) == {"input": "I want to hurt them."}

    def test_several_inputs_with_model(self):
        request = ModerationsRequest.builder() \
            .input("first") \
            .add_inputs("second", "third") \
            .model(ModerationModel.TEXT_MODERATION_STABLE) \
            .build()

        assert encode(request) == {"input": ["first", "second", "third"], "model": "text-moderation-stable"}

    def test_create_from_string(self, client, fake_api):
        fake_api.respond("POST", "/moderations", MODERATION)

        response = client.moderations.create("I want to hurt them.")

        assert response.results[0].flagged
        assert response.results[0].flagged_categories() == ("violence",)
        assert fake_api.last_json() == {"input": "I want to hurt them."}
