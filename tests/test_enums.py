"""
Tests for wire enumerations.
"""

import pytest

from openaiwire import DecodeError
from openaiwire.audio import AudioResponseFormat, Voice
from openaiwire.chat import ChatModel
from openaiwire.images import ImageSize
from openaiwire.runs import RunStatus
from openaiwire.run_steps import RunStepStatus


@pytest.mark.unit
class TestWireEnums:
    """Each enumerant has exactly one wire string."""

    @pytest.mark.parametrize("member", list(ChatModel) + list(ImageSize) + list(Voice) + list(RunStatus))
    def test_wire_round_trip(self, member):
        assert type(member).from_wire(member.to_wire()) is member

    def test_str_is_the_wire_string(self):
        assert str(ImageSize.S_1792_1024) == "1792x1024"
        assert f"{ChatModel.GPT_4O}" == "gpt-4o"

    def test_unknown_wire_string_is_named(self):
        with pytest.raises(DecodeError) as exc_info:
            RunStepStatus.from_wire("paused")

        assert exc_info.value.value == "paused"
        assert exc_info.value.field == "RunStepStatus"
        assert "in_progress" in str(exc_info.value)

    def test_audio_response_format_json_flag(self):
        assert AudioResponseFormat.VERBOSE_JSON.is_json
        assert not AudioResponseFormat.VTT.is_json
