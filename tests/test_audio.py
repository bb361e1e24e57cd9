"""
Tests for audio: speech streaming, transcription and translation.
"""

import pytest

from openaiwire import BinaryResponse, BuildError, TransportError, encode
from openaiwire.audio import (
    AudioModel,
    AudioResponseFormat,
    AudioSpeechRequest,
    AudioTranscriptionRequest,
    AudioTranscriptionResponse,
    AudioTranslationRequest,
    AudioTranslationResponse,
    SpeechModel,
    SpeechResponseFormat,
    Voice,
)


@pytest.fixture
def audio_file(tmp_path):
    path = tmp_path / "german.m4a"
    path.write_bytes(b"fake-audio-bytes")
    return path


@pytest.mark.unit
class TestWhisperDefault:
    """The model field defaults to whisper-1 without being written to JSON."""

    def test_translation_defaults_to_whisper(self, audio_file):
        request = AudioTranslationRequest.builder().file(audio_file).build()

        assert request.model is AudioModel.WHISPER_1
        assert "model" not in encode(request)
        assert request.to_form().fields["model"] == "whisper-1"

    def test_transcription_defaults_to_whisper(self, audio_file):
        request = AudioTranscriptionRequest.builder().file(audio_file).language("de").build()

        assert request.model is AudioModel.WHISPER_1
        assert request.to_form().fields == {"model": "whisper-1", "language": "de"}

    def test_explicit_model_is_written(self, audio_file):
        request = AudioTranslationRequest.builder().file(audio_file).model(AudioModel.WHISPER_1).build()
        assert encode(request)["model"] == "whisper-1"

    def test_file_is_required(self):
        with pytest.raises(BuildError) as exc_info:
            AudioTranslationRequest.builder().prompt("hello").build()
        assert exc_info.value.field == "file"


@pytest.mark.unit
class TestAudioMultipart:
    """Transcription and translation over the fake API."""

    def test_translation_json(self, client, fake_api, audio_file):
        fake_api.respond("POST", "/audio/translations", {"text": "Hello, my name is Wolfgang."})
        request = AudioTranslationRequest.builder().file(audio_file).temperature(0.2).build()

        response = client.audio.translation(request)

        assert isinstance(response, AudioTranslationResponse)
        assert response.text == "Hello, my name is Wolfgang."
        content = fake_api.last_request.content
        assert b'name="model"\r\n\r\nwhisper-1' in content
        assert b'name="temperature"\r\n\r\n0.2' in content
        assert b'filename="german.m4a"' in content
        assert b"fake-audio-bytes" in content

    def test_transcription_verbose_json(self, client, fake_api, audio_file):
        fake_api.respond("POST", "/audio/transcriptions", {
            "text": "Hallo, mein Name ist Wolfgang.",
            "language": "german",
            "duration": 2.5,
            "segments": [{"id": 0, "start": 0.0, "end": 2.5, "text": "Hallo, mein Name ist Wolfgang."}],
        })
        request = AudioTranscriptionRequest.builder() \
            .file(audio_file) \
            .response_format(AudioResponseFormat.VERBOSE_JSON) \
            .build()

        response = client.audio.transcription(request)

        assert isinstance(response, AudioTranscriptionResponse)
        assert response.duration == 2.5
        assert response.segments[0]["end"] == 2.5

    @pytest.mark.parametrize("response_format", [AudioResponseFormat.TEXT, AudioResponseFormat.SRT])
    def test_text_formats_return_strings(self, client, fake_api, audio_file, response_format):
        fake_api.respond("POST", "/audio/transcriptions", text="1\n00:00:00,000 --> 00:00:02,500\nHallo\n")
        request = AudioTranscriptionRequest.builder().file(audio_file).response_format(response_format).build()

        response = client.audio.transcription(request)

        assert response == "1\n00:00:00,000 --> 00:00:02,500\nHallo\n"
        assert f'name="response_format"\r\n\r\n{response_format.value}'.encode() in fake_api.last_request.content


@pytest.mark.unit
class TestSpeech:
    """Speech returns a streaming handle owned by the caller."""

    @pytest.fixture
    def speech_request(self):
        return AudioSpeechRequest.builder() \
            .model(SpeechModel.TTS_1) \
            .input("The quick brown fox jumped over the lazy dog.") \
            .voice(Voice.ALLOY) \
            .response_format(SpeechResponseFormat.MP3) \
            .build()

    def test_speech_request_encoding(self, speech_request):
        assert encode(speech_request) == {
            "model": "tts-1",
            "input": "The quick brown fox jumped over the lazy dog.",
            "voice": "alloy",
            "response_format": "mp3",
        }

    def test_speech_streams_bytes(self, client, fake_api, speech_request):
        fake_api.respond("POST", "/audio/speech", content=b"ID3-mp3-bytes", headers={"content-type": "audio/mpeg"})

        with client.audio.speech(speech_request) as audio:
            assert isinstance(audio, BinaryResponse)
            assert audio.content_type == "audio/mpeg"
            assert b"".join(audio.iter_bytes()) == b"ID3-mp3-bytes"

    def test_speech_to_file(self, client, fake_api, speech_request, tmp_path):
        fake_api.respond("POST", "/audio/speech", content=b"ID3-mp3-bytes", headers={"content-type": "audio/mpeg"})
        target = tmp_path / "speech.mp3"

        with client.audio.speech(speech_request) as audio:
            audio.stream_to_file(target)

        assert target.read_bytes() == b"ID3-mp3-bytes"

    def test_speech_error_is_raised_before_streaming(self, client, fake_api, speech_request):
        fake_api.respond("POST", "/audio/speech", {"error": {"message": "Invalid voice"}}, status_code=400)

        with pytest.raises(TransportError) as exc_info:
            client.audio.speech(speech_request)

        assert exc_info.value.status_code == 400
        assert "Invalid voice" in str(exc_info.value)
