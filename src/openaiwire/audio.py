"""
Audio: text to speech, transcription and translation.
"""

from pathlib import Path
from typing import Annotated, Optional, Tuple, Union

from pydantic import Field

from ._builder import RequestBuilder
from ._operations import ContentType, MultipartForm, Operation, Resource
from ._wire import FrozenMap, WireEnum, WireModel

Temperature = Annotated[float, Field(ge=0.0, le=1.0)]


class SpeechModel(WireEnum):
    TTS_1 = "tts-1"
    TTS_1_HD = "tts-1-hd"


class Voice(WireEnum):
    ALLOY = "alloy"
    ECHO = "echo"
    FABLE = "fable"
    ONYX = "onyx"
    NOVA = "nova"
    SHIMMER = "shimmer"


class SpeechResponseFormat(WireEnum):
    MP3 = "mp3"
    OPUS = "opus"
    AAC = "aac"
    FLAC = "flac"
    WAV = "wav"
    PCM = "pcm"


class AudioModel(WireEnum):
    """Speech-to-text models. Only whisper-1 is currently available."""

    WHISPER_1 = "whisper-1"


class AudioResponseFormat(WireEnum):
    JSON = "json"
    TEXT = "text"
    SRT = "srt"
    VERBOSE_JSON = "verbose_json"
    VTT = "vtt"

    @property
    def is_json(self) -> bool:
        return self in (AudioResponseFormat.JSON, AudioResponseFormat.VERBOSE_JSON)


# Speech ----------------------------------------------------------------------

class AudioSpeechRequest(WireModel):
    model: SpeechModel
    input: Annotated[str, Field(max_length=4096)]
    voice: Voice
    response_format: Optional[SpeechResponseFormat] = None
    speed: Optional[Annotated[float, Field(ge=0.25, le=4.0)]] = None

    @classmethod
    def builder(cls) -> "AudioSpeechRequestBuilder":
        return AudioSpeechRequestBuilder()


class AudioSpeechRequestBuilder(RequestBuilder):
    target = AudioSpeechRequest

    def model(self, model: SpeechModel) -> "AudioSpeechRequestBuilder":
        return self._set("model", model)

    def input(self, text: str) -> "AudioSpeechRequestBuilder":
        return self._set("input", text)

    def voice(self, voice: Voice) -> "AudioSpeechRequestBuilder":
        return self._set("voice", voice)

    def response_format(self, response_format: SpeechResponseFormat) -> "AudioSpeechRequestBuilder":
        return self._set("response_format", response_format)

    def speed(self, speed: float) -> "AudioSpeechRequestBuilder":
        return self._set("speed", speed)


# Transcription and translation -------------------------------------------------

class AudioTranscriptionRequest(WireModel):
    file: Path  # flac, mp3, mp4, mpeg, mpga, m4a, ogg, wav or webm
    model: AudioModel = AudioModel.WHISPER_1
    language: Optional[str] = None  # ISO-639-1
    prompt: Optional[str] = None
    response_format: Optional[AudioResponseFormat] = None
    temperature: Optional[Temperature] = None

    @classmethod
    def builder(cls) -> "AudioTranscriptionRequestBuilder":
        return AudioTranscriptionRequestBuilder()

    def to_form(self) -> MultipartForm:
        return (
            MultipartForm()
            .add_file("file", self.file)
            .add_field("model", self.model)
            .add_field("language", self.language)
            .add_field("prompt", self.prompt)
            .add_field("response_format", self.response_format)
            .add_field("temperature", self.temperature)
        )


class AudioTranslationRequest(WireModel):
    """Translates audio into English."""

    file: Path
    model: AudioModel = AudioModel.WHISPER_1
    prompt: Optional[str] = None  # should be in English
    response_format: Optional[AudioResponseFormat] = None
    temperature: Optional[Temperature] = None

    @classmethod
    def builder(cls) -> "AudioTranslationRequestBuilder":
        return AudioTranslationRequestBuilder()

    def to_form(self) -> MultipartForm:
        return (
            MultipartForm()
            .add_file("file", self.file)
            .add_field("model", self.model)
            .add_field("prompt", self.prompt)
            .add_field("response_format", self.response_format)
            .add_field("temperature", self.temperature)
        )


class _AudioFields:
    def file(self, file: Union[str, Path]):
        return self._set("file", Path(file))

    def model(self, model: AudioModel):
        return self._set("model", model)

    def prompt(self, prompt: str):
        return self._set("prompt", prompt)

    def response_format(self, response_format: AudioResponseFormat):
        return self._set("response_format", response_format)

    def temperature(self, temperature: float):
        return self._set("temperature", temperature)


class AudioTranscriptionRequestBuilder(_AudioFields, RequestBuilder):
    target = AudioTranscriptionRequest

    def language(self, language: str) -> "AudioTranscriptionRequestBuilder":
        return self._set("language", language)


class AudioTranslationRequestBuilder(_AudioFields, RequestBuilder):
    target = AudioTranslationRequest


# Responses -------------------------------------------------------------------

class AudioTranscriptionResponse(WireModel):
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    segments: Optional[Tuple[FrozenMap, ...]] = None
    words: Optional[Tuple[FrozenMap, ...]] = None


class AudioTranslationResponse(WireModel):
    text: str
    language: Optional[str] = None
    duration: Optional[float] = None
    segments: Optional[Tuple[FrozenMap, ...]] = None


class Audio(Resource):
    SPEECH = Operation("POST", "/audio/speech", binary=True)
    TRANSCRIPTION = Operation("POST", "/audio/transcriptions", AudioTranscriptionResponse, ContentType.MULTIPART)
    TRANSCRIPTION_TEXT = Operation("POST", "/audio/transcriptions", str, ContentType.MULTIPART)
    TRANSLATION = Operation("POST", "/audio/translations", AudioTranslationResponse, ContentType.MULTIPART)
    TRANSLATION_TEXT = Operation("POST", "/audio/translations", str, ContentType.MULTIPART)

    def speech(self, request: AudioSpeechRequest):
        """Generates audio from the input text.

        Returns an open BinaryResponse (AsyncBinaryResponse for the async
        client); close it, or use it as a context manager, when done.
        """
        return self._call(self.SPEECH, body=request)

    def transcription(self, request: AudioTranscriptionRequest):
        """Transcribes audio into the input language.

        JSON response formats decode to AudioTranscriptionResponse, text,
        srt and vtt are returned as plain strings.
        """
        operation = self.TRANSCRIPTION
        if request.response_format is not None and not request.response_format.is_json:
            operation = self.TRANSCRIPTION_TEXT
        return self._call(operation, body=request.to_form())

    def translation(self, request: AudioTranslationRequest):
        """Translates audio into English."""
        operation = self.TRANSLATION
        if request.response_format is not None and not request.response_format.is_json:
            operation = self.TRANSLATION_TEXT
        return self._call(operation, body=request.to_form())
