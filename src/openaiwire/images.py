"""
Image generation, edits and variations.

Edits and variations are multipart uploads: the request is projected into
form fields and file parts by ``to_form()`` before it is sent.
"""

from pathlib import Path
from typing import Annotated, Optional, Tuple, Union

from pydantic import Field, NonNegativeInt

from ._builder import RequestBuilder
from ._operations import ContentType, MultipartForm, Operation, Resource
from ._wire import WireEnum, WireModel

ImageCount = Annotated[int, Field(ge=1, le=10)]


class ImageModel(WireEnum):
    DALL_E_2 = "dall-e-2"
    DALL_E_3 = "dall-e-3"


class ImageSize(WireEnum):
    S_256 = "256x256"
    S_512 = "512x512"
    S_1024 = "1024x1024"
    S_1792_1024 = "1792x1024"
    S_1024_1792 = "1024x1792"


class ImageQuality(WireEnum):
    STANDARD = "standard"
    HD = "hd"


class ImageStyle(WireEnum):
    VIVID = "vivid"
    NATURAL = "natural"


class ImageResponseFormat(WireEnum):
    URL = "url"
    B64_JSON = "b64_json"


# Generation ------------------------------------------------------------------

class ImageGenerationRequest(WireModel):
    prompt: Annotated[str, Field(max_length=4000)]
    model: Optional[ImageModel] = None
    n: Optional[ImageCount] = None
    quality: Optional[ImageQuality] = None
    response_format: Optional[ImageResponseFormat] = None
    size: Optional[ImageSize] = None
    style: Optional[ImageStyle] = None
    user: Optional[str] = None

    @classmethod
    def builder(cls) -> "ImageGenerationRequestBuilder":
        return ImageGenerationRequestBuilder()


class _ImageFields:
    def model(self, model: ImageModel):
        return self._set("model", model)

    def n(self, n: int):
        return self._set("n", n)

    def response_format(self, response_format: ImageResponseFormat):
        return self._set("response_format", response_format)

    def size(self, size: ImageSize):
        return self._set("size", size)

    def user(self, user: str):
        return self._set("user", user)


class ImageGenerationRequestBuilder(_ImageFields, RequestBuilder):
    target = ImageGenerationRequest

    def prompt(self, prompt: str) -> "ImageGenerationRequestBuilder":
        return self._set("prompt", prompt)

    def quality(self, quality: ImageQuality) -> "ImageGenerationRequestBuilder":
        """Only supported by dall-e-3."""
        return self._set("quality", quality)

    def style(self, style: ImageStyle) -> "ImageGenerationRequestBuilder":
        """Only supported by dall-e-3."""
        return self._set("style", style)


# Edit ------------------------------------------------------------------------

class ImageEditRequest(WireModel):
    image: Path  # square PNG, less than 4MB
    prompt: Annotated[str, Field(max_length=1000)]
    mask: Optional[Path] = None
    model: Optional[ImageModel] = None
    n: Optional[ImageCount] = None
    size: Optional[ImageSize] = None
    response_format: Optional[ImageResponseFormat] = None
    user: Optional[str] = None

    @classmethod
    def builder(cls) -> "ImageEditRequestBuilder":
        return ImageEditRequestBuilder()

    def to_form(self) -> MultipartForm:
        return (
            MultipartForm()
            .add_file("image", self.image)
            .add_file("mask", self.mask)
            .add_field("prompt", self.prompt)
            .add_field("model", self.model)
            .add_field("n", self.n)
            .add_field("size", self.size)
            .add_field("response_format", self.response_format)
            .add_field("user", self.user)
        )


class ImageEditRequestBuilder(_ImageFields, RequestBuilder):
    target = ImageEditRequest

    def image(self, image: Union[str, Path]) -> "ImageEditRequestBuilder":
        return self._set("image", Path(image))

    def prompt(self, prompt: str) -> "ImageEditRequestBuilder":
        return self._set("prompt", prompt)

    def mask(self, mask: Union[str, Path]) -> "ImageEditRequestBuilder":
        """PNG whose fully transparent areas mark where the image should be edited."""
        return self._set("mask", Path(mask))


# Variation -------------------------------------------------------------------

class ImageVariationRequest(WireModel):
    image: Path
    model: Optional[ImageModel] = None
    n: Optional[ImageCount] = None
    response_format: Optional[ImageResponseFormat] = None
    size: Optional[ImageSize] = None
    user: Optional[str] = None

    @classmethod
    def builder(cls) -> "ImageVariationRequestBuilder":
        return ImageVariationRequestBuilder()

    def to_form(self) -> MultipartForm:
        return (
            MultipartForm()
            .add_file("image", self.image)
            .add_field("model", self.model)
            .add_field("n", self.n)
            .add_field("response_format", self.response_format)
            .add_field("size", self.size)
            .add_field("user", self.user)
        )


class ImageVariationRequestBuilder(_ImageFields, RequestBuilder):
    target = ImageVariationRequest

    def image(self, image: Union[str, Path]) -> "ImageVariationRequestBuilder":
        return self._set("image", Path(image))


# Response --------------------------------------------------------------------

class Image(WireModel):
    url: Optional[str] = None
    b64_json: Optional[str] = None
    revised_prompt: Optional[str] = None


class ImageResponse(WireModel):
    created: NonNegativeInt
    data: Tuple[Image, ...] = ()


class Images(Resource):
    GENERATE = Operation("POST", "/images/generations", ImageResponse)
    EDIT = Operation("POST", "/images/edits", ImageResponse, ContentType.MULTIPART)
    VARIATION = Operation("POST", "/images/variations", ImageResponse, ContentType.MULTIPART)

    def generate(self, request: ImageGenerationRequest) -> ImageResponse:
        """Creates an image given a prompt."""
        return self._call(self.GENERATE, body=request)

    def edit(self, request: ImageEditRequest) -> ImageResponse:
        """Creates an edited or extended image given an original image and a prompt."""
        return self._call(self.EDIT, body=request.to_form())

    def variation(self, request: ImageVariationRequest) -> ImageResponse:
        """Creates a variation of a given image."""
        return self._call(self.VARIATION, body=request.to_form())
