"""
Wire encoding and decoding for openaiwire models.

Every request and response type derives from ``WireModel``: a frozen pydantic
model that is encoded with omit-if-absent semantics (only fields that were
explicitly set are written) and decoded through ``decode()``, which turns
pydantic validation failures into ``DecodeError``.
"""

import functools
import logging
from enum import Enum
from types import MappingProxyType
from typing import Annotated, Any, ClassVar, Dict, Literal, Mapping, Tuple, Type, TypeVar, Union

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    PlainSerializer,
    PositiveFloat,
    PositiveInt,
    TypeAdapter,
    ValidationError,
)

from ._exceptions import DecodeError

logger = logging.getLogger("openaiwire.wire")

T = TypeVar("T")

AUTO = "auto"

# Fields the API accepts either as "auto" or as an explicit number
AutoOrInt = Union[Literal["auto"], PositiveInt]
AutoOrFloat = Union[Literal["auto"], PositiveFloat]


def freeze(value: Any) -> Any:
    """Recursively turn maps into read-only proxies and lists into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of freeze(): plain dicts and lists, ready for JSON."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


def frozen_map(value_type: Any = Any):
    """String-keyed map stored read-only on the model and encoded as a plain object."""
    return Annotated[Mapping[str, value_type], AfterValidator(freeze), PlainSerializer(thaw)]


FrozenMap = frozen_map()


class WireEnum(str, Enum):
    """Closed set of constants, each with exactly one wire string."""

    def to_wire(self) -> str:
        return self.value

    @classmethod
    def from_wire(cls, value: str) -> "WireEnum":
        try:
            return cls(value)
        except ValueError:
            raise DecodeError(
                f"Unknown {cls.__name__} value '{value}', expected one of "
                f"{', '.join(member.value for member in cls)}",
                field=cls.__name__,
                value=value,
            ) from None

    def __str__(self) -> str:
        return self.value


class WireModel(BaseModel):
    """Frozen base model for everything that crosses the wire."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    # Fields written even when they hold their default (discriminators, nullable content)
    always_sent: ClassVar[Tuple[str, ...]] = ()

    def model_post_init(self, __context: Any) -> None:
        self.__pydantic_fields_set__.update(self.always_sent)

    def to_wire(self) -> Dict[str, Any]:
        return encode(self)


class Variant(WireModel):
    """One shape of a tagged union; the ``type`` discriminator is always encoded."""

    always_sent: ClassVar[Tuple[str, ...]] = ("type",)


def encode(value: BaseModel) -> Dict[str, Any]:
    """Encode a model to a JSON-ready dict, omitting fields that were never set."""
    return value.model_dump(mode="json", exclude_unset=True)


@functools.lru_cache(maxsize=None)
def _adapter(target: Any) -> TypeAdapter:
    return TypeAdapter(target)


def decode(target: Type[T], data: Any, context: str = None) -> T:
    """Decode wire data into ``target``, raising DecodeError on any mismatch."""
    context = context or getattr(target, "__name__", str(target))
    try:
        return _adapter(target).validate_python(data)
    except ValidationError as e:
        raise _decode_error(e, context) from e


def _decode_error(error: ValidationError, context: str) -> DecodeError:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "<root>"
    ctx = first.get("ctx") or {}

    if first["type"] == "union_tag_invalid":
        tag = ctx.get("tag")
        message = (
            f"{context}: unknown {ctx.get('discriminator', 'type')} value '{tag}' at {location}, "
            f"expected one of {ctx.get('expected_tags')}"
        )
        value = tag
    elif first["type"] == "union_tag_not_found":
        message = f"{context}: missing discriminator {ctx.get('discriminator', 'type')} at {location}"
        value = None
    elif first["type"] == "missing":
        message = f"{context}: required field '{location}' is missing"
        value = None
    else:
        value = first.get("input")
        message = f"{context}: invalid value at '{location}': {first['msg']}"

    if error.error_count() > 1:
        message += f" (and {error.error_count() - 1} more error(s))"

    logger.debug(f"Decode failed for {context}: {error}")
    return DecodeError(message, field=location, value=value, context=context)
