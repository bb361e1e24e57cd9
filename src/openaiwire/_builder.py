"""
Request builder base for openaiwire.
"""

from typing import Any, Callable, ClassVar, Dict, Iterable, Mapping, Type

from pydantic import BaseModel, ValidationError

from ._exceptions import BuildError
from ._wire import WireEnum


class RequestBuilder:
    """Mutable accumulator that produces one immutable request via ``build()``.

    Subclasses declare ``target`` and expose one fluent method per field,
    delegating to ``_set`` (replace), ``_add`` (append) or ``_put`` (map
    insert). Unset fields are simply absent from ``_values``, so "unset" and
    "set to an empty value" stay distinguishable. Builders are not thread safe.
    """

    target: ClassVar[Type[BaseModel]]

    def __init__(self):
        self._values: Dict[str, Any] = {}

    def _set(self, name: str, value: Any) -> "RequestBuilder":
        if isinstance(value, (list, tuple)):
            value = list(value)
        elif isinstance(value, Mapping):
            value = dict(value)
        self._values[name] = value
        return self

    def _add(self, name: str, values: Iterable[Any]) -> "RequestBuilder":
        items = [value for value in (values or ()) if value is not None]
        if not items:
            return self
        current = self._values.get(name)
        if current is None:
            current = self._values[name] = []
        current.extend(items)
        return self

    def _put(self, name: str, key: str, value: Any) -> "RequestBuilder":
        current = self._values.get(name)
        if current is None:
            current = self._values[name] = {}
        current[key] = value
        return self

    def _nested(self, builder_factory: Callable[[], "RequestBuilder"],
                configure: Callable[["RequestBuilder"], "RequestBuilder"]) -> BaseModel:
        """Run ``configure`` against a fresh nested builder and build the result."""
        return configure(builder_factory()).build()

    def _snapshot(self) -> Dict[str, Any]:
        snapshot = {}
        for name, value in self._values.items():
            if isinstance(value, list):
                snapshot[name] = tuple(_detach(value))
            elif isinstance(value, dict):
                snapshot[name] = _detach(value)
            else:
                snapshot[name] = value
        return snapshot

    def build(self) -> BaseModel:
        target = self.target
        for name, field in target.model_fields.items():
            if field.is_required() and name not in self._values:
                raise BuildError(
                    f"Cannot build {target.__name__}, required field '{name}' is not set",
                    field=name,
                )
        try:
            return target(**self._snapshot())
        except ValidationError as e:
            first = e.errors()[0]
            field = ".".join(str(part) for part in first["loc"])
            raise BuildError(f"Cannot build {target.__name__}, field '{field}': {first['msg']}", field=field) from e


def model_id(value: Any) -> str:
    """Accept either a model enumerant or a free-form model identifier."""
    if isinstance(value, WireEnum):
        return value.to_wire()
    return value


def _detach(value: Any) -> Any:
    """Copy builder-owned containers; built models are frozen and shared as they are."""
    if isinstance(value, BaseModel):
        return value
    if isinstance(value, (list, tuple)):
        return [_detach(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _detach(item) for key, item in value.items()}
    return value
