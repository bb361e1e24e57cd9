"""
Operation declarations: how a resource method maps onto one HTTP exchange.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import quote

from ._exceptions import BuildError
from ._wire import WireEnum

# Assistants, threads, runs and run steps are only served with this header
ASSISTANTS_V2 = (("OpenAI-Beta", "assistants=v2"),)


class ContentType(str, Enum):
    JSON = "application/json"
    MULTIPART = "multipart/form-data"
    NONE = "none"


@dataclass(frozen=True)
class Operation:
    """Declarative description of one API call.

    Args:
        method: HTTP verb
        path: path below the base URL, with ``{name}`` placeholders
        response: decode target for JSON responses, ``str`` for plain text, None for binary
        content_type: body encoding
        headers: extra headers sent with this operation only
        binary: return the body as a stream handle instead of decoding it
    """

    method: str
    path: str
    response: Any = None
    content_type: ContentType = ContentType.JSON
    headers: Tuple[Tuple[str, str], ...] = ()
    binary: bool = False

    def resolve_path(self, path_params: Optional[Mapping[str, Any]] = None) -> str:
        params = path_params or {}
        try:
            return self.path.format_map({
                name: quote(str(value), safe="") for name, value in params.items()
            })
        except KeyError as e:
            name = e.args[0]
            raise BuildError(f"Missing path parameter '{name}' for {self.method} {self.path}", field=name) from None

    def __str__(self) -> str:
        return f"{self.method} {self.path}"


@dataclass
class MultipartForm:
    """Flattened form of a request: scalar fields plus file parts."""

    fields: Dict[str, str] = field(default_factory=dict)
    files: Dict[str, Path] = field(default_factory=dict)

    def add_field(self, name: str, value: Any) -> "MultipartForm":
        """Add a scalar form field; unset (None) values are skipped."""
        if value is None:
            return self
        if isinstance(value, WireEnum):
            value = value.to_wire()
        elif isinstance(value, bool):
            value = "true" if value else "false"
        self.fields[name] = str(value)
        return self

    def add_file(self, name: str, path: Optional[Path]) -> "MultipartForm":
        if path is not None:
            self.files[name] = Path(path)
        return self


class Resource:
    """Base for a group of operations sharing one transport."""

    def __init__(self, transport):
        self._transport = transport

    def _call(self, operation: Operation, body: Any = None, query: Any = None, **path_params):
        return self._transport.call(operation, body=body, query=query, path_params=path_params)
