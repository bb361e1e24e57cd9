"""
HTTP transports for openaiwire (httpx based).

The transports turn an ``Operation`` plus a request value into one HTTP
exchange and decode the answer. They never retry: every failure is raised to
the caller as ``TransportError`` (or ``DecodeError`` for a well-formed
response with the wrong shape).
"""

import json
import logging
import time
import uuid
from contextlib import ExitStack
from typing import Any, Dict, Mapping, Optional

import httpx
from pydantic import BaseModel

from ._exceptions import BuildError, TransportError
from ._operations import ContentType, MultipartForm, Operation
from ._wire import decode, encode
from .config import Configuration

logger = logging.getLogger("openaiwire.http")


class BinaryResponse:
    """Open streaming response body (e.g. synthesized audio). The caller must close it."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def content_type(self) -> Optional[str]:
        return self._response.headers.get("content-type")

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    def iter_bytes(self, chunk_size: Optional[int] = None):
        return self._response.iter_bytes(chunk_size)

    def read(self) -> bytes:
        return self._response.read()

    def stream_to_file(self, path) -> None:
        with open(path, 'wb') as f:
            for chunk in self._response.iter_bytes():
                f.write(chunk)

    def close(self) -> None:
        self._response.close()

    def __enter__(self) -> "BinaryResponse":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class AsyncBinaryResponse:
    """Async counterpart of BinaryResponse."""

    def __init__(self, response: httpx.Response):
        self._response = response

    @property
    def content_type(self) -> Optional[str]:
        return self._response.headers.get("content-type")

    @property
    def headers(self) -> httpx.Headers:
        return self._response.headers

    def aiter_bytes(self, chunk_size: Optional[int] = None):
        return self._response.aiter_bytes(chunk_size)

    async def aread(self) -> bytes:
        return await self._response.aread()

    async def aclose(self) -> None:
        await self._response.aclose()

    async def __aenter__(self) -> "AsyncBinaryResponse":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()


class _BaseTransport:
    """Request preparation and response decoding shared by both transports."""

    def __init__(self, configuration: Configuration):
        self.configuration = configuration

    def _url(self, operation: Operation, path_params: Optional[Mapping[str, Any]]) -> str:
        return f"{self.configuration.base_url.rstrip('/')}{operation.resolve_path(path_params)}"

    def _headers(self, operation: Operation) -> Dict[str, str]:
        headers = {"Authorization": f"Bearer {self.configuration.api_key}"}
        if self.configuration.organization:
            headers["OpenAI-Organization"] = self.configuration.organization
        headers.update(dict(operation.headers))
        return headers

    def _build_request(self, client, operation: Operation, body: Any, query: Any,
                       path_params: Optional[Mapping[str, Any]], stack: ExitStack) -> httpx.Request:
        kwargs: Dict[str, Any] = {
            "headers": self._headers(operation),
            "timeout": self.configuration.timeout,
        }

        if query is not None:
            kwargs["params"] = encode(query) if isinstance(query, BaseModel) else dict(query)

        if operation.content_type == ContentType.JSON and body is not None:
            kwargs["json"] = encode(body) if isinstance(body, BaseModel) else body
        elif operation.content_type == ContentType.MULTIPART:
            if not isinstance(body, MultipartForm):
                raise BuildError(f"{operation} expects a multipart form, got {type(body).__name__}", field="body")
            # File handles live only for the duration of this exchange
            kwargs["data"] = body.fields
            kwargs["files"] = {
                name: (path.name, stack.enter_context(open(path, 'rb')))
                for name, path in body.files.items()
            }

        return client.build_request(operation.method, self._url(operation, path_params), **kwargs)

    def _raise_for_status(self, operation: Operation, response: httpx.Response, request_id: str) -> None:
        if response.is_success:
            return

        body = response.text
        detail = ""
        try:
            error = json.loads(body).get("error") or {}
            if isinstance(error, dict) and error.get("message"):
                detail = f": {error['message']}"
        except (ValueError, AttributeError):
            pass

        logger.warning(f"[{request_id}] {operation} failed with status {response.status_code}: {body[:300]}")
        raise TransportError(
            f"{operation} failed with status {response.status_code}{detail}",
            status_code=response.status_code,
            body=body,
            method=operation.method,
            url=str(response.request.url),
        )

    def _network_error(self, operation: Operation, request: httpx.Request, error: httpx.HTTPError,
                       request_id: str) -> TransportError:
        logger.warning(f"[{request_id}] {operation} network failure ({type(error).__name__}: {error})")
        return TransportError(
            f"{operation} failed: {type(error).__name__}: {error}",
            method=operation.method,
            url=str(request.url),
        )

    def _decode(self, operation: Operation, response: httpx.Response, request_id: str, started: float) -> Any:
        logger.debug(
            f"[{request_id}] {operation} -> {response.status_code} in {time.time() - started:.2f}s"
        )
        if operation.response is str:
            return response.text
        try:
            data = response.json()
        except ValueError as e:
            raise TransportError(
                f"{operation} returned malformed JSON: {e}",
                status_code=response.status_code,
                body=response.text,
                method=operation.method,
                url=str(response.request.url),
            ) from e
        return decode(operation.response, data, context=str(operation))


class SyncTransport(_BaseTransport):
    """Blocking transport over httpx.Client."""

    def __init__(self, configuration: Configuration, http_client: Optional[httpx.Client] = None):
        super().__init__(configuration)
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=configuration.timeout)

    def call(self, operation: Operation, body: Any = None, query: Any = None,
             path_params: Optional[Mapping[str, Any]] = None) -> Any:
        request_id = uuid.uuid4().hex[:8]
        started = time.time()

        with ExitStack() as stack:
            request = self._build_request(self._client, operation, body, query, path_params, stack)
            logger.debug(f"[{request_id}] {request.method} {request.url.path} ({operation.content_type.value})")
            try:
                response = self._client.send(request, stream=operation.binary)
            except httpx.HTTPError as e:
                raise self._network_error(operation, request, e, request_id) from e

        if operation.binary:
            if not response.is_success:
                response.read()
                response.close()
            self._raise_for_status(operation, response, request_id)
            return BinaryResponse(response)

        self._raise_for_status(operation, response, request_id)
        return self._decode(operation, response, request_id, started)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


class AsyncTransport(_BaseTransport):
    """Awaitable transport over httpx.AsyncClient."""

    def __init__(self, configuration: Configuration, http_client: Optional[httpx.AsyncClient] = None):
        super().__init__(configuration)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=configuration.timeout)

    async def call(self, operation: Operation, body: Any = None, query: Any = None,
                   path_params: Optional[Mapping[str, Any]] = None) -> Any:
        request_id = uuid.uuid4().hex[:8]
        started = time.time()

        with ExitStack() as stack:
            request = self._build_request(self._client, operation, body, query, path_params, stack)
            logger.debug(f"[{request_id}] {request.method} {request.url.path} ({operation.content_type.value})")
            try:
                response = await self._client.send(request, stream=operation.binary)
            except httpx.HTTPError as e:
                raise self._network_error(operation, request, e, request_id) from e

        if operation.binary:
            if not response.is_success:
                await response.aread()
                await response.aclose()
            self._raise_for_status(operation, response, request_id)
            return AsyncBinaryResponse(response)

        self._raise_for_status(operation, response, request_id)
        return self._decode(operation, response, request_id, started)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
