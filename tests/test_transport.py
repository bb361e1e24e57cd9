"""
Tests for the HTTP transport: headers, paths, error surfacing and logging.
"""

import logging

import httpx
import pytest

from openaiwire import BuildError, DecodeError, OpenAIClient, TransportError
from openaiwire._operations import ContentType, MultipartForm, Operation
from openaiwire.chat import ChatCompletion
from openaiwire.moderations import ModerationsRequest

MODERATION = {"id": "modr-1", "model": "text-moderation-007", "results": []}


@pytest.mark.unit
class TestRequests:
    """Outgoing request shape."""

    def test_auth_and_organization_headers(self, client, fake_api):
        fake_api.respond("POST", "/moderations", MODERATION)

        client.moderations.create("hello")

        headers = fake_api.last_request.headers
        assert headers["Authorization"] == "Bearer sk-test"
        assert headers["OpenAI-Organization"] == "org-test"

    def test_resources_share_one_transport(self, client):
        names = ["chat_completions", "assistants", "threads", "messages", "runs", "run_steps",
                 "images", "audio", "fine_tuning_jobs", "moderations"]
        assert all(getattr(client, name)._transport is client._transport for name in names)

    def test_organization_is_optional(self, fake_api):
        from openaiwire import Configuration

        configuration = Configuration.builder().api_key("sk-test").base_url("https://api.test/v1/").build()
        fake_api.respond("POST", "/moderations", MODERATION)
        http_client = httpx.Client(transport=httpx.MockTransport(fake_api.handler))

        with OpenAIClient(configuration, http_client=http_client) as client:
            client.moderations.create("hello")

        assert "OpenAI-Organization" not in fake_api.last_request.headers
        assert str(fake_api.last_request.url) == "https://api.test/v1/moderations"

    def test_timeout_is_applied_per_request(self, client, fake_api):
        fake_api.respond("POST", "/moderations", MODERATION)

        client.moderations.create("hello")

        assert fake_api.last_request.extensions["timeout"]["read"] == 120.0

    def test_path_parameters_are_quoted(self, client, fake_api):
        # url.path is percent-decoded, raw_path is what went on the wire
        fake_api.respond("GET", "/threads/a/b", {"id": "a/b", "created_at": 1})

        client.threads.retrieve("a/b")

        assert fake_api.last_request.url.raw_path == b"/v1/threads/a%2Fb"

    def test_missing_path_parameter(self):
        operation = Operation("GET", "/threads/{thread_id}/runs/{run_id}", ChatCompletion, ContentType.NONE)
        with pytest.raises(BuildError) as exc_info:
            operation.resolve_path({"thread_id": "thread_1"})
        assert exc_info.value.field == "run_id"

    def test_multipart_operation_requires_a_form(self, client):
        operation = Operation("POST", "/images/edits", ChatCompletion, ContentType.MULTIPART)
        with pytest.raises(BuildError):
            client._transport.call(operation, body=ModerationsRequest.of("not a form"))

    def test_multipart_form_skips_none_and_flattens_booleans(self):
        form = MultipartForm().add_field("a", None).add_field("b", True).add_field("c", 3)
        assert form.fields == {"b": "true", "c": "3"}


@pytest.mark.unit
class TestErrors:
    """Failures surface as typed errors and are never retried."""

    def test_error_status_carries_body_and_message(self, client, fake_api):
        body = {"error": {"message": "Incorrect API key provided", "type": "invalid_request_error"}}
        fake_api.respond("POST", "/moderations", body, status_code=401)

        with pytest.raises(TransportError) as exc_info:
            client.moderations.create("hello")

        error = exc_info.value
        assert error.status_code == 401
        assert "Incorrect API key provided" in str(error)
        assert "invalid_request_error" in error.body
        assert error.method == "POST"
        assert error.url == "https://api.test/v1/moderations"
        assert len(fake_api.requests) == 1

    def test_error_status_with_plain_body(self, client, fake_api):
        fake_api.respond("POST", "/moderations", text="Bad Gateway", status_code=502)

        with pytest.raises(TransportError) as exc_info:
            client.moderations.create("hello")

        assert exc_info.value.status_code == 502
        assert exc_info.value.body == "Bad Gateway"

    def test_malformed_json(self, client, fake_api):
        fake_api.respond("POST", "/moderations", text="{not json", headers={"content-type": "application/json"})

        with pytest.raises(TransportError, match="malformed JSON") as exc_info:
            client.moderations.create("hello")
        assert exc_info.value.body == "{not json"

    def test_network_failure(self, client, fake_api):
        fake_api.fail("POST", "/moderations")

        with pytest.raises(TransportError) as exc_info:
            client.moderations.create("hello")

        assert exc_info.value.status_code is None
        assert "ConnectError" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    def test_timeout_failure(self, client, fake_api):
        fake_api.fail("POST", "/moderations", httpx.ReadTimeout)

        with pytest.raises(TransportError, match="ReadTimeout"):
            client.moderations.create("hello")

    def test_wrong_shape_is_a_decode_error(self, client, fake_api):
        fake_api.respond("POST", "/moderations", {"id": "modr-1"})

        with pytest.raises(DecodeError) as exc_info:
            client.moderations.create("hello")

        assert exc_info.value.field == "model"
        assert exc_info.value.context == "POST /moderations"


@pytest.mark.unit
class TestLogging:
    """Exchanges are logged with a request id and without credentials."""

    def test_debug_log_never_contains_api_key(self, client, fake_api, caplog):
        fake_api.respond("POST", "/moderations", MODERATION)

        with caplog.at_level(logging.DEBUG, logger="openaiwire"):
            client.moderations.create("hello")

        messages = [record.getMessage() for record in caplog.records if record.name == "openaiwire.http"]
        assert any("POST /v1/moderations" in message for message in messages)
        assert all(message.startswith("[") for message in messages)
        assert "sk-test" not in caplog.text

    def test_error_is_logged_as_warning(self, client, fake_api, caplog):
        fake_api.respond("POST", "/moderations", {"error": {"message": "slow down"}}, status_code=429)

        with caplog.at_level(logging.WARNING, logger="openaiwire"):
            with pytest.raises(TransportError):
                client.moderations.create("hello")

        assert any(record.levelno == logging.WARNING and "429" in record.getMessage() for record in caplog.records)

    def test_configuration_repr_hides_api_key(self, configuration):
        assert "sk-test" not in repr(configuration)
