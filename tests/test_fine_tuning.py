"""
Tests for fine-tuning jobs and their auto-or-number hyperparameters.
"""

import pytest

from openaiwire import AUTO, BuildError, DecodeError, decode, encode
from openaiwire.fine_tuning import (
    FineTuningJob,
    FineTuningJobCreateRequest,
    FineTuningJobStatus,
    FineTuningListQuery,
    FineTuningModel,
    Hyperparameters,
)

JOB = {
    "object": "fine_tuning.job",
    "id": "ftjob-abc123",
    "model": "gpt-3.5-turbo-0125",
    "created_at": 1614807352,
    "fine_tuned_model": None,
    "organization_id": "org-123",
    "result_files": [],
    "status": "queued",
    "validation_file": None,
    "training_file": "file-abc123",
    "hyperparameters": {"n_epochs": "auto", "batch_size": 4, "learning_rate_multiplier": 0.5},
}


@pytest.mark.unit
class TestHyperparameters:
    """Each hyperparameter is either the string "auto" or a bare number."""

    def test_auto_serialises_as_string(self):
        assert encode(Hyperparameters.builder().n_epochs(AUTO).build()) == {"n_epochs": "auto"}

    def test_number_serialises_as_bare_number(self):
        assert encode(Hyperparameters.builder().n_epochs(4).build()) == {"n_epochs": 4}

    def test_auto_helper(self):
        expected = {"batch_size": "auto", "learning_rate_multiplier": "auto", "n_epochs": "auto"}
        assert encode(Hyperparameters.auto()) == expected
        assert encode(Hyperparameters.builder().auto().build()) == expected

    def test_of_helper_skips_unset(self):
        assert encode(Hyperparameters.of(n_epochs=3, learning_rate_multiplier=0.1)) == {
            "n_epochs": 3,
            "learning_rate_multiplier": 0.1,
        }

    def test_mixed_values(self):
        hyperparameters = Hyperparameters.builder().n_epochs(AUTO).batch_size(8).learning_rate_multiplier(2.0).build()
        assert encode(hyperparameters) == {"n_epochs": "auto", "batch_size": 8, "learning_rate_multiplier": 2.0}

    @pytest.mark.parametrize("value", [0, -1, "sometimes"])
    def test_invalid_values_are_rejected(self, value):
        with pytest.raises(BuildError):
            Hyperparameters.builder().n_epochs(value).build()

    def test_decode_both_cases(self):
        hyperparameters = decode(Hyperparameters, JOB["hyperparameters"])
        assert hyperparameters.n_epochs == "auto"
        assert hyperparameters.batch_size == 4


@pytest.mark.unit
class TestFineTuningJobs:
    """Fine-tuning requests and the resource."""

    def test_create_request(self):
        request = FineTuningJobCreateRequest.builder() \
            .model(FineTuningModel.GPT_3_5_TURBO) \
            .training_file("file-abc123") \
            .hyperparameters(Hyperparameters.of(n_epochs=2)) \
            .suffix("custom-model-name") \
            .build()

        assert encode(request) == {
            "model": "gpt-3.5-turbo",
            "training_file": "file-abc123",
            "hyperparameters": {"n_epochs": 2},
            "suffix": "custom-model-name",
        }

    def test_training_file_is_required(self):
        with pytest.raises(BuildError) as exc_info:
            FineTuningJobCreateRequest.builder().model("gpt-3.5-turbo").build()
        assert exc_info.value.field == "training_file"

    def test_unknown_status(self):
        with pytest.raises(DecodeError) as exc_info:
            decode(FineTuningJob, dict(JOB, status="paused"))
        assert exc_info.value.field == "status"

    def test_resource(self, client, fake_api):
        events = {
            "object": "list",
            "data": [{
                "object": "fine_tuning.job.event",
                "id": "ft-event-1",
                "created_at": 1614807352,
                "level": "info",
                "message": "Job enqueued",
            }],
            "has_more": False,
        }
        fake_api.respond("POST", "/fine_tuning/jobs", JOB)
        fake_api.respond("GET", "/fine_tuning/jobs", {"object": "list", "data": [JOB], "has_more": False})
        fake_api.respond("GET", "/fine_tuning/jobs/ftjob-abc123", dict(JOB, status="running"))
        fake_api.respond("POST", "/fine_tuning/jobs/ftjob-abc123/cancel", dict(JOB, status="cancelled"))
        fake_api.respond("GET", "/fine_tuning/jobs/ftjob-abc123/events", events)

        request = FineTuningJobCreateRequest.builder().model("gpt-3.5-turbo").training_file("file-abc123").build()
        assert client.fine_tuning_jobs.create(request).status is FineTuningJobStatus.QUEUED
        assert len(client.fine_tuning_jobs.list(FineTuningListQuery(limit=2)).data) == 1
        assert fake_api.last_request.url.params["limit"] == "2"
        assert client.fine_tuning_jobs.retrieve("ftjob-abc123").status is FineTuningJobStatus.RUNNING
        assert client.fine_tuning_jobs.cancel("ftjob-abc123").status is FineTuningJobStatus.CANCELLED
        assert client.fine_tuning_jobs.list_events("ftjob-abc123").data[0].message == "Job enqueued"
        assert "OpenAI-Beta" not in fake_api.last_request.headers
