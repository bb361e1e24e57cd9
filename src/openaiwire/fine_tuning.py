"""
Fine-tuning jobs.
"""

from typing import Literal, Optional, Tuple, Union

from pydantic import NonNegativeInt

from ._builder import RequestBuilder, model_id
from ._operations import ContentType, Operation, Resource
from ._wire import AUTO, AutoOrFloat, AutoOrInt, WireEnum, WireModel
from .common import ListResponse


class FineTuningModel(WireEnum):
    GPT_3_5_TURBO = "gpt-3.5-turbo"
    BABBAGE_002 = "babbage-002"
    DAVINCI_002 = "davinci-002"
    GPT_4O_MINI = "gpt-4o-mini-2024-07-18"


class FineTuningJobStatus(WireEnum):
    VALIDATING_FILES = "validating_files"
    QUEUED = "queued"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    CANCELLED = "cancelled"


class Hyperparameters(WireModel):
    """Training hyperparameters; each is either "auto" or an explicit number."""

    batch_size: Optional[AutoOrInt] = None
    learning_rate_multiplier: Optional[AutoOrFloat] = None
    n_epochs: Optional[AutoOrInt] = None

    @classmethod
    def builder(cls) -> "HyperparametersBuilder":
        return HyperparametersBuilder()

    @classmethod
    def auto(cls) -> "Hyperparameters":
        return cls(batch_size=AUTO, learning_rate_multiplier=AUTO, n_epochs=AUTO)

    @classmethod
    def of(cls, n_epochs: int = None, batch_size: int = None,
           learning_rate_multiplier: float = None) -> "Hyperparameters":
        """Explicit values; parameters left as None are not sent."""
        values = {
            "n_epochs": n_epochs,
            "batch_size": batch_size,
            "learning_rate_multiplier": learning_rate_multiplier,
        }
        return cls(**{name: value for name, value in values.items() if value is not None})


class HyperparametersBuilder(RequestBuilder):
    target = Hyperparameters

    def batch_size(self, batch_size: Union[Literal["auto"], int]) -> "HyperparametersBuilder":
        """Number of examples in each batch."""
        return self._set("batch_size", batch_size)

    def learning_rate_multiplier(self, multiplier: Union[Literal["auto"], float]) -> "HyperparametersBuilder":
        return self._set("learning_rate_multiplier", multiplier)

    def n_epochs(self, n_epochs: Union[Literal["auto"], int]) -> "HyperparametersBuilder":
        """Number of full cycles through the training dataset."""
        return self._set("n_epochs", n_epochs)

    def auto(self) -> "HyperparametersBuilder":
        """Let the service choose every hyperparameter."""
        return self.batch_size(AUTO).learning_rate_multiplier(AUTO).n_epochs(AUTO)


class FineTuningJobCreateRequest(WireModel):
    model: str
    training_file: str  # id of an uploaded JSONL file with purpose fine-tune
    hyperparameters: Optional[Hyperparameters] = None
    suffix: Optional[str] = None  # up to 18 characters added to the fine-tuned model name
    validation_file: Optional[str] = None
    seed: Optional[int] = None

    @classmethod
    def builder(cls) -> "FineTuningJobCreateRequestBuilder":
        return FineTuningJobCreateRequestBuilder()


class FineTuningJobCreateRequestBuilder(RequestBuilder):
    target = FineTuningJobCreateRequest

    def model(self, model: Union[str, FineTuningModel]) -> "FineTuningJobCreateRequestBuilder":
        return self._set("model", model_id(model))

    def training_file(self, training_file: str) -> "FineTuningJobCreateRequestBuilder":
        return self._set("training_file", training_file)

    def hyperparameters(self, hyperparameters: Hyperparameters) -> "FineTuningJobCreateRequestBuilder":
        return self._set("hyperparameters", hyperparameters)

    def suffix(self, suffix: str) -> "FineTuningJobCreateRequestBuilder":
        return self._set("suffix", suffix)

    def validation_file(self, validation_file: str) -> "FineTuningJobCreateRequestBuilder":
        return self._set("validation_file", validation_file)

    def seed(self, seed: int) -> "FineTuningJobCreateRequestBuilder":
        return self._set("seed", seed)


class FineTuningJobError(WireModel):
    code: Optional[str] = None
    message: Optional[str] = None
    param: Optional[str] = None


class FineTuningJob(WireModel):
    id: str
    object: str = "fine_tuning.job"
    created_at: NonNegativeInt
    finished_at: Optional[NonNegativeInt] = None
    model: str
    fine_tuned_model: Optional[str] = None
    organization_id: Optional[str] = None
    status: FineTuningJobStatus
    hyperparameters: Optional[Hyperparameters] = None
    training_file: str
    validation_file: Optional[str] = None
    result_files: Tuple[str, ...] = ()
    trained_tokens: Optional[NonNegativeInt] = None
    error: Optional[FineTuningJobError] = None
    seed: Optional[int] = None


class FineTuningJobEvent(WireModel):
    id: str
    object: str = "fine_tuning.job.event"
    created_at: NonNegativeInt
    level: str
    message: str
    type: Optional[str] = None


class FineTuningListQuery(WireModel):
    """Pagination for fine-tuning lists, which only support ``after`` and ``limit``."""

    after: Optional[str] = None
    limit: Optional[int] = None


class FineTuningJobs(Resource):
    CREATE = Operation("POST", "/fine_tuning/jobs", FineTuningJob)
    LIST = Operation("GET", "/fine_tuning/jobs", ListResponse[FineTuningJob], ContentType.NONE)
    RETRIEVE = Operation("GET", "/fine_tuning/jobs/{fine_tuning_job_id}", FineTuningJob, ContentType.NONE)
    CANCEL = Operation("POST", "/fine_tuning/jobs/{fine_tuning_job_id}/cancel", FineTuningJob, ContentType.NONE)
    LIST_EVENTS = Operation("GET", "/fine_tuning/jobs/{fine_tuning_job_id}/events",
                            ListResponse[FineTuningJobEvent], ContentType.NONE)

    def create(self, request: FineTuningJobCreateRequest) -> FineTuningJob:
        """Creates a job that fine-tunes a model from a given dataset."""
        return self._call(self.CREATE, body=request)

    def list(self, query: Optional[FineTuningListQuery] = None) -> ListResponse[FineTuningJob]:
        return self._call(self.LIST, query=query)

    def retrieve(self, fine_tuning_job_id: str) -> FineTuningJob:
        return self._call(self.RETRIEVE, fine_tuning_job_id=fine_tuning_job_id)

    def cancel(self, fine_tuning_job_id: str) -> FineTuningJob:
        """Immediately cancel a fine-tune job."""
        return self._call(self.CANCEL, fine_tuning_job_id=fine_tuning_job_id)

    def list_events(self, fine_tuning_job_id: str,
                    query: Optional[FineTuningListQuery] = None) -> ListResponse[FineTuningJobEvent]:
        return self._call(self.LIST_EVENTS, query=query, fine_tuning_job_id=fine_tuning_job_id)
