"""
Moderations: classify whether text violates the usage policies.
"""

from typing import Optional, Tuple, Union

from ._builder import RequestBuilder
from ._operations import Operation, Resource
from ._wire import WireEnum, WireModel, frozen_map


class ModerationModel(WireEnum):
    TEXT_MODERATION_STABLE = "text-moderation-stable"
    TEXT_MODERATION_LATEST = "text-moderation-latest"


class ModerationsRequest(WireModel):
    input: Union[str, Tuple[str, ...]]
    # Service default is text-moderation-latest, upgraded automatically over time
    model: Optional[ModerationModel] = None

    @classmethod
    def builder(cls) -> "ModerationsRequestBuilder":
        return ModerationsRequestBuilder()

    @classmethod
    def of(cls, text: str) -> "ModerationsRequest":
        return cls(input=text)


class ModerationsRequestBuilder(RequestBuilder):
    target = ModerationsRequest

    def input(self, text: Union[str, Tuple[str, ...]]) -> "ModerationsRequestBuilder":
        return self._set("input", text)

    def add_inputs(self, *texts: str) -> "ModerationsRequestBuilder":
        """Classify several texts at once; a single string input set earlier is kept as the first."""
        current = self._values.get("input")
        if isinstance(current, str) and any(text is not None for text in texts):
            self._values["input"] = [current]
        return self._add("input", texts)

    def model(self, model: ModerationModel) -> "ModerationsRequestBuilder":
        return self._set("model", model)


class ModerationResult(WireModel):
    flagged: bool
    categories: frozen_map(bool)
    category_scores: frozen_map(float)

    def flagged_categories(self) -> Tuple[str, ...]:
        return tuple(name for name, flagged in self.categories.items() if flagged)


class ModerationsResponse(WireModel):
    id: str
    model: str
    results: Tuple[ModerationResult, ...] = ()


class Moderations(Resource):
    CREATE = Operation("POST", "/moderations", ModerationsResponse)

    def create(self, request: Union[ModerationsRequest, str]) -> ModerationsResponse:
        if isinstance(request, str):
            request = ModerationsRequest.of(request)
        return self._call(self.CREATE, body=request)
