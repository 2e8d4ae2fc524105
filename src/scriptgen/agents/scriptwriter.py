"""Scriptwriter agent: competitive analysis and series continuation."""

import asyncio
from typing import Any, List, Union

from pydantic import ValidationError

from ..budget import SceneBudget, scene_budget
from ..errors import InvalidAIResponseError
from ..inspection import inspect_script
from ..models import (
    AnalysisRequest,
    GenerationPayload,
    GenerationResult,
    SeriesBible,
    SeriesRequest,
    new_result_id,
)
from .base import BaseAgent
from .directives import build_directive


class ScriptwriterAgent(BaseAgent[Union[AnalysisRequest, SeriesRequest], GenerationResult]):
    """Agent that turns a generation request into a validated script.

    Assembly, the model call and validation run strictly in sequence. The
    only concurrent step is encoding reference images, which completes
    before the model is invoked.
    """

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "ScriptwriterAgent"

    async def run(self, input_data: Union[AnalysisRequest, SeriesRequest]) -> GenerationResult:
        """Generate a script for the request.

        Args:
            input_data: An analysis or series request.

        Returns:
            GenerationResult with its series bible attached.

        Raises:
            RequestError: If the request is not a supported mode.
            InvalidAIResponseError: If the response does not match the output contract.
        """
        budget = scene_budget(input_data.duration_minutes)
        self._logger.info(
            f"Generating {input_data.mode} script: {input_data.duration_minutes} min, "
            f"{budget.min}-{budget.max} scenes (target {budget.target})"
        )

        directive = build_directive(input_data, budget)
        images = await self._encode_images(input_data)

        response = await self._generate(directive.prompt, directive.schema, images)
        payload = self._parse_payload(response)

        result = self._map_result(input_data, payload)
        self._report(result, budget)

        self._logger.info(
            f"Generated {result.id} with {len(result.optimized_script.scenes())} scenes"
        )
        return result

    async def _encode_images(self, request: Union[AnalysisRequest, SeriesRequest]) -> List[Any]:
        """Encode reference images concurrently, preserving their order."""
        if not isinstance(request, AnalysisRequest) or not request.reference_images:
            return []

        self._logger.debug(f"Encoding {len(request.reference_images)} reference image(s)")
        return list(await asyncio.gather(*(
            asyncio.to_thread(self._client.encode_image, image)
            for image in request.reference_images
        )))

    def _parse_payload(self, response: str) -> GenerationPayload:
        """Validate the raw response against the output contract.

        Raises:
            InvalidAIResponseError: If the response is not valid JSON or misses required fields.
        """
        data = self._parse_json(response)

        try:
            return GenerationPayload.model_validate(data)
        except ValidationError as e:
            self._logger.error(
                f"Response does not match the output contract ({e.error_count()} error(s)): {e}"
            )
            self._logger.debug(f"Raw response: {response}")
            raise InvalidAIResponseError(
                details={"reason": f"{e.error_count()} schema violation(s)"}
            ) from e

    def _map_result(
        self,
        request: Union[AnalysisRequest, SeriesRequest],
        payload: GenerationPayload,
    ) -> GenerationResult:
        """Attach the series bible and a fresh id to a validated payload."""
        if isinstance(request, SeriesRequest):
            # The input bible is the source of truth, whatever the model wrote.
            bible = request.bible
        else:
            bible = SeriesBible.from_overview(payload.optimized_script.overview)

        return GenerationResult.from_payload(
            payload,
            result_id=new_result_id(request.mode),
            series_bible=bible,
        )

    def _report(self, result: GenerationResult, budget: SceneBudget) -> None:
        report = inspect_script(result.optimized_script, budget, result.series_bible)
        for warning in report.warnings:
            self._logger.warning(f"{result.id}: {warning}")
