"""
Request pipeline for the statistics endpoint.

The endpoint runs an explicit, ordered list of stages. Each stage returns
a StageResult; the first failure stops the pipeline and its error is
raised to the exception handlers. Aggregation is the last stage, so it
only ever sees an authenticated request with a well-formed batch.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from ..auth.service import AuthenticationService
from ..errors import InternalError, InvalidBatch, ServiceError
from ..stats import StatisticsResult, aggregate, validate_batch

logger = logging.getLogger(__name__)


@dataclass
class StageResult:
    """Outcome of a single pipeline stage."""
    ok: bool
    error: Optional[ServiceError] = None

    @classmethod
    def success(cls) -> "StageResult":
        return cls(ok=True)

    @classmethod
    def failure(cls, error: ServiceError) -> "StageResult":
        return cls(ok=False, error=error)


@dataclass
class StatsContext:
    """Values accumulated while a request moves through the pipeline."""
    authorization: Optional[str]
    body: bytes
    identity: Optional[str] = None
    payload: Any = None
    batch: Sequence[Any] = field(default_factory=list)
    result: Optional[StatisticsResult] = None


Stage = Callable[[StatsContext], Awaitable[StageResult]]


class StatsPipeline:
    """
    Ordered validators followed by aggregation.

    Stages, in order:
    1. authenticate   - bearer token present and valid
    2. parse_body     - body is a JSON object
    3. validate_batch - "matrices" is a non-empty list of lists
    4. aggregate      - compute statistics
    """

    def __init__(
        self,
        auth_service: AuthenticationService,
        aggregator: Optional[Callable[[Sequence[Any]], StatisticsResult]] = None,
    ):
        self._auth = auth_service
        self._aggregate = aggregator or aggregate

    @property
    def stages(self) -> List[Tuple[str, Stage]]:
        return [
            ("authenticate", self._authenticate),
            ("parse_body", self._parse_body),
            ("validate_batch", self._validate_batch),
            ("aggregate", self._run_aggregate),
        ]

    async def run(self, authorization: Optional[str], body: bytes) -> StatsContext:
        """
        Run every stage in order.

        Returns:
            The completed context; context.result holds the statistics

        Raises:
            ServiceError: the error of the first failing stage, or
                InternalError if a stage failed unexpectedly
        """
        context = StatsContext(authorization=authorization, body=body)

        for name, stage in self.stages:
            try:
                outcome = await stage(context)
            except Exception as e:
                logger.exception(f"Stage {name} failed unexpectedly: {e}")
                raise InternalError(f"stage {name} failed") from e

            if not outcome.ok:
                logger.debug(f"Stage {name} rejected request: {outcome.error}")
                raise outcome.error

        return context

    async def _authenticate(self, context: StatsContext) -> StageResult:
        result = await self._auth.authenticate(context.authorization)
        if not result.ok:
            return StageResult.failure(result.error)

        context.identity = result.identity
        return StageResult.success()

    async def _parse_body(self, context: StatsContext) -> StageResult:
        try:
            payload = json.loads(context.body or b"null")
        except (ValueError, UnicodeDecodeError):
            return StageResult.failure(InvalidBatch("request body is not valid JSON"))

        if not isinstance(payload, dict):
            return StageResult.failure(InvalidBatch("request body must be a JSON object"))

        context.payload = payload
        return StageResult.success()

    async def _validate_batch(self, context: StatsContext) -> StageResult:
        try:
            context.batch = validate_batch(context.payload.get("matrices"))
        except InvalidBatch as e:
            return StageResult.failure(e)
        return StageResult.success()

    async def _run_aggregate(self, context: StatsContext) -> StageResult:
        context.result = self._aggregate(context.batch)
        logger.info(
            f"Computed statistics for {context.identity}: "
            f"{len(context.batch)} matrices, {context.result.element_count} elements"
        )
        return StageResult.success()
