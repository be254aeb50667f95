"""Generic synchronous-or-polled endpoint call.

An `Endpoint` describes everything that differs between API operations:
path, method, request/response models and, for long-running jobs, the name
of the identifier field to poll with. `EndpointCaller.call` interprets it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Literal, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ValidationError

from sgai.core.config import ClientConfig
from sgai.core.interfaces.observers import PollObserver
from sgai.core.interfaces.transport import HttpMethod, TransportPort
from sgai.core.managers.envelope_builder import run_enveloped
from sgai.core.managers.job_orchestrator import JobOrchestrator
from sgai.core.models.envelope import ApiResult
from sgai.core.models.params import RequestParams
from sgai.core.settings import logger


@dataclass(frozen=True)
class Endpoint:
    name: str
    path: str
    response_model: Type[BaseModel]
    method: HttpMethod = "POST"
    params_model: Optional[Type[RequestParams]] = None
    # set for endpoints whose jobs may need polling
    id_field: Optional[str] = None
    root: Literal["api", "health"] = "api"

    @property
    def pollable(self) -> bool:
        return self.id_field is not None


ParamsInput = Union[RequestParams, Mapping[str, Any], None]


class EndpointCaller:
    def __init__(
        self,
        transport: TransportPort,
        orchestrator: JobOrchestrator,
        config: ClientConfig,
    ) -> None:
        self._transport = transport
        self._orchestrator = orchestrator
        self.config = config

    async def call(
        self,
        endpoint: Endpoint,
        api_key: str,
        params: ParamsInput = None,
        on_poll: Optional[PollObserver] = None,
        path_suffix: str = "",
        query: Optional[Dict[str, str]] = None,
    ) -> ApiResult[Any]:
        async def operation() -> Tuple[Any, int]:
            body = self._build_body(endpoint, params)
            path = f"{endpoint.path}{path_suffix}"
            if endpoint.pollable:
                outcome = await self._orchestrator.submit_and_poll(
                    path, api_key, body or {}, endpoint.id_field, on_poll
                )
            else:
                base_url = self.config.health_url if endpoint.root == "health" else None
                outcome = await self._transport.send(
                    endpoint.method, path, api_key, body, base_url=base_url, query=query
                )
            return self._shape(endpoint, outcome.data), outcome.elapsed_ms

        logger.debug("[endpoint] %s %s %s%s", endpoint.name, endpoint.method, endpoint.path, path_suffix)
        return await run_enveloped(operation, name=endpoint.name)

    def _build_body(self, endpoint: Endpoint, params: ParamsInput) -> Optional[Dict[str, Any]]:
        if endpoint.method == "GET":
            # GET requests carry no body
            return None
        if endpoint.params_model is None:
            return dict(params) if params else None
        if isinstance(params, endpoint.params_model):
            return params.to_body()
        return endpoint.params_model.model_validate(params or {}).to_body()

    def _shape(self, endpoint: Endpoint, payload: Any) -> Any:
        """Type a successful payload, or keep it as received when it does not fit.

        The server is the source of truth for response shapes, so a payload
        that completed successfully is never turned into an error here.
        Non-object payloads still fail validation.
        """
        try:
            return endpoint.response_model.model_validate(payload)
        except ValidationError as exc:
            if not isinstance(payload, dict):
                raise
            logger.warning(
                "[endpoint] %s response does not match %s, returning raw payload: %s",
                endpoint.name,
                endpoint.response_model.__name__,
                exc.errors(include_url=False),
            )
            return payload
