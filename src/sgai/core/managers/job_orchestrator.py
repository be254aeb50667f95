"""JobOrchestrator: submits a job and tracks it to completion.

Responsibilities:
1. POST the job body to its submit path.
2. Return at once when the server already finished the job synchronously.
3. Otherwise extract the job identifier and drive the `Poller`.
4. Normalize the terminal payload (single-level result hoisting).
"""

from __future__ import annotations

from typing import Any, Dict, Optional

from sgai.core.exceptions import MissingIdentifierError
from sgai.core.interfaces.observers import PollObserver
from sgai.core.interfaces.transport import TransportPort
from sgai.core.managers.poller import Poller
from sgai.core.managers.result_normalizer import unwrap_result
from sgai.core.managers.status_classifier import DEFAULT_CLASSIFIER, StatusClassifier
from sgai.core.models.job import JobPayload, TransportResult, as_job_payload
from sgai.core.settings import logger


class JobOrchestrator:
    def __init__(
        self,
        transport: TransportPort,
        poller: Poller,
        classifier: StatusClassifier = DEFAULT_CLASSIFIER,
    ) -> None:
        self._transport = transport
        self._poller = poller
        self._classifier = classifier

    async def submit_and_poll(
        self,
        submit_path: str,
        api_key: str,
        body: Dict[str, Any],
        id_field: str,
        on_poll: Optional[PollObserver] = None,
    ) -> TransportResult[JobPayload]:
        """Submit a job and return its normalized terminal payload.

        Elapsed time is the submit call plus every poll; it is the submit time
        alone when the job completed synchronously.

        Raises:
            MissingIdentifierError: pending response without a string `id_field`
            JobFailedError, PollingTimeoutError: from the poller
            SgaiError: any transport failure, unchanged
        """
        submitted = await self._transport.send("POST", submit_path, api_key, body)
        response = as_job_payload(submitted.data)
        status = response.get("status")

        if self._classifier.is_done(status):
            logger.debug("[job:submit] completed synchronously path=%s status=%s", submit_path, status)
            return TransportResult(data=unwrap_result(response), elapsed_ms=submitted.elapsed_ms)

        job_id = response.get(id_field)
        if not isinstance(job_id, str):
            logger.debug(
                "[job:submit] no %s in pending response path=%s keys=%s",
                id_field,
                submit_path,
                list(response.keys())[:8],
            )
            raise MissingIdentifierError(id_field)

        logger.debug("[job:submit] accepted path=%s %s=%s status=%s", submit_path, id_field, job_id, status)
        polled = await self._poller.poll_until_terminal(submit_path, job_id, api_key, on_poll)
        return TransportResult(
            data=unwrap_result(polled.data),
            elapsed_ms=submitted.elapsed_ms + polled.elapsed_ms,
        )
