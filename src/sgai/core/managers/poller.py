"""Poller: drives a status endpoint until the job reaches a terminal state.

The whole polling session shares one deadline (`ClientConfig.timeout_s`,
measured from entry), independent of the per-request timeout enforced by
the transport. Polls are strictly sequential.
"""

from __future__ import annotations

import inspect
from typing import Optional, Tuple

from sgai.core.config import ClientConfig
from sgai.core.exceptions import DeadlineExceededError, JobFailedError, PollingTimeoutError
from sgai.core.interfaces.observers import PollObserver
from sgai.core.interfaces.poll_policy import PollPolicyPort
from sgai.core.interfaces.transport import TransportPort
from sgai.core.logging_config import job_id_var
from sgai.core.managers.status_classifier import DEFAULT_CLASSIFIER, StatusClassifier
from sgai.core.models.job import Completion, JobPayload, TransportResult, as_job_payload
from sgai.core.settings import logger

JOB_FAILED_FALLBACK = "Job failed"


class Poller:
    """Repeated GET `{status_path}/{job_id}` until success, failure or deadline.

    Scheduling is delegated to a `PollPolicyPort`: poll again while the
    payload classifies as pending, wait a fixed interval between polls, and
    stop before a wait would carry the next poll past the deadline.
    """

    def __init__(
        self,
        transport: TransportPort,
        config: ClientConfig,
        policy: PollPolicyPort,
        classifier: StatusClassifier = DEFAULT_CLASSIFIER,
    ) -> None:
        self._transport = transport
        self.config = config
        self._policy = policy
        self._classifier = classifier

    async def poll_until_terminal(
        self,
        status_path: str,
        job_id: str,
        api_key: str,
        on_poll: Optional[PollObserver] = None,
    ) -> TransportResult[JobPayload]:
        """Return the terminal-success payload and the summed time of all polls.

        Raises:
            JobFailedError: a poll returned a failure status
            PollingTimeoutError: no terminal status before the deadline
            SgaiError: any transport failure, unchanged
        """
        total_ms = 0
        polls = 0

        async def poll_once() -> Tuple[JobPayload, Completion]:
            nonlocal total_ms, polls
            result = await self._transport.send("GET", f"{status_path}/{job_id}", api_key)
            payload = as_job_payload(result.data)
            total_ms += result.elapsed_ms
            polls += 1

            status = payload.get("status")
            await self._notify(on_poll, status, job_id)

            completion = self._classifier.classify(status)
            logger.debug(
                "[job:poll] job_id=%s poll=%s status=%s completion=%s", job_id, polls, status, completion
            )
            if completion is Completion.failure:
                raise JobFailedError(payload.get("error") or JOB_FAILED_FALLBACK, job_id=job_id)
            return payload, completion

        token = job_id_var.set(job_id)
        try:
            payload, _ = await self._policy.run(
                poll_once,
                lambda outcome: outcome[1] is Completion.pending,
                timeout_s=self.config.timeout_s,
                interval_s=self.config.poll_interval_s,
            )
        except DeadlineExceededError:
            logger.warning(
                "[job:poll] deadline reached job_id=%s polls=%s limit=%ss", job_id, polls, self.config.timeout_s
            )
            raise PollingTimeoutError(job_id, self.config.timeout_s) from None
        finally:
            job_id_var.reset(token)

        logger.debug("[job:poll] terminal job_id=%s polls=%s elapsed_ms=%s", job_id, polls, total_ms)
        return TransportResult(data=payload, elapsed_ms=total_ms)

    async def _notify(self, on_poll: Optional[PollObserver], status: Optional[str], job_id: str) -> None:
        """Forward one observed status to the caller's observer."""
        if on_poll is None:
            return
        try:
            outcome = on_poll(status)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:
            logger.error(
                "[observer:error] on_poll failed job_id=%s status=%s error=%s", job_id, status, exc
            )
