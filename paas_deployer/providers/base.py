"""
Shared base class for provider pipelines.

BaseProvider owns the per-run state every provider needs (request, status,
dry-run flag, cancel hook) and the phase bookkeeping: each phase is logged
before it starts, checked against the cancel hook, and any collaborator
error raised inside it is re-raised as RemoteOperationError naming the phase.

Subclasses implement _run() (the ordered remote calls) and return the
user-facing output from it.
"""

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from paas_deployer.core.exceptions import (
    DeploymentCancelledError,
    DeploymentError,
    RemoteOperationError,
)
from paas_deployer.core.models import DeploymentRequest, Status
from paas_deployer.logger import logger


class BaseProvider:
    """
    Base class for DeploymentProvider implementations.

    Attributes:
        name: Registry identifier (e.g. "elastic_beanstalk")
        display_name: Prefix for status log lines (e.g. "Beanstalk")
    """

    name: str = "default"
    display_name: str = "Provider"

    def __init__(
        self,
        request: DeploymentRequest,
        dry_run: bool = False,
        cancel_event: Optional[threading.Event] = None
    ):
        self._request = request
        self._status = Status()
        self._dry_run = dry_run
        self._cancel_event = cancel_event
        self._executed = False
        self._output = ""

    @property
    def request(self) -> DeploymentRequest:
        return self._request

    @property
    def status(self) -> Status:
        return self._status

    @property
    def dry_run(self) -> bool:
        return self._dry_run

    def log(self, message: str) -> None:
        """Append a progress line to the status and mirror it to the logger."""
        line = f"{self.display_name}: {message}"
        self._status.append(line)
        logger.info(line)

    def execute(self) -> None:
        """
        Run the deploy workflow.

        In dry-run mode a single confirmation line is logged and no remote
        call is made.

        Each call starts a fresh run: status, output and per-run caches from
        an earlier call are discarded, so a re-run after a failure is never
        reported with the previous run's result.

        Raises:
            RemoteOperationError: If any phase fails
            DeploymentCancelledError: If the cancel hook is set between phases
        """
        self._reset()
        if self._dry_run:
            self.log(f"Dry run for {self._request.repository_identifier}@{self._request.commit_sha}, "
                     "no remote changes made")
        else:
            self._output = self._run()
            self._status.output = self._output
        self._executed = True

    def notify(self) -> None:
        """
        Mark the run successful with the composed output.

        Raises:
            DeploymentError: If execute() has not completed successfully
        """
        if not self._executed:
            raise DeploymentError(
                "notify() called before a successful execute()", provider=self.name
            )
        self._status.succeed(self._output)

    def _reset(self) -> None:
        """Drop all per-run state. Subclasses clear their own caches too."""
        self._status = Status()
        self._executed = False
        self._output = ""

    def _run(self) -> str:
        raise NotImplementedError

    @contextmanager
    def phase(self, phase_name: str, message: str) -> Iterator[None]:
        """
        Run one named phase.

        Checks the cancel hook, logs the message, and wraps any failure
        (collaborator errors, local disk errors, malformed SDK responses)
        into RemoteOperationError carrying the phase name.
        """
        if self._cancel_event is not None and self._cancel_event.is_set():
            raise DeploymentCancelledError(phase_name, provider=self.name)

        self.log(message)
        try:
            yield
        except (RemoteOperationError, DeploymentCancelledError):
            raise
        except Exception as e:
            logger.error(f"{self.display_name}: {phase_name} failed: {e!r}")
            raise RemoteOperationError(phase_name, e, provider=self.name) from e
