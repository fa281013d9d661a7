"""HTTP client for the remote projectile computation service."""

import logging

import requests

from config import REQUEST_TIMEOUT, SERVICE_URL
from errors import ServiceError, TransportError
from simulation import SimulationParameters, SimulationResult

logger = logging.getLogger(__name__)


class SimulationClient:
    """Posts simulation parameters and decodes the returned trajectory.

    ``timeout`` is in seconds; None, 0 or a negative value waits
    indefinitely, matching the service's own behaviour for long
    integrations.
    """

    def __init__(self, url=SERVICE_URL, timeout=REQUEST_TIMEOUT, session=None):
        self.url = url
        self.timeout = timeout if timeout is not None and timeout > 0 else None
        self._session = session if session is not None else requests.Session()

    def run(self, parameters: SimulationParameters) -> SimulationResult:
        """Run one simulation on the service.

        Raises:
            ServiceError: the service answered with a non-2xx status.
            TransportError: the request failed or the body was malformed.
        """
        payload = parameters.to_payload()
        logger.debug("POST %s %s", self.url, payload)
        try:
            response = self._session.post(
                self.url, json=payload, timeout=self.timeout,
            )
        except (requests.RequestException, ValueError) as exc:
            # urllib3 rejects unusable timeouts or URLs with a plain ValueError
            raise TransportError(str(exc)) from exc

        if not 200 <= response.status_code < 300:
            raise ServiceError(response.status_code, response.reason)

        try:
            return SimulationResult.from_payload(response.json())
        except ValueError as exc:
            raise TransportError(f"Malformed response: {exc}") from exc
