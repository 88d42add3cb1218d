"""Randomized local session port and, on named-pipe platforms, the matching local peer address."""

from __future__ import annotations

import logging
import os
import random
from dataclasses import dataclass
from typing import MutableMapping

from desktop_options.platform import PlatformProfile

logger = logging.getLogger(__name__)

PORT_BASE = 8080
PORT_SPAN = 40000
LOCAL_PEER_ENV = "RS_LOCAL_PEER"
PIPE_PREFIX = "\\\\.\\pipe\\"
PIPE_SUFFIX = "-rsession"

_process_random = random.Random()


@dataclass(frozen=True)
class Endpoint:
    """A session port and the local peer derived from it (None where named pipes are not used)."""

    port: int
    local_peer: str | None = None


def local_peer_for_port(port: int) -> str:
    return f"{PIPE_PREFIX}{port}{PIPE_SUFFIX}"


class EndpointNamer:
    """
    Generates the endpoint on first use and keeps it until new_port_number().

    The port is spread over [8080, 48080) so independently launched shells
    rarely pick the same one. On named-pipe platforms the peer is exported
    to RS_LOCAL_PEER in the same step, so child processes started later see
    the address matching the current port.
    """

    def __init__(
        self,
        profile: PlatformProfile,
        rng: random.Random | None = None,
        environ: MutableMapping[str, str] | None = None,
    ) -> None:
        self.profile = profile
        self._rng = rng if rng is not None else _process_random
        self._environ = environ if environ is not None else os.environ
        self._endpoint: Endpoint | None = None

    def _generate(self) -> Endpoint:
        base = self._rng.getrandbits(31)
        port = (base % PORT_SPAN) + PORT_BASE
        if not self.profile.uses_named_pipes:
            return Endpoint(port)
        peer = local_peer_for_port(port)
        self._environ[LOCAL_PEER_ENV] = peer
        return Endpoint(port, peer)

    def endpoint(self) -> Endpoint:
        if self._endpoint is None:
            self._endpoint = self._generate()
            logger.debug("Assigned session endpoint %s", self._endpoint)
        return self._endpoint

    def port_number(self) -> int:
        return self.endpoint().port

    def new_port_number(self) -> int:
        """Discard the current endpoint (e.g. after a bind failure) and generate a fresh one."""
        self._endpoint = None
        return self.port_number()

    def local_peer(self) -> str | None:
        return self.endpoint().local_peer
