"""Credential update and retry orchestration.

:class:`PingOrchestrator` runs one logical operation against one nation:

.. code-block:: text

    INIT -> SELECTING -> SENT -> INTERPRETING -> DONE
                ^                     |
                +----- RETRYING <-----+   (bad pin, retry enabled, once)

* On success the renewed autologin and pin are folded into the nation's
  credential set and the profile is saved.
* On a bad pin the pin is dropped and the profile saved straight away, so an
  invalidated pin is never sent again.  With ``retry_pin`` the request is
  repeated once, excluding the pin; if nothing else is stored the retry
  ends as a missing credential without a second request.
* Bad autologin/password and any other failure leave the credential set
  alone and are raised to the caller.

The blocking :meth:`PingOrchestrator.run` and the async
:meth:`PingOrchestrator.arun` share every step except the transport send.
Concurrent operations on the *same* nation must be serialised by the caller.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

import httpx

from nationauth.api.payload import NationData
from nationauth.api.request import Request, Shard
from nationauth.auth.authenticator import AuthenticatedCall, authenticate
from nationauth.auth.interpreter import (
    Failure,
    FailureReason,
    Outcome,
    Success,
    interpret,
)
from nationauth.auth.selector import CredentialKind, NoCredential, select_credential
from nationauth.models import ClientConfig, Nation, Profile
from nationauth.store import ProfileStore

if TYPE_CHECKING:
    from nationauth.client import AsyncClient, SyncClient

logger = logging.getLogger(__name__)


class AttemptState(str, enum.Enum):
    INIT = "init"
    SELECTING = "selecting"
    SENT = "sent"
    INTERPRETING = "interpreting"
    RETRYING = "retrying"
    DONE = "done"


@dataclass
class _Operation:
    """Mutable state of one logical operation."""

    profile: Profile
    nation: Nation
    request: Request
    state: AttemptState = AttemptState.INIT
    exclude: Optional[CredentialKind] = None
    retried: bool = False
    attempts: int = 0

    def advance(self, state: AttemptState) -> None:
        logger.debug("%s: %s -> %s", self.nation.name, self.state.value, state.value)
        self.state = state


class PingOrchestrator:
    """Drive the select/send/interpret/update cycle for one nation.

    Args:
        store: Where the profile is loaded from and saved to.
        config: Transport settings used to build each call.
        retry_pin: Retry once with the autologin or password when the
            server rejects the stored pin.
        shards: Shards to request.

    Example::

        orchestrator = PingOrchestrator(store, config, retry_pin=True)
        with SyncClient(config) as client:
            data = orchestrator.run(client, "testlandia")
    """

    def __init__(
        self,
        store: ProfileStore,
        config: ClientConfig,
        retry_pin: bool = False,
        shards: tuple[Shard, ...] = (Shard.PING,),
    ) -> None:
        self._store = store
        self._config = config
        self._retry_pin = retry_pin
        self._shards = shards

    # ------------------------------------------------------------------ #
    # Drivers
    # ------------------------------------------------------------------ #

    def run(self, client: SyncClient, name: str) -> NationData:
        """Run the operation with a blocking transport.

        Returns:
            The parsed payload of the successful response.

        Raises:
            AccountNotFoundError: If *name* is not in the profile.
            NoCredentialError: If the nation has no usable credential, or
                none is left once a rejected pin is excluded.
            BadPinError: If the pin was rejected and no retry followed.
            BadAuthError: If the autologin or password was rejected.
            RequestFailedError: For any other non-success status.
            TransportError: On network failure.
            SchemaError: If the response body is malformed.
            ProfileError: If the profile cannot be loaded or saved.
        """
        op = self._begin(name)
        while True:
            prepared = self._prepare(op)
            if isinstance(prepared, Failure):
                outcome: Outcome = prepared
            else:
                outcome = self._receive(op, prepared, client.send(prepared))
            data = self._settle(op, outcome)
            if data is not None:
                return data

    async def arun(self, client: AsyncClient, name: str) -> NationData:
        """Async counterpart of :meth:`run`; the send is the only await point."""
        op = self._begin(name)
        while True:
            prepared = self._prepare(op)
            if isinstance(prepared, Failure):
                outcome: Outcome = prepared
            else:
                outcome = self._receive(op, prepared, await client.send(prepared))
            data = self._settle(op, outcome)
            if data is not None:
                return data

    # ------------------------------------------------------------------ #
    # Steps
    # ------------------------------------------------------------------ #

    def _begin(self, name: str) -> _Operation:
        profile = self._store.load()
        nation = profile.find(name)
        op = _Operation(
            profile=profile,
            nation=nation,
            request=Request(nation.name, self._shards),
        )
        op.advance(AttemptState.SELECTING)
        return op

    def _prepare(self, op: _Operation) -> Union[AuthenticatedCall, Failure]:
        """Select a credential and build the call, or fail without sending."""
        selection = select_credential(op.nation.credentials, exclude=op.exclude)
        if isinstance(selection, NoCredential):
            return Failure(FailureReason.NO_AUTH)
        call = authenticate(op.request, selection, self._config)
        op.attempts += 1
        logger.debug(
            "%s: attempt %d using %s", op.nation.name, op.attempts, call.kind.value
        )
        op.advance(AttemptState.SENT)
        return call

    def _receive(
        self,
        op: _Operation,
        call: AuthenticatedCall,
        response: httpx.Response,
    ) -> Outcome:
        op.advance(AttemptState.INTERPRETING)
        return interpret(response, call.kind)

    def _settle(self, op: _Operation, outcome: Outcome) -> Optional[NationData]:
        """Apply *outcome* to the credential set.

        Returns:
            The payload on success, or ``None`` when the operation should
            go round again with :attr:`_Operation.exclude` set.

        Raises:
            NationAuthError: The surfaced failure.
        """
        credentials = op.nation.credentials

        if isinstance(outcome, Success):
            if outcome.autologin is not None:
                logger.info("%s: stored renewed autologin", op.nation.name)
            if outcome.pin is not None:
                logger.info("%s: stored new session pin", op.nation.name)
            credentials.apply_renewal(autologin=outcome.autologin, pin=outcome.pin)
            self._store.save(op.profile)
            op.advance(AttemptState.DONE)
            return outcome.data

        if outcome.reason is FailureReason.BAD_PIN:
            logger.warning("%s: session pin rejected, discarding it", op.nation.name)
            credentials.invalidate_pin()
            self._store.save(op.profile)
            if self._should_retry(op):
                op.retried = True
                op.exclude = CredentialKind.PIN
                op.advance(AttemptState.RETRYING)
                op.advance(AttemptState.SELECTING)
                return None

        op.advance(AttemptState.DONE)
        raise outcome.to_error()

    def _should_retry(self, op: _Operation) -> bool:
        return self._retry_pin and not op.retried
