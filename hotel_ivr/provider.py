"""Twilio account access for outbound provider calls.

The dialogue itself only answers webhooks; anything that has to call the
Twilio REST API (call updates, transfers) goes through a TwilioProvider
built from explicit credentials rather than process-wide globals.
"""

from __future__ import annotations

import logging

from twilio.rest import Client

log = logging.getLogger("hotel_ivr.provider")


class ProviderNotConfigured(RuntimeError):
    """Twilio credentials were not supplied."""


class TwilioProvider:
    """Lazily builds an authenticated Twilio REST client."""

    def __init__(self, account_sid: str, auth_token: str) -> None:
        self._account_sid = account_sid
        self._auth_token = auth_token
        self._client: Client | None = None

    @property
    def configured(self) -> bool:
        return bool(self._account_sid and self._auth_token)

    @property
    def account_sid(self) -> str:
        return self._account_sid

    @property
    def client(self) -> Client:
        """The Twilio client; created on first use."""
        if not self.configured:
            raise ProviderNotConfigured(
                "TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN must be set for outbound calls"
            )
        if self._client is None:
            self._client = Client(self._account_sid, self._auth_token)
            log.info("Twilio client created for account %s", self._account_sid[:6] + "***")
        return self._client
