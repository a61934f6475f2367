"""Bitbucket Cloud commit-reports client."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from sarifbridge.config.models import AppConfig, BitbucketCredentials, BitbucketTarget
from sarifbridge.constants import ANNOTATION_BATCH_SIZE
from sarifbridge.errors import DeliveryError
from sarifbridge.schemas.report_models import BitbucketReport
from sarifbridge.security.redaction import redact_text

LOGGER = logging.getLogger(__name__)


class BitbucketReportsClient:
    """Replace a commit report and upload its annotations.

    Requests are issued once each; failures surface as ``DeliveryError``.
    """

    def __init__(
        self,
        *,
        credentials: BitbucketCredentials,
        target: BitbucketTarget,
        api_url: str,
        timeout_seconds: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        credentials.validate_complete()
        target.validate_complete()
        self.target = target
        self._secrets = _secret_values(credentials)
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            timeout=timeout_seconds,
            transport=transport,
            **_auth_kwargs(credentials),
        )

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> "BitbucketReportsClient":
        return cls(
            credentials=config.credentials,
            target=config.target,
            api_url=config.delivery.api_url,
            timeout_seconds=config.delivery.timeout_seconds,
            transport=transport,
        )

    def __enter__(self) -> "BitbucketReportsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def report_path(self, scan_id: str) -> str:
        return (
            f"/{self.target.workspace}/{self.target.repo}"
            f"/commit/{self.target.commit}/reports/{scan_id}"
        )

    def publish(self, report: BitbucketReport) -> None:
        """Delete any prior report, create the new one, then add annotations."""
        path = self.report_path(report.scan_id)
        self._request("DELETE", path, allowed_statuses={404})
        self._request("PUT", path, json=report.report_resource())
        annotations = report.annotation_resources()
        if not annotations:
            LOGGER.info("No annotations to upload for %s", report.scan_id)
            return
        # Bitbucket caps the number of annotations per request.
        for start in range(0, len(annotations), ANNOTATION_BATCH_SIZE):
            batch = annotations[start : start + ANNOTATION_BATCH_SIZE]
            self._request("POST", f"{path}/annotations", json=batch)
        LOGGER.info(
            "Uploaded %d annotation(s) to report %s", len(annotations), report.scan_id
        )

    def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any | None = None,
        allowed_statuses: set[int] | None = None,
    ) -> httpx.Response:
        LOGGER.info("%s %s", method, path)
        try:
            response = self._client.request(method, path, json=json)
        except httpx.RequestError as exc:
            raise DeliveryError(
                redact_text(f"{method} {path} failed: {exc}", secrets=self._secrets)
            ) from exc
        if allowed_statuses and response.status_code in allowed_statuses:
            return response
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            body = redact_text(response.text[:500], secrets=self._secrets)
            raise DeliveryError(
                f"{method} {path} returned {response.status_code}: {body}",
                status_code=response.status_code,
            ) from exc
        return response


def _auth_kwargs(credentials: BitbucketCredentials) -> dict[str, Any]:
    if credentials.uses_token:
        assert credentials.token is not None
        token = credentials.token.get_secret_value()
        return {"headers": {"Authorization": f"Bearer {token}"}}
    assert credentials.user is not None and credentials.app_password is not None
    return {"auth": (credentials.user, credentials.app_password.get_secret_value())}


def _secret_values(credentials: BitbucketCredentials) -> list[str]:
    values = [credentials.token, credentials.app_password]
    return [value.get_secret_value() for value in values if value is not None]
