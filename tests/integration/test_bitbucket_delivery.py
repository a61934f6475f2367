"""Bitbucket reports client tests against a mock transport."""

from __future__ import annotations

import base64

import httpx
import orjson
import pytest

from sarif_factory import dump_sarif, make_result, make_rule, make_sarif

from sarifbridge.config.models import BitbucketCredentials, BitbucketTarget, ReportPolicy
from sarifbridge.delivery.bitbucket import BitbucketReportsClient
from sarifbridge.engine import convert
from sarifbridge.errors import ConfigurationError, DeliveryError

API_URL = "https://api.bitbucket.example/2.0/repositories"
REPORT_PATH = "/2.0/repositories/acme/web/commit/abc123/reports/semgreposs"


def _report(results: list[dict] | None = None):  # noqa: ANN202
    if results is None:
        results = [make_result("sqli", uri="src/db.py", start_line=7)]
    document = make_sarif(results, rules=[make_rule("sqli", full="SQL injection")])
    return convert(dump_sarif(document), cwd="/repo")


def _target() -> BitbucketTarget:
    return BitbucketTarget(workspace="acme", repo="web", commit="abc123")


def _client(handler, credentials: BitbucketCredentials | None = None) -> BitbucketReportsClient:  # noqa: ANN001
    return BitbucketReportsClient(
        credentials=credentials or BitbucketCredentials(token="tok-123"),
        target=_target(),
        api_url=API_URL,
        transport=httpx.MockTransport(handler),
    )


def test_publish_replaces_report_then_uploads_annotations() -> None:
    """Delete, create and annotate run in order with bearer auth."""
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if request.method == "DELETE":
            return httpx.Response(404)
        return httpx.Response(200, json={})

    with _client(handler) as client:
        client.publish(_report())

    assert [(call.method, call.url.path) for call in calls] == [
        ("DELETE", REPORT_PATH),
        ("PUT", REPORT_PATH),
        ("POST", f"{REPORT_PATH}/annotations"),
    ]
    assert all(call.headers["Authorization"] == "Bearer tok-123" for call in calls)

    report_body = orjson.loads(calls[1].content)
    assert report_body["title"] == "Semgrep OSS Security Scan"
    assert report_body["report_type"] == "SECURITY"
    assert report_body["result"] == "FAILED"
    assert report_body["details"].startswith("Security Scan Summary")

    [annotation] = orjson.loads(calls[2].content)
    assert annotation["severity"] == "CRITICAL"
    assert annotation["path"] == "src/db.py"
    assert annotation["line"] == 7
    assert "rule_id" not in annotation


def test_basic_auth_is_used_without_token() -> None:
    """User and app password authenticate with HTTP basic auth."""
    headers: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        headers.append(request.headers["Authorization"])
        return httpx.Response(200, json={})

    credentials = BitbucketCredentials(user="ci-bot", app_password="app-pass")
    with _client(handler, credentials) as client:
        client.publish(_report())

    expected = "Basic " + base64.b64encode(b"ci-bot:app-pass").decode("ascii")
    assert headers and all(value == expected for value in headers)


def test_empty_report_skips_annotation_upload() -> None:
    """No annotations means no POST request."""
    methods: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        methods.append(request.method)
        return httpx.Response(204)

    with _client(handler) as client:
        client.publish(_report([]))

    assert methods == ["DELETE", "PUT"]


def test_http_errors_raise_redacted_delivery_error() -> None:
    """Rejected requests surface as DeliveryError without leaking secrets."""

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "PUT":
            return httpx.Response(401, text="bad credentials tok-123")
        return httpx.Response(204)

    with _client(handler) as client:
        with pytest.raises(DeliveryError) as excinfo:
            client.publish(_report())

    assert excinfo.value.status_code == 401
    assert "tok-123" not in str(excinfo.value)
    assert "[REDACTED]" in str(excinfo.value)


def test_transport_errors_raise_delivery_error() -> None:
    """Network failures are not retried and surface as DeliveryError."""
    attempts: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        attempts.append(request.method)
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(DeliveryError):
            client.publish(_report())

    assert attempts == ["DELETE"]


def test_incomplete_configuration_is_rejected() -> None:
    """The client refuses to start without credentials."""
    with pytest.raises(ConfigurationError):
        BitbucketReportsClient(
            credentials=BitbucketCredentials(),
            target=_target(),
            api_url=API_URL,
        )


def test_annotations_are_uploaded_in_batches_of_one_hundred() -> None:
    """Large reports are split into several annotation requests in order."""
    bodies: list[list[dict]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "POST":
            bodies.append(orjson.loads(request.content))
        return httpx.Response(200, json={})

    results = [make_result(f"r{index}", start_line=index + 1) for index in range(250)]
    report = convert(
        dump_sarif(make_sarif(results)), ReportPolicy(max_annotations=250), cwd="/repo"
    )
    with _client(handler) as client:
        client.publish(report)

    assert [len(body) for body in bodies] == [100, 100, 50]
    sent_ids = [item["external_id"] for body in bodies for item in body]
    assert sent_ids == [annotation.external_id for annotation in report.annotations]
