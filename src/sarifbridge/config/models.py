"""Pydantic models for report policy, delivery target and credentials."""

from __future__ import annotations

from pydantic import Field, SecretStr, field_validator

from sarifbridge.constants import (
    BITBUCKET_API_URL,
    DEFAULT_MAX_ANNOTATIONS,
    DEFAULT_REPORTER,
)
from sarifbridge.errors import ConfigurationError
from sarifbridge.schemas.base import StrictSchemaModel
from sarifbridge.schemas.enums import (
    LineStrategy,
    SeverityStrategy,
    SummaryStrategy,
    normalize_enum_value,
)


class ReportPolicy(StrictSchemaModel):
    """Every option the transformation engine recognizes."""

    max_annotations: int = Field(default=DEFAULT_MAX_ANNOTATIONS, ge=0)
    fail_on_high: bool = False
    fail_on_critical: bool = False
    severity_strategy: SeverityStrategy = SeverityStrategy.KEYWORD
    line_strategy: LineStrategy = LineStrategy.END_FIRST
    summary_strategy: SummaryStrategy = SummaryStrategy.TRUNCATE
    reporter: str = Field(default=DEFAULT_REPORTER, min_length=1)

    @field_validator("severity_strategy", mode="before")
    @classmethod
    def normalize_severity_strategy(cls, value: str | SeverityStrategy) -> SeverityStrategy:
        return normalize_enum_value(SeverityStrategy, value)

    @field_validator("line_strategy", mode="before")
    @classmethod
    def normalize_line_strategy(cls, value: str | LineStrategy) -> LineStrategy:
        return normalize_enum_value(LineStrategy, value)

    @field_validator("summary_strategy", mode="before")
    @classmethod
    def normalize_summary_strategy(cls, value: str | SummaryStrategy) -> SummaryStrategy:
        return normalize_enum_value(SummaryStrategy, value)


class BitbucketCredentials(StrictSchemaModel):
    """Either an access token or a user/app-password pair."""

    token: SecretStr | None = None
    user: str | None = None
    app_password: SecretStr | None = None

    @property
    def uses_token(self) -> bool:
        return self.token is not None and bool(self.token.get_secret_value())

    def validate_complete(self) -> None:
        if self.uses_token:
            return
        if not self.user:
            raise ConfigurationError("Specify either a token or a user")
        if self.app_password is None or not self.app_password.get_secret_value():
            raise ConfigurationError("Specify either a token or an app password")


class BitbucketTarget(StrictSchemaModel):
    """Commit the report is attached to."""

    workspace: str | None = None
    repo: str | None = None
    commit: str | None = None

    def validate_complete(self) -> None:
        missing = [
            name
            for name, value in (
                ("workspace", self.workspace),
                ("repo", self.repo),
                ("commit", self.commit),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(f"Missing target coordinates: {', '.join(missing)}")


class DeliveryConfig(StrictSchemaModel):
    """HTTP settings for the reports API."""

    api_url: str = Field(default=BITBUCKET_API_URL, min_length=1)
    timeout_seconds: float = Field(default=30.0, gt=0)


class AppConfig(StrictSchemaModel):
    """Central application configuration."""

    policy: ReportPolicy = Field(default_factory=ReportPolicy)
    credentials: BitbucketCredentials = Field(default_factory=BitbucketCredentials)
    target: BitbucketTarget = Field(default_factory=BitbucketTarget)
    delivery: DeliveryConfig = Field(default_factory=DeliveryConfig)

    def require_delivery(self) -> None:
        """Check the preconditions for publishing a report."""
        self.credentials.validate_complete()
        self.target.validate_complete()
