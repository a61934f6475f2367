"""Typed view over the subset of SARIF 2.1.0 consumed by the engine.

Only the fields the transformation needs are modelled. Every optional field
has a single documented fallback applied here, at the parse boundary, so the
engine never probes raw dictionaries.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator, model_validator

from sarifbridge.schemas.base import LenientSchemaModel


class SarifMessage(LenientSchemaModel):
    """SARIF multiformat message; only the plain text is used."""

    text: str | None = None


class SarifRule(LenientSchemaModel):
    """Rule metadata from ``tool.driver.rules``."""

    id: str = Field(min_length=1)
    short_description: SarifMessage | None = Field(default=None, alias="shortDescription")
    full_description: SarifMessage | None = Field(default=None, alias="fullDescription")

    @property
    def full_text(self) -> str | None:
        return self.full_description.text if self.full_description else None

    @property
    def short_text(self) -> str | None:
        return self.short_description.text if self.short_description else None


class SarifDriver(LenientSchemaModel):
    """Analysis tool driver."""

    name: str = Field(min_length=1)
    rules: list[SarifRule] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def require_visible_name(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tool.driver.name must not be blank")
        return value

    @field_validator("rules", mode="before")
    @classmethod
    def default_rules(cls, value: Any) -> Any:
        return [] if value is None else value


class SarifTool(LenientSchemaModel):
    driver: SarifDriver


class SarifArtifactLocation(LenientSchemaModel):
    uri: str | None = None


class SarifRegion(LenientSchemaModel):
    start_line: int | None = Field(default=None, alias="startLine")
    end_line: int | None = Field(default=None, alias="endLine")


class SarifPhysicalLocation(LenientSchemaModel):
    artifact_location: SarifArtifactLocation | None = Field(
        default=None, alias="artifactLocation"
    )
    region: SarifRegion | None = None


class SarifLocation(LenientSchemaModel):
    physical_location: SarifPhysicalLocation | None = Field(
        default=None, alias="physicalLocation"
    )


class SarifRuleReference(LenientSchemaModel):
    """``result.rule``: a reference into the driver rule catalog."""

    id: str | None = Field(default=None, min_length=1)
    index: int | None = Field(default=None, ge=0)


class SarifResult(LenientSchemaModel):
    """One raw finding.

    The rule is named by ``ruleId`` or ``rule.id``; a result that only carries
    ``rule.index`` gets its id from the run (see ``SarifRun``).
    """

    rule_id: str | None = Field(default=None, min_length=1, alias="ruleId")
    rule: SarifRuleReference | None = None
    message: SarifMessage | None = None
    level: str | None = None
    locations: list[SarifLocation] = Field(default_factory=list)

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip().lower() or None
        return value

    @field_validator("locations", mode="before")
    @classmethod
    def default_locations(cls, value: Any) -> Any:
        return [] if value is None else value

    @model_validator(mode="after")
    def adopt_rule_reference_id(self) -> "SarifResult":
        if self.rule_id is None and self.rule is not None and self.rule.id:
            self.rule_id = self.rule.id
        return self

    @property
    def message_text(self) -> str | None:
        return self.message.text if self.message else None

    @property
    def primary_location(self) -> SarifPhysicalLocation | None:
        if not self.locations:
            return None
        return self.locations[0].physical_location

    @property
    def artifact_uri(self) -> str | None:
        location = self.primary_location
        if location is None or location.artifact_location is None:
            return None
        return location.artifact_location.uri

    @property
    def region(self) -> SarifRegion | None:
        location = self.primary_location
        return location.region if location else None


class SarifRun(LenientSchemaModel):
    """A single analysis run."""

    tool: SarifTool
    results: list[SarifResult]

    @model_validator(mode="after")
    def resolve_rule_indexes(self) -> "SarifRun":
        rules = self.tool.driver.rules
        for position, result in enumerate(self.results):
            if result.rule_id is not None:
                continue
            index = result.rule.index if result.rule else None
            if index is None or index >= len(rules):
                raise ValueError(f"results[{position}] does not identify its rule")
            result.rule_id = rules[index].id
        return self

    @property
    def tool_name(self) -> str:
        return self.tool.driver.name


class SarifReport(LenientSchemaModel):
    """Top-level SARIF log. Only ``runs[0]`` is consumed."""

    version: str | None = None
    runs: list[SarifRun] = Field(min_length=1)

    @property
    def primary_run(self) -> SarifRun:
        return self.runs[0]
