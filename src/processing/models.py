# src/processing/models.py
"""Processing domain models: requests, per-type options, result envelope.

Option models accept the camelCase keys used on the wire (maxLength,
targetLanguage, ...) and ignore keys they do not recognise. Payload models
serialize back to camelCase.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.alias_generators import to_camel

from contentengine.cache.fingerprint import canonicalize
from contentengine.processing.errors import InvalidRequestError, UnsupportedTypeError


class ProcessingType(str, Enum):
    """Supported processing operations."""

    SUMMARIZE = "summarize"
    ANALYZE_SENTIMENT = "analyze-sentiment"
    EXTRACT_KEYWORDS = "extract-keywords"
    GENERATE_CONTENT = "generate-content"
    TRANSLATE = "translate"


class ProcessingRequest(BaseModel):
    """A single content-processing request. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    type: str = Field(min_length=1)
    content: str = Field(min_length=1)
    options: dict[str, Any] = Field(default_factory=dict)

    @field_validator("options", mode="before")
    @classmethod
    def _none_options(cls, v: Any) -> Any:  # noqa: N805
        return {} if v is None else v

    @field_validator("options")
    @classmethod
    def _serializable_options(cls, v: dict[str, Any]) -> dict[str, Any]:  # noqa: N805
        """Options must have a canonical JSON form to be fingerprinted."""
        try:
            canonicalize("", "", v)
        except (TypeError, ValueError) as e:
            raise ValueError(f"options are not JSON-serializable: {e}") from e
        return v

    @classmethod
    def from_payload(cls, payload: ProcessingRequest | Mapping[str, Any]) -> ProcessingRequest:
        """Validate a raw payload, raising InvalidRequestError on defects."""
        if isinstance(payload, ProcessingRequest):
            return payload
        if not isinstance(payload, Mapping):
            raise InvalidRequestError("Request must be an object with type and content")
        try:
            return cls.model_validate(dict(payload))
        except ValidationError as e:
            fields = sorted({str(err["loc"][0]) for err in e.errors() if err["loc"]})
            raise InvalidRequestError(
                f"Type and content are required fields (invalid: {', '.join(fields)})"
            ) from e


def resolve_type(value: str) -> ProcessingType:
    """Map a request type string onto ProcessingType."""
    try:
        return ProcessingType(value)
    except ValueError:
        raise UnsupportedTypeError(value) from None


# === Options ===


class _Options(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:  # noqa: N805
        """Null option values fall back to defaults."""
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class SummarizeOptions(_Options):
    max_length: int = Field(default=150, gt=0)
    style: str = "concise"


class SentimentOptions(_Options):
    pass


class KeywordOptions(_Options):
    pass


class GenerateOptions(_Options):
    style: str = "professional"
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    max_tokens: int = Field(default=1024, gt=0)


class TranslateOptions(_Options):
    target_language: str = "Spanish"
    preserve_formatting: bool = True


OPTIONS_BY_TYPE: dict[ProcessingType, type[_Options]] = {
    ProcessingType.SUMMARIZE: SummarizeOptions,
    ProcessingType.ANALYZE_SENTIMENT: SentimentOptions,
    ProcessingType.EXTRACT_KEYWORDS: KeywordOptions,
    ProcessingType.GENERATE_CONTENT: GenerateOptions,
    ProcessingType.TRANSLATE: TranslateOptions,
}


def parse_options(processing_type: ProcessingType, options: Mapping[str, Any]) -> _Options:
    """Build the typed options for a processing type."""
    try:
        return OPTIONS_BY_TYPE[processing_type].model_validate(dict(options))
    except ValidationError as e:
        raise InvalidRequestError(f"Invalid options for {processing_type.value}: {e}") from e


# === Result payloads ===


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class SummaryPayload(_Payload):
    summary: str
    original_length: int
    summary_length: int
    compression_ratio: float


class KeywordsPayload(_Payload):
    keywords: list[Any] = Field(default_factory=list)


class GeneratedContentPayload(_Payload):
    content: str
    word_count: int


class TranslationPayload(_Payload):
    original_text: str
    translated_text: str
    source_language: str = "auto-detected"
    target_language: str


class ProcessingResult(BaseModel):
    """Envelope returned for every successful processing call."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    type: str
    result: Any
    processing_timestamp: datetime

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, raw: str | bytes) -> ProcessingResult:
        return cls.model_validate_json(raw)
