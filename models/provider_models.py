"""Google Cloud Translation v2 response models.

The v2 client returns plain dictionaries with camelCase keys; these models validate them before
the engine trusts any field. Field types are declared as marshmallow fields so that
``Model.schema().load()`` rejects missing keys and wrongly typed values instead of coercing them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from dataclasses_json import DataClassJsonMixin, LetterCase, config, dataclass_json
from marshmallow import EXCLUDE, fields

__all__: list[str] = ["CloudDetectionPayload", "CloudTranslationPayload", "load_payload"]


@dataclass_json(letter_case=LetterCase.CAMEL)
@dataclass
class CloudTranslationPayload(DataClassJsonMixin):
    """Single item of a ``Client.translate`` response.

    Attributes:
        translated_text (str): Translated text.
        detected_source_language (str | None): Language detected by the service, absent when
            the request carried a source language.
        input (str | None): Echo of the request text.
    """

    translated_text: str = field(metadata=config(mm_field=fields.Str(required=True, data_key="translatedText")))
    detected_source_language: str | None = field(
        default=None,
        metadata=config(mm_field=fields.Str(allow_none=True, load_default=None, data_key="detectedSourceLanguage")),
    )
    input: str | None = field(
        default=None, metadata=config(mm_field=fields.Str(allow_none=True, load_default=None))
    )


@dataclass_json
@dataclass
class CloudDetectionPayload(DataClassJsonMixin):
    """Single item of a ``Client.detect_language`` response."""

    language: str = field(metadata=config(mm_field=fields.Str(required=True)))
    confidence: float | None = field(
        default=None, metadata=config(mm_field=fields.Float(allow_none=True, load_default=None))
    )
    input: str | None = field(
        default=None, metadata=config(mm_field=fields.Str(allow_none=True, load_default=None))
    )


def load_payload[T: (CloudTranslationPayload, CloudDetectionPayload)](model: type[T], data: Any) -> T:
    """Validate a raw response item and build the model.

    Keys the model does not declare are ignored.

    Raises:
        marshmallow.ValidationError: If a required key is missing or a value has the wrong type.
    """
    return model.schema(unknown=EXCLUDE).load(data)
