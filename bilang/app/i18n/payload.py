"""
Per-document translation payload embedded in the rendered page
"""
import json
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..exceptions import PayloadError


class TranslationPayload(BaseModel):
    """
    Translated title and body of one document, keyed by locale token.

    Content strings use the restricted markdown subset understood by
    ContentRenderer.
    """

    model_config = ConfigDict(frozen=True, extra='ignore')

    title: Dict[str, Optional[str]] = Field(default_factory=dict)
    content: Dict[str, Optional[str]] = Field(default_factory=dict)
    subtitle: Dict[str, Optional[str]] = Field(default_factory=dict)

    @classmethod
    def parse(cls, raw: Union[str, bytes, Mapping[str, Any]]) -> "TranslationPayload":
        """
        Parse a payload from its embedded JSON form.

        Accepts either the payload object itself or a page-data object
        wrapping it under ``translations``.

        Raises:
            PayloadError: The JSON is unreadable or does not match the contract
        """
        if isinstance(raw, (str, bytes)):
            try:
                data = json.loads(raw)
            except json.JSONDecodeError as e:
                raise PayloadError(f"Translation payload is not valid JSON: {e}", code="json") from e
        else:
            data = raw

        if not isinstance(data, Mapping):
            raise PayloadError("Translation payload must be an object", code="shape")

        if 'translations' in data:
            data = data['translations']
            if not isinstance(data, Mapping):
                raise PayloadError("'translations' must be an object", code="shape")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise PayloadError(f"Translation payload does not match contract: {e}", code="schema") from e

    @classmethod
    def from_front_matter(
        cls,
        front_matter: Mapping[str, Any],
        content: str,
        primary: str = "pt-BR",
        secondary: str = "en",
    ) -> Optional["TranslationPayload"]:
        """
        Build the payload the site generator attaches to a document.

        Secondary values come from the ``translations`` block of the front
        matter (``title_en``, ``subtitle_en``, ``content_en``) and fall back to
        the primary value. Documents without that block get no payload.
        """
        translations = front_matter.get('translations')
        if not translations:
            return None

        suffix = secondary.split('-')[0].lower()
        title = front_matter.get('title')
        subtitle = front_matter.get('subtitle')

        return cls(
            title={
                primary: title,
                secondary: translations.get(f'title_{suffix}') or title,
            },
            subtitle={
                primary: subtitle,
                secondary: translations.get(f'subtitle_{suffix}') or subtitle,
            },
            content={
                primary: content,
                secondary: translations.get(f'content_{suffix}') or content,
            },
        )

    def title_for(self, code: str) -> Optional[str]:
        return self.title.get(code) or None

    def subtitle_for(self, code: str) -> Optional[str]:
        return self.subtitle.get(code) or None

    def content_for(self, code: str) -> Optional[str]:
        return self.content.get(code) or None

    def to_json(self) -> str:
        return json.dumps({'translations': self.model_dump()}, ensure_ascii=False)
