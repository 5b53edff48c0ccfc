"""Reads lot labels with the OpenAI Responses API."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from restock_validation.domain.ocr import LabelExtract
from restock_validation.services.ocr import LabelClient

LABEL_FORMAT_NAME = "label_extract"

LABEL_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "expiry_date": {"anyOf": [{"type": "string"}, {"type": "null"}]},
        "lot_code": {"anyOf": [{"type": "string"}, {"type": "null"}]},
    },
    "required": ["expiry_date", "lot_code"],
    "additionalProperties": False,
}

LABEL_PROMPT = (
    "Read the product label in the image. "
    "Return the expiry date exactly as printed and the lot or batch code. "
    "Use null for anything that is not legible."
)


@dataclass
class OpenAILabelClient(LabelClient):
    """Asks a vision model for a lot's expiry date and lot code."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None
    store: bool = False

    @classmethod
    def create(
        cls,
        api_key: str,
        model: str,
        reasoning_effort: str | None = None,
        store: bool = False,
    ) -> "OpenAILabelClient":
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
            store=store,
        )

    def _request(self, image_data_url: str) -> dict[str, object]:
        request: dict[str, object] = {
            "model": self.model,
            "input": [
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": LABEL_PROMPT},
                        {"type": "input_image", "image_url": image_data_url},
                    ],
                }
            ],
            "text": {
                "format": {
                    "type": "json_schema",
                    "name": LABEL_FORMAT_NAME,
                    "strict": True,
                    "schema": LABEL_SCHEMA,
                }
            },
            "store": self.store,
        }
        if self.reasoning_effort:
            request["reasoning"] = {"effort": self.reasoning_effort}
        return request

    async def read_label(self, image_data_url: str) -> LabelExtract:
        """Return the label fields the model could read; unreadable ones are None."""
        response = await self.client.responses.create(**self._request(image_data_url))
        if not response.output_text:
            raise RuntimeError("OpenAI returned an empty label reading")
        return LabelExtract.model_validate_json(response.output_text)
