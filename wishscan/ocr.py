import base64
import io
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from openai import OpenAI
from PIL import Image
from pydantic import ValidationError

from .models import DropCard
from .prompts import DROP_PROMPT, REPAIR_PROMPT
from .utils import get_logger

LOGGER = get_logger(__name__)


def image_to_data_url(image_path: Path, max_dim: int = 1600) -> str:
    """Return a JPEG data URL for a local drop image."""

    with Image.open(image_path) as img:
        img = img.convert("RGB")
        # Card text is small; keep more resolution than a thumbnail would.
        img.thumbnail((max_dim, max_dim), Image.LANCZOS)

        buffer = io.BytesIO()
        img.save(buffer, format="JPEG", quality=92)
        payload = buffer.getvalue()

    b64 = base64.b64encode(payload).decode("ascii")
    return f"data:image/jpeg;base64,{b64}"


def strip_markdown_fences(text: str) -> str:
    """Remove ``` or ```json fences around a model reply."""
    text = text.strip()
    if text.startswith("```"):
        first_newline = text.find("\n")
        if first_newline != -1:
            text = text[first_newline + 1 :].strip()
    if text.endswith("```"):
        text = text[:-3].strip()
    return text


def _responses_text(response: Any) -> str:
    try:
        text = response.output_text
    except AttributeError as exc:
        raise RuntimeError("Unexpected response structure from OpenAI Responses API.") from exc
    if not text:
        raise RuntimeError("Model returned no text.")
    return strip_markdown_fences(text)


def _chat_text(response: Any) -> str:
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError) as exc:
        raise RuntimeError("Unexpected response structure from OpenAI Chat API.") from exc
    if isinstance(content, list):
        content = "".join(part.get("text", "") for part in content if isinstance(part, dict))
    if not content:
        raise RuntimeError("Model returned no text.")
    return strip_markdown_fences(content)


def _is_unsupported_request(exc: Exception) -> bool:
    """Return True if an exception appears to come from an unsupported Responses API call."""

    message = str(exc)
    return "responses" in message or "max_output_tokens" in message


def _as_chat_messages(request_input: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    messages = []
    for item in request_input:
        parts = []
        for content in item["content"]:
            if content["type"] == "input_text":
                parts.append({"type": "text", "text": content["text"]})
            elif content["type"] == "input_image":
                parts.append({"type": "image_url", "image_url": {"url": content["image_url"]}})
        messages.append({"role": item["role"], "content": parts})
    return messages


class OcrClient:
    """Read the cards of a drop image with an OpenAI vision model.

    Calling the client with an image URL returns the list of
    :class:`~wishscan.models.DropCard` found in it, which makes an instance
    usable as the ``ocr_extract`` collaborator of the drop trigger.
    """

    def __init__(
        self,
        client: OpenAI,
        model: str = "gpt-4o",
        *,
        max_output_tokens: int = 1024,
    ) -> None:
        self.client = client
        self.model = model
        self.max_output_tokens = max_output_tokens

    def __call__(self, url: str) -> List[DropCard]:
        return self.read_drop(url)

    def _complete(self, request_input: List[Dict[str, Any]]) -> str:
        """Try the Responses API, fall back to Chat Completions when unsupported."""
        try:
            response = self.client.responses.create(
                model=self.model,
                input=request_input,
                max_output_tokens=self.max_output_tokens,
                temperature=0.0,
            )
            return _responses_text(response)
        except (TypeError, AttributeError) as exc:
            if not _is_unsupported_request(exc):
                raise
            LOGGER.debug("Responses API unavailable (%s), using chat completions", exc)

        response = self.client.chat.completions.create(
            model=self.model,
            messages=_as_chat_messages(request_input),
            max_tokens=self.max_output_tokens,
            temperature=0.0,
        )
        return _chat_text(response)

    def _repair(self, raw_text: str) -> Optional[Dict[str, Any]]:
        repaired = self._complete(
            [
                {
                    "role": "system",
                    "content": [
                        {"type": "input_text", "text": "You fix invalid JSON without explanation."}
                    ],
                },
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": REPAIR_PROMPT.format(raw_text=raw_text)}
                    ],
                },
            ]
        )
        try:
            return json.loads(repaired)
        except json.JSONDecodeError:
            return None

    def read_drop(self, source: Union[str, Path]) -> List[DropCard]:
        """OCR a drop image given as an http(s) URL or a local file path."""
        if isinstance(source, Path) or not str(source).startswith(("http://", "https://", "data:")):
            image_url = image_to_data_url(Path(source))
        else:
            image_url = str(source)

        text = self._complete(
            [
                {"role": "system", "content": [{"type": "input_text", "text": DROP_PROMPT}]},
                {
                    "role": "user",
                    "content": [
                        {"type": "input_text", "text": "List the cards in this drop as JSON."},
                        {"type": "input_image", "image_url": image_url},
                    ],
                },
            ]
        )

        try:
            payload = json.loads(text)
        except json.JSONDecodeError:
            payload = self._repair(text)
            if payload is None:
                raise RuntimeError(
                    "Model output was not valid JSON and automatic repair failed. "
                    f"Raw output was:\n{text}"
                )

        entries = payload.get("cards") if isinstance(payload, dict) else payload
        cards: List[DropCard] = []
        for entry in entries or []:
            try:
                cards.append(DropCard.model_validate(entry))
            except ValidationError as exc:
                LOGGER.warning("Ignoring unreadable card entry %r: %s", entry, exc)
        return cards
