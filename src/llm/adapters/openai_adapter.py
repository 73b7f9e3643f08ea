# src/llm/adapters/openai_adapter.py — v1
"""OpenAI chat-completions adapter implementing BaseInferenceClient.

Uses the official openai SDK with SDK-level retries disabled: a failed call is
classified and handed back so the resolver can pick the next tier.
"""

from __future__ import annotations

import base64
import logging
import time
from typing import Any

import openai

from facetier.core.models import AnalysisKind, FaceAnalysis, Provenance
from facetier.core.payloads import PayloadError, decode_payload
from facetier.llm.base_client import BaseInferenceClient
from facetier.llm.classification import classify_http_failure
from facetier.llm.models import ErrorClass, RemoteFailure, RemoteOutcome, RemoteSuccess
from facetier.llm.prompts import FACE_PROMPT, build_medical_prompt, sniff_image_mime
from facetier.llm.response_parser import parse_json_content

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"


class OpenAIInferenceClient(BaseInferenceClient):
    """Remote face / medical analysis over the OpenAI chat-completions API."""

    def __init__(
        self,
        model: str = "gpt-4o",
        api_key: str = "",
        base_url: str = DEFAULT_BASE_URL,
        max_tokens: int = 1500,
        timeout_s: float = 60.0,
        client: Any = None,
    ) -> None:
        self._model = model
        self._api_key = api_key
        self._base_url = base_url
        self._max_tokens = max_tokens
        self._timeout_s = timeout_s
        self._client = client

    async def analyze_face(self, image: bytes) -> RemoteOutcome:
        b64 = base64.b64encode(image).decode("ascii")
        content: list[dict[str, Any]] = [
            {"type": "text", "text": FACE_PROMPT},
            {
                "type": "image_url",
                "image_url": {
                    "url": f"data:{sniff_image_mime(image)};base64,{b64}",
                    "detail": "high",
                },
            },
        ]
        return await self._complete(content, AnalysisKind.FACE)

    async def recommend_medical(self, face: FaceAnalysis) -> RemoteOutcome:
        return await self._complete(
            build_medical_prompt(face), AnalysisKind.MEDICAL_RECOMMENDATION
        )

    @property
    def provider_name(self) -> str:
        return "openai"

    def _get_client(self) -> Any:
        if self._client is None:
            self._client = openai.AsyncOpenAI(
                api_key=self._api_key,
                base_url=self._base_url,
                timeout=self._timeout_s,
                max_retries=0,
            )
        return self._client

    async def _complete(self, content: str | list[dict[str, Any]], kind: AnalysisKind) -> RemoteOutcome:
        t0 = time.monotonic()
        try:
            resp = await self._get_client().chat.completions.create(
                model=self._model,
                messages=[{"role": "user", "content": content}],
                max_tokens=self._max_tokens,
                response_format={"type": "json_object"},
            )
        except openai.APIStatusError as e:
            body = _response_text(e)
            error_class = classify_http_failure(e.status_code, body or e.body)
            logger.warning(
                "Remote %s failed: status=%d class=%s", kind.value, e.status_code, error_class.value,
            )
            return RemoteFailure(
                error_class=error_class,
                status_code=e.status_code,
                raw_body=body,
                detail=str(e),
            )
        except Exception as e:
            # No HTTP response at all: connection refused, DNS, timeout, ...
            logger.warning("Remote %s unreachable: %s", kind.value, e)
            return RemoteFailure(error_class=ErrorClass.UNREACHABLE, detail=str(e))

        latency_ms = int((time.monotonic() - t0) * 1000)
        raw_body = _dump_response(resp)
        try:
            message_content = resp.choices[0].message.content
            data = parse_json_content(message_content)
            result = decode_payload(kind, data, Provenance.REMOTE)
        except (ValueError, PayloadError, IndexError, AttributeError, TypeError) as e:
            logger.warning("Remote %s returned a malformed response: %s", kind.value, e)
            return RemoteFailure(
                error_class=ErrorClass.MALFORMED_RESPONSE,
                status_code=200,
                raw_body=raw_body,
                detail=str(e),
            )

        logger.info("Remote %s succeeded in %d ms", kind.value, latency_ms)
        return RemoteSuccess(result=result, status_code=200, raw_body=raw_body)


def _response_text(error: openai.APIStatusError) -> str:
    try:
        return error.response.text
    except Exception:
        return ""


def _dump_response(resp: Any) -> str:
    dump = getattr(resp, "model_dump_json", None)
    if callable(dump):
        try:
            return dump()
        except Exception:
            pass
    return str(resp)
