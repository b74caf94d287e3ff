"""Google Gemini Provider 适配器。

使用 Generative Language REST API 的 generateContent 端点：
- URL: {base_url}/models/{model}:generateContent
- 认证: x-goog-api-key: <api_key>

只做单次调用：没有重试、没有退避。超时仅由 HTTP 客户端的 http_timeout 控制。
所有失败统一抛出 BackendError，code 字段仅用于诊断。
"""

from typing import Any, Dict, List, Optional

import httpx

from gemini_chat.config.settings import API_KEY_ENV_VARS, settings
from gemini_chat.domain.exceptions import BackendError, StartupConfigError
from gemini_chat.infrastructure.logging.logger import logger
from gemini_chat.providers.registry import GEMINI_CONFIG, ModelConfig


def _mask_key(key: str) -> str:
    return f"{key[:4]}..."


class GeminiClient:
    """Gemini Provider 客户端实现。"""

    name = "gemini"

    def __init__(self, cfg=settings, model: Optional[str] = None):
        api_key = (getattr(cfg, "gemini_api_key", None) or "").strip()
        if not api_key:
            logger.error("Gemini API key missing", extra={"extra": {"env_vars": list(API_KEY_ENV_VARS)}})
            raise StartupConfigError(
                code="MISSING_API_KEY",
                message=(
                    "Gemini API key not found. Set the GEMINI_API_KEY environment variable "
                    "or VITE_GEMINI_API_KEY in the .env file."
                ),
            )
        logical_model = model or getattr(cfg, "default_model", None) or "chat"
        if logical_model not in GEMINI_CONFIG.models:
            logger.error("Unknown Gemini model", extra={"extra": {"model": logical_model}})
            raise StartupConfigError(
                code="UNKNOWN_MODEL",
                message=(
                    f"Unknown model {logical_model!r}; "
                    f"available: {', '.join(sorted(GEMINI_CONFIG.models))}"
                ),
            )
        self._settings = cfg
        self._api_key = api_key
        self._model_cfg: ModelConfig = GEMINI_CONFIG.models[logical_model]
        self._base_url = (getattr(cfg, "gemini_base_url", None) or GEMINI_CONFIG.base_url).rstrip("/")
        logger.info(
            "Gemini client ready",
            extra={"extra": {"api_key": _mask_key(api_key), "model": self._model_cfg.provider_model}},
        )

    @property
    def model(self) -> str:
        return self._model_cfg.provider_model

    async def generate_reply(self, text: str) -> str:
        payload = self._build_payload(text)
        url = f"{self._base_url}/models/{self._model_cfg.provider_model}:generateContent"
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.post(
                    url,
                    json=payload,
                    headers={
                        "x-goog-api-key": self._api_key,
                        "Content-Type": "application/json",
                    },
                )
        except httpx.HTTPError as e:
            raise self._failure("NETWORK_ERROR", str(e) or type(e).__name__)
        if resp.status_code >= 400:
            raise self._failure(
                "API_ERROR",
                resp.text,
                http_status=resp.status_code,
                status_code=resp.status_code,
            )
        try:
            data = resp.json()
        except ValueError as e:
            raise self._failure("INVALID_RESPONSE", f"Response is not JSON: {e}")
        return self._parse_response(data)

    # ---- 辅助方法 ----

    def _build_payload(self, text: str) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "contents": [{"role": "user", "parts": [{"text": text}]}],
        }
        generation_config = self._model_cfg.generation_config()
        if generation_config:
            payload["generationConfig"] = generation_config
        return payload

    def _parse_response(self, data: Any) -> str:
        """提取 candidates[0].content.parts 中的全部文本。

        结构不符合预期时抛出 INVALID_RESPONSE，没有可用文本时抛出 EMPTY_RESPONSE。
        """

        if not isinstance(data, dict):
            raise self._failure("INVALID_RESPONSE", "Response body is not an object")
        candidates = data.get("candidates")
        if candidates is None or candidates == []:
            feedback = data.get("promptFeedback")
            if feedback is not None and not isinstance(feedback, dict):
                raise self._failure("INVALID_RESPONSE", "promptFeedback is not an object")
            reason = (feedback or {}).get("blockReason") or "no candidates"
            raise self._failure("EMPTY_RESPONSE", f"No candidates returned ({reason})")
        if not isinstance(candidates, list):
            raise self._failure("INVALID_RESPONSE", "candidates is not a list")
        first = candidates[0]
        if not isinstance(first, dict):
            raise self._failure("INVALID_RESPONSE", "Candidate is not an object")
        content = first.get("content") or {}
        if not isinstance(content, dict):
            raise self._failure("INVALID_RESPONSE", "Candidate content is not an object")
        parts = content.get("parts") or []
        if not isinstance(parts, list):
            raise self._failure("INVALID_RESPONSE", "Candidate parts is not a list")
        texts: List[str] = []
        for part in parts:
            if not isinstance(part, dict):
                raise self._failure("INVALID_RESPONSE", "Content part is not an object")
            text = part.get("text")
            if text is None:
                continue
            if not isinstance(text, str):
                raise self._failure("INVALID_RESPONSE", "Content part text is not a string")
            texts.append(text)
        reply = "".join(texts)
        if not reply:
            reason = first.get("finishReason") or "empty text"
            raise self._failure("EMPTY_RESPONSE", f"Candidate has no text ({reason})")
        return reply

    def _failure(self, code: str, message: str, **extra: Any) -> BackendError:
        logger.warning(
            "Gemini request failed",
            extra={"extra": {"provider": self.name, "code": code, "error": message[:500], **extra}},
        )
        http_status = extra.pop("http_status", 502)
        return BackendError(code=code, message=message, http_status=http_status, provider=self.name, **extra)
