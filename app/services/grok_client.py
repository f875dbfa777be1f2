import logging
import os
import time
from dotenv import load_dotenv
import httpx

load_dotenv()

logger = logging.getLogger(__name__)

XAI_API_KEY = os.getenv("XAI_API_KEY")
XAI_BASE_URL = os.getenv("XAI_BASE_URL", "https://api.x.ai/v1")
XAI_TIMEOUT_SECONDS = float(os.getenv("XAI_TIMEOUT_SECONDS", "60"))

GROK_MODEL = "grok-4"


class GrokConfigurationError(RuntimeError):
    """API 키 등 호출 전 설정 누락"""


class GrokResponseError(RuntimeError):
    """응답은 왔지만 생성 텍스트가 없음"""


async def call_grok(
    messages: list[dict],
    *,
    max_tokens: int = 4000,
    temperature: float = 0.3,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    if not XAI_API_KEY:
        raise GrokConfigurationError("XAI_API_KEY environment variable is not set")

    headers = {
        "Authorization": f"Bearer {XAI_API_KEY}",
        "Content-Type": "application/json"
    }

    payload = {
        "model": GROK_MODEL,
        "messages": messages,
        "max_tokens": max_tokens,
        "temperature": temperature,
    }

    url = f"{XAI_BASE_URL.rstrip('/')}/chat/completions"

    logger.info("Calling %s (max_tokens=%d, temperature=%.1f)", GROK_MODEL, max_tokens, temperature)
    started = time.perf_counter()

    async with httpx.AsyncClient(timeout=XAI_TIMEOUT_SECONDS, transport=transport) as client:
        response = await client.post(url, headers=headers, json=payload)
        response.raise_for_status()
        data = response.json()

    logger.info("%s call completed in %.0fms", GROK_MODEL, (time.perf_counter() - started) * 1000)

    choices = data.get("choices") or []
    if not choices:
        raise GrokResponseError(f"{GROK_MODEL} returned no choices")
    return choices[0]["message"]["content"] or ""
