import json
import logging
import os
import time
from datetime import datetime, timezone
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from app.schemas.analysis import (
    AnalysisErrorResponse,
    AnalysisMetadata,
    AnalysisSuccessResponse,
    LearningData,
)
from app.services.analysis_parser import resolve_analysis
from app.services.grok_client import GROK_MODEL, call_grok
from app.services.prompt_builder import (
    build_analysis_messages,
    build_analysis_prompt,
    build_full_content,
)

logger = logging.getLogger(__name__)

MAX_LEARNING_DATA_BYTES = int(os.getenv("MAX_LEARNING_DATA_BYTES", str(1024 * 1024)))

ERROR_MESSAGE = "Failed to analyze learning content with Grok4"

router = APIRouter()


class LearningDataTooLargeError(ValueError):
    pass


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.post("")
async def analyze_learning(request: Request) -> JSONResponse:
    """
    DeepDive 세션을 Grok4로 분석해 요약/플래시카드/퀴즈/학습 가이드를 반환
    """
    started = time.perf_counter()
    try:
        # 1) 요청 파싱 (learningData 누락/형식 오류는 아래 except에서 500 처리)
        body = await request.json()
        raw_learning_data = body.get("learningData")
        data_size = len(json.dumps(raw_learning_data, ensure_ascii=False))
        learning_data = LearningData.model_validate(raw_learning_data)

        logger.info(
            "Analysis requested | main_responses=%d thread_responses=%d size=%dKB",
            len(learning_data.mainResponses),
            len(learning_data.threadResponses),
            round(data_size / 1024),
        )
        if data_size > MAX_LEARNING_DATA_BYTES:
            raise LearningDataTooLargeError("Learning data too large for processing")

        # 2) 프롬프트 구성
        prompt = build_analysis_prompt(build_full_content(learning_data))

        # 3) Grok4 호출
        raw_text = await call_grok(build_analysis_messages(prompt), max_tokens=4000, temperature=0.3)
        logger.debug("Response preview: %s", raw_text[:200])

        # 4) JSON 파싱, 실패 시 고정 대체 결과
        analysis, used_fallback = resolve_analysis(raw_text)

        # 5) 응답 구성
        elapsed_ms = round((time.perf_counter() - started) * 1000)
        metadata = AnalysisMetadata(
            analyzed_at=_utc_timestamp(),
            main_responses_count=len(learning_data.mainResponses),
            thread_responses_count=len(learning_data.threadResponses),
            model=GROK_MODEL,
            processing_time_ms=elapsed_ms,
            data_size_kb=round(data_size / 1024),
        )
        logger.info("Analysis completed in %dms (fallback=%s)", elapsed_ms, used_fallback)
        return JSONResponse(
            status_code=200,
            content=AnalysisSuccessResponse(analysis=analysis, metadata=metadata).model_dump(),
            headers={"Cache-Control": "no-cache"},
        )

    except Exception as e:
        elapsed_ms = round((time.perf_counter() - started) * 1000)
        logger.exception("Analysis failed after %dms", elapsed_ms)
        failure = AnalysisErrorResponse(error=ERROR_MESSAGE, details=str(e) or "Unknown error")
        return JSONResponse(status_code=500, content=failure.model_dump())
