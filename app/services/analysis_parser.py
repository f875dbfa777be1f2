# ------------------------------------------------------------
# 모델 출력 텍스트 → 분석 결과(dict)
# - 성공: 파싱된 JSON 객체를 그대로 사용 (스키마 검증 없음)
# - 실패: 원문을 summary에 담은 고정 대체 결과
# ------------------------------------------------------------

import json
import logging
import re
from typing import Any, Dict, Tuple

from app.schemas.analysis import (
    AnalysisResult,
    Flashcard,
    QuizQuestion,
    ReviewSession,
    StudyGuide,
)

logger = logging.getLogger(__name__)

_CODE_FENCE = re.compile(r"```(?:json)?\n?")
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


class AnalysisParseError(ValueError):
    """모델 출력이 JSON 객체가 아님"""


def _reject_constant(name: str) -> Any:
    # NaN / Infinity 는 JSON 표준이 아님
    raise AnalysisParseError(f"invalid JSON constant: {name}")


def _loads(text: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise AnalysisParseError(str(e)) from e
    except RecursionError as e:
        raise AnalysisParseError("JSON nested too deeply") from e


def parse_analysis(raw_text: str) -> Dict[str, Any]:
    candidate = raw_text.strip()
    try:
        parsed = _loads(candidate)
    except AnalysisParseError:
        # 코드 펜스 제거, 앞뒤 설명 문장이 붙은 경우 가장 바깥 {...}만 추출
        candidate = _CODE_FENCE.sub("", candidate)
        match = _JSON_OBJECT.search(candidate)
        if match:
            candidate = match.group(0)
        parsed = _loads(candidate)

    if not isinstance(parsed, dict):
        raise AnalysisParseError(f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


# 파싱 실패 시 사용하는 고정 결과 (summary만 원문으로 교체)
_FALLBACK = AnalysisResult(
    summary="",
    learningObjectives=["Review the content manually to identify learning objectives"],
    keyTopics=["Manual review required"],
    flashcards=[
        Flashcard(
            question="Analysis could not be structured automatically",
            answer="Please review the session content manually",
            category="General",
            difficulty="beginner",
        )
    ],
    quizQuestions=[
        QuizQuestion(
            question="What are the main concepts from this session?",
            correctAnswer="Review the session content to answer",
            explanation="The automated analysis could not be parsed, so this question is a placeholder",
            type="short_answer",
        )
    ],
    studyGuide=StudyGuide(
        mainConcepts=["Review the session content manually"],
        processes=["Read through the main responses and threads"],
        keyInsights=["Automated analysis unavailable for this session"],
        practicalApplications=["Apply the concepts discussed in the session"],
    ),
    reviewSessions=[
        ReviewSession(
            title="Manual Review",
            content="Re-read the session content and note the key points",
            timeEstimate="15 minutes",
            difficulty="beginner",
        )
    ],
)


def fallback_analysis(raw_text: str) -> Dict[str, Any]:
    return _FALLBACK.model_copy(update={"summary": raw_text}).model_dump(exclude_none=True)


def resolve_analysis(raw_text: str) -> Tuple[Dict[str, Any], bool]:
    """
    (analysis, used_fallback) 반환. 예외를 던지지 않는다.
    """
    try:
        return parse_analysis(raw_text), False
    except AnalysisParseError as e:
        logger.warning("Analysis JSON parsing failed: %s | raw (first 1000 chars): %s", e, raw_text[:1000])
        return fallback_analysis(raw_text), True
