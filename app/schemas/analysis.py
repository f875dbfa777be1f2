from __future__ import annotations
from typing import Any, Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

# ===== learningData 입력 =====

class MainResponse(BaseModel):
    """DeepDive 메인 응답 한 건"""
    model_config = ConfigDict(extra="ignore")

    content: str

class ThreadResponse(BaseModel):
    """스레드(파생 질문) 응답 한 건"""
    model_config = ConfigDict(extra="ignore")

    threadTitle: str
    context: str
    content: str

class LearningData(BaseModel):
    """
    분석 대상 학습 세션
    - 두 목록 모두 필수, 빈 목록은 허용
    """
    model_config = ConfigDict(extra="ignore")

    mainResponses: List[MainResponse] = Field(..., description="메인 응답 (순서 유지)")
    threadResponses: List[ThreadResponse] = Field(..., description="스레드 응답 (순서 유지)")

# ===== 분석 결과 =====

Difficulty = Literal["beginner", "intermediate", "advanced"]
QuestionType = Literal["multiple_choice", "short_answer", "true_false"]

class Flashcard(BaseModel):
    question: str
    answer: str
    category: str
    difficulty: Difficulty

class QuizQuestion(BaseModel):
    question: str
    options: Optional[List[str]] = None
    correctAnswer: str
    explanation: str
    type: QuestionType

class StudyGuide(BaseModel):
    mainConcepts: List[str]
    processes: List[str]
    keyInsights: List[str]
    practicalApplications: List[str]

class ReviewSession(BaseModel):
    title: str
    content: str
    timeEstimate: str
    difficulty: Difficulty

class AnalysisResult(BaseModel):
    summary: str
    learningObjectives: List[str]
    keyTopics: List[str]
    flashcards: List[Flashcard]
    quizQuestions: List[QuizQuestion]
    studyGuide: StudyGuide
    reviewSessions: List[ReviewSession]

# ===== 응답 =====

class AnalysisMetadata(BaseModel):
    analyzed_at: str = Field(..., description="ISO-8601 분석 시각 (UTC)")
    main_responses_count: int
    thread_responses_count: int
    model: str
    processing_time_ms: int
    data_size_kb: int

class AnalysisSuccessResponse(BaseModel):
    success: Literal[True] = True
    # 모델 출력은 검증 없이 그대로 전달
    analysis: Dict[str, Any]
    metadata: AnalysisMetadata

class AnalysisErrorResponse(BaseModel):
    success: Literal[False] = False
    error: str
    details: str
