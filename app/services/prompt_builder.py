from typing import List
from app.schemas.analysis import LearningData, MainResponse, ThreadResponse

# 학습 세션 분석용 고정 시스템 프롬프트
ANALYSIS_SYSTEM_PROMPT = """You are Grok4, an expert educational content creator. Your task is to analyze a DeepDive learning session and create comprehensive, intelligent learning tools.

ANALYSIS TASK:
1. Analyze the conversation content to identify key concepts, facts, processes, and insights
2. Extract the most important learning objectives and educational value
3. Create engaging, educational content that helps users learn and retain information
4. Generate content that goes beyond simple copying - synthesize and organize information pedagogically

REQUIRED OUTPUT FORMAT (Valid JSON only):
{
  "summary": "A comprehensive summary of what was learned in this DeepDive session",
  "learningObjectives": ["List of 3-5 specific learning objectives"],
  "keyTopics": ["List of main topics covered"],
  "flashcards": [
    {
      "question": "Thoughtfully crafted question that tests understanding",
      "answer": "Clear, educational answer with context",
      "category": "Topic category",
      "difficulty": "beginner|intermediate|advanced"
    }
  ],
  "quizQuestions": [
    {
      "question": "Multiple choice or short answer question",
      "options": ["Option A", "Option B", "Option C", "Option D"],
      "correctAnswer": "Correct answer or option letter",
      "explanation": "Why this is correct and what it teaches",
      "type": "multiple_choice|short_answer|true_false"
    }
  ],
  "studyGuide": {
    "mainConcepts": ["List of core concepts with brief explanations"],
    "processes": ["Step-by-step processes or workflows discussed"],
    "keyInsights": ["Important insights or takeaways"],
    "practicalApplications": ["How this knowledge can be applied"]
  },
  "reviewSessions": [
    {
      "title": "Review session title",
      "content": "Structured review content focusing on specific aspects",
      "timeEstimate": "Estimated study time",
      "difficulty": "beginner|intermediate|advanced"
    }
  ]
}

GUIDELINES:
- Create 8-15 flashcards focusing on different aspects and difficulty levels
- Generate 5-10 quiz questions of varying types and difficulties
- Ensure questions test understanding, not just memorization
- Include practical applications and real-world relevance
- Make content engaging and educationally valuable
- Focus on synthesis rather than simple repetition
- Tailor difficulty to match the complexity of the source content
- CRITICAL: Return ONLY valid JSON - no extra text, no markdown formatting

Analyze the following DeepDive session content and generate comprehensive learning tools:"""


def render_main_responses(responses: List[MainResponse]) -> str:
    """
    메인 응답을 번호 붙은 블록으로 변환 (1부터, 입력 순서 유지)
    """
    blocks = [
        f"=== MAIN RESPONSE {i} ===\n{response.content}"
        for i, response in enumerate(responses, start=1)
    ]
    return "\n\n".join(blocks)


def render_thread_responses(responses: List[ThreadResponse]) -> str:
    """
    스레드 응답을 제목/컨텍스트 라벨이 붙은 블록으로 변환
    """
    blocks = [
        (
            f"=== THREAD RESPONSE {i}: {response.threadTitle} ===\n"
            f"Context: {response.context}\n"
            f"{response.content}"
        )
        for i, response in enumerate(responses, start=1)
    ]
    return "\n\n".join(blocks)


def build_full_content(learning_data: LearningData) -> str:
    main_content = render_main_responses(learning_data.mainResponses)
    thread_content = render_thread_responses(learning_data.threadResponses)
    return f"{main_content}\n\n{thread_content}"


def build_analysis_prompt(full_content: str) -> str:
    return f"{ANALYSIS_SYSTEM_PROMPT}\n\n{full_content}"


# OpenAI 호환 chat-completions 요청용 메시지
def build_analysis_messages(prompt: str) -> list[dict]:
    return [{"role": "user", "content": prompt}]
