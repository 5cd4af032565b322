from typing import Literal, Optional
from pydantic import BaseModel, Field


STUDY_MODES = ("default", "math")


class QuizItem(BaseModel):
    id: int
    question: str
    choices: list[str] = Field(..., min_length=4, max_length=4)
    answerIndex: int = Field(..., ge=0, le=3)


class DefaultPayload(BaseModel):
    summary: list[str] = Field(..., min_length=3, max_length=3)
    quiz: list[QuizItem] = Field(..., min_length=3, max_length=3)
    studyTip: str = Field(..., min_length=1)


class MathQuestion(BaseModel):
    question: str
    answer: str
    explanation: str


class MathPayload(BaseModel):
    mathQuestion: MathQuestion


class StudyResponse(BaseModel):
    """Body of a successful GET /study. Exactly one of the mode groups is set."""
    status: Literal["ok"] = "ok"
    topic: str
    summary: Optional[list[str]] = None
    quiz: Optional[list[QuizItem]] = None
    studyTip: Optional[str] = None
    mathQuestion: Optional[MathQuestion] = None


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
    details: Optional[dict] = None
