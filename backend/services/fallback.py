"""
Offline study content, built only from the encyclopedia text.

Used whenever the model is unavailable or its output is unusable. Nothing
here can fail for string input, and every payload matches the schema for
its mode.
"""
import random
import re

from models.schemas import DefaultPayload, MathPayload, MathQuestion, QuizItem

SUMMARY_BULLETS = 3
MAX_BULLET_WORDS = 20
FILLER_BULLET = "Explore core ideas and definitions."

GENERIC_DISTRACTORS = (
    "It is a fundamental concept in mathematics.",
    "It relates to historical events and timelines.",
    "It involves scientific principles and experiments.",
    "It focuses on artistic expression and creativity.",
)

QUESTION_TEMPLATES = (
    "Based on the information provided, which statement accurately describes {topic}?",
    "What is a key characteristic or aspect of {topic}?",
    "Which of the following is most relevant to understanding {topic}?",
)

_SENTENCE_BOUNDARY = re.compile(r"(?<=[.!?])\s+")
_TEMPLATE_SEQUENCE = re.compile(r"\$\{[^}]+\}")


def sanitize_topic_name(raw_topic) -> str:
    """Removes `${...}` sequences; keeps the trimmed original if nothing else is left."""
    if not isinstance(raw_topic, str):
        return ""
    cleaned = _TEMPLATE_SEQUENCE.sub("", raw_topic).strip()
    return cleaned or raw_topic.strip()


def trim_to_words(text: str, max_words: int) -> str:
    words = text.split()
    if len(words) <= max_words:
        return text.strip()
    return " ".join(words[:max_words]) + "…"


def build_fallback_summary(source_text: str) -> list[str]:
    sentences = [s.strip() for s in _SENTENCE_BOUNDARY.split(source_text or "")]
    bullets = [trim_to_words(s, MAX_BULLET_WORDS) for s in sentences if s][:SUMMARY_BULLETS]
    while len(bullets) < SUMMARY_BULLETS:
        bullets.append(FILLER_BULLET)
    return bullets


def build_fallback_quiz(topic: str, summary: list[str], rng: random.Random | None = None) -> list[dict]:
    """
    One question per summary bullet. The bullet is always the correct choice
    at index 0; the other three are shuffled generic distractors.
    """
    rng = rng or random.Random()
    items = []
    for index, template in enumerate(QUESTION_TEMPLATES):
        correct = summary[index] if index < len(summary) else summary[0]
        item = QuizItem(
            id=index + 1,
            question=template.format(topic=topic),
            choices=[correct, *rng.sample(GENERIC_DISTRACTORS, 3)],
            answerIndex=0,
        )
        items.append(item.model_dump())
    return items


def build_fallback_math_question(topic: str) -> dict:
    return MathQuestion(
        question=(
            f"You plan to review 3 sections on {topic}, each taking 15 minutes. "
            "How long will the study session take?"
        ),
        answer="45 minutes",
        explanation=(
            "Multiply the number of sections (3) by the time per section (15 minutes) "
            "to get 45 minutes total."
        ),
    ).model_dump()


def build_fallback(topic: str, source_text: str, mode: str, rng: random.Random | None = None) -> dict:
    safe_topic = sanitize_topic_name(topic)

    if mode == "math":
        return MathPayload(mathQuestion=build_fallback_math_question(safe_topic)).model_dump()

    summary = build_fallback_summary(source_text)
    return DefaultPayload(
        summary=summary,
        quiz=build_fallback_quiz(safe_topic, summary, rng),
        studyTip=f"Review the main definitions of {safe_topic} twice today.",
    ).model_dump()
