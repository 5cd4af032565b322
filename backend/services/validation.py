import math
from typing import Any

from errors import SchemaViolation


def _is_number(value: Any) -> bool:
    # JSON true/false arrive as bool, which Python treats as int
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_string_list(value: Any, length: int) -> bool:
    return (
        isinstance(value, list)
        and len(value) == length
        and all(isinstance(item, str) for item in value)
    )


def _violation(field: str, message: str) -> SchemaViolation:
    return SchemaViolation(message, details={"field": field})


def _quiz_item_error(item: Any) -> str | None:
    """Returns the first invalid field of a quiz item, or None if it is valid."""
    if not isinstance(item, dict):
        return ""
    if not _is_number(item.get("id")):
        return "id"
    if not isinstance(item.get("question"), str):
        return "question"
    if not _is_string_list(item.get("choices"), 4):
        return "choices"
    answer_index = item.get("answerIndex")
    if not _is_number(answer_index) or not (0 <= answer_index <= 3):
        return "answerIndex"
    return None


def validate_default_payload(payload: dict) -> None:
    if not _is_string_list(payload.get("summary"), 3):
        raise _violation("summary", "AI response missing summary data")

    quiz = payload.get("quiz")
    if not isinstance(quiz, list) or len(quiz) != 3:
        raise _violation("quiz", "AI response missing quiz data")

    for index, item in enumerate(quiz):
        bad_field = _quiz_item_error(item)
        if bad_field is not None:
            field = f"quiz[{index}].{bad_field}" if bad_field else f"quiz[{index}]"
            raise _violation(field, f"AI response quiz item {index + 1} is invalid")

    study_tip = payload.get("studyTip")
    if not isinstance(study_tip, str) or not study_tip.strip():
        raise _violation("studyTip", "AI response missing study tip")


def validate_math_payload(payload: dict) -> None:
    math_question = payload.get("mathQuestion")
    if not isinstance(math_question, dict):
        raise _violation("mathQuestion", "AI response missing math question")

    for key in ("question", "answer", "explanation"):
        if not isinstance(math_question.get(key), str):
            raise _violation(f"mathQuestion.{key}", "AI math question is incomplete")


def validate(mode: str, payload: Any) -> None:
    """
    Checks parsed model output against the shape required for ``mode``.
    Raises SchemaViolation naming the first field that fails; values are
    never coerced.
    """
    if not isinstance(payload, dict):
        raise _violation("", "AI response is not a JSON object")

    if mode == "math":
        validate_math_payload(payload)
    else:
        validate_default_payload(payload)
