import json

from rate_limiter import SlidingWindowLimiter
from services.gemini_service import ModelClient


def envelope(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}], "role": "model"}}]}


def json_envelope(payload) -> dict:
    return envelope(json.dumps(payload))


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedModelClient(ModelClient):
    """ModelClient whose network call replays a list of responses or exceptions."""

    def __init__(self, outcomes=(), limiter=None, api_key="test-key", **kwargs):
        kwargs.setdefault("retry_delay", 0)
        super().__init__(limiter or SlidingWindowLimiter(), api_key=api_key, **kwargs)
        self.outcomes = list(outcomes)
        self.attempts = 0
        self.prompts = []

    async def _generate(self, prompt):
        self.attempts += 1
        self.prompts.append(prompt)
        outcome = self.outcomes.pop(0) if self.outcomes else ConnectionError("no scripted response")
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


VALID_DEFAULT = {
    "status": "ok",
    "topic": "Photosynthesis",
    "summary": [
        "Plants convert light energy into chemical energy.",
        "Chlorophyll absorbs mostly red and blue light.",
        "Oxygen is released as a by-product.",
    ],
    "quiz": [
        {
            "id": 1,
            "question": "Which pigment captures most light for photosynthesis?",
            "choices": ["Chlorophyll", "Melanin", "Hemoglobin", "Keratin"],
            "answerIndex": 0,
        },
        {
            "id": 2,
            "question": "Which gas is released during the light reactions?",
            "choices": ["Nitrogen", "Oxygen", "Methane", "Argon"],
            "answerIndex": 1,
        },
        {
            "id": 3,
            "question": "Where does the Calvin cycle take place?",
            "choices": ["Nucleus", "Mitochondria", "Stroma", "Cell wall"],
            "answerIndex": 2,
        },
    ],
    "studyTip": "Sketch the light and dark reactions side by side.",
}

VALID_MATH = {
    "status": "ok",
    "topic": "Probability",
    "mathQuestion": {
        "question": "A fair die is rolled twice. What is the probability the sum is 7?",
        "answer": "1/6",
        "explanation": "6 of the 36 equally likely outcomes sum to 7, so 6/36 = 1/6.",
    },
}

SOURCE_TEXT = (
    "Photosynthesis is a process used by plants to convert light energy into chemical energy. "
    "It takes place mainly in the chloroplasts of leaf cells. "
    "Oxygen is released as a by-product of splitting water. "
    "The Calvin cycle fixes carbon dioxide into sugars."
)


class FakeWiki:
    def __init__(self, text=SOURCE_TEXT, error=None):
        self.text = text
        self.error = error
        self.topics = []

    async def fetch_summary(self, topic):
        self.topics.append(topic)
        if self.error:
            raise self.error
        return self.text
