from dataclasses import dataclass


@dataclass(frozen=True)
class GenerationPrompt:
    system_text: str
    user_text: str


def build_prompt(mode: str, topic: str, source_text: str) -> GenerationPrompt:
    """
    Builds the system/user prompt pair for a study request.
    Pure: identical inputs always give an identical prompt.
    """
    common_prefix = f'Topic: {topic.strip()}\nHere is topic text: "{source_text.strip()}"'

    if mode == "math":
        return GenerationPrompt(
            system_text="Return JSON only. Use keys: status, topic, mathQuestion.",
            user_text=(
                f"{common_prefix}\n"
                "Task: Create a single math/logic question relevant to the topic with "
                "{question:string, answer:string, explanation:string (step-by-step)}\n"
                "Return valid JSON only."
            ),
        )

    return GenerationPrompt(
        system_text="Return JSON only. Use only keys: status, topic, summary, quiz, studyTip.",
        user_text=(
            f"{common_prefix}\n"
            "Task: Create:\n"
            "- summary: array of 3 short bullets (<=20 words each) covering different aspects of the topic\n"
            "- quiz: array of 3 diverse MCQs that test different aspects of the topic. "
            "Each question should be unique, specific to the topic content, and test understanding "
            "rather than just recognition. Format: {id:int, question:string (specific to topic), "
            "choices:[4 strings where only one is correct and others are plausible distractors], "
            "answerIndex:int (0-3)}\n"
            "- studyTip: one short sentence (<=15 words)\n\n"
            "IMPORTANT: Questions must be diverse and topic-specific. Avoid generic template questions. "
            "Base questions on actual content from the topic text.\n"
            "Return valid JSON only."
        ),
    )
