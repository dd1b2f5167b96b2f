# capture_api/agent.py

import json
import logging
import mimetypes
import re
from typing import List, Optional

from .config import settings
from .errors import InvalidQuestionsError
from .llm_agent import llm_vision
from .schemas import QuestionAnswer

logger = logging.getLogger(__name__)

# Greedy: from the first "[" to the last "]" of the reply
JSON_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")

DEFAULT_MIME_TYPE = "image/png"


def parse_questions(raw: str) -> List[str]:
    """
    Decodes the `questions` form field. It must be a non-empty JSON array of strings.
    """
    try:
        questions = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise InvalidQuestionsError(f"Questions are not valid JSON: {e}") from e

    if not isinstance(questions, list):
        raise InvalidQuestionsError("Questions must be an array")
    if not questions:
        raise InvalidQuestionsError("Questions array is empty")
    if not all(isinstance(q, str) for q in questions):
        raise InvalidQuestionsError("Every question must be a string")

    return questions


def resolve_mime_type(content_type: Optional[str], filename: Optional[str]) -> str:
    if content_type and content_type != "application/octet-stream":
        return content_type

    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed

    return DEFAULT_MIME_TYPE


def build_prompt(questions: List[str], image_context: Optional[str] = None) -> str:
    image_context = image_context or settings.image_context
    return f"""This is an array of questions about the image, the image is from {image_context}. Can you return an array of answers matching the index of the questions?

{json.dumps(questions, indent=2, ensure_ascii=False)}

Please respond with a JSON array of answers in the same order as the questions. If you cannot find the answer, return an empty string."""


def _as_answer(value) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False)


def parse_answers(response_text: str) -> List[str]:
    """
    Pulls the answers out of the model's free-text reply.

    Tries a JSON array embedded anywhere in the text first, then falls back
    to one answer per non-blank line. If the embedded array does not decode,
    the whole reply is used as a single answer.
    """
    try:
        match = JSON_ARRAY_PATTERN.search(response_text)
        if match:
            answers = [_as_answer(item) for item in json.loads(match.group(0))]
        else:
            answers = [line.strip() for line in response_text.split("\n") if line.strip()]
    except json.JSONDecodeError as e:
        logger.warning(f"Failed to parse response as JSON, using raw response: {e}")
        answers = [response_text]

    return answers


def reconcile(answers: List[str], count: int) -> List[str]:
    """Pads with empty strings or truncates so there is exactly one answer per question."""
    answers = list(answers[:count])
    while len(answers) < count:
        answers.append("")
    return answers


def answer_questions(image: bytes, mime_type: str, questions: List[str]) -> List[QuestionAnswer]:
    """
    Asks the model every question about the image in one call and pairs
    each question with its answer, in input order.
    """
    prompt = build_prompt(questions)

    response_text = llm_vision(prompt, image, mime_type)
    logger.info(f"Model response: {response_text}")

    answers = reconcile(parse_answers(response_text), len(questions))
    results = [
        QuestionAnswer(question=question, answer=answer)
        for question, answer in zip(questions, answers)
    ]
    logger.info(f"Processed results: {[r.model_dump() for r in results]}")
    return results
