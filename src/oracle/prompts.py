"""Prompt construction and reply parsing for language-model oracles."""
import re
from typing import Sequence

from src.game.models import QA, Guess, OracleStep, Question
from src.oracle.base import OracleUnavailableError

_GUESS_PREFIX = re.compile(r"^\s*FINAL_GUESS:\s*(.+)", re.IGNORECASE | re.DOTALL)
_QUESTION_PREFIX = re.compile(r"^\s*QUESTION:\s*(.+)", re.IGNORECASE | re.DOTALL)
_GUESS_ANYWHERE = re.compile(r"final_guess:\s*(.+)", re.IGNORECASE)
_QUESTION_ANYWHERE = re.compile(r"question:\s*(.+)", re.IGNORECASE)


def format_history(history: Sequence[QA]) -> str:
    if not history:
        return "(none)"
    return "\n".join(
        f"{i}. Q: {qa.question}\n   A: {qa.answer.value}"
        for i, qa in enumerate(history, start=1)
    )


def build_prompt(history: Sequence[QA], remaining: int, hints: Sequence[str] = ()) -> str:
    """Build the single-turn prompt sent to the model."""
    lines = [
        "You are playing twenty questions. The user is thinking of an object, "
        "person, place or concept, and you must identify it.",
        "",
        "Rules:",
        "- Ask short yes/no questions that split the remaining possibilities well.",
        "- Never repeat a question that was already asked.",
        "- Treat every previous answer as true.",
        "- Make a final guess as soon as you are confident, or when no questions remain.",
    ]
    if hints:
        lines += [
            "",
            "Answers earlier players were thinking of when the guess was wrong "
            f"(hints only, they may be unrelated): {', '.join(hints)}.",
        ]
    lines += [
        "",
        "History so far:",
        format_history(history),
        "",
        f"Questions remaining: {remaining}.",
        "",
        "Reply with exactly one line:",
        "QUESTION: <your next question>",
        "or",
        "FINAL_GUESS: <your single best guess>",
    ]
    return "\n".join(lines)


def parse_reply(text: str) -> OracleStep:
    """Turn model output into a ``Question`` or ``Guess``.

    Raises:
        OracleUnavailableError: If the reply matches neither format.
    """
    for pattern, step_type in (
        (_GUESS_PREFIX, Guess),
        (_QUESTION_PREFIX, Question),
        (_GUESS_ANYWHERE, Guess),
        (_QUESTION_ANYWHERE, Question),
    ):
        match = pattern.search(text)
        if match:
            lines = match.group(1).strip().splitlines()
            if lines and lines[0].strip():
                return step_type(lines[0].strip())
    raise OracleUnavailableError(f"Malformed oracle reply: {text[:80]!r}")
