"""Tests for prompt construction and reply parsing."""
import pytest

from src.game.models import QA, Answer, Guess, Question
from src.oracle import OracleUnavailableError, build_prompt, format_history, parse_reply


class TestBuildPrompt:
    def test_empty_history(self):
        prompt = build_prompt([], 20)
        assert "(none)" in prompt
        assert "Questions remaining: 20." in prompt
        assert "QUESTION:" in prompt
        assert "FINAL_GUESS:" in prompt

    def test_history_is_numbered_in_order(self):
        history = [QA("Is it alive?", Answer.YES), QA("Is it a pet?", Answer.NO)]
        text = format_history(history)
        assert text.index("1. Q: Is it alive?") < text.index("2. Q: Is it a pet?")
        assert "A: yes" in text
        assert "A: no" in text

    def test_hints_included_when_present(self):
        prompt = build_prompt([], 5, hints=["a kazoo", "a lighthouse"])
        assert "a kazoo, a lighthouse" in prompt

    def test_no_hint_section_without_hints(self):
        assert "earlier players" not in build_prompt([], 5)


class TestParseReply:
    def test_question_prefix(self):
        assert parse_reply("QUESTION: Is it bigger than a car?") == Question("Is it bigger than a car?")

    def test_guess_prefix(self):
        assert parse_reply("FINAL_GUESS: a giraffe") == Guess("a giraffe")

    def test_prefix_is_case_insensitive(self):
        assert parse_reply("final_guess: the moon") == Guess("the moon")

    def test_only_first_line_is_used(self):
        assert parse_reply("QUESTION: Is it red?\nSome reasoning here") == Question("Is it red?")

    def test_marker_inside_text(self):
        reply = "Thinking about it...\nQuestion: Does it fly?"
        assert parse_reply(reply) == Question("Does it fly?")

    def test_guess_wins_over_question(self):
        reply = "I could ask another question: but FINAL_GUESS: a penguin"
        assert parse_reply(reply) == Guess("a penguin")

    @pytest.mark.parametrize("reply", ["", "I have no idea", "QUESTION:   "])
    def test_malformed_reply_raises(self, reply):
        with pytest.raises(OracleUnavailableError):
            parse_reply(reply)
