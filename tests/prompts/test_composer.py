"""
tests/prompts/test_composer.py

Tests for compose() and the shipped templates.
"""

from tutor_api.prompts import templates
from tutor_api.prompts.composer import PromptTemplate, compose


class TestCompose:

    def test_placeholders_are_filled(self) -> None:
        template = PromptTemplate(system="Help with {subject}.", user="{message}")

        prompt = compose(template, {"subject": "Statics", "message": "Hi"})

        assert prompt.system_message == "Help with Statics."
        assert prompt.user_message == "Hi"

    def test_optional_lines_appended_only_when_present(self) -> None:
        template = PromptTemplate(
            system="Base.",
            user="{message}",
            optional_lines=(("subject", "SUBJECT"), ("context", "CONTEXT")),
        )

        prompt = compose(template, {"message": "Hi", "subject": "Dynamics", "context": "  "})

        assert prompt.system_message == "Base.\n\nSUBJECT: Dynamics"

    def test_optional_lines_go_to_user_when_no_system(self) -> None:
        template = PromptTemplate(system="", user="Do it.", optional_lines=(("context", "CONTEXT"),))

        prompt = compose(template, {"context": "exam tomorrow"})

        assert prompt.system_message == ""
        assert prompt.user_message == "Do it.\n\nCONTEXT: exam tomorrow"

    def test_defaults_fill_missing_fields(self) -> None:
        template = PromptTemplate(system="", user="Level: {level}", defaults={"level": "beginner"})

        assert compose(template, {}).user_message == "Level: beginner"
        assert compose(template, {"level": None}).user_message == "Level: beginner"

    def test_unknown_placeholder_renders_empty(self) -> None:
        template = PromptTemplate(system="", user="[{missing}]")
        assert compose(template, {}).user_message == "[]"

    def test_braces_in_student_text_are_not_formatted(self) -> None:
        template = PromptTemplate(system="", user="{message}")

        prompt = compose(template, {"message": "set {x | x > 0}"})

        assert prompt.user_message == "set {x | x > 0}"

    def test_temperature_override(self) -> None:
        template = PromptTemplate(system="", user="x", temperature=0.7, max_tokens=10)

        prompt = compose(template, {}, temperature=0.1)

        assert prompt.options().temperature == 0.1
        assert prompt.options().max_tokens == 10


class TestTemplates:

    def test_chat_appends_subject_and_context(self) -> None:
        prompt = compose(
            templates.TUTOR_CHAT,
            {"message": "Why?", "subject": "Vibrations", "context": "Lab 3"},
        )

        assert prompt.system_message.startswith("You are an expert AI tutor")
        assert prompt.system_message.endswith(
            "CURRENT SUBJECT FOCUS: Vibrations\n\nCONTEXT: Lab 3"
        )
        assert prompt.user_message == "Why?"

    def test_solver_options(self) -> None:
        prompt = compose(templates.SOLVE_PROBLEM, {"problem": "Find F."})

        assert prompt.user_message == "Please solve this problem step by step: Find F."
        assert prompt.temperature == 0.2
        assert prompt.max_tokens == 3000

    def test_generate_problems_defaults(self) -> None:
        prompt = compose(templates.GENERATE_PROBLEMS, {"subject": "Statics", "topic": "Trusses"})

        assert prompt.user_message.startswith(
            "Generate 3 practice problems for Statics - Trusses at beginner level."
        )
        assert prompt.temperature == 0.7

    def test_check_work_without_correct_answer(self) -> None:
        prompt = compose(
            templates.CHECK_WORK,
            {"problem": "2+2", "student_solution": "4", "correct_answer": None},
        )

        assert "CORRECT ANSWER" not in prompt.system_message

    def test_lecture_defaults(self) -> None:
        prompt = compose(templates.ANALYZE_LECTURE, {"transcript": "..."})

        assert "SUBJECT: Mechanical Engineering" in prompt.user_message
        assert "LECTURE TITLE: Engineering Lecture" in prompt.user_message
        assert prompt.system_message == ""

    def test_core_subjects_listed_in_tutor_prompt(self) -> None:
        assert "Heat and Mass Transfer" in templates.TUTOR_SYSTEM_PROMPT
