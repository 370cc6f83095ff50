"""Tests for ClarificationSession."""

from resumate.application.workflow.clarification import ACKNOWLEDGEMENT, ClarificationSession
from resumate.domain.entities.workflow_state import AnalysisResult


def _session() -> ClarificationSession:
    return ClarificationSession(AnalysisResult(needs_info=True, questions=["Team size?", "Which cloud?"]))


class TestClarificationSession:
    def test_opens_with_numbered_questions(self):
        messages = _session().messages
        assert len(messages) == 1
        assert messages[0].role == "assistant"
        assert "1. Team size?" in messages[0].content
        assert "2. Which cloud?" in messages[0].content

    def test_answer_appends_user_and_acknowledgement(self):
        session = _session()
        messages = session.answer("  Five engineers  ")
        assert [m.role for m in messages] == ["assistant", "user", "assistant"]
        assert messages[1].content == "Five engineers"
        assert messages[2].content == ACKNOWLEDGEMENT

    def test_blank_answer_ignored(self):
        session = _session()
        session.answer("   ")
        assert len(session.messages) == 1

    def test_messages_is_a_copy(self):
        session = _session()
        session.messages.append(None)
        assert len(session.messages) == 1

    def test_user_context_only_user_answers(self):
        session = _session()
        session.answer("Five engineers")
        session.answer("AWS")
        assert session.user_context() == "Five engineers\n\nAWS"

    def test_transcript_labels_roles(self):
        session = _session()
        session.answer("AWS")
        lines = session.transcript().splitlines()
        assert lines[0].startswith("ASSISTANT: ")
        assert "USER: AWS" in lines
