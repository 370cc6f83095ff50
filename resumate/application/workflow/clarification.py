"""Clarification session - the question/answer dialogue before generation."""

from resumate.domain.entities.workflow_state import AnalysisResult, ChatMessage

INTRO = (
    "I've analyzed your resume and known facts against the job description. "
    "To bridge the remaining gap, I have a few questions:"
)
ACKNOWLEDGEMENT = "Got it. Anything else relevant to add?"


class ClarificationSession:
    """Append-only dialogue scoped to one intake. Discarded once generation starts."""

    def __init__(self, analysis: AnalysisResult) -> None:
        self.analysis = analysis
        numbered = "\n\n".join(f"{i}. {q}" for i, q in enumerate(analysis.questions, start=1))
        self._messages: list[ChatMessage] = [
            ChatMessage(role="assistant", content=f"{INTRO}\n\n{numbered}"),
        ]

    @property
    def messages(self) -> list[ChatMessage]:
        return list(self._messages)

    def answer(self, content: str) -> list[ChatMessage]:
        """Record a user answer and the assistant acknowledgement. Blank input is ignored."""
        text = content.strip()
        if not text:
            return self.messages
        self._messages.append(ChatMessage(role="user", content=text))
        self._messages.append(ChatMessage(role="assistant", content=ACKNOWLEDGEMENT))
        return self.messages

    def user_context(self) -> str:
        """User answers only, used as additional context for generation."""
        return "\n\n".join(m.content for m in self._messages if m.role == "user")

    def transcript(self) -> str:
        """Whole dialogue as ROLE: content lines, used for fact extraction."""
        return "\n".join(f"{m.role.upper()}: {m.content}" for m in self._messages)
