"""Errors raised by the analysis pipeline and its surrounding services"""


class InputValidationError(ValueError):
    """Content is empty, whitespace-only or outside the configured length limits."""


class AnalysisFailure(RuntimeError):
    """Unexpected error during extraction, scoring or suggestion generation."""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause


class ThemeNotFoundError(KeyError):
    def __init__(self, theme_id: str):
        super().__init__(theme_id)
        self.theme_id = theme_id

    def __str__(self) -> str:
        return f"Theme not found: {self.theme_id}"


class SessionNotFoundError(KeyError):
    def __init__(self, session_id: str):
        super().__init__(session_id)
        self.session_id = session_id

    def __str__(self) -> str:
        return f"Session not found: {self.session_id}"


class ExportNotSupportedError(NotImplementedError):
    """Export format is recognised but has no implementation."""


class LLMUnavailableError(RuntimeError):
    """LLM provider is unconfigured, unreachable or returned an unusable reply."""


class SuggestionNotFoundError(KeyError):
    def __init__(self, suggestion_id: str):
        super().__init__(suggestion_id)
        self.suggestion_id = suggestion_id

    def __str__(self) -> str:
        return f"Suggestion not found: {self.suggestion_id}"


class WorkflowStateError(ValueError):
    """Operation is not valid for the session's current step."""
