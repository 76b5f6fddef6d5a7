"""Exceptions raised by the prediction pipeline."""


class PipelineError(RuntimeError):
    """Base exception for all errors raised by the prediction pipeline."""
    pass


class UpstreamError(PipelineError):
    """
    Raised when a third-party API the request depends on is unavailable.

    Attributes:
        source -- Name of the upstream service (e.g. "google_search", "google_jobs", "llm")
        original_error -- The underlying exception, if any
    """
    def __init__(self, source, message, original_error=None):
        self.source = source
        self.original_error = original_error
        super().__init__(f"{source}: {message}")
