class ResumeAnalyzerError(Exception):
    """Base class for errors raised by the resume analyzer."""


class ConfigurationError(ResumeAnalyzerError):
    """An environment setting could not be parsed."""


class UnsupportedFileTypeError(ResumeAnalyzerError):
    """The uploaded file extension is not one of the supported types."""


class ExtractionError(ResumeAnalyzerError):
    """Text could not be extracted from an uploaded file."""


class CompletionError(ResumeAnalyzerError):
    """The chat-completion API call failed."""


class ModelResponseError(ResumeAnalyzerError):
    """The model answered with something that is not a usable JSON object."""
