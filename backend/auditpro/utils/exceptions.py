class AnalysisError(Exception):
    """Base class for failures of a single analysis call."""


class ConfigurationError(AnalysisError):
    pass


class ProviderError(AnalysisError):
    pass


class EmptyResponseError(AnalysisError):
    pass


class TranscriptNotFoundError(Exception):
    pass


class TranscriptNotCompletedError(Exception):
    pass


class BatchInProgressError(Exception):
    pass
