class KeywordFinderError(Exception):
    """Base class for errors reported to the client"""


class InvalidRequestError(KeywordFinderError):
    """A required request field is missing or malformed"""


class PipelineError(KeywordFinderError):
    """A text-matching stage failed"""


class TokenizationError(PipelineError):
    pass


class MatchingError(PipelineError):
    pass
