"""Exceptions raised by the research deck pipeline."""


class AgentError(Exception):
    """Base class for pipeline failures."""


class ConfigurationError(AgentError):
    """Required configuration (the API credential) is missing."""


class RetrievalError(AgentError):
    """The grounded research call failed."""


class SynthesisError(AgentError):
    """The slide synthesis call failed or returned unusable JSON."""
