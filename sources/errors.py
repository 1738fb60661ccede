"""Exceptions raised by the dashboard data pipeline."""


class PipelineError(Exception):
    """Base class for failures that send the dashboard to synthetic data."""

    kind = "pipeline"


class BackendUnreachableError(PipelineError):
    """The proxy health probe failed before any series was requested."""

    kind = "unreachable"


class NoDataError(PipelineError):
    """Every series came back empty; there is nothing to join."""

    kind = "no_data"
