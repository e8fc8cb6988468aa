"""Exception types for Crisis Profiles."""


class CrisisProfilesError(Exception):
    """Base class for errors raised by this package."""


class GenerationFailure(CrisisProfilesError):
    """The language-model call failed or its response broke the schema.

    Fatal for the country being processed; the orchestrator converts it
    into a failed ``PipelineResult`` and nothing is persisted.
    """
