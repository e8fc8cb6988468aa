"""Protocol for structured language-model generation."""

from typing import Any, Protocol

from crisis_profiles.data import Usage


class LanguageModel(Protocol):
    """Interface for a hosted language model constrained to a JSON schema."""

    async def generate(
        self,
        *,
        name: str,
        schema: dict[str, Any],
        system: str,
        prompt: str,
    ) -> tuple[dict[str, Any], Usage]:
        """Issue one structured request.

        The call is atomic: it either returns an object shaped by ``schema``
        or raises ``GenerationFailure``. Timeouts and retries belong to the
        implementation's client.

        Args:
            name: Identifier of the requested artifact (e.g. "swipe_card").
            schema: Closed JSON schema the response must satisfy.
            system: System prompt.
            prompt: User prompt.

        Returns:
            Tuple of (parsed response object, usage).
        """
        ...
