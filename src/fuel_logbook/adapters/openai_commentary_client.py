"""OpenAI Responses API client for driving commentary."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from fuel_logbook.services.commentary import CommentaryClient


@dataclass
class OpenAICommentaryClient(CommentaryClient):
    """Commentary client backed by OpenAI Responses API."""

    client: AsyncOpenAI

    @classmethod
    def create(cls, api_key: str) -> "OpenAICommentaryClient":
        """Create an OpenAI commentary client."""
        return cls(client=AsyncOpenAI(api_key=api_key))

    async def generate(self, *, model: str, store: bool, prompt: str) -> str:
        """Call OpenAI Responses API with a plain text prompt."""
        response = await self.client.responses.create(
            model=model,
            input=prompt,
            store=store,
        )
        return response.output_text or ""

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self.client.close()
