"""OpenAI Responses API client for text generation."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from craftstory.services.generation import TextGenerator


@dataclass
class OpenAITextGenerator(TextGenerator):
    """Text generator backed by OpenAI Responses API."""

    client: AsyncOpenAI
    model: str
    reasoning_effort: str | None = None

    @classmethod
    def create(
        cls, api_key: str, model: str, reasoning_effort: str | None = None
    ) -> "OpenAITextGenerator":
        """Create an OpenAI text generator."""
        return cls(
            client=AsyncOpenAI(api_key=api_key),
            model=model,
            reasoning_effort=reasoning_effort,
        )

    async def generate(self, prompt: str) -> str:
        """Call OpenAI Responses API with a single text prompt."""
        request_payload: dict[str, object] = {
            "model": self.model,
            "input": prompt,
            "store": False,
        }
        if self.reasoning_effort:
            request_payload["reasoning"] = {"effort": self.reasoning_effort}

        response = await self.client.responses.create(**request_payload)
        output_text = response.output_text
        if not output_text:
            raise RuntimeError("OpenAI returned an empty response")
        return output_text

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()
