"""OpenAI Images API client for story visualization."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from craftstory.services.generation import ImageGenerator


@dataclass
class OpenAIImageGenerator(ImageGenerator):
    """Image generator backed by OpenAI Images API."""

    client: AsyncOpenAI
    model: str

    @classmethod
    def create(cls, api_key: str, model: str) -> "OpenAIImageGenerator":
        """Create an OpenAI image generator."""
        return cls(client=AsyncOpenAI(api_key=api_key), model=model)

    async def generate(self, prompt: str, size: str) -> str:
        """Generate one image and return its URL or a PNG data URL."""
        response = await self.client.images.generate(
            model=self.model, prompt=prompt, size=size, n=1
        )
        if not response.data:
            raise RuntimeError("OpenAI returned no image")
        image = response.data[0]
        if image.b64_json:
            return f"data:image/png;base64,{image.b64_json}"
        if image.url:
            return image.url
        raise RuntimeError("OpenAI image response has no payload")

    async def close(self) -> None:
        """Close the underlying OpenAI client."""
        await self.client.close()
