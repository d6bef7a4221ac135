"""Text and image generation actions with canned fallbacks."""

import json
import logging
import re
from dataclasses import dataclass, field
from typing import Protocol

from craftstory.domain.languages import get_language_config
from craftstory.domain.questions import Question
from craftstory.services.extraction import RuleBasedExtractor, coerce_value

logger = logging.getLogger(__name__)

FALLBACK_HASHTAGS = [
    "#handmade",
    "#craft",
    "#artisan",
    "#traditional",
    "#handcrafted",
    "#art",
    "#culture",
    "#heritage",
    "#unique",
    "#authentic",
]

_JSON_OBJECT = re.compile(r"\{[\s\S]*\}")
_HASHTAG = re.compile(r"#[\w-]+", re.UNICODE)


class GenerationUnavailableError(RuntimeError):
    """Raised by generators that are not configured for live calls."""


class TextGenerator(Protocol):
    """Interface for a text-generation model."""

    async def generate(self, prompt: str) -> str:
        """Return the model's text response for a prompt."""


class ImageGenerator(Protocol):
    """Interface for an image-generation model."""

    async def generate(self, prompt: str, size: str) -> str:
        """Return a URL or data URL for the generated image."""


@dataclass(frozen=True)
class StoryImage:
    """Generated illustration for a craft story."""

    image_url: str | None
    prompt: str
    style: str


@dataclass(frozen=True)
class ConnectionStatus:
    """Result of a generator connectivity check."""

    success: bool
    message: str
    response: str | None = None


@dataclass
class GenerationService:
    """Prompts the text and image generators and degrades to fallbacks."""

    text_generator: TextGenerator
    image_generator: ImageGenerator
    extractor: RuleBasedExtractor = field(default_factory=RuleBasedExtractor)

    async def extract_field(
        self,
        transcript: str,
        question: Question,
        language: str = "en",
        current_fields: dict[str, object] | None = None,
    ) -> object:
        """Extract the question's field from an answer transcript."""
        descriptor = question.field
        prompt = (
            "Process this artisan's answer to extract information.\n"
            f'Question: "{question.prompt_for("en")}"\n'
            f'Answer: "{transcript}"\n'
            f"Current profile: {json.dumps(current_fields or {}, default=str)}\n"
            f"Language: {get_language_config(language).name}\n"
            f"Field: {descriptor.name} ({descriptor.shape.value}: {descriptor.hint})\n"
            'Return ONLY a JSON object of the form {"value": ...}. '
            "Use an array of strings for list fields and an integer for number fields."
        )
        try:
            raw = await self.text_generator.generate(prompt)
            payload = _parse_json_object(raw)
            value = payload.get("value")
            if value is None or value == "" or value == []:
                raise ValueError("Generator returned an empty value")
            return coerce_value(value, descriptor.shape)
        except Exception as exc:
            logger.warning(
                "Field extraction fell back to rules: %s",
                exc,
                extra={"field": descriptor.name},
            )
            return self.extractor.extract(transcript, descriptor)

    async def generate_bio(
        self, profile: dict[str, object], language: str = "en"
    ) -> str:
        """Generate a short artisan bio from profile fields."""
        prompt = (
            "Generate a compelling artisan bio from this profile data:\n"
            f"{json.dumps(profile, default=str, ensure_ascii=False)}\n"
            f"Language: {get_language_config(language).name}\n"
            "Create a 2-3 sentence bio that captures their craft, experience, "
            "and cultural heritage. Return only the bio text."
        )
        return await self._generate_text(prompt, fallback_bio(profile), "bio")

    async def generate_product_summary(
        self, product: dict[str, object], language: str = "en"
    ) -> str:
        """Generate a customer-facing product summary."""
        prompt = (
            "Generate a compelling product summary from this information:\n"
            f"{json.dumps(product, default=str, ensure_ascii=False)}\n"
            f"Language: {get_language_config(language).name}\n"
            "Create a 2-3 sentence description focusing on craftsmanship, "
            "cultural heritage, and unique qualities. Return only the summary text."
        )
        return await self._generate_text(
            prompt, fallback_product_summary(product), "product_summary"
        )

    async def generate_hashtags(self, product: dict[str, object]) -> list[str]:
        """Generate social media hashtags for a craft."""
        prompt = (
            "Based on this craft information, generate 10-15 hashtags "
            "for social media:\n"
            f"{json.dumps(product, default=str, ensure_ascii=False)}\n"
            "Cover the craft type, materials, techniques, cultural heritage and "
            "location if mentioned. Return a comma-separated list, "
            "each starting with #."
        )
        try:
            raw = await self.text_generator.generate(prompt)
        except Exception as exc:
            logger.warning("Hashtag generation failed: %s", exc)
            return list(FALLBACK_HASHTAGS)
        tags = _HASHTAG.findall(raw)
        return tags or list(FALLBACK_HASHTAGS)

    async def translate(self, text: str, from_language: str, to_language: str) -> str:
        """Translate text, returning the input unchanged on failure."""
        if get_language_config(from_language) == get_language_config(to_language):
            return text
        prompt = (
            f"Translate this text from {get_language_config(from_language).name} "
            f"to {get_language_config(to_language).name}:\n"
            f'"{text}"\n'
            "Return only the translated text."
        )
        return await self._generate_text(prompt, text, "translation")

    async def conversational_response(
        self,
        user_input: str,
        context: str,
        history: list[str] | None = None,
        language: str = "en",
    ) -> str:
        """Generate a short spoken reply for a free-form conversation."""
        conversation = (
            "\n".join(history or [])
            or "This is the beginning of our conversation"
        )
        prompt = (
            "You are a warm, enthusiastic assistant having a real-time voice "
            "conversation with an artisan.\n"
            f"Context: {_CONTEXT_PROMPTS.get(context, _DEFAULT_CONTEXT_PROMPT)}\n"
            f"Respond in {get_language_config(language).name}.\n"
            f"Conversation so far: {conversation}\n"
            f'The artisan just said: "{user_input}"\n'
            "Keep it to 1-2 sentences and ask exactly one follow-up question. "
            "Return only your response text."
        )
        return await self._generate_text(
            prompt, fallback_response(user_input, context), "conversation"
        )

    async def visualize_story(
        self, story: str, style: str = "traditional"
    ) -> StoryImage:
        """Generate an illustration for a craft story."""
        prompt = (
            f"A {style} illustration of this Indian craft story, warm colours, "
            f"no text: {story.strip()}"
        )
        try:
            image_url = await self.image_generator.generate(prompt, "1024x1024")
        except Exception as exc:
            logger.warning("Story visualization failed: %s", exc)
            image_url = None
        return StoryImage(image_url=image_url, prompt=prompt, style=style)

    async def test_connection(self) -> ConnectionStatus:
        """Check that the text generator responds."""
        try:
            reply = await self.text_generator.generate(
                "Hello! Please respond with a simple greeting "
                "and confirm you are working."
            )
        except GenerationUnavailableError as exc:
            return ConnectionStatus(success=False, message=str(exc))
        except Exception as exc:
            return ConnectionStatus(
                success=False, message=f"Generator test failed: {exc}"
            )
        return ConnectionStatus(
            success=True, message="Generator is working correctly.", response=reply
        )

    async def _generate_text(self, prompt: str, fallback: str, action: str) -> str:
        try:
            text = (await self.text_generator.generate(prompt)).strip()
        except Exception as exc:
            logger.warning(
                "Generation failed, using fallback: %s", exc, extra={"action": action}
            )
            return fallback
        return text or fallback


_CONTEXT_PROMPTS = {
    "artisan_onboarding": (
        "You are helping an artisan create their profile. Learn their name, "
        "craft type, experience, and cultural background."
    ),
    "product_description": (
        "You are helping an artisan describe a specific craft product in detail."
    ),
}
_DEFAULT_CONTEXT_PROMPT = (
    "You are a helpful assistant for artisans and craft enthusiasts."
)


def fallback_bio(profile: dict[str, object]) -> str:
    """Templated bio used when generation is unavailable."""
    name = profile.get("name") or "Artisan"
    craft_type = profile.get("craftType") or "traditional crafts"
    experience = profile.get("experienceYears") or "many"
    return (
        f"{name} is a skilled artisan specializing in {craft_type} with "
        f"{experience} years of experience. They are passionate about preserving "
        "traditional craft techniques and sharing their cultural heritage through "
        "their handmade creations."
    )


def fallback_product_summary(product: dict[str, object]) -> str:
    """Templated product summary used when generation is unavailable."""
    name = product.get("name") or "Handcrafted Item"
    materials = product.get("materials") or "traditional materials"
    if isinstance(materials, list):
        materials = (
            ", ".join(str(item) for item in materials) or "traditional materials"
        )
    return (
        f"{name} - A beautiful handcrafted piece made with {materials}, "
        "showcasing traditional artisan techniques and cultural heritage."
    )


def fallback_response(user_input: str, context: str) -> str:
    """Keyword-driven reply used when generation is unavailable."""
    text = user_input.lower()
    if context != "artisan_onboarding":
        return "I understand. Please tell me more about that."
    if "name" in text or "i am" in text or "i'm" in text:
        return "Nice to meet you! What type of craft do you practice?"
    if "pottery" in text or "ceramic" in text:
        return (
            "Pottery is such a beautiful art form! "
            "How long have you been working with clay?"
        )
    if "weav" in text or "textile" in text:
        return "Textile weaving is amazing! What materials do you like to work with?"
    if "carv" in text or "wood" in text:
        return "Wood carving requires such skill! What inspired you to start carving?"
    if "year" in text or "experience" in text:
        return "That's wonderful experience! What do you love most about your craft?"
    return (
        "That sounds fascinating! "
        "Could you tell me more about your craft background?"
    )


def hashtags_to_tags(hashtags: list[str]) -> list[str]:
    """Strip the leading # from hashtags for storage as tags."""
    return [tag.lstrip("#") for tag in hashtags if tag.lstrip("#")]


def _parse_json_object(text: str) -> dict[str, object]:
    match = _JSON_OBJECT.search(text)
    if not match:
        raise ValueError("Could not find JSON in generator response")
    payload = json.loads(match.group(0))
    if not isinstance(payload, dict):
        raise ValueError("Generator response is not a JSON object")
    return payload
