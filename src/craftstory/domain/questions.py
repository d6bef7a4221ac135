"""Question scripts for the voice-driven conversations."""

from dataclasses import dataclass
from enum import StrEnum


class FieldShape(StrEnum):
    """Expected shape of an extracted field value."""

    TEXT = "text"
    LIST = "list"
    NUMBER = "number"


class FlowKind(StrEnum):
    """Kind of conversation a session runs."""

    ONBOARDING = "onboarding"
    LISTING = "listing"


@dataclass(frozen=True)
class FieldDescriptor:
    """Target field for extraction."""

    name: str
    shape: FieldShape = FieldShape.TEXT
    hint: str = ""


@dataclass(frozen=True)
class Question:
    """One scripted question with localized prompts."""

    id: str
    field: FieldDescriptor
    prompts: dict[str, str]
    required: bool = True
    skippable: bool = False

    def prompt_for(self, language: str) -> str:
        """Return the prompt in the given language, falling back to English."""
        return self.prompts.get(language) or self.prompts["en"]


@dataclass(frozen=True)
class ConversationScript:
    """Ordered questions plus the greeting for one flow kind."""

    kind: FlowKind
    greeting: dict[str, str]
    questions: tuple[Question, ...]

    def greeting_for(self, language: str) -> str:
        return self.greeting.get(language) or self.greeting["en"]


ONBOARDING_SCRIPT = ConversationScript(
    kind=FlowKind.ONBOARDING,
    greeting={
        "en": "Hello! I will ask you a few questions to create your artisan profile.",
        "hi": "नमस्ते! आपकी कारीगर प्रोफ़ाइल बनाने के लिए मैं कुछ सवाल पूछूंगी।",
        "ta": "வணக்கம்! உங்கள் கைவினைஞர் சுயவிவரத்தை உருவாக்க சில கேள்விகள் கேட்பேன்.",
        "bn": "নমস্কার! আপনার কারিগর প্রোফাইল তৈরি করতে আমি কয়েকটি প্রশ্ন করব।",
    },
    questions=(
        Question(
            id="name",
            field=FieldDescriptor("name", FieldShape.TEXT, "the artisan's name"),
            prompts={
                "en": "What is your name?",
                "hi": "आपका नाम क्या है?",
                "ta": "உங்கள் பெயர் என்ன?",
                "bn": "আপনার নাম কী?",
            },
        ),
        Question(
            id="craftType",
            field=FieldDescriptor("craftType", FieldShape.TEXT, "type of craft"),
            prompts={
                "en": "What type of craft do you practice?",
                "hi": "आप किस प्रकार का शिल्प करते हैं?",
                "ta": "நீங்கள் எந்த வகையான கைவினை செய்கிறீர்கள்?",
                "bn": "আপনি কোন ধরনের কারুশিল্প করেন?",
            },
        ),
        Question(
            id="experienceYears",
            field=FieldDescriptor(
                "experienceYears", FieldShape.NUMBER, "years of experience"
            ),
            prompts={
                "en": "How many years of experience do you have?",
                "hi": "आपके पास कितने साल का अनुभव है?",
                "ta": "உங்களுக்கு எத்தனை ஆண்டு அனுபவம் உள்ளது?",
                "bn": "আপনার কত বছরের অভিজ্ঞতা আছে?",
            },
        ),
        Question(
            id="culturalBackground",
            field=FieldDescriptor(
                "culturalBackground", FieldShape.TEXT, "cultural background"
            ),
            prompts={
                "en": "Tell us about your cultural background and heritage.",
                "hi": "अपनी सांस्कृतिक पृष्ठभूमि और विरासत के बारे में बताएं।",
                "ta": "உங்கள் கலாச்சார பின்னணி மற்றும் பாரம்பரியம் பற்றி சொல்லுங்கள்.",
                "bn": "আপনার সাংস্কৃতিক পটভূমি এবং ঐতিহ্য সম্পর্কে বলুন।",
            },
        ),
        Question(
            id="location",
            field=FieldDescriptor("location", FieldShape.TEXT, "city and state"),
            prompts={
                "en": "Where are you based? Tell me your city and state.",
                "hi": "आप कहाँ रहते हैं? अपना शहर और राज्य बताइए।",
                "ta": (
                    "நீங்கள் எங்கே இருக்கிறீர்கள்? "
                    "உங்கள் நகரம் மற்றும் மாநிலத்தைச் சொல்லுங்கள்."
                ),
                "bn": "আপনি কোথায় থাকেন? আপনার শহর এবং রাজ্য বলুন।",
            },
            required=False,
            skippable=True,
        ),
    ),
)

LISTING_SCRIPT = ConversationScript(
    kind=FlowKind.LISTING,
    greeting={
        "en": "Hello! I am your friend, I will help you list your product.",
        "hi": (
            "नमस्ते! मैं आपकी दोस्त हूँ, "
            "अपना प्रोडक्ट लिस्ट करने में आपकी मदद करूंगी।"
        ),
        "ta": "வணக்கம்! நான் உங்கள் நண்பர், உங்கள் பொருளை பட்டியலிட உதவுவேன்.",
        "bn": "নমস্কার! আমি আপনার বন্ধু, আপনার পণ্য তালিকাভুক্ত করতে সাহায্য করব।",
    },
    questions=(
        Question(
            id="productName",
            field=FieldDescriptor("name", FieldShape.TEXT, "name of the craft piece"),
            prompts={
                "en": "What is the name of your craft?",
                "hi": "आपकी कला का नाम क्या है?",
                "ta": "உங்கள் கைவினையின் பெயர் என்ன?",
                "bn": "আপনার কারুশিল্পের নাম কী?",
            },
        ),
        Question(
            id="description",
            field=FieldDescriptor("description", FieldShape.TEXT, "what it is"),
            prompts={
                "en": "Describe your craft in detail. What makes it special?",
                "hi": "अपनी कला का विस्तार से वर्णन करें। इसे क्या खास बनाता है?",
                "ta": "உங்கள் கைவினையை விரிவாக விவரிக்கவும். இதை சிறப்பாக்குவது என்ன?",
                "bn": "আপনার কারুশিল্প বিস্তারিত বর্ণনা করুন। এটিকে কী বিশেষ করে তোলে?",
            },
        ),
        Question(
            id="material",
            field=FieldDescriptor("materials", FieldShape.LIST, "list of materials"),
            prompts={
                "en": (
                    "What material is this made of? "
                    "Please tell me about the materials you used."
                ),
                "hi": (
                    "यह किस मैटेरियल से बना है? "
                    "कृपया बताएं कि आपने कौन से मैटेरियल का उपयोग किया है।"
                ),
                "ta": (
                    "இது எந்த பொருளால் செய்யப்பட்டது? "
                    "நீங்கள் பயன்படுத்திய பொருட்களைப் பற்றி சொல்லுங்கள்."
                ),
                "bn": (
                    "এটি কোন উপাদান দিয়ে তৈরি? "
                    "আপনি যে উপাদানগুলি ব্যবহার করেছেন সে সম্পর্কে বলুন।"
                ),
            },
        ),
        Question(
            id="techniques",
            field=FieldDescriptor("techniques", FieldShape.LIST, "list of techniques"),
            prompts={
                "en": "What techniques did you use?",
                "hi": "आपने किन तकनीकों का उपयोग किया?",
                "ta": "நீங்கள் என்ன நுட்பங்களைப் பயன்படுத்தினீர்கள்?",
                "bn": "আপনি কোন কৌশল ব্যবহার করেছেন?",
            },
            required=False,
            skippable=True,
        ),
        Question(
            id="story",
            field=FieldDescriptor("story", FieldShape.TEXT, "story and inspiration"),
            prompts={
                "en": (
                    "Tell me the story of this craft. "
                    "How did you make it? What inspired you?"
                ),
                "hi": "इसकी कहानी बताइए, आपने इसे कैसे बनाया? आपको क्या प्रेरणा मिली?",
                "ta": "இந்த கைவினையின் கதையைச் சொல்லுங்கள். இதை எப்படி செய்தீர்கள்?",
                "bn": "এই কারুশিল্পের গল্প বলুন। আপনি এটি কীভাবে তৈরি করেছেন?",
            },
            required=False,
            skippable=True,
        ),
        Question(
            id="pricing",
            field=FieldDescriptor("price", FieldShape.TEXT, "asking price"),
            prompts={
                "en": "What price would you like to set for it?",
                "hi": "आप इसकी क्या कीमत रखना चाहते हैं?",
                "ta": "இதற்கு என்ன விலை வைக்க விரும்புகிறீர்கள்?",
                "bn": "আপনি এর জন্য কী দাম রাখতে চান?",
            },
            required=False,
            skippable=True,
        ),
        Question(
            id="shipping",
            field=FieldDescriptor("location", FieldShape.TEXT, "city and state"),
            prompts={
                "en": "For shipping, can you tell me your city and state?",
                "hi": "शिपिंग के लिए, क्या आप अपना शहर और राज्य बता सकते हैं?",
                "ta": (
                    "கப்பல் போக்குவரத்துக்காக, "
                    "உங்கள் நகரம் மற்றும் மாநிலத்தைச் சொல்ல முடியுமா?"
                ),
                "bn": "শিপিংয়ের জন্য, আপনি কি আপনার শহর এবং রাজ্য বলতে পারেন?",
            },
        ),
    ),
)

SCRIPTS: dict[FlowKind, ConversationScript] = {
    FlowKind.ONBOARDING: ONBOARDING_SCRIPT,
    FlowKind.LISTING: LISTING_SCRIPT,
}

SKIP_WORDS: dict[str, frozenset[str]] = {
    "en": frozenset({"skip", "next", "pass"}),
    "hi": frozenset({"स्किप", "अगला", "छोड़ो", "छोड़ें"}),
    "ta": frozenset({"ஸ்கிப்", "அடுத்து", "அடுத்தது"}),
    "bn": frozenset({"স্কিপ", "পরবর্তী", "বাদ"}),
}

ACKNOWLEDGEMENTS: dict[str, str] = {
    "en": "Thank you!",
    "hi": "धन्यवाद!",
    "ta": "நன்றி!",
    "bn": "ধন্যবাদ!",
}

REASK_PREFIX: dict[str, str] = {
    "en": "This one is needed to continue.",
    "hi": "आगे बढ़ने के लिए यह ज़रूरी है।",
    "ta": "தொடர இது தேவை.",
    "bn": "এগিয়ে যেতে এটি প্রয়োজন।",
}

COMPLETION_MESSAGES: dict[str, str] = {
    "en": "Thank you! I have all the information I need.",
    "hi": "धन्यवाद! मुझे सारी जानकारी मिल गई है।",
    "ta": "நன்றி! எனக்குத் தேவையான எல்லா தகவலும் கிடைத்துவிட்டது.",
    "bn": "ধন্যবাদ! আমার প্রয়োজনীয় সব তথ্য পেয়েছি।",
}


def localized(messages: dict[str, str], language: str) -> str:
    """Return a localized message, falling back to English."""
    return messages.get(language) or messages["en"]
