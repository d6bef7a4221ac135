"""Tests for rule-based field extraction."""

from craftstory.domain.questions import FieldDescriptor, FieldShape
from craftstory.services.extraction import RuleBasedExtractor, coerce_value, split_list

NAME = FieldDescriptor("name", FieldShape.TEXT)
CRAFT = FieldDescriptor("craftType", FieldShape.TEXT)
YEARS = FieldDescriptor("experienceYears", FieldShape.NUMBER)
MATERIALS = FieldDescriptor("materials", FieldShape.LIST)
PRICE = FieldDescriptor("price", FieldShape.TEXT)


def test_extracts_name_from_introduction() -> None:
    extractor = RuleBasedExtractor()

    assert extractor.extract("My name is Priya and I make pottery", NAME) == "Priya"
    assert extractor.extract("I'm Ravi Kumar, a weaver", NAME) == "Ravi Kumar"


def test_extracts_product_name_from_called_phrase() -> None:
    extractor = RuleBasedExtractor()

    name = extractor.extract("It is called the Jaipur Blue Vase.", NAME)

    assert name == "Jaipur Blue Vase"


def test_craft_type_is_normalized() -> None:
    extractor = RuleBasedExtractor()

    assert extractor.extract("I do ceramics at home", CRAFT) == "Pottery & Ceramics"
    assert extractor.extract("I am a weaver", CRAFT) == "Textile Weaving"
    assert extractor.extract("Embroidery on silk", CRAFT) == "Embroidery"


def test_number_fields_take_first_integer() -> None:
    extractor = RuleBasedExtractor()

    assert extractor.extract("About 20 years now", YEARS) == 20
    assert extractor.extract("since I was 12, so 30 in total", YEARS) == 12
    assert extractor.extract("a long time", YEARS) == "a long time"


def test_list_fields_split_naively() -> None:
    extractor = RuleBasedExtractor()

    assert extractor.extract("I use clay, sand and natural dyes", MATERIALS) == [
        "clay",
        "sand",
        "natural dyes",
    ]
    split = extractor.extract("silk; cotton & zari", MATERIALS)
    assert split == ["silk", "cotton", "zari"]


def test_price_strips_separators() -> None:
    extractor = RuleBasedExtractor()

    assert extractor.extract("I would sell it for Rs. 1,500", PRICE) == "1500"
    assert extractor.extract("2,000 rupees", PRICE) == "2000"


def test_text_fields_fall_back_to_transcript() -> None:
    extractor = RuleBasedExtractor()
    field = FieldDescriptor("culturalBackground", FieldShape.TEXT)

    transcript = "  Our family has painted Madhubani art for generations "

    assert extractor.extract(transcript, field) == (
        "Our family has painted Madhubani art for generations"
    )


def test_coerce_value_matches_shape() -> None:
    assert coerce_value(["a", " ", "b"], FieldShape.LIST) == ["a", "b"]
    assert coerce_value(12.6, FieldShape.NUMBER) == 13
    assert coerce_value("15 years", FieldShape.NUMBER) == 15
    assert coerce_value(["clay", "glaze"], FieldShape.TEXT) == "clay, glaze"
    assert split_list("") == []
