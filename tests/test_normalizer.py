"""Tests for relation decoding and StoryNormalizer."""

import pytest

from story_discovery.data import Category, LocalizationVariant
from story_discovery.normalize import (
    Bare,
    StoryNormalizer,
    Wrapped,
    WrappedSingle,
    classify,
    format_date,
    related_items,
)

# -- Relation encodings --


def test_classify_encodings() -> None:
    assert classify([{"Title": "A"}]) == Bare(({"Title": "A"},))
    assert classify({"data": [{"id": 1}]}) == Wrapped(({"id": 1},))
    assert classify({"data": {"id": 1}}) == WrappedSingle({"id": 1})
    assert classify({"url": "/a.jpg"}) == Bare(({"url": "/a.jpg"},))


@pytest.mark.parametrize("value", [None, {"data": None}, "text", 3])
def test_classify_absent(value: object) -> None:
    assert classify(value) is None
    assert related_items(value) == []


def test_related_items_unwraps_attributes_and_keeps_id() -> None:
    items = related_items({"data": [{"id": 7, "attributes": {"Title": "Climate"}}]})
    assert items == [{"Title": "Climate", "id": 7}]


# -- StoryNormalizer --


def _bare_record() -> dict:
    return {
        "id": 1,
        "Title": "Salt farmers of Kutch",
        "slug": "salt-farmers",
        "Cover_image": {"url": "/uploads/salt.jpg"},
        "categories": [{"Title": "Climate", "slug": "climate"}],
        "Authors": [{"author_name": {"Name": "Asha"}}],
        "localizations": [{"locale": "hi", "title": "नमक", "strap": "", "slug": "namak"}],
        "location": {"name": "Kutch"},
        "Original_published_date": "2024-03-05",
        "type": "Video",
        "is_student_article": False,
    }


def _wrapped_record() -> dict:
    return {
        "id": 1,
        "attributes": {
            "Title": "Salt farmers of Kutch",
            "slug": "salt-farmers",
            "Cover_image": {"data": {"id": 3, "attributes": {"url": "/uploads/salt.jpg"}}},
            "categories": {
                "data": [{"id": 4, "attributes": {"Title": "Climate", "slug": "climate"}}]
            },
            "Authors": [
                {"author_name": {"data": {"id": 5, "attributes": {"Name": "Asha"}}}}
            ],
            "localizations": {
                "data": [
                    {
                        "id": 6,
                        "attributes": {
                            "locale": "hi",
                            "title": "नमक",
                            "strap": "",
                            "slug": "namak",
                        },
                    }
                ]
            },
            "location": {"data": {"id": 8, "attributes": {"name": "Kutch"}}},
            "Original_published_date": "2024-03-05",
            "type": "video",
            "is_student_article": False,
        },
    }


class TestStoryNormalizer:
    """Tests for StoryNormalizer."""

    @pytest.fixture
    def normalizer(self) -> StoryNormalizer:
        return StoryNormalizer(base_url="https://cms.example.org/v1/")

    def test_encodings_normalize_identically(self, normalizer: StoryNormalizer) -> None:
        assert normalizer.normalize(_bare_record()) == normalizer.normalize(_wrapped_record())

    def test_fields(self, normalizer: StoryNormalizer) -> None:
        story = normalizer.normalize(_bare_record())
        assert story.id == 1
        assert story.title == "Salt farmers of Kutch"
        assert story.slug == "salt-farmers"
        assert story.image_url == "https://cms.example.org/v1/uploads/salt.jpg"
        assert story.categories == (Category(title="Climate", slug="climate"),)
        assert story.authors == ("Asha",)
        assert story.localizations == (
            LocalizationVariant(locale="hi", title="नमक", strap="", slug="namak"),
        )
        assert story.location == "Kutch"
        assert story.date == "Mar 05, 2024"
        assert story.type == "video"
        assert story.is_student_article is False
        assert story.available_languages == ()

    def test_absolute_image_url_kept(self, normalizer: StoryNormalizer) -> None:
        record = _bare_record() | {"Cover_image": {"url": "https://img.example.org/a.jpg"}}
        assert normalizer.normalize(record).image_url == "https://img.example.org/a.jpg"

    def test_defaults_for_sparse_record(self, normalizer: StoryNormalizer) -> None:
        story = normalizer.normalize({"id": 2, "Title": "Untitled"})
        assert story.authors == ("PARI",)
        assert story.categories == ()
        assert story.image_url == "/images/categories/default.jpg"
        assert story.location == "India"
        assert story.date == ""
        assert story.type == "article"
        assert story.localizations == ()

    def test_author_without_name_uses_publisher(self, normalizer: StoryNormalizer) -> None:
        record = {"Authors": [{"author_name": {"data": None}}, {"Name": "Ravi"}]}
        assert normalizer.normalize(record).authors == ("PARI", "Ravi")

    def test_custom_publisher_name(self) -> None:
        story = StoryNormalizer(publisher_name="Archive").normalize({"categories": [{}]})
        assert story.authors == ("Archive",)
        assert story.categories == (Category(title="Archive"),)

    def test_location_falls_back_to_auto_suggestion(self, normalizer: StoryNormalizer) -> None:
        record = {"location": {"data": None}, "location_auto_suggestion": "Wardha"}
        assert normalizer.normalize(record).location == "Wardha"

    def test_localization_without_locale_skipped(self, normalizer: StoryNormalizer) -> None:
        record = {"localizations": [{"slug": "x"}, {"locale": "ta", "slug": "y"}]}
        story = normalizer.normalize(record)
        assert [v.locale for v in story.localizations] == ["ta"]

    def test_student_flag_must_be_true(self, normalizer: StoryNormalizer) -> None:
        assert normalizer.normalize({"is_student_article": True}).is_student_article
        assert not normalizer.normalize({"is_student_article": "yes"}).is_student_article

    def test_normalize_all(self, normalizer: StoryNormalizer) -> None:
        stories = normalizer.normalize_all([_bare_record(), {"id": 2}])
        assert [s.id for s in stories] == [1, 2]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("2024-03-05", "Mar 05, 2024"),
        ("2023-12-31T18:30:00.000Z", "Dec 31, 2023"),
        ("", ""),
        (None, ""),
        ("soon", ""),
    ],
)
def test_format_date(raw: object, expected: str) -> None:
    assert format_date(raw) == expected
