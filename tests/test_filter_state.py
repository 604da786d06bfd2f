"""Tests for FilterState URL parsing, serialization and mutation."""

import pytest

from story_discovery.data import ContentType, FilterState
from story_discovery.filters import (
    clear_all,
    clear_facet,
    from_url,
    parse_content_type,
    set_facet,
    strip_filters,
    to_url,
)


class TestFromUrl:
    """Tests for from_url."""

    def test_parses_every_facet(self) -> None:
        state = from_url(
            "?types=climate,health&author=Asha&location=Pune,Nagpur"
            "&dates=start:2024-01-01,end:2024-06-30,7days&content=video,student"
            "&languages=hi,bn"
        )
        assert state.categories == ("climate", "health")
        assert state.author == "Asha"
        assert state.location == ("Pune", "Nagpur")
        assert state.date_from == "2024-01-01"
        assert state.date_to == "2024-06-30"
        assert state.date_presets == ("7days",)
        assert state.content_types == (ContentType.VIDEO, ContentType.STUDENT)
        assert state.languages == ("hi", "bn")

    def test_empty_query_is_empty_state(self) -> None:
        assert from_url("").is_empty
        assert from_url("?").is_empty

    def test_ignores_unknown_params(self) -> None:
        state = from_url("locale=hi&types=climate&utm_source=x")
        assert state == FilterState(categories=("climate",))

    def test_first_occurrence_wins(self) -> None:
        state = from_url("types=climate&types=health")
        assert state.categories == ("climate",)

    def test_dedupes_and_drops_blanks(self) -> None:
        state = from_url("types=climate,,climate,health,")
        assert state.categories == ("climate", "health")

    def test_author_is_not_split_on_commas(self) -> None:
        state = from_url("author=Sharma,%20Asha")
        assert state.author == "Sharma, Asha"

    def test_single_day_sets_both_bounds(self) -> None:
        state = from_url("dates=date:2024-03-05")
        assert state.date_from == "2024-03-05"
        assert state.date_to == "2024-03-05"

    def test_legacy_content_labels(self) -> None:
        state = from_url("content=Video%20Articles,Student%20Articles,Editorials")
        assert state.content_types == (
            ContentType.VIDEO,
            ContentType.STUDENT,
            ContentType.ARTICLE,
        )

    def test_unknown_content_type_dropped(self) -> None:
        state = from_url("content=video,podcast")
        assert state.content_types == (ContentType.VIDEO,)

    def test_languages_kept_as_given(self) -> None:
        assert from_url("languages=HI,bn").languages == ("HI", "bn")


class TestToUrl:
    """Tests for to_url and round trips."""

    def test_empty_state_is_empty_string(self) -> None:
        assert to_url(FilterState()) == ""

    def test_round_trip(self) -> None:
        state = FilterState(
            categories=("climate", "health"),
            author="Asha",
            location=("Pune",),
            date_from="2024-01-01",
            date_to="2024-06-30",
            date_presets=("30days",),
            content_types=(ContentType.AUDIO,),
            languages=("hi", "bn"),
        )
        assert from_url(to_url(state)) == state

    def test_language_case_round_trip(self) -> None:
        state = FilterState(languages=("HI", "bn"))
        assert from_url(to_url(state)) == state
        assert set_facet(FilterState(), "languages", "HI") == FilterState(languages=("HI",))

    def test_single_day_round_trip(self) -> None:
        state = FilterState(date_from="2024-03-05", date_to="2024-03-05")
        assert to_url(state) == "dates=date:2024-03-05"
        assert from_url(to_url(state)) == state

    def test_commas_stay_readable(self) -> None:
        assert to_url(FilterState(categories=("a", "b"))) == "types=a,b"

    def test_strip_filters_keeps_other_params(self) -> None:
        assert strip_filters("?types=climate&locale=hi&languages=bn") == "locale=hi"


class TestMutations:
    """Tests for set_facet, clear_facet and clear_all."""

    def test_set_facet_replaces_values(self) -> None:
        state = FilterState(categories=("climate",))
        updated = set_facet(state, "types", ["health", "women"])
        assert updated.categories == ("health", "women")
        assert state.categories == ("climate",)

    def test_set_facet_accepts_comma_string(self) -> None:
        assert set_facet(FilterState(), "languages", "hi,bn").languages == ("hi", "bn")

    def test_set_author_blank_clears(self) -> None:
        state = set_facet(FilterState(author="Asha"), "author", "  ")
        assert state.author is None

    def test_set_unknown_facet_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown facet"):
            set_facet(FilterState(), "colour", "red")

    def test_clear_single_value_keeps_siblings(self) -> None:
        state = FilterState(categories=("climate", "health", "women"))
        assert clear_facet(state, "types", "health").categories == ("climate", "women")

    def test_clear_whole_facet(self) -> None:
        state = FilterState(languages=("hi", "bn"), categories=("climate",))
        cleared = clear_facet(state, "languages")
        assert cleared.languages == ()
        assert cleared.categories == ("climate",)

    def test_clear_date_bound_clears_both_bounds(self) -> None:
        state = FilterState(
            date_from="2024-01-01", date_to="2024-06-30", date_presets=("7days",)
        )
        cleared = clear_facet(state, "dates", "start:2024-01-01")
        assert cleared.date_from is None
        assert cleared.date_to is None
        assert cleared.date_presets == ("7days",)

    def test_clear_date_preset_keeps_bounds(self) -> None:
        state = FilterState(date_from="2024-01-01", date_presets=("7days", "1year"))
        cleared = clear_facet(state, "dates", "7days")
        assert cleared.date_presets == ("1year",)
        assert cleared.date_from == "2024-01-01"

    def test_clear_content_by_legacy_label(self) -> None:
        state = FilterState(content_types=(ContentType.VIDEO, ContentType.AUDIO))
        cleared = clear_facet(state, "content", "Video Articles")
        assert cleared.content_types == (ContentType.AUDIO,)

    def test_clear_unknown_facet_raises(self) -> None:
        with pytest.raises(ValueError):
            clear_facet(FilterState(), "colour")

    def test_clear_all(self) -> None:
        assert clear_all() == FilterState()
        assert clear_all().is_empty


def test_parse_content_type_case_insensitive() -> None:
    assert parse_content_type("Video") == ContentType.VIDEO
    assert parse_content_type("nope") is None


def test_active_facets_order() -> None:
    state = from_url("languages=hi&types=climate&dates=7days")
    assert state.active_facets == ["types", "dates", "languages"]
