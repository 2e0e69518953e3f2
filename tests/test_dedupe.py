# tests/test_dedupe.py
import pytest
from travel_pulse.dedupe import dedupe, dedupe_titles, edit_distance, key_phrase, similarity


def text_of(item):
    return item[1]


class TestEditDistance:
    def test_classic_example(self):
        assert edit_distance("kitten", "sitting") == 3

    def test_empty_strings(self):
        assert edit_distance("", "abc") == 3
        assert edit_distance("abc", "") == 3
        assert edit_distance("", "") == 0

    def test_identical(self):
        assert edit_distance("shinjuku", "shinjuku") == 0

    def test_unit_cost_operations(self):
        """Insert, delete and substitute each cost 1; no transposition shortcut"""
        assert edit_distance("abc", "abcd") == 1
        assert edit_distance("abcd", "abc") == 1
        assert edit_distance("ab", "ba") == 2


class TestSimilarity:
    def test_identical_strings(self):
        assert similarity("abc", "abc") == 1.0

    def test_two_empty_strings(self):
        assert similarity("", "") == 1.0

    def test_one_substitution(self):
        """(4 - 1) / 4"""
        assert similarity("abcd", "abce") == pytest.approx(0.75)

    def test_symmetric(self):
        assert similarity("tokyo tower", "tokyo towers") == similarity("tokyo towers", "tokyo tower")


class TestKeyPhrase:
    def test_normalizes_case_punctuation_and_whitespace(self):
        assert key_phrase("Avoid,  the CROWDS!") == "avoid the crowds"

    def test_truncates_to_first_eight_words(self):
        text = "Avoid the crowds at Senso-ji by going early in the morning please"
        assert key_phrase(text) == "avoid the crowds at sensoji by going early"


class TestDedupe:
    def test_punctuation_and_case_variants_collapse(self):
        """Only one representative of a near-identical group survives"""
        items = [
            (1, "Avoid eating while walking in Tokyo."),
            (2, "avoid eating while walking in tokyo!!"),
            (3, "Book ryokan stays two months ahead in Kyoto"),
        ]
        result = dedupe(items, key=text_of)
        assert [item[0] for item in result] == [1, 3]

    def test_keeps_first_occurrence(self):
        """Stable: the earliest item of a duplicate group is retained"""
        items = [
            (1, "Get a Suica card for the trains"),
            (2, "Get a Suica card for the train"),
        ]
        assert dedupe(items, key=text_of) == [(1, "Get a Suica card for the trains")]

    def test_threshold_is_strict(self):
        """Exactly 0.75 similar is not a duplicate"""
        items = [(1, "abcd"), (2, "abce")]
        assert len(dedupe(items, key=text_of)) == 2

    def test_idempotent(self):
        """Running dedupe on its own output removes nothing more"""
        items = [
            (1, "Visit Fushimi Inari at dawn"),
            (2, "Visit Fushimi Inari at dawn!"),
            (3, "Rent a bicycle in Kyoto"),
            (4, "Rent a bicycle in kyoto."),
            (5, "Try the yatai stalls in Fukuoka at night"),
        ]
        once = dedupe(items, key=text_of)
        assert dedupe(once, key=text_of) == once
        assert [item[0] for item in once] == [1, 3, 5]

    def test_empty_input(self):
        assert dedupe([], key=text_of) == []


def test_dedupe_titles_case_insensitive():
    """Exact title pass keeps the first item per lower-cased title"""
    items = [(1, "Tokyo Tower"), (2, "TOKYO TOWER"), (3, "Tokyo Skytree")]
    assert dedupe_titles(items, key=text_of) == [(1, "Tokyo Tower"), (3, "Tokyo Skytree")]


def test_dedupe_titles_is_exact():
    """Near-identical titles are not merged by the exact pass"""
    items = [(1, "Tokyo Tower"), (2, "Tokyo Tower!")]
    assert len(dedupe_titles(items, key=text_of)) == 2
