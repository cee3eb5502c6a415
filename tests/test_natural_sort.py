"""Unit tests for framedir.natural_sort."""

import random

from framedir.natural_sort import natural_sort_key, natural_sorted


class TestNaturalSortKey:
    """Test the natural ordering key."""

    def test_numbers_compare_numerically(self):
        assert natural_sort_key("img2.png") < natural_sort_key("img10.png")

    def test_plain_text_compares_lexically(self):
        assert natural_sort_key("apple") < natural_sort_key("banana")

    def test_case_insensitive(self):
        assert natural_sort_key("B1") > natural_sort_key("a2")

    def test_leading_zeros_tie_broken_by_text(self):
        # Same numeric value, ordering must still be total and stable
        assert natural_sort_key("a01") != natural_sort_key("a1")
        assert natural_sorted(["a1", "a01"]) == natural_sorted(["a01", "a1"])

    def test_number_prefix(self):
        assert natural_sorted(["10", "9", "100"]) == ["9", "10", "100"]

    def test_multiple_number_runs(self):
        names = ["s2_f10", "s10_f1", "s2_f9", "s1_f100"]
        assert natural_sorted(names) == ["s1_f100", "s2_f9", "s2_f10", "s10_f1"]

    def test_full_paths(self):
        paths = ["/data/seq10/f1.png", "/data/seq2/f3.png", "/data/seq2/f20.png"]
        assert natural_sorted(paths) == [
            "/data/seq2/f3.png",
            "/data/seq2/f20.png",
            "/data/seq10/f1.png",
        ]


class TestNaturalSorted:
    """Test sorting whole collections."""

    def test_frame_numbers(self):
        names = [f"frame{i}.png" for i in range(25)]
        shuffled = names.copy()
        random.Random(42).shuffle(shuffled)
        assert natural_sorted(shuffled) == names

    def test_returns_new_list(self):
        names = ["b", "a"]
        result = natural_sorted(names)
        assert result == ["a", "b"]
        assert names == ["b", "a"]

    def test_empty(self):
        assert natural_sorted([]) == []
