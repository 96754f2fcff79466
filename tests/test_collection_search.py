# Copyright (c) 2025-2026, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for value-equality search, predicates, quantifiers and randomness."""

import random
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from fluentseq import Collection, Undefined


@dataclass
class Point:
    x: int
    y: int


class Tag(BaseModel):
    name: str


class TestContains:
    def test_contains(self, fruits):
        assert fruits.contains("cherry")
        assert not fruits.contains("taco")

    def test_contains_is_structural(self):
        c = Collection(Point(1, 2), Point(3, 4))
        assert c.contains(Point(3, 4))
        assert not c.contains(Point(4, 3))

    def test_contains_pydantic_models(self):
        c = Collection(Tag(name="a"), Tag(name="b"))
        assert c.contains(Tag(name="b"))

    def test_contains_nested_structures(self):
        c = Collection([1, {"a": [2, 3]}], [4])
        assert c.contains([1, {"a": [2, 3]}])

    def test_contains_by(self, fruits):
        assert fruits.contains_by(lambda i, item: item.startswith("straw"))
        assert not fruits.contains_by(lambda i, item: item == "taco")

    def test_contains_by_receives_index(self, fruits):
        assert fruits.contains_by(lambda i, item: i == 3 and item == "cherry")


class TestCount:
    def test_count(self):
        c = Collection("apple", "orange", "orange", "strawberry")
        assert c.count("orange") == 2
        assert c.count("kiwi") == 0

    def test_count_after_push(self, fruits):
        fruits.push("blop")
        fruits.push("blop")
        assert fruits.count("blop") == 2

    def test_count_by(self, fruits):
        fruits.push("blop", "blop")
        assert fruits.count_by(lambda item: item == "blop") == 2

    def test_count_by_on_empty(self):
        assert Collection().count_by(lambda item: True) == 0


class TestPushDistinct:
    def test_skips_existing(self):
        c = Collection("apple", "orange")
        assert c.push_distinct("orange", "watermelon") == 3
        assert c.items == ["apple", "orange", "watermelon"]

    def test_skips_repeats_within_the_batch(self):
        c = Collection("apple", "orange", "strawberry")
        c.push_distinct("orange", "orange", "watermelon", "watermelon")
        assert c.items == ["apple", "orange", "strawberry", "watermelon"]

    def test_structural_duplicates(self):
        c = Collection(Point(1, 1))
        assert c.push_distinct(Point(1, 1), Point(2, 2)) == 2

    def test_does_not_dedupe_existing_content(self):
        c = Collection("a", "a")
        assert c.push_distinct("b") == 3


class TestFind:
    def test_find_first_match(self, fruits):
        assert fruits.find(lambda i, item: item.startswith("ap")) == "apple"

    def test_find_no_match_is_undefined(self, fruits):
        assert fruits.find(lambda i, item: item == "taco") is Undefined

    def test_find_default(self, fruits):
        assert fruits.find(lambda i, item: False, default="") == ""

    def test_find_can_return_falsy_element(self):
        c = Collection(0, 1, 2)
        assert c.find(lambda i, item: item == 0) == 0

    def test_find_index(self, fruits):
        find = fruits.at(3)
        assert fruits.find_index(lambda i, item: item == find) == 3
        assert fruits.find_index(lambda i, item: item == "taco") == -1

    def test_find_and_find_index_agree(self, fruits):
        index = fruits.find_index(lambda i, item: "err" in item)
        assert fruits.at(index) == fruits.find(lambda i, item: "err" in item)

    def test_last_index_of(self):
        c = Collection("apple", "orange", "orange", "strawberry")
        assert c.last_index_of("orange") == 2
        assert c.last_index_of("apple") == 0
        assert c.last_index_of("kiwi") == -1


class TestQuantifiers:
    def test_some(self, fruits):
        assert fruits.some(lambda i, item: item == "banana")
        assert not fruits.some(lambda i, item: item == "taco")

    def test_none(self, fruits):
        assert fruits.none(lambda i, item: item == "taco")
        assert not fruits.none(lambda i, item: item == "banana")

    def test_all(self, fruits):
        assert fruits.all(lambda i, item: len(item) > 1)
        assert not fruits.all(lambda i, item: item.startswith("a"))

    def test_on_empty(self):
        c = Collection()
        assert not c.some(lambda i, item: True)
        assert c.none(lambda i, item: True)
        assert c.all(lambda i, item: False)

    def test_all_sees_indices(self):
        c = Collection(10, 11, 12)
        assert c.all(lambda i, item: item - i == 10)


class TestRandom:
    def test_random_index_in_range(self, fruits, seeded_rng):
        c = Collection.from_iterable(fruits, rng=seeded_rng)
        for _ in range(200):
            index = c.random_index()
            assert 0 <= index < c.length()

    def test_random_index_reaches_last_index(self, seeded_rng):
        c = Collection("a", "b", "c", rng=seeded_rng)
        seen = {c.random_index() for _ in range(300)}
        assert seen == {0, 1, 2}

    def test_random_index_single_element(self):
        assert Collection("only").random_index() == 0

    def test_random_index_empty(self):
        assert Collection().random_index() == -1

    def test_random_element_is_contained(self, fruits):
        for _ in range(50):
            assert fruits.contains(fruits.random())

    def test_random_empty(self):
        assert Collection().random() is Undefined
        assert Collection().random(default=None) is None

    def test_injected_rng_is_deterministic(self, fruit_names):
        a = Collection(*fruit_names, rng=random.Random(7))
        b = Collection(*fruit_names, rng=random.Random(7))
        assert [a.random() for _ in range(10)] == [
            b.random() for _ in range(10)
        ]

    def test_derived_collections_keep_the_rng(self, seeded_rng):
        c = Collection(1, 2, 3, rng=seeded_rng)
        assert c.filter(lambda x: x > 1).rng is seeded_rng
        assert c.slice(0, 2).rng is seeded_rng

    @pytest.mark.parametrize("size", [2, 5])
    def test_random_index_covers_every_index(self, size, seeded_rng):
        c = Collection(*range(size), rng=seeded_rng)
        seen = {c.random_index() for _ in range(100 * size)}
        assert seen == set(range(size))
