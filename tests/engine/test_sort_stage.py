"""Tests for the sort stage factory."""

from typing import Any

from smart_table.engine.stages.sort import default_comparator, default_sort_factory


def _names(items: list[dict[str, Any]]) -> list[str]:
    return [item["name"] for item in items]


class TestDefaultComparator:
    def test_orders_by_less_than(self) -> None:
        assert default_comparator(1, 2) == -1
        assert default_comparator(2, 1) == 1
        assert default_comparator("a", "a") == 0

    def test_missing_values_sort_last(self) -> None:
        assert default_comparator(None, 1) == 1
        assert default_comparator(1, None) == -1
        assert default_comparator(None, None) == 0

    def test_unorderable_values_fall_back_to_type_then_text(self) -> None:
        assert default_comparator(1, "b") == -1  # "int" < "str"
        assert default_comparator("b", 1) == 1
        assert default_comparator({"a": 1}, {"a": 2}) == -1


class TestSortFactory:
    def test_mixed_types_sort_without_error(self) -> None:
        rows = [{"n": 1}, {"n": "b"}, {"n": 2}, {}]

        asc = default_sort_factory({"pointer": "n", "direction": "asc"})(rows)
        desc = default_sort_factory({"pointer": "n", "direction": "desc"})(rows)

        assert asc == [{"n": 1}, {"n": 2}, {"n": "b"}, {}]
        assert desc == [{}, {"n": "b"}, {"n": 2}, {"n": 1}]

    def test_ascending_by_nested_pointer(self, people: list[dict[str, Any]]) -> None:
        stage = default_sort_factory({"pointer": "address.city", "direction": "asc"})

        result = stage(people)

        assert _names(result) == [
            "Ada Lovelace",
            "Grace Hopper",
            "Edsger Dijkstra",
            "Alan Turing",
            "Barbara Liskov",  # no address
        ]

    def test_descending(self, records: list[dict[str, Any]]) -> None:
        stage = default_sort_factory({"pointer": "n", "direction": "desc"})

        assert [r["n"] for r in stage(records)] == [5, 4, 3, 2, 1]

    def test_direction_defaults_to_ascending(self) -> None:
        stage = default_sort_factory({"pointer": "n"})

        assert stage([{"n": 2}, {"n": 1}]) == [{"n": 1}, {"n": 2}]

    def test_ties_keep_source_order_in_both_directions(self) -> None:
        rows = [{"k": 1, "id": "a"}, {"k": 0, "id": "b"}, {"k": 1, "id": "c"}]

        asc = default_sort_factory({"pointer": "k", "direction": "asc"})(rows)
        desc = default_sort_factory({"pointer": "k", "direction": "desc"})(rows)

        assert [r["id"] for r in asc] == ["b", "a", "c"]
        assert [r["id"] for r in desc] == ["a", "c", "b"]

    def test_custom_comparator(self) -> None:
        by_length = lambda a, b: len(a) - len(b)  # noqa: E731
        stage = default_sort_factory({"pointer": "w", "direction": "asc", "comparator": by_length})

        result = stage([{"w": "ccc"}, {"w": "a"}, {"w": "bb"}])

        assert [r["w"] for r in result] == ["a", "bb", "ccc"]

    def test_none_direction_keeps_order_in_new_list(self, records: list[dict[str, Any]]) -> None:
        stage = default_sort_factory({"pointer": "n", "direction": "none"})

        result = stage(records)

        assert result == records
        assert result is not records

    def test_no_pointer_is_identity_copy(self, records: list[dict[str, Any]]) -> None:
        for criteria in (None, {}, {"direction": "desc"}):
            result = default_sort_factory(criteria)(records)
            assert result == records
            assert result is not records

    def test_input_is_not_mutated(self, records: list[dict[str, Any]]) -> None:
        original = list(records)

        default_sort_factory({"pointer": "n", "direction": "desc"})(records)

        assert records == original
