"""Tests for clone(), merge() and value kinds."""

import pytest as _pytest

import conftree.errors as errors
import conftree.values as values


class TestKindOf:
    """Tests for value classification."""

    def test_mappings(self) -> None:
        """Dicts are mappings."""
        assert values.kind_of({}) is values.ValueKind.MAPPING

    def test_sequences(self) -> None:
        """Lists and tuples are sequences."""
        assert values.kind_of([]) is values.ValueKind.SEQUENCE
        assert values.kind_of((1, 2)) is values.ValueKind.SEQUENCE

    def test_strings_are_scalars(self) -> None:
        """Strings and bytes are scalars, not sequences."""
        assert values.kind_of("abc") is values.ValueKind.SCALAR
        assert values.kind_of(b"abc") is values.ValueKind.SCALAR

    def test_other_scalars(self) -> None:
        """Numbers, booleans, None and callables are scalars."""
        for value in (1, 1.5, True, None, len):
            assert values.kind_of(value) is values.ValueKind.SCALAR


class TestClone:
    """Tests for deep cloning."""

    def test_scalars_returned_as_is(self) -> None:
        """Scalars come back unchanged."""
        func = lambda: "foo"  # noqa: E731
        assert values.clone(5) == 5
        assert values.clone(None) is None
        assert values.clone(func) is func

    def test_deep_equal_and_independent(self) -> None:
        """Clones are equal but share no containers."""
        original = {"a": {"b": [1, {"c": 2}]}, "d": "x"}
        copy = values.clone(original)
        assert copy == original
        assert copy is not original
        assert copy["a"] is not original["a"]
        assert copy["a"]["b"] is not original["a"]["b"]
        assert copy["a"]["b"][1] is not original["a"]["b"][1]

    def test_mutating_clone_leaves_source(self) -> None:
        """Changing the clone does not touch the original."""
        original = {"arr": ["foo", "bar"]}
        copy = values.clone(original)
        copy["arr"].append("baz")
        assert original == {"arr": ["foo", "bar"]}

    def test_tuple_type_preserved(self) -> None:
        """Tuples clone to tuples, lists to lists."""
        assert values.clone((1, [2])) == (1, [2])
        assert isinstance(values.clone((1, 2)), tuple)
        assert isinstance(values.clone([1, 2]), list)


class TestMerge:
    """Tests for deep merge."""

    def test_adds_new_keys(self) -> None:
        """Keys missing in `to` are added."""
        assert values.merge({"a": 1}, {"b": 2}) == {"a": 1, "b": 2}

    def test_nested_mappings_merge(self) -> None:
        """Nested mappings are merged recursively."""
        result = values.merge(
            {"obj": {"parent": {"child": {"val": "foo"}}}},
            {"obj": {"parent": {"child": {"valNew": "bar"}}}},
        )
        assert result == {"obj": {"parent": {"child": {"val": "foo", "valNew": "bar"}}}}

    def test_sequences_replaced_wholesale(self) -> None:
        """Sequences are never merged element-wise."""
        assert values.merge({"x": [1, 2]}, {"x": [3]}) == {"x": [3]}

    def test_scalar_overwrites(self) -> None:
        """Scalars replace whatever was there."""
        assert values.merge({"a": 1}, {"a": "one"}) == {"a": "one"}

    def test_mapping_replaces_scalar(self) -> None:
        """A mapping over a scalar replaces it."""
        assert values.merge({"a": 1}, {"a": {"b": 2}}) == {"a": {"b": 2}}

    def test_scalar_replaces_mapping(self) -> None:
        """A scalar over a mapping replaces it."""
        assert values.merge({"a": {"b": 2}}, {"a": None}) == {"a": None}

    def test_not_in_place_leaves_inputs(self) -> None:
        """The default form touches neither input."""
        to = {"a": {"b": 1}, "arr": [1]}
        from_ = {"a": {"c": 2}, "arr": [2]}
        result = values.merge(to, from_)
        assert to == {"a": {"b": 1}, "arr": [1]}
        assert from_ == {"a": {"c": 2}, "arr": [2]}
        assert result == {"a": {"b": 1, "c": 2}, "arr": [2]}

    def test_result_shares_nothing(self) -> None:
        """The result has no containers in common with either input."""
        to = {"a": {"b": [1]}}
        from_ = {"c": {"d": [2]}, "e": [3]}
        result = values.merge(to, from_)
        assert result["a"] is not to["a"]
        assert result["a"]["b"] is not to["a"]["b"]
        assert result["c"] is not from_["c"]
        assert result["c"]["d"] is not from_["c"]["d"]
        assert result["e"] is not from_["e"]

    def test_in_place_mutates_to(self) -> None:
        """in_place=True returns and modifies `to` itself."""
        to = {"a": {"b": 1}}
        result = values.merge(to, {"a": {"c": 2}, "d": 3}, in_place=True)
        assert result is to
        assert to == {"a": {"b": 1, "c": 2}, "d": 3}

    def test_in_place_equals_copy_form(self) -> None:
        """Both forms produce the same value."""
        a = {"x": {"y": [1, 2], "z": "s"}, "k": 1}
        b = {"x": {"y": [3], "w": {"q": 1}}, "n": None}
        expected = values.merge(a, b)
        assert values.merge(values.clone(a), b, in_place=True) == expected

    def test_merge_into_empty(self) -> None:
        """Merging onto {} yields an independent copy of `from_`."""
        source = {"types": {"arr": ["foo"], "int": 10}}
        result = values.merge({}, source)
        assert result == source
        source["types"]["arr"].append("bar")
        assert result["types"]["arr"] == ["foo"]

    def test_rejects_non_mappings(self) -> None:
        """Both arguments must be mappings."""
        with _pytest.raises(errors.InvalidMergeError):
            values.merge({}, [1, 2])  # type: ignore[arg-type]
        with _pytest.raises(errors.InvalidMergeError):
            values.merge("x", {})  # type: ignore[arg-type]

    def test_invalid_merge_is_type_error(self) -> None:
        """InvalidMergeError can be caught as TypeError."""
        with _pytest.raises(TypeError):
            values.merge({}, 5)  # type: ignore[arg-type]
