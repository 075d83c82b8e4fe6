"""
Tests for spanview.utils.tree module.

Tests cover bounded pre-order traversal over id-linked span trees,
including missing children, cyclic and branching-cyclic documents,
and very deep chains.
"""

from typing import Dict

import pytest

from spanview.core.index import SpanIndex, build_span_indexes
from spanview.core.parser import Span, Trace, TraceData
from spanview.utils.tree import (
    count_subtree_spans,
    get_subtree_max_depth,
    walk_subtree,
)


def make_index(spans: Dict[str, Span]) -> SpanIndex:
    """Build an index over a single trace made of the given spans."""
    return build_span_indexes(TraceData(trace=Trace(spans=spans)))


@pytest.fixture
def cyclic_index() -> SpanIndex:
    """Two spans that list each other as children."""
    return make_index({
        "a": Span(span_id="a", name="a", children_ids=["b"]),
        "b": Span(span_id="b", name="b", children_ids=["a"]),
    })


@pytest.fixture
def chain_index() -> SpanIndex:
    """A single chain of 3000 spans."""
    spans = {
        str(i): Span(span_id=str(i), name=f"op{i}", children_ids=[str(i + 1)])
        for i in range(2999)
    }
    spans["2999"] = Span(span_id="2999", name="op2999")
    return make_index(spans)


class TestWalkSubtree:
    """Tests for walk_subtree."""

    def test_pre_order(self, sample_index: SpanIndex) -> None:
        """Children are visited in children_ids order, depth first."""
        visited = [(depth, span_id) for depth, span_id, _ in walk_subtree(sample_index, "1000")]
        assert visited == [(0, "1000"), (1, "1001"), (2, "1003"), (1, "1002")]

    def test_depth_zero_visits_root_only(self, sample_index: SpanIndex) -> None:
        visited = [span_id for _, span_id, _ in walk_subtree(sample_index, "1000", max_depth=0)]
        assert visited == ["1000"]

    def test_depth_limit(self, sample_index: SpanIndex) -> None:
        visited = [span_id for _, span_id, _ in walk_subtree(sample_index, "1000", max_depth=1)]
        assert visited == ["1000", "1001", "1002"]

    @pytest.mark.parametrize("max_depth", [0, 1, 2, 3, 10])
    def test_never_exceeds_depth_limit(self, sample_index: SpanIndex, max_depth: int) -> None:
        depths = [depth for depth, _, _ in walk_subtree(sample_index, "1000", max_depth)]
        assert max(depths) <= max_depth

    def test_walk_from_inner_span(self, sample_index: SpanIndex) -> None:
        visited = [span_id for _, span_id, _ in walk_subtree(sample_index, "1001")]
        assert visited == ["1001", "1003"]

    def test_missing_child_yields_zero_span(self) -> None:
        """A child id absent from the index yields an empty span."""
        index = make_index({"1": Span(span_id="1", name="root", children_ids=["ghost"])})
        visited = list(walk_subtree(index, "1"))
        assert len(visited) == 2
        depth, span_id, span = visited[1]
        assert (depth, span_id) == (1, "ghost")
        assert span == Span()

    def test_unknown_root(self, sample_index: SpanIndex) -> None:
        visited = list(walk_subtree(sample_index, "nope"))
        assert len(visited) == 1
        assert visited[0][2].name == ""

    def test_cycle_does_not_revisit_ancestors(self, cyclic_index: SpanIndex) -> None:
        """A child pointing back at an ancestor is skipped."""
        names = [span.name for _, _, span in walk_subtree(cyclic_index, "a", max_depth=5)]
        assert names == ["a", "b"]

    def test_branching_self_cycle_terminates(self) -> None:
        """A span listing itself several times is visited once."""
        index = make_index({"a": Span(span_id="a", name="a", children_ids=["a", "a"])})
        visited = [span_id for _, span_id, _ in walk_subtree(index, "a")]
        assert visited == ["a"]

    def test_branching_cycle_through_children_terminates(self) -> None:
        """Children that fan back out to the root are cut at the root."""
        index = make_index({
            "a": Span(span_id="a", children_ids=["b", "c"]),
            "b": Span(span_id="b", children_ids=["a", "a", "c"]),
            "c": Span(span_id="c", children_ids=["a", "b"]),
        })
        visited = [(depth, span_id) for depth, span_id, _ in walk_subtree(index, "a")]
        assert visited == [(0, "a"), (1, "b"), (2, "c"), (1, "c"), (2, "b")]

    def test_repeated_sibling_is_not_a_cycle(self) -> None:
        """The same leaf listed twice under one parent is visited twice."""
        index = make_index({
            "a": Span(span_id="a", children_ids=["b", "b"]),
            "b": Span(span_id="b"),
        })
        visited = [span_id for _, span_id, _ in walk_subtree(index, "a")]
        assert visited == ["a", "b", "b"]

    def test_deep_chain_does_not_recurse(self, chain_index: SpanIndex) -> None:
        """Chains deeper than the recursion limit are walked completely."""
        visited = list(walk_subtree(chain_index, "0"))
        assert len(visited) == 3000
        assert visited[-1][0] == 2999


class TestSubtreeStatistics:
    """Tests for count_subtree_spans and get_subtree_max_depth."""

    def test_count_full_subtree(self, sample_index: SpanIndex) -> None:
        assert count_subtree_spans(sample_index, "1000") == 4

    def test_count_bounded_subtree(self, sample_index: SpanIndex) -> None:
        assert count_subtree_spans(sample_index, "1000", max_depth=1) == 3

    def test_count_leaf(self, sample_index: SpanIndex) -> None:
        assert count_subtree_spans(sample_index, "1002") == 1

    def test_max_depth(self, sample_index: SpanIndex) -> None:
        assert get_subtree_max_depth(sample_index, "1000") == 2
        assert get_subtree_max_depth(sample_index, "1000", max_depth=1) == 1
        assert get_subtree_max_depth(sample_index, "1003") == 0

    def test_max_depth_of_cycle_stops_before_ancestor(self, cyclic_index: SpanIndex) -> None:
        assert get_subtree_max_depth(cyclic_index, "a", max_depth=7) == 1
        assert count_subtree_spans(cyclic_index, "a") == 2
