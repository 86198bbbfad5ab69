"""Tests for branch-and-bound search."""

import pytest

from pillar_solver.core.puzzle import Puzzle
from pillar_solver.search.branch_and_bound import (
    BranchAndBoundSearcher, SearchConfig, SearchContext, SearchResult,
    SearchStatistics, create_searcher
)


def make_puzzle(counts, bi_links=(), mono_links=()):
    puzzle = Puzzle()
    for initial, required in counts:
        puzzle.add_node(initial, required)
    for a, b in bi_links:
        puzzle.add_bi_link(a, b)
    for a, b in mono_links:
        puzzle.add_mono_link(a, b)
    return puzzle


def recount_deficiency(context: SearchContext) -> int:
    return sum(1 for cur, req in zip(context.current, context.required) if cur != req)


class TestSearchContext:
    """Test apply/undo bookkeeping."""

    @pytest.fixture
    def pair(self):
        """Two bi-linked nodes: [2, 0] -> [1, 1]."""
        return make_puzzle([(2, 1), (0, 1)], bi_links=[(0, 1)]).build_move_graph()

    @pytest.fixture
    def ring(self):
        """Six-node ring with uneven counts."""
        return make_puzzle(
            [(4, 9), (4, 3), (1, 0), (7, 9), (1, 3), (7, 0)],
            bi_links=[(0, 1), (1, 2), (2, 3), (3, 4), (4, 5), (5, 0)]
        ).build_move_graph()

    def test_initial_state(self, pair):
        """Test counts start at initial values with deficiency computed."""
        context = SearchContext(pair)

        assert context.current == [2, 0]
        assert context.ban_counts == [0, 0]
        assert context.deficiency == 2
        assert context.path == []
        assert not context.is_solved

    def test_apply_updates_counts_and_deficiency(self, pair):
        """Test a move transfers `distance` tokens and fixes both nodes."""
        context = SearchContext(pair)
        move = pair.find_move(0, 1)

        assert context.apply_move(move.index)
        assert context.current == [1, 1]
        assert context.deficiency == 0
        assert context.is_solved
        assert context.steps() == [(0, 1, 1)]

    def test_ban_after_symmetric_move(self, pair):
        """Test the reverse of a symmetric move is banned for the next step."""
        context = SearchContext(pair)
        move = pair.find_move(0, 1)
        reverse = pair.find_move(1, 0)
        before = context.ban_counts[reverse.index]

        context.apply_move(move.index)

        assert context.ban_counts[reverse.index] == before + 1
        assert context.current[1] >= reverse.distance
        assert not context.can_apply(reverse.index)
        assert not context.apply_move(reverse.index)
        assert context.current == [1, 1]

    def test_insufficient_tokens_rejected(self):
        """Test a move needing more tokens than the source holds is illegal."""
        graph = make_puzzle([(1, 0), (0, 0), (0, 1)], mono_links=[(0, 1), (1, 2)]).build_move_graph()
        context = SearchContext(graph)
        long_move = graph.find_move(0, 2)
        before = context.snapshot()

        assert long_move.distance == 2
        assert not context.apply_move(long_move.index)
        assert context.snapshot() == before

    def test_counts_never_negative(self, ring):
        """Test applying any legal move keeps every count non-negative."""
        context = SearchContext(ring)
        for move in ring.moves:
            if context.apply_move(move.index):
                assert min(context.current) >= 0
                context.undo_move(move.index)

    def test_apply_undo_is_identity(self, ring):
        """Test undo restores counts, bans, deficiency and path exactly."""
        context = SearchContext(ring)
        before = context.snapshot()

        for move in ring.moves:
            if context.apply_move(move.index):
                context.undo_move(move.index)
                assert context.snapshot() == before

    def test_nested_apply_undo(self, ring):
        """Test a stack of moves unwinds to the original state."""
        context = SearchContext(ring)
        before = context.snapshot()
        applied = []

        for move in ring.moves:
            if len(applied) == 4:
                break
            if context.apply_move(move.index):
                applied.append(move.index)
                assert context.deficiency == recount_deficiency(context)

        assert len(applied) == 4
        for move_index in reversed(applied):
            context.undo_move(move_index)
            assert context.deficiency == recount_deficiency(context)

        assert context.snapshot() == before


class TestBranchAndBoundSearcher:
    """Test the search engine."""

    def test_single_move(self):
        """Test a one-move puzzle is solved in one move."""
        graph = make_puzzle([(1, 0), (0, 1)], bi_links=[(0, 1)]).build_move_graph()
        result = BranchAndBoundSearcher(graph).search(1)

        assert result.success
        assert result.steps == [(0, 1, 1)]
        assert result.solution_length == 1
        assert result.target_length == 1
        assert result.termination_reason == "solved"

    def test_budget_too_small(self):
        """Test a zero budget cannot fix two deficient nodes."""
        graph = make_puzzle([(1, 0), (0, 1)], bi_links=[(0, 1)]).build_move_graph()
        result = BranchAndBoundSearcher(graph).search(0)

        assert not result.success
        assert result.steps == []
        assert result.termination_reason == "exhausted"
        assert result.statistics.bound_prunes == 1

    def test_already_solved(self):
        """Test a puzzle at its targets is solved with zero moves."""
        graph = make_puzzle([(3, 3), (0, 0)], bi_links=[(0, 1)]).build_move_graph()
        result = BranchAndBoundSearcher(graph).search(5)

        assert result.success
        assert result.solution_length == 0
        assert result.steps == []

    def test_first_success_may_be_shorter(self):
        """Test the found length is reported as is, not padded to the budget."""
        graph = make_puzzle([(1, 0), (0, 1)], bi_links=[(0, 1)]).build_move_graph()
        result = BranchAndBoundSearcher(graph).search(4)

        assert result.success
        assert result.solution_length == 1
        assert result.target_length == 4

    def test_long_move_over_chain(self):
        """Test a precomputed two-hop move is used directly."""
        graph = make_puzzle([(2, 0), (0, 0), (0, 2)], mono_links=[(0, 1), (1, 2)]).build_move_graph()
        result = BranchAndBoundSearcher(graph).search(1)

        assert result.success
        assert result.steps == [(0, 2, 2)]

    def test_one_way_link_blocks_return(self):
        """Test tokens cannot travel against a mono-link."""
        graph = make_puzzle([(0, 1), (1, 0)], mono_links=[(0, 1)]).build_move_graph()
        result = BranchAndBoundSearcher(graph).search(3)

        assert not result.success

    def test_empty_nodes_are_skipped(self):
        """Test nodes without tokens never source a move."""
        graph = make_puzzle([(0, 0), (2, 1), (0, 1)], bi_links=[(0, 1), (1, 2)]).build_move_graph()
        result = BranchAndBoundSearcher(graph).search(1)

        assert result.success
        assert result.steps == [(1, 2, 1)]
        assert result.statistics.illegal_moves == 0

    def test_deterministic_order(self):
        """Test the first solution in canonical order is returned."""
        # Both 0->2 and 1->2 fix the puzzle, node 0 is tried first
        counts = [(1, 0), (1, 1), (0, 1)]
        graph = make_puzzle(counts, bi_links=[(0, 2), (1, 2)]).build_move_graph()

        first = BranchAndBoundSearcher(graph).search(2)
        second = BranchAndBoundSearcher(graph).search(2)

        assert first.steps == [(0, 2, 1)]
        assert first.steps == second.steps

    def test_symmetric_reversal_never_immediate(self):
        """Test no solution plays a symmetric move followed by its reverse."""
        puzzle = make_puzzle(
            [(2, 0), (0, 0), (0, 0), (0, 2)],
            bi_links=[(0, 1), (1, 2), (2, 3)]
        )
        result = puzzle.search(3)

        assert result.success
        for first, second in zip(result.steps, result.steps[1:]):
            assert (second.source, second.target) != (first.target, first.source)

    def test_negative_budget_rejected(self):
        """Test a negative move budget is refused."""
        graph = make_puzzle([(1, 0), (0, 1)], bi_links=[(0, 1)]).build_move_graph()

        with pytest.raises(ValueError):
            BranchAndBoundSearcher(graph).search(-1)

    def test_statistics_disabled(self):
        """Test counters stay at zero when tracking is off."""
        graph = make_puzzle([(1, 0), (0, 1)], bi_links=[(0, 1)]).build_move_graph()
        searcher = BranchAndBoundSearcher(graph, SearchConfig(track_statistics=False))
        result = searcher.search(1)

        assert result.success
        assert result.statistics.nodes_expanded == 0

    def test_statistics_tracked(self):
        """Test counters reflect the explored tree."""
        graph = make_puzzle([(1, 0), (0, 1)], bi_links=[(0, 1)]).build_move_graph()
        result = create_searcher(graph).search(1)

        stats = result.statistics
        assert stats.nodes_expanded == 2
        assert stats.moves_applied == 1
        assert stats.max_depth_reached == 1

    def test_progress_logging(self, caplog):
        """Test periodic debug records are emitted."""
        graph = make_puzzle([(1, 0), (0, 1)], bi_links=[(0, 1)]).build_move_graph()
        searcher = create_searcher(graph, log_progress_every=1)

        with caplog.at_level("DEBUG", logger="pillar_solver.search.branch_and_bound"):
            searcher.search(1)

        assert any("Expanded" in record.getMessage() for record in caplog.records)


class TestSearchResult:
    """Test result serialisation."""

    def test_to_dict(self):
        """Test JSON-friendly result layout."""
        graph = make_puzzle([(1, 0), (0, 1)], bi_links=[(0, 1)]).build_move_graph()
        data = BranchAndBoundSearcher(graph).search(1).to_dict()

        assert data['success'] is True
        assert data['moves'] == [{'source': 0, 'target': 1, 'distance': 1}]
        assert data['solution_length'] == 1
        assert set(data['search_stats']) == set(SearchStatistics().to_dict())

    def test_default_failure(self):
        """Test default result fields."""
        result = SearchResult(success=False)

        assert result.steps == []
        assert result.termination_reason == "unknown"
