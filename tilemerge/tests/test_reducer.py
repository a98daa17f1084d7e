"""
Tests for the reducer (board transitions).

Tests:
- Row slide and merge
- Whole-board moves in every direction
- Tile spawning
- Terminal and target detection
- Validation and error handling
"""

import pytest

from ..engine_core.action import Direction, DIRECTIONS
from ..engine_core.board import Board
from ..engine_core.random_source import SeededRandom
from ..engine_core.reducer import (
    apply_move,
    combine_row,
    has_reached_target,
    is_terminal,
    legal_moves,
    new_board,
    slide_row,
    slide_row_left,
    spawn_tile,
)
from ..engine_core.validation import InvalidBoardError, InvalidDirectionError, validate


class TestSlideRow:
    """Tests for the single-row primitives."""

    @pytest.mark.parametrize("row, expected, gained", [
        ([2, 2, 2, 2], [4, 4, 0, 0], 8),
        ([2, 2, 4, 0], [4, 4, 0, 0], 4),
        ([4, 0, 0, 4], [8, 0, 0, 0], 8),
        ([4, 4, 8, 0], [8, 8, 0, 0], 8),
        ([0, 0, 0, 2], [2, 0, 0, 0], 0),
        ([2, 4, 8, 16], [2, 4, 8, 16], 0),
        ([0, 0, 0, 0], [0, 0, 0, 0], 0),
    ])
    def test_slide_row_left(self, row, expected, gained):
        """Each tile merges at most once per move."""
        assert slide_row_left(row) == (expected, gained)

    def test_slide_row_gravity_only(self):
        """slide_row drops zeros without merging."""
        assert slide_row([0, 2, 0, 2]) == [2, 2, 0, 0]

    def test_combine_row_leaves_gap(self):
        """combine_row merges pairs left to right and leaves zeros."""
        assert combine_row([2, 2, 2, 2]) == [4, 0, 4, 0]
        assert slide_row(combine_row([2, 2, 2, 2])) == [4, 4, 0, 0]

    def test_input_row_not_modified(self):
        """Row primitives return new lists."""
        row = [2, 2, 0, 4]
        slide_row_left(row)
        combine_row(row)
        assert row == [2, 2, 0, 4]


class TestApplyMove:
    """Tests for whole-board moves."""

    def test_move_left(self, mid_game_board):
        """Left slides every row toward column 0."""
        result = apply_move(mid_game_board, Direction.LEFT)

        assert result.moved
        assert result.score_gained == 12
        assert result.board.to_rows() == [
            [4, 4, 8, 0],
            [8, 0, 0, 0],
            [2, 0, 0, 0],
            [2, 0, 0, 0],
        ]

    def test_move_right(self, mid_game_board):
        """Right merges from the right edge first."""
        result = apply_move(mid_game_board, Direction.RIGHT)

        assert result.moved
        assert result.score_gained == 12
        assert result.board.to_rows() == [
            [0, 4, 4, 8],
            [0, 0, 0, 8],
            [0, 0, 0, 2],
            [0, 0, 0, 2],
        ]

    def test_move_up(self, mid_game_board):
        """Up slides every column toward row 0."""
        result = apply_move(mid_game_board, Direction.UP)

        assert result.moved
        assert result.score_gained == 8
        assert result.board.to_rows() == [
            [2, 2, 8, 8],
            [0, 4, 2, 2],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ]

    def test_move_down(self, mid_game_board):
        """Down merges from the bottom edge first."""
        result = apply_move(mid_game_board, Direction.DOWN)

        assert result.moved
        assert result.score_gained == 8
        assert result.board.to_rows() == [
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 2, 8, 8],
            [2, 4, 2, 2],
        ]

    def test_illegal_move_is_noop(self):
        """A direction that changes nothing returns the same board."""
        board = Board.from_rows([
            [2, 4, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
            [0, 0, 0, 0],
        ])
        result = apply_move(board, Direction.LEFT)

        assert not result.moved
        assert result.score_gained == 0
        assert result.board == board

    @pytest.mark.parametrize("direction", DIRECTIONS)
    def test_merges_conserve_tile_sum(self, mid_game_board, direction):
        """Sliding never creates or destroys value."""
        result = apply_move(mid_game_board, direction)
        assert result.board.tile_sum() == mid_game_board.tile_sum()

    @pytest.mark.parametrize("direction", DIRECTIONS)
    def test_score_equals_merged_tiles(self, direction):
        """Score gained is the sum of the tiles created by merges."""
        board = Board.from_rows([
            [2, 2, 2, 2],
            [2, 2, 2, 2],
            [4, 4, 4, 4],
            [4, 4, 4, 4],
        ])
        result = apply_move(board, direction)
        assert result.moved
        # Rows: 2 x (4 + 4) + 2 x (8 + 8); columns: 4 x (4 + 8)
        assert result.score_gained == 48

    def test_accepts_plain_rows_and_names(self):
        """Plain nested lists and direction names work too."""
        rows = [[0, 2], [0, 2]]
        result = apply_move(rows, "left")

        assert result.moved
        assert result.board.to_rows() == [[2, 0], [2, 0]]
        assert rows == [[0, 2], [0, 2]]

    def test_input_board_unchanged(self, mid_game_board):
        """Boards are immutable values."""
        before = mid_game_board.to_rows()
        for direction in DIRECTIONS:
            apply_move(mid_game_board, direction)
        assert mid_game_board.to_rows() == before

    def test_non_square_board_raises(self):
        """Non-square input is rejected."""
        with pytest.raises(InvalidBoardError):
            apply_move([[2, 0, 0], [0, 0]], Direction.UP)

    @pytest.mark.parametrize("bad", [4, -1, "north", True, None, 1.5])
    def test_invalid_direction_raises(self, mid_game_board, bad):
        """Anything outside the four directions is rejected."""
        with pytest.raises(InvalidDirectionError):
            apply_move(mid_game_board, bad)


class TestLegalMoves:
    """Tests for legal move listing."""

    def test_legal_moves_in_enumeration_order(self, nearly_full_board):
        """Only directions that change the board are listed."""
        assert legal_moves(nearly_full_board) == [Direction.RIGHT, Direction.DOWN]

    def test_empty_board_has_no_moves(self, empty_board):
        """Nothing slides on an empty board."""
        assert legal_moves(empty_board) == []


class TestSpawnTile:
    """Tests for seeded tile spawning."""

    def test_spawn_is_reproducible(self, empty_board):
        """Seed 42 places a 4 at (1, 0), then a 2 at (2, 1)."""
        rng = SeededRandom(42)
        board = spawn_tile(empty_board, rng)
        assert board.get(1, 0) == 4
        assert board.count_empty() == 15

        board = spawn_tile(board, rng)
        assert board.get(2, 1) == 2
        assert board.count_empty() == 14

    def test_spawn_only_fills_empty_cells(self, mid_game_board, rng):
        """Existing tiles are never overwritten."""
        board = spawn_tile(mid_game_board, rng)
        assert board.count_empty() == mid_game_board.count_empty() - 1
        assert board.tile_sum() - mid_game_board.tile_sum() in (2, 4)

    def test_full_board_consumes_no_draws(self, terminal_board, rng):
        """A full board comes back unchanged and the stream does not move."""
        state = rng.state
        assert spawn_tile(terminal_board, rng) == terminal_board
        assert rng.state == state

    def test_prob4_extremes(self, empty_board):
        """prob4=0 always spawns 2, prob4=1 always spawns 4."""
        rng = SeededRandom(3)
        for _ in range(10):
            assert spawn_tile(empty_board, rng, prob4=0.0).max_tile() == 2
            assert spawn_tile(empty_board, rng, prob4=1.0).max_tile() == 4


class TestTerminal:
    """Tests for terminal and target detection."""

    def test_checkerboard_is_terminal(self, terminal_board):
        """Full board with no equal neighbours ends the game."""
        assert is_terminal(terminal_board)
        assert legal_moves(terminal_board) == []
        for direction in DIRECTIONS:
            assert not apply_move(terminal_board, direction).moved

    def test_full_board_with_pair_is_not_terminal(self):
        """One equal neighbour keeps the game alive."""
        board = Board.from_rows([
            [2, 2, 4, 8],
            [4, 8, 16, 32],
            [8, 16, 32, 64],
            [16, 32, 64, 128],
        ])
        assert not is_terminal(board)

    def test_board_with_space_is_not_terminal(self, nearly_full_board):
        """An empty cell keeps the game alive."""
        assert not is_terminal(nearly_full_board)

    def test_reached_target(self):
        """Any tile at or above the target counts."""
        board = new_board(4).with_cell(3, 3, 2048)
        assert has_reached_target(board)
        assert has_reached_target(board.with_cell(3, 3, 4096))
        assert not has_reached_target(board.with_cell(3, 3, 1024))
        assert has_reached_target(board.with_cell(3, 3, 1024), target_value=1024)


class TestValidation:
    """Tests for board audits and shape guards."""

    def test_clean_board_has_no_findings(self, mid_game_board):
        """Powers of two and zeros pass."""
        assert validate(mid_game_board) == []

    def test_invalid_tiles_reported(self):
        """Bad values are listed by position, never raised."""
        findings = validate([
            [2, 3, 0, 0],
            [0, 0, 0, 0],
            [0, 0, -2, 0],
            [0, 0, 0, 1],
        ])
        assert findings == [
            "Invalid tile value 3 at position (0, 1)",
            "Negative tile value -2 at position (2, 2)",
            "Invalid tile value 1 at position (3, 3)",
        ]

    def test_empty_rows_rejected(self):
        """A board needs at least one row."""
        with pytest.raises(InvalidBoardError):
            Board.from_rows([])

    def test_non_integer_cell_rejected(self):
        """Cells must be ints."""
        with pytest.raises(InvalidBoardError) as exc:
            Board.from_rows([[2, "4"], [0, 0]])
        assert "(0, 1)" in exc.value.errors[0]


class TestDirection:
    """Tests for direction parsing."""

    @pytest.mark.parametrize("value, expected", [
        (Direction.DOWN, Direction.DOWN),
        (0, Direction.UP),
        (1, Direction.RIGHT),
        ("left", Direction.LEFT),
        ("UP", Direction.UP),
        ("d", Direction.DOWN),
        (" R ", Direction.RIGHT),
    ])
    def test_parse(self, value, expected):
        """Members, ints 0-3, names and letters are accepted."""
        assert Direction.parse(value) is expected

    def test_invalid_direction_is_value_error(self):
        """Callers can catch a plain ValueError."""
        with pytest.raises(ValueError):
            Direction.parse(7)
