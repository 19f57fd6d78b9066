import random

from aussprache.dataset import Cell, build_dataset
from aussprache.placement import POOL, Board, PlaceOutcome, PlacementPolicy
from aussprache.tiles import make_tiles

from .conftest import by_text


def _board(fruit_dataset, fruit_tiles, policy=PlacementPolicy.FREE):
    return Board(fruit_tiles, fruit_dataset.layout, policy), by_text(fruit_tiles)


def test_all_tiles_start_in_pool(fruit_dataset, fruit_tiles):
    board, _ = _board(fruit_dataset, fruit_tiles)
    assert board.placed_count == 0
    assert [t.id for t in board.pool()] == [t.id for t in fruit_tiles]
    assert not board.ready


def test_place_into_empty_cell(fruit_dataset, fruit_tiles):
    board, t = _board(fruit_dataset, fruit_tiles)
    assert board.place(t["apple"].id, (0, 0)) == PlaceOutcome.PLACED
    assert board.location(t["apple"].id) == Cell(0, 0)
    assert board.occupant((0, 0)) == t["apple"]
    assert board.placed_count == 1


def test_place_on_occupied_cell_evicts_to_pool(fruit_dataset, fruit_tiles):
    board, t = _board(fruit_dataset, fruit_tiles)
    board.place(t["apple"].id, (0, 0))
    board.place(t["cat"].id, (0, 0))
    assert board.occupant((0, 0)) == t["cat"]
    assert board.location(t["apple"].id) is POOL
    assert board.placed_count == 1


def test_move_between_cells_leaves_no_ghost(fruit_dataset, fruit_tiles):
    board, t = _board(fruit_dataset, fruit_tiles)
    board.place(t["apple"].id, (0, 0))
    board.place(t["apple"].id, (1, 1))
    assert board.occupant((0, 0)) is None
    assert board.occupant((1, 1)) == t["apple"]
    assert board.placed_count == 1


def test_swap_from_cell_onto_occupied_cell(fruit_dataset, fruit_tiles):
    board, t = _board(fruit_dataset, fruit_tiles)
    board.place(t["apple"].id, (0, 0))
    board.place(t["pear"].id, (1, 0))
    assert board.placed_count == 2
    board.place(t["apple"].id, (1, 0))
    # pear zurück in den Pool, (0, 0) jetzt leer
    assert board.placed_count == 1
    assert board.occupant((0, 0)) is None
    assert board.location(t["pear"].id) is POOL
    assert len(board.placements()) == 1


def test_replacing_in_same_cell_is_noop(fruit_dataset, fruit_tiles):
    board, t = _board(fruit_dataset, fruit_tiles)
    board.place(t["apple"].id, (0, 0))
    assert board.place(t["apple"].id, (0, 0)) == PlaceOutcome.PLACED
    assert board.placed_count == 1


def test_ready_when_all_placed(fruit_dataset, fruit_tiles):
    board, t = _board(fruit_dataset, fruit_tiles)
    board.place(t["apple"].id, (0, 0))
    board.place(t["pear"].id, (1, 0))
    assert not board.ready
    board.place(t["cat"].id, (0, 1))
    assert board.ready
    board.to_pool(t["cat"].id)
    assert not board.ready
    assert board.occupant((0, 1)) is None


def test_frozen_board_ignores_moves(fruit_dataset, fruit_tiles):
    board, t = _board(fruit_dataset, fruit_tiles)
    board.place(t["apple"].id, (0, 0))
    board.freeze()
    assert board.place(t["cat"].id, (0, 0)) == PlaceOutcome.IGNORED
    assert board.to_pool(t["apple"].id) == PlaceOutcome.IGNORED
    assert board.occupant((0, 0)) == t["apple"]


def test_unknown_tile_and_outside_cell_ignored(fruit_dataset, fruit_tiles):
    board, t = _board(fruit_dataset, fruit_tiles)
    assert board.place("t_9_9", (0, 0)) == PlaceOutcome.IGNORED
    assert board.place(t["apple"].id, (5, 0)) == PlaceOutcome.IGNORED
    assert board.placed_count == 0


def test_strict_policy_rejects_wrong_cell():
    ds = build_dataset([["A", "B"], ["x", "y"]], "strict")
    tiles = by_text(make_tiles(ds, random.Random(0)))
    board = Board(tiles.values(), ds.layout, PlacementPolicy.STRICT)
    assert board.place(tiles["x"].id, (0, 1)) == PlaceOutcome.REJECTED
    assert board.location(tiles["x"].id) is POOL
    assert board.place(tiles["x"].id, (0, 0)) == PlaceOutcome.PLACED
