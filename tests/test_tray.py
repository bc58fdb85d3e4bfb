import random

import pytest

from block_blast.game import OutOfRangeError, PieceKind, Tray, piece_for_kind


def _tray(*kinds):
    return Tray(tuple(piece_for_kind(kind) for kind in kinds))


def test_drawn_tray_has_requested_size():
    tray = Tray.drawn(3, random.Random(0))
    assert len(tray) == 3
    assert not tray.is_empty
    assert len(set(tray.kinds())) == 3


def test_consume_preserves_order_of_remaining_pieces():
    tray = _tray(PieceKind.SQUARE, PieceKind.DOT, PieceKind.CROSS)
    piece, rest = tray.consume(1)
    assert piece.kind == PieceKind.DOT
    assert rest.kinds() == [int(PieceKind.SQUARE), int(PieceKind.CROSS)]
    # the original tray is a snapshot
    assert len(tray) == 3


def test_consume_until_empty():
    tray = _tray(PieceKind.SQUARE, PieceKind.DOT)
    _, tray = tray.consume(0)
    _, tray = tray.consume(0)
    assert tray.is_empty
    assert list(tray) == []


def test_consume_out_of_range():
    with pytest.raises(OutOfRangeError):
        Tray().consume(0)
    tray = _tray(PieceKind.SQUARE, PieceKind.DOT)
    with pytest.raises(OutOfRangeError):
        tray.consume(2)
    with pytest.raises(OutOfRangeError):
        tray.consume(-1)
    with pytest.raises(IndexError):
        tray[5]


def test_duplicate_shapes_by_value_are_allowed():
    tray = _tray(PieceKind.DOT, PieceKind.DOT)
    assert tray.kinds() == [int(PieceKind.DOT)] * 2


def test_refill_replaces_contents():
    tray = _tray(PieceKind.SQUARE)
    refilled = tray.refill(3, random.Random(3))
    assert len(refilled) == 3
    assert len(tray) == 1
    assert refilled.kinds() == Tray.drawn(3, random.Random(3)).kinds()
