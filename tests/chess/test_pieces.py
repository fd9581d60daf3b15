"""Unit tests for /src/chess/pieces.py"""

import pytest

from src.chess.pieces import EMPTY, FEN_TO_PIECE, PIECE_TO_FEN, Color, Piece, PieceType


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize(
    "piece_type",
    [piece_type for piece_type in PieceType if piece_type != PieceType.EMPTY],
)
def test_white_pieces_to_fen(piece_type: PieceType) -> None:
    piece = Piece(piece_type, Color.WHITE)
    assert piece.to_fen() == PIECE_TO_FEN[piece_type].upper()


@pytest.mark.parametrize(
    "piece_type",
    [piece_type for piece_type in PieceType if piece_type != PieceType.EMPTY],
)
def test_black_pieces_to_fen(piece_type: PieceType) -> None:
    piece = Piece(piece_type, Color.BLACK)
    assert piece.to_fen() == PIECE_TO_FEN[piece_type].lower()


def test_opponent_color() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE
    assert Color.NONE.opponent == Color.NONE


def test_empty_piece() -> None:
    assert EMPTY.is_empty
    assert EMPTY == Piece(PieceType.EMPTY, Color.NONE)
    assert not Piece(PieceType.PAWN, Color.WHITE).is_empty


def test_pieces_can_be_used_as_keys() -> None:
    """The renderer looks up glyphs by piece, so pieces must be hashable (and immutable)"""
    glyphs = {Piece(PieceType.KING, Color.WHITE): "K"}
    assert glyphs[Piece.from_fen("K")] == "K"


def test_piece_name() -> None:
    assert Piece(PieceType.KNIGHT, Color.BLACK).name == "Knight"
