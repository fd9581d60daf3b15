"""Turning the board into something nice to look at in a terminal."""

from src.chess.board import Board
from src.chess.pieces import Color, Piece, PieceType

UNICODE_GLYPHS: dict[Piece, str] = {
    Piece(PieceType.PAWN, Color.WHITE): "♙",
    Piece(PieceType.ROOK, Color.WHITE): "♖",
    Piece(PieceType.KNIGHT, Color.WHITE): "♘",
    Piece(PieceType.BISHOP, Color.WHITE): "♗",
    Piece(PieceType.QUEEN, Color.WHITE): "♕",
    Piece(PieceType.KING, Color.WHITE): "♔",
    Piece(PieceType.PAWN, Color.BLACK): "♟",
    Piece(PieceType.ROOK, Color.BLACK): "♜",
    Piece(PieceType.KNIGHT, Color.BLACK): "♞",
    Piece(PieceType.BISHOP, Color.BLACK): "♝",
    Piece(PieceType.QUEEN, Color.BLACK): "♛",
    Piece(PieceType.KING, Color.BLACK): "♚",
}


def render_board(board: Board, perspective: Color) -> str:
    return board.to_display_string(perspective, glyphs=UNICODE_GLYPHS)
