"""
cli.py - Command-line interface for the Connect Four engine

This module provides a console game for two human players, a position
checker for hand-written board layouts, and a small benchmark that plays
random games through the engine.
"""

import argparse
import random
import sys
from typing import List, Optional, Tuple

import numpy as np

from connect4.debug import debug, DebugLevel
from connect4.game.board import Board
from connect4.game.move import Move
from connect4.game.player import Player
from connect4.game.rules import GameEngine
from connect4.utils import ROWS, COLS, Tile, GameStatus


class ConsoleCLI:
    """Command-line interface for playing and inspecting Connect Four games."""

    def __init__(self):
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four CLI')
        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        play_parser = subparsers.add_parser('play', help='Play a two-player game')

        test_parser = subparsers.add_parser('test', help='Check a board position')
        test_parser.add_argument('--position', type=str,
                                 help=f'Comma-separated list of {ROWS * COLS} cell values '
                                      f'(0 empty, 1 gold, 2 red), top row first')

        benchmark_parser = subparsers.add_parser('benchmark', help='Benchmark performance')
        benchmark_parser.add_argument('--iterations', type=int, default=100,
                                      help='Number of random games to play')

        for sub in (play_parser, test_parser, benchmark_parser):
            sub.add_argument('--debug', action='store_true',
                             help='Enable debug mode (equivalent to --debug_level debug)')
            sub.add_argument('--debug_level',
                             choices=[level.name.lower() for level in DebugLevel],
                             default='error',
                             help='Set debug level: none (silent) through trace (most verbose)')

        self.args = parser.parse_args(argv)

        if getattr(self.args, 'debug', False):
            debug.configure(level=DebugLevel.DEBUG)
        elif getattr(self.args, 'debug_level', None):
            debug.set_from_string(self.args.debug_level)

    def run(self) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args()

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'test':
            return self.test_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> GameEngine:
        """
        Play a Connect Four game between two people at the same console.

        Returns:
            The engine of the game that was played, finished or abandoned
        """
        player1 = Player(1, Tile.GOLD)
        player2 = Player(2, Tile.RED)
        game = GameEngine(player1, player2)
        cols = game.get_board().cols

        print("Starting a new Connect Four game!")
        print("Enter 'q' to quit.")
        print(game.render())

        while game.get_status() == GameStatus.IN_PROGRESS:
            current = game.get_current_player()
            column = self.get_column(current, cols)
            if column is None:
                print("Quitting game.")
                return game

            print(game.make_move(current, column))
            print(game.render())

        return game

    def get_column(self, player: Player, cols: int) -> Optional[int]:
        """
        Read a column choice from the console.

        Range checking is left to the engine so that its own message is shown.

        Returns:
            The column entered, or None if the player quit
        """
        while True:
            try:
                user_input = input(f"Player {player.id}, enter column (0-{cols - 1}): ")
            except EOFError:
                return None

            user_input = user_input.strip().lower()
            if user_input == 'q':
                return None

            try:
                return int(user_input)
            except ValueError:
                print("Invalid input. Please enter a column number or 'q'.")

    def test_position(self) -> int:
        """Load a position string and report wins, fill count and valid moves."""
        if not self.args.position:
            print("Please provide a position string with --position")
            return 1

        try:
            values = [int(c) for c in self.args.position.split(',')]
            if len(values) != ROWS * COLS:
                raise ValueError(f"Position string must have {ROWS * COLS} values")
            board = Board(np.array(values).reshape(ROWS, COLS))
        except ValueError as e:
            print(f"Error parsing position: {e}")
            return 1

        print("Loaded position:")
        print(board.render())

        wins = find_winning_cells(board)
        if wins:
            for tile, (row, col) in wins:
                print(f"Win for {tile.name} detected at ({row}, {col})")
        else:
            print("No win detected for any player")

        if board.check_draw():
            print("Board is full")
        else:
            print(f"Empty spaces: {board.rows * board.cols - board.filled_count}")
        print(f"Valid moves: {board.get_valid_moves()}")
        return 0

    def benchmark(self) -> None:
        """Play random games through the engine and report timings."""
        iterations = max(1, self.args.iterations)
        outcomes = {GameStatus.WIN: 0, GameStatus.DRAW: 0}
        total_moves = 0

        debug.start_timer("benchmark")
        for _ in range(iterations):
            game = GameEngine(Player(1, Tile.GOLD), Player(2, Tile.RED))
            while not game.is_game_over():
                column = random.choice(game.get_board().get_valid_moves())
                game.make_move(game.get_current_player(), column)
                total_moves += 1
            outcomes[game.get_status()] += 1
        elapsed = debug.end_timer("benchmark", "cli") or 0.0

        print(f"Played {iterations} games with {total_moves} total moves: "
              f"{elapsed:.6f} seconds total, "
              f"{elapsed / iterations * 1000:.6f} ms per game")
        print(f"Wins: {outcomes[GameStatus.WIN]}, Draws: {outcomes[GameStatus.DRAW]}")


def find_winning_cells(board: Board) -> List[Tuple[Tile, Tuple[int, int]]]:
    """
    Find every occupied cell that sits on a winning line.

    Returns:
        List of (tile, (row, col)) entries in row-major order
    """
    wins = []
    for row in range(board.rows):
        for col in range(board.cols):
            tile = board.get_tile(row, col)
            if tile is not None and board.check_win(Move(tile, row, col, True)):
                wins.append((tile, (row, col)))
    return wins


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = ConsoleCLI()
    cli.parse_args(argv)
    return cli.run()


if __name__ == "__main__":
    sys.exit(main())
