"""
cli.py - Command-line interface for the Connect Four engine

This module provides a CLI for playing against the engine, analyzing a
position and benchmarking engine self-play.
"""

import argparse
import sys
import time
from typing import List, Optional

from connectfour.ai.difficulty import DEFAULT_DIFFICULTY, MIN_DIFFICULTY, MAX_DIFFICULTY
from connectfour.ai.negamax import NegamaxAI, NO_MOVE
from connectfour.debug import debug, DebugLevel
from connectfour.exceptions import ConnectFourError
from connectfour.game.board import Board
from connectfour.game.rules import ConnectFourGame
from connectfour.utils import COLS, Player, parse_moves


def _difficulty(value: str) -> int:
    level = int(value)
    if not MIN_DIFFICULTY <= level <= MAX_DIFFICULTY:
        raise argparse.ArgumentTypeError(
            f"difficulty must be between {MIN_DIFFICULTY} and {MAX_DIFFICULTY}")
    return level


class SimpleCLI:
    """Simple command-line interface for the Connect Four engine."""

    def __init__(self):
        """Initialize the CLI."""
        self.game: Optional[ConnectFourGame] = None
        self.args = None

    def parse_args(self, argv: Optional[List[str]] = None) -> None:
        """Parse command-line arguments."""
        parser = argparse.ArgumentParser(description='Connect Four engine')
        parser.add_argument('--debug-level', default=None,
                            choices=[level.name.lower() for level in DebugLevel],
                            help='Logging level (default: $CONNECTFOUR_DEBUG or warning)')
        parser.add_argument('--log-file', default=None, help='Also write log output to this file')

        subparsers = parser.add_subparsers(dest='command', help='Command to run')

        # Shared engine options
        engine_options = argparse.ArgumentParser(add_help=False)
        engine_options.add_argument('--difficulty', type=_difficulty, default=DEFAULT_DIFFICULTY,
                                    help=f'Engine difficulty {MIN_DIFFICULTY}-{MAX_DIFFICULTY}')
        engine_options.add_argument('--seed', type=int, default=None,
                                    help='Seed for the engine random source')

        play_parser = subparsers.add_parser('play', parents=[engine_options],
                                            help='Play a game against the engine')
        play_parser.add_argument('--ai-first', action='store_true', help='Let the engine move first')

        analyze_parser = subparsers.add_parser('analyze', parents=[engine_options],
                                               help='Pick a move for a position')
        position = analyze_parser.add_mutually_exclusive_group()
        position.add_argument('--moves', type=str, default='',
                              help='Comma separated columns played so far, e.g. 3,3,2')
        position.add_argument('--position', type=str,
                              help='Canonical board encoding (42 digits, bottom row first)')
        analyze_parser.add_argument('--player', choices=['1', '2'], default=None,
                                    help='Side to move (default: inferred from piece count)')

        benchmark_parser = subparsers.add_parser('benchmark', parents=[engine_options],
                                                 help='Time engine self-play')
        benchmark_parser.add_argument('--games', type=int, default=2,
                                      help='Number of self-play games')

        self.args = parser.parse_args(argv)

        if self.args.debug_level:
            debug.set_from_string(self.args.debug_level)
        if self.args.log_file:
            debug.configure(log_file=self.args.log_file)

    def run(self, argv: Optional[List[str]] = None) -> int:
        """Run the CLI based on the parsed arguments."""
        if not self.args:
            self.parse_args(argv)

        if self.args.command == 'play':
            self.play_game()
        elif self.args.command == 'analyze':
            return self.analyze_position()
        elif self.args.command == 'benchmark':
            self.benchmark()
        else:
            print("Please specify a command. Use --help for options.")
            return 1
        return 0

    def play_game(self) -> None:
        """Play a game against the engine interactively."""
        first = Player.TWO if self.args.ai_first else Player.ONE
        self.game = ConnectFourGame(difficulty=self.args.difficulty, seed=self.args.seed,
                                    first_player=first)
        human = Player.ONE

        print(f"Starting a new game at difficulty {self.args.difficulty}!")
        print(f"You are {human} ({human.name}). Enter a column (0-{COLS - 1}); 'q' quits, 'r' restarts.")
        print(self.game.render())

        while not self.game.is_game_over():
            if self.game.get_current_player() == human:
                move = self.get_human_move()
                if move is None:
                    continue
                elif move == -1:
                    print("Quitting game.")
                    return
                elif move == -2:
                    self.game.reset()
                    print("Game restarted.")
                    print(self.game.render())
                    continue

                if not self.game.make_move(move):
                    print(f"Column {move} is full.")
                    continue
            else:
                print("Engine is thinking...")
                with debug.timer("engine_move", "cli"):
                    move = self.game.ai_move()
                print(f"Engine plays column {move}")

            print(self.game.render())

        print("Game over!")
        winner = self.game.get_winner()
        if winner == human:
            print("You win! Congratulations!")
        elif winner is not None:
            print("The engine wins! Better luck next time.")
        else:
            print("It's a draw!")

    def get_human_move(self) -> Optional[int]:
        """
        Get a move from human player input.

        Returns:
            Column index, -1 to quit, -2 to restart, or None if invalid input
        """
        try:
            user_input = input(f"Your move (columns 0-{COLS - 1}, q/r): ").strip().lower()
        except EOFError:
            return -1

        if user_input == 'q':
            return -1
        elif user_input == 'r':
            return -2

        try:
            move = int(user_input)
        except ValueError:
            print("Invalid input. Please enter a column number or command.")
            return None

        if not 0 <= move < COLS:
            print(f"Column must be between 0 and {COLS - 1}.")
            return None
        return move

    def load_board(self) -> Board:
        """Build the board named by --position or --moves."""
        if self.args.position:
            return Board.from_encoding(self.args.position.strip())
        return Board.from_moves(parse_moves(self.args.moves))

    def analyze_position(self) -> int:
        """Print the engine's evaluation and chosen move for a position."""
        try:
            board = self.load_board()
        except (ConnectFourError, ValueError) as e:
            print(f"Error loading position: {e}")
            return 1

        if self.args.player:
            player = Player(int(self.args.player))
        else:
            player = Player.ONE if board.piece_count() % 2 == 0 else Player.TWO

        engine = NegamaxAI(difficulty=self.args.difficulty, rng=self.args.seed)

        print("Position:")
        print(board.render())
        print(f"Encoding: {board.canonical_encoding()}")
        print(f"Side to move: {player.name}")
        print(f"Static evaluation: {engine.evaluate_board(board, player)}")

        start = time.perf_counter()
        column = engine.get_best_move(board, player)
        elapsed = time.perf_counter() - start

        if column == NO_MOVE:
            print("No legal move: the board is full.")
            return 0

        print(f"Best move: column {column}")
        print(f"Score: {engine.last_score}")
        print(f"Nodes evaluated: {engine.nodes_evaluated}")
        print(f"Time: {elapsed:.3f} seconds")
        return 0

    def benchmark(self) -> None:
        """Benchmark engine self-play at the chosen difficulty."""
        games = max(1, self.args.games)
        print(f"Running {games} self-play game(s) at difficulty {self.args.difficulty}...")

        total_moves = 0
        total_nodes = 0
        results = {}
        debug.start_timer("self_play")
        for index in range(games):
            seed = None if self.args.seed is None else self.args.seed + index
            game = ConnectFourGame(difficulty=self.args.difficulty, seed=seed)
            while not game.is_game_over():
                game.ai_move()
                total_moves += 1
                total_nodes += game.ai.nodes_evaluated
            results[game.game_result.name] = results.get(game.game_result.name, 0) + 1
        elapsed = debug.end_timer("self_play") or 0.0

        print(f"Played {games} game(s), {total_moves} moves, {total_nodes} nodes searched")
        print(f"Results: {results}")
        print(f"{elapsed:.3f} seconds total, {elapsed / total_moves * 1000:.3f} ms per move")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    cli = SimpleCLI()
    return cli.run(argv)


if __name__ == "__main__":
    sys.exit(main())
