"""
rules.py - Game session management and Gymnasium environment for Connect Four

This module provides:
1. ConnectFourGame, which tracks turns and results for a game against the engine
2. ConnectFourEnv, a gymnasium-compatible environment whose opponent is the engine
"""

import numpy as np
import gymnasium as gym
from gymnasium import spaces
from typing import Dict, List, Optional, Tuple

from connectfour.ai.difficulty import DEFAULT_DIFFICULTY
from connectfour.ai.negamax import NegamaxAI
from connectfour.debug import debug
from connectfour.game.board import Board
from connectfour.utils import ROWS, COLS, Player, GameResult


class ConnectFourGame:
    """
    High-level Connect Four game manager.

    The board itself knows nothing about turns; this class alternates the
    players, records the result and asks the engine for its moves.
    """

    def __init__(self, difficulty: int = DEFAULT_DIFFICULTY, seed=None,
                 first_player: Player = Player.ONE):
        """
        Initialize a new Connect Four game.

        Args:
            difficulty: Engine difficulty (1-10)
            seed: Seed or random source for the engine
            first_player: The player who moves first
        """
        debug.debug("Initializing ConnectFourGame", "game")
        self.board = Board()
        self.ai = NegamaxAI(difficulty=difficulty, rng=seed)
        self.first_player = first_player
        self.reset()

    def reset(self) -> None:
        """Reset the game to initial state; the engine forgets cached analysis."""
        debug.debug("Resetting game", "game")
        self.board.reset()
        self.ai.reset()
        self.current_player = self.first_player
        self.game_result = GameResult.IN_PROGRESS
        self.history: List[int] = []
        self.winning_line: List[Tuple[int, int]] = []

    def set_difficulty(self, level: int) -> None:
        """Change the engine difficulty."""
        self.ai.difficulty = level

    def is_valid_move(self, column: int) -> bool:
        """
        Check if a move is valid.

        Args:
            column: The column to place a piece (0-indexed)

        Returns:
            True if the move is valid, False otherwise
        """
        if self.game_result.is_game_over():
            debug.debug(f"Invalid move: game is over (result: {self.game_result})", "game")
            return False

        if not (0 <= column < COLS):
            debug.debug(f"Invalid move: column {column} out of bounds", "game")
            return False

        if not self.board.can_make_move(column):
            debug.debug(f"Invalid move: column {column} is full", "game")
            return False

        return True

    def make_move(self, column: int) -> bool:
        """
        Play the current player's piece in a column.

        Args:
            column: Column to place a piece (0-indexed)

        Returns:
            True if the move was successful, False otherwise
        """
        if not self.is_valid_move(column):
            return False

        player = self.current_player
        self.board.make_move(player, column)
        self.history.append(column)

        if self.board.check_victory(player, column):
            self.game_result = GameResult.win_for(player)
            self.winning_line = self.board.get_winning_line(player, column)
            debug.info(f"Player {player.name} wins with column {column}", "game")
        elif self.board.is_full():
            self.game_result = GameResult.DRAW
            debug.info("Game ends in a draw", "game")
        else:
            self.current_player = player.other()

        return True

    def ai_move(self) -> int:
        """
        Let the engine play for the current player.

        Returns:
            The column played, or -1 if the game is already over
        """
        if self.game_result.is_game_over():
            return -1

        column = self.ai.get_best_move(self.board, self.current_player)
        self.make_move(column)
        return column

    def is_game_over(self) -> bool:
        return self.game_result.is_game_over()

    def get_winner(self) -> Optional[Player]:
        """
        Get the winner of the game.

        Returns:
            The winning player, or None if no winner yet or draw
        """
        if self.game_result == GameResult.PLAYER_ONE_WIN:
            return Player.ONE
        elif self.game_result == GameResult.PLAYER_TWO_WIN:
            return Player.TWO
        return None

    def get_current_player(self) -> Player:
        return self.current_player

    def get_valid_moves(self) -> List[int]:
        if self.game_result.is_game_over():
            return []
        return self.board.get_valid_moves()

    def render(self) -> str:
        """Render the game as a string, marking a winning line with '*'."""
        return self.board.render(self.winning_line)


class ConnectFourEnv(gym.Env):
    """
    Connect Four environment following the Gymnasium interface.

    The agent plays Player.ONE; after each agent move the engine answers
    as Player.TWO at the configured difficulty.
    """

    metadata = {'render_modes': ['ascii', 'human'], 'render_fps': 4}

    def __init__(self, render_mode: Optional[str] = None, difficulty: int = DEFAULT_DIFFICULTY):
        """
        Initialize the Connect Four environment.

        Args:
            render_mode: Mode for rendering the environment
            difficulty: Difficulty of the engine opponent
        """
        debug.debug("Initializing ConnectFourEnv", "env")

        self.action_space = spaces.Discrete(COLS)

        # Observation space: 6x7 board with 3 possible values (0, 1, 2), row 0 at the bottom
        self.observation_space = spaces.Box(
            low=0, high=2, shape=(ROWS, COLS), dtype=np.int8
        )

        self.game = ConnectFourGame(difficulty=difficulty)
        self.render_mode = render_mode

        self.reward_win = 1.0
        self.reward_lose = -1.0
        self.reward_draw = 0.1
        self.reward_invalid_move = -0.5
        self.reward_step = -0.01  # Small negative reward to encourage faster wins

    def reset(self, seed: Optional[int] = None, options: Optional[Dict] = None) -> Tuple[np.ndarray, Dict]:
        """
        Reset the environment to initial state.

        Args:
            seed: Random seed; also drives the engine's move choices
            options: Additional options for reset (unused)

        Returns:
            Initial observation and info dictionary
        """
        debug.debug("Resetting environment", "env")
        super().reset(seed=seed)

        self.game.reset()
        self.game.ai.reset(rng=self.np_random)

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), self._get_info()

    def step(self, action: int) -> Tuple[np.ndarray, float, bool, bool, Dict]:
        """
        Play the agent's move and the engine's reply.

        Args:
            action: Column to place a piece (0-indexed)

        Returns:
            Tuple of (observation, reward, terminated, truncated, info)
        """
        action = int(action)
        debug.debug(f"Environment step with action {action}", "env")

        if not self.game.is_valid_move(action):
            debug.warning(f"Invalid action: {action}", "env")
            info = self._get_info()
            info['invalid_move'] = True
            return self._get_observation(), self.reward_invalid_move, False, True, info

        self.game.make_move(action)
        if not self.game.is_game_over():
            opponent_column = self.game.ai_move()
            debug.debug(f"Engine answered with column {opponent_column}", "env")

        reward = self.reward_step
        terminated = self.game.is_game_over()
        if self.game.game_result == GameResult.PLAYER_ONE_WIN:
            reward = self.reward_win
        elif self.game.game_result == GameResult.PLAYER_TWO_WIN:
            reward = self.reward_lose
        elif self.game.game_result == GameResult.DRAW:
            reward = self.reward_draw

        if self.render_mode == "human":
            self.render()

        return self._get_observation(), reward, terminated, False, self._get_info()

    def render(self) -> Optional[str]:
        """
        Render the current state of the environment.

        Returns:
            The ASCII board for "ascii" mode, None otherwise
        """
        if self.render_mode == "ascii":
            return self.game.render()
        if self.render_mode == "human":
            print(self.game.render())
        return None

    def _get_observation(self) -> np.ndarray:
        return self.game.board.get_state()

    def _get_info(self) -> Dict:
        valid_moves = self.game.get_valid_moves()
        return {
            'valid_moves': valid_moves,
            'num_valid_moves': len(valid_moves),
            'current_player': self.game.current_player.value,
            'game_result': self.game.game_result.name,
            'moves_made': len(self.game.history),
            'winning_line': self.game.winning_line,
            'engine_nodes': self.game.ai.nodes_evaluated,
        }

    def close(self):
        """Clean up resources."""
        pass
