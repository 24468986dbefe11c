"""Self-playing tic-tac-toe engine with MCTS and negamax players and a terminal viewer."""

__version__ = "0.1.0"