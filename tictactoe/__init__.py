"""
TicTacToe - Two-player tic-tac-toe engine with a heuristic AI opponent.

The engine owns the rules and exposes them to a browser front end:
- Board state management (moves, win/draw detection, turn switching)
- A fixed-priority heuristic bot for Human vs AI games
- Session driving for the browser boundary
- A REST/WebSocket API
"""

__version__ = "0.1.0"
