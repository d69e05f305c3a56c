from .logic import WIN_LINES, GRID, HistoryEntry, TicTacToe, check_win
