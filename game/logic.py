from collections import namedtuple

WIN_LINES = [
    (0,1,2),(3,4,5),(6,7,8),
    (0,3,6),(1,4,7),(2,5,8),
    (0,4,8),(2,4,6)
]

GRID = [
    [0, 1, 2],
    [3, 4, 5],
    [6, 7, 8],
]

# squares is a tuple so a recorded step can't be edited after the fact
HistoryEntry = namedtuple("HistoryEntry", ["squares", "desc"])


def check_win(board):
    """Return (winner, win_line); winner is "X"/"O", "D" for a full board, or None."""
    for a, b, c in WIN_LINES:
        if board[a] and board[a] == board[b] == board[c]:
            return board[a], [a, b, c]
    if all(board):
        return "D", None
    return None, None


def find_row(i, rows):
    for r, cells in enumerate(rows):
        if i in cells: return r + 1
    return None


class TicTacToe:
    def __init__(self, rows=None):
        self.rows = rows or GRID
        self.history = [HistoryEntry((None,) * 9, "Game started")]
        self.step_number = 0

    @property
    def current_player(self):
        return "X" if self.step_number % 2 == 0 else "O"

    def current_board(self):
        return self.history[self.step_number].squares

    def winner(self):
        winner, _ = check_win(self.current_board())
        return winner

    def win_line(self):
        _, win_line = check_win(self.current_board())
        return win_line

    def position(self, i):
        """1-based (row, column) of cell i in the grid layout."""
        row = find_row(i, self.rows)
        if row is None: return None, None
        return row, self.rows[row - 1].index(i) + 1

    def apply_move(self, i):
        if type(i) is not int or not 0 <= i < 9: return False
        squares = list(self.current_board())
        winner, _ = check_win(squares)
        if winner in ("X", "O") or squares[i]: return False
        player = self.current_player
        squares[i] = player
        row, col = self.position(i)
        # moving from a past step drops the future we rewound from
        del self.history[self.step_number + 1:]
        self.history.append(HistoryEntry(tuple(squares), f"{player} put in row {row}, column {col}"))
        self.step_number = len(self.history) - 1
        return True

    def jump_to(self, step):
        if type(step) is not int or not 0 <= step < len(self.history): return False
        self.step_number = step
        return True

    def status(self):
        winner = self.winner()
        if winner == "D": return "The game ended as a draw"
        if winner: return f"Winner: {winner}"
        return f"Next player: {self.current_player}"

    def moves(self):
        """Move list entries for the history panel, oldest first."""
        return [{
            "step":     step,
            "label":    f"Back to move #{step}" if step else "Back to game start",
            "desc":     entry.desc,
            "active":   step == self.step_number,
            # can't jump forward past the step being viewed
            "disabled": step > self.step_number,
        } for step, entry in enumerate(self.history)]

    def state(self):
        winner, win_line = check_win(self.current_board())
        return {
            "squares":    list(self.current_board()),
            "rows":       self.rows,
            "stepNumber": self.step_number,
            "player":     self.current_player,
            "winner":     winner,
            "winLine":    win_line,
            "status":     self.status(),
            "moves":      self.moves(),
        }
