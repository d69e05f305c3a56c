import os

ASYNC_MODE = os.environ.get('TTT_ASYNC_MODE', 'gevent')
if ASYNC_MODE == 'gevent':
    from gevent import monkey
    monkey.patch_all()

import logging
import random, re, string, time
from flask import Flask, render_template, request
from flask_socketio import SocketIO, join_room, emit
from game.logic import TicTacToe, GRID

DEBUG = os.environ.get('TTT_DEBUG', '').lower() in ('1', 'true', 'yes')
UNJOINED_ROOM_TTL = int(os.environ.get('TTT_UNJOINED_ROOM_TTL', 600))   # seconds

app = Flask(__name__)
app.config['SECRET_KEY'] = os.environ.get('SECRET_KEY', 'a_secret_key')
app.logger.setLevel(logging.DEBUG if DEBUG else logging.INFO)
socketio = SocketIO(app, async_mode=ASYNC_MODE)

games = {}   # room -> {"game": TicTacToe, "sids": set(), "created": float}

# ── Routes ───────────────────────────────────────────────────────────────────
@app.route('/')
def home(): return render_template('home.html')

@app.route('/game/<room>')
def game(room):
    if room not in games:
        return render_template('home.html', error="Invalid room code")
    return render_template('game.html', room=room)

# ── Helpers ───────────────────────────────────────────────────────────────────
def new_room():
    room = ''.join(random.choices(string.digits, k=5))
    while room in games:
        room = ''.join(random.choices(string.digits, k=5))
    return room

def make_game_data():
    return {"game": TicTacToe(GRID), "sids": set(), "created": time.time()}

def prune_rooms():
    """Drop rooms nobody joined within UNJOINED_ROOM_TTL."""
    cutoff = time.time() - UNJOINED_ROOM_TTL
    for room, game_data in list(games.items()):
        if not game_data["sids"] and game_data["created"] < cutoff:
            del games[room]
            app.logger.info("Room %s expired unjoined", room)

def as_int(value):
    """Payload field as an int, or None when the client sent something else."""
    if isinstance(value, bool): return None
    if isinstance(value, int): return value
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()): return int(value)
    return None

def _lookup(data):
    if not isinstance(data, dict): return None, None
    room = data.get("room")
    if not isinstance(room, str): return None, None
    return room, games.get(room)

# ── SocketIO Events ───────────────────────────────────────────────────────────
@socketio.on("create")
def create(data=None):
    prune_rooms()
    room = new_room()
    games[room] = make_game_data()
    app.logger.info("Room %s created", room)
    emit("created", room)

@socketio.on("join")
def join(data):
    room, game_data = _lookup(data)
    if not game_data: emit("invalid"); return
    join_room(room)
    game_data["sids"].add(request.sid)
    app.logger.info("Client %s joined room %s", request.sid, room)
    emit("state", game_data["game"].state())

@socketio.on("move")
def move(data):
    room, game_data = _lookup(data)
    if not game_data:
        app.logger.debug("Ignored move for unknown room %r", room)
        return
    cell = as_int(data.get("cell"))
    g = game_data["game"]
    if cell is None or not g.apply_move(cell):
        app.logger.debug("Room %s: ignored move %r", room, data.get("cell"))
        return
    app.logger.info("Room %s: %s", room, g.history[-1].desc)
    emit("state", g.state(), room=room)

@socketio.on("jump")
def jump(data):
    room, game_data = _lookup(data)
    if not game_data:
        app.logger.debug("Ignored jump for unknown room %r", room)
        return
    step = as_int(data.get("step"))
    g = game_data["game"]
    if step is None or not g.jump_to(step):
        app.logger.debug("Room %s: ignored jump to %r", room, data.get("step"))
        return
    app.logger.info("Room %s: jumped to step %d", room, step)
    emit("state", g.state(), room=room)

@socketio.on('disconnect')
def disconnect(*args):
    sid = request.sid
    for room, game_data in list(games.items()):
        if sid not in game_data["sids"]: continue
        game_data["sids"].discard(sid)
        app.logger.info("Client %s left room %s", sid, room)
        if not game_data["sids"]:
            del games[room]
            app.logger.info("Room %s closed", room)

if __name__ == "__main__":
    socketio.run(app, host=os.environ.get('HOST', '127.0.0.1'),
                 port=int(os.environ.get('PORT', 5000)), debug=DEBUG)
