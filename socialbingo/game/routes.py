"""Routes for the game blueprint."""

from __future__ import annotations

from typing import Any

from flask import (
    Response,
    current_app,
    g,
    jsonify,
    stream_with_context,
)

from socialbingo.auth import identity_required
from socialbingo.errors import AppError, ValidationError
from socialbingo.store import SnapshotChannel
from socialbingo.utils import SSE_KEEPALIVE, sse_message, to_jsonable

from . import bp
from .feed import RecentGamesFeed, list_recent_games
from .forms import BoardForm, RenameForm
from .services import GameService
from .sync import GameSync

INVITE_TEXT = "Join my Bingo! Game ID: {game_id}"


def get_store() -> Any:
    """Return the session store bound to the running app."""
    return current_app.extensions["session_store"]


def _heartbeat() -> float:
    return float(current_app.config["STREAM_HEARTBEAT_SECONDS"])


def _require_valid(form: Any) -> None:
    """Raise the first form error as a ValidationError."""
    if form.validate_on_submit():
        return
    for errors in form.errors.values():
        if errors:
            raise ValidationError(errors[0])
    raise ValidationError()


def _error_frame(error: AppError) -> str:
    """Report an error on a stream whose headers are already sent."""
    current_app.logger.error(f"Stream ended by {error.kind} error: {error.message}")
    return sse_message({"error": error.message, "kind": error.kind}, event="error")


@bp.route("/", methods=["GET"])
def recent_games() -> Any:
    """List the most recently created games."""
    return jsonify(games=list_recent_games(get_store()))


@bp.route("/recent/stream", methods=["GET"])
def recent_games_stream() -> Any:
    """Stream the recent games list whenever it changes."""
    store = get_store()
    heartbeat = _heartbeat()

    def generate() -> Any:
        channel = SnapshotChannel()
        feed = RecentGamesFeed(store)
        try:
            with feed.subscribe(channel.sink("games")):
                while True:
                    item = channel.get(timeout=heartbeat)
                    if item is None:
                        yield SSE_KEEPALIVE
                        continue
                    yield sse_message({"games": item[1]}, event="games")
        except AppError as e:
            yield _error_frame(e)

    return Response(stream_with_context(generate()), mimetype="text/event-stream")


@bp.route("/", methods=["POST"])
@identity_required
def create_game() -> Any:
    """Create a new board from a list of items."""
    form = BoardForm()
    _require_valid(form)
    game = GameService.create_game(get_store(), g.uid, form.items.data)
    return jsonify(game), 201


@bp.route("/<string:game_id>", methods=["GET"])
@identity_required
def view_game(game_id: str) -> Any:
    """Return a game with its participants in presence order."""
    store = get_store()
    game = GameService.get_game(store, game_id)
    participants = GameService.list_participants(store, game_id)
    return jsonify(to_jsonable({"game": game, "participants": participants}))


@bp.route("/<string:game_id>/join", methods=["POST"])
@identity_required
def join_game(game_id: str) -> Any:
    """Make sure the caller has a participant record in the game."""
    store = get_store()
    GameService.get_game(store, game_id)
    created = GameService.ensure_joined(store, game_id, g.uid)
    participant = GameService.get_participant(store, game_id, g.uid)
    return jsonify(to_jsonable({"created": created, "participant": participant}))


@bp.route("/<string:game_id>/stream", methods=["GET"])
@identity_required
def game_stream(game_id: str) -> Any:
    """Stream the caller's live view of a game as server-sent events."""
    sync = GameSync(get_store(), game_id, g.uid)
    heartbeat = _heartbeat()

    def generate() -> Any:
        try:
            with sync:
                for state in sync.events(timeout=heartbeat):
                    if state is None:
                        yield SSE_KEEPALIVE
                    else:
                        yield sse_message(state, event="state")
        except AppError as e:
            yield _error_frame(e)

    current_app.logger.info(f"{g.uid} is watching game {game_id}")
    return Response(stream_with_context(generate()), mimetype="text/event-stream")


@bp.route("/<string:game_id>/cells/<int:index>/toggle", methods=["POST"])
@identity_required
def toggle_cell(game_id: str, index: int) -> Any:
    """Mark or unmark one cell for the caller."""
    checked = GameService.toggle_cell(get_store(), game_id, g.uid, index)
    return jsonify(checkedIndices=checked)


@bp.route("/<string:game_id>/name", methods=["POST"])
@identity_required
def rename(game_id: str) -> Any:
    """Change the caller's display name."""
    form = RenameForm()
    _require_valid(form)
    name = GameService.rename_participant(get_store(), game_id, g.uid, form.name.data)
    return jsonify(name=name)


@bp.route("/<string:game_id>/invite", methods=["GET"])
def invite(game_id: str) -> Any:
    """Shareable text inviting others to the game."""
    return jsonify(gameId=game_id, text=INVITE_TEXT.format(game_id=game_id))
