"""
Noospace - Web Client

A Flask single-page client for the Noospace feed: inscribe, filter by tag,
switch between scroll and spiral views, star and delete entries.

Run with: python -m web.app
"""

import logging
import secrets

from flask import Flask, render_template, request, jsonify, redirect, session, url_for

from noospace import __version__
from noospace.config import DEBUG, SECRET_KEY, configure_logging, is_store_configured, STORE_BACKEND
from noospace.controller import FeedController, ActionResult, new_wallet_token, shorten_wallet
from noospace.models.entry import Entry
from noospace.policy import DAILY_LIMIT
from noospace.views import VIEW_SCROLL, VIEW_SPIRAL, normalize_view

configure_logging()
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.secret_key = SECRET_KEY or secrets.token_hex(16)

_CONTROLLER_KEY = "noospace.controller"


def get_controller() -> FeedController:
    """Get the controller owned by this app, loading the feed on first use."""
    controller = app.extensions.get(_CONTROLLER_KEY)
    if controller is None:
        controller = FeedController()
        if STORE_BACKEND != "memory" and not is_store_configured():
            logger.warning("Entry store not configured; set SUPABASE_URL and SUPABASE_ANON_KEY")
        controller.load()
        app.extensions[_CONTROLLER_KEY] = controller
    return controller


def set_controller(controller: FeedController) -> None:
    """Install a controller (used by tests and embedding code)."""
    app.extensions[_CONTROLLER_KEY] = controller


def current_wallet():
    """Wallet token of the requesting browser, kept in its session cookie."""
    return session.get("wallet")


def entry_to_json(entry: Entry) -> dict:
    """Convert an Entry to a JSON-serializable dict."""
    return {
        "id": entry.id,
        "text": entry.text,
        "symbol": entry.symbol,
        "tags": entry.tags or [],
        "wallet": entry.wallet,
        "date": entry.date,
        "stars": entry.stars,
    }


_STATUS_BY_REASON = {
    "store": 502,
    "not found": 404,
    "in flight": 409,
}


def _action_response(result: ActionResult, success_status: int = 200):
    """JSON response for an ActionResult."""
    if result.success:
        body = {"success": True}
        if result.entry is not None:
            body["entry"] = entry_to_json(result.entry)
        return jsonify(body), success_status

    status = _STATUS_BY_REASON.get(result.reason, 400)
    return jsonify({
        "success": False,
        "error": result.reason,
        "message": result.error,
    }), status


def _as_text(value) -> str:
    """JSON field as text; null/missing becomes ""."""
    return "" if value is None else str(value)


def _redirect_back():
    """Redirect to the page with the current view and tag kept."""
    view = request.form.get("view") or request.args.get("view") or VIEW_SCROLL
    tag = request.form.get("tag") or request.args.get("tag") or ""
    # The action already patched the feed; skip the reload so its error stays visible
    params = {"view": normalize_view(view), "refresh": "0"}
    if tag:
        params["tag"] = tag
    return redirect(url_for("index", **params))


# =============================================================================
# Page
# =============================================================================

@app.route("/")
def index():
    """Main page: composer, filters, and the active view."""
    controller = get_controller()

    # A page load is a fresh fetch; on failure the last known feed is shown
    if request.args.get("refresh", "1") != "0":
        controller.load()

    view = controller.set_view(request.args.get("view", controller.view))
    controller.set_filter(request.args.get("tag", ""))

    return render_template(
        "index.html",
        layout=controller.layout(),
        view=view,
        views=[VIEW_SCROLL, VIEW_SPIRAL],
        tags=controller.all_tags(),
        current_tag=controller.state.active_tag or "",
        rituals_left=controller.rituals_left(),
        daily_limit=DAILY_LIMIT,
        wallet=current_wallet(),
        wallet_display=shorten_wallet(current_wallet()),
        error=controller.error,
        version=__version__,
    )


@app.route("/inscribe", methods=["POST"])
def inscribe():
    """Form action: add an entry."""
    controller = get_controller()
    controller.inscribe(
        request.form.get("text", ""),
        symbol=request.form.get("symbol", ""),
        tags=request.form.get("tags", ""),
        wallet=current_wallet(),
    )
    return redirect(url_for(
        "index",
        view=controller.view,
        tag=controller.state.active_tag or "",
        refresh="0",
    ))


@app.route("/entries/<entry_id>/star", methods=["POST"])
def star(entry_id):
    """Form action: star an entry."""
    get_controller().star(entry_id)
    return _redirect_back()


@app.route("/entries/<entry_id>/delete", methods=["POST"])
def delete(entry_id):
    """Form action: delete an entry."""
    get_controller().delete(entry_id)
    return _redirect_back()


@app.route("/wallet/connect", methods=["POST"])
def connect_wallet():
    """Form action: give this browser a cosmetic wallet token."""
    session["wallet"] = new_wallet_token()
    return _redirect_back()


# =============================================================================
# JSON API
# =============================================================================

@app.route("/api/entries")
def api_entries():
    """List entries, optionally filtered by ?tag=, after a fresh fetch."""
    controller = get_controller()
    result = controller.load()
    if not result.success:
        return _action_response(result)

    controller.set_filter(request.args.get("tag", ""))
    entries = controller.visible_entries()

    return jsonify({
        "success": True,
        "count": len(entries),
        "tag": controller.state.active_tag,
        "entries": [entry_to_json(e) for e in entries],
    })


@app.route("/api/entries", methods=["POST"])
def api_create_entry():
    """Create an entry from JSON {text, symbol, tags}."""
    data = request.get_json(silent=True)

    if not isinstance(data, dict):
        return jsonify({"error": "No data provided"}), 400

    tags = data.get("tags")
    if isinstance(tags, list):
        tags = ",".join(str(t) for t in tags)

    result = get_controller().inscribe(
        _as_text(data.get("text")),
        symbol=_as_text(data.get("symbol")),
        tags=_as_text(tags),
        wallet=current_wallet(),
    )
    return _action_response(result, success_status=201)


@app.route("/api/entries/<entry_id>/star", methods=["POST"])
def api_star_entry(entry_id):
    """Add one star to an entry."""
    return _action_response(get_controller().star(entry_id))


@app.route("/api/entries/<entry_id>", methods=["DELETE"])
def api_delete_entry(entry_id):
    """Delete an entry."""
    return _action_response(get_controller().delete(entry_id))


@app.route("/api/tags")
def api_tags():
    """Distinct tags across all loaded entries."""
    return jsonify({"tags": get_controller().all_tags()})


@app.route("/api/spiral")
def api_spiral():
    """Spiral layout of the (optionally tag-filtered) entries."""
    controller = get_controller()
    controller.set_filter(request.args.get("tag", ""))
    layout = controller.layout(VIEW_SPIRAL)

    return jsonify({
        "empty_message": layout.empty_message,
        "center": {"x": layout.center_x, "y": layout.center_y},
        "cards": [
            {
                "id": card.id,
                "symbol": card.symbol,
                "text": card.text,
                "stars": card.stars,
                "index": card.index,
                "angle": card.angle,
                "radius": card.radius,
                "x": card.x,
                "y": card.y,
            }
            for card in layout.cards
        ],
    })


@app.route("/api/status")
def api_status():
    """Client status: quota, wallet, store configuration."""
    controller = get_controller()
    return jsonify({
        "store": controller.repository.store.name,
        "store_configured": is_store_configured(),
        "entries": len(controller.state),
        "rituals_left": controller.rituals_left(),
        "daily_limit": DAILY_LIMIT,
        "wallet": shorten_wallet(current_wallet()),
        "insert_in_flight": controller.insert_in_flight,
        "error": controller.error or None,
    })


if __name__ == "__main__":
    print("=" * 50)
    print("☄️  Noospace")
    print("=" * 50)
    print("Open http://localhost:5001 in your browser")
    print("Press Ctrl+C to stop")
    print("=" * 50)
    app.run(debug=DEBUG, port=5001)
