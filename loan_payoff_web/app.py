import logging

from flask import Flask, jsonify, redirect, render_template, request, session, url_for

from loan_payoff.config import configure_logging, load_settings
from loan_payoff.engine import Loan, SimulationDidNotConverge, UnpayableSchedule
from loan_payoff.formatter import CURRENCY_OPTIONS, format_money, normalized_currency, snapshot_row, SNAPSHOT_HEADERS
from loan_payoff.history import SnapshotHistory
from loan_payoff.utils import float_from_str

logger = logging.getLogger(__name__)

settings = load_settings()
configure_logging(settings.log_level)

app = Flask(__name__)
app.secret_key = settings.secret_key
app.config["MAX_DAYS"] = settings.max_days
app.config["MAX_SNAPSHOTS"] = settings.max_snapshots
app.config["DEFAULT_CURRENCY"] = normalized_currency(settings.currency)

DEFAULT_FORM = {
    "amount": "43524.71",
    "apr": "7.50",
    "compounding": "daily",
    "payment": "730.99",
    "every": "30",
}


def _load_history() -> SnapshotHistory:
    return SnapshotHistory.from_list(session.get("snapshots"), max_size=app.config["MAX_SNAPSHOTS"])


def _save_history(history: SnapshotHistory) -> None:
    session["snapshots"] = history.to_list()
    session.modified = True


def _checked_loan(amount: float, apr: float, compounding, payment: float, every: int) -> Loan:
    """Build a loan, rejecting values the simulation cannot handle sensibly."""
    if amount < 0:
        raise ValueError(f"Amount must not be negative: {amount}")
    if payment < 0:
        raise ValueError(f"Payment must not be negative: {payment}")
    if every > app.config["MAX_DAYS"]:
        raise ValueError(f"Payment interval must be at most {app.config['MAX_DAYS']} days")
    return Loan.create(
        amount=amount,
        apr=apr,
        compounding=compounding,
        payment=payment,
        payday_interval=every,
    )


def _form_to_loan(form) -> Loan:
    """Build a loan from submitted form fields; raises ValueError on bad numbers."""
    try:
        every = int(form.get("every", "1").strip() or "1")
    except ValueError as exc:
        raise ValueError(f"Invalid payment interval: {form.get('every')}") from exc
    return _checked_loan(
        float_from_str(form.get("amount", "0") or "0"),
        float_from_str(form.get("apr", "0") or "0"),
        form.get("compounding", "daily"),
        float_from_str(form.get("payment", "0") or "0"),
        every,
    )


def _run(loan: Loan):
    """Return ``(snapshot, error_message)`` for a loan; exactly one is set."""
    try:
        return loan.run_until_done(max_days=app.config["MAX_DAYS"]), None
    except UnpayableSchedule:
        return None, "unpayable"
    except SimulationDidNotConverge as exc:
        return None, str(exc)


@app.route("/", methods=["GET", "POST"])
def index():
    form = dict(DEFAULT_FORM)
    currency_code = app.config["DEFAULT_CURRENCY"]
    snapshot = None
    failure = None
    error = None

    history = _load_history()

    if request.method == "POST":
        form.update({k: request.form.get(k, form[k]) for k in DEFAULT_FORM})
        currency_code = normalized_currency(request.form.get("currency", currency_code))
    try:
        snapshot, failure = _run(_form_to_loan(form))
    except ValueError as exc:
        error = str(exc)

    if request.method == "POST" and request.form.get("action") == "snapshot" and snapshot is not None:
        history.add(snapshot)
        _save_history(history)

    return render_template(
        "index.html",
        form=form,
        snapshot=snapshot,
        failure=failure,
        error=error,
        snapshots=list(history),
        snapshot_headers=SNAPSHOT_HEADERS,
        snapshot_row=snapshot_row,
        format_money=format_money,
        currency_code=currency_code,
        currency_options=CURRENCY_OPTIONS,
    )


@app.post("/snapshots/clear")
def clear_snapshots():
    history = _load_history()
    history.clear()
    _save_history(history)
    return redirect(url_for("index"))


@app.post("/api/payoff")
def api_payoff():
    data = request.get_json(silent=True)
    if data is None:
        data = {}
    if not isinstance(data, dict):
        return jsonify({"ok": False, "error": "InvalidInput", "detail": "Expected a JSON object"}), 400
    try:
        loan = _checked_loan(
            float_from_str(data.get("amount", "")),
            float_from_str(data.get("apr", "")),
            data.get("compounding"),
            float_from_str(data.get("payment", "")),
            int(data.get("payment_interval_days", 1)),
        )
    except (TypeError, ValueError) as exc:
        return jsonify({"ok": False, "error": "InvalidInput", "detail": str(exc)}), 400
    try:
        snapshot = loan.run_until_done(max_days=app.config["MAX_DAYS"])
    except UnpayableSchedule:
        return jsonify({"ok": False, "error": "UnpayableSchedule"}), 422
    except SimulationDidNotConverge as exc:
        logger.warning("Payoff request did not converge: %s", exc)
        return jsonify({"ok": False, "error": "DidNotConverge", "max_days": exc.max_days}), 422
    return jsonify({"ok": True, "snapshot": snapshot.to_dict()})


if __name__ == "__main__":
    print("Starting Loan Payoff web app...")
    app.run(host="0.0.0.0", port=8710, debug=True)
