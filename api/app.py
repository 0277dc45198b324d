"""Flask JSON API exposing an in-memory expense ledger."""

from __future__ import annotations

import os
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from expense_ledger.exceptions import ValidationError
from expense_ledger.models import Month, parse_date
from expense_ledger.services import ExpenseLedger


def _configure_cors(app: Flask) -> None:
    """Open CORS fully in development, else only to the configured origins."""
    env_name = os.getenv("EXPENSE_TRACKER_ENV", "prod").lower()
    origins = [
        origin.strip()
        for origin in os.getenv("EXPENSE_TRACKER_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]
    if env_name in {"dev", "development"}:
        origins = ["*"]
    if origins:
        CORS(app, resources={r"/*": {"origins": origins}}, supports_credentials=True)
    else:
        CORS(app)
    app.logger.debug("CORS origins for %s: %s", env_name, origins or "default")


def create_app(ledger: Optional[ExpenseLedger] = None) -> Flask:
    app = Flask(__name__)
    _configure_cors(app)

    ledger = ledger if ledger is not None else ExpenseLedger()
    app.extensions["expense_ledger"] = ledger

    def _success(payload: Any, status: int = 200):
        return jsonify(payload), status

    def _handle_error(exc: Exception, status: int, message: str):
        app.logger.warning("%s: %s", message, exc)
        return jsonify({"error": message, "details": str(exc), "kind": type(exc).__name__}), status

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc: ValidationError):
        return _handle_error(exc, 400, "Validation error")

    def _json_body() -> Dict[str, Any]:
        if not request.is_json:
            raise ValidationError("Request content must be application/json")
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError("Malformed JSON body")
        if not isinstance(data, dict):
            raise ValidationError("JSON body must be an object")
        return data

    def _body_date(raw: object):
        if raw is None:
            return None
        if not isinstance(raw, str):
            raise ValidationError("date must be an ISO 8601 date (YYYY-MM-DD)")
        try:
            return parse_date(raw)
        except ValueError as exc:
            raise ValidationError(str(exc)) from exc

    @app.get("/expenses")
    def list_expenses():
        month = request.args.get("month")
        if month in (None, ""):
            return _success(ledger.snapshot())
        # Read-only override: the stored filter is left as it was.
        selected = Month.parse(month)
        items = [expense for expense in ledger.entries if expense.month == selected]
        return _success({
            "month": int(selected),
            "items": [expense.to_dict() for expense in items],
            "total": sum((expense.amount for expense in items), 0.0),
        })

    @app.post("/expenses")
    def create_expense():
        payload = _json_body()
        expense = ledger.add_expense(
            payload.get("name"),
            payload.get("amount"),
            _body_date(payload.get("date")),
        )
        return _success(expense.to_dict(), 201)

    @app.put("/filter")
    def set_filter():
        payload = _json_body()
        ledger.set_month_filter(payload.get("month"))
        return _success(ledger.snapshot())

    @app.delete("/filter")
    def clear_filter():
        ledger.clear_month_filter()
        return _success(ledger.snapshot())

    return app
