# settleup/routes.py
import logging

from flask import Blueprint, request, jsonify

from settleup.schema import (
    PayloadError, parse_balances, parse_group, parse_legacy_expenses,
)
from settleup.settlement import compute_balances, simplify_debts
from settleup.summary import describe_transfer, summarize

logger = logging.getLogger(__name__)

bp = Blueprint("settlements", __name__)


def _body():
    data = request.get_json(silent=True)
    if data is None:
        raise PayloadError("request body must be JSON")
    return data


def _bad_request(e):
    logger.warning("Rejected %s payload: %s", request.path, e)
    return jsonify({"error": str(e)}), 400


def _server_error(e):
    logger.exception("Failed to handle %s", request.path)
    return jsonify({"error": str(e)}), 500


@bp.route('/api', methods=['GET'])
def health_check():
    return jsonify({"status": "healthy", "message": "Backend is running!"})


@bp.route('/api/balances', methods=['POST'])
def balances():
    """
    Net balance per participant.

    Body: {"participants": [{"id", "name"}], "expenses": [{"payerId", "amount", "participantIds", ...}]}
    Positive balance = is owed money, negative = owes money.
    """
    try:
        participants, expenses = parse_group(_body())
        result = compute_balances(expenses, participants)
        return jsonify({"balances": [b.to_dict() for b in result]})
    except PayloadError as e:
        return _bad_request(e)
    except Exception as e:
        return _server_error(e)


@bp.route('/api/settle', methods=['POST'])
def settle():
    """Transfers that settle a list of balances: {"balances": [{"participantId", "amount"}]}."""
    try:
        result = simplify_debts(parse_balances(_body()))
        return jsonify({"transfers": [t.to_dict() for t in result]})
    except PayloadError as e:
        return _bad_request(e)
    except Exception as e:
        return _server_error(e)


@bp.route('/api/summary', methods=['POST'])
def summary():
    try:
        participants, expenses = parse_group(_body())
        return jsonify(summarize(participants, expenses))
    except PayloadError as e:
        return _bad_request(e)
    except Exception as e:
        return _server_error(e)


@bp.route('/api/calculate', methods=['POST'])
def calculate():
    """Original endpoint: people are identified by name, answers are sentences."""
    try:
        expenses = parse_legacy_expenses(_body())
        transfers = simplify_debts(compute_balances(expenses, []))
        # Here the ids are the names
        names = {pid: pid for t in transfers for pid in (t.from_id, t.to_id)}
        results = [describe_transfer(t, names) for t in transfers]
        return jsonify(results if len(results) > 0 else ["No debts found!"])
    except PayloadError as e:
        return _bad_request(e)
    except Exception as e:
        return _server_error(e)
