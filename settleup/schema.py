# settleup/schema.py
"""Turn JSON request bodies into engine objects."""
import datetime
from decimal import InvalidOperation

from settleup.settlement import Balance, Expense, Participant, to_decimal


class PayloadError(ValueError):
    """Raised when a request body does not have the expected shape."""


def _pick(item, *keys):
    for key in keys:
        if key in item:
            return item[key]
    return None


def _require_list(data, what):
    if not isinstance(data, list):
        raise PayloadError(f"{what} must be a list")
    return data


def _require_object(item, what, index):
    if not isinstance(item, dict):
        raise PayloadError(f"{what} #{index} must be an object")
    return item


def _amount(value, what, index):
    # bool is an int subclass; true/false are never amounts
    if value is None or isinstance(value, bool):
        raise PayloadError(f"{what} #{index} is missing an amount")
    try:
        amount = to_decimal(value)
    except (InvalidOperation, ValueError):
        raise PayloadError(f"{what} #{index} has an invalid amount: {value!r}")
    if not amount.is_finite():
        raise PayloadError(f"{what} #{index} has an invalid amount: {value!r}")
    return amount


def _name(value, index):
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise PayloadError(f"expense #{index} has an invalid name: {value!r}")
    return str(value)


def _date(value, index):
    if value is None or value == '':
        return None
    try:
        return datetime.date.fromisoformat(value)
    except (TypeError, ValueError):
        raise PayloadError(f"expense #{index} has an invalid date: {value!r}")


def parse_participants(data):
    participants = []
    for index, item in enumerate(_require_list(data, 'participants')):
        item = _require_object(item, 'participant', index)
        participant_id = item.get('id')
        if participant_id is None:
            raise PayloadError(f"participant #{index} is missing an id")
        participants.append(Participant(str(participant_id), item.get('name') or ''))
    return participants


def parse_expenses(data):
    expenses = []
    for index, item in enumerate(_require_list(data, 'expenses')):
        item = _require_object(item, 'expense', index)

        payer_id = _pick(item, 'payerId', 'payer_id')
        if payer_id is None:
            raise PayloadError(f"expense #{index} is missing a payerId")

        members = _pick(item, 'participantIds', 'participant_ids')
        if members is None:
            members = []
        if not isinstance(members, list):
            raise PayloadError(f"expense #{index} participantIds must be a list")

        expenses.append(Expense(
            str(payer_id),
            _amount(item.get('amount'), 'expense', index),
            [str(member) for member in members],
            id=str(index if item.get('id') is None else item['id']),
            description=item.get('description') or '',
            date=_date(item.get('date'), index),
        ))
    return expenses


def parse_group(data):
    """Participants and expenses from a ``{participants, expenses}`` body."""
    if not isinstance(data, dict):
        raise PayloadError("request body must be an object")
    participants = parse_participants(data.get('participants', []))
    expenses = parse_expenses(data.get('expenses', []))
    return participants, expenses


def parse_balances(data):
    if not isinstance(data, dict):
        raise PayloadError("request body must be an object")
    balances = []
    for index, item in enumerate(_require_list(data.get('balances', []), 'balances')):
        item = _require_object(item, 'balance', index)
        participant_id = _pick(item, 'participantId', 'participant_id')
        if participant_id is None:
            raise PayloadError(f"balance #{index} is missing a participantId")
        balances.append(Balance(str(participant_id), _amount(item.get('amount'), 'balance', index)))
    return balances


def parse_legacy_expenses(data):
    """
    Expenses in the original ``[{payer, amount, involved}]`` shape, where
    people are identified by name.
    """
    expenses = []
    for index, item in enumerate(_require_list(data, 'expenses')):
        item = _require_object(item, 'expense', index)
        if not item.get('payer'):
            raise PayloadError(f"expense #{index} is missing a payer")
        involved = item.get('involved') or []
        if not isinstance(involved, list):
            raise PayloadError(f"expense #{index} involved must be a list")
        expenses.append(Expense(
            _name(item['payer'], index),
            _amount(item.get('amount'), 'expense', index),
            [_name(person, index) for person in involved],
        ))
    return expenses
