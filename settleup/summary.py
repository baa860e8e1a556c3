# settleup/summary.py
"""Display-ready view of a group's balances and suggested transfers."""
from decimal import Decimal

from settleup.settlement import EPSILON, compute_balances, round2, simplify_debts, total_expenses

UNKNOWN_NAME = 'Unknown'

NO_PARTICIPANTS = "Add participants to see the balance."
NO_EXPENSES = "Add expenses to see who owes whom."
ALL_SETTLED = "All settled! No transfers needed."


def balance_status(amount):
    if amount.is_nan():
        return 'settled'
    if amount > EPSILON:
        return 'creditor'
    if amount < -EPSILON:
        return 'debtor'
    return 'settled'


def describe_transfer(transfer, names):
    debtor = names.get(transfer.from_id, UNKNOWN_NAME)
    creditor = names.get(transfer.to_id, UNKNOWN_NAME)
    return f"{debtor} owes {creditor} ${transfer.amount:.2f}"


def summarize(participants, expenses):
    """
    Total, per-participant balances and transfers with names attached.

    Balances are listed in participant order. Transfers may reference ids
    that are not in ``participants`` (stale expenses); those are shown as
    "Unknown".
    """
    names = {p.id: p.name for p in participants}
    total = total_expenses(expenses)

    if not participants:
        return {
            'total': float(round2(total)),
            'balances': [],
            'transfers': [],
            'lines': [],
            'message': NO_PARTICIPANTS,
        }

    balances = compute_balances(expenses, participants)
    transfers = simplify_debts(balances)
    by_id = {b.participant_id: b.amount for b in balances}

    rows = []
    for participant in participants:
        amount = by_id.get(participant.id, Decimal(0))
        rows.append({
            'participantId': participant.id,
            'name': participant.name,
            'amount': float(amount),
            'status': balance_status(amount),
        })

    moves = []
    for transfer in transfers:
        move = transfer.to_dict()
        move['fromName'] = names.get(transfer.from_id, UNKNOWN_NAME)
        move['toName'] = names.get(transfer.to_id, UNKNOWN_NAME)
        moves.append(move)

    message = None
    if not transfers:
        message = ALL_SETTLED if expenses else NO_EXPENSES

    return {
        'total': float(round2(total)),
        'balances': rows,
        'transfers': moves,
        'lines': [describe_transfer(t, names) for t in transfers],
        'message': message,
    }
