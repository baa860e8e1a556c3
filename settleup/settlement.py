# settleup/settlement.py
"""
Balance and settlement engine.

Folds a list of expenses into one net balance per participant, then matches
the largest creditors with the largest debtors to produce the transfers that
settle the group. Everything here is pure: inputs are never mutated and no
state is kept between calls.
"""
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP, localcontext

logger = logging.getLogger(__name__)

CENT = Decimal('0.01')
# Balances within this distance of zero count as settled
EPSILON = Decimal('0.01')


def to_decimal(value):
    if isinstance(value, Decimal):
        return value
    # str() first so floats like 0.1 keep their printed value
    return Decimal(str(value))


def round2(value):
    """Round to cents, half away from zero. NaN and infinities pass through."""
    if not value.is_finite():
        return value
    with localcontext() as ctx:
        # Room for every integer digit plus the two cents digits
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


class Participant:
    def __init__(self, id, name=''):
        self.id = id
        self.name = name

    def __repr__(self):
        return f"Participant({self.id!r}, {self.name!r})"


class Expense:
    def __init__(self, payer_id, amount, participant_ids, id=None, description='', date=None):
        self.id = id
        self.description = description
        self.payer_id = payer_id
        self.amount = to_decimal(amount)
        self.date = date
        # Duplicates collapse, first-seen order is kept
        self.participant_ids = list(dict.fromkeys(participant_ids))

    def __repr__(self):
        return f"Expense({self.payer_id!r}, {self.amount}, {self.participant_ids!r})"


class Balance:
    def __init__(self, participant_id, amount):
        self.participant_id = participant_id
        self.amount = to_decimal(amount)

    def __eq__(self, other):
        if not isinstance(other, Balance):
            return NotImplemented
        return (self.participant_id, self.amount) == (other.participant_id, other.amount)

    def __repr__(self):
        return f"Balance({self.participant_id!r}, {self.amount})"

    def to_dict(self):
        return {'participantId': self.participant_id, 'amount': float(round2(self.amount))}


class Transfer:
    def __init__(self, from_id, to_id, amount):
        self.from_id = from_id
        self.to_id = to_id
        self.amount = to_decimal(amount)

    def __eq__(self, other):
        if not isinstance(other, Transfer):
            return NotImplemented
        return (self.from_id, self.to_id, self.amount) == (other.from_id, other.to_id, other.amount)

    def __repr__(self):
        return f"Transfer({self.from_id!r} -> {self.to_id!r}, {self.amount})"

    def to_dict(self):
        return {'fromId': self.from_id, 'toId': self.to_id, 'amount': float(round2(self.amount))}


def compute_balances(expenses, participants):
    """
    Net position of every participant: what they paid minus their shares.

    Ids referenced by an expense but missing from ``participants`` are added
    with a zero starting balance. Expenses with no split members are skipped.
    Amounts are rounded to cents only after every expense has been applied.
    """
    balances = {}
    for participant in participants:
        balances[participant.id] = Decimal(0)
    known = len(balances)

    skipped = 0
    with localcontext() as ctx:
        # inf - inf becomes NaN instead of raising
        ctx.traps[InvalidOperation] = False
        for expense in expenses:
            if not expense.participant_ids:
                skipped += 1
                continue

            share = expense.amount / len(expense.participant_ids)

            balances.setdefault(expense.payer_id, Decimal(0))
            balances[expense.payer_id] += expense.amount

            for person in expense.participant_ids:
                balances.setdefault(person, Decimal(0))
                balances[person] -= share

    if skipped:
        logger.debug("Skipped %d expense(s) with no split members", skipped)
    if len(balances) > known:
        logger.debug("Introduced %d participant id(s) not in the group", len(balances) - known)

    return [Balance(person, round2(amount)) for person, amount in balances.items()]


def simplify_debts(balances):
    """
    Transfers that settle ``balances``, matching largest creditor with
    largest debtor first.

    Produces at most ``creditors + debtors - 1`` transfers. This is a greedy
    heuristic and not always the global minimum. Among equal amounts the
    input order is kept. Balances that are NaN or infinite are left out.
    """
    # 1. Separate Debtors and Creditors
    creditors = []
    debtors = []

    for balance in balances:
        amount = to_decimal(balance.amount)
        # NaN and infinite balances cannot be paid off
        if not amount.is_finite():
            continue
        if amount > EPSILON:
            creditors.append({'person': balance.participant_id, 'amount': amount})
        elif amount < -EPSILON:
            debtors.append({'person': balance.participant_id, 'amount': -amount})

    creditors.sort(key=lambda x: x['amount'], reverse=True)
    debtors.sort(key=lambda x: x['amount'], reverse=True)

    # 2. Match them up
    transfers = []
    i = 0
    j = 0

    while i < len(creditors) and j < len(debtors):
        creditor = creditors[i]
        debtor = debtors[j]

        amount = min(creditor['amount'], debtor['amount'])
        if amount > EPSILON:
            transfers.append(Transfer(debtor['person'], creditor['person'], round2(amount)))

        creditor['amount'] -= amount
        debtor['amount'] -= amount

        if creditor['amount'] < EPSILON: i += 1
        if debtor['amount'] < EPSILON: j += 1

    logger.debug("Settled %d creditor(s) and %d debtor(s) with %d transfer(s)",
                 len(creditors), len(debtors), len(transfers))
    return transfers


def total_expenses(expenses):
    with localcontext() as ctx:
        ctx.traps[InvalidOperation] = False
        return sum((expense.amount for expense in expenses), Decimal(0))
