import datetime
from decimal import Decimal

import pytest

from settleup.schema import (
    PayloadError, parse_balances, parse_expenses, parse_group, parse_legacy_expenses,
    parse_participants,
)


def test_parse_group_accepts_camel_case():
    participants, expenses = parse_group({
        'participants': [{'id': 'p1', 'name': 'Ana'}, {'id': 'p2', 'name': 'Ana'}],
        'expenses': [{
            'id': 'e1',
            'description': 'Dinner',
            'amount': 42.5,
            'payerId': 'p1',
            'date': '2024-03-01',
            'participantIds': ['p1', 'p2', 'p2'],
        }],
    })

    assert [(p.id, p.name) for p in participants] == [('p1', 'Ana'), ('p2', 'Ana')]
    expense = expenses[0]
    assert expense.id == 'e1'
    assert expense.description == 'Dinner'
    assert expense.amount == Decimal('42.5')
    assert expense.payer_id == 'p1'
    assert expense.date == datetime.date(2024, 3, 1)
    assert expense.participant_ids == ['p1', 'p2']


def test_parse_expenses_accepts_snake_case_and_defaults():
    expenses = parse_expenses([{'amount': '10', 'payer_id': 1, 'participant_ids': [1, 2]}])

    assert expenses[0].id == '0'
    assert expenses[0].description == ''
    assert expenses[0].date is None
    assert expenses[0].payer_id == '1'
    assert expenses[0].participant_ids == ['1', '2']


def test_missing_split_is_an_empty_split():
    assert parse_expenses([{'amount': 5, 'payerId': 'a'}])[0].participant_ids == []


@pytest.mark.parametrize('item, message', [
    ({'amount': 5}, 'missing a payerId'),
    ({'payerId': 'a'}, 'missing an amount'),
    ({'payerId': 'a', 'amount': 'lots'}, 'invalid amount'),
    ({'payerId': 'a', 'amount': 'NaN'}, 'invalid amount'),
    ({'payerId': 'a', 'amount': True}, 'missing an amount'),
    ({'payerId': 'a', 'amount': 1, 'date': '01/02/2024'}, 'invalid date'),
    ({'payerId': 'a', 'amount': 1, 'participantIds': 'a,b'}, 'must be a list'),
])
def test_bad_expenses_are_rejected(item, message):
    with pytest.raises(PayloadError, match=message):
        parse_expenses([item])


def test_bad_shapes_are_rejected():
    with pytest.raises(PayloadError):
        parse_group([])
    with pytest.raises(PayloadError):
        parse_participants({'id': 'a'})
    with pytest.raises(PayloadError):
        parse_participants([{'name': 'no id'}])
    with pytest.raises(PayloadError):
        parse_expenses(['not an object'])


def test_parse_balances():
    balances = parse_balances({'balances': [{'participantId': 'a', 'amount': -3.5}]})

    assert balances[0].participant_id == 'a'
    assert balances[0].amount == Decimal('-3.5')

    with pytest.raises(PayloadError):
        parse_balances({'balances': [{'amount': 1}]})


def test_parse_legacy_expenses():
    expenses = parse_legacy_expenses([{'payer': 'Sam', 'amount': 30, 'involved': ['Sam', 'Kim']}])

    assert expenses[0].payer_id == 'Sam'
    assert expenses[0].participant_ids == ['Sam', 'Kim']

    with pytest.raises(PayloadError, match='missing a payer'):
        parse_legacy_expenses([{'amount': 30, 'involved': ['Sam']}])


@pytest.mark.parametrize('item', [
    {'payer': {'n': 1}, 'amount': 5, 'involved': ['x']},
    {'payer': 'Sam', 'amount': 5, 'involved': [['y']]},
    {'payer': 'Sam', 'amount': 5, 'involved': [None]},
    {'payer': True, 'amount': 5, 'involved': ['Sam']},
])
def test_legacy_names_must_be_plain_values(item):
    with pytest.raises(PayloadError, match='invalid name'):
        parse_legacy_expenses([item])


def test_legacy_numeric_names_become_strings():
    expenses = parse_legacy_expenses([{'payer': 7, 'amount': 5, 'involved': [7, 'Kim']}])

    assert expenses[0].payer_id == '7'
    assert expenses[0].participant_ids == ['7', 'Kim']


def test_null_expense_id_falls_back_to_position():
    expenses = parse_expenses([
        {'id': None, 'amount': 1, 'payerId': 'a'},
        {'id': 0, 'amount': 1, 'payerId': 'a'},
    ])

    assert [e.id for e in expenses] == ['0', '0']
