import pytest

from client.finance import (
    expense_months,
    expense_years,
    filter_expenses,
    format_inr,
    parse_amount,
    summarize_expenses,
    summarize_softex,
)

EXPENSES = [
    {'year': '2023', 'amount': '1000', 'description': 'March'},
    {'year': '2024', 'amount': '2500.50 INR', 'description': 'April'},
    {'year': '2024', 'amount': 'pending', 'description': 'May'},
    {'year': '2022', 'amount': '300', 'description': 'April'},
]


@pytest.mark.parametrize('raw, expected', [
    ('1200', 1200.0),
    ('1200.50 INR', 1200.5),
    ('  -40', -40.0),
    ('.5', 0.5),
    ('Rs 100', 0.0),
    ('', 0.0),
    (None, 0.0),
    (75, 75.0),
])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_filter_by_year_sorts_latest_first():
    rows = filter_expenses(EXPENSES, year='2024')
    assert [row['description'] for row in rows] == ['April', 'May']


def test_filter_by_month_across_years():
    rows = filter_expenses(EXPENSES, month='April')
    assert [row['year'] for row in rows] == ['2024', '2022']


def test_filter_without_criteria_returns_all():
    assert len(filter_expenses(EXPENSES)) == 4
    assert filter_expenses(None) == []


def test_years_and_months():
    assert expense_years(EXPENSES) == ['2024', '2023', '2022']
    assert expense_months(EXPENSES) == ['March', 'April', 'May']


def test_summarize_expenses():
    summary = summarize_expenses({'financialExpenses': EXPENSES}, year='2024')

    assert summary['total'] == 2500.5
    assert len(summary['rows']) == 2
    assert summary['years'] == ['2024', '2023', '2022']


def test_summarize_expenses_for_unit_without_rows():
    summary = summarize_expenses({'name': 'Empty'})
    assert summary == {'rows': [], 'total': 0, 'years': [], 'months': []}


def test_summarize_softex(unit_data):
    unit = {**unit_data, 'softexDetails': unit_data['softexDetails'] + [
        {'year': '2024', 'month': 'May', 'amount': '50000', 'mpr': ''},
        {'year': '2023', 'month': 'April', 'amount': '10000', 'mpr': ''},
    ]}

    assert summarize_softex(unit, year='2024')['total'] == 200000
    assert summarize_softex(unit, month='April')['total'] == 160000


@pytest.mark.parametrize('amount, expected', [
    (0, '₹0'),
    (999, '₹999'),
    (1000, '₹1,000'),
    (123456, '₹1,23,456'),
    (1234567.5, '₹12,34,567.50'),
    (-2500, '-₹2,500'),
])
def test_format_inr(amount, expected):
    assert format_inr(amount) == expected
