# backend/client/finance.py
"""
Summaries over a unit's financial expense and Softex rows.

Expense rows carry the month in ``description``. Amounts are free text;
the numeric prefix is used ("1200.50 INR" counts as 1200.5) and anything
without one counts as 0.
"""

import re

_NUMERIC_PREFIX = re.compile(r'^\s*[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?')


def parse_amount(value):
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    match = _NUMERIC_PREFIX.match(str(value or ''))
    return float(match.group(0)) if match else 0.0


def _year_key(row):
    try:
        return float(row.get('year'))
    except (TypeError, ValueError):
        return float('-inf')


def filter_expenses(expenses, year=None, month=None):
    """Rows matching ``year`` and ``month`` (either may be blank), latest year first."""
    rows = [
        row for row in expenses or []
        if (not year or row.get('year') == year) and (not month or row.get('description') == month)
    ]
    return sorted(rows, key=_year_key, reverse=True)


def total_amount(rows):
    return sum(parse_amount(row.get('amount')) for row in rows)


def expense_years(expenses):
    years = {row.get('year') for row in expenses or [] if row.get('year')}
    return sorted(years, key=lambda year: _year_key({'year': year}), reverse=True)


def expense_months(expenses):
    months = []
    for row in expenses or []:
        month = row.get('description')
        if month and month not in months:
            months.append(month)
    return months


def summarize_expenses(unit, year=None, month=None):
    expenses = unit.get('financialExpenses') or []
    rows = filter_expenses(expenses, year, month)
    return {
        'rows': rows,
        'total': total_amount(rows),
        'years': expense_years(expenses),
        'months': expense_months(expenses),
    }


def summarize_softex(unit, year=None, month=None):
    rows = [
        row for row in unit.get('softexDetails') or []
        if (not year or row.get('year') == year) and (not month or row.get('month') == month)
    ]
    rows = sorted(rows, key=_year_key, reverse=True)
    return {'rows': rows, 'total': total_amount(rows)}


def format_inr(amount):
    """Indian digit grouping, e.g. 1234567.5 -> '₹12,34,567.50'."""
    negative = amount < 0
    whole, fraction = f'{abs(amount):.2f}'.split('.')
    head, tail = whole[:-3], whole[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    grouped = ','.join(groups + [tail]) if groups else tail
    if fraction == '00':
        text = f'₹{grouped}'
    else:
        text = f'₹{grouped}.{fraction}'
    return f'-{text}' if negative else text
