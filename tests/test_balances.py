"""Tests for opening and closing balance computation."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain.entities import AccountType, BalanceType
from ledgerkit.domain.errors import NotFoundError, PeriodNotFound, ValidationError
from ledgerkit.domain.period import period_start


def test_example_scenario(context, chart, account_service, balance_service, post):
    """Opening 1000, collections exceeding invoices by 200, closing 800."""
    receivable = chart["receivable"]
    # 2023 closing balance carried into the 2024 period
    balance_service.create_balance(context, receivable.id, 2024, 1000, BalanceType.DEBIT)

    post("IN", receivable, chart["revenue"], 300, date(2024, 2, 15))
    post("RC", receivable, chart["bank"], 500, date(2024, 5, 10))

    assert account_service.opening_balance(context, receivable, 2024) == Decimal("1000")
    assert account_service.ledger.movement(
        receivable, date(2024, 1, 1), date(2024, 6, 30)
    ) == Decimal("-200")
    closing = account_service.closing_balance(
        context, receivable, date(2024, 1, 1), date(2024, 6, 30)
    )
    assert closing == Decimal("800")


def test_opening_balance_defaults_to_current_period(
    context, chart, account_service, balance_service
):
    balance_service.create_balance(context, chart["bank"].id, 2023, 40, BalanceType.DEBIT)
    balance_service.create_balance(context, chart["bank"].id, 2024, 70, BalanceType.DEBIT)

    assert account_service.opening_balance(context, chart["bank"]) == Decimal("70")
    assert account_service.opening_balance(context, chart["bank"], 2023) == Decimal("40")


def test_opening_balance_sums_debits_and_credits(
    context, chart, account_service, balance_service
):
    bank = chart["bank"]
    balance_service.create_balance(context, bank.id, 2024, 500, BalanceType.DEBIT)
    balance_service.create_balance(context, bank.id, 2024, 120, BalanceType.CREDIT)

    assert account_service.opening_balance(context, bank, 2024) == Decimal("380")


def test_opening_balance_without_rows_is_zero(context, chart, account_service):
    assert account_service.opening_balance(context, chart["bank"], 2024) == Decimal("0")


def test_opening_balance_missing_period(context, chart, account_service):
    with pytest.raises(PeriodNotFound, match="2022"):
        account_service.opening_balance(context, chart["bank"], 2022)


def test_closing_balance_defaults_to_today(context, chart, account_service, post):
    post("IN", chart["receivable"], chart["revenue"], 100, date(2024, 6, 30))
    # Outside the default range ending today
    post("IN", chart["receivable"], chart["revenue"], 50, date(2024, 7, 1))

    assert account_service.closing_balance(context, chart["receivable"]) == Decimal("100")


def test_closing_balance_consistency(context, chart, account_service, balance_service, post):
    receivable = chart["receivable"]
    balance_service.create_balance(context, receivable.id, 2023, 200, BalanceType.DEBIT)
    balance_service.create_balance(context, receivable.id, 2024, 650, BalanceType.DEBIT)
    post("IN", receivable, chart["revenue"], "120.35", date(2023, 11, 3))
    post("IN", receivable, chart["revenue"], "99.99", date(2024, 1, 1))
    post("RC", receivable, chart["bank"], "45.10", date(2024, 3, 31))
    post("IN", receivable, chart["revenue"], "10.01", date(2024, 6, 30))

    for day in [date(2023, 12, 31), date(2024, 1, 1), date(2024, 3, 31), date(2024, 6, 30)]:
        year = account_service.periods.year(context, day)
        expected = account_service.opening_balance(
            context, receivable, year
        ) + account_service.ledger.movement(receivable, period_start(day), day)
        assert account_service.closing_balance(context, receivable, end_date=day) == expected


def test_closing_balance_start_after_end(context, chart, account_service):
    with pytest.raises(ValidationError):
        account_service.closing_balance(
            context, chart["bank"], date(2024, 6, 1), date(2024, 5, 1)
        )


def test_balances_are_converted_at_their_rate(
    context, account_service, balance_service, currency_service, rate_service
):
    eur_id = currency_service.create_currency(context, "eur", "Euro")
    rate_service.add_rate(eur_id, Decimal("1.25"), date(2024, 1, 1))
    account = account_service.create_account(
        context, "Euro bank", AccountType.BANK, currency_id=eur_id
    )

    balance_service.create_balance(context, account.id, 2024, 100, BalanceType.DEBIT)

    assert account_service.opening_balance(context, account, 2024) == Decimal("80")


def test_balance_rate_defaults_to_rate_at_period_start(
    context, account_service, balance_service, currency_service, rate_service, temp_db
):
    eur_id = currency_service.create_currency(context, "EUR", "Euro")
    rate_service.add_rate(eur_id, Decimal("1.10"), date(2023, 6, 1))
    opening_rate = rate_service.add_rate(eur_id, Decimal("1.25"), date(2024, 1, 1))
    rate_service.add_rate(eur_id, Decimal("2.00"), date(2024, 3, 1))
    account = account_service.create_account(
        context, "Euro bank", AccountType.BANK, currency_id=eur_id
    )

    balance_service.create_balance(context, account.id, 2024, 100, BalanceType.DEBIT)

    (balance,) = temp_db.list_balances(account.id)
    assert balance.exchange_rate_id == opening_rate


def test_foreign_currency_posting(
    context, account_service, currency_service, rate_service, chart, transaction_service
):
    from ledgerkit.domain.transaction import NewLineItem

    eur_id = currency_service.create_currency(context, "EUR", "Euro")
    rate_service.add_rate(eur_id, Decimal("1.25"), date(2024, 1, 1))
    account = account_service.create_account(
        context, "Euro clients", AccountType.RECEIVABLE, currency_id=eur_id
    )

    transaction_service.post_transaction(
        context,
        "IN",
        date(2024, 2, 1),
        account.id,
        [NewLineItem(account_id=chart["revenue"].id, amount=Decimal("250"))],
    )

    assert account_service.closing_balance(context, account) == Decimal("200")
    assert account_service.closing_balance(context, chart["revenue"]) == Decimal("-200")


class TestCreateBalance:
    """Tests for recording opening balances."""

    def test_amount_must_be_positive(self, context, chart, balance_service):
        with pytest.raises(ValidationError):
            balance_service.create_balance(context, chart["bank"].id, 2024, 0, "DEBIT")

    def test_balance_type_from_word(self, context, chart, balance_service, temp_db):
        balance_service.create_balance(context, chart["bank"].id, 2024, 10, "credit")

        (balance,) = temp_db.list_balances(chart["bank"].id)
        assert balance.balance_type == BalanceType.CREDIT

    def test_unknown_balance_type(self, context, chart, balance_service):
        with pytest.raises(ValidationError):
            balance_service.create_balance(context, chart["bank"].id, 2024, 10, "X")

    def test_missing_period(self, context, chart, balance_service):
        with pytest.raises(PeriodNotFound):
            balance_service.create_balance(context, chart["bank"].id, 2030, 10, "D")

    def test_missing_account(self, context, balance_service):
        with pytest.raises(NotFoundError):
            balance_service.create_balance(context, 999, 2024, 10, "D")

    @pytest.mark.parametrize("side", ["Cheese", "Dog", "debits", "CR", ""])
    def test_side_must_be_spelled_out(self, context, chart, balance_service, temp_db, side):
        with pytest.raises(ValidationError, match="Unknown balance type"):
            balance_service.create_balance(context, chart["bank"].id, 2024, 10, side)

        assert temp_db.list_balances(chart["bank"].id) == []

    @pytest.mark.parametrize(
        "side,expected",
        [("D", BalanceType.DEBIT), ("c", BalanceType.CREDIT), (" Debit ", BalanceType.DEBIT)],
    )
    def test_accepted_sides(self, context, chart, balance_service, temp_db, side, expected):
        balance_service.create_balance(context, chart["bank"].id, 2024, 10, side)

        (balance,) = temp_db.list_balances(chart["bank"].id)
        assert balance.balance_type == expected

    def test_account_of_another_entity(self, context, other_context, chart, balance_service):
        with pytest.raises(NotFoundError):
            balance_service.create_balance(other_context, chart["bank"].id, 2024, 10, "D")
