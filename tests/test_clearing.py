"""Tests for transaction clearing rules and assignments."""

from datetime import date
from decimal import Decimal

import pytest

from ledgerkit.domain.clearing import validate_clearing
from ledgerkit.domain.entities import AccountType, ClearingStatus, TransactionType
from ledgerkit.domain.errors import (
    NotFoundError,
    OverClearance,
    UnclearableTransaction,
    ValidationError,
)
from ledgerkit.domain.labels import LabelConfig


class TestValidateClearing:
    """Tests for the pure clearing gate."""

    def test_allowed_types_pass(self):
        allowed = (TransactionType.IN, TransactionType.JN)
        validate_clearing(TransactionType.IN, allowed)
        validate_clearing("JN", allowed)

    def test_disallowed_type_names_everything(self):
        allowed = (TransactionType.IN, TransactionType.JN)

        with pytest.raises(UnclearableTransaction) as exc_info:
            validate_clearing(TransactionType.CS, allowed)

        error = exc_info.value
        assert error.transaction_type == TransactionType.CS
        assert error.allowed_types == allowed
        assert str(error) == (
            "Cash Sale Transaction cannot be cleared. "
            "Transaction to be cleared must be one of: Client Invoice, Journal Entry"
        )

    def test_custom_labels_in_message(self):
        labels = LabelConfig(
            transaction_types={t: t.value.lower() for t in TransactionType}
        )

        with pytest.raises(UnclearableTransaction, match="cp Transaction cannot be cleared"):
            validate_clearing("CP", ["BL"], labels)

    def test_nothing_allowed(self):
        with pytest.raises(UnclearableTransaction):
            validate_clearing(TransactionType.IN, ())

    @pytest.mark.parametrize(
        "clearing_type,cleared_type",
        [
            ("RC", "IN"),
            ("CN", "JN"),
            ("PY", "BL"),
            ("DN", "BL"),
            ("JN", "IN"),
        ],
    )
    def test_clearables_table(self, clearing_type, cleared_type):
        labels = LabelConfig()
        validate_clearing(cleared_type, labels.clearable_types(clearing_type))

    @pytest.mark.parametrize("clearing_type", ["CS", "IN", "CP", "BL", "CE"])
    def test_types_that_clear_nothing(self, clearing_type):
        labels = LabelConfig()
        with pytest.raises(UnclearableTransaction):
            validate_clearing("IN", labels.clearable_types(clearing_type))


@pytest.fixture
def invoice_and_receipt(chart, post):
    """A 500 client invoice and a 300 client receipt on the same account."""
    invoice = post("IN", chart["receivable"], chart["revenue"], 500, date(2024, 2, 1))
    receipt = post("RC", chart["receivable"], chart["bank"], 300, date(2024, 3, 1))
    return invoice, receipt


class TestClearingService:
    """Tests for recording clearing assignments."""

    def test_receipt_clears_invoice(self, context, invoice_and_receipt, clearing_service):
        invoice, receipt = invoice_and_receipt

        clearing_service.clear(context, receipt, invoice, Decimal("300"))

        assert clearing_service.cleared_amount(invoice) == Decimal("300")
        assert clearing_service.assigned_amount(receipt) == Decimal("300")
        assert clearing_service.status(invoice) == ClearingStatus.OPEN

    def test_invoice_fully_cleared(self, context, chart, post, invoice_and_receipt, clearing_service):
        invoice, receipt = invoice_and_receipt
        second = post("RC", chart["receivable"], chart["bank"], 200, date(2024, 4, 1))

        clearing_service.clear(context, receipt, invoice, 300)
        clearing_service.clear(context, second, invoice, 200)

        assert clearing_service.status(invoice) == ClearingStatus.CLEARED

    def test_assignment_date_defaults_to_today(
        self, context, invoice_and_receipt, clearing_service, temp_db
    ):
        invoice, receipt = invoice_and_receipt

        clearing_service.clear(context, receipt, invoice, 100)

        (assignment,) = temp_db.list_assignments(transaction_id=receipt)
        assert assignment.assignment_date == context.today

    def test_unclearable_pair(self, context, chart, post, clearing_service):
        sale = post("CS", chart["receivable"], chart["revenue"], 500, date(2024, 2, 1))
        receipt = post("RC", chart["receivable"], chart["bank"], 300, date(2024, 3, 1))

        with pytest.raises(UnclearableTransaction, match="Cash Sale"):
            clearing_service.clear(context, receipt, sale, 100)

    def test_over_clearing_the_receipt(self, context, invoice_and_receipt, clearing_service):
        invoice, receipt = invoice_and_receipt

        with pytest.raises(OverClearance):
            clearing_service.clear(context, receipt, invoice, 400)

    def test_over_clearing_the_invoice(self, context, chart, post, clearing_service):
        invoice = post("IN", chart["receivable"], chart["revenue"], 100, date(2024, 2, 1))
        receipt = post("RC", chart["receivable"], chart["bank"], 300, date(2024, 3, 1))

        clearing_service.clear(context, receipt, invoice, 60)
        with pytest.raises(OverClearance) as exc_info:
            clearing_service.clear(context, receipt, invoice, 50)

        assert exc_info.value.available == Decimal("40")

    def test_self_clearing(self, context, invoice_and_receipt, clearing_service):
        _, receipt = invoice_and_receipt

        with pytest.raises(ValidationError):
            clearing_service.clear(context, receipt, receipt, 10)

    def test_different_main_accounts(
        self, context, chart, post, account_service, clearing_service
    ):
        other = account_service.create_account(context, "Staff", AccountType.RECEIVABLE)
        invoice = post("IN", other, chart["revenue"], 100, date(2024, 2, 1))
        receipt = post("RC", chart["receivable"], chart["bank"], 100, date(2024, 3, 1))

        with pytest.raises(ValidationError, match="same main account"):
            clearing_service.clear(context, receipt, invoice, 100)

    def test_non_positive_amount(self, context, invoice_and_receipt, clearing_service):
        invoice, receipt = invoice_and_receipt

        with pytest.raises(ValidationError):
            clearing_service.clear(context, receipt, invoice, 0)

    def test_missing_transaction(self, context, invoice_and_receipt, clearing_service):
        invoice, _ = invoice_and_receipt

        with pytest.raises(NotFoundError):
            clearing_service.clear(context, 999, invoice, 10)

    @pytest.mark.parametrize("clearing_type", ["IN", "CS", "CP", "BL", "CE"])
    def test_type_that_clears_nothing(self, context, chart, post, clearing_service, clearing_type):
        invoice = post("IN", chart["receivable"], chart["revenue"], 100, date(2024, 2, 1))
        clearing = post(clearing_type, chart["receivable"], chart["bank"], 100, date(2024, 3, 1))

        with pytest.raises(ValidationError, match="cannot clear other Transactions") as exc_info:
            clearing_service.clear(context, clearing, invoice, 10)
        assert not isinstance(exc_info.value, UnclearableTransaction)

    def test_transactions_of_another_entity(
        self, context, other_context, invoice_and_receipt, clearing_service
    ):
        invoice, receipt = invoice_and_receipt

        with pytest.raises(NotFoundError, match=f"Transaction {receipt} not found"):
            clearing_service.clear(other_context, receipt, invoice, 10)
        assert clearing_service.cleared_amount(invoice) == Decimal("0")
