"""Tests for the command line interface."""

import pytest

from ledgerkit.cli.main import cli


@pytest.fixture
def invoke(cli_runner, tmp_path):
    """Invoke the CLI against a fresh database with today fixed at 2024-06-30."""
    db_path = str(tmp_path / "ledger.db")

    def _invoke(*args, input=None):
        return cli_runner.invoke(
            cli, ["--db-path", db_path, "--today", "2024-06-30", *args], input=input
        )

    return _invoke


@pytest.fixture
def ledger(invoke):
    """Entity, period, rate and three accounts created through the CLI."""
    for args in [
        ["entity", "create", "Acme Ltd"],
        ["period", "create", "2024"],
        ["currency", "rate", "USD", "1", "--date", "2020-01-01"],
        ["account", "create", "clients", "--type", "RECEIVABLE"],
        ["account", "create", "main bank", "--type", "bank"],
        ["account", "create", "sales", "--type", "OPERATING_REVENUE"],
    ]:
        result = invoke(*args)
        assert result.exit_code == 0, result.output
    return invoke


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Double-entry bookkeeping ledger" in result.output


def test_commands_need_an_entity(invoke):
    result = invoke("account", "list")

    assert result.exit_code == 1
    assert "No entity exists" in result.output


def test_entity_create_and_list(invoke):
    result = invoke("entity", "create", "Acme Ltd", "--currency", "eur", "--currency-name", "Euro")
    assert result.exit_code == 0
    assert "Created entity 'Acme Ltd'" in result.output

    result = invoke("entity", "list")
    assert "Acme Ltd" in result.output

    result = invoke("currency", "list")
    assert "EUR | Euro (home)" in result.output


def test_several_entities_need_selection(invoke):
    invoke("entity", "create", "Acme Ltd")
    invoke("entity", "create", "Other Ltd")

    result = invoke("period", "list")
    assert result.exit_code == 1
    assert "--entity" in result.output

    result = invoke("--entity", "Other Ltd", "period", "list")
    assert result.exit_code == 0
    assert "No reporting periods found" in result.output


def test_account_codes(ledger):
    result = ledger("account", "list")

    assert result.exit_code == 0
    assert "801 | Clients" in result.output
    assert "501 | Main bank" in result.output
    assert "4001 | Sales" in result.output


def test_account_category_mismatch(ledger):
    result = ledger("category", "create", "Trade Creditors", "--type", "PAYABLE")
    assert result.exit_code == 0

    result = ledger("account", "create", "Clients", "--type", "RECEIVABLE", "--category", "1")
    assert result.exit_code == 1
    assert "Cannot assign RECEIVABLE Account to PAYABLE Category" in result.output


def test_example_scenario(ledger):
    result = ledger("balance", "set", "801", "2024", "1000")
    assert result.exit_code == 0, result.output

    result = ledger("transaction", "post", "IN", "801", "--line", "4001=300", "--date", "2024-02-15")
    assert result.exit_code == 0, result.output
    assert "Posted Client Invoice on 2024-02-15" in result.output

    result = ledger(
        "transaction", "post", "RC", "Clients", "--line", "Main bank=500", "--date", "2024-05-10"
    )
    assert result.exit_code == 0, result.output

    result = ledger("account", "balance", "801", "--start-date", "2024-01-01")
    assert result.exit_code == 0, result.output
    assert "1,000.00" in result.output
    assert "-200.00" in result.output
    assert "800.00" in result.output

    result = ledger("report", "section", "--type", "RECEIVABLE", "--type", "BANK")
    assert result.exit_code == 0, result.output
    assert "Section total" in result.output
    assert "1,300.00" in result.output

    result = ledger("report", "movement", "--type", "OPERATING_REVENUE")
    assert result.exit_code == 0, result.output
    assert "Movement: 300.00" in result.output

    result = ledger("account", "delete", "801", "--yes")
    assert result.exit_code == 1
    assert "cannot be deleted" in result.output


def test_clear_transactions(ledger):
    ledger("transaction", "post", "IN", "801", "--line", "4001=300", "--date", "2024-02-15")
    ledger("transaction", "post", "RC", "801", "--line", "501=300", "--date", "2024-03-15")
    ledger("transaction", "post", "CS", "801", "--line", "4001=50", "--date", "2024-03-20")

    result = ledger("transaction", "clear", "2", "1", "300")
    assert result.exit_code == 0, result.output

    result = ledger("transaction", "list", "--account", "801")
    assert result.exit_code == 0
    assert "CLEARED" in result.output

    result = ledger("transaction", "clear", "2", "3", "10")
    assert result.exit_code == 1
    assert "Cash Sale Transaction cannot be cleared" in result.output


def test_closed_period_rejects_postings(ledger):
    ledger("period", "close", "2024")

    result = ledger("transaction", "post", "IN", "801", "--line", "4001=10")
    assert result.exit_code == 1
    assert "closed" in result.output

    ledger("period", "reopen", "2024")
    result = ledger("transaction", "post", "IN", "801", "--line", "4001=10")
    assert result.exit_code == 0, result.output


def test_invalid_line(ledger):
    result = ledger("transaction", "post", "IN", "801", "--line", "4001")

    assert result.exit_code == 1
    assert "expected ACCOUNT=AMOUNT" in result.output


def test_unknown_account(ledger):
    result = ledger("account", "balance", "Nowhere")

    assert result.exit_code == 1
    assert "Account 'Nowhere' not found" in result.output


def test_delete_empty_account(ledger):
    result = ledger("account", "delete", "Main bank", input="y\n")
    assert result.exit_code == 0, result.output
    assert "Deleted account 'Main bank'" in result.output

    result = ledger("account", "list", "--all")
    assert "(deleted)" in result.output
