"""Utility for resolving account references to IDs."""

from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import LedgerContext


def resolve_account(
    account_service: AccountService, context: LedgerContext, account: str | int
) -> int:
    """Resolve an account code, name or ID to an account ID.

    Numeric references are matched against account codes first, then IDs.
    Names are matched case-insensitively.

    Args:
        account_service: AccountService instance
        context: Ledger context
        account: Account code, name or ID

    Returns:
        Account ID

    Raises:
        ValueError: If account is not found
    """
    accounts = account_service.list_accounts(context)
    reference = str(account).strip()

    if reference.isdigit():
        number = int(reference)
        for acc in accounts:
            if acc.code == number:
                return acc.id
        for acc in accounts:
            if acc.id == number:
                return acc.id
        raise ValueError(f"Account '{reference}' not found")

    for acc in accounts:
        if acc.name.lower() == reference.lower():
            return acc.id

    raise ValueError(f"Account '{reference}' not found")
