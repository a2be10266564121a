"""Domain layer for ledgerkit application."""

# Services are resolved lazily: the database layer imports domain entities,
# and services import the database layer.
_SERVICES = {
    "AccountService": "ledgerkit.domain.account",
    "BalanceService": "ledgerkit.domain.account",
    "CategoryService": "ledgerkit.domain.category",
    "ChartOfAccountsService": "ledgerkit.domain.chart",
    "ClearingService": "ledgerkit.domain.clearing",
    "CurrencyService": "ledgerkit.domain.currency",
    "EntityService": "ledgerkit.domain.entity",
    "ExchangeRateService": "ledgerkit.domain.currency",
    "LedgerService": "ledgerkit.domain.ledger",
    "ReportingPeriodService": "ledgerkit.domain.period",
    "TransactionService": "ledgerkit.domain.transaction",
}

__all__ = sorted(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
