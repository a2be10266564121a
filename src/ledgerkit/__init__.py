"""ledgerkit - double-entry bookkeeping ledger engine.

The domain services live in ``ledgerkit.domain``, persistence in
``ledgerkit.database`` and the ``ledgerkit`` command in ``ledgerkit.cli.main``.
"""

__version__ = "0.1.0"
