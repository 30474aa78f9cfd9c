"""Services Layer — the imperative shell around the pure ledger core.

Invariants:
    - LedgerService is the only writer of ledger state
    - Persistence goes through the OperationRepository protocol (core/repository_protocols.py)
"""
