"""Request and response schemas for the ledger action surface."""
