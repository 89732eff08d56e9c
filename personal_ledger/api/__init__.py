"""HTTP routers exposing the ledger action and query surface."""
