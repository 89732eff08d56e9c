"""Personal finance ledger: consistency engine, projections and currency tools."""
