"""HTTP front-end for the party ledger."""
