"""Console front-end for the party ledger."""
