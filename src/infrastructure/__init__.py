"""Infrastructure adapters: settings, logging and ledger storage."""
