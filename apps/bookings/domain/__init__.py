"""Pure domain model of the booking ledger."""
