"""Pure domain model of the property catalog (no Django imports)."""
