"""Domain services for SupplyGuard."""
