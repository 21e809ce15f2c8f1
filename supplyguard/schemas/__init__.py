"""Request and response schemas for the SupplyGuard API."""
