"""API routers for SupplyGuard."""
