"""SupplyGuard — supply-chain compliance monitoring service."""
