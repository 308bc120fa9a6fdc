"""Data access: market data adapters and bulk CSV import/export."""
