"""Edit-data service tools."""
