"""Office operations portal API."""
