"""Business logic for the kuji box simulator."""
