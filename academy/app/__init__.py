"""Academy client application shell."""
