"""Host adapters binding sessions to concrete UI toolkits."""
