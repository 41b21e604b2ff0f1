"""Host adapters for the edit session."""
