"""Host adapters for the navigation containers."""
