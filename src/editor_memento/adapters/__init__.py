"""Host adapters that drive an Editor from a UI toolkit."""
