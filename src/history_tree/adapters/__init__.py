"""Host integrations for the history tree."""
