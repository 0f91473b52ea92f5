"""AgentBook desktop GUI (PySide6)."""
