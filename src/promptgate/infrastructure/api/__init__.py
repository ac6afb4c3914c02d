"""FastAPI integration for PromptGate."""
