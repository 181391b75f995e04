"""Host integrations for layered resolution (template engines)."""
