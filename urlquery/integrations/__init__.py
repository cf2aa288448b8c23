"""Framework integrations for urlquery."""
