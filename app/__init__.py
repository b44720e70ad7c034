"""Shelter records API: animals and news with a managed photo lifecycle."""
