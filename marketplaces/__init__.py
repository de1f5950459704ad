"""Marketplace export loaders."""
