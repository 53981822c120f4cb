"""Seed data for development environments."""
