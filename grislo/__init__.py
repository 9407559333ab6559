"""Grislo: reservation availability and synchronized storage for a community shuttle."""
