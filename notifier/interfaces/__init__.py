"""Interfaces through which events reach the application."""
