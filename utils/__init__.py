"""Shared helpers for the PNGPANG application."""
