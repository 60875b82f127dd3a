"""Logging helpers for ctxreplace."""
