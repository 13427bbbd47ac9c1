"""Gomoku board front end: board model, render plans and engine requests."""

__version__ = "0.1.0"
