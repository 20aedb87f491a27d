"""Cab Share: a chat bot that groups students travelling the same way."""

__version__ = "0.1.0"
