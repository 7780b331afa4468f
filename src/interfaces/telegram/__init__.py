# src/interfaces/telegram/__init__.py
"""Telegram integration package for the private operator surface.

This package provides the Telegram bot implementation using Application
from python-telegram-bot with long polling.
"""
