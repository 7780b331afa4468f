# src/interfaces/slack/__init__.py
"""Slack integration package for the public chat channel.

This package provides the Slack bot implementation using AsyncApp
and AsyncSocketModeHandler from slack-bolt.
"""
