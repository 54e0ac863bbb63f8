"""Sibling module imported relatively by the demo entry point."""

GREETING_KEY = 'greeting'
