"""Telegram bot implementation package.

Contains all Telegram bot specific functionality: input classification,
message handlers, response formatting and localized message templates.
"""
