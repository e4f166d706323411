"""
botrelay - Telegram webhook handlers for Workers AI commands and letter logos.
"""

__version__ = "0.1.0"
