"""Async script host for the Awgen game engine.

The event bus in `awgen.core` is the heart of it; `awgen.game.Game` wires that bus to
client packets and persisted settings.
"""
