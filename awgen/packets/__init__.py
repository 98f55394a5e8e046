"""Packets exchanged with the engine client, and the transports that carry them."""
