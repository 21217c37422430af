"""Interface layer for xadm.

Packages under ``xadm.interfaces`` expose boundary adapters such as CLI
commands.
"""
