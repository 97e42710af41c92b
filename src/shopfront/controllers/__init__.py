"""Frontend controllers — per-domain query facades and their decorators.

Controllers may import from domain and config.
They must never import from plugins, output, or cli.
"""
