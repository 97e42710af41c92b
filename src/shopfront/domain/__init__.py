"""Domain layer — sort keys, criteria expressions, context and managers.

This layer depends only on the stdlib.
It must never import from controllers, plugins, output, or cli.
"""
