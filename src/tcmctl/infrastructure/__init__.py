"""Infrastructure layer — Core Service gateways and session lifecycle.

This layer depends on the domain layer and stdlib only.
It must never import from services, commands, or output.
Remote transports are supplied by gateway plugins (see ``tcmctl.plugins``).
"""
