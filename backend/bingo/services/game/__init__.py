"""Game domain services: boards, line counting, state store and reveal.

This package contains the pure(ish) game logic used by the socket
gateway and the HTTP routes, keeping transport concerns separated from
the core game mechanics.
"""
