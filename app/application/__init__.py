"""Application layer: DTOs, interfaces (ports), services, use cases.

Depends only on domain and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, media store).
"""
