"""Application interfaces (ports): repository and media store protocols.

Define contracts for infrastructure implementations (DIP).
No runtime imports from app.infrastructure or app.api.
"""

from app.application.interfaces.repositories import IAnimalRepository, INewsRepository
from app.application.interfaces.storage import IMediaStore

__all__ = [
    "IAnimalRepository",
    "IMediaStore",
    "INewsRepository",
]
