"""Animal use cases."""

from app.application.use_cases.animals.animal_operations import AnimalService

__all__ = ["AnimalService"]
