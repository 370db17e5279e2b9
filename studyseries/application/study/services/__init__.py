from .interaction_factory import InteractionFactory
from .series_mutation_service import SeriesMutationService

__all__ = ["InteractionFactory", "SeriesMutationService"]
