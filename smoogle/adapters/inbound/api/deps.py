"""FastAPI dependency injection for Smoogle."""

import logging

from ....composition.container import build_controller, get_index
from ....core.ports.vector_store_port import SimilarityIndexPort
from ....core.services import QueryController

logger = logging.getLogger(__name__)


def get_controller() -> QueryController:
    """Create a per-request controller around the shared model and index."""
    return build_controller()


def get_vector_store() -> SimilarityIndexPort:
    """Get the shared similarity index."""
    return get_index()
