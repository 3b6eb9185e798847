"""Owner directory lookups for duplicate messages."""

import logging
from typing import Dict, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db.models import Agent

logger = logging.getLogger(__name__)


class OwnerDirectory:
    """Maps agent reference ids to display names."""

    def __init__(self, session: Session):
        self.session = session
        self._names: Optional[Dict[str, str]] = None

    def names(self) -> Dict[str, str]:
        """Get the reference id to display name mapping, loading it once.

        A failed load yields an empty mapping so messages fall back to
        reference ids; the load is retried on the next call.
        """
        if self._names is None:
            try:
                agents = self.session.query(Agent).all()
            except SQLAlchemyError as e:
                logger.warning(f"Failed to load agents: {str(e)}")
                return {}
            self._names = {agent.referenceid: agent.display_name for agent in agents}
            logger.debug(f"Loaded {len(self._names)} agents into owner directory")
        return self._names

    def display_name(self, referenceid: str) -> str:
        """Get an agent's display name, falling back to the reference id."""
        return self.names().get(referenceid) or referenceid
