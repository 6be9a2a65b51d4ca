"""
Configuration for the hierarchy module.

Defaults cover the usual OWL/RDFS setup; deployments override them through
environment variables, optionally loaded from a .env file.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv
from rdflib import URIRef

from .domain import HierarchyKindName
from .kinds import KINDS, HierarchyKind
from .vocabulary import OWL, RDFS

DEFAULT_ROOTS = (str(OWL.Thing), str(RDFS.Resource))


def _split_iris(value: str) -> Tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass
class HierarchyConfig:
    """Configuration for hierarchy computation."""
    # Root sentinels, full IRIs
    class_roots: Tuple[str, ...] = DEFAULT_ROOTS
    shape_roots: Tuple[str, ...] = DEFAULT_ROOTS

    # Boolean annotation marking nodes excluded from canonical paths
    deprecation_predicate: str = str(OWL.deprecated)

    log_level: str = "WARNING"

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None) -> "HierarchyConfig":
        """Build a configuration from HIERARCHY_* environment variables.

        Variables already set in the environment take precedence over the
        .env file.
        """
        load_dotenv(dotenv_path)
        config = cls()

        class_roots = os.getenv("HIERARCHY_CLASS_ROOTS")
        if class_roots:
            config.class_roots = _split_iris(class_roots)

        shape_roots = os.getenv("HIERARCHY_SHAPE_ROOTS")
        if shape_roots:
            config.shape_roots = _split_iris(shape_roots)

        deprecation_predicate = os.getenv("HIERARCHY_DEPRECATION_PREDICATE")
        if deprecation_predicate:
            config.deprecation_predicate = deprecation_predicate.strip()

        log_level = os.getenv("HIERARCHY_LOG_LEVEL")
        if log_level:
            config.log_level = log_level.strip().upper()

        return config

    def kind(self, name: HierarchyKindName) -> HierarchyKind:
        """Return the hierarchy kind `name` with the configured roots and deprecation predicate."""
        roots = self.class_roots if name == HierarchyKindName.CLASS else self.shape_roots
        return (KINDS[name]
                .with_roots(URIRef(root) for root in roots)
                .with_deprecation(URIRef(self.deprecation_predicate)))


def configure_logging(config: HierarchyConfig) -> None:
    """Apply the configured log level to the hierarchy loggers.

    Raises:
        ValueError: If the level name is unknown
    """
    level = logging.getLevelName(config.log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {config.log_level}")

    logging.basicConfig(format='%(levelname)s: %(message)s')
    logging.getLogger("hierarchy").setLevel(level)
