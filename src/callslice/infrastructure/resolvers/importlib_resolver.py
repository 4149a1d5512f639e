"""Resolver backed by the host interpreter's import system."""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path

from callslice.domain.ports.class_resolver import ClassResolverPort
from callslice.infrastructure.resolvers.source_root import module_candidates

logger = logging.getLogger(__name__)


class ImportlibResolver(ClassResolverPort):
    """Maps FQNs to files with importlib.util.find_spec.

    Finds installed distributions and anything else on sys.path. Only
    pure-Python modules resolve; standard library modules, extension
    modules and namespace packages without __init__.py yield None.

    Note: find_spec imports parent packages of dotted names.
    """

    def resolve(self, fqn: str) -> Path | None:
        if not fqn:
            raise ValueError("fqn must not be empty")

        parts = fqn.split(".")
        if parts[0] in sys.stdlib_module_names:
            return None

        for prefix in module_candidates(parts):
            origin = _find_origin(".".join(prefix))
            if origin is not None:
                return origin
        return None


def _find_origin(module_name: str) -> Path | None:
    try:
        spec = importlib.util.find_spec(module_name)
    except Exception as e:  # noqa: BLE001
        logger.debug("find_spec failed for %s: %s", module_name, e)
        return None

    if spec is None or not spec.origin or not spec.origin.endswith(".py"):
        return None
    return Path(spec.origin).resolve()
