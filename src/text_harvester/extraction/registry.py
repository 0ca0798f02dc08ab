"""Strategy registry for extraction strategies.

Strategies register themselves on import using the ``@register`` decorator.
The registry is a module-level singleton mapping each strategy's unique
``name`` to its class; :func:`ordered_strategies` returns the classes in
the classifier's lookup order (ascending ``priority``).

Importing :mod:`text_harvester.extraction.strategies` registers every
built-in strategy; :func:`get_strategy` and :func:`ordered_strategies`
perform that import on first use.

Example: looking up a strategy::

    from text_harvester.extraction.registry import get_strategy, list_strategies

    cls = get_strategy("wikipedia")
    blocks = cls().extract(document)

    list_strategies()
    # [{"name": "unsent_project", "priority": 10, ...}, ...]
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from text_harvester.extraction.base import ExtractorStrategy

logger = logging.getLogger(__name__)

# Registry singleton: name -> ExtractorStrategy subclass
_REGISTRY: dict[str, type[ExtractorStrategy]] = {}


def register(cls: type[ExtractorStrategy]) -> type[ExtractorStrategy]:
    """Decorator that registers an ``ExtractorStrategy`` subclass in the global registry.

    If a strategy with the same ``name`` is already registered, the new
    registration overwrites the old one and a warning is emitted.

    Args:
        cls: ``ExtractorStrategy`` subclass to register.

    Returns:
        The same class (decorator pass-through).
    """
    name = cls.name
    if name in _REGISTRY and _REGISTRY[name] is not cls:
        logger.warning(
            "Strategy '%s' is already registered (was %s). Overwriting with %s.",
            name,
            _REGISTRY[name].__qualname__,
            cls.__qualname__,
        )
    _REGISTRY[name] = cls
    logger.debug(
        "Registered extraction strategy: name=%s priority=%d class=%s",
        name,
        cls.priority,
        cls.__qualname__,
    )
    return cls


def _ensure_loaded() -> None:
    """Import the built-in strategies so their ``@register`` decorators run."""
    import text_harvester.extraction.strategies  # noqa: F401, PLC0415


def get_strategy(name: str) -> type[ExtractorStrategy]:
    """Retrieve a registered strategy class by name.

    Args:
        name: The ``name`` class attribute value (e.g. ``"reddit"``).

    Returns:
        The ``ExtractorStrategy`` subclass registered under *name*.

    Raises:
        KeyError: If no strategy with the given name is registered.
    """
    _ensure_loaded()
    try:
        return _REGISTRY[name]
    except KeyError:
        registered = sorted(_REGISTRY.keys())
        raise KeyError(
            f"No extraction strategy registered as '{name}'. "
            f"Registered strategies: {registered}."
        ) from None


def ordered_strategies() -> list[type[ExtractorStrategy]]:
    """Return all registered strategy classes in classifier lookup order."""
    _ensure_loaded()
    return sorted(_REGISTRY.values(), key=lambda cls: (cls.priority, cls.name))


def list_strategies() -> list[dict]:  # type: ignore[type-arg]
    """Return metadata for all registered strategies, in lookup order.

    Returns:
        List of dicts with ``name``, ``priority``, ``host_patterns`` and
        ``strategy_class`` (fully qualified class name).
    """
    return [
        {
            "name": cls.name,
            "priority": cls.priority,
            "host_patterns": list(cls.host_patterns),
            "strategy_class": f"{cls.__module__}.{cls.__qualname__}",
        }
        for cls in ordered_strategies()
    ]
