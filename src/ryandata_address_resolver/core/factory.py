"""Registry-backed factory base.

Subclasses bind the implementation protocol, name the default entry and
lazily register the bundled implementations on first use.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Generic, TypeVar

T = TypeVar("T")


class PluginFactory(ABC, Generic[T]):
    """Create instances by name from a class-level registry.

    Subclasses should define:
        - _registry: dict mapping names to implementation classes
        - _default_type: name used when ``create`` gets no name
        - _entity_name: noun used in error messages (e.g. "provider")
        - _ensure_defaults_registered(): registers the bundled implementations
    """

    _registry: ClassVar[dict[str, type[Any]]]
    _default_type: ClassVar[str]
    _entity_name: ClassVar[str]

    @classmethod
    @abstractmethod
    def _ensure_defaults_registered(cls) -> None:
        """Register the bundled implementations if they are missing."""
        ...

    @classmethod
    def register(cls, name: str, impl_class: type[T]) -> None:
        cls._registry[name] = impl_class

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._registry.pop(name, None)

    @classmethod
    def create(cls, type_name: str | None = None, **kwargs: Any) -> T:
        """Create an instance of a registered implementation.

        Args:
            type_name: Registered name. Defaults to ``_default_type``.
            **kwargs: Arguments passed to the implementation constructor.

        Raises:
            ValueError: If the name is not registered.
        """
        cls._ensure_defaults_registered()
        name = type_name if type_name is not None else cls._default_type
        if name not in cls._registry:
            available = ", ".join(sorted(cls._registry))
            raise ValueError(
                f"Unknown {cls._entity_name} type: {name}. Available types: {available}"
            )
        return cls._registry[name](**kwargs)  # type: ignore[no-any-return]

    @classmethod
    def available_types(cls) -> list[str]:
        cls._ensure_defaults_registered()
        return sorted(cls._registry)

    @classmethod
    def clear_registry(cls) -> None:
        """Drop every registration; bundled ones come back on next use."""
        cls._registry.clear()
