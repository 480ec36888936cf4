"""Named registries for rules.

Example:
    ```python
    from dataknobs_validator.registry import RuleRegistry

    registry = RuleRegistry()
    registry.register_rule("email", PatternRule(ValidationPattern.EMAIL_ADDRESS, "invalid_email"))
    registry.get("email").validate("user@example.com")
    ```
"""

from __future__ import annotations

import threading
from typing import (
    Any,
    Dict,
    Generic,
    Iterator,
    List,
    TypeVar,
)

from .base import Rule
from .exceptions import NotFoundError, OperationError, RuleConfigurationError

T = TypeVar("T")


class Registry(Generic[T]):
    """Thread-safe collection of items addressed by unique keys.

    Attributes:
        name: Name of the registry (for logging/debugging)

    Args:
        name: Name for this registry instance

    Example:
        ```python
        registry = Registry[str]("my_registry")
        registry.register("key1", "value1")
        registry.get("key1")
        # 'value1'
        registry.count()
        # 1
        ```
    """

    def __init__(self, name: str):
        self._name = name
        self._items: Dict[str, T] = {}
        self._metadata: Dict[str, Dict[str, Any]] = {}
        self._lock = threading.RLock()

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    def register(
        self,
        key: str,
        item: T,
        metadata: Dict[str, Any] | None = None,
        allow_overwrite: bool = False,
    ) -> None:
        """Register an item by key.

        Args:
            key: Unique identifier for the item
            item: Item to register
            metadata: Optional metadata about the item
            allow_overwrite: Whether to allow overwriting existing items

        Raises:
            OperationError: If item already exists and allow_overwrite is False
        """
        with self._lock:
            if not allow_overwrite and key in self._items:
                raise OperationError(
                    f"Item '{key}' already registered in {self._name}",
                    context={"key": key, "registry": self._name},
                )
            self._items[key] = item
            self._metadata[key] = dict(metadata or {})

    def unregister(self, key: str) -> T:
        """Unregister and return an item by key.

        Raises:
            NotFoundError: If item not found
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={"key": key, "registry": self._name},
                )
            self._metadata.pop(key, None)
            return self._items.pop(key)

    def get(self, key: str) -> T:
        """Get an item by key.

        Raises:
            NotFoundError: If item not found
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Item not found: {key}",
                    context={"key": key, "registry": self._name, "available_keys": list(self._items.keys())},
                )
            return self._items[key]

    def get_optional(self, key: str) -> T | None:
        """Get an item by key, returning None if not found."""
        with self._lock:
            return self._items.get(key)

    def get_metadata(self, key: str) -> Dict[str, Any]:
        """Get the metadata stored with an item, or an empty dict."""
        with self._lock:
            return dict(self._metadata.get(key, {}))

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._items

    def list_keys(self) -> List[str]:
        """List all registered keys, in registration order."""
        with self._lock:
            return list(self._items.keys())

    def items(self) -> List[tuple[str, T]]:
        """Get all key-item pairs, in registration order."""
        with self._lock:
            return list(self._items.items())

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def clear(self) -> None:
        """Clear all items from registry."""
        with self._lock:
            self._items.clear()
            self._metadata.clear()

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[T]:
        with self._lock:
            return iter(list(self._items.values()))


class RuleRegistry(Registry[Rule]):
    """Registry of named rules, e.g. loaded from a rule configuration file."""

    def __init__(self, name: str = "rules"):
        super().__init__(name)

    def register_rule(
        self,
        name: str,
        rule: Rule,
        description: str | None = None,
        allow_overwrite: bool = False,
    ) -> None:
        """Register a rule under a name.

        Args:
            name: Rule name
            rule: Rule to register
            description: Optional human-readable description
            allow_overwrite: Whether to replace an existing rule of that name

        Raises:
            RuleConfigurationError: If the item is not a Rule
            OperationError: If the name is taken and allow_overwrite is False
        """
        if not isinstance(rule, Rule):
            raise RuleConfigurationError(
                "registry", f"expected a Rule for '{name}', got {type(rule).__name__}", name=name
            )
        metadata = {"description": description} if description else None
        self.register(name, rule, metadata=metadata, allow_overwrite=allow_overwrite)


__all__ = [
    "Registry",
    "RuleRegistry",
]
