"""Composable boolean predicates over usage instances."""

from __future__ import annotations

from typing import AbstractSet, Callable, TypeVar

from .models import Instance

T = TypeVar("T")

Predicate = Callable[[T], bool]


def and_(*predicates: Predicate[T]) -> Predicate[T]:
    """True when every predicate holds; an empty conjunction is always true."""
    if not predicates:
        return always()

    def _and(item: T) -> bool:
        return all(predicate(item) for predicate in predicates)

    return _and


def or_(*predicates: Predicate[T]) -> Predicate[T]:
    """True when any predicate holds; an empty disjunction is always false."""
    if not predicates:
        return never()

    def _or(item: T) -> bool:
        return any(predicate(item) for predicate in predicates)

    return _or


def not_(predicate: Predicate[T]) -> Predicate[T]:
    def _not(item: T) -> bool:
        return not predicate(item)

    return _not


def always() -> Predicate[T]:
    return lambda _item: True


def never() -> Predicate[T]:
    return lambda _item: False


class InstancePredicates:
    """Domain predicates for filtering usage instances."""

    @staticmethod
    def has_package(package_name: str) -> Predicate[Instance]:
        return lambda instance: instance.package.display_name == package_name

    @staticmethod
    def package_not_in(excluded: AbstractSet[str]) -> Predicate[Instance]:
        """Match instances whose display package name is not excluded."""
        return lambda instance: instance.package.display_name not in excluded

    @staticmethod
    def has_prop(key: str) -> Predicate[Instance]:
        return lambda instance: any(prop.key == key for prop in instance.props)

    @staticmethod
    def prop_missing(key: str) -> Predicate[Instance]:
        return not_(InstancePredicates.has_prop(key))

    @staticmethod
    def prop_equals(key: str, value: str) -> Predicate[Instance]:
        return lambda instance: any(
            prop.key == key and prop.raw == value for prop in instance.props
        )

    @staticmethod
    def prop_contains(key: str, text: str) -> Predicate[Instance]:
        needle = text.lower()

        def _contains(instance: Instance) -> bool:
            prop = next((prop for prop in instance.props if prop.key == key), None)
            if prop is None:
                return False
            return needle in prop.raw.lower()

        return _contains

    @staticmethod
    def file_path_contains(pattern: str) -> Predicate[Instance]:
        return lambda instance: pattern in instance.file_path


__all__ = [
    "InstancePredicates",
    "Predicate",
    "always",
    "and_",
    "never",
    "not_",
    "or_",
]
