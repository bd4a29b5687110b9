"""
Tests for Resolver and ConstructionContext.
"""

from typing import Annotated

import pytest

from modkit.di.constructor import ConstructorSelector
from modkit.di.exceptions import (
    CircularDependencyError,
    ModuleConstructionError,
    UnresolvableDependencyError
)
from modkit.di.injector import UNRESOLVABLE
from modkit.di.lifecycle import LifecycleScanner
from modkit.di.markers import Inject, module
from modkit.di.registry import ModuleRegistry
from modkit.di.resolver import ConstructionContext, Resolver


@module
class Leaf:
    pass


@module
class Branch:
    def __init__(self, leaf: Leaf):
        self.leaf = leaf


class NotAModule:
    pass


@module
class NeedsPlain:
    def __init__(self, plain: NotAModule):
        self.plain = plain


MISSING = object()


@module
class DefaultFallback:
    def __init__(self, plain: NotAModule = MISSING, leaf: Leaf = MISSING):
        self.plain = plain
        self.leaf = leaf


@module
class Unannotated:
    def __init__(self, value):
        self.value = value


@module
class CycleStart:
    def __init__(self, other: 'CycleEnd'):
        self.other = other


@module
class CycleEnd:
    def __init__(self, other: CycleStart):
        self.other = other


@module
class FieldCycleStart:
    other: Annotated['FieldCycleEnd', Inject]


@module
class FieldCycleEnd:
    other: Annotated[FieldCycleStart, Inject]


@module
class SelfDependent:
    def __init__(self, me: 'SelfDependent'):
        self.me = me


@module
class ExplodingInit:
    def __init__(self):
        raise RuntimeError("no disk")


@module
class ReturnsNone:
    @classmethod
    @Inject
    def create(cls):
        return None


class TestConstructionContext:
    """Test construction tracking."""

    def test_enter_and_exit(self):
        context = ConstructionContext()
        context.enter(Leaf)
        context.enter(Branch)

        assert context.chain == [Leaf, Branch]
        assert context.is_constructing(Leaf)

        context.exit(Branch)
        context.exit(Leaf)
        assert len(context) == 0

    def test_reentry_is_circular(self):
        context = ConstructionContext()
        context.enter(Leaf)
        context.enter(Branch)

        with pytest.raises(CircularDependencyError) as exc_info:
            context.enter(Leaf)

        assert exc_info.value.dependency_chain == [Leaf, Branch, Leaf]


class TestResolver:
    """Test recursive resolution."""

    def setup_method(self):
        self.registry = ModuleRegistry()
        self.resolver = Resolver(self.registry, ConstructorSelector(), LifecycleScanner())

    def test_resolve_registers_dependencies_first(self):
        """Test: dependencies are registered before the module that needs them."""
        branch = self.resolver.resolve(Branch)

        assert isinstance(branch.leaf, Leaf)
        assert self.registry.registration_order() == [Leaf, Branch]
        assert self.registry.get_instance(Leaf) is branch.leaf

    def test_resolve_returns_existing_instance(self):
        first = self.resolver.resolve(Leaf)
        assert self.resolver.resolve(Leaf) is first

    def test_non_module_is_unresolvable(self):
        assert self.resolver.resolve(NotAModule) is UNRESOLVABLE

    def test_non_module_constructor_parameter(self):
        with pytest.raises(UnresolvableDependencyError) as exc_info:
            self.resolver.resolve(NeedsPlain)

        assert exc_info.value.dependency_type is NotAModule
        assert "constructor parameter 'plain'" in str(exc_info.value)
        assert not self.registry.is_registered(NeedsPlain)

    def test_default_used_when_unresolvable(self):
        """Test: unresolvable parameters with defaults keep the default, others are injected."""
        instance = self.resolver.resolve(DefaultFallback)

        assert instance.plain is MISSING
        assert isinstance(instance.leaf, Leaf)

    def test_unannotated_parameter_is_unresolvable(self):
        with pytest.raises(UnresolvableDependencyError):
            self.resolver.resolve(Unannotated)

    def test_constructor_cycle(self):
        """Test: constructor cycles fail and nothing from the cycle is registered."""
        with pytest.raises(CircularDependencyError) as exc_info:
            self.resolver.resolve(CycleStart)

        assert exc_info.value.dependency_chain == [CycleStart, CycleEnd, CycleStart]
        assert len(self.registry) == 0

    def test_field_cycle(self):
        with pytest.raises(CircularDependencyError):
            self.resolver.resolve(FieldCycleStart)

    def test_self_dependency(self):
        with pytest.raises(CircularDependencyError) as exc_info:
            self.resolver.resolve(SelfDependent)

        assert exc_info.value.dependency_chain == [SelfDependent, SelfDependent]

    def test_context_is_reset_after_failure(self):
        with pytest.raises(CircularDependencyError):
            self.resolver.resolve(CycleStart)

        assert isinstance(self.resolver.resolve(Branch), Branch)

    def test_constructor_exception_is_wrapped(self):
        with pytest.raises(ModuleConstructionError) as exc_info:
            self.resolver.resolve(ExplodingInit)

        assert isinstance(exc_info.value.cause, RuntimeError)
        assert exc_info.value.module_type is ExplodingInit

    def test_constructor_returning_none(self):
        with pytest.raises(ModuleConstructionError) as exc_info:
            self.resolver.resolve(ReturnsNone)

        assert 'returned None' in str(exc_info.value)

    def test_host_type_resolves_to_host(self):
        host = object()
        resolver = Resolver(
            self.registry, ConstructorSelector(), LifecycleScanner(),
            host=host, host_types={NotAModule}
        )

        assert resolver.resolve(NotAModule) is host
        assert resolver.is_host_type(NotAModule)
