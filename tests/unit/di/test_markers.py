"""
Tests for module markers.
"""

from modkit.di.markers import (
    Inject,
    inject,
    is_injection_constructor,
    is_module,
    is_post_construct,
    is_pre_destroy,
    module,
    post_construct,
    pre_destroy
)


@module
class PlainModule:
    pass


@module()
class CalledModule:
    pass


class SubOfModule(PlainModule):
    pass


class TestMarkers:
    """Test marker decorators."""

    def test_module_decorator_forms(self):
        """Test: @module and @module() both mark the class."""
        assert is_module(PlainModule)
        assert is_module(CalledModule)

    def test_module_marker_not_inherited(self):
        """Test: subclasses of a module are not modules themselves."""
        assert not is_module(SubOfModule)

    def test_is_module_rejects_non_classes(self):
        assert not is_module(PlainModule())
        assert not is_module("PlainModule")

    def test_inject_on_init_and_classmethod(self):
        """Test: Inject marks __init__ and classmethod constructors."""
        class Target:
            @Inject
            def __init__(self):
                pass

            @classmethod
            @Inject
            def create(cls):
                return cls()

            @inject
            @classmethod
            def build(cls):
                return cls()

        assert is_injection_constructor(Target.__dict__['__init__'])
        assert is_injection_constructor(Target.__dict__['create'])
        assert is_injection_constructor(Target.__dict__['build'])

    def test_inject_alias(self):
        assert inject is Inject
        assert repr(Inject) == 'Inject'

    def test_lifecycle_markers(self):
        class Target:
            @post_construct
            def start(self):
                pass

            @pre_destroy
            def stop(self):
                pass

            def other(self):
                pass

        assert is_post_construct(Target.start)
        assert not is_pre_destroy(Target.start)
        assert is_pre_destroy(Target.stop)
        assert not is_post_construct(Target.other)
