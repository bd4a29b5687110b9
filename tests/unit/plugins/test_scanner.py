"""
Tests for ModuleScanner.
"""

import pytest

from modkit.plugins import ModuleScanError, ModuleScanner


class TestModuleScanner:
    """Test package scanning."""

    def test_scan_package(self):
        """Test: modules are discovered by module name, then definition order."""
        scanner = ModuleScanner()

        discovered = scanner.scan(['modkit_sample_app'])

        assert [cls.__name__ for cls in discovered] == ['Repository', 'Notifier', 'Storage']
        assert scanner.failures == {}

    def test_imported_classes_not_rediscovered(self):
        """Test: a class imported into another module is only found where it is defined."""
        discovered = ModuleScanner().scan(['modkit_sample_app'])

        names = [f"{cls.__module__}.{cls.__name__}" for cls in discovered]
        assert names.count('modkit_sample_app.storage.Storage') == 1
        assert 'modkit_sample_app.services.Formatter' not in names

    def test_scan_single_module(self):
        discovered = ModuleScanner().scan(['modkit_sample_app.storage'])

        assert [cls.__name__ for cls in discovered] == ['Storage']

    def test_import_failure_is_recorded(self):
        """Test: broken submodules are skipped in lenient mode."""
        scanner = ModuleScanner()

        discovered = scanner.scan(['modkit_broken_app'])

        assert [cls.__name__ for cls in discovered] == ['Healthy']
        assert 'modkit_broken_app.bad' in scanner.failures
        assert isinstance(scanner.failures['modkit_broken_app.bad'], ImportError)

    def test_strict_mode_raises(self):
        with pytest.raises(ModuleScanError) as exc_info:
            ModuleScanner(strict=True).scan(['modkit_broken_app'])

        assert exc_info.value.module_name == 'modkit_broken_app.bad'
        assert isinstance(exc_info.value.original_error, ImportError)

    def test_missing_package(self):
        scanner = ModuleScanner()

        assert scanner.scan(['modkit_no_such_package']) == []
        assert 'modkit_no_such_package' in scanner.failures

    def test_clear(self):
        scanner = ModuleScanner()
        scanner.scan(['modkit_sample_app'])

        assert scanner.scan(['modkit_sample_app']) == []

        scanner.clear()
        assert len(scanner.scan(['modkit_sample_app'])) == 3
