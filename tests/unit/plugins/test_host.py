"""
Tests for HostApplication.
"""

from typing import Annotated

import pytest

import modkit_sample_app
from modkit.config import ContainerSettings
from modkit.di import ContainerState, Inject, ModuleConfigurationError
from modkit.plugins import HostApplication, HostStateError
from modkit_sample_app.services import Notifier, Repository
from modkit_sample_app.storage import Storage


class SampleHost(HostApplication):
    notifier: Annotated[Notifier, Inject]

    def __init__(self, settings=None):
        super().__init__(settings)
        self.phases = []

    def core_modules(self):
        return [Storage]

    def on_load(self):
        self.phases.append('load')

    def on_enable(self):
        self.phases.append('enable')

    def on_disable(self):
        self.phases.append('disable')


class BrokenHost(HostApplication):
    def core_modules(self):
        return [dict]


class PackagedHost(HostApplication):
    __module__ = 'modkit_sample_app.host'


def sample_settings():
    return ContainerSettings(scan_packages=['modkit_sample_app'])


class TestHostApplication:
    """Test host bootstrap and teardown."""

    def setup_method(self):
        modkit_sample_app.EVENTS.clear()

    def test_enable_registers_host_first(self):
        """Test: the host is registered first, its fields are injected, discovered modules follow."""
        host = SampleHost(sample_settings())
        host.load()
        host.enable()

        try:
            assert host.is_enabled
            assert host.phases == ['load', 'enable']
            assert host.container.registration_order() == [SampleHost, Storage, Repository, Notifier]
            assert host.notifier is host.get_module(Notifier)
            assert host.get_module(HostApplication) is host
            assert host.get_module(SampleHost) is host
        finally:
            host.disable()

    def test_disable_tears_down_in_reverse(self):
        host = SampleHost(sample_settings())
        host.enable()
        container = host.container
        modkit_sample_app.EVENTS.clear()

        host.disable()

        assert modkit_sample_app.EVENTS == ['Notifier.stop', 'Repository.flush', 'Storage.close']
        assert container.state is ContainerState.TERMINATED
        assert host.container is None
        assert not host.is_enabled
        assert host.phases[-1] == 'disable'

    def test_enable_twice(self):
        host = SampleHost(sample_settings())
        host.enable()

        try:
            with pytest.raises(HostStateError):
                host.enable()
        finally:
            host.disable()

    def test_bootstrap_failure_aborts(self):
        """Test: a failed registration shuts the container down and propagates."""
        host = BrokenHost(ContainerSettings())

        with pytest.raises(ModuleConfigurationError):
            host.enable()

        assert host.container is None
        assert not host.is_enabled

    def test_get_module_requires_enable(self):
        with pytest.raises(HostStateError):
            SampleHost(sample_settings()).get_module(Storage)

    def test_scan_packages_from_settings(self):
        host = SampleHost(ContainerSettings(scan_packages=['a.b', 'c']))

        assert host.scan_packages() == ['a.b', 'c']

    def test_scan_packages_defaults_to_host_package(self):
        host = PackagedHost(ContainerSettings())

        assert host.scan_packages() == ['modkit_sample_app']

    def test_no_discovery_without_packages(self, monkeypatch):
        host = SampleHost(ContainerSettings())
        monkeypatch.setattr(host, 'scan_packages', lambda: [])

        assert host.discover_modules() == []
