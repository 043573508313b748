# SPDX-License-Identifier: MIT
"""Tests for sysinc.core.resolver."""

from pathlib import Path

import pytest

from sysinc.core.attributes import (
    DEBUGGABLE_ATTRIBUTE,
    USAGE_ATTRIBUTE,
    AttributeSet,
    Usage,
)
from sysinc.core.configuration import ConfigurationRole
from sysinc.core.errors import (
    AmbiguousArtifactError,
    ConfigurationError,
    UnmetDependencyError,
)
from sysinc.core.project import Project
from sysinc.core.resolver import ConfigurationResolver

HEADERS = Usage.named(Usage.SYSTEM_API)


def _consumable(project, name, directory, *, debuggable=None, role=None):
    role = role or ConfigurationRole.CONSUMABLE_HEADERS
    attrs = AttributeSet.of((USAGE_ATTRIBUTE, role.usage))
    if debuggable is not None:
        attrs = attrs.with_attribute(DEBUGGABLE_ATTRIBUTE, debuggable)
    config = project.configurations.create(
        name, role=role, attributes=attrs, extends_from=[project.implementation]
    )
    config.add_artifact(project.root_dir / directory)
    return config


def _requester(project, *, debuggable=True):
    return project.configurations.create(
        "debugSystemHeaders",
        role=ConfigurationRole.RESOLVABLE_HEADERS,
        attributes=AttributeSet.of(
            (USAGE_ATTRIBUTE, HEADERS), (DEBUGGABLE_ATTRIBUTE, debuggable)
        ),
        extends_from=[project.implementation],
    )


class TestResolve:
    def test_not_resolvable(self, tmp_path):
        project = Project("app", root_dir=tmp_path)
        config = project.configurations.create(
            "x", role=ConfigurationRole.CONSUMABLE_HEADERS
        )
        with pytest.raises(ConfigurationError, match="cannot be resolved"):
            ConfigurationResolver().resolve(config)

    def test_no_dependencies(self, tmp_path):
        project = Project("app", root_dir=tmp_path)
        assert ConfigurationResolver().resolve(_requester(project)) == []

    def test_file_dependency(self, tmp_path):
        project = Project("app", root_dir=tmp_path)
        requester = _requester(project)
        project.implementation.add_dependency(project.files("vendor/include"))

        assert ConfigurationResolver().resolve(requester) == [
            tmp_path / "vendor/include"
        ]

    def test_project_dependency(self, tmp_path):
        system = Project("system", root_dir=tmp_path / "system")
        _consumable(system, "systemHeadersElements", "include")
        app = Project("app", root_dir=tmp_path / "app")
        requester = _requester(app)
        app.implementation.add_dependency(app.dependency(system))

        assert ConfigurationResolver().resolve(requester) == [
            tmp_path / "system" / "include"
        ]

    def test_selects_matching_variant(self, tmp_path):
        system = Project("system", root_dir=tmp_path / "system")
        _consumable(system, "debugHeaders", "debug", debuggable=True)
        _consumable(system, "releaseHeaders", "release", debuggable=False)
        app = Project("app", root_dir=tmp_path / "app")
        app.implementation.add_dependency(app.dependency(system))

        result = ConfigurationResolver().resolve(_requester(app, debuggable=False))
        assert result == [tmp_path / "system" / "release"]

    def test_usage_must_match(self, tmp_path):
        """Version elements are never selected for a headers request."""
        system = Project("system", root_dir=tmp_path / "system")
        _consumable(
            system,
            "systemVersionsElements",
            "include.version",
            role=ConfigurationRole.CONSUMABLE_VERSIONS,
        )
        _consumable(system, "systemHeadersElements", "include")
        app = Project("app", root_dir=tmp_path / "app")
        app.implementation.add_dependency(app.dependency(system))

        assert ConfigurationResolver().resolve(_requester(app)) == [
            tmp_path / "system" / "include"
        ]

    def test_unmet(self, tmp_path):
        system = Project("system", root_dir=tmp_path / "system")
        app = Project("app", root_dir=tmp_path / "app")
        app.implementation.add_dependency(app.dependency(system))

        with pytest.raises(UnmetDependencyError, match="project 'system'"):
            ConfigurationResolver().resolve(_requester(app))

    def test_unmet_for_incompatible_attributes(self, tmp_path):
        system = Project("system", root_dir=tmp_path / "system")
        _consumable(system, "releaseHeaders", "release", debuggable=False)
        app = Project("app", root_dir=tmp_path / "app")
        app.implementation.add_dependency(app.dependency(system))

        with pytest.raises(UnmetDependencyError):
            ConfigurationResolver().resolve(_requester(app, debuggable=True))

    def test_ambiguous(self, tmp_path):
        system = Project("system", root_dir=tmp_path / "system")
        _consumable(system, "aHeaders", "a")
        _consumable(system, "bHeaders", "b")
        app = Project("app", root_dir=tmp_path / "app")
        app.implementation.add_dependency(app.dependency(system))

        with pytest.raises(AmbiguousArtifactError) as exc_info:
            ConfigurationResolver().resolve(_requester(app))
        assert exc_info.value.candidates == ["aHeaders", "bHeaders"]
        assert exc_info.value.configuration == "debugSystemHeaders"

    def test_transitive(self, tmp_path):
        """Dependencies of the selected configuration are followed."""
        base = Project("base", root_dir=tmp_path / "base")
        _consumable(base, "systemHeadersElements", "include")
        middle = Project("middle", root_dir=tmp_path / "middle")
        _consumable(middle, "systemHeadersElements", "include")
        middle.implementation.add_dependency(middle.dependency(base))
        app = Project("app", root_dir=tmp_path / "app")
        app.implementation.add_dependency(app.dependency(middle))

        assert ConfigurationResolver().resolve(_requester(app)) == [
            tmp_path / "middle" / "include",
            tmp_path / "base" / "include",
        ]

    def test_declaration_order_and_dedup(self, tmp_path):
        one = Project("one", root_dir=tmp_path / "one")
        _consumable(one, "systemHeadersElements", "include")
        two = Project("two", root_dir=tmp_path / "two")
        _consumable(two, "systemHeadersElements", "include")
        two.implementation.add_dependency(two.dependency(one))
        app = Project("app", root_dir=tmp_path / "app")
        app.implementation.add_dependency(app.dependency(two))
        app.implementation.add_dependency(app.dependency(one))

        result = ConfigurationResolver().resolve(_requester(app))
        assert result == [tmp_path / "two" / "include", tmp_path / "one" / "include"]

    def test_cycle_terminates(self, tmp_path):
        a = Project("a", root_dir=tmp_path / "a")
        _consumable(a, "systemHeadersElements", "include")
        b = Project("b", root_dir=tmp_path / "b")
        _consumable(b, "systemHeadersElements", "include")
        a.implementation.add_dependency(a.dependency(b))
        b.implementation.add_dependency(b.dependency(a))

        result = ConfigurationResolver().resolve(_requester(a))
        assert result == [tmp_path / "b" / "include", tmp_path / "a" / "include"]

    def test_repeatable(self, tmp_path):
        system = Project("system", root_dir=tmp_path / "system")
        _consumable(system, "systemHeadersElements", "include")
        app = Project("app", root_dir=tmp_path / "app")
        requester = _requester(app)
        app.implementation.add_dependency(app.dependency(system))

        resolver = ConfigurationResolver()
        assert resolver.resolve(requester) == resolver.resolve(requester)

    def test_self_dependency_rejected(self, tmp_path):
        project = Project("app", root_dir=tmp_path)
        with pytest.raises(ConfigurationError):
            project.dependency(project)


def test_paths_are_paths(tmp_path):
    project = Project("app", root_dir=tmp_path)
    dep = project.files("a", Path("b"))
    assert dep.paths == (tmp_path / "a", tmp_path / "b")
