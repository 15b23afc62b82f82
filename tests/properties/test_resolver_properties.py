"""Property-based tests for resolver invariants.

Over randomly generated registries:
- Single version: at most one entry per package name.
- Closure: every dependency named by an entry is itself an entry.
- Satisfaction: every recorded constraint accepts the locked version.
- Determinism: same manifest and registry give the same lockfile or error.
"""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st

from sealpack.core.dependency import DependencyResolver
from sealpack.core.manifest import DependencySpec, Manifest
from sealpack.core.semver import satisfies
from sealpack.exceptions import ResolutionError
from tests.helpers import FakeRegistry

NAMES = ["p/alpha", "p/beta", "p/gamma", "p/delta", "p/epsilon"]
VERSIONS = ["1.0.0", "1.1.0", "1.2.0", "2.0.0", "2.1.0"]
OPERATORS = ["", "^", "~"]

constraints = st.builds(
    lambda op, v: op + v, st.sampled_from(OPERATORS), st.sampled_from(VERSIONS)
)


@st.composite
def scenario(draw: st.DrawFn) -> tuple[FakeRegistry, Manifest]:
    registry = FakeRegistry()
    names = draw(st.lists(st.sampled_from(NAMES), min_size=1, max_size=5, unique=True))
    for name in names:
        published = draw(st.lists(st.sampled_from(VERSIONS), min_size=1, max_size=3, unique=True))
        for version in published:
            deps = draw(st.dictionaries(st.sampled_from(names), constraints, max_size=2))
            deps.pop(name, None)
            registry.publish(name, version, deps)

    direct = draw(st.lists(st.tuples(st.sampled_from(names), constraints), min_size=1, max_size=3))
    manifest = Manifest(
        name="p/root",
        version="1.0.0",
        dependencies=tuple(DependencySpec(n, c) for n, c in direct),
    )
    return registry, manifest


def _outcome(registry: FakeRegistry, manifest: Manifest):
    try:
        return DependencyResolver(registry).resolve(manifest)
    except ResolutionError as exc:
        return exc


@settings(max_examples=150, deadline=None)
@given(scenario())
def test_single_version_and_closure(case: tuple[FakeRegistry, Manifest]) -> None:
    registry, manifest = case
    outcome = _outcome(registry, manifest)
    if isinstance(outcome, ResolutionError):
        return

    names = [p.name for p in outcome.packages]
    assert len(names) == len(set(names))
    for package in outcome.packages:
        for dep_name, dep_constraint in package.dependencies.items():
            locked = outcome.get_package(dep_name)
            assert locked is not None
            assert satisfies(locked.version, dep_constraint)
    for spec in manifest.dependencies:
        assert satisfies(outcome.get_package(spec.package_name).version, spec.constraint)


@settings(max_examples=100, deadline=None)
@given(scenario())
def test_deterministic(case: tuple[FakeRegistry, Manifest]) -> None:
    registry, manifest = case
    first = _outcome(registry, manifest)
    second = _outcome(registry, manifest)
    if isinstance(first, ResolutionError):
        assert type(second) is type(first)
        assert str(second) == str(first)
    else:
        assert second.keys == first.keys
        assert second.packages == first.packages
