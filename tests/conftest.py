"""Pytest configuration and shared fixtures."""

import sys
from pathlib import Path

import pytest

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from memberflect.application import Reflector
from memberflect.domain.repositories.cache import AccessorCache
from memberflect.domain.services.resolution import MemberResolver, TypeScanner

from tests.fixtures.people import Person


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="function")
def scanner() -> TypeScanner:
    """Fresh type scanner with its own scan cache."""
    return TypeScanner(enable_cache=True)


@pytest.fixture(scope="function")
def resolver(scanner: TypeScanner) -> MemberResolver:
    return MemberResolver(scanner)


@pytest.fixture(scope="function")
def cache() -> AccessorCache:
    return AccessorCache(enabled=True)


@pytest.fixture(scope="function")
def reflector() -> Reflector:
    """
    Create a Reflector with private caches.

    Uses function scope so cache statistics never leak between tests.
    """
    return Reflector(TypeScanner(enable_cache=True), AccessorCache(enabled=True), validate_before_write=True)


@pytest.fixture(autouse=True)
def reset_person_statics():
    """Restore Person's static state mutated by tests."""
    saved = (Person.total_people_created, Person._registry_name)
    yield
    Person.total_people_created, Person._registry_name = saved
