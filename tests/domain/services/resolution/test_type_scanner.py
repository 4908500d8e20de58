"""Test class body scanning and the scan cache."""

from typing import Any, Optional

import pytest

from memberflect.domain.models import MemberKind, Ref
from memberflect.domain.services.resolution import TypeScanner

from tests.fixtures.people import Account, Amphibian, Employee, Person, PersonRecord, PersonView, Point, Walker


def _by_name(scanner: TypeScanner, cls: type, kind: MemberKind) -> dict:
    return {m.name: m for m in scanner.declared_members(cls, kind)}


@pytest.mark.unit
class TestTypeScanner:
    """Test member classification."""

    def test_instance_and_static_fields(self, scanner):
        """Test that ClassVar annotations are static and plain annotations are instance fields."""
        fields = _by_name(scanner, Person, MemberKind.FIELD)

        assert set(fields) == {
            "total_people_created", "_registry_name",
            "name", "age", "meters_travelled", "nickname", "friends",
        }
        assert fields["total_people_created"].is_static
        assert fields["total_people_created"].declared_type is int
        assert not fields["_registry_name"].is_public
        assert not fields["name"].is_static
        assert fields["meters_travelled"].declared_type is float
        assert fields["nickname"].declared_type == Optional[str]

    def test_fields_are_declared_per_class(self, scanner):
        """Test that a subclass scan only lists its own body."""
        fields = _by_name(scanner, Employee, MemberKind.FIELD)
        assert set(fields) == {"employee_id"}
        assert fields["employee_id"].declaring_type is Employee

    def test_dataclass_fields(self, scanner):
        fields = _by_name(scanner, PersonRecord, MemberKind.FIELD)
        assert set(fields) == {"name", "age"}
        assert fields["age"].declared_type is int

    def test_slots_are_instance_fields(self, scanner):
        """Test that __slots__ entries become untyped instance fields."""
        fields = _by_name(scanner, Point, MemberKind.FIELD)
        assert set(fields) == {"x", "y"}
        assert fields["x"].declared_type is Any
        assert not fields["x"].is_static

    def test_properties(self, scanner):
        """Test property and static_property classification."""
        properties = _by_name(scanner, Person, MemberKind.PROPERTY)

        assert properties["is_adult"].declared_type is bool
        assert not properties["is_adult"].is_static
        assert properties["registry_name"].is_static
        assert properties["registry_name"].declared_type is str

    def test_methods(self, scanner):
        """Test method scopes and parameter extraction."""
        methods = _by_name(scanner, Person, MemberKind.METHOD)

        assert "__init__" not in methods
        assert not methods["walk"].is_static
        assert methods["describe_count"].is_static
        assert methods["create"].is_static
        assert not methods["_walk"].is_public

        walk = methods["walk"]
        assert [p.name for p in walk.parameters] == ["meters", "travelled"]
        assert walk.parameter_types == (float, Ref[float])
        assert walk.parameters[1].by_ref
        assert walk.has_by_ref_parameters

        create = methods["create"]
        assert [p.name for p in create.parameters] == ["name"]
        assert create.declared_type is Person

    def test_explicit_implementations_are_trimmed(self, scanner):
        """Test that mangled names carry their simple name."""
        methods = _by_name(scanner, Amphibian, MemberKind.METHOD)

        assert methods["_Swimmer__swim"].simple_name == "swim"
        assert methods["_Diver__swim"].simple_name == "swim"
        assert methods["_Diver__swim"].is_explicit

    def test_scan_is_cached(self, scanner):
        """Test that repeated scans return the stored result."""
        first = scanner.scan(Person)
        assert scanner.scan(Person) is first
        assert scanner.stats()["scanned_types"] == 1

    def test_scan_cache_disabled(self):
        scanner = TypeScanner(enable_cache=False)
        assert scanner.scan(Person) is not scanner.scan(Person)
        assert scanner.stats()["scanned_types"] == 0

    def test_hierarchy_excludes_object(self, scanner):
        assert scanner.hierarchy(Employee) == (Employee, Person)
        assert scanner.hierarchy(Employee, declared_only=True) == (Employee,)


@pytest.mark.unit
class TestInitAssignedFields:
    """Test fields discovered from assignments in __init__."""

    def test_plain_class_fields(self, scanner):
        """Test that an unannotated class exposes what its __init__ assigns."""
        fields = _by_name(scanner, Walker, MemberKind.FIELD)

        assert list(fields) == ["name", "age", "meters_travelled"]
        assert all(f.declared_type is Any for f in fields.values())
        assert not any(f.is_static for f in fields.values())
        assert fields["name"].declaring_type is Walker

    def test_private_assignments_are_mangled(self, scanner):
        fields = _by_name(scanner, Account, MemberKind.FIELD)

        assert set(fields) == {"balance", "_Account__balance"}
        assert not fields["_Account__balance"].is_public
        assert fields["_Account__balance"].simple_name == "balance"

    def test_backing_fields_next_to_properties(self, scanner):
        assert set(_by_name(scanner, PersonView, MemberKind.FIELD)) == {"_name", "_age"}
        assert set(_by_name(scanner, PersonView, MemberKind.PROPERTY)) == {"name", "age"}

    def test_property_setter_assignment_is_not_a_field(self, scanner):
        class Gauge:
            def __init__(self, level=0):
                self.level = level
                self.unit = "m"

            @property
            def level(self) -> int:
                return self._level

            @level.setter
            def level(self, value: int) -> None:
                self._level = value

        assert set(_by_name(scanner, Gauge, MemberKind.FIELD)) == {"unit"}

    def test_tuple_and_augmented_targets(self, scanner):
        class Counter:
            def __init__(self, start=0):
                self.low, self.high = start, start
                self.total: int = 0
                self.total += start
                other = Person()
                other.name = "ignored"

        assert list(_by_name(scanner, Counter, MemberKind.FIELD)) == ["low", "high", "total"]

    def test_base_fields_are_not_redeclared(self, scanner):
        """Test that reassigning an inherited field in __init__ keeps the base declaration."""
        class Courier(Person):
            def __init__(self, name="", route=""):
                super().__init__(name)
                self.name = name.title()
                self.route = route

        assert set(_by_name(scanner, Courier, MemberKind.FIELD)) == {"route"}

    def test_generated_init_adds_nothing(self, scanner):
        """Test that a dataclass __init__ without source leaves the annotated fields alone."""
        assert list(_by_name(scanner, PersonRecord, MemberKind.FIELD)) == ["name", "age"]

    def test_implicit_hooks_are_not_methods(self, scanner):
        class Registry:
            def __new__(cls, *args):
                return super().__new__(cls)

            def __init_subclass__(cls, **kwargs):
                super().__init_subclass__(**kwargs)

            def __class_getitem__(cls, item):
                return cls

            @classmethod
            def default(cls) -> "Registry":
                return cls()

        methods = _by_name(scanner, Registry, MemberKind.METHOD)
        assert set(methods) == {"default"}


@pytest.mark.unit
class TestConstructorScan:
    """Test effective constructor discovery."""

    def test_own_constructor(self, scanner):
        ctor = scanner.constructor(Employee)

        assert ctor.kind is MemberKind.CONSTRUCTOR
        assert ctor.declaring_type is Employee
        assert ctor.parameter_types == (str, int, int)
        assert all(p.has_default for p in ctor.parameters)

    def test_inherited_constructor(self, scanner):
        """Test that a class without __init__ reports the declaring base."""

        class Contractor(Person):
            pass

        ctor = scanner.constructor(Contractor)
        assert ctor.declaring_type is Person
        assert ctor.owner_type is Contractor
        assert [p.name for p in ctor.parameters] == ["name", "age"]
