"""Test name-matched object mapping."""

import logging

import pytest

from memberflect.domain.models import (
    BindingFlags,
    MapSpec,
    MemberKind,
    MemberNotFoundError,
    NullAssignmentError,
    TypeMismatchError,
)
from memberflect.domain.services.mapping import MapPlan, Mapper

from tests.fixtures.people import (
    Account,
    Employee,
    LooseRecord,
    Person,
    PersonRecord,
    PersonView,
    Walker,
    WalkerLog,
)

FIELD = MemberKind.FIELD
PROPERTY = MemberKind.PROPERTY


@pytest.fixture
def mapper(resolver, cache) -> Mapper:
    return Mapper(resolver, cache, validate_before_write=True)


@pytest.mark.unit
class TestMapDirections:
    """Test the four mapping directions."""

    def test_fields_to_fields(self, mapper):
        """Test that every source field is copied when no filter is given."""
        record = PersonRecord("Ann", 30)
        person = Person()

        result = mapper.map(record, person, MapSpec())

        assert result is person
        assert (person.name, person.age) == ("Ann", 30)

    def test_plain_class_fields(self, mapper):
        """Test that fields assigned in __init__ of unannotated classes are all copied."""
        source = Walker("John", 10, 120.0)
        target = WalkerLog()

        mapper.map(source, target, MapSpec())

        assert target.name == "John"
        assert target.age == 10
        assert target.meters_travelled == 120.0
        assert isinstance(target.meters_travelled, float)

    def test_fields_to_properties(self, mapper):
        person = Person("Ann", 30)
        view = PersonView()

        mapper.map(person, view, MapSpec.create(FIELD, PROPERTY, ["name", "age"]))
        assert (view.name, view.age) == ("Ann", 30)

    def test_properties_to_fields(self, mapper):
        view = PersonView("Bo", 12)
        record = PersonRecord()

        mapper.map(view, record, MapSpec.create(PROPERTY, FIELD))
        assert record == PersonRecord("Bo", 12)

    def test_properties_to_properties(self, mapper):
        source = PersonView("Cy", 50)
        target = PersonView()

        mapper.map(source, target, MapSpec.create(PROPERTY, PROPERTY))
        assert (target.name, target.age) == ("Cy", 50)

    def test_inherited_members_on_subclass_instances(self, mapper):
        employee = Employee("Di", 41, 9)
        record = PersonRecord()

        mapper.map(employee, record, MapSpec.create(FIELD, FIELD, ["name", "age"]))
        assert record == PersonRecord("Di", 41)


@pytest.mark.unit
class TestMapFilter:
    """Test the name filter."""

    def test_names_outside_filter_are_untouched(self, mapper):
        person = Person("Ann", 30)
        record = PersonRecord("old", 99)

        mapper.map(person, record, MapSpec.create(FIELD, FIELD, ["name"]))
        assert record == PersonRecord("Ann", 99)

    def test_two_names_leave_third_untouched(self, mapper):
        source = Walker("John", 10, 120.0)
        target = WalkerLog()
        target.meters_travelled = 7.5

        mapper.map(source, target, MapSpec.create(FIELD, FIELD, ["name", "age"]))

        assert (target.name, target.age) == ("John", 10)
        assert target.meters_travelled == 7.5

    def test_empty_filter_maps_everything(self, mapper):
        target = PersonRecord("old", 1)

        mapper.map(PersonRecord("new", 2), target, MapSpec(names=frozenset()))
        assert target == PersonRecord("new", 2)

    def test_trimmed_unfiltered_map(self, mapper):
        """Test that a plain member and its mangled twin map as one name under trimming."""
        flags = BindingFlags.INSTANCE_ANY_VISIBILITY | BindingFlags.TRIM_EXPLICITLY_IMPLEMENTED
        spec = MapSpec.create(FIELD, FIELD, None, flags)
        source = Account(balance=10.0, reserved=2.0)
        target = Account()

        mapper.map(source, target, spec)

        assert target.balance == 10.0
        assert target.reserved() == 0.0
        assert mapper.plan(Account, Account, spec).names == ("balance",)

    def test_nothing_to_map_warns(self, mapper, caplog):
        class Empty:
            pass

        target = Walker("Ann")
        with caplog.at_level(logging.WARNING):
            assert mapper.map(Empty(), target, MapSpec()) is target

        assert target.name == "Ann"
        assert any("copies nothing" in record.getMessage() for record in caplog.records)

    def test_missing_target_name_raises(self, mapper):
        """Test that a filter name absent on the target fails before any write."""
        person = Person("Ann", 30)
        record = PersonRecord("old", 99)

        with pytest.raises(MemberNotFoundError) as exc_info:
            mapper.map(person, record, MapSpec.create(FIELD, FIELD, ["name", "meters_travelled"]))

        assert exc_info.value.name == "meters_travelled"
        assert exc_info.value.type is PersonRecord
        assert record == PersonRecord("old", 99)

    def test_missing_source_name_raises(self, mapper):
        with pytest.raises(MemberNotFoundError) as exc_info:
            mapper.map(PersonRecord(), Person(), MapSpec.create(FIELD, FIELD, ["salary"]))
        assert exc_info.value.type is PersonRecord

    def test_visibility_flags_apply(self, mapper):
        """Test that the MapSpec flags narrow both sides."""
        spec = MapSpec.create(FIELD, FIELD, ["name"], BindingFlags.STATIC_ANY_VISIBILITY)
        with pytest.raises(MemberNotFoundError):
            mapper.map(Person(), PersonRecord(), spec)


@pytest.mark.unit
class TestMapAtomicity:
    """Test that failed validation leaves the target untouched."""

    def test_type_mismatch_before_any_write(self, mapper):
        source = LooseRecord(name="Ann", age="thirty")
        target = PersonRecord("old", 99)

        with pytest.raises(TypeMismatchError):
            mapper.map(source, target, MapSpec())
        assert target == PersonRecord("old", 99)

    def test_null_before_any_write(self, mapper):
        source = LooseRecord(name="Ann", age=None)
        target = PersonRecord("old", 99)

        with pytest.raises(NullAssignmentError):
            mapper.map(source, target, MapSpec())
        assert target == PersonRecord("old", 99)


@pytest.mark.unit
class TestMapPlans:
    """Test compiled plan caching."""

    def test_plan_is_cached(self, mapper):
        spec = MapSpec()
        first = mapper.plan(PersonRecord, Person, spec)

        assert isinstance(first, MapPlan)
        assert mapper.plan(PersonRecord, Person, MapSpec()) is first
        assert first.names == ("name", "age")

    def test_plans_are_direction_specific(self, mapper):
        spec = MapSpec.create(FIELD, FIELD, ["name", "age"])
        forward = mapper.plan(PersonRecord, Person, spec)
        backward = mapper.plan(Person, PersonRecord, spec)

        assert forward is not backward
        assert forward.source_type is PersonRecord
        assert backward.source_type is Person

    def test_filtered_names_are_sorted(self, mapper):
        plan = mapper.plan(Person, PersonRecord, MapSpec.create(FIELD, FIELD, ["name", "age"]))
        assert plan.names == ("age", "name")

    def test_plan_is_callable(self, mapper):
        plan = mapper.plan(PersonView, PersonRecord, MapSpec.create(PROPERTY, FIELD))
        record = plan(PersonView("Ed", 8), PersonRecord())
        assert record == PersonRecord("Ed", 8)
