"""Test binding flag composition and admission."""

import pytest

from memberflect.domain.models import BindingFlags


@pytest.mark.unit
class TestBindingFlags:
    """Test BindingFlags admission sets."""

    def test_default_admits_everything(self):
        """Test that DEFAULT reaches public, non-public, static and instance members."""
        flags = BindingFlags.DEFAULT
        assert flags.admits(is_public=True, is_static=True)
        assert flags.admits(is_public=True, is_static=False)
        assert flags.admits(is_public=False, is_static=True)
        assert flags.admits(is_public=False, is_static=False)

    def test_visibility_and_scope_must_both_match(self):
        """Test that a member needs its visibility and its scope present."""
        flags = BindingFlags.PUBLIC | BindingFlags.INSTANCE
        assert flags.admits(is_public=True, is_static=False)
        assert not flags.admits(is_public=False, is_static=False)
        assert not flags.admits(is_public=True, is_static=True)

    def test_scope_without_visibility_admits_nothing(self):
        """Test that INSTANCE alone selects no members."""
        assert not BindingFlags.INSTANCE.admits(is_public=True, is_static=False)

    def test_without_clears_bits(self):
        """Test removing INSTANCE leaves the static-only combination."""
        flags = BindingFlags.DEFAULT.without(BindingFlags.INSTANCE)
        assert flags == BindingFlags.STATIC_ANY_VISIBILITY
        assert isinstance(flags, BindingFlags)

    def test_named_combinations(self):
        """Test the predefined combinations."""
        assert BindingFlags.INSTANCE_ANY_VISIBILITY == (
            BindingFlags.PUBLIC | BindingFlags.NON_PUBLIC | BindingFlags.INSTANCE
        )
        assert BindingFlags.DEFAULT == BindingFlags.STATIC_INSTANCE_ANY_VISIBILITY
        assert not BindingFlags.DEFAULT & BindingFlags.DECLARED_ONLY
        assert not BindingFlags.DEFAULT & BindingFlags.TRIM_EXPLICITLY_IMPLEMENTED
