"""
Tests for naming-case styles and the process-wide default naming case.
"""

import pytest

from plainmodel import (
    NamingCase, NamingCaseError, ConfigurationError,
    naming_case_fn, get_default_naming_case, set_default_naming_case,
)


class TestNamingCaseFunctions:

    def test_camel_case(self):
        fn = naming_case_fn(NamingCase.CAMEL_CASE)
        assert fn("full_name") == "fullName"
        assert fn("street_name") == "streetName"
        assert fn("id") == "id"

    def test_snake_case(self):
        fn = naming_case_fn(NamingCase.SNAKE_CASE)
        assert fn("fullName") == "full_name"
        assert fn("FullName") == "full_name"
        assert fn("full_name") == "full_name"

    def test_pascal_case(self):
        assert naming_case_fn(NamingCase.PASCAL_CASE)("user_id") == "UserId"

    def test_kebab_case(self):
        fn = naming_case_fn(NamingCase.KEBAB_CASE)
        assert fn("user_id") == "user-id"
        assert fn("userId") == "user-id"

    def test_non_case_is_identity(self):
        fn = naming_case_fn(NamingCase.NON_CASE)
        for key in ("full_name", "fullName", "Full-Name", "x"):
            assert fn(key) == key

    def test_string_tokens_accepted(self):
        assert naming_case_fn("camelCase")("a_b") == "aB"
        assert naming_case_fn("non_case")("a_b") == "a_b"

    def test_unknown_token_fails_fast(self):
        """Unknown styles are configuration errors, not silent identity."""
        with pytest.raises(NamingCaseError):
            naming_case_fn("screaming")

    def test_naming_case_error_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            naming_case_fn("nope")
        with pytest.raises(ValueError):
            naming_case_fn("nope")


class TestDefaultNamingCase:

    def test_default_is_snake_case(self):
        assert get_default_naming_case() is NamingCase.SNAKE_CASE

    def test_setter_returns_previous(self, restore_default_case):
        previous = set_default_naming_case(NamingCase.CAMEL_CASE)
        assert previous is NamingCase.SNAKE_CASE
        assert get_default_naming_case() is NamingCase.CAMEL_CASE

    def test_setter_accepts_string(self, restore_default_case):
        set_default_naming_case("kebab-case")
        assert get_default_naming_case() is NamingCase.KEBAB_CASE

    def test_setter_rejects_unknown(self, restore_default_case):
        with pytest.raises(NamingCaseError):
            set_default_naming_case("bogus")
        assert get_default_naming_case() is NamingCase.SNAKE_CASE
