# SPDX-License-Identifier: Apache-2.0.
# Copyright (c) 2024 - 2025 Waldiez and contributors.

# pylint: disable=missing-param-doc,missing-return-doc,too-few-public-methods
# pylint: disable=no-self-use

"""Tests for the encoder registry."""

import threading
import time
from abc import ABC
from typing import Any, List, Optional
from unittest.mock import MagicMock

import pytest

from credential_encoders.encoders import (
    BCryptPasswordEncoder,
    MessageDigestPasswordEncoder,
    PasswordEncoder,
    PlaintextPasswordEncoder,
)
from credential_encoders.errors import (
    ConfigurationError,
    InvalidEncoderSpecError,
    NoEncoderConfiguredError,
    UnknownEncoderNameError,
)
from credential_encoders.registry import (
    EncoderFactories,
    EncoderRegistry,
    TypeCatalog,
    describe_entity,
    type_name,
)


class User:
    """A plain user."""


class AdminUser(User):
    """An admin."""


class SuperAdmin(AdminUser):
    """A subtype of admin."""


class Guest:
    """Unrelated entity."""


class LegacyUser(User):
    """An entity picking its own encoder."""

    def __init__(self, encoder_name: Optional[str]) -> None:
        self.encoder_name = encoder_name

    def preferred_encoder_name(self) -> Optional[str]:
        """Get the preferred encoder name."""
        return self.encoder_name


class FakeEncoder:
    """Minimal encoder."""

    def __init__(self, *args: Any) -> None:
        self.args = args

    def hash(self, plain: str) -> str:
        return f"fake:{plain}"

    def verify(self, plain: str, stored: str) -> bool:
        return stored == f"fake:{plain}"

    def needs_rehash(self, stored: str) -> bool:  # pylint: disable=unused-argument
        return False


class HashOnlyEncoder:
    """Encoder without rehash support."""

    def hash(self, plain: str) -> str:
        return plain[::-1]

    def verify(self, plain: str, stored: str) -> bool:
        return stored == plain[::-1]


class Account(ABC):
    """Abstract account type."""


class Member:
    """Registered as an account without inheriting from it."""


Account.register(Member)


ADMIN = type_name(AdminUser)
USER = type_name(User)


class TestSelection:
    """Selector resolution."""

    def test_subtype_matches_registered_ancestor(self) -> None:
        """Test the bcrypt scenario with a subtype entity."""
        registry = EncoderRegistry({ADMIN: {"algorithm": "bcrypt", "cost": 12}})
        encoder = registry.resolve(SuperAdmin())
        assert isinstance(encoder, BCryptPasswordEncoder)
        assert encoder.cost == 12

    def test_exact_type_matches(self) -> None:
        """Test that the type itself matches its key."""
        registry = EncoderRegistry({USER: {"algorithm": "plaintext"}})
        assert registry.selector_for(User()) == USER

    def test_class_keys_are_normalized(self) -> None:
        """Test that classes can be used as keys."""
        registry = EncoderRegistry({AdminUser: {"algorithm": "plaintext"}})
        assert registry.keys() == [ADMIN]
        assert registry.selector_for(SuperAdmin()) == ADMIN

    def test_first_registered_ancestor_wins(self) -> None:
        """Test that registration order decides between two ancestors."""
        general_first = EncoderRegistry(
            {
                USER: {"algorithm": "plaintext"},
                ADMIN: {"algorithm": "bcrypt", "cost": 4},
            }
        )
        assert general_first.selector_for(SuperAdmin()) == USER
        specific_first = EncoderRegistry(
            {
                ADMIN: {"algorithm": "bcrypt", "cost": 4},
                USER: {"algorithm": "plaintext"},
            }
        )
        assert specific_first.selector_for(SuperAdmin()) == ADMIN
        assert specific_first.selector_for(User()) == USER

    def test_class_entity(self) -> None:
        """Test passing the entity type instead of an instance."""
        registry = EncoderRegistry({ADMIN: {"algorithm": "plaintext"}})
        assert registry.selector_for(SuperAdmin) == ADMIN
        with pytest.raises(NoEncoderConfiguredError):
            registry.selector_for(User)

    def test_no_match(self) -> None:
        """Test the error when nothing matches an instance."""
        registry = EncoderRegistry({ADMIN: {"algorithm": "plaintext"}})
        with pytest.raises(NoEncoderConfiguredError) as exc_info:
            registry.resolve(Guest())
        assert exc_info.value.descriptor == type_name(Guest)
        assert type_name(Guest) in str(exc_info.value)

    def test_virtual_subclass_matches_class_key(self) -> None:
        """Test that classes registered on an ABC key match it."""
        registry = EncoderRegistry(
            {USER: {"algorithm": "bcrypt", "cost": 4}, Account: FakeEncoder()}
        )
        assert isinstance(Member(), Account)
        assert registry.selector_for(Member()) == type_name(Account)
        assert registry.selector_for(Member) == type_name(Account)
        assert registry.selector_for(User()) == USER

    def test_virtual_subclass_keeps_insertion_order(self) -> None:
        """Test that an earlier name key still wins over a later ABC key."""
        registry = EncoderRegistry(
            {
                type_name(Member): {"algorithm": "plaintext"},
                Account: FakeEncoder(),
            }
        )
        assert registry.selector_for(Member()) == type_name(Member)

    def test_virtual_subclass_by_name_is_not_matched(self) -> None:
        """Test that bare names only follow the catalog."""
        registry = EncoderRegistry({Account: FakeEncoder()})
        with pytest.raises(NoEncoderConfiguredError):
            registry.selector_for(type_name(Member))

    def test_empty_registry(self) -> None:
        """Test that an empty registry matches nothing."""
        with pytest.raises(NoEncoderConfiguredError):
            EncoderRegistry({}).resolve(User())


class TestPreferredName:
    """Explicit encoder selection by the entity."""

    def test_preferred_name_wins_over_type(self) -> None:
        """Test that the named encoder is used regardless of the type."""
        named = FakeEncoder()
        registry = EncoderRegistry(
            {
                USER: {"algorithm": "plaintext"},
                "legacy": named,
            }
        )
        assert registry.resolve(LegacyUser("legacy")) is named

    def test_preferred_name_may_be_any_key(self) -> None:
        """Test that type-name keys can be selected by name too."""
        registry = EncoderRegistry(
            {USER: {"algorithm": "plaintext"}, ADMIN: FakeEncoder()}
        )
        assert registry.selector_for(LegacyUser(ADMIN)) == ADMIN

    def test_none_falls_back_to_type(self) -> None:
        """Test that a None name falls back to type matching."""
        registry = EncoderRegistry({USER: {"algorithm": "plaintext"}})
        assert registry.selector_for(LegacyUser(None)) == USER

    def test_unknown_preferred_name(self) -> None:
        """Test the legacy scenario: the name is not registered."""
        registry = EncoderRegistry({USER: {"algorithm": "plaintext"}})
        with pytest.raises(UnknownEncoderNameError) as exc_info:
            registry.resolve(LegacyUser("legacy"))
        error = exc_info.value
        assert error.name == "legacy"
        assert error.descriptor == type_name(LegacyUser)
        assert '"legacy"' in str(error)
        assert not isinstance(error, NoEncoderConfiguredError)
        assert isinstance(error, ConfigurationError)

    def test_classes_are_not_asked(self) -> None:
        """Test that the preferred name is only asked from instances."""
        registry = EncoderRegistry({USER: {"algorithm": "plaintext"}})
        assert registry.selector_for(LegacyUser) == USER


class TestBareNames:
    """Legacy callers passing a type name."""

    def test_literal_key(self) -> None:
        """Test that a name equal to a key matches it."""
        registry = EncoderRegistry({"legacy": {"algorithm": "plaintext"}})
        assert registry.selector_for("legacy") == "legacy"

    def test_catalogued_subtype(self) -> None:
        """Test that catalogued subtypes match their ancestors."""
        catalog = TypeCatalog.from_mapping(
            {"app.SuperAdmin": ["app.AdminUser"], "app.AdminUser": ["app.User"]}
        )
        registry = EncoderRegistry(
            {"app.User": {"algorithm": "plaintext"}}, catalog=catalog
        )
        assert registry.selector_for("app.SuperAdmin") == "app.User"

    def test_class_keys_feed_the_catalog(self) -> None:
        """Test that the ancestors of class keys are known by name."""
        registry = EncoderRegistry({AdminUser: {"algorithm": "plaintext"}})
        assert registry.selector_for(ADMIN) == ADMIN
        assert USER in registry.catalog
        with pytest.raises(NoEncoderConfiguredError):
            registry.selector_for(USER)

    def test_unknown_name(self) -> None:
        """Test that the bare name is the descriptor."""
        registry = EncoderRegistry({"app.User": {"algorithm": "plaintext"}})
        with pytest.raises(NoEncoderConfiguredError) as exc_info:
            registry.resolve("app.Other")
        assert exc_info.value.descriptor == "app.Other"
        assert '"app.Other"' in str(exc_info.value)


class TestRealization:
    """Lazy construction and memoization."""

    def test_memoized(self) -> None:
        """Test that the same instance is returned on every call."""
        registry = EncoderRegistry({USER: {"algorithm": "plaintext"}})
        assert not registry.is_realized(USER)
        first = registry.resolve(User())
        assert registry.is_realized(USER)
        assert registry.resolve(AdminUser()) is first
        assert registry.realize(USER) is first

    def test_built_once(self) -> None:
        """Test that the factory runs once per key."""
        factories = EncoderFactories()
        factory = MagicMock(return_value=FakeEncoder())
        factories.register("fake", factory)
        registry = EncoderRegistry(
            {USER: {"class": "fake", "arguments": [1]}}, factories=factories
        )
        for _ in range(3):
            registry.resolve(User())
        factory.assert_called_once_with(1)

    def test_prebuilt_encoders_are_realized(self) -> None:
        """Test that encoder instances are used as they are."""
        encoder = PlaintextPasswordEncoder()
        registry = EncoderRegistry({USER: encoder})
        assert registry.is_realized(USER)
        assert registry.resolve(User()) is encoder

    def test_unknown_digest_scenario(self) -> None:
        """Test the fallback preset arguments reach the digest factory."""
        factories = EncoderFactories()
        factory = MagicMock(return_value=FakeEncoder())
        factories.register("message_digest", factory)
        registry = EncoderRegistry(
            {
                USER: {
                    "algorithm": "unknown_digest",
                    "encode_as_base64": True,
                    "iterations": 1,
                }
            },
            factories=factories,
        )
        registry.resolve(User())
        factory.assert_called_once_with("unknown_digest", True, 1)

    def test_unknown_digest_uses_the_digest_encoder(self) -> None:
        """Test that any other algorithm name resolves to a digest encoder."""
        registry = EncoderRegistry(
            {
                USER: {
                    "algorithm": "unknown_digest",
                    "encode_as_base64": True,
                    "iterations": 1,
                }
            }
        )
        encoder = registry.resolve(User())
        assert isinstance(encoder, MessageDigestPasswordEncoder)
        assert encoder.algorithm == "unknown_digest"
        assert encoder.encode_as_base64 is True
        assert encoder.iterations == 1
        assert registry.is_realized(USER)
        with pytest.raises(ValueError, match="not supported"):
            encoder.hash("secret")

    def test_hash_and_verify_only_encoders(self) -> None:
        """Test encoders exposing only hash and verify."""
        prebuilt = HashOnlyEncoder()
        factories = EncoderFactories()
        factories.register("hash_only", HashOnlyEncoder)
        registry = EncoderRegistry(
            {
                USER: prebuilt,
                ADMIN: {"class": "hash_only", "arguments": []},
            },
            factories=factories,
        )
        assert isinstance(prebuilt, PasswordEncoder)
        assert registry.resolve(User()) is prebuilt
        built = registry.resolve(AdminUser())
        assert isinstance(built, HashOnlyEncoder)
        assert built.verify("secret", built.hash("secret"))

    def test_failure_does_not_poison(self) -> None:
        """Test that a failed construction is retried later."""
        factories = EncoderFactories()
        built = FakeEncoder()
        factory = MagicMock(side_effect=[ValueError("boom"), built])
        factories.register("flaky", factory)
        registry = EncoderRegistry(
            {USER: {"class": "flaky", "arguments": []}}, factories=factories
        )
        with pytest.raises(InvalidEncoderSpecError):
            registry.resolve(User())
        assert not registry.is_realized(USER)
        assert registry.resolve(User()) is built
        assert factory.call_count == 2

    def test_invalid_spec_surfaces(self) -> None:
        """Test that invalid specs surface with the spec content."""
        registry = EncoderRegistry({USER: {"class": "plaintext"}})
        with pytest.raises(InvalidEncoderSpecError) as exc_info:
            registry.resolve(User())
        assert exc_info.value.field == "arguments"
        assert '{"class": "plaintext"}' in str(exc_info.value)

    def test_specs_are_copied(self) -> None:
        """Test that later changes to the input do not leak in."""
        spec = {"algorithm": "bcrypt", "cost": 4}
        registry = EncoderRegistry({USER: spec})
        spec["cost"] = 5
        encoder = registry.resolve(User())
        assert isinstance(encoder, BCryptPasswordEncoder)
        assert encoder.cost == 4

    def test_realize_unknown_key(self) -> None:
        """Test realizing a key that is not registered."""
        registry = EncoderRegistry({USER: {"algorithm": "plaintext"}})
        with pytest.raises(UnknownEncoderNameError):
            registry.realize("missing")
        with pytest.raises(UnknownEncoderNameError):
            registry.is_realized("missing")

    def test_concurrent_realization(self) -> None:
        """Test that concurrent callers share one construction."""
        calls: List[int] = []

        def slow_factory() -> FakeEncoder:
            calls.append(1)
            time.sleep(0.05)
            return FakeEncoder()

        factories = EncoderFactories()
        factories.register("slow", slow_factory)
        registry = EncoderRegistry(
            {USER: {"class": "slow", "arguments": []}}, factories=factories
        )
        results: List[Any] = []
        barrier = threading.Barrier(8)

        def worker() -> None:
            barrier.wait()
            results.append(registry.resolve(User()))

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(calls) == 1
        assert len(results) == 8
        assert all(result is results[0] for result in results)

    def test_other_keys_do_not_wait(self) -> None:
        """Test that a slow key does not block another key."""
        started = threading.Event()
        release = threading.Event()

        def blocking_factory() -> FakeEncoder:
            started.set()
            release.wait(timeout=5)
            return FakeEncoder()

        factories = EncoderFactories()
        factories.register("blocking", blocking_factory)
        registry = EncoderRegistry(
            {
                ADMIN: {"class": "blocking", "arguments": []},
                USER: {"algorithm": "plaintext"},
            },
            factories=factories,
        )
        thread = threading.Thread(target=registry.resolve, args=(AdminUser(),))
        thread.start()
        try:
            assert started.wait(timeout=5)
            assert isinstance(
                registry.resolve(User()), PlaintextPasswordEncoder
            )
            assert not registry.is_realized(ADMIN)
        finally:
            release.set()
            thread.join()
        assert registry.is_realized(ADMIN)


class TestConstruction:
    """Registry construction and configuration."""

    def test_invalid_entry(self) -> None:
        """Test that entries must be mappings or encoders."""
        with pytest.raises(InvalidEncoderSpecError):
            EncoderRegistry({USER: "bcrypt"})  # type: ignore[dict-item]

    @pytest.mark.parametrize("key", ["", 42, None])
    def test_invalid_key(self, key: Any) -> None:
        """Test that keys must be classes or non empty strings."""
        with pytest.raises(ConfigurationError):
            EncoderRegistry({key: {"algorithm": "plaintext"}})

    def test_keys_keep_order(self) -> None:
        """Test the key listing helpers."""
        registry = EncoderRegistry(
            {"b": {"algorithm": "plaintext"}, "a": {"algorithm": "plaintext"}}
        )
        assert registry.keys() == ["b", "a"]
        assert list(registry) == ["b", "a"]
        assert len(registry) == 2
        assert "a" in registry
        assert "c" not in registry

    def test_from_config(self) -> None:
        """Test building from a loaded configuration."""
        registry = EncoderRegistry.from_config(
            {
                "encoders": {
                    "app.AdminUser": {"algorithm": "bcrypt", "cost": 4},
                    "app.User": {"algorithm": "plaintext"},
                },
                "types": {"app.SuperAdmin": ["app.AdminUser"]},
            }
        )
        assert registry.selector_for("app.SuperAdmin") == "app.AdminUser"
        assert registry.selector_for("app.User") == "app.User"

    @pytest.mark.parametrize(
        "config",
        [
            {"encoders": ["app.User"]},
            {"encoders": {}, "types": ["app.User"]},
            {"encoders": {}, "types": {"app.User": "app.Base"}},
        ],
    )
    def test_from_invalid_config(self, config: Any) -> None:
        """Test that malformed sections are configuration errors."""
        with pytest.raises(ConfigurationError):
            EncoderRegistry.from_config(config)

    def test_from_empty_config(self) -> None:
        """Test that missing sections give an empty registry."""
        assert len(EncoderRegistry.from_config({})) == 0


def test_describe_entity() -> None:
    """Test entity descriptors."""
    assert describe_entity("app.User") == "app.User"
    assert describe_entity(User) == USER
    assert describe_entity(User()) == USER
