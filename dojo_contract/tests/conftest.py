from __future__ import annotations

import textwrap

import pytest

from dojo_contract.config import load_config

FOO_SOURCE = textwrap.dedent(
    """\
    mod Foo {
        use starknet::ContractAddress;

        #[storage]
        struct Storage {
            a: felt252,
        }

        #[event]
        #[derive(Drop, starknet::Event)]
        enum Event {
            B,
        }

        fn constructor(ref self: ContractState, x: felt252) {
            self.a.write(x);
        }

        fn dojo_init(ref self: ContractState, y: felt252) {
            self.a.write(y);
        }
    }
    """
)


@pytest.fixture
def foo_source() -> str:
    return FOO_SOURCE


@pytest.fixture
def fresh_config():
    """Drop the cached config before and after a test that edits the environment."""
    load_config.cache_clear()
    yield load_config
    load_config.cache_clear()
