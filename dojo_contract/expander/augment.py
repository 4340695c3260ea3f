"""
Augmentors: rewrite one recognised item, injecting the infrastructure every
contract needs (upgradeability and the world provider).

User pieces (variants, members, parameters, statements) are copied verbatim
and keep their original order; the injected pieces always come first.
"""

from __future__ import annotations

from typing import List, Sequence

from .state import CONSTRUCTOR_FN, DOJO_INIT_FN

EVENT_ATTRIBUTES = ("#[event]", "#[derive(Drop, starknet::Event)]")
INFRA_EVENT_VARIANTS = (
    "UpgradeableEvent: upgradeable_cpt::Event",
    "WorldProviderEvent: world_provider_cpt::Event",
)

STORAGE_ATTRIBUTES = ("#[storage]",)
INFRA_STORAGE_MEMBERS = (
    "#[substorage(v0)]\n    upgradeable: upgradeable_cpt::Storage",
    "#[substorage(v0)]\n    world_provider: world_provider_cpt::Storage",
)

WORLD_PROVIDER_INIT = "self.world_provider.initializer();"

# Only the world contract may call the init entrypoint.
WORLD_CALLER_GUARD = """\
if starknet::get_caller_address() != self.world_provider.world_dispatcher().contract_address {
    core::panics::panic_with_byte_array(
        @format!(
            "Only the world can init contract `{}`, but caller is `{:?}`",
            self.dojo_name(),
            starknet::get_caller_address(),
        ),
    );
}"""

INIT_IMPL_HEADER = (
    "#[abi(per_item)]",
    "#[generate_trait]",
    "pub impl IDojoInitImpl of IDojoInit {",
    "#[external(v0)]",
)


def _block(attributes: Sequence[str], header: str, entries: Sequence[str]) -> str:
    lines = list(attributes)
    lines.append(header + " {")
    lines.extend(f"    {entry}," for entry in entries)
    lines.append("}")
    return "\n".join(lines)


def augment_event(variants: Sequence[str]) -> str:
    return _block(EVENT_ATTRIBUTES, "enum Event", [*INFRA_EVENT_VARIANTS, *variants])


def augment_storage(members: Sequence[str]) -> str:
    return _block(STORAGE_ATTRIBUTES, "struct Storage", [*INFRA_STORAGE_MEMBERS, *members])


def augment_constructor(params: Sequence[str], statements: Sequence[str]) -> List[str]:
    fragments = [
        f"#[constructor]\nfn {CONSTRUCTOR_FN}({', '.join(params)}) {{",
        WORLD_PROVIDER_INIT,
    ]
    fragments.extend(statements)
    fragments.append("}")
    return fragments


def augment_init(params: Sequence[str], statements: Sequence[str]) -> List[str]:
    fragments = list(INIT_IMPL_HEADER)
    fragments.append(f"fn {DOJO_INIT_FN}({', '.join(params)}) {{")
    fragments.append(WORLD_CALLER_GUARD)
    fragments.extend(statements)
    fragments.append("}")
    fragments.append("}")
    return fragments


__all__ = [
    "augment_event",
    "augment_storage",
    "augment_constructor",
    "augment_init",
    "INFRA_EVENT_VARIANTS",
    "INFRA_STORAGE_MEMBERS",
    "WORLD_PROVIDER_INIT",
    "WORLD_CALLER_GUARD",
]
