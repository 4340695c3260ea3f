import textwrap

import pytest

from dojo_contract.errors import DojoContractError, ParseError
from dojo_contract.syntax import (
    EnumNode,
    FreeFunctionNode,
    ModuleNode,
    OtherNode,
    StructNode,
    SyntaxKind,
    parse_item,
    parse_items,
)
from dojo_contract.syntax.lexer import TokenType, tokenize


def parse(src: str):
    return parse_item(textwrap.dedent(src))


# --- Lexer ---------------------------------------------------------------------


def test_tokenize_compound_punctuation_and_eof() -> None:
    toks = tokenize("a::b -> c => 'x'")
    values = [t.value for t in toks]
    assert values == ["a", "::", "b", "->", "c", "=>", "'x'", ""]
    assert toks[-1].type is TokenType.EOF
    assert toks[6].type is TokenType.STRING


def test_comment_becomes_leading_trivia() -> None:
    src = "// doc\n// more\nfoo bar"
    toks = tokenize(src)
    assert toks[0].value == "foo"
    assert toks[0].lead == 0
    assert toks[1].lead == toks[1].start


def test_unterminated_literal_reports_position() -> None:
    with pytest.raises(ParseError) as ei:
        tokenize('fn a() {\n  "oops\n')
    assert ei.value.line == 2
    assert ei.value.column == 3


# --- Items -----------------------------------------------------------------------


def test_module_with_body_and_items(foo_source: str) -> None:
    node = parse_item(foo_source)
    assert isinstance(node, ModuleNode)
    assert node.kind is SyntaxKind.MODULE
    assert node.name == "Foo"
    kinds = [item.kind for item in node.items]
    assert kinds == [
        SyntaxKind.OTHER,
        SyntaxKind.STRUCT,
        SyntaxKind.ENUM,
        SyntaxKind.FREE_FUNCTION,
        SyntaxKind.FREE_FUNCTION,
    ]
    assert node.items[0].text == "use starknet::ContractAddress;"


def test_module_without_body() -> None:
    node = parse("pub(crate) mod tests;")
    assert isinstance(node, ModuleNode)
    assert node.items is None
    assert node.text == "pub(crate) mod tests;"


def test_struct_members_keep_generics_and_attributes() -> None:
    node = parse(
        """
        #[derive(Drop)]
        struct Storage {
            #[key]
            owner: ContractAddress,
            balances: Map<ContractAddress, u256>,
        }
        """
    )
    assert isinstance(node, StructNode)
    assert node.members == (
        "#[key]\n    owner: ContractAddress",
        "balances: Map<ContractAddress, u256>",
    )
    assert node.text.startswith("#[derive(Drop)]")


def test_enum_variants_keep_comments() -> None:
    node = parse(
        """
        enum Event {
            // first
            Moved: Moved,
            Spawned: Spawned
        }
        """
    )
    assert isinstance(node, EnumNode)
    assert node.variants == ("// first\n    Moved: Moved", "Spawned: Spawned")


def test_function_params_and_statements() -> None:
    node = parse(
        """
        fn spawn<T, +Drop<T>>(ref self: ContractState, pos: (u32, u32)) -> u32 {
            let x = if a { 1 } else { 2 };
            if b {
                x += 1;
            }
            loop {
                break;
            };
            #[allow(unused)]
            let _y = array![1, 2];
            x
        }
        """
    )
    assert isinstance(node, FreeFunctionNode)
    assert node.name == "spawn"
    assert node.params == ("ref self: ContractState", "pos: (u32, u32)")
    assert node.statements[0] == "let x = if a { 1 } else { 2 };"
    assert node.statements[1].startswith("if b {")
    assert node.statements[1].endswith("}")
    assert node.statements[2].startswith("loop {")
    assert node.statements[2].endswith("};")
    assert node.statements[3] == "#[allow(unused)]\n    let _y = array![1, 2];"
    assert node.statements[4] == "x"
    assert len(node.statements) == 5


def test_match_statement_without_semicolon() -> None:
    node = parse(
        """
        fn f(v: u8) {
            match v {
                0 => {},
                _ => {},
            }
            g();
        }
        """
    )
    assert len(node.statements) == 2
    assert node.statements[1] == "g();"


@pytest.mark.parametrize(
    "src",
    [
        "use dojo::model::{ModelStorage, ModelValueStorage};",
        "const MAX: u32 = 10;",
        "impl WorldImpl = world_cpt::WorldImpl<ContractState>;",
        "component!(path: upgradeable_cpt, storage: upgradeable, event: UpgradeableEvent);",
        "#[abi(embed_v0)]\nimpl ActionsImpl of IActions<ContractState> {\n    fn go(ref self: ContractState) {}\n}",
        "trait IActions<T> {\n    fn go(ref self: T);\n}",
        "extern fn hades_permutation(s0: felt252) -> felt252 nopanic;",
    ],
)
def test_other_items_are_kept_verbatim(src: str) -> None:
    node = parse_item(src)
    assert isinstance(node, OtherNode)
    assert node.text == src


def test_function_declaration_without_body_is_other() -> None:
    node = parse_item("fn external_thing(a: u8) -> u8;")
    assert isinstance(node, OtherNode)
    assert node.keyword == "fn"


def test_leading_doc_comment_is_part_of_item() -> None:
    items = parse_items("/// Helper.\nfn helper() -> u8 {\n    1\n}\nconst A: u8 = 1;")
    assert items[0].text.startswith("/// Helper.")
    assert items[1].text == "const A: u8 = 1;"


def test_nested_modules_are_descendants() -> None:
    node = parse("mod Outer { mod A; mod B { mod C {} } fn f() {} }")
    names = [n.name for n in node.descendants() if isinstance(n, ModuleNode)]
    assert names == ["A", "B", "C"]


# --- Errors ------------------------------------------------------------------


@pytest.mark.parametrize(
    "src",
    [
        "mod Foo {",
        "mod Foo { struct S { a: u8 }",
        "fn f() { let a = (1, 2; }",
        "enum E { A, B",
        "# struct S {}",
    ],
)
def test_malformed_source_raises(src: str) -> None:
    with pytest.raises(ParseError):
        parse_item(src)


def test_parse_item_requires_exactly_one_item() -> None:
    with pytest.raises(ParseError, match="exactly one item"):
        parse_item("mod A {} mod B {}")
    with pytest.raises(ParseError, match="found 0"):
        parse_item("// nothing here\n")


def test_source_size_cap(monkeypatch, fresh_config) -> None:
    monkeypatch.setenv("DOJO_CONTRACT_MAX_SOURCE_BYTES", "1024")
    fresh_config.cache_clear()
    with pytest.raises(DojoContractError) as ei:
        parse_item("mod Big {" + " " * 2048 + "}")
    assert ei.value.code == "size_limit"
