import pytest

from import_order_fixer.nodes import (
    DEFAULT_SPECIFIER,
    NAMED_SPECIFIER,
    NAMESPACE_SPECIFIER,
    ImportDeclaration,
    Literal,
    Specifier,
    Statement,
    program_from_estree,
)
from import_order_fixer.parser import ParseError, dialect_for, extract_imports_from_file, parse_program
from import_order_fixer.rules import classify_import, split_imports


def _decl(source, *specifiers):
    return ImportDeclaration(source=Literal(source, f'"{source}"'), specifiers=tuple(specifiers))


def test_extract_imports_from_file(tmp_path):
    code = 'import a from "a";\nimport { b, c } from "b";\nconst x = 1;\n'
    file = tmp_path / "sample.js"
    file.write_text(code)
    imports = extract_imports_from_file(str(file))
    assert all(isinstance(node, ImportDeclaration) for node in imports)
    assert [node.source.value for node in imports] == ["a", "b"]


def test_parse_program_shapes():
    body = parse_program('import React, { useState as useS } from "react";\nimport * as fs from \'fs\';\nimport "./side.css";\n')
    react, fs, side = body

    assert react.specifiers == (
        Specifier(DEFAULT_SPECIFIER, "React"),
        Specifier(NAMED_SPECIFIER, "useS", imported="useState"),
    )
    assert fs.specifiers == (Specifier(NAMESPACE_SPECIFIER, "fs"),)
    assert fs.source == Literal("fs", "'fs'")
    assert side.specifiers == ()
    assert side.source.value == "./side.css"


def test_parse_program_skips_comments_and_keeps_other_statements():
    source = '// header\nimport a from "a";\n/* note */\nexport const x = 1;\n'
    body = parse_program(source)
    assert isinstance(body[0], ImportDeclaration)
    assert isinstance(body[1], Statement)
    assert len(body) == 2


def test_parse_program_ranges_are_character_offsets():
    source = '// café ☃\nimport a from "a";\n'
    (node,) = parse_program(source)
    assert node.range == (source.index("import"), len(source) - 1)


def test_parse_type_imports():
    source = (
        'import type { Foo, Bar as Baz } from "./types";\n'
        'import { type Qux, value } from "./mixed";\n'
    )
    type_only, mixed = parse_program(source, "mod.ts")
    assert type_only.import_kind == "type"
    assert [s.local for s in type_only.specifiers] == ["Foo", "Baz"]
    assert mixed.import_kind == "value"
    assert [s.import_kind for s in mixed.specifiers] == ["type", "value"]


def test_parse_string_imported_name():
    (node,) = parse_program('import { "kebab-name" as kebab } from "m";\n')
    (spec,) = node.specifiers
    assert spec.local == "kebab"
    assert spec.imported == "kebab-name"
    assert not spec.is_identifier


def test_import_require_is_not_an_import_declaration():
    body = parse_program('import fs = require("fs");\n', "mod.ts")
    assert isinstance(body[0], Statement)


def test_parse_program_rejects_invalid_syntax():
    with pytest.raises(ParseError) as excinfo:
        parse_program("import {\n\nconst = ;\n")
    assert excinfo.value.lineno >= 1


def test_dialect_for():
    assert dialect_for("a.ts") == "typescript"
    assert dialect_for("a.mts") == "typescript"
    assert dialect_for("a.tsx") == "tsx"
    assert dialect_for("a.js") == "tsx"


def test_classify_imports():
    star = _decl("a", Specifier(NAMESPACE_SPECIFIER, "a"))
    default_and_star = _decl("b", Specifier(DEFAULT_SPECIFIER, "b"), Specifier(NAMESPACE_SPECIFIER, "ns"))
    default = _decl("c", Specifier(DEFAULT_SPECIFIER, "c"), Specifier(NAMED_SPECIFIER, "d", imported="d"))
    named = _decl("e", Specifier(NAMED_SPECIFIER, "e", imported="e"))
    side_effect = _decl("f")

    results = [classify_import(node) for node in (star, default_and_star, default, named, side_effect)]
    assert results == ["star", "star", "default", "named", "named"]


def test_split_imports_is_a_partition_in_input_order():
    nodes = [
        _decl("n1", Specifier(NAMED_SPECIFIER, "z", imported="z")),
        _decl("d1", Specifier(DEFAULT_SPECIFIER, "y")),
        _decl("s1", Specifier(NAMESPACE_SPECIFIER, "x")),
        _decl("n2"),
        _decl("d2", Specifier(DEFAULT_SPECIFIER, "a")),
    ]
    groups = split_imports(nodes)
    assert [n.source.value for n in groups.star_imports] == ["s1"]
    assert [n.source.value for n in groups.default_imports] == ["d1", "d2"]
    assert [n.source.value for n in groups.named_imports] == ["n1", "n2"]
    assert sorted(map(id, groups.ordered())) == sorted(map(id, nodes))


def test_program_from_estree():
    program = {
        "type": "Program",
        "body": [
            {
                "type": "ImportDeclaration",
                "importKind": "type",
                "source": {"type": "Literal", "value": "m", "raw": "'m'"},
                "specifiers": [
                    {
                        "type": "ImportSpecifier",
                        "local": {"type": "Identifier", "name": "Local"},
                        "imported": {"type": "Literal", "value": "default", "raw": "'default'"},
                    },
                ],
                "range": [0, 40],
            },
            {"type": "VariableDeclaration", "start": 41, "end": 52},
        ],
    }
    node, other = program_from_estree(program)
    assert node.import_kind == "type"
    assert node.range == (0, 40)
    assert node.specifiers[0].imported_raw == "'default'"
    assert other == Statement("VariableDeclaration", (41, 52))


def test_ranges_stay_aligned_after_several_non_ascii_statements():
    source = (
        'import ä from "ä";\n'
        "// ☃☃☃\n"
        'import { 𝒳 } from "x";\n'
        "const ü = 1;\n"
    )
    body = parse_program(source)
    assert [source[start:end] for start, end in (node.range for node in body)] == [
        'import ä from "ä";',
        'import { 𝒳 } from "x";',
        "const ü = 1;",
    ]


def test_string_literals_are_unescaped():
    source = 'import a from "a\\"b\\x41\\u0042\\u{43}";\nimport { "n\\u0061me" as n } from \'m\';\n'
    quoted, named = parse_program(source)
    assert quoted.source.value == 'a"bABC'
    assert quoted.source.raw == '"a\\"b\\x41\\u0042\\u{43}"'
    assert named.specifiers[0].imported == "name"
    assert named.specifiers[0].imported_raw == '"n\\u0061me"'
