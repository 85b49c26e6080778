import pytest

from rsource.textutil import (
    ByteRange,
    SearchType,
    StackNode,
    calculate_str_hash,
    char_at,
    char_before,
    closure_valid_arg_scope,
    find_closure,
    find_ident_end,
    gen_tuple_fields,
    in_fn_name,
    is_ident_char,
    is_pattern_char,
    is_search_expr_char,
    is_whitespace_byte,
    strip_visibility,
    strip_word,
    strip_words,
    symbol_matches,
    trim_visibility,
    txt_matches,
    txt_matches_with_pos,
)

EXACT = SearchType.EXACT_MATCH
STARTS = SearchType.STARTS_WITH


def _find(src, a, off1, b, off2):
    return ByteRange(src.find(a) + off1, src.rfind(b) + 1 + off2)


def _pipe(src):
    return _find(src, "|", 0, "|", 0)


def test_find_closure_simple():
    src = "|a, b, c| something()"
    assert find_closure(src) == (_pipe(src), _find(src, "s", 0, ")", 0))


def test_find_closure_braced():
    src = "|a, b, c| { something() }"
    assert find_closure(src) == (_pipe(src), _find(src, "{", 1, "}", -1))


def test_find_closure_in_let():
    src = "let a = |a, b, c|something();"
    assert find_closure(src) == (_pipe(src), _find(src, "s", 0, ")", 0))


def test_find_closure_chained():
    src = "let a = |a, b, c| something().second().third();"
    assert find_closure(src) == (_pipe(src), _find(src, "s", 0, ")", 0))


def test_find_closure_nested_inner():
    src = "| x: i32 | y.map(|z| z~)"
    assert find_closure(src) == (
        _find(src, "|", 0, "y", -2),
        _find(src, "y", 0, ")", 0),
    )


def test_find_closure_struct_literal():
    src = "| x: i32 | Struct { x };"
    assert find_closure(src) == (_pipe(src), _find(src, "S", 0, ";", -1))


def test_find_closure_as_argument():
    src = "y.map(| x: i32 | y.map(|z| z) )"
    assert find_closure(src) == (
        _find(src, "|", 0, "y", -2),
        _find(src, "2", 4, ")", 0),
    )


def test_find_closure_unbalanced_paren():
    src = "|z| z)"
    assert find_closure(src) == (_pipe(src), _find(src, " ", 1, ")", 0))


def test_find_closure_binary_expression():
    src = "let p = |z| something() + 5;"
    assert find_closure(src) == (_pipe(src), _find(src, "s", 0, "5", 0))


def test_find_closure_without_pipes():
    assert find_closure("let a = b;") is None


def test_closure_valid_arg_scope_valid():
    valid = "\n    let a = |int, int| int * int;\n"
    assert closure_valid_arg_scope(valid) == (ByteRange(13, 23), "|int, int|")


def test_closure_valid_arg_scope_confusing():
    confusing = """
    match a {
        EnumA::A => match b {
            EnumB::A(u) | EnumB::B(u) => println!("u: {}", u),
        },
        EnumA::B => match b {
            EnumB::A(u) | EnumB::B(u) => println!("u: {}", u),
        },
    }
"""
    assert closure_valid_arg_scope(confusing) is None


def test_closure_valid_arg_scope_stops_at_semicolon():
    assert closure_valid_arg_scope("a | b; c | d") is None


def test_byte_range_slice():
    rng = ByteRange(2, 5)
    assert "abcdefg"[rng.slice] == "cde"


@pytest.mark.parametrize(
    "stype, needle, haystack, expected",
    [
        (EXACT, "Vec", "Vec", True),
        (EXACT, "Vec", "use Vec", True),
        (EXACT, "Vec", "use Vecä", False),
        (STARTS, "Vec", "Vector", True),
        (STARTS, "Vec", "use Vector", True),
        (STARTS, "Vec", "use Vec", True),
        (STARTS, "Vec", "use äVector", False),
        (STARTS, "do_st", "fn do_stuff", True),
        (STARTS, "do_st", "pub fn do_stuff", True),
        (STARTS, "do_st", "pub(crate) fn do_stuff", True),
        (STARTS, "do_st", "pub(in codegen) fn do_stuff", True),
    ],
)
def test_txt_matches(stype, needle, haystack, expected):
    assert txt_matches(stype, needle, haystack) is expected


def test_txt_matches_with_pos_returns_byte_offset():
    assert txt_matches_with_pos(EXACT, "Vec", "ä Vec") == 3
    assert txt_matches_with_pos(EXACT, "Vec", "Vector Vec") == 7


def test_txt_matches_with_pos_empty_needle():
    assert txt_matches_with_pos(EXACT, "", "anything") == 0


def test_txt_matches_with_pos_none():
    assert txt_matches_with_pos(EXACT, "Vec", "Vector") is None


def test_symbol_matches():
    assert symbol_matches(EXACT, "foo", "foo") is True
    assert symbol_matches(EXACT, "foo", "foobar") is False
    assert symbol_matches(STARTS, "foo", "foobar") is True
    assert symbol_matches(STARTS, "bar", "foobar") is False


@pytest.mark.parametrize(
    "s, pos, expected",
    [
        ("ident", 0, 5),
        ("(ident)", 1, 6),
        ("let an_identifier = 100;", 4, 17),
        ("num_µs", 0, 7),
        ("ends_in_µ", 0, 10),
    ],
)
def test_find_ident_end(s, pos, expected):
    assert find_ident_end(s, pos) == expected


@pytest.mark.parametrize(
    "i, expected", [(3, "ä"), (2, "ä"), (4, "s"), (100, "t")]
)
def test_char_before(i, expected):
    assert char_before("täst", i) == expected


def test_char_before_start():
    assert char_before("abc", 0) == "\0"


def test_char_at():
    assert char_at("täst", 1) == "ä"
    assert char_at("täst", 3) == "s"


def test_char_at_out_of_range():
    with pytest.raises(IndexError):
        char_at("abc", 3)


def test_char_at_not_boundary():
    with pytest.raises(ValueError):
        char_at("täst", 2)


def test_strip_words():
    assert strip_words("const  unsafe  fn", ["const", "unsafe"]) == 15
    assert strip_words("unsafe  fn", ["const", "unsafe"]) == 8
    assert strip_words("const   fn", ["const", "unsafe"]) == 8
    assert strip_words("fn", ["const", "unsafe"]) == 0


def test_strip_word():
    assert strip_word("unsafe fn", "unsafe") == 7
    assert strip_word("fn", "unsafe") is None


def test_strip_visibility():
    assert strip_visibility("pub fn") == 4
    assert strip_visibility("crate fn") == 6
    assert strip_visibility("fn") is None


def test_trim_visibility():
    assert trim_visibility("pub fn") == "fn"
    assert trim_visibility("pub(crate)   struct") == "struct"
    assert trim_visibility("pub (in super)  const fn") == "const fn"
    assert trim_visibility("fn main") == "fn main"


def test_in_fn_name():
    assert in_fn_name("fn foo")
    assert in_fn_name(" fn  foo")
    assert in_fn_name("fn ")
    assert not in_fn_name("fn foo(b")
    assert not in_fn_name("fn")


def test_char_classes():
    assert is_ident_char("a") and is_ident_char("_") and is_ident_char("!")
    assert not is_ident_char(":")
    assert is_search_expr_char(":") and is_search_expr_char(".")
    assert not is_search_expr_char(" ")
    assert is_pattern_char(" ") and is_pattern_char("x")
    assert not is_pattern_char("(")


def test_is_whitespace_byte():
    assert all(is_whitespace_byte(b) for b in b" \r\n\t")
    assert not is_whitespace_byte(ord("a"))


def test_stack_node_contains():
    empty = StackNode()
    one = empty.push(1)
    two = one.push(2)
    assert 1 in two and 2 in two
    assert 2 not in one
    assert 1 not in empty
    assert list(two) == [2, 1]


def test_calculate_str_hash():
    a = calculate_str_hash("hello")
    assert a == calculate_str_hash("hello")
    assert a != calculate_str_hash("hellp")
    assert 0 <= a < 2**64


def test_gen_tuple_fields():
    assert list(gen_tuple_fields(3)) == ["0", "1", "2"]
    fields = list(gen_tuple_fields(40))
    assert len(fields) == 16
    assert fields[-1] == "15"
    assert list(gen_tuple_fields(0)) == []