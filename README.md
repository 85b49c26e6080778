# rsource

Small, dependency-free helpers for working with Rust source text from Python:
finding identifiers, recognising closures, stripping visibility modifiers,
reading declaration headers and locating the Rust standard library sources on
disk.

Offsets passed to and returned by the text helpers are UTF-8 byte offsets.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Modules

### `rsource.textutil`

Text scanning primitives.

```python
from rsource.textutil import SearchType, txt_matches, find_ident_end, trim_visibility

txt_matches(SearchType.EXACT_MATCH, "Vec", "use Vec")        # True
txt_matches(SearchType.STARTS_WITH, "Vec", "use Vector")     # True
find_ident_end("(ident)", 1)                                 # 6
trim_visibility("pub(crate)   struct")                       # "struct"
```

Also provided:

- `txt_matches_with_pos` – byte offset of the first identifier-bounded match, or `None`.
- `symbol_matches` – exact or prefix comparison of two names.
- `find_closure` and `closure_valid_arg_scope` – locate a `|...|` argument
  list and the closure body, as `ByteRange` values (a frozen dataclass with
  `start`, `end` and a `slice` property).
- `strip_visibility`, `strip_word`, `strip_words` – byte offsets past leading
  keywords such as `pub(crate)`, `crate`, `const` or `unsafe`.
- `in_fn_name` – whether a line ends inside the name of a function being declared.
- `char_before`, `char_at` – characters around a byte offset.
- `calculate_str_hash` – a stable 64-bit hash of a string.
- `gen_tuple_fields` – tuple field names `"0"` upwards, at most sixteen.
- Character classifiers `is_ident_char`, `is_pattern_char`,
  `is_search_expr_char` and `is_whitespace_byte`.
- `StackNode` – an immutable linked stack: `StackNode()` is empty, `push`
  returns a new node, and `in` tests membership.

### `rsource.srcpath`

Finds the Rust standard library sources. `get_rust_src_path()` checks the
first entry of the `RUST_SRC_PATH` environment variable, then runs
`rustc --print sysroot`, then tries `/usr/local/src/rust/src` and
`/usr/src/rust/src`. It returns a `pathlib.Path` or raises a subclass of
`RustSrcPathError`: `SrcPathMissing`, `SrcPathDoesNotExist` or
`NotRustSourceTree` (the last two carry a `path` attribute).

`validate_rust_src_path(path)` and `check_rust_sysroot()` are available on
their own as well.

```python
from rsource.srcpath import get_rust_src_path, RustSrcPathError

try:
    path = get_rust_src_path()
except RustSrcPathError as err:
    print(err)
```

### `rsource.decl`

Declaration helpers.

```python
from rsource.decl import (
    BinOpKind,
    first_param_is_self,
    generate_skeleton_for_parsing,
    get_operator_trait,
)

generate_skeleton_for_parsing("mod foo { blah }")                    # "mod foo {}"
get_operator_trait(BinOpKind.ADD)                                    # "Add"
get_operator_trait(BinOpKind.EQ)                                     # "bool"
first_param_is_self("pub fn map<U, F: FnOnce(T) -> U>(self, f: F)")  # True
```

## What this package does not do

It is a set of text helpers only. It has no parser for Rust code, no name
resolution or type inference, no code-completion or go-to-definition engine,
and no command-line program.