# SPDX-License-Identifier: MIT
"""Tests for the Go import rewriter."""

from pathlib import Path

import pytest

from gx_go.errors import ImportRewriteError
from gx_go.rewriter import GoImportRewriter, is_go_file, mask_comments, rewrite_imports, rewrite_source

MAPPING = {
    "github.com/x/y": "gx/ipfs/QmY/y",
    "github.com/x/y/sub": "gx/ipfs/QmY/y/sub",
}


def lookup(path: str) -> str:
    return MAPPING.get(path, path)


class TestRewriteSource:
    """Tests for rewrite_source function."""

    def test_single_import(self):
        source = 'package main\n\nimport "github.com/x/y"\n'

        result, count = rewrite_source(source, lookup)

        assert result == 'package main\n\nimport "gx/ipfs/QmY/y"\n'
        assert count == 1

    def test_named_import(self):
        source = 'package main\n\nimport yy "github.com/x/y"\n'

        result, count = rewrite_source(source, lookup)

        assert 'import yy "gx/ipfs/QmY/y"' in result

    def test_import_block(self):
        source = """package main

import (
\t"fmt"
\t"github.com/x/y"
\tsub "github.com/x/y/sub"
\t_ "github.com/x/y"
\t. "github.com/x/y"
)
"""

        result, count = rewrite_source(source, lookup)

        assert '\t"fmt"' in result
        assert '\t"gx/ipfs/QmY/y"' in result
        assert '\tsub "gx/ipfs/QmY/y/sub"' in result
        assert '\t_ "gx/ipfs/QmY/y"' in result
        assert '\t. "gx/ipfs/QmY/y"' in result
        assert count == 4

    def test_comments_in_block_preserved(self):
        source = """package main

import (
\t// logging "github.com/x/y"
\t"github.com/x/y" // the real one
)
"""

        result, count = rewrite_source(source, lookup)

        assert '\t// logging "github.com/x/y"' in result
        assert '\t"gx/ipfs/QmY/y" // the real one' in result
        assert count == 1

    def test_raw_string_import(self):
        source = "package main\n\nimport `github.com/x/y`\n"

        result, _ = rewrite_source(source, lookup)

        assert "import `gx/ipfs/QmY/y`" in result

    def test_strings_in_code_untouched(self):
        source = """package main

import "github.com/x/y"

func main() {
\tprintln("github.com/x/y")
}

var s = `import "github.com/x/y"`
"""

        result, count = rewrite_source(source, lookup)

        assert 'println("github.com/x/y")' in result
        assert 'var s = `import "github.com/x/y"`' in result
        assert count == 1

    def test_multiple_declarations(self):
        source = """package main

import "fmt"

import (
\t"github.com/x/y"
)

import z "github.com/x/y/sub"

type T struct{}
"""

        result, count = rewrite_source(source, lookup)

        assert count == 2
        assert 'import z "gx/ipfs/QmY/y/sub"' in result

    def test_package_comment_starting_with_keyword(self):
        source = (
            "/*\nPackage a wraps y.\n\ntype assertions are avoided here.\n*/\n"
            'package a\n\nimport "github.com/x/y"\n'
        )

        result, count = rewrite_source(source, lookup)

        assert count == 1
        assert result.endswith('import "gx/ipfs/QmY/y"\n')
        assert "type assertions are avoided here." in result

    def test_cgo_preamble_declarations_ignored(self):
        source = 'package a\n\n/*\nconst int limit = 4;\n*/\nimport "C"\n\nimport "github.com/x/y"\n'

        result, count = rewrite_source(source, lookup)

        assert count == 1
        assert 'import "gx/ipfs/QmY/y"' in result
        assert "const int limit = 4;" in result

    def test_commented_out_single_import_untouched(self):
        source = 'package a\n\n// import "github.com/x/y"\nimport "github.com/x/y"\n'

        result, count = rewrite_source(source, lookup)

        assert count == 1
        assert result == 'package a\n\n// import "github.com/x/y"\nimport "gx/ipfs/QmY/y"\n'

    def test_no_imports(self):
        source = "package main\n\nfunc main() {}\n"

        assert rewrite_source(source, lookup) == (source, 0)


class TestRewriteImports:
    """Tests for rewriting a whole directory."""

    def test_rewrites_go_files_only(self, tmp_path: Path):
        (tmp_path / "a.go").write_text('package a\n\nimport "github.com/x/y"\n')
        (tmp_path / "notes.txt").write_text('import "github.com/x/y"\n')
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "b.go").write_text('package pkg\n\nimport "fmt"\n')

        results = rewrite_imports(tmp_path, lookup)

        assert [r.path.name for r in results] == ["a.go", "b.go"]
        assert [r.modified for r in results] == [True, False]
        assert (tmp_path / "a.go").read_text() == 'package a\n\nimport "gx/ipfs/QmY/y"\n'
        assert (tmp_path / "notes.txt").read_text() == 'import "github.com/x/y"\n'

    def test_default_filter_skips_vendor_and_hidden_directories(self, tmp_path: Path):
        source = 'package v\n\nimport "github.com/x/y"\n'
        for name in ("vendor", ".git", "_build", "testdata"):
            (tmp_path / name).mkdir()
            (tmp_path / name / "v.go").write_text(source)

        assert rewrite_imports(tmp_path, lookup) == []
        assert (tmp_path / "vendor" / "v.go").read_text() == source

    def test_custom_filter_can_visit_vendor(self, tmp_path: Path):
        (tmp_path / "vendor").mkdir()
        (tmp_path / "vendor" / "v.go").write_text('package v\n\nimport "github.com/x/y"\n')

        results = GoImportRewriter().rewrite_imports(tmp_path, lookup, lambda p: p.endswith(".go"))

        assert [r.path.name for r in results] == ["v.go"]
        assert (tmp_path / "vendor" / "v.go").read_text() == 'package v\n\nimport "gx/ipfs/QmY/y"\n'

    def test_filter_sees_relative_paths(self, tmp_path: Path):
        (tmp_path / "pkg").mkdir()
        (tmp_path / "pkg" / "b.go").write_text("package pkg\n")
        seen = []

        rewrite_imports(tmp_path, lookup, lambda p: seen.append(p) or False)

        assert seen == ["pkg/b.go"]

    def test_custom_filter(self, tmp_path: Path):
        (tmp_path / "a.go").write_text('package a\n\nimport "github.com/x/y"\n')
        (tmp_path / "a_test.go").write_text('package a\n\nimport "github.com/x/y"\n')

        results = GoImportRewriter().rewrite_imports(
            tmp_path, lookup, lambda p: is_go_file(p) and not p.endswith("_test.go")
        )

        assert len(results) == 1
        assert "github.com/x/y" in (tmp_path / "a_test.go").read_text()

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(ImportRewriteError):
            rewrite_imports(tmp_path / "missing", lookup)

    def test_unreadable_file_leaves_tree_untouched(self, tmp_path: Path):
        source = 'package a\n\nimport "github.com/x/y"\n'
        (tmp_path / "a.go").write_text(source)
        (tmp_path / "z.go").write_bytes(b"package z\n\xff\xfe\n")

        with pytest.raises(ImportRewriteError) as exc_info:
            rewrite_imports(tmp_path, lookup)

        assert "z.go" in str(exc_info.value)
        assert (tmp_path / "a.go").read_text() == source


class TestIsGoFile:
    """Tests for the default file filter."""

    @pytest.mark.parametrize("path", ["a.go", "pkg/a.go", "pkg/sub/a_test.go"])
    def test_accepts(self, path: str):
        assert is_go_file(path)

    @pytest.mark.parametrize(
        "path",
        ["notes.txt", "vendor/v.go", "pkg/testdata/t.go", ".git/x.go", "pkg/_build/b.go"],
    )
    def test_rejects(self, path: str):
        assert not is_go_file(path)


class TestMaskComments:
    """Tests for mask_comments function."""

    def test_blanks_comments_keeping_layout(self):
        source = 'a // b\n/* c\nd */ e\n'

        masked = mask_comments(source)

        assert masked == "a     \n    \n     e\n"
        assert len(masked) == len(source)

    def test_markers_inside_literals_kept(self):
        source = 's := "http://x" + `/*` + \'/\'\n'

        assert mask_comments(source) == source
