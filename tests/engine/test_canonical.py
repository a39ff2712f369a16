from __future__ import annotations

from tidyimports.engine.canonical import canonicalize
from tidyimports.engine.classifier import Classifier

MESSY = (
    "import random\n"
    "from datetime import datetime\n"
    "import os\n"
    "from . import local_module\n"
    "import django\n"
    "from __future__ import annotations\n"
    "\n"
    "\n"
    "def main():\n"
    "    pass\n"
)

CANONICAL = (
    "from __future__ import annotations\n"
    "\n"
    "import os\n"
    "import random\n"
    "from datetime import datetime\n"
    "\n"
    "import django\n"
    "\n"
    "from . import local_module\n"
    "\n"
    "\n"
    "def main():\n"
    "    pass\n"
)


def test_canonicalize_messy_file() -> None:
    r = canonicalize(MESSY)
    assert r.changed is True
    assert r.text == CANONICAL
    assert r.warnings == ()


def test_canonical_input_is_unchanged() -> None:
    r = canonicalize(CANONICAL)
    assert r.changed is False
    assert r.text == CANONICAL


def test_idempotent() -> None:
    once = canonicalize(MESSY).text
    assert canonicalize(once).text == once


def test_no_imports_is_noop() -> None:
    text = '"""Only a docstring."""\nx = 1\n'
    r = canonicalize(text)
    assert r.changed is False
    assert r.block == ""


def test_docstring_stays_on_top_and_code_after_region_untouched() -> None:
    text = '"""Doc."""\nimport sys\nimport os\nx = 1\nimport json\n'
    r = canonicalize(text)
    assert r.text == '"""Doc."""\nimport os\nimport sys\n\nx = 1\nimport json\n'


def test_comments_between_imports_are_dropped_but_trailing_comment_kept() -> None:
    text = "import sys\n# utils\nimport os\n# constants\nX = 1\n"
    r = canonicalize(text)
    assert r.text == "import os\nimport sys\n\n# constants\nX = 1\n"
    assert r.warnings == ("comment between imports dropped: '# utils'",)


def test_comments_in_already_canonical_block_are_not_reported() -> None:
    text = "import os\n\n# app code\nX = 1\n"
    r = canonicalize(text)
    assert r.changed is False
    assert r.warnings == ()


def test_unterminated_statement_leaves_text_untouched() -> None:
    text = "from a import (\n    b,\n"
    r = canonicalize(text)
    assert r.changed is False
    assert r.text == text
    assert len(r.warnings) == 1
    assert "'a'" in r.warnings[0]


def test_unterminated_statement_is_stable_across_runs() -> None:
    text = "import b\nimport os as \\"
    outs = [text]
    for _ in range(3):
        outs.append(canonicalize(outs[-1]).text)
    assert outs == [text] * 4


def test_custom_classifier() -> None:
    text = "import myapp\nimport django\n"
    r = canonicalize(text, classifier=Classifier(known_local=["myapp"]))
    assert r.text == "import django\n\nimport myapp\n"
