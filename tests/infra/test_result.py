from __future__ import annotations

from tidyimports.errors import ErrorKind, FileError
from tidyimports.infra.result import Err, Ok


def test_ok_map_transforms_value() -> None:
    r = Ok("import os\n").map(str.upper)
    assert r == Ok("IMPORT OS\n")
    assert r.is_err() is False


def test_err_map_is_a_no_op() -> None:
    e = Err(FileError(ErrorKind.ENCODING, "binary content (NUL byte)"))
    assert e.map(str.upper) is e
    assert e.is_err() is True
