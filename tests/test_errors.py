import pytest

from vamanatools.errors import ANNException, NotImplementedException


def test_message_only():
    exc = ANNException("boom", -1)
    assert exc.message() == "Exception: boom"


def test_message_with_function_signature():
    exc = ANNException("boom", -1, "do_work()")
    assert exc.message() == "Exception: boom. occurred at: do_work()"


def test_message_with_file_and_line():
    exc = ANNException("boom", -1, "f()", "a.py", 12)
    assert exc.message() == (
        "Exception: boom. occurred at: f() defined in file: a.py at line: 12"
    )


def test_file_without_line_is_omitted():
    exc = ANNException("boom", -1, "", "a.py", 0)
    assert exc.message() == "Exception: boom"


def test_error_code_printed_in_hex():
    exc = ANNException("boom", 0x1F)
    assert exc.message() == "Exception: boom. OS error code: 1f"


def test_str_matches_message():
    exc = ANNException("boom", -1, "g()")
    assert str(exc) == exc.message()


def test_raise_and_catch():
    exc = ANNException("bad file", -1)
    assert exc.error_code == -1
    assert exc.message() == "Exception: bad file"
    with pytest.raises(ANNException) as info:
        raise exc
    assert info.value.message() == "Exception: bad file"


def test_not_implemented_message():
    exc = NotImplementedException()
    assert str(exc) == "Function not yet implemented."
    with pytest.raises(NotImplementedError) as info:
        raise exc
    assert str(info.value) == "Function not yet implemented."