from recoder.bom import UTF8_BOM, has_utf8_bom, strip_utf8_bom


def test_has_utf8_bom():
    assert has_utf8_bom(UTF8_BOM + b"hello") is True
    assert has_utf8_bom(UTF8_BOM) is True
    assert has_utf8_bom(b"hello") is False
    assert has_utf8_bom(b"\xff\xfeh\x00") is False


def test_short_inputs_have_no_bom():
    assert has_utf8_bom(b"") is False
    assert has_utf8_bom(b"\xef") is False
    assert has_utf8_bom(b"\xef\xbb") is False


def test_strip_removes_exactly_one_bom():
    assert strip_utf8_bom(UTF8_BOM + b"abc") == b"abc"
    assert strip_utf8_bom(UTF8_BOM + UTF8_BOM + b"abc") == UTF8_BOM + b"abc"
    assert strip_utf8_bom(b"abc") == b"abc"
