# -*- coding: utf-8 -*-

import pytest

from sharefs import AccessDenied, Binary, Code, FormatError, ObjectNotFound, Text
from sharefs.errors import HighlightUnavailable
from sharefs.highlight import Highlighter
from sharefs.languages import LANGUAGES
from sharefs.serving import (
    ATTACHMENT,
    INLINE,
    OCTET_STREAM,
    TEXT_HTML,
    TEXT_PLAIN,
    check_access,
    content_type,
    highlight_source,
    serve,
)

PYTHON = LANGUAGES.index("python")


class FakeHighlighter(object):
    def __init__(self):
        self.requests = []

    def highlight(self, language, content):
        self.requests.append((language, content))
        return u"<pre class=\"{0}\">{1}</pre>".format(language, content)


class DownHighlighter(object):
    def highlight(self, language, content):
        raise HighlightUnavailable("down")


@pytest.fixture
def highlighter():
    return FakeHighlighter()


def test_serve_text(store):
    obj = store.put(b"hello", name="a.txt")

    served = serve(store, obj.address)

    assert served.content_type == TEXT_PLAIN
    assert served.body == b"hello"
    assert served.disposition == INLINE
    assert served.filename == "a.txt"


def test_serve_no_preview(store):
    obj = store.put(b"hello", name="a.txt", no_preview=True)
    assert serve(store, obj.address).disposition == ATTACHMENT


def test_serve_headers(store):
    obj = store.put(b"hello", name="a.txt", no_preview=True)

    headers = serve(store, obj.address).headers()

    assert headers["Content-Type"] == TEXT_PLAIN
    assert headers["Content-Disposition"] == 'attachment; filename="a.txt"'
    assert headers["Cache-Control"] == "max-age=31536000"
    assert headers["Access-Control-Allow-Origin"] == "*"


@pytest.mark.parametrize("name,kind,expected", [
    ("a.txt", Text(), TEXT_PLAIN),
    ("a.png", Binary(previewable=True), "image/png"),
    ("a.unknownext", Binary(previewable=True), OCTET_STREAM),
    ("noextension", Binary(previewable=True), OCTET_STREAM),
    ("a.png", Binary(previewable=False), OCTET_STREAM),
    ("a.py", Code(PYTHON), TEXT_PLAIN),
])
def test_content_type(store, name, kind, expected):
    obj = store.create(name, kind=kind)
    assert content_type(obj) == expected


def test_content_type_highlighted_code(store):
    obj = store.create("a.py", kind=Code(PYTHON))
    assert content_type(obj, highlighted=True) == TEXT_HTML


def test_serve_missing(store):
    with pytest.raises(ObjectNotFound):
        serve(store, "missing")


def test_serve_foreign_file_is_not_found(store, testpath):
    testpath.join("abc").write_binary(b"\x00" * 40)

    with pytest.raises(ObjectNotFound):
        serve(store, "abc")


def test_serve_directory_is_not_found(store, testpath):
    testpath.mkdir("abc")

    with pytest.raises(ObjectNotFound):
        serve(store, "abc")


def test_serve_protected(store):
    obj = store.put(b"hidden", protected=True)

    with pytest.raises(AccessDenied):
        serve(store, obj.address)

    with pytest.raises(AccessDenied):
        serve(store, obj.address, secret="wrongpwd")

    assert serve(store, obj.address, secret=obj.secret).body == b"hidden"


def test_check_access_unprotected(store):
    obj = store.create("a")
    check_access(obj, None)
    check_access(obj, "anything")


def test_check_access_non_ascii_secret(store):
    obj = store.create("a", protected=True)
    with pytest.raises(AccessDenied):
        check_access(obj, u"\xe9\xe9\xe9\xe9")


def test_highlight_source(store):
    obj = store.create("a.py", kind=Code(PYTHON))
    obj.write(b"print(1)")

    assert highlight_source(obj) == ("python", "print(1)")


def test_highlight_source_unknown_language(store):
    obj = store.create("a.py", kind=Code(0xFFFFFF))
    obj.write(b"print(1)")

    assert highlight_source(obj) is None


def test_highlight_source_not_code(store):
    obj = store.create("a.txt")
    obj.write(b"hello")

    assert highlight_source(obj) is None


def test_serve_code_highlighted(store, highlighter):
    obj = store.put(b"print(1)", name="a.py", kind=Code(PYTHON))

    served = serve(store, obj.address, highlighter=highlighter)

    assert highlighter.requests == [("python", "print(1)")]
    assert served.content_type == TEXT_HTML
    assert served.body == b'<pre class="python">print(1)</pre>'


def test_serve_code_raw(store, highlighter):
    obj = store.put(b"print(1)", name="a.py", kind=Code(PYTHON))

    served = serve(store, obj.address, raw=True, highlighter=highlighter)

    assert highlighter.requests == []
    assert served.content_type == TEXT_PLAIN
    assert served.body == b"print(1)"


def test_serve_code_unknown_language(store, highlighter):
    obj = store.put(b"print(1)", name="a.py", kind=Code(0xABCDEF))

    served = serve(store, obj.address, highlighter=highlighter)

    assert highlighter.requests == []
    assert served.body == b"print(1)"


def test_serve_code_highlighter_down(store):
    obj = store.put(b"print(1)", name="a.py", kind=Code(PYTHON))

    served = serve(store, obj.address, highlighter=DownHighlighter())

    assert served.content_type == TEXT_PLAIN
    assert served.body == b"print(1)"


def test_serve_text_ignores_highlighter(store, highlighter):
    obj = store.put(b"hello", name="a.txt")
    serve(store, obj.address, highlighter=highlighter)
    assert highlighter.requests == []


def test_serve_corrupt_payload(store, testpath):
    obj = store.put(b"hello")
    path = testpath.join(obj.address)
    path.write_binary(path.read_binary()[:21] + b"broken")

    with pytest.raises(FormatError):
        serve(store, obj.address)


def test_highlighter_socket(highlight_server):
    path, received = highlight_server

    reply = Highlighter(path).highlight("python", u"x = 'caf\xe9:1'")

    assert received == [u"python:x = 'caf\xe9:1'"]
    assert reply == u"<python>x = 'caf\xe9:1'</python>"


def test_highlighter_unavailable(tmpdir):
    highlighter = Highlighter(str(tmpdir.join("missing.sock")), timeout=1)

    with pytest.raises(HighlightUnavailable):
        highlighter.highlight("python", "x")
