# -*- coding: utf-8 -*-

import socket
import threading

import pytest
from fs.memoryfs import MemoryFS

import sharefs


@pytest.fixture
def testpath(tmpdir):
    return tmpdir.mkdir("sharefs")


@pytest.fixture
def store(testpath):
    return sharefs.ShareFS(str(testpath))


@pytest.fixture
def memstore():
    return sharefs.ShareFS(MemoryFS())


@pytest.fixture
def highlight_server(tmpdir):
    path = str(tmpdir.join("hl.sock"))
    server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    server.bind(path)
    server.listen(1)
    received = []

    def handle():
        conn, _ = server.accept()
        with conn:
            chunks = []
            while True:
                chunk = conn.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
            request = b"".join(chunks).decode("utf-8")
            received.append(request)
            language, _, content = request.partition(":")
            conn.sendall(u"<{0}>{1}</{0}>".format(language, content)
                         .encode("utf-8"))

    thread = threading.Thread(target=handle)
    thread.daemon = True
    thread.start()

    yield path, received

    thread.join(5)
    server.close()
