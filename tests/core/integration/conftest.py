"""Pytest fixtures for weaviate-embedded integration tests."""

from __future__ import annotations

import io
import sys
import tarfile
from pathlib import Path
from typing import Any

import pytest

FAKE_ENGINE = """\
#!{python}
import argparse
import os
import socket

parser = argparse.ArgumentParser()
parser.add_argument("--host")
parser.add_argument("--port", type=int)
parser.add_argument("--scheme")
args = parser.parse_args()

with open(os.path.join(os.environ["PERSISTENCE_DATA_PATH"], "started"), "w") as f:
    f.write(os.environ["GRPC_PORT"])

server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
server.bind((args.host, args.port))
server.listen(8)
while True:
    conn, _ = server.accept()
    conn.close()
"""


def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: Integration tests (real processes and sockets)"
    )


@pytest.fixture
def fake_engine_archive(tmp_path: Path) -> Path:
    """A tar.gz holding a 'weaviate' script that listens on --host/--port.

    The script records the GRPC_PORT it was given in
    ``$PERSISTENCE_DATA_PATH/started``.
    """
    script = FAKE_ENGINE.format(python=sys.executable).encode()
    archive = tmp_path / "weaviate-v1.21.1-linux-amd64.tar.gz"
    with tarfile.open(archive, "w:gz") as tf:
        info = tarfile.TarInfo("weaviate")
        info.size = len(script)
        info.mode = 0o755
        tf.addfile(info, io.BytesIO(script))
    return archive
