from __future__ import annotations

import io
import tarfile
import tempfile
import time
import urllib.error
import urllib.request
from pathlib import Path

from tqdm.auto import tqdm

from .general_graph import GeneralUndiGraph

KONECT_URL = "http://konect.cc/files/download.tsv.{}.tar.bz2"
CHUNK_SIZE = 1 << 16


class KonectError(RuntimeError):
    """Download or extraction of a KONECT dataset failed."""


def fetch_raw_bytes(url: str, *, chunk_size: int = CHUNK_SIZE, progress: bool = True) -> bytes:
    """Download `url` into memory with a byte progress bar.

    Raises
    ------
    KonectError
        If the request fails, the server sends no content length, or the
        stream breaks off.
    """
    t0 = time.time()
    try:
        resp = urllib.request.urlopen(url)
    except (urllib.error.URLError, OSError) as exc:
        raise KonectError(f"Failed to GET from '{url}': {exc}") from exc

    with resp:
        length = resp.headers.get("Content-Length")
        if length is None:
            raise KonectError(f"Failed to fetch content length from '{url}'")
        total = int(length)

        payload = bytearray()
        with tqdm(total=total, unit="B", unit_scale=True, desc=f"Fetching {url}",
                  disable=not progress) as pbar:
            while True:
                try:
                    chunk = resp.read(chunk_size)
                except OSError as exc:
                    raise KonectError(f"Error while fetching payload of '{url}': {exc}") from exc
                if not chunk:
                    break
                payload.extend(chunk)
                pbar.update(len(chunk))

    if progress:
        print(f"Fetched {url} in {time.time() - t0:.2f}s")
    return bytes(payload)


def extract_edge_list(name: str, internal_name: str, payload: bytes) -> GeneralUndiGraph:
    """Unpack a KONECT ``tar.bz2`` and parse its ``out.*`` edge list."""
    with tempfile.TemporaryDirectory() as tmp:
        try:
            with tarfile.open(fileobj=io.BytesIO(payload), mode="r:bz2") as archive:
                archive.extractall(tmp, filter="data")
        except (tarfile.TarError, EOFError, OSError) as exc:
            raise KonectError(f"Failed to unpack tarball of '{internal_name}': {exc}") from exc

        dir_path = Path(tmp) / internal_name
        if not dir_path.is_dir():
            raise KonectError(f"Archive of '{internal_name}' has no '{internal_name}/' directory")

        for file_path in sorted(dir_path.iterdir()):
            if file_path.is_file() and file_path.name.startswith("out."):
                return GeneralUndiGraph.from_file(name, file_path)

    raise KonectError("Failed to find valid konect file in extracted dir")


def load_konect(name: str, internal_name: str, *, progress: bool = True) -> GeneralUndiGraph:
    """Fetch ``internal_name`` from konect.cc and parse it as graph `name`."""
    url = KONECT_URL.format(internal_name)
    payload = fetch_raw_bytes(url, progress=progress)
    return extract_edge_list(name, internal_name, payload)
