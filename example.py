"""This script is an example of how to use the rafarchive library.

Assuming you have installed rafarchive somehow, for example in a virtual
environment (see README), it can be run like this:

.. code-block:: console

    $ python example.py "<path to archive.raf>" "<output directory>"

It writes a JSON manifest of the archive's index, and dumps every entry into
the output directory. Entries that look zlib compressed are decompressed.

This script is only an example, and completely unsupported. If you run into
issues using it, please don't raise an issue until you are sure it's an issue
with the underlying library.
"""
import sys
import zlib
from pathlib import Path

from rafarchive import RafArchive, is_zlib_compressed
from rafarchive.convert.manifest import IndexManifest
from rafarchive.convert.utils import configure_debug_logging, path_exists

configure_debug_logging("INFO")

raf_path = path_exists(sys.argv[1])
output_path = Path(sys.argv[2])
output_path.mkdir(exist_ok=True)

with RafArchive.open(raf_path) as archive:
    print(len(archive), "entries")

    manifest = IndexManifest.from_entries(archive)
    (output_path / "manifest.json").write_text(
        manifest.model_dump_json(indent=2), encoding="utf-8"
    )

    for entry in archive:
        data = archive.read_entry(entry)
        if is_zlib_compressed(data):
            data = zlib.decompress(data)
        entry_path = output_path / entry.path
        entry_path.parent.mkdir(parents=True, exist_ok=True)
        entry_path.write_bytes(data)
