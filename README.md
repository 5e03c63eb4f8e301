# aplib

Read the contents of Apple Aperture library bundles: folders, projects,
albums, keywords, volumes, masters and versions. The Exif and IPTC
metadata of a version can be mapped onto XMP properties.

Only the Python standard library is needed (`plistlib` for the property
lists, `sqlite3` for the library database).

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Command line

The `aplib-dumper` command inspects a library:

```
aplib-dumper dump --all /path/to/Photos.aplibrary
aplib-dumper dump --folders --albums /path/to/Photos.aplibrary
aplib-dumper list /path/to/Photos.aplibrary
aplib-dumper audit /path/to/Photos.aplibrary
aplib-dumper tree --skip-masters /path/to/Photos.aplibrary
```

- `dump` prints the library version and the data-model information,
  then a table for each chosen kind of object: `--all`, `--volumes`,
  `--folders`, `--albums`, `--keywords`, `--masters`, `--versions`.
  Progress is written to standard error while objects load.
- `list` prints the on-disk location of every master: under
  `/Volumes/<volume name>/` for referenced files, under `Masters/`
  inside the library otherwise. Masters whose path cannot be resolved
  are reported on standard error.
- `audit` loads everything while recording, for each plist file, which
  properties were ignored or skipped, and prints that report.
- `tree` prints the hierarchy of folders, albums, masters and versions
  starting from the top-level library folder; `--skip-masters` replaces
  masters and versions with a count.

If the bundle's `Info.plist` has no version string, or names a bundle
identifier other than an Aperture library, `dump` prints
`Version not found.` and `list` and `audit` print `Invalid library`.

## Library use

```python
from aplib.library import Library

library = Library("/path/to/Photos.aplibrary")
print(library.library_version())   # raises aplib.library.LibraryError if not a library

library.load_folders(None)
library.load_albums(None)
library.load_volumes(None)
library.load_masters(None)
library.load_versions(None)

for uuid in sorted(library.masters):
    print(library.resolve_master_path(uuid))

for keyword in library.list_keywords() or []:
    print(keyword.name, [child.name for child in keyword.children or []])
```

- `library.folders`, `albums`, `volumes`, `masters` and `versions` are
  sets of uuids; `library.get(uuid)` returns the loaded `Folder`,
  `Album`, `Volume`, `Master` or `Version`.
- Each `load_*` method loads once and keeps the result. It takes an
  optional progress callable, called with an increment after each
  object; loading stops if it returns a false value.
- Volumes are read from their plist files; when there are none, from
  the `RKVolume` table of `Database/apdb/Library.apdb`.
- `library.get_model_info()` returns a `ModelInfo` with the database
  version, master and version counts and similar fields.

Single objects can also be read straight from their plist files, with
`Album.from_path`, `Folder.from_path`, `Volume.from_path`,
`Master.from_path` and `Version.from_path`; each returns `None` when the
file cannot be decoded.

### Auditing

Pass a `Reporter` to record what was parsed:

```python
from aplib.audit import Reporter
from aplib.library import Library

library = Library("/path/to/Photos.aplibrary", auditor=Reporter())
library.load_versions(None)
for path, report in library.auditor.parsed.items():
    print(path, sorted(report.ignored), report.skipped)
```

### XMP

A version's Exif and IPTC values can be written into an in-memory
`aplib.xmp.Xmp` store. IPTC values are applied after Exif ones, so they
win where both map to the same property.

```python
from aplib.version import Version
from aplib.xmp import NS_DC, Xmp

version = Version.from_path("Version-0.apversion", None)
xmp = Xmp()
version.to_xmp(xmp)
print(xmp.get_property(NS_DC, "creator"))
```

## Limitations

- `Xmp` only holds properties in memory, keyed by namespace and name;
  it does not read or write XMP packets or sidecar files, and knows only
  the eight namespaces defined in `aplib.xmp`.
- Image adjustments, statistics and the other version properties listed
  as ignored in an audit are not read.
- Nothing is ever written back to a library.