"""Shared test helper functions."""

import io
import warnings
import zipfile

P_NAMESPACE = "http://schemas.openxmlformats.org/presentationml/2006/main"
A_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/main"


def make_slide_xml(body: str = "", trailer: str = "") -> str:
    """A minimal slide part. `body` goes inside the root, `trailer` after the closing tag."""
    return (
        "<?xml version='1.0' encoding='UTF-8' standalone='yes'?>\n"
        f'<p:sld xmlns:a="{A_NAMESPACE}" xmlns:p="{P_NAMESPACE}">'
        "<p:cSld><p:spTree/></p:cSld>"
        f"{body}"
        "</p:sld>"
        f"{trailer}"
    )


def build_zip(
    entries: dict[str, str | bytes] | list[tuple[str, str | bytes]],
    compression: int = zipfile.ZIP_DEFLATED,
) -> bytes:
    """Write entries (in the given order) into an in-memory ZIP. Duplicate names are allowed."""
    items = entries.items() if isinstance(entries, dict) else entries
    buffer = io.BytesIO()
    with warnings.catch_warnings():
        # zipfile warns about duplicate names, which some tests want on purpose
        warnings.simplefilter("ignore", UserWarning)
        with zipfile.ZipFile(buffer, "w", compression=compression) as zf:
            for name, content in items:
                zf.writestr(name, content)
    return buffer.getvalue()


def read_entries(data: bytes) -> dict[str, bytes]:
    """Every entry of a ZIP blob, name -> uncompressed bytes."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return {name: zf.read(name) for name in zf.namelist()}


def entry_names(data: bytes) -> list[str]:
    """Entry names of a ZIP blob, in archive order."""
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        return zf.namelist()


def slide_text(data: bytes, ordinal: int) -> str:
    """Decoded XML of ppt/slides/slide<ordinal>.xml."""
    return read_entries(data)[f"ppt/slides/slide{ordinal}.xml"].decode("utf-8")


def deck_with_slides(*slide_xmls: str | bytes) -> bytes:
    """A hand-built archive holding the given slide parts plus a couple of non-slide entries."""
    entries: list[tuple[str, str | bytes]] = [
        ("[Content_Types].xml", '<?xml version="1.0"?><Types/>'),
        ("ppt/presentation.xml", "<p:presentation/>"),
    ]
    for ordinal, xml in enumerate(slide_xmls, start=1):
        entries.append((f"ppt/slides/slide{ordinal}.xml", xml))
    entries.append(("ppt/slideLayouts/slideLayout1.xml", make_slide_xml()))
    return build_zip(entries)
