"""
Patch identifier decoding.

GURPOST does not store release numbers in a friendly way. A patch such as
"pcr-000163330_stu8170002" has to become "8.17.0.2":

    pcr-000163330 _ stu 8 17 00 02
    (ignored)       key | chunks of two, one leading zero stripped
                        major
"""

from __future__ import annotations

from pendingreleases.domain.errors import MalformedPatchIdError


def decode_patch_id(raw_patch_id: str, product_patch_key: str) -> str:
    """
    Decode a GURPOST patch identifier into a dotted release version.

    Args:
        raw_patch_id: Patch identifier, e.g. "pcr-000163330_stu8170002"
        product_patch_key: Product prefix inside the identifier, e.g. "stu"

    Returns:
        Canonical version string, e.g. "8.17.0.2"

    Raises:
        MalformedPatchIdError: If there is no "_" delimiter or nothing
            remains after the product key is removed.

    Note:
        A trailing unpaired digit is dropped ("123" -> "1.23"). Existing
        reports depend on this, so it is kept as-is.
    """
    parts = raw_patch_id.split("_")
    if len(parts) < 2:
        raise MalformedPatchIdError(raw_patch_id, "missing '_' delimiter")

    remainder = parts[1].replace(product_patch_key, "", 1)
    if not remainder:
        raise MalformedPatchIdError(raw_patch_id, "no version digits after product key")

    segments = [remainder[0]]
    revision = remainder[1:]

    for start in range(0, len(revision) - 1, 2):
        chunk = revision[start:start + 2]
        if chunk.startswith("0"):
            chunk = chunk[1:]
        segments.append(chunk)

    return ".".join(segments)
